"""JSON projections of the configuration used inside the connect payload."""

import json
from typing import Any

from agent_connect.settings import AgentConfig, NoopLogger

BROWSER_MONITORING_LOADER_KEY = "browser_monitoring.loader"
BROWSER_MONITORING_LOADER = "rum"


def type_name(obj: object) -> str:
    """Return the fully qualified class name of `obj`."""
    cls = type(obj)
    return f"{cls.__module__}.{cls.__qualname__}"


def transport_setting(transport: Any) -> str | None:
    if transport is None:
        return None
    return type_name(transport)


def logger_setting(agent_logger: Any) -> str | None:
    if agent_logger is None or isinstance(agent_logger, NoopLogger):
        return None
    return type_name(agent_logger)


def settings_payload(config: AgentConfig) -> dict[str, Any]:
    """Build the `settings` object of the connect payload.

    The configuration goes through a JSON round trip with the live transport
    and logger detached, so neither handle ever reaches the encoder. The
    license key is then removed: it stays a regular model field so that
    configuration can still be loaded from files, but it must never leave
    the process.

    Args:
        config: Sanitized agent configuration.

    Returns:
        Plain JSON-compatible dict.

    Raises:
        pydantic_core.PydanticSerializationError, ValueError: If the
            configuration cannot be encoded. Propagated unchanged.
    """
    scratch = config.model_copy(update={"transport": None, "logger": None})
    fields = json.loads(scratch.model_dump_json())

    fields.pop("license_key", None)
    fields["transport"] = transport_setting(config.transport)
    fields["logger"] = logger_setting(config.logger)

    if config.browser_monitoring.enabled:
        fields[BROWSER_MONITORING_LOADER_KEY] = BROWSER_MONITORING_LOADER

    return fields


def labels_payload(labels: dict[str, str] | None) -> list[dict[str, str]]:
    """Project a label mapping onto the collector's array-of-pairs shape."""
    if not labels:
        return []
    return [
        {"label_type": key, "label_value": value} for key, value in labels.items()
    ]
