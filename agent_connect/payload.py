"""Assemble the connect request body sent to the collector."""

import json
from typing import Any

from agent_connect import constants
from agent_connect.hostname import truncate_to_byte_limit
from agent_connect.serializers import labels_payload, settings_payload
from agent_connect.settings import AgentConfig
from agent_connect.types import (
    SecurityPolicies,
    UtilizationData,
    default_event_harvest_config,
)


def max_txn_events(config: AgentConfig) -> int:
    """Transaction event limit requested from the collector."""
    configured = config.transaction_events.max_samples_stored
    if configured < 0 or configured > constants.MAX_TXN_EVENTS:
        return constants.MAX_TXN_EVENTS
    return configured


def build_connect_payload(
    config: AgentConfig,
    pid: int,
    utilization: UtilizationData,
    environment: list[list[str]],
    version: str,
    security_policies: SecurityPolicies | None,
    metadata: dict[str, str],
) -> bytes:
    """Encode the connect request body.

    The key order of the object follows the collector's schema and must not
    change. `display_host`, `labels` and `security_policies` are left out
    when empty.

    Args:
        config: Sanitized agent configuration.
        pid: Process id of the agent.
        utilization: Host facts, `utilization.hostname` becomes `host`.
        environment: Name/value pairs describing the runtime.
        version: Agent version string.
        security_policies: Policies obtained during preconnect, if any.
        metadata: Platform metadata gathered from the environment.

    Returns:
        UTF-8 JSON array holding exactly one object.
    """
    data: dict[str, Any] = {
        "pid": pid,
        "language": constants.AGENT_LANGUAGE,
        "agent_version": version,
        "host": truncate_to_byte_limit(
            utilization.hostname, constants.HOST_BYTE_LIMIT
        ),
    }
    display_host = truncate_to_byte_limit(
        config.host_display_name, constants.HOST_BYTE_LIMIT
    )
    if display_host:
        data["display_host"] = display_host

    data["settings"] = settings_payload(config)
    data["app_name"] = config.app_name.split(constants.APP_NAME_SEPARATOR)
    data["high_security"] = config.high_security

    if config.labels:
        data["labels"] = labels_payload(config.labels)

    data["environment"] = environment
    # The collector keys rollups on the full app name; without it a single
    # process could not connect "a;b" and "a;c" at the same time.
    data["identifier"] = config.app_name
    data["utilization"] = utilization.to_payload()

    if security_policies is not None:
        data["security_policies"] = security_policies.to_payload()

    data["metadata"] = metadata
    data["event_harvest_config"] = default_event_harvest_config(
        max_txn_events(config)
    ).to_payload()

    return json.dumps([data], ensure_ascii=False, separators=(",", ":")).encode(
        "utf-8"
    )
