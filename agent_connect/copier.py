"""Defensive copies of the caller-owned agent configuration.

The caller keeps a reference to its `AgentConfig` and may mutate lists and
dicts on it at any time, including while the connect payload is being
encoded. Everything the compiler holds on to goes through
`copy_config_reference_fields` first so that no container is shared.
"""

from typing import TypeVar

from agent_connect.settings import AgentConfig, AttributeDestinationConfig

T = TypeVar("T")


def _copy_list(values: list[T] | None) -> list[T] | None:
    # None means "not set" and must stay distinguishable from an empty list.
    if values is None:
        return None
    return list(values)


def copy_destination_config(
    dest: AttributeDestinationConfig,
) -> AttributeDestinationConfig:
    """Return a copy of `dest` with its own include and exclude lists."""
    return dest.model_copy(
        update={
            "include": _copy_list(dest.include),
            "exclude": _copy_list(dest.exclude),
        }
    )


def copy_config_reference_fields(config: AgentConfig) -> AgentConfig:
    """Copy every list and dict reachable from the configuration.

    Nested settings models on the path to a copied container are copied as
    well, so assigning to the result never touches the caller's objects.
    The transport and logger handles are shared, not cloned.

    Args:
        config: Caller-owned configuration.

    Returns:
        AgentConfig that shares no mutable container with `config`.
    """
    labels = dict(config.labels) if config.labels is not None else None

    error_collector = config.error_collector.model_copy(
        update={
            "ignore_status_codes": _copy_list(
                config.error_collector.ignore_status_codes
            ),
            "attributes": copy_destination_config(config.error_collector.attributes),
        }
    )
    transaction_events = config.transaction_events.model_copy(
        update={
            "attributes": copy_destination_config(
                config.transaction_events.attributes
            ),
        }
    )
    tracer = config.transaction_tracer
    transaction_tracer = tracer.model_copy(
        update={
            "attributes": copy_destination_config(tracer.attributes),
            "segments": tracer.segments.model_copy(
                update={
                    "attributes": copy_destination_config(tracer.segments.attributes)
                }
            ),
        }
    )
    browser_monitoring = config.browser_monitoring.model_copy(
        update={
            "attributes": copy_destination_config(
                config.browser_monitoring.attributes
            ),
        }
    )
    span_events = config.span_events.model_copy(
        update={"attributes": copy_destination_config(config.span_events.attributes)}
    )
    heroku = config.heroku.model_copy(
        update={
            "dyno_name_prefixes_to_shorten": list(
                config.heroku.dyno_name_prefixes_to_shorten
            )
        }
    )

    return config.model_copy(
        update={
            "labels": labels,
            "attributes": copy_destination_config(config.attributes),
            "error_collector": error_collector,
            "transaction_events": transaction_events,
            "transaction_tracer": transaction_tracer,
            "browser_monitoring": browser_monitoring,
            "span_events": span_events,
            "heroku": heroku,
            # scalar-only sections, copied so the result owns every model
            "custom_insights_events": config.custom_insights_events.model_copy(),
            "distributed_tracer": config.distributed_tracer.model_copy(),
            "utilization": config.utilization.model_copy(),
        }
    )
