"""Wire models embedded in the connect payload."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from agent_connect import constants


class SecurityPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = False


class SecurityPolicies(BaseModel):
    """Server-dictated limits on what the agent may collect."""

    model_config = ConfigDict(frozen=True)

    record_sql: SecurityPolicy = Field(default_factory=SecurityPolicy)
    attributes_include: SecurityPolicy = Field(default_factory=SecurityPolicy)
    allow_raw_exception_messages: SecurityPolicy = Field(
        default_factory=SecurityPolicy
    )
    custom_events: SecurityPolicy = Field(default_factory=SecurityPolicy)
    custom_parameters: SecurityPolicy = Field(default_factory=SecurityPolicy)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump()


class HarvestLimits(BaseModel):
    model_config = ConfigDict(frozen=True)

    analytic_event_data: int | None = None
    custom_event_data: int | None = None
    error_event_data: int | None = None
    span_event_data: int | None = None


class EventHarvestConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    report_period_ms: int = 0
    harvest_limits: HarvestLimits = Field(default_factory=HarvestLimits)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.report_period_ms:
            payload["report_period_ms"] = self.report_period_ms
        payload["harvest_limits"] = self.harvest_limits.model_dump(exclude_none=True)
        return payload


def default_event_harvest_config(max_txn_events: int) -> EventHarvestConfig:
    """Harvest configuration requested from the collector on connect."""
    return EventHarvestConfig(
        report_period_ms=constants.DEFAULT_CONFIGURABLE_EVENT_HARVEST_MS,
        harvest_limits=HarvestLimits(
            analytic_event_data=max_txn_events,
            custom_event_data=constants.MAX_CUSTOM_EVENTS,
            error_event_data=constants.MAX_ERROR_EVENTS,
            span_event_data=constants.MAX_SPAN_EVENTS,
        ),
    )


class UtilizationOverrides(BaseModel):
    model_config = ConfigDict(frozen=True)

    logical_processors: int | None = None
    total_ram_mib: int | None = None
    hostname: str | None = None


class UtilizationData(BaseModel):
    """Host facts reported for billing.

    `total_ram_mib` is always present and `null` when unknown, the other
    optional fields are left out when unset.
    """

    model_config = ConfigDict(frozen=True)

    metadata_version: int = constants.UTILIZATION_METADATA_VERSION
    logical_processors: int = 0
    total_ram_mib: int | None = None
    hostname: str = ""
    boot_id: str | None = None
    overrides: UtilizationOverrides | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "metadata_version": self.metadata_version,
            "logical_processors": self.logical_processors,
            "total_ram_mib": self.total_ram_mib,
            "hostname": self.hostname,
        }
        if self.boot_id:
            payload["boot_id"] = self.boot_id
        if self.overrides is not None:
            overrides = self.overrides.model_dump(exclude_none=True)
            if overrides:
                payload["config"] = overrides
        return payload
