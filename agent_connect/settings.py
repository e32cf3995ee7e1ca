import logging
from typing import Any

from pydantic import BaseModel, Field

from agent_connect import constants


class NoopLogger(logging.Logger):
    """Logger installed when the caller did not configure one.

    Every record is dropped. The settings serializer reports it as `null`.
    """

    def __init__(self, name: str = "agent_connect.noop") -> None:
        super().__init__(name)
        self.addHandler(logging.NullHandler())
        self.propagate = False


class AttributeDestinationConfig(BaseModel):
    """Include/exclude attribute patterns for one telemetry destination."""

    enabled: bool = True
    include: list[str] | None = None
    exclude: list[str] | None = None


class ErrorCollectorSettings(BaseModel):
    enabled: bool = True
    capture_events: bool = True
    ignore_status_codes: list[int] | None = Field(default_factory=lambda: [0, 404])
    attributes: AttributeDestinationConfig = Field(
        default_factory=AttributeDestinationConfig
    )


class TransactionEventsSettings(BaseModel):
    enabled: bool = True
    max_samples_stored: int = constants.MAX_TXN_EVENTS
    attributes: AttributeDestinationConfig = Field(
        default_factory=AttributeDestinationConfig
    )


class SegmentsSettings(BaseModel):
    attributes: AttributeDestinationConfig = Field(
        default_factory=AttributeDestinationConfig
    )


class TransactionTracerSettings(BaseModel):
    enabled: bool = True
    threshold_is_apdex_failing: bool = True
    threshold_seconds: float = 0.5
    segments: SegmentsSettings = Field(default_factory=SegmentsSettings)
    attributes: AttributeDestinationConfig = Field(
        default_factory=AttributeDestinationConfig
    )


class BrowserMonitoringSettings(BaseModel):
    enabled: bool = True
    attributes: AttributeDestinationConfig = Field(
        default_factory=AttributeDestinationConfig
    )


class SpanEventsSettings(BaseModel):
    enabled: bool = True
    attributes: AttributeDestinationConfig = Field(
        default_factory=AttributeDestinationConfig
    )


class CustomInsightsEventsSettings(BaseModel):
    enabled: bool = True


class DistributedTracerSettings(BaseModel):
    enabled: bool = True


class HerokuSettings(BaseModel):
    use_dyno_names: bool = True
    dyno_name_prefixes_to_shorten: list[str] = Field(
        default_factory=lambda: list(constants.DEFAULT_DYNO_NAME_PREFIXES_TO_SHORTEN)
    )


class UtilizationSettings(BaseModel):
    """Utilization detection switches and user-supplied overrides."""

    detect_aws: bool = True
    detect_azure: bool = True
    detect_pcf: bool = True
    detect_gcp: bool = True
    detect_docker: bool = True
    detect_kubernetes: bool = True
    logical_processors: int = 0
    total_ram_mib: int = 0
    billing_hostname: str = ""


class AgentConfig(BaseModel):
    """Agent configuration as supplied by the caller.

    The model is intentionally mutable: the caller owns it and may keep
    changing it after the agent started. `compile_config` takes a private
    copy before using it.
    """

    app_name: str = ""
    license_key: str = Field(default="", repr=False)
    enabled: bool = True

    # Collector host override, empty means derive it from the license key.
    host: str = ""
    high_security: bool = False
    security_policies_token: str = ""
    host_display_name: str = ""

    labels: dict[str, str] | None = None
    attributes: AttributeDestinationConfig = Field(
        default_factory=AttributeDestinationConfig
    )

    custom_insights_events: CustomInsightsEventsSettings = Field(
        default_factory=CustomInsightsEventsSettings
    )
    transaction_events: TransactionEventsSettings = Field(
        default_factory=TransactionEventsSettings
    )
    error_collector: ErrorCollectorSettings = Field(
        default_factory=ErrorCollectorSettings
    )
    transaction_tracer: TransactionTracerSettings = Field(
        default_factory=TransactionTracerSettings
    )
    browser_monitoring: BrowserMonitoringSettings = Field(
        default_factory=BrowserMonitoringSettings
    )
    span_events: SpanEventsSettings = Field(default_factory=SpanEventsSettings)
    distributed_tracer: DistributedTracerSettings = Field(
        default_factory=DistributedTracerSettings
    )
    heroku: HerokuSettings = Field(default_factory=HerokuSettings)
    utilization: UtilizationSettings = Field(default_factory=UtilizationSettings)

    # Live handles, never serialized as-is.
    transport: Any = None
    logger: Any = None
