"""Shared pytest fixtures and configuration."""

import pytest

from agent_connect.settings import AgentConfig, AttributeDestinationConfig
from agent_connect.types import UtilizationData

# 40 characters, region "eu01"
TEST_LICENSE_KEY = "eu01x" + "a" * 35


@pytest.fixture
def license_key():
    return TEST_LICENSE_KEY


@pytest.fixture
def sample_config():
    """Agent configuration with every mutable container populated."""
    config = AgentConfig(
        app_name="checkout;shop",
        license_key=TEST_LICENSE_KEY,
        labels={"env": "prod", "team": "payments"},
        attributes=AttributeDestinationConfig(
            include=["request.*"], exclude=["password"]
        ),
    )
    config.error_collector.ignore_status_codes = [0, 404, 418]
    config.error_collector.attributes.include = ["error.*"]
    config.transaction_events.attributes.exclude = ["cookie"]
    config.transaction_tracer.attributes.include = ["trace.*"]
    config.transaction_tracer.segments.attributes.exclude = ["sql"]
    config.browser_monitoring.attributes.include = ["browser.*"]
    config.span_events.attributes.exclude = ["span.secret"]
    return config


@pytest.fixture
def make_getenv():
    """Factory for getenv-style lookups over a fixed mapping."""

    def factory(values: dict[str, str]):
        return lambda key: values.get(key, "")

    return factory


@pytest.fixture
def no_dyno_getenv(make_getenv):
    """getenv that finds nothing."""
    return make_getenv({})


@pytest.fixture
def fixed_hostname():
    """Hostname provider returning a constant."""
    return lambda: "test-host"


@pytest.fixture
def sample_utilization():
    return UtilizationData(
        logical_processors=4, total_ram_mib=2048, hostname="test-host"
    )


@pytest.fixture
def sample_environment():
    return [["Python Version", "3.12.0"], ["OS", "Linux"]]
