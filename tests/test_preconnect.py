"""Tests for agent_connect.preconnect module."""

import pytest

from agent_connect.preconnect import preconnect_host
from agent_connect.settings import AgentConfig


class TestPreconnectHost:
    """Test cases for preconnect_host."""

    def test_region_from_license(self):
        """Test that the region in front of the first x selects the host."""
        config = AgentConfig(license_key="eu01xNRAL")

        assert preconnect_host(config) == "collector.eu01.nr-data.net"

    def test_no_region(self):
        """Test the default collector when the key has no x."""
        config = AgentConfig(license_key="0123456789abcdef")

        assert preconnect_host(config) == "collector.newrelic.com"

    def test_empty_license(self):
        assert preconnect_host(AgentConfig()) == "collector.newrelic.com"

    def test_leading_x_is_not_a_region(self):
        """Test that an x in first position does not produce an empty region."""
        config = AgentConfig(license_key="xabc")

        assert preconnect_host(config) == "collector.newrelic.com"

    def test_first_x_used(self):
        """Test that the capture is non-greedy."""
        config = AgentConfig(license_key="gov01xabcxdef")

        assert preconnect_host(config) == "collector.gov01.nr-data.net"

    @pytest.mark.parametrize("license_key", ["eu01xNRAL", "0123456789abcdef", ""])
    def test_explicit_host_wins(self, license_key):
        """Test that a configured host is returned verbatim."""
        config = AgentConfig(
            license_key=license_key, host="staging-collector.example.com"
        )

        assert preconnect_host(config) == "staging-collector.example.com"
