"""Pick the collector host used for the very first request."""

import logging
import re

from agent_connect import constants
from agent_connect.settings import AgentConfig

logger = logging.getLogger(__name__)

_REGION_LICENSE_RE = re.compile(constants.PRECONNECT_REGION_LICENSE_PATTERN)


def preconnect_host(config: AgentConfig) -> str:
    """Return the preconnect collector host.

    An explicit `host` override wins. Otherwise the region token in front of
    the first "x" of the license key selects a regional collector. A key
    without one falls back to the default collector, which is not an error.
    """
    if config.host:
        return config.host

    match = _REGION_LICENSE_RE.search(config.license_key)
    if match:
        return constants.PRECONNECT_REGION_HOST.format(region=match.group(1))

    logger.debug("No region found in license key, using default collector")
    return constants.PRECONNECT_HOST_DEFAULT
