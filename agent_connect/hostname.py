"""Host identity resolution.

The collector groups agents by host. The identity is resolved through an
ordered list of strategies; each one either produces a name or returns
None to let the next one try.
"""

import logging
import os
import socket
from typing import Callable

from agent_connect import constants
from agent_connect.settings import AgentConfig

logger = logging.getLogger(__name__)

Getenv = Callable[[str], str | None]
HostnameProvider = Callable[[], str]


def dyno_hostname(config: AgentConfig, getenv: Getenv) -> str | None:
    """Derive the host name from the platform dyno name.

    Args:
        config: Agent configuration holding the dyno naming options.
        getenv: Single-key environment lookup.

    Returns:
        The dyno name, shortened to `<prefix>.*` when it starts with one of
        the configured prefixes, or None when dyno naming does not apply.
    """
    if not config.heroku.use_dyno_names:
        return None
    dyno = getenv(constants.DYNO_ENV_VAR)
    if not dyno:
        return None

    # first matching prefix wins
    for prefix in config.heroku.dyno_name_prefixes_to_shorten:
        if not prefix:
            continue
        if dyno.startswith(prefix + "."):
            return prefix + ".*"
    return dyno


def os_hostname(hostname_provider: HostnameProvider) -> str | None:
    """Ask the operating system for the host name, None on failure."""
    try:
        hostname = hostname_provider()
    except OSError as e:
        logger.debug("Hostname lookup failed: %s", e)
        return None
    return hostname or None


def resolve_hostname(
    config: AgentConfig,
    getenv: Getenv = os.getenv,
    hostname_provider: HostnameProvider = socket.gethostname,
) -> str:
    """Resolve the host identity reported to the collector.

    Order: dyno name, OS host name, then the literal "unknown". Lookup
    failures are never raised.
    """
    strategies: list[Callable[[], str | None]] = [
        lambda: dyno_hostname(config, getenv),
        lambda: os_hostname(hostname_provider),
    ]
    for strategy in strategies:
        hostname = strategy()
        if hostname is not None:
            return hostname

    logger.debug(
        "No host name could be resolved, using '%s'", constants.UNKNOWN_HOSTNAME
    )
    return constants.UNKNOWN_HOSTNAME


def truncate_to_byte_limit(value: str, limit: int) -> str:
    """Cap the UTF-8 encoded length of `value` to `limit` bytes.

    The cut never leaves half a character behind: a multi-byte character
    straddling the limit is dropped entirely.
    """
    encoded = value.encode("utf-8")
    if len(encoded) <= limit:
        return value
    return encoded[:limit].decode("utf-8", errors="ignore")
