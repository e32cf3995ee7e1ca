"""Host facts and runtime environment reported on connect.

Cloud and container vendor detection is not performed here; only facts the
interpreter can answer locally are gathered.
"""

import logging
import os
import platform
import sys
from pathlib import Path

from agent_connect.settings import UtilizationSettings
from agent_connect.types import UtilizationData, UtilizationOverrides

logger = logging.getLogger(__name__)

BOOT_ID_PATH = Path("/proc/sys/kernel/random/boot_id")
BOOT_ID_MAX_LENGTH = 128


def total_ram_mib(log: logging.Logger = logger) -> int | None:
    """Physical memory in MiB, None when the platform cannot tell."""
    try:
        page_size = os.sysconf("SC_PAGE_SIZE")
        pages = os.sysconf("SC_PHYS_PAGES")
    except (AttributeError, ValueError, OSError) as e:
        log.debug("Unable to read physical memory size: %s", e)
        return None
    if page_size <= 0 or pages <= 0:
        return None
    return page_size * pages // (1024 * 1024)


def boot_id(
    path: Path = BOOT_ID_PATH, log: logging.Logger = logger
) -> str | None:
    """Linux boot id, None elsewhere or when it cannot be read."""
    if not sys.platform.startswith("linux"):
        return None
    try:
        value = path.read_text(encoding="utf-8").strip()
    except OSError as e:
        log.debug("Unable to read boot id from '%s': %s", path, e)
        return None
    if not value or len(value) > BOOT_ID_MAX_LENGTH:
        log.debug("Ignoring invalid boot id '%s'", value)
        return None
    return value


def _overrides(settings: UtilizationSettings) -> UtilizationOverrides | None:
    overrides = UtilizationOverrides(
        logical_processors=settings.logical_processors or None,
        total_ram_mib=settings.total_ram_mib or None,
        hostname=settings.billing_hostname or None,
    )
    if overrides == UtilizationOverrides():
        return None
    return overrides


def gather_utilization(
    settings: UtilizationSettings,
    hostname: str,
    agent_logger: logging.Logger | None = None,
) -> UtilizationData:
    """Gather utilization data for the connect payload.

    Args:
        settings: Utilization section of the agent configuration.
        hostname: Host identity already resolved by the compiler.
        agent_logger: Logger configured on the agent, receives lookup
            failures. Defaults to this module's logger.

    Returns:
        UtilizationData with the user overrides attached when any is set.
    """
    log = agent_logger if agent_logger is not None else logger
    return UtilizationData(
        logical_processors=os.cpu_count() or 0,
        total_ram_mib=total_ram_mib(log),
        hostname=hostname,
        boot_id=boot_id(log=log),
        overrides=_overrides(settings),
    )


def environment_descriptor() -> list[list[str]]:
    """Describe the interpreter and platform as name/value pairs."""
    return [
        ["Python Implementation", platform.python_implementation()],
        ["Python Version", platform.python_version()],
        ["OS", platform.system()],
        ["Arch", platform.machine()],
    ]
