"""Collect platform-injected metadata from the process environment."""

import os
from typing import Iterable, Mapping

from agent_connect.constants import METADATA_PREFIX


def environ_pairs(environ: Mapping[str, str] | None = None) -> list[str]:
    """Render an environment mapping as `KEY=VALUE` strings.

    Args:
        environ: Mapping to render, defaults to `os.environ`.
    """
    if environ is None:
        environ = os.environ
    return [f"{key}={value}" for key, value in environ.items()]


def gather_metadata(environ: Iterable[str]) -> dict[str, str]:
    """Collect every `NEW_RELIC_METADATA_*` variable verbatim.

    Args:
        environ: `KEY=VALUE` strings, in process environment order.

    Returns:
        Mapping of the full variable name (prefix included) to its value.
        Later duplicates overwrite earlier ones.
    """
    metadata: dict[str, str] = {}
    for pair in environ:
        if not pair.startswith(METADATA_PREFIX):
            continue
        key, sep, value = pair.partition("=")
        if sep:
            metadata[key] = value
    return metadata
