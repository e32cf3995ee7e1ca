"""Compile a caller-owned agent configuration into a session snapshot.

`compile_config` runs once per agent session. Its result is never mutated
afterwards and can be read from any number of threads without locking.
"""

import logging
import os
import socket
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, PrivateAttr

from agent_connect import constants
from agent_connect.copier import copy_config_reference_fields
from agent_connect.hostname import Getenv, HostnameProvider, resolve_hostname
from agent_connect.metadata import environ_pairs, gather_metadata
from agent_connect.payload import build_connect_payload
from agent_connect.preconnect import preconnect_host
from agent_connect.settings import AgentConfig, NoopLogger
from agent_connect.types import SecurityPolicies, UtilizationData
from agent_connect.utilization import environment_descriptor, gather_utilization
from agent_connect.validation import validate_config

logger = logging.getLogger(__name__)


class CompiledConfig(BaseModel):
    """Immutable snapshot of the agent configuration for one session.

    The configuration and metadata are held privately. `config` hands out a
    fresh copy on every access and `metadata` is a read-only view, so nothing
    a holder does can change later payloads.
    """

    model_config = ConfigDict(frozen=True)

    hostname: str
    _config: AgentConfig = PrivateAttr()
    _metadata: dict[str, str] = PrivateAttr(default_factory=dict)

    def __init__(
        self, config: AgentConfig, hostname: str, metadata: Mapping[str, str]
    ):
        super().__init__(hostname=hostname)
        self._config = copy_config_reference_fields(config)
        self._metadata = dict(metadata)

    @property
    def config(self) -> AgentConfig:
        """Private copy of the compiled configuration."""
        return copy_config_reference_fields(self._config)

    @property
    def metadata(self) -> Mapping[str, str]:
        return MappingProxyType(self._metadata)

    def preconnect_host(self) -> str:
        return preconnect_host(self._config)

    def create_connect_payload(
        self,
        security_policies: SecurityPolicies | None = None,
        *,
        pid: int | None = None,
        utilization: UtilizationData | None = None,
        environment: list[list[str]] | None = None,
    ) -> bytes:
        """Encode the connect request body for this session.

        Args:
            security_policies: Policies obtained during preconnect, if any.
            pid: Process id, defaults to the current process.
            utilization: Host facts, gathered when not given.
            environment: Runtime description, gathered when not given.

        Returns:
            Encoded JSON payload.
        """
        if pid is None:
            pid = os.getpid()
        if utilization is None:
            utilization = gather_utilization(
                self._config.utilization, self.hostname, self._config.logger
            )
        if environment is None:
            environment = environment_descriptor()

        return build_connect_payload(
            self._config,
            pid,
            utilization,
            environment,
            constants.AGENT_VERSION,
            security_policies,
            self._metadata,
        )


def compile_config(
    config: AgentConfig,
    getenv: Getenv = os.getenv,
    environ: Iterable[str] | None = None,
    hostname_provider: HostnameProvider = socket.gethostname,
    validator: Callable[[AgentConfig], None] = validate_config,
) -> CompiledConfig:
    """Copy, validate and resolve the configuration.

    Args:
        config: Caller-owned configuration, left untouched.
        getenv: Single-key environment lookup used for the dyno name.
        environ: `KEY=VALUE` strings scanned for metadata, defaults to the
            process environment.
        hostname_provider: OS host name lookup.
        validator: Business rule check, raises on an invalid configuration.

    Returns:
        CompiledConfig owning private copies of all mutable data.

    Raises:
        ConfigValidationError: If `validator` rejects the configuration.
    """
    # Copy first: the caller may keep mutating its object from another
    # thread while the session starts.
    config = copy_config_reference_fields(config)
    validator(config)

    if config.logger is None:
        config.logger = NoopLogger()

    hostname = resolve_hostname(config, getenv, hostname_provider)
    if environ is None:
        environ = environ_pairs()
    metadata = gather_metadata(environ)

    logger.debug(
        "Compiled agent configuration (host: %s, metadata keys: %d)",
        hostname,
        len(metadata),
    )
    return CompiledConfig(config=config, hostname=hostname, metadata=metadata)
