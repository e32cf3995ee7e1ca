"""HTTP client for invoking collector methods."""

import gzip
import logging
from typing import Any

import requests

from agent_connect.constants import (
    AGENT_VERSION,
    COLLECTOR_CONNECTION_TIMEOUT,
    COLLECTOR_ENDPOINT,
    COLLECTOR_PROTOCOL_VERSION,
    USER_AGENT,
)

logger = logging.getLogger(__name__)

REDACTED_LICENSE_KEY = "<redacted>"


class CollectorClient:
    """HTTP client for the collector's raw method endpoint.

    Each call is a single request. Retrying and interpreting the reply are
    left to the caller.
    """

    def __init__(
        self,
        host: str,
        license_key: str,
        transport: requests.adapters.BaseAdapter | None = None,
        connection_timeout: int = COLLECTOR_CONNECTION_TIMEOUT,
    ):
        """Initialize the collector client.

        Args:
            host: Collector host name
            license_key: License key sent as a query parameter
            transport: Transport adapter mounted for https requests, if any
            connection_timeout: HTTP request timeout in seconds
        """
        self.host = host
        self.license_key = license_key
        self.transport = transport
        self.connection_timeout = connection_timeout

    def _post(self, method: str, payload: bytes) -> requests.Response:
        params = {
            "method": method,
            "license_key": self.license_key,
            "protocol_version": COLLECTOR_PROTOCOL_VERSION,
            "marshal_format": "json",
        }
        headers = {
            "User-Agent": USER_AGENT.format(version=AGENT_VERSION),
            "Content-Type": "application/octet-stream",
            "Content-Encoding": "gzip",
        }

        with requests.Session() as s:
            if self.transport is not None:
                s.mount("https://", self.transport)
            s.headers.update(headers)
            logger.debug("Invoking '%s' on %s", method, self.host)
            response = s.post(
                url=COLLECTOR_ENDPOINT.format(host=self.host),
                params=params,
                data=gzip.compress(payload),
                timeout=self.connection_timeout,
            )

        return response

    def _redact(self, text: str) -> str:
        if not self.license_key:
            return text
        return text.replace(self.license_key, REDACTED_LICENSE_KEY)

    def invoke(self, method: str, payload: bytes) -> Any:
        """Invoke a collector method with an encoded JSON payload.

        Args:
            method: Collector method name, e.g. "connect".
            payload: Encoded request body.

        Returns:
            The decoded JSON reply, untouched.

        Raises:
            requests.RequestException: If the request fails or the
                collector does not answer with 200. The license key is
                masked in the message.
        """
        try:
            response = self._post(method, payload)
        except requests.RequestException as e:
            # the request URL carries the license key
            raise type(e)(self._redact(str(e))) from None

        if response.status_code != 200:
            text = self._redact(response.text)
            logger.error(
                "Collector method '%s' failed, response: %d: %s",
                method,
                response.status_code,
                text,
            )
            raise requests.RequestException(
                f"Collector method '{method}' failed with response code: "
                f"{response.status_code} and text: {text}",
            )

        logger.info("Collector method '%s' succeeded on %s", method, self.host)
        return response.json()
