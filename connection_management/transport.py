"""
Capture Transports

A transport carries one named operation, the session id and a payload of
plain Python data (str, int, float, bool, None, bytes, lists and dicts) to
the capture service and returns the unwrapped result in the same shape.

Two implementations ship with the package:
- HttpCaptureTransport posts JSON to the service over httpx
- MockTransport (see mock_backend) dispatches to the in-memory backend
"""

import base64
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional

import httpx

from config import ConnectionSettings
from capture_ops_exceptions import fault_from_dict
from .connection_exceptions import (
    ConnectionTimeoutError,
    ServerUnavailableError,
    SessionAuthenticationError
)

logger = logging.getLogger(__name__)

# Raw bytes cannot travel in JSON; they are sent as {"__bytes__": "<base64>"}.
BYTES_TAG = "__bytes__"


def encode_wire(value: Any) -> Any:
    """Convert plain payload data into JSON-safe data."""
    if isinstance(value, (bytes, bytearray)):
        return {BYTES_TAG: base64.b64encode(bytes(value)).decode("ascii")}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: encode_wire(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [encode_wire(item) for item in value]
    return value


def decode_wire(value: Any) -> Any:
    """Inverse of encode_wire."""
    if isinstance(value, dict):
        if len(value) == 1 and BYTES_TAG in value:
            return base64.b64decode(value[BYTES_TAG])
        return {key: decode_wire(item) for key, item in value.items()}
    if isinstance(value, list):
        return [decode_wire(item) for item in value]
    return value


class CaptureTransport(ABC):
    """
    Abstract transport to the capture service.

    Implementations raise a RemoteFault subclass when the service reports a
    fault and a TransportError when no verdict could be obtained.
    """

    @abstractmethod
    def call(self, operation: str, session_id: str, payload: Dict[str, Any]) -> Any:
        """
        Invoke one remote operation.

        Args:
            operation: Service operation name, e.g. "CreateFolder"
            session_id: Opaque session token from the authentication service
            payload: Operation arguments as plain Python data

        Returns:
            The operation result as plain Python data
        """
        pass

    def close(self) -> None:
        """Release any resources held by the transport."""
        pass


class HttpCaptureTransport(CaptureTransport):
    """
    Transport that POSTs JSON requests to {base_url}/{operation}.

    A 2xx response body is the operation result. Any other response carries
    {"fault": {"type": ..., "message": ...}} and is raised as the matching
    RemoteFault. One httpx.Client is kept per transport and reused for all
    calls.
    """

    def __init__(
        self,
        settings: ConnectionSettings,
        http_transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Args:
            settings: Connection settings (base URL, timeout, TLS, user agent)
            http_transport: Optional httpx transport, used to plug in
                            httpx.MockTransport or a custom connection pool
        """
        if not settings.base_url:
            raise ValueError("HttpCaptureTransport requires connection.base_url")
        self._settings = settings
        self._client = httpx.Client(
            base_url=settings.base_url,
            timeout=httpx.Timeout(settings.timeout),
            verify=settings.verify_tls,
            headers={"User-Agent": settings.user_agent},
            transport=http_transport,
        )
        logger.info(f"Created httpx client for capture service at '{settings.base_url}'")

    def call(self, operation: str, session_id: str, payload: Dict[str, Any]) -> Any:
        body = {"sessionId": session_id}
        body.update(encode_wire(payload))

        try:
            response = self._client.post(f"/{operation}", json=body)
        except httpx.TimeoutException as e:
            raise ConnectionTimeoutError(
                f"Request '{operation}' timed out after {self._settings.timeout}s"
            ) from e
        except httpx.TransportError as e:
            raise ServerUnavailableError(
                f"Capture service unreachable for '{operation}': {e}"
            ) from e

        if response.status_code in (401, 403):
            raise SessionAuthenticationError(
                f"Session rejected by capture service (HTTP {response.status_code})"
            )

        if response.is_success:
            if not response.content:
                return None
            try:
                result = response.json()
            except ValueError as e:
                raise ServerUnavailableError(
                    f"Malformed response from capture service for '{operation}'"
                ) from e
            return decode_wire(result)

        try:
            error_body = response.json()
        except ValueError:
            error_body = None
        fault = error_body.get("fault") if isinstance(error_body, dict) else None
        if not isinstance(fault, dict):
            raise ServerUnavailableError(
                f"Unexpected HTTP {response.status_code} from capture service for '{operation}'"
            )
        raise fault_from_dict(fault, operation=operation)

    def close(self) -> None:
        self._client.close()
        logger.info("Closed httpx client for capture service")
