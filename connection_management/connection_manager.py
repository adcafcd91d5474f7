"""
Capture Connection Manager

This module provides the single seam through which every remote capture
call passes. The manager picks a transport from the configuration, times
each call, logs faults and re-raises them unchanged.
"""

import logging
from typing import Any, Optional

from config import CaptureSettings, load_settings
from capture_ops_exceptions import RemoteFault
from utils.timing import PerformanceTimer, OperationTimingStats
from connection_management.connection_exceptions import TransportError
from connection_management.transport import CaptureTransport, HttpCaptureTransport
from connection_management.mock_backend import MockTransport

# Logger setup
logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    High-level manager for the connection to the capture service.

    Every call is sent exactly once and every fault reaches the caller as
    raised by the transport. Session ids are passed through untouched.
    """

    def __init__(
        self,
        config: Optional[CaptureSettings] = None,
        transport: Optional[CaptureTransport] = None
    ):
        """
        Initialize the connection manager.

        Args:
            config: CaptureSettings object. If None, settings are loaded from
                   the standard configuration sources.
            transport: Transport to use. If None, an HttpCaptureTransport is
                      built when connection.base_url is set, otherwise the
                      in-memory MockTransport is used.
        """
        self.config = config if config is not None else load_settings()

        if transport is None:
            if self.config.uses_remote_service:
                transport = HttpCaptureTransport(self.config.connection)
            else:
                transport = MockTransport()
                logger.info("No capture service URL configured, using the in-memory capture backend")
        self._transport = transport

        self._timer = PerformanceTimer(enable_logging=self.config.monitoring.performance_tracking)
        self._closed = False

        logger.info(f"ConnectionManager initialized with {type(transport).__name__}")

    @property
    def transport(self) -> CaptureTransport:
        """The transport remote calls are sent through."""
        return self._transport

    def call(self, operation: str, session_id: str, **payload: Any) -> Any:
        """
        Execute one remote operation.

        Args:
            operation: Service operation name, e.g. "MoveFolder"
            session_id: Session token of the current user
            **payload: Operation arguments as plain Python data

        Returns:
            The unwrapped operation result

        Raises:
            RemoteFault: The service reported a fault (re-raised unchanged)
            TransportError: The service could not be reached
        """
        if self._closed:
            raise TransportError("ConnectionManager is closed")

        try:
            with self._timer.time_operation(operation):
                return self._transport.call(operation, session_id, payload)
        except RemoteFault as e:
            logger.error(f"[{operation}] {type(e).__name__}: {e.message}")
            raise
        except TransportError as e:
            logger.error(f"[{operation}] Transport failure: {e}")
            raise

    def get_operation_stats(self, operation: str) -> Optional[OperationTimingStats]:
        """Timing statistics for one operation name, None if it was never called."""
        return self._timer.get_operation_stats(operation)

    def close(self):
        """
        Close the underlying transport.

        Safe to call more than once.
        """
        if self._closed:
            return
        self._transport.close()
        self._closed = True
        logger.info("ConnectionManager closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
