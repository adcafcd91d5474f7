"""
Connection Management Exceptions

This module defines the transport-level exceptions raised while talking to
the capture service. They are distinct from RemoteFault: a TransportError
means the request never produced a service verdict at all.
"""

from capture_ops_exceptions import CaptureOpsError


class TransportError(CaptureOpsError):
    """
    Base exception for all transport-related errors.

    Callers can catch this to handle every "could not reach the service"
    condition uniformly.
    """
    pass


class ConnectionTimeoutError(TransportError):
    """
    Raised when a request to the capture service times out.

    The timeout itself is configured by connection.timeout.
    """
    pass


class ServerUnavailableError(TransportError):
    """
    Raised when the capture service cannot be reached or answers with an
    unexpected, non-fault response.
    """
    pass


class SessionAuthenticationError(TransportError):
    """
    Raised when the service rejects the session id.

    Sessions are created by an external authentication service; this package
    never refreshes them.
    """
    pass
