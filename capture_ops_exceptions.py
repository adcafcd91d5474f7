"""
Capture Operations Exceptions

This module defines custom exceptions for the Capture_Ops package
to provide clear error handling and reporting.

Remote faults are raised by the capture service and surface unchanged
through every manager. Nothing in this package recovers from them; callers
decide whether a fault ends their workflow.
"""

from typing import Any, Dict, Optional


class CaptureOpsError(Exception):
    """Base exception for all Capture_Ops errors"""
    pass


class ConfigurationError(CaptureOpsError):
    """Raised when configuration is invalid or missing"""
    pass


class RemoteFault(CaptureOpsError):
    """
    Generic failure reported by the remote capture service.

    Attributes:
        message: Human-readable fault message from the service
        operation: Name of the remote operation that faulted, when known
        details: Any additional fault payload returned by the service
    """

    fault_type = "RemoteFault"

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the fault to the wire shape used by the capture service."""
        return {
            "type": self.fault_type,
            "message": self.message,
            "operation": self.operation,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, operation={self.operation!r})"


class NotFoundFault(RemoteFault):
    """Raised when a referenced folder, document, page or field does not exist"""

    fault_type = "NotFoundFault"


class InvalidOperationFault(RemoteFault):
    """
    Raised when an operation violates a structural invariant.

    Example: moving a folder to a different level of the folder tree.
    """

    fault_type = "InvalidOperationFault"


class PreconditionFault(RemoteFault):
    """
    Raised when a state-dependent guard fails.

    Example: setting a field to Verified while its owner is not Valid.
    """

    fault_type = "PreconditionFault"


FAULT_TYPES = {
    cls.fault_type: cls
    for cls in (RemoteFault, NotFoundFault, InvalidOperationFault, PreconditionFault)
}


def fault_from_dict(payload: Dict[str, Any], operation: Optional[str] = None) -> RemoteFault:
    """
    Rebuild a fault from its wire representation.

    Unknown fault types fall back to the generic RemoteFault so that no
    service error is ever silently dropped.
    """
    fault_cls = FAULT_TYPES.get(payload.get("type", ""), RemoteFault)
    return fault_cls(
        payload.get("message") or "Remote capture service fault",
        operation=payload.get("operation") or operation,
        details=payload.get("details") or {},
    )
