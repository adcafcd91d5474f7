"""Tests for capture_ops_exceptions and the transport error hierarchy."""

from capture_ops_exceptions import (
    CaptureOpsError,
    InvalidOperationFault,
    NotFoundFault,
    PreconditionFault,
    RemoteFault,
    fault_from_dict
)
from connection_management import ConnectionTimeoutError, SessionAuthenticationError, TransportError


class TestRemoteFault:
    def test_hierarchy(self):
        for fault_cls in (NotFoundFault, InvalidOperationFault, PreconditionFault):
            assert issubclass(fault_cls, RemoteFault)
        assert issubclass(RemoteFault, CaptureOpsError)
        assert not issubclass(TransportError, RemoteFault)
        assert issubclass(ConnectionTimeoutError, TransportError)
        assert issubclass(SessionAuthenticationError, TransportError)

    def test_to_dict_and_back(self):
        fault = PreconditionFault("not valid", operation="SetDocumentFieldStatus", details={"field": "Name"})

        rebuilt = fault_from_dict(fault.to_dict())

        assert isinstance(rebuilt, PreconditionFault)
        assert rebuilt.message == "not valid"
        assert rebuilt.operation == "SetDocumentFieldStatus"
        assert rebuilt.details == {"field": "Name"}

    def test_operation_fallback(self):
        fault = fault_from_dict({"type": "NotFoundFault"}, operation="GetFolder")
        assert fault.operation == "GetFolder"
        assert fault.message == "Remote capture service fault"

    def test_repr_and_str(self):
        fault = InvalidOperationFault("wrong level", operation="MoveFolder")
        assert str(fault) == "wrong level"
        assert repr(fault) == "InvalidOperationFault(message='wrong level', operation='MoveFolder')"
