"""Tests for connection_management.ConnectionManager and the in-memory backend."""

import httpx
import pytest

from config import CaptureSettings, ConnectionSettings
from capture_ops_exceptions import NotFoundFault, RemoteFault
from connection_management import (
    ConnectionManager,
    HttpCaptureTransport,
    MockCaptureBackend,
    MockTransport,
    SessionAuthenticationError,
    TransportError
)


@pytest.fixture
def manager(backend):
    connection_manager = ConnectionManager(config=CaptureSettings(), transport=MockTransport(backend))
    yield connection_manager
    connection_manager.close()


class TestTransportSelection:
    def test_mock_without_url(self):
        with ConnectionManager(config=CaptureSettings()) as manager:
            assert isinstance(manager.transport, MockTransport)

    def test_http_with_url(self):
        settings = CaptureSettings(connection=ConnectionSettings(base_url="https://capture.example/api"))
        with ConnectionManager(config=settings) as manager:
            assert isinstance(manager.transport, HttpCaptureTransport)

    def test_http_round_trip(self):
        def handler(request):
            return httpx.Response(200, json="F1")

        settings = ConnectionSettings(base_url="https://capture.example/api")
        transport = HttpCaptureTransport(settings, http_transport=httpx.MockTransport(handler))
        with ConnectionManager(config=CaptureSettings(connection=settings), transport=transport) as manager:
            assert manager.call("CreateFolder", "s", name="Inbox") == "F1"


class TestCall:
    def test_each_call_sent_once(self, manager, backend, session_id):
        manager.call("CreateFolder", session_id, name="Inbox")
        with pytest.raises(NotFoundFault):
            manager.call("GetFolder", session_id, folder_id="missing")

        assert backend.calls == ["CreateFolder", "GetFolder"]

    def test_fault_names_operation(self, manager, session_id):
        with pytest.raises(NotFoundFault) as exc_info:
            manager.call("GetDocument", session_id, document_id="missing")
        assert exc_info.value.operation == "GetDocument"

    def test_unknown_operation(self, manager, session_id):
        with pytest.raises(RemoteFault):
            manager.call("Teleport", session_id)

    def test_session_required(self, manager):
        with pytest.raises(SessionAuthenticationError):
            manager.call("GetCategories", "")

    def test_restricted_sessions(self):
        backend = MockCaptureBackend(valid_sessions=["good"])
        with ConnectionManager(config=CaptureSettings(), transport=MockTransport(backend)) as manager:
            assert manager.call("GetCategories", "good")
            with pytest.raises(SessionAuthenticationError):
                manager.call("GetCategories", "bad")

    def test_timing_stats(self, manager, session_id):
        assert manager.get_operation_stats("CreateFolder") is None

        manager.call("CreateFolder", session_id)
        with pytest.raises(NotFoundFault):
            manager.call("CreateFolder", session_id, parent_id="missing")

        stats = manager.get_operation_stats("CreateFolder")
        assert stats.total_operations == 2
        assert stats.failed_operations == 1
        assert stats.success_rate == 50.0

    def test_results_are_snapshots(self, manager, session_id):
        folder_id = manager.call("CreateFolder", session_id)
        snapshot = manager.call("GetFolder", session_id, folder_id=folder_id)
        snapshot["folders"].append({"id": "bogus"})

        assert manager.call("GetFolder", session_id, folder_id=folder_id)["folders"] == []

    def test_closed_manager_raises(self, manager, session_id):
        manager.close()
        manager.close()
        with pytest.raises(TransportError):
            manager.call("GetCategories", session_id)
