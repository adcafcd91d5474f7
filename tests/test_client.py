"""Tests for the CaptureClient facade."""

import pytest

from client import CaptureClient
from config import CaptureSettings
from capture_ops_exceptions import (
    ConfigurationError,
    InvalidOperationFault,
    NotFoundFault,
    RemoteFault
)
from connection_management import MockTransport, TransportError


class TestConstruction:
    def test_default_config_uses_mock_backend(self):
        with CaptureClient() as client:
            assert isinstance(client.connection_manager.transport, MockTransport)
            assert client.config.uses_remote_service is False

    def test_config_from_yaml_path(self, tmp_path):
        path = tmp_path / "capture.yaml"
        path.write_text("images:\n  default_mime_type: image/png\n")

        with CaptureClient(config=path) as client:
            assert client.config.images.default_mime_type == "image/png"

    def test_invalid_config_type(self):
        with pytest.raises(ConfigurationError):
            CaptureClient(config=42)

    def test_managers_share_one_connection(self, client):
        for manager in (client.folders, client.documents, client.pages, client.fields, client.validation, client.catalog):
            assert manager._connection_manager is client.connection_manager

    def test_closed_client_refuses_calls(self, backend, session_id):
        client = CaptureClient(config=CaptureSettings(), transport=MockTransport(backend))
        client.close()
        client.close()
        with pytest.raises(TransportError):
            client.create_folder(session_id)


class TestAttempt:
    """attempt() turns expected faults into an explicit result."""

    def test_success(self, client, session_id):
        result = client.attempt(client.create_folder, session_id, name="Inbox")

        assert result.ok is True
        assert result.operation == "create_folder"
        assert client.folders.get_folder(session_id, result.unwrap()).name == "Inbox"

    def test_expected_fault(self, client, session_id, folders):
        result = client.attempt(
            client.move_folder, session_id, folders.child_folder1_id, folders.child_folder2_id, 0,
            expected=(InvalidOperationFault,)
        )

        assert result.ok is False
        assert isinstance(result.error, InvalidOperationFault)
        with pytest.raises(InvalidOperationFault):
            result.unwrap()

    def test_default_expects_any_remote_fault(self, client, session_id):
        result = client.attempt(client.delete_folder, session_id, "0" * 32)
        assert isinstance(result.error, NotFoundFault)
        assert isinstance(result.error, RemoteFault)

    def test_unexpected_fault_propagates(self, client, session_id):
        with pytest.raises(NotFoundFault):
            client.attempt(client.delete_folder, session_id, "0" * 32, expected=(InvalidOperationFault,))

    def test_local_errors_propagate(self, client, session_id):
        with pytest.raises(ValueError):
            client.attempt(client.merge_documents, session_id, ["only-one"])
