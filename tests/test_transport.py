"""Tests for the httpx transport and the wire encoding."""

import json

import httpx
import pytest

from capture_ops_exceptions import NotFoundFault, PreconditionFault, RemoteFault
from config import ConnectionSettings
from connection_management import (
    ConnectionTimeoutError,
    HttpCaptureTransport,
    ServerUnavailableError,
    SessionAuthenticationError,
    decode_wire,
    encode_wire
)

BASE_URL = "https://capture.example/api"


def make_transport(handler) -> HttpCaptureTransport:
    settings = ConnectionSettings(base_url=BASE_URL, timeout=5)
    return HttpCaptureTransport(settings, http_transport=httpx.MockTransport(handler))


class TestWireEncoding:
    def test_bytes_are_tagged(self):
        encoded = encode_wire({"image": b"\x00\x01", "pages": [b"ab"]})
        assert encoded == {"image": {"__bytes__": "AAE="}, "pages": [{"__bytes__": "YWI="}]}

    def test_decode_restores_bytes(self):
        payload = {"image": b"\x00\x01", "nested": {"values": [1, "two", None, b"3"]}}
        assert decode_wire(json.loads(json.dumps(encode_wire(payload)))) == payload

    def test_enums_become_values(self):
        from capture_models import FieldStatus
        assert encode_wire({"status": FieldStatus.VERIFIED}) == {"status": 4}


class TestHttpCaptureTransport:
    def test_requires_base_url(self):
        with pytest.raises(ValueError):
            HttpCaptureTransport(ConnectionSettings())

    def test_posts_operation_with_session(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            seen["agent"] = request.headers["user-agent"]
            return httpx.Response(200, json={"id": "F1", "image": {"__bytes__": "YWI="}})

        transport = make_transport(handler)
        result = transport.call("GetFolder", "session-1", {"folder_id": "F1", "image": b"ab"})
        transport.close()

        assert seen["path"] == "/api/GetFolder"
        assert seen["body"] == {"sessionId": "session-1", "folder_id": "F1", "image": {"__bytes__": "YWI="}}
        assert seen["agent"].startswith("capture-ops/")
        assert result == {"id": "F1", "image": b"ab"}

    def test_empty_body_is_none(self):
        transport = make_transport(lambda request: httpx.Response(204))
        assert transport.call("DeleteFolder", "s", {"folder_id": "F1"}) is None

    @pytest.mark.parametrize("fault_type, fault_cls", [
        ("NotFoundFault", NotFoundFault),
        ("PreconditionFault", PreconditionFault),
        ("SomethingNew", RemoteFault),
    ])
    def test_faults_are_decoded(self, fault_type, fault_cls):
        def handler(request):
            return httpx.Response(500, json={"fault": {"type": fault_type, "message": "boom"}})

        with pytest.raises(fault_cls) as exc_info:
            make_transport(handler).call("GetDocument", "s", {"document_id": "D1"})
        assert type(exc_info.value) is fault_cls
        assert exc_info.value.message == "boom"
        assert exc_info.value.operation == "GetDocument"

    @pytest.mark.parametrize("status", [401, 403])
    def test_rejected_session(self, status):
        with pytest.raises(SessionAuthenticationError):
            make_transport(lambda request: httpx.Response(status)).call("GetFolder", "s", {})

    def test_non_fault_error_response(self):
        transport = make_transport(lambda request: httpx.Response(502, text="Bad Gateway"))
        with pytest.raises(ServerUnavailableError):
            transport.call("GetFolder", "s", {})

    def test_malformed_success_body(self):
        transport = make_transport(lambda request: httpx.Response(200, text="<html>maintenance</html>"))
        with pytest.raises(ServerUnavailableError) as exc_info:
            transport.call("GetFolder", "s", {})
        assert "GetFolder" in str(exc_info.value)

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        with pytest.raises(ConnectionTimeoutError):
            make_transport(handler).call("GetFolder", "s", {})

    def test_unreachable(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ServerUnavailableError):
            make_transport(handler).call("GetFolder", "s", {})
