"""
Capture_Ops test suite: shared fixtures and configuration.

Every test runs against a fresh in-memory capture backend.

Run:  pytest tests/ -v
"""

from pathlib import Path
from typing import Callable, List

import pytest

from client import CaptureClient
from config import CaptureSettings
from connection_management import MockCaptureBackend, MockTransport
from capture_models import DocumentDataInput, PageDataInput
from capture_samples import create_folders, sample_document_type_ids

SESSION_ID = "test-session"


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Keep developer CAPTURE_* variables out of the settings under test."""
    for name in ("CAPTURE_BASE_URL", "CAPTURE_TIMEOUT", "CAPTURE_LOG_LEVEL", "CAPTURE_CONNECTION__BASE_URL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def session_id() -> str:
    return SESSION_ID


@pytest.fixture
def backend() -> MockCaptureBackend:
    return MockCaptureBackend()


@pytest.fixture
def client(backend):
    """A CaptureClient wired to the in-memory backend."""
    capture_client = CaptureClient(config=CaptureSettings(), transport=MockTransport(backend))
    yield capture_client
    capture_client.close()


@pytest.fixture
def image_files(tmp_path) -> List[Path]:
    """Two small fake TIFF files."""
    paths = []
    for number in (1, 2):
        path = tmp_path / f"page{number}.tif"
        path.write_bytes(b"II*\x00" + f"page-{number}".encode("ascii"))
        paths.append(path)
    return paths


@pytest.fixture
def folders(client, session_id):
    """The sample folder tree: root with three children and one grandchild."""
    return create_folders(client, session_id)


@pytest.fixture
def document_types(client, session_id):
    """(NW Form id, TS Form id)"""
    return sample_document_type_ids(client, session_id)


@pytest.fixture
def make_document(client, session_id, folders, document_types) -> Callable[..., str]:
    """
    Factory creating a Northwest document with numbered pages.

    Page n carries the image bytes b"page-n".
    """
    def _make(page_count: int = 3, parent_id: str = None, valid: bool = False) -> str:
        pages = [
            PageDataInput(image=f"page-{n}".encode("ascii"), fields=[])
            for n in range(page_count)
        ]
        document = DocumentDataInput(document_type_id=document_types[0])
        document_id = client.documents.create_document_with_pages(
            session_id, parent_id or folders.child_folder1_id, None, document, pages
        ).document_id
        if valid:
            client.fields.update_field_value(session_id, "document", document_id, "Valid", True)
        return document_id

    return _make


@pytest.fixture
def page_images(client, session_id) -> Callable[[str], List[bytes]]:
    """Reads the image bytes of a document's pages, in page order."""
    def _read(document_id: str) -> List[bytes]:
        document = client.documents.get_document(session_id, document_id)
        return [client.pages.get_image(session_id, page.image_id).image for page in document.pages]

    return _read
