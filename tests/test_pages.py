"""Tests for page_operations: positional moves, renditions, images and page properties."""

import pytest
from pydantic import ValidationError

from capture_models import Barcode, PagePropertiesIdentity, PageUpdate
from capture_ops_exceptions import InvalidOperationFault, NotFoundFault


class TestMovePages:
    """Pages are addressed by their current index."""

    def test_move_into_other_document(self, client, session_id, make_document):
        source_id = make_document(page_count=3)
        destination_id = make_document(page_count=2)
        a = client.documents.get_document(session_id, source_id).page_ids
        b = client.documents.get_document(session_id, destination_id).page_ids

        client.move_pages(session_id, source_id, destination_id, [0, 2], 1)

        assert client.documents.get_document(session_id, source_id).page_ids == [a[1]]
        assert client.documents.get_document(session_id, destination_id).page_ids == [b[0], a[0], a[2], b[1]]

    def test_minus_one_appends(self, client, session_id, make_document):
        document_id = make_document(page_count=3)
        ids = client.documents.get_document(session_id, document_id).page_ids

        client.move_pages(session_id, document_id, document_id, [0], -1)

        assert client.documents.get_document(session_id, document_id).page_ids == [ids[1], ids[2], ids[0]]

    def test_index_past_end_appends(self, client, session_id, make_document):
        source_id = make_document(page_count=1)
        destination_id = make_document(page_count=2)
        moved = client.documents.get_document(session_id, source_id).page_ids[0]

        client.move_pages(session_id, source_id, destination_id, [0], 10)

        assert client.documents.get_document(session_id, destination_id).page_ids[-1] == moved

    def test_out_of_range_index_faults(self, client, session_id, make_document):
        document_id = make_document(page_count=2)
        with pytest.raises(InvalidOperationFault):
            client.move_pages(session_id, document_id, document_id, [2], 0)

    def test_empty_index_list_rejected_locally(self, client, session_id, make_document, backend):
        document_id = make_document(page_count=2)
        calls_before = list(backend.calls)
        with pytest.raises(ValueError):
            client.move_pages(session_id, document_id, document_id, [], 0)
        assert backend.calls == calls_before

    def test_move_by_id_survives_index_shift(self, client, session_id, make_document):
        source_id = make_document(page_count=4)
        destination_id = make_document(page_count=1)
        ids = client.documents.get_document(session_id, source_id).page_ids

        client.pages.delete_pages(session_id, source_id, [0])
        client.pages.move_pages_by_id(session_id, source_id, destination_id, [ids[3], ids[1]], 0)

        destination = client.documents.get_document(session_id, destination_id)
        assert destination.page_ids[:2] == [ids[3], ids[1]]
        assert client.documents.get_document(session_id, source_id).page_ids == [ids[2]]

    def test_move_by_unknown_id_rejected(self, client, session_id, make_document):
        source_id = make_document(page_count=1)
        destination_id = make_document(page_count=1)
        with pytest.raises(ValueError):
            client.pages.move_pages_by_id(session_id, source_id, destination_id, ["0" * 32])


class TestPageState:
    def test_delete_pages(self, client, session_id, make_document, page_images):
        document_id = make_document(page_count=3)

        client.pages.delete_pages(session_id, document_id, [0, 2])

        assert page_images(document_id) == [b"page-1"]

    def test_reject_pages(self, client, session_id, make_document):
        document_id = make_document(page_count=3)

        client.pages.reject_pages(session_id, document_id, [1], "Blank page")

        rejected = client.pages.get_rejected_pages(session_id, document_id)
        assert [(p.index, p.rejection_note) for p in rejected.pages] == [(1, "Blank page")]
        assert client.documents.get_document(session_id, document_id).pages[1].rejected is True

    def test_update_pages(self, client, session_id, make_document):
        document_id = make_document(page_count=2)

        client.pages.update_pages(
            session_id,
            document_id,
            [PageUpdate(index=1, sheet_id="Sheet7", is_front=False, width=850,
                        barcodes=[Barcode(value="12345", width=20, height=5)])]
        )

        page = client.documents.get_document(session_id, document_id).pages[1]
        assert page.sheet_id == "Sheet7"
        assert page.is_front is False
        assert page.width == 850
        assert page.barcodes == [Barcode(value="12345", width=20, height=5)]
        assert page.rotation == 0

    def test_page_update_without_changes_is_invalid(self):
        with pytest.raises(ValidationError):
            PageUpdate(index=0)

    def test_page_property_values(self, client, session_id, folders, image_files):
        from capture_samples.documents import create_document_with_pages

        document_id = create_document_with_pages(
            client, session_id, folders.child_folder1_id, image_files[0], image_files[1]
        )
        document = client.documents.get_document(session_id, document_id)

        properties = client.pages.get_page_property_values(
            session_id,
            document_id,
            [PagePropertiesIdentity(page_id=p.id, property_names=["SheetId", "IsFront", "PageIndex"])
             for p in document.pages]
        )

        assert [p.properties for p in properties] == [
            {"SheetId": "Sheet1", "IsFront": True, "PageIndex": 0},
            {"SheetId": "Sheet1", "IsFront": False, "PageIndex": 1},
        ]

    def test_page_text_extension(self, client, session_id, make_document):
        document_id = make_document(page_count=1)
        page_id = client.documents.get_document(session_id, document_id).pages[0].id

        client.pages.save_page_text_extension(session_id, document_id, page_id, "Ocr", "text")

        assert client.pages.get_page_text_extension(session_id, document_id, page_id, "Ocr") == "text"
        assert client.pages.get_page_text_extension(session_id, document_id, page_id, "Other") is None


class TestImagesAndRenditions:
    def test_save_and_get_image(self, client, session_id):
        saved = client.pages.save_page_image(session_id, b"image-bytes", batch_id="batch-1")

        assert saved.mime_type == "image/tiff"
        assert saved.size == len(b"image-bytes")
        image = client.pages.get_image(session_id, saved.image_id)
        assert image.image == b"image-bytes"
        assert image.image_format == "tif"
        assert (image.width, image.height) == (-1, -1)

    def test_empty_image_rejected_locally(self, client, session_id):
        with pytest.raises(ValueError):
            client.pages.save_page_image(session_id, b"")

    def test_unknown_image_faults(self, client, session_id):
        with pytest.raises(NotFoundFault):
            client.pages.get_image(session_id, "0" * 32)

    def test_source_image_from_rendition(self, client, session_id, make_document):
        document_id = make_document(page_count=2)
        page = client.documents.get_document(session_id, document_id).pages[0]

        client.pages.save_page_rendition(session_id, document_id, page.id, 1, "image/png", b"rendition-1")
        assert client.pages.get_page_rendition(session_id, document_id, page.id, 1) == b"rendition-1"

        client.pages.set_page_source_image_from_rendition(session_id, document_id, page.id, 1)

        updated = client.documents.get_document(session_id, document_id).pages[0]
        assert updated.image_id != page.image_id
        assert updated.mime_type == "image/png"
        assert client.pages.get_image(session_id, updated.image_id).image == b"rendition-1"

    def test_rendition_summaries(self, client, session_id, make_document):
        document_id = make_document(page_count=1)
        page_id = client.documents.get_document(session_id, document_id).pages[0].id
        client.pages.save_page_rendition(session_id, document_id, page_id, 2, "image/png", b"12345")

        summary = client.pages.get_page_summary(session_id, document_id, page_id)
        assert summary.rendition_numbers == [2]
        assert summary.index == 0

        image_summary = client.pages.get_page_rendition_image_summary(session_id, document_id, page_id, 2)
        assert image_summary.size == 5
        assert image_summary.mime_type == "image/png"

    def test_missing_rendition_faults(self, client, session_id, make_document):
        document_id = make_document(page_count=1)
        page_id = client.documents.get_document(session_id, document_id).pages[0].id
        with pytest.raises(NotFoundFault):
            client.pages.set_page_source_image_from_rendition(session_id, document_id, page_id, 1)
