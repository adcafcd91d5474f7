"""
Page sample workflows: moving pages, renditions, images, page properties
and page text extensions.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from capture_models import (
    ALL_PAGE_PROPERTY_NAMES,
    Barcode,
    Document,
    PageImageData,
    PageProperties,
    PagePropertiesIdentity,
    PageUpdate,
    PageSummary,
    ImageSummary,
    RejectedPages
)
from utils.files import read_image_bytes

logger = logging.getLogger(__name__)

SAMPLE_BARCODE_VALUE = "Sample Barcode"
SAMPLE_TEXT_EXTENSION_VALUE = "A value to store."
SAMPLE_RENDITION_NUMBER = 1
SAMPLE_RENDITION_MIME_TYPE = "image/tif"


def _first_page_id(document: Document) -> str:
    if not document.pages:
        raise ValueError(f"The document with an id of {document.id} does not contain any pages.")
    return document.pages[0].id


def move_pages(client, session_id: str, document_id1: str, page_indexes: Sequence[int], document_id2: str) -> None:
    """
    Move pages to the front of a second document, then to its end.

    Page indexes are positional, so the second document is re-read before
    the moved pages are addressed again.
    """
    client.move_pages(session_id, document_id1, document_id2, page_indexes, 0)

    document2 = client.documents.get_document(session_id, document_id2)
    moved = list(range(len(page_indexes)))
    client.move_pages(session_id, document_id2, document_id2, moved, len(document2.pages) - 1)


def delete_pages(client, session_id: str, document_id: str, page_indexes: Sequence[int]) -> None:
    client.pages.delete_pages(session_id, document_id, page_indexes)


def reject_pages(client, session_id: str, document_id: str, page_indexes: Sequence[int], reason: str) -> None:
    client.pages.reject_pages(session_id, document_id, page_indexes, reason)


def get_rejected_pages(client, session_id: str, document_id: str) -> RejectedPages:
    return client.pages.get_rejected_pages(session_id, document_id)


def save_page_image(
    client,
    session_id: str,
    batch_id: str,
    file_path: Union[str, Path],
    mime_type: Optional[str] = None
) -> PageImageData:
    return client.pages.save_page_image(session_id, read_image_bytes(file_path), mime_type, batch_id)


def set_page_source_image_from_rendition(client, session_id: str, document_id: str, file_path: Union[str, Path]) -> None:
    """Store a file as rendition 1 of the first page and make it the page's source image."""
    document = client.documents.get_document(session_id, document_id)
    page_id = _first_page_id(document)
    client.pages.save_page_rendition(
        session_id,
        document_id,
        page_id,
        SAMPLE_RENDITION_NUMBER,
        SAMPLE_RENDITION_MIME_TYPE,
        read_image_bytes(file_path)
    )
    client.pages.set_page_source_image_from_rendition(session_id, document_id, page_id, SAMPLE_RENDITION_NUMBER)


def update_pages(
    client,
    session_id: str,
    document_id: str,
    page_index: int,
    sheet_id: str,
    width: int,
    barcode_width: int,
    barcode_height: int
) -> None:
    """Set sheet, side, rotation, width and a barcode on one page."""
    client.pages.update_pages(
        session_id,
        document_id,
        [
            PageUpdate(
                index=page_index,
                sheet_id=sheet_id,
                is_front=True,
                rotation=0,
                width=width,
                barcodes=[Barcode(value=SAMPLE_BARCODE_VALUE, width=barcode_width, height=barcode_height)]
            )
        ]
    )


def get_image_length(client, session_id: str, document_id: str) -> int:
    """Size in bytes of the first page's image, fetched at native size as TIFF."""
    document = client.documents.get_document(session_id, document_id)
    _first_page_id(document)
    image = client.pages.get_image(session_id, document.pages[0].image_id, -1, -1, "tif")
    return len(image.image)


def get_page_rendition_length(client, session_id: str, document_id: str) -> int:
    document = client.documents.get_document(session_id, document_id)
    page_id = _first_page_id(document)
    return len(client.pages.get_page_rendition(session_id, document_id, page_id, SAMPLE_RENDITION_NUMBER))


def get_page_text_extension(client, session_id: str, document_id: str, name: str) -> Optional[str]:
    """Store a text extension on the first page and read it back."""
    document = client.documents.get_document(session_id, document_id)
    page_id = _first_page_id(document)
    client.pages.save_page_text_extension(session_id, document_id, page_id, name, SAMPLE_TEXT_EXTENSION_VALUE)
    return client.pages.get_page_text_extension(session_id, document_id, page_id, name)


def get_page_summary(client, session_id: str, document_id: str, page_id: str) -> PageSummary:
    return client.pages.get_page_summary(session_id, document_id, page_id)


def get_page_rendition_image_summary(
    client,
    session_id: str,
    document_id: str,
    page_id: str,
    rendition_number: int
) -> ImageSummary:
    return client.pages.get_page_rendition_image_summary(session_id, document_id, page_id, rendition_number)


def get_page_property_values(client, session_id: str, document_id: str) -> List[PageProperties]:
    """Read every known page system property of every page of a document."""
    document = client.documents.get_document(session_id, document_id)
    requests = [
        PagePropertiesIdentity(page_id=page.id, property_names=list(ALL_PAGE_PROPERTY_NAMES))
        for page in document.pages
    ]
    if not requests:
        return []
    properties = client.pages.get_page_property_values(session_id, document_id, requests)
    for page_properties in properties:
        logger.debug(
            f"Page '{page_properties.page_id}': sheet {page_properties.properties.get('SheetId')!r}, "
            f"front {page_properties.properties.get('IsFront')!r}"
        )
    return properties
