"""
Page Manager for the capture service.

This module provides the PageManager class: moving, deleting, rejecting and
updating pages, storing and reading page images and renditions, page text
extensions and page system property values.

Pages are addressed by their current zero-based index inside a document.
Indexes shift after every move, delete, split or merge, so callers re-fetch
the document before addressing pages again. move_pages_by_id does that
translation for callers that hold stable page ids.
"""

import logging
from typing import List, Optional, Sequence

from connection_management import ConnectionManager
from capture_models import (
    ImageData,
    ImageSummary,
    PageImageData,
    PageProperties,
    PagePropertiesIdentity,
    PageSummary,
    PageUpdate,
    RejectedPages,
    Document
)

logger = logging.getLogger(__name__)


class PageManager:
    """
    Provides an interface for managing pages, page images and renditions.
    """

    def __init__(self, connection_manager: ConnectionManager):
        """
        Initialize the PageManager.

        Args:
            connection_manager: The ConnectionManager used for remote calls
        """
        self._connection_manager = connection_manager

    @staticmethod
    def _require_indexes(page_indexes: Sequence[int]) -> List[int]:
        if not page_indexes:
            raise ValueError("At least one page index is required")
        return [int(i) for i in page_indexes]

    def move_pages(
        self,
        session_id: str,
        source_document_id: str,
        destination_document_id: str,
        page_indexes: Sequence[int],
        insert_index: int = -1
    ) -> None:
        """
        Move pages, by current index, to insert_index of the destination document.

        Source and destination may be the same document. insert_index is
        applied after the pages were taken out of the source; -1 appends.
        """
        indexes = self._require_indexes(page_indexes)
        self._connection_manager.call(
            "MovePages",
            session_id,
            source_document_id=source_document_id,
            destination_document_id=destination_document_id,
            page_indexes=indexes,
            insert_index=insert_index
        )
        logger.info(
            f"Moved pages {indexes} from document '{source_document_id}' "
            f"to '{destination_document_id}' at {insert_index}"
        )

    def move_pages_by_id(
        self,
        session_id: str,
        source_document_id: str,
        destination_document_id: str,
        page_ids: Sequence[str],
        insert_index: int = -1
    ) -> None:
        """
        Move pages given by stable id.

        Fetches the source document, translates the ids to their current
        indexes and then calls move_pages.

        Raises:
            ValueError: If a page id is not in the source document
        """
        if not page_ids:
            raise ValueError("At least one page id is required")
        source = Document.model_validate(
            self._connection_manager.call("GetDocument", session_id, document_id=source_document_id)
        )
        indexes = []
        for page_id in page_ids:
            index = source.page_index(page_id)
            if index < 0:
                raise ValueError(f"Page '{page_id}' is not in document '{source_document_id}'")
            indexes.append(index)
        self.move_pages(session_id, source_document_id, destination_document_id, indexes, insert_index)

    def delete_pages(self, session_id: str, document_id: str, page_indexes: Sequence[int]) -> None:
        indexes = self._require_indexes(page_indexes)
        self._connection_manager.call("DeletePages", session_id, document_id=document_id, page_indexes=indexes)
        logger.info(f"Deleted pages {indexes} from document '{document_id}'")

    def reject_pages(
        self,
        session_id: str,
        document_id: str,
        page_indexes: Sequence[int],
        reason: Optional[str] = None
    ) -> None:
        indexes = self._require_indexes(page_indexes)
        self._connection_manager.call(
            "RejectPages", session_id, document_id=document_id, page_indexes=indexes, reason=reason
        )
        logger.info(f"Rejected pages {indexes} of document '{document_id}'")

    def get_rejected_pages(self, session_id: str, document_id: str) -> RejectedPages:
        return RejectedPages.model_validate(
            self._connection_manager.call("GetRejectedPages", session_id, document_id=document_id)
        )

    def update_pages(self, session_id: str, document_id: str, pages: Sequence[PageUpdate]) -> None:
        """Update page properties; properties left as None are unchanged."""
        if not pages:
            raise ValueError("At least one page update is required")
        self._connection_manager.call(
            "UpdatePages",
            session_id,
            document_id=document_id,
            pages=[{"index": p.index, **p.changes()} for p in pages]
        )
        logger.info(f"Updated {len(pages)} page(s) of document '{document_id}'")

    # ------------------------------------------------------------------
    # Images and renditions
    # ------------------------------------------------------------------

    def save_page_image(
        self,
        session_id: str,
        image_bytes: bytes,
        mime_type: Optional[str] = None,
        batch_id: str = ""
    ) -> PageImageData:
        """Store a page image and return its id."""
        if not image_bytes:
            raise ValueError("image_bytes must not be empty")
        mime_type = mime_type or self._connection_manager.config.images.default_mime_type
        result = PageImageData.model_validate(
            self._connection_manager.call(
                "SavePageImage", session_id, image=image_bytes, mime_type=mime_type, batch_id=batch_id
            )
        )
        logger.info(f"Saved page image '{result.image_id}' ({len(image_bytes)} bytes, {mime_type})")
        return result

    def get_image(
        self,
        session_id: str,
        image_id: str,
        width: int = -1,
        height: int = -1,
        image_format: Optional[str] = None
    ) -> ImageData:
        """
        Fetch a stored image.

        width and height of -1 keep the native size; image_format defaults to
        images.default_image_format.
        """
        image_format = image_format or self._connection_manager.config.images.default_image_format
        return ImageData.model_validate(
            self._connection_manager.call(
                "GetImage",
                session_id,
                image_id=image_id,
                width=width,
                height=height,
                image_format=str(getattr(image_format, "value", image_format))
            )
        )

    def save_page_rendition(
        self,
        session_id: str,
        document_id: str,
        page_id: str,
        rendition_number: int,
        mime_type: str,
        image_bytes: bytes
    ) -> None:
        """Store image_bytes as rendition rendition_number of a page."""
        if not image_bytes:
            raise ValueError("image_bytes must not be empty")
        self._connection_manager.call(
            "SavePageRendition",
            session_id,
            document_id=document_id,
            page_id=page_id,
            rendition_number=rendition_number,
            mime_type=mime_type,
            image=image_bytes
        )
        logger.info(f"Saved rendition {rendition_number} of page '{page_id}' ({len(image_bytes)} bytes)")

    def get_page_rendition(self, session_id: str, document_id: str, page_id: str, rendition_number: int) -> bytes:
        return self._connection_manager.call(
            "GetPageRendition",
            session_id,
            document_id=document_id,
            page_id=page_id,
            rendition_number=rendition_number
        )

    def set_page_source_image_from_rendition(
        self,
        session_id: str,
        document_id: str,
        page_id: str,
        rendition_number: int
    ) -> None:
        """Replace the page's source image with one of its renditions."""
        self._connection_manager.call(
            "SetPageSourceImageFromRendition",
            session_id,
            document_id=document_id,
            page_id=page_id,
            rendition_number=rendition_number
        )
        logger.info(f"Set source image of page '{page_id}' from rendition {rendition_number}")

    def get_page_summary(self, session_id: str, document_id: str, page_id: str) -> PageSummary:
        return PageSummary.model_validate(
            self._connection_manager.call("GetPageSummary", session_id, document_id=document_id, page_id=page_id)
        )

    def get_page_rendition_image_summary(
        self,
        session_id: str,
        document_id: str,
        page_id: str,
        rendition_number: int
    ) -> ImageSummary:
        return ImageSummary.model_validate(
            self._connection_manager.call(
                "GetPageRenditionImageSummary",
                session_id,
                document_id=document_id,
                page_id=page_id,
                rendition_number=rendition_number
            )
        )

    # ------------------------------------------------------------------
    # Text extensions and properties
    # ------------------------------------------------------------------

    def save_page_text_extension(self, session_id: str, document_id: str, page_id: str, name: str, value: str) -> None:
        self._connection_manager.call(
            "SavePageTextExtension",
            session_id,
            document_id=document_id,
            page_id=page_id,
            name=name,
            value=value
        )
        logger.debug(f"Saved text extension '{name}' on page '{page_id}'")

    def get_page_text_extension(self, session_id: str, document_id: str, page_id: str, name: str) -> Optional[str]:
        return self._connection_manager.call(
            "GetPageTextExtension",
            session_id,
            document_id=document_id,
            page_id=page_id,
            name=name
        )

    def get_page_property_values(
        self,
        session_id: str,
        document_id: str,
        requests: Sequence[PagePropertiesIdentity]
    ) -> List[PageProperties]:
        """
        Read page system properties (SheetId, IsFront, PageIndex, ...) by name or id.

        Returns one PageProperties per request, keyed by property name.
        """
        if not requests:
            raise ValueError("At least one page properties request is required")
        results = self._connection_manager.call(
            "GetPagePropertyValues",
            session_id,
            document_id=document_id,
            requests=[r.model_dump() for r in requests]
        )
        return [PageProperties.model_validate(r) for r in results]
