"""
Document Manager for the capture service.

This module provides the DocumentManager class: document creation (single,
multi-document and with pages), copy, move, split and merge, rejection,
classification, review status, source files and text extensions.

Split and merge are positional. After any structural call, previously
fetched Document snapshots are stale and page indexes must be re-read.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from connection_management import ConnectionManager
from capture_models import (
    CreatedDocumentIds,
    Document,
    DocumentDataInput,
    DocumentSourceFile,
    FieldProperties,
    FieldUpdate,
    LockedItemType,
    PageDataInput,
    ReviewStatus,
    SplitDocumentInfo
)
from utils.files import read_image_bytes

logger = logging.getLogger(__name__)


class DocumentManager:
    """
    Provides an interface for managing capture documents.

    Most methods are a single remote call; faults raised by the service reach
    the caller unchanged.
    """

    def __init__(self, connection_manager: ConnectionManager):
        """
        Initialize the DocumentManager.

        Args:
            connection_manager: The ConnectionManager used for remote calls
        """
        self._connection_manager = connection_manager

    @property
    def _default_mime_type(self) -> str:
        return self._connection_manager.config.images.default_mime_type

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create_document(
        self,
        session_id: str,
        name: Optional[str] = None,
        parent_id: Optional[str] = None,
        fields: Optional[Sequence[FieldUpdate]] = None,
        file_path: Union[str, Path, None] = None,
        insert_index: int = -1,
        document_type_id: Optional[str] = None,
        properties: Optional[Sequence[FieldProperties]] = None,
        mime_type: Optional[str] = None
    ) -> CreatedDocumentIds:
        """
        Create a document, optionally from a local source file.

        Args:
            session_id: Session token
            name: Optional document name
            parent_id: Owning folder; None makes the service create a new root folder
            fields: Initial field values
            file_path: Local source file; its bytes become the document's source
                       file and first page image
            insert_index: Position among the folder's documents, -1 appends
            document_type_id: Document type to assign
            properties: Initial field system properties
            mime_type: Mime type of the source file; defaults to
                       images.default_mime_type

        Returns:
            CreatedDocumentIds with the new document id and its folder id
        """
        source_file = None
        source_file_name = None
        if file_path is not None:
            source_file = read_image_bytes(file_path)
            source_file_name = Path(file_path).name
            mime_type = mime_type or self._default_mime_type

        result = self._connection_manager.call(
            "CreateDocument",
            session_id,
            name=name,
            parent_id=parent_id,
            fields=[f.model_dump() for f in fields or []],
            source_file=source_file,
            source_file_name=source_file_name,
            mime_type=mime_type,
            insert_index=insert_index,
            document_type_id=document_type_id,
            field_properties=[p.model_dump() for p in properties or []]
        )
        created = CreatedDocumentIds.model_validate(result)
        logger.info(f"Created document '{created.document_id}' in folder '{created.folder_id}'")
        return created

    def create_documents(
        self,
        session_id: str,
        parent_id: Optional[str],
        folder_fields: Optional[Sequence[FieldUpdate]],
        documents: Sequence[DocumentDataInput]
    ) -> List[CreatedDocumentIds]:
        """
        Create several documents in one folder with one call.

        folder_fields are written to the folder (the new root folder when
        parent_id is None). Documents are appended in the order given.
        """
        if not documents:
            raise ValueError("At least one document is required")
        results = self._connection_manager.call(
            "CreateDocuments",
            session_id,
            parent_id=parent_id,
            folder_fields=[f.model_dump() for f in folder_fields or []],
            documents=[d.model_dump() for d in documents]
        )
        created = [CreatedDocumentIds.model_validate(r) for r in results]
        logger.info(f"Created {len(created)} document(s) in folder '{created[0].folder_id}'")
        return created

    def create_document_with_pages(
        self,
        session_id: str,
        parent_id: Optional[str],
        folder_fields: Optional[Sequence[FieldUpdate]],
        document: DocumentDataInput,
        pages: Optional[Sequence[PageDataInput]] = None,
        insert_index: int = -1
    ) -> CreatedDocumentIds:
        """Create one document together with its pages."""
        result = self._connection_manager.call(
            "CreateDocumentWithPages",
            session_id,
            parent_id=parent_id,
            folder_fields=[f.model_dump() for f in folder_fields or []],
            document=document.model_dump(),
            pages=[p.model_dump() for p in pages or []],
            insert_index=insert_index
        )
        created = CreatedDocumentIds.model_validate(result)
        logger.info(
            f"Created document '{created.document_id}' with {len(pages or [])} page(s) "
            f"in folder '{created.folder_id}'"
        )
        return created

    # ------------------------------------------------------------------
    # Read / delete / move
    # ------------------------------------------------------------------

    def get_document(self, session_id: str, document_id: str) -> Document:
        """Snapshot of a document with its pages in order."""
        return Document.model_validate(
            self._connection_manager.call("GetDocument", session_id, document_id=document_id)
        )

    def delete_document(self, session_id: str, document_id: str, options=None, force: bool = False) -> None:
        self._connection_manager.call(
            "DeleteDocument", session_id, document_id=document_id, options=options, force=force
        )
        logger.info(f"Deleted document '{document_id}'")

    def delete_documents(self, session_id: str, document_ids: Sequence[str], options=None, force: bool = False) -> None:
        if not document_ids:
            raise ValueError("At least one document id is required")
        self._connection_manager.call(
            "DeleteDocuments", session_id, document_ids=list(document_ids), options=options, force=force
        )
        logger.info(f"Deleted {len(document_ids)} document(s)")

    def move_document(self, session_id: str, document_id: str, folder_id: str, index: int) -> None:
        """Move a document to position index in folder_id."""
        self._connection_manager.call(
            "MoveDocument", session_id, document_id=document_id, folder_id=folder_id, index=index
        )
        logger.info(f"Moved document '{document_id}' to folder '{folder_id}' at index {index}")

    # ------------------------------------------------------------------
    # Copy / split / merge
    # ------------------------------------------------------------------

    def copy_document(
        self,
        session_id: str,
        source_id: str,
        target_id: Optional[str] = None,
        field_names: Optional[Sequence[str]] = None,
        copy_mode: int = 2
    ) -> str:
        """
        Copy a document's type, properties and field data, without pages.

        Args:
            session_id: Session token
            source_id: Document to copy from
            target_id: Existing document to copy into; None creates a new one
            field_names: Fields to copy; empty or None copies all
            copy_mode: Service copy mode

        Returns:
            The id of the document that received the copy
        """
        new_id = self._connection_manager.call(
            "CopyDocument",
            session_id,
            source_id=source_id,
            target_id=target_id,
            field_names=list(field_names or []),
            copy_mode=copy_mode
        )
        logger.info(f"Copied document '{source_id}' into '{new_id}'")
        return new_id

    def copy_document_with_pages(self, session_id: str, document_id: str, insert_index: int = -1) -> str:
        """Copy a document including its pages into the same folder."""
        new_id = self._connection_manager.call(
            "CopyDocumentWithPages", session_id, document_id=document_id, insert_index=insert_index
        )
        logger.info(f"Copied document '{document_id}' with pages into '{new_id}'")
        return new_id

    def copy_document_field_values(self, session_id: str, source_id: str, destination_id: str) -> None:
        self._connection_manager.call(
            "CopyDocumentFieldValues", session_id, source_id=source_id, destination_id=destination_id
        )
        logger.info(f"Copied field values from document '{source_id}' to '{destination_id}'")

    def split_document(self, session_id: str, document_id: str, page_index: int) -> str:
        """
        Split a document so that page_index becomes the first page of a new document.

        Returns:
            The new document's id
        """
        new_id = self._connection_manager.call(
            "SplitDocument", session_id, document_id=document_id, page_index=page_index
        )
        logger.info(f"Split document '{document_id}' at page {page_index} into '{new_id}'")
        return new_id

    def split_document_and_classify(
        self,
        session_id: str,
        document_id: str,
        splits: Sequence[SplitDocumentInfo]
    ) -> List[CreatedDocumentIds]:
        """Split a document at several points and classify each new document."""
        if not splits:
            raise ValueError("At least one split point is required")
        results = self._connection_manager.call(
            "SplitDocumentAndClassify",
            session_id,
            document_id=document_id,
            splits=[s.model_dump() for s in splits]
        )
        created = [CreatedDocumentIds.model_validate(r) for r in results]
        logger.info(f"Split document '{document_id}' into {len(created)} new document(s)")
        return created

    def merge_documents(self, session_id: str, document_ids: Sequence[str]) -> str:
        """
        Merge documents into the first one, appending pages in list order.

        Returns:
            The id of the surviving (first) document
        """
        if len(document_ids) < 2:
            raise ValueError("At least two document ids are required for a merge")
        if len(set(document_ids)) != len(document_ids):
            raise ValueError(f"Document ids to merge must be distinct: {list(document_ids)}")
        self._connection_manager.call("MergeDocuments", session_id, document_ids=list(document_ids))
        logger.info(f"Merged {len(document_ids)} documents into '{document_ids[0]}'")
        return document_ids[0]

    # ------------------------------------------------------------------
    # Rejection, classification and status
    # ------------------------------------------------------------------

    def reject_document(self, session_id: str, document_id: str, reason: Optional[str] = None) -> None:
        self._connection_manager.call("RejectDocument", session_id, document_id=document_id, reason=reason)
        logger.info(f"Rejected document '{document_id}'")

    def unreject_documents(self, session_id: str, document_ids: Sequence[str]) -> None:
        if not document_ids:
            raise ValueError("At least one document id is required")
        self._connection_manager.call("UnrejectDocuments", session_id, document_ids=list(document_ids))
        logger.info(f"Unrejected {len(document_ids)} document(s)")

    def update_document_type(
        self,
        session_id: str,
        document_id: str,
        document_type_id: str,
        confidence: Optional[float] = None,
        classification_confident: Optional[bool] = None
    ) -> None:
        """
        Change a document's type, optionally recording classification confidence.

        Fields that exist in both the old and the new type keep their values.
        """
        if confidence is None and classification_confident is None:
            self._connection_manager.call(
                "UpdateDocumentType", session_id, document_id=document_id, document_type_id=document_type_id
            )
        else:
            if confidence is not None and not 0.0 <= confidence <= 1.0:
                raise ValueError("confidence must be between 0 and 1")
            self._connection_manager.call(
                "UpdateDocumentTypeWithConfidence",
                session_id,
                document_id=document_id,
                document_type_id=document_type_id,
                confidence_level=confidence,
                classification_confident=classification_confident
            )
        logger.info(f"Changed type of document '{document_id}' to '{document_type_id}'")

    def set_document_status(
        self,
        session_id: str,
        document_id: str,
        status: ReviewStatus,
        error_message: Optional[str] = None
    ) -> None:
        """Set the document's review status; error_message goes with REVIEW_INVALID."""
        status = ReviewStatus(status)
        self._connection_manager.call(
            "SetDocumentStatus",
            session_id,
            document_id=document_id,
            status=int(status),
            error_message=error_message
        )
        logger.info(f"Set status of document '{document_id}' to {status.name}")

    # ------------------------------------------------------------------
    # Source files and extensions
    # ------------------------------------------------------------------

    def get_source_file(self, session_id: str, document_id: str) -> DocumentSourceFile:
        return DocumentSourceFile.model_validate(
            self._connection_manager.call("GetSourceFile", session_id, document_id=document_id)
        )

    def update_source_file(
        self,
        session_id: str,
        document_id: str,
        source: Union[bytes, str, Path],
        mime_type: Optional[str] = None,
        file_name: Optional[str] = None
    ) -> None:
        """Replace the document's source file with bytes or the contents of a local file."""
        if isinstance(source, (str, Path)):
            file_name = file_name or Path(source).name
            source = read_image_bytes(source)
        self._connection_manager.call(
            "UpdateSourceFile",
            session_id,
            document_id=document_id,
            source_file=source,
            mime_type=mime_type,
            file_name=file_name
        )
        logger.info(f"Updated source file of document '{document_id}' ({len(source)} bytes)")

    def get_document_file(self, session_id: str, document_id: str, file_type: str) -> Optional[bytes]:
        """The document rendered as file_type (e.g. "pdf", "tif"), or None when unavailable."""
        return self._connection_manager.call(
            "GetDocumentFile", session_id, document_id=document_id, file_type=file_type
        )

    def save_text_extension(self, session_id: str, document_id: str, name: str, value: str) -> None:
        self._connection_manager.call(
            "SaveTextExtension", session_id, document_id=document_id, name=name, value=value
        )
        logger.debug(f"Saved text extension '{name}' on document '{document_id}'")

    def get_text_extension(self, session_id: str, document_id: str, name: str) -> Optional[str]:
        return self._connection_manager.call(
            "GetTextExtension", session_id, document_id=document_id, name=name
        )

    def delete_extension(self, session_id: str, document_id: str, name: str) -> None:
        self._connection_manager.call("DeleteExtension", session_id, document_id=document_id, name=name)
        logger.debug(f"Deleted extension '{name}' from document '{document_id}'")

    def force_unlock_item(self, session_id: str, item_id: str, item_type: LockedItemType) -> None:
        """Ask the service to release its lock on a document or folder."""
        item_type = LockedItemType(item_type)
        self._connection_manager.call(
            "ForceUnlockItem", session_id, item_id=item_id, item_type=int(item_type)
        )
        logger.info(f"Force-unlocked {item_type.name.lower()} '{item_id}'")
