"""
Folder Manager for the capture service.

This module provides the FolderManager class for creating, reading, moving,
splitting and deleting folders and for setting a folder's review status.

Sibling positions are zero-based; an insert index of -1 appends.
"""

import logging
from typing import Optional, Sequence, Union

from connection_management import ConnectionManager
from capture_models import Folder, FolderTypeRef, FieldUpdate, ReviewStatus
from field_operations.identity import is_field_id

logger = logging.getLogger(__name__)


def _folder_type_payload(folder_type: Union[str, FolderTypeRef, None]) -> Optional[dict]:
    if folder_type is None:
        return None
    if isinstance(folder_type, FolderTypeRef):
        return folder_type.model_dump()
    if is_field_id(folder_type):
        return {"id": folder_type.upper(), "name": None}
    return {"id": None, "name": folder_type}


class FolderManager:
    """
    Provides an interface for managing capture folders.

    Every method is a single remote call. Faults raised by the service
    (NotFoundFault, InvalidOperationFault) reach the caller unchanged.
    """

    def __init__(self, connection_manager: ConnectionManager):
        """
        Initialize the FolderManager.

        Args:
            connection_manager: The ConnectionManager used for remote calls
        """
        self._connection_manager = connection_manager

    def create_folder(
        self,
        session_id: str,
        name: Optional[str] = None,
        parent_id: Optional[str] = None,
        fields: Optional[Sequence[FieldUpdate]] = None,
        insert_index: int = -1,
        folder_type: Union[str, FolderTypeRef, None] = None
    ) -> str:
        """
        Create a folder.

        Args:
            session_id: Session token
            name: Optional folder name
            parent_id: Parent folder id; None creates a root folder
            fields: Initial field values, e.g. the Valid system field
            insert_index: Position among the parent's child folders, -1 appends
            folder_type: Folder type by name, id or FolderTypeRef

        Returns:
            The new folder's id

        Raises:
            NotFoundFault: If the parent folder or folder type does not exist
        """
        folder_id = self._connection_manager.call(
            "CreateFolder",
            session_id,
            name=name,
            parent_id=parent_id,
            fields=[f.model_dump() for f in fields or []],
            insert_index=insert_index,
            folder_type=_folder_type_payload(folder_type)
        )
        logger.info(f"Created folder '{folder_id}' under '{parent_id or '<root>'}' at index {insert_index}")
        return folder_id

    def create_online_learning_folder(self, session_id: str, max_document_samples: int) -> str:
        """Create a root folder that collects documents for online learning."""
        if max_document_samples < 1:
            raise ValueError("max_document_samples must be at least 1")
        folder_id = self._connection_manager.call(
            "CreateOnlineLearningFolder",
            session_id,
            max_document_samples=max_document_samples
        )
        logger.info(f"Created online learning folder '{folder_id}' (max samples {max_document_samples})")
        return folder_id

    def get_folder(self, session_id: str, folder_id: str) -> Folder:
        """Snapshot of a folder with its child folders and documents in sibling order."""
        return Folder.model_validate(
            self._connection_manager.call("GetFolder", session_id, folder_id=folder_id)
        )

    def delete_folder(self, session_id: str, folder_id: str, options=None, force: bool = False) -> None:
        """
        Delete a folder together with its child folders and documents.

        Raises:
            NotFoundFault: If the folder does not exist
        """
        self._connection_manager.call(
            "DeleteFolder", session_id, folder_id=folder_id, options=options, force=force
        )
        logger.info(f"Deleted folder '{folder_id}'")

    def move_folder(self, session_id: str, folder_id: str, new_parent_id: str, index: int) -> None:
        """
        Move a folder to position index under new_parent_id.

        Raises:
            InvalidOperationFault: If the move would change the folder's tree level
        """
        self._connection_manager.call(
            "MoveFolder", session_id, folder_id=folder_id, new_parent_id=new_parent_id, index=index
        )
        logger.info(f"Moved folder '{folder_id}' to '{new_parent_id}' at index {index}")

    def split_folder(self, session_id: str, folder_id: str, document_index: int) -> str:
        """
        Move the documents from document_index onwards into a new sibling folder.

        Returns:
            The new folder's id
        """
        new_folder_id = self._connection_manager.call(
            "SplitFolder", session_id, folder_id=folder_id, document_index=document_index
        )
        logger.info(f"Split folder '{folder_id}' at document {document_index} into '{new_folder_id}'")
        return new_folder_id

    def set_folder_status(
        self,
        session_id: str,
        folder_id: str,
        status: ReviewStatus,
        error_message: Optional[str] = None
    ) -> None:
        """Set the folder's review status; error_message goes with REVIEW_INVALID."""
        status = ReviewStatus(status)
        self._connection_manager.call(
            "SetFolderStatus",
            session_id,
            folder_id=folder_id,
            status=int(status),
            error_message=error_message
        )
        logger.info(f"Set status of folder '{folder_id}' to {status.name}")
