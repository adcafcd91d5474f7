"""
Capture Client

This module provides the main client interface for capture operations,
integrating all the functionality from the submodules.
"""

from typing import Any, Callable, Optional, Sequence, Tuple, Type, Union
import logging
from pathlib import Path

from config import CaptureSettings, load_settings
from capture_ops_exceptions import ConfigurationError, RemoteFault
from capture_models import (
    CreatedDocumentIds,
    FieldOwnerKind,
    FieldProperties,
    FieldStatus,
    FieldUpdate,
    FolderTypeRef,
    OperationResult,
    ValidationResult
)
from connection_management import ConnectionManager, CaptureTransport
from folder_operations import FolderManager
from document_operations import DocumentManager
from page_operations import PageManager
from field_operations import FieldManager
from field_operations.identity import FieldRef
from validation_operations import ValidationManager
from catalog_operations import CatalogManager

# Logger setup
logger = logging.getLogger(__name__)


class CaptureClient:
    """
    Main client interface for capture operations.

    The managers are available as attributes (folders, documents, pages,
    fields, validation, catalog). The most common operations are also
    exposed directly on the client and delegate to them.
    """

    def __init__(
        self,
        config: Optional[Union[CaptureSettings, str, Path]] = None,
        transport: Optional[CaptureTransport] = None
    ):
        """
        Initialize the capture client.

        Args:
            config: Either a CaptureSettings object or a path to a config YAML file.
                   If None, default configuration will be used.
            transport: Transport override, mainly for tests. If None, the
                      ConnectionManager picks one from the configuration.
        """
        # Load configuration
        if config is None:
            self.config = load_settings()
        elif isinstance(config, (str, Path)):
            self.config = load_settings(str(config))
        elif isinstance(config, CaptureSettings):
            self.config = config
        else:
            raise ConfigurationError("Invalid configuration type. Expected CaptureSettings, str, Path, or None.")

        self.connection_manager = ConnectionManager(config=self.config, transport=transport)

        self.folders = FolderManager(self.connection_manager)
        self.documents = DocumentManager(self.connection_manager)
        self.pages = PageManager(self.connection_manager)
        self.fields = FieldManager(self.connection_manager)
        self.validation = ValidationManager(self.connection_manager)
        self.catalog = CatalogManager(self.connection_manager)

        logger.info("CaptureClient initialized successfully")

    # ------------------------------------------------------------------
    # Folder operations
    # ------------------------------------------------------------------

    def create_folder(
        self,
        session_id: str,
        name: Optional[str] = None,
        parent_id: Optional[str] = None,
        fields: Optional[Sequence[FieldUpdate]] = None,
        insert_index: int = -1,
        folder_type: Union[str, FolderTypeRef, None] = None
    ) -> str:
        return self.folders.create_folder(session_id, name, parent_id, fields, insert_index, folder_type)

    def delete_folder(self, session_id: str, folder_id: str, options=None, force: bool = False) -> None:
        self.folders.delete_folder(session_id, folder_id, options, force)

    def move_folder(self, session_id: str, folder_id: str, new_parent_id: str, index: int) -> None:
        self.folders.move_folder(session_id, folder_id, new_parent_id, index)

    def split_folder(self, session_id: str, folder_id: str, document_index: int) -> str:
        return self.folders.split_folder(session_id, folder_id, document_index)

    # ------------------------------------------------------------------
    # Document and page operations
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
        properties: Optional[Sequence[FieldProperties]] = None
    ) -> CreatedDocumentIds:
        return self.documents.create_document(
            session_id,
            name=name,
            parent_id=parent_id,
            fields=fields,
            file_path=file_path,
            insert_index=insert_index,
            document_type_id=document_type_id,
            properties=properties
        )

    def split_document(self, session_id: str, document_id: str, page_index: int) -> str:
        return self.documents.split_document(session_id, document_id, page_index)

    def merge_documents(self, session_id: str, document_ids: Sequence[str]) -> str:
        return self.documents.merge_documents(session_id, document_ids)

    def move_pages(
        self,
        session_id: str,
        source_document_id: str,
        destination_document_id: str,
        page_indexes: Sequence[int],
        insert_index: int = -1
    ) -> None:
        self.pages.move_pages(session_id, source_document_id, destination_document_id, page_indexes, insert_index)

    # ------------------------------------------------------------------
    # Fields and validation
    # ------------------------------------------------------------------

    def set_field_status(
        self,
        session_id: str,
        owner_id: str,
        field: FieldRef,
        status: FieldStatus,
        error_message: Optional[str] = None,
        value: Any = None,
        owner_kind: FieldOwnerKind = FieldOwnerKind.DOCUMENT
    ) -> None:
        self.fields.set_field_status(session_id, owner_id, field, status, error_message, value, owner_kind)

    def validate_document(self, session_id: str, document_id: str) -> bool:
        return self.validation.validate_document(session_id, document_id)

    def validate_document_field(self, session_id: str, document_type_id: str, name: FieldRef, value: Any) -> ValidationResult:
        return self.validation.validate_document_field(session_id, document_type_id, name, value)

    # ------------------------------------------------------------------
    # Expected faults
    # ------------------------------------------------------------------

    def attempt(
        self,
        operation: Callable[..., Any],
        *args: Any,
        expected: Tuple[Type[RemoteFault], ...] = (RemoteFault,),
        **kwargs: Any
    ) -> OperationResult:
        """
        Run one call and return its outcome instead of raising an expected fault.

        Args:
            operation: Bound method to call, e.g. client.move_folder
            *args: Positional arguments for the call
            expected: Fault types that become a failed OperationResult
            **kwargs: Keyword arguments for the call

        Returns:
            OperationResult with ok=True and the value, or ok=False and the fault

        Raises:
            Any exception that is not one of the expected types

        Example:
            >>> result = client.attempt(client.move_folder, session_id, child_id, sibling_id, 0,
            ...                         expected=(InvalidOperationFault,))
            >>> result.ok
            False
        """
        name = getattr(operation, "__name__", repr(operation))
        try:
            value = operation(*args, **kwargs)
        except expected as fault:
            logger.info(f"{name} failed as expected: {type(fault).__name__}: {fault}")
            return OperationResult(operation=name, ok=False, error=fault)
        return OperationResult(operation=name, ok=True, value=value)

    def close(self):
        """Close the client and release all resources"""
        self.connection_manager.close()
        logger.info("CaptureClient connection closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
