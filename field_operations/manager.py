"""
Field Manager for capture folders and documents.

This module provides the FieldManager class, which reads and writes field
values, field system properties and field statuses on folders and
documents. Single and batch updates share one code path: a single update is
a batch of one.
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

from connection_management import ConnectionManager
from capture_models import (
    FieldOwnerKind,
    FieldStatus,
    FieldUpdate,
    FieldValue,
    FieldProperties,
    FieldAlternatives
)

from .identity import FieldRef, as_identity, resolve_field_identity, table_row_updates

logger = logging.getLogger(__name__)

_UPDATE_OPERATIONS = {
    FieldOwnerKind.FOLDER: "UpdateFolderFieldValues",
    FieldOwnerKind.DOCUMENT: "UpdateDocumentFieldValues",
}

_STATUS_OPERATIONS = {
    FieldOwnerKind.FOLDER: "SetFolderFieldStatus",
    FieldOwnerKind.DOCUMENT: "SetDocumentFieldStatus",
}


def _owner_key(owner_kind: FieldOwnerKind) -> str:
    return f"{FieldOwnerKind(owner_kind).value}_id"


class FieldManager:
    """
    Reads and writes fields of folders and documents.

    Fields are addressed by FieldIdentity or by an id-or-name token; see
    field_operations.identity for the resolution rule.
    """

    def __init__(self, connection_manager: ConnectionManager):
        """
        Initialize the FieldManager.

        Args:
            connection_manager: The ConnectionManager used for remote calls
        """
        self._connection_manager = connection_manager

    def update_field_values(
        self,
        session_id: str,
        owner_kind: FieldOwnerKind,
        owner_id: str,
        updates: Sequence[FieldUpdate]
    ) -> None:
        """
        Write several field values of one folder or document in a single call.

        Raises:
            ValueError: If updates is empty
            NotFoundFault: If the owner or one of the fields does not exist
        """
        if not updates:
            raise ValueError("At least one field update is required")
        owner_kind = FieldOwnerKind(owner_kind)

        self._connection_manager.call(
            _UPDATE_OPERATIONS[owner_kind],
            session_id,
            **{_owner_key(owner_kind): owner_id},
            fields=[update.model_dump() for update in updates]
        )
        logger.info(
            f"Updated {len(updates)} field(s) on {owner_kind.value} '{owner_id}': "
            f"{', '.join(u.identity.label for u in updates)}"
        )

    def update_field_value(
        self,
        session_id: str,
        owner_kind: FieldOwnerKind,
        owner_id: str,
        field: FieldRef,
        value: Any
    ) -> None:
        """Write one field value; a batch of one."""
        self.update_field_values(
            session_id, owner_kind, owner_id, [FieldUpdate(identity=as_identity(field), value=value)]
        )

    def update_document_field_values(self, session_id: str, document_id: str, updates: Sequence[FieldUpdate]) -> None:
        self.update_field_values(session_id, FieldOwnerKind.DOCUMENT, document_id, updates)

    def update_folder_field_values(self, session_id: str, folder_id: str, updates: Sequence[FieldUpdate]) -> None:
        self.update_field_values(session_id, FieldOwnerKind.FOLDER, folder_id, updates)

    def update_table_row(
        self,
        session_id: str,
        document_id: str,
        table_field: FieldRef,
        row_index: int,
        row: Mapping[Union[str, int], Any],
        columns: Optional[Sequence[str]] = None
    ) -> None:
        """Write one line item of a table field; see table_row_updates."""
        self.update_document_field_values(
            session_id, document_id, table_row_updates(table_field, row_index, row, columns)
        )

    def get_document_field_value(self, session_id: str, document_id: str, field: FieldRef) -> FieldValue:
        """Read one field (or table cell) of a document."""
        result = self._connection_manager.call(
            "GetDocumentFieldValue",
            session_id,
            document_id=document_id,
            identity=as_identity(field).model_dump()
        )
        return FieldValue.model_validate(result)

    def get_document_field_values(self, session_id: str, document_id: str, fields: Sequence[FieldRef]) -> List[FieldValue]:
        """Read several fields of a document, in the order given."""
        results = self._connection_manager.call(
            "GetDocumentFieldValues",
            session_id,
            document_id=document_id,
            identities=[as_identity(f).model_dump() for f in fields]
        )
        return [FieldValue.model_validate(r) for r in results]

    def get_folder_field_values(self, session_id: str, folder_id: str, fields: Sequence[FieldRef]) -> List[FieldValue]:
        """Read several fields of a folder, in the order given."""
        results = self._connection_manager.call(
            "GetFolderFieldValues",
            session_id,
            folder_id=folder_id,
            identities=[as_identity(f).model_dump() for f in fields]
        )
        return [FieldValue.model_validate(r) for r in results]

    def update_document_field_property_values(
        self,
        session_id: str,
        document_id: str,
        properties: Sequence[FieldProperties]
    ) -> None:
        """
        Write system properties (Value, ErrorDescription, ExtractionConfident,
        Width, ...) of document fields.
        """
        if not properties:
            raise ValueError("At least one FieldProperties entry is required")
        self._connection_manager.call(
            "UpdateDocumentFieldPropertyValues",
            session_id,
            document_id=document_id,
            field_properties=[p.model_dump() for p in properties]
        )
        logger.info(f"Updated properties of {len(properties)} field(s) on document '{document_id}'")

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
        """
        Set the status of one field.

        Args:
            session_id: Session token
            owner_id: Id of the folder or document that owns the field
            field: The field, by identity or id-or-name token
            status: New status
            error_message: Message stored with INVALID
            value: Value stored with CONFIRMED; for EXTRACTION_CONFIDENT the
                   boolean the extraction-confident flag is set to
            owner_kind: Whether owner_id is a folder or a document

        Raises:
            PreconditionFault: When requesting VERIFIED while the owner is not valid
        """
        status = FieldStatus(status)
        owner_kind = FieldOwnerKind(owner_kind)
        identity = as_identity(field)

        self._connection_manager.call(
            _STATUS_OPERATIONS[owner_kind],
            session_id,
            **{_owner_key(owner_kind): owner_id},
            identity=identity.model_dump(),
            status=int(status),
            error_message=error_message,
            value=value
        )
        logger.info(f"Set field '{identity.label}' on {owner_kind.value} '{owner_id}' to {status.name}")

    def insert_table_field_row(
        self,
        session_id: str,
        document_id: str,
        table_field: FieldRef,
        row_index: int = -1
    ) -> None:
        """Insert an empty row into a table field; -1 appends."""
        identity = as_identity(table_field)
        self._connection_manager.call(
            "InsertTableFieldRow",
            session_id,
            document_id=document_id,
            table_field=identity.model_dump(),
            row_index=row_index
        )
        logger.info(f"Inserted row at {row_index} into table field '{identity.label}' of document '{document_id}'")

    def get_document_field_alternatives(
        self,
        session_id: str,
        document_id: str,
        fields: Sequence[FieldRef],
        max_alternatives: int = 1
    ) -> List[FieldAlternatives]:
        """Alternative extraction results for the given fields."""
        if max_alternatives < 1:
            raise ValueError("max_alternatives must be at least 1")
        results = self._connection_manager.call(
            "GetDocumentFieldsAlternatives",
            session_id,
            document_id=document_id,
            identities=[as_identity(f).model_dump() for f in fields],
            max_alternatives=max_alternatives
        )
        return [FieldAlternatives.model_validate(r) for r in results]

    resolve_field_identity = staticmethod(resolve_field_identity)
    table_row_updates = staticmethod(table_row_updates)
