"""
Mock Capture Backend

In-memory stand-in for the remote capture service. It keeps a folder tree
with documents and pages and enforces the service-side rules the client
relies on:

- folders can only move between parents on the same tree level
- a field can only be Verified while its owner is Valid
- pages and siblings are addressed by position; insert index -1 appends
- split and merge keep page order, merge keeps the first document
- renditions are stored per page and rendition number
- document creation and deletion check their input before changing the tree

It is the transport behind the test-suite and behind the usage examples when
no service URL is configured. Validation rules are deliberately simple; the
real service owns the actual rule sets.
"""

import copy
import logging
import re
import uuid
from typing import Any, Dict, List, Optional

from capture_ops_exceptions import (
    RemoteFault,
    NotFoundFault,
    InvalidOperationFault,
    PreconditionFault
)
from capture_models.fields import (
    VALID_FIELD_ID,
    REVIEW_VALID_FIELD_ID,
    FieldStatus,
    ReviewStatus
)
from capture_models.entities import LockedItemType
from capture_models.properties import page_property_name, field_property_name
from .connection_exceptions import SessionAuthenticationError
from .transport import CaptureTransport

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')

SYSTEM_FIELDS = [
    {"id": VALID_FIELD_ID, "name": "Valid"},
    {"id": REVIEW_VALID_FIELD_ID, "name": "ReviewValid"},
]

LINE_ITEM_COLUMNS = ["Quantity", "Item", "Unit Price", "Amount"]

# Page property name -> key of the page record
_PAGE_ATTRIBUTES = {
    "SheetId": "sheet_id",
    "IsFront": "is_front",
    "RotationType": "rotation",
    "Width": "width",
    "Height": "height",
    "Barcodes": "barcodes",
    "IsRejected": "rejected",
    "RejectionNote": "rejection_note",
    "MimeType": "mime_type",
    "ImageId": "image_id",
    "InstanceId": "instance_id",
}


def _new_id() -> str:
    return uuid.uuid4().hex.upper()


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def _insert(items: list, item: Any, index: Optional[int]) -> None:
    """Insert at index; -1 or any index past the end appends."""
    if index is None or index < 0 or index >= len(items):
        items.append(item)
    else:
        items.insert(index, item)


class MockCaptureBackend:
    """
    In-memory capture service.

    Every public entry point goes through handle(), which checks the session
    and dispatches "OperationName" to the matching _op_operation_name method.
    Results are plain Python data; MockTransport copies them on the way out.
    """

    def __init__(self, valid_sessions: Optional[List[str]] = None):
        """
        Args:
            valid_sessions: When given, only these session ids are accepted.
                            Otherwise any non-empty session id is.
        """
        self._valid_sessions = set(valid_sessions) if valid_sessions is not None else None
        self._folders: Dict[str, Dict[str, Any]] = {}
        self._documents: Dict[str, Dict[str, Any]] = {}
        self._pages: Dict[str, Dict[str, Any]] = {}
        self._images: Dict[str, Dict[str, Any]] = {}
        self._categories: Dict[str, Dict[str, Any]] = {}
        self._groups: Dict[str, Dict[str, Any]] = {}
        self._document_types: Dict[str, Dict[str, Any]] = {}
        self._folder_types: Dict[str, Dict[str, Any]] = {}
        self.calls: List[str] = []
        self._seed_catalog()
        logger.info("MockCaptureBackend initialized")

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def handle(self, operation: str, session_id: str, payload: Dict[str, Any]) -> Any:
        """Run one operation against the in-memory state."""
        if not session_id:
            raise SessionAuthenticationError("A session id is required")
        if self._valid_sessions is not None and session_id not in self._valid_sessions:
            raise SessionAuthenticationError(f"Unknown session '{session_id}'")

        handler = getattr(self, "_op_" + _CAMEL_BOUNDARY.sub("_", operation).lower(), None)
        if handler is None:
            raise RemoteFault(f"Unknown operation '{operation}'", operation=operation)

        self.calls.append(operation)
        try:
            return handler(**payload)
        except RemoteFault as fault:
            if fault.operation is None:
                fault.operation = operation
            raise

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def _seed_catalog(self) -> None:
        category = {"id": _new_id(), "name": "SDK Samples", "level": 2}
        self._categories[category["id"]] = category
        group = {"id": _new_id(), "name": "SDK Samples Group", "category_id": category["id"]}
        self._groups[group["id"]] = group

        for type_name in ("NW Form", "TS Form"):
            doc_type = {
                "id": _new_id(),
                "name": type_name,
                "version": 1,
                "classification_group_id": group["id"],
                "fields": [
                    {"id": _new_id(), "name": "CustomerName", "required": True},
                    {"id": _new_id(), "name": "Address"},
                    {"id": _new_id(), "name": "LineItems", "columns": list(LINE_ITEM_COLUMNS),
                     "numeric_columns": ["Quantity", "Unit Price", "Amount"]},
                ],
            }
            self._document_types[doc_type["id"]] = doc_type

        folder_type = {
            "id": _new_id(),
            "name": "SDKSample",
            "fields": [
                {"id": _new_id(), "name": "Region"},
                {"id": _new_id(), "name": "Notes"},
            ],
        }
        self._folder_types[folder_type["id"]] = folder_type

    def _op_get_categories(self, level: int = 2) -> List[Dict[str, Any]]:
        return [dict(c) for c in self._categories.values() if c["level"] == level]

    def _op_get_classification_groups(self, category_id: str) -> List[Dict[str, Any]]:
        if category_id not in self._categories:
            raise NotFoundFault(f"Category '{category_id}' not found")
        return [dict(g) for g in self._groups.values() if g["category_id"] == category_id]

    def _op_get_document_types(self, classification_group_id: str) -> List[Dict[str, Any]]:
        if classification_group_id not in self._groups:
            raise NotFoundFault(f"Classification group '{classification_group_id}' not found")
        return [
            {
                "id": t["id"],
                "name": t["name"],
                "version": t["version"],
                "classification_group_id": t["classification_group_id"],
                "field_names": [f["name"] for f in t["fields"]],
            }
            for t in self._document_types.values()
            if t["classification_group_id"] == classification_group_id
        ]

    def _document_type(self, document_type_id: str) -> Dict[str, Any]:
        try:
            return self._document_types[document_type_id]
        except KeyError:
            raise NotFoundFault(f"Document type '{document_type_id}' not found") from None

    def _folder_type(self, reference: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if not reference:
            return None
        for folder_type in self._folder_types.values():
            if reference.get("id") == folder_type["id"] or reference.get("name") == folder_type["name"]:
                return folder_type
        raise NotFoundFault(f"Folder type '{reference.get('name') or reference.get('id')}' not found")

    # ------------------------------------------------------------------
    # Field records
    # ------------------------------------------------------------------

    @staticmethod
    def _field_record(definition: Dict[str, Any]) -> Dict[str, Any]:
        columns = definition.get("columns")
        return {
            "id": definition["id"],
            "name": definition["name"],
            "value": False if definition["id"] in (VALID_FIELD_ID, REVIEW_VALID_FIELD_ID) else None,
            "status": int(FieldStatus.INVALID),
            "error_message": None,
            "extraction_confident": False,
            "properties": {},
            "columns": list(columns) if columns else None,
            "rows": [],
            "definition": definition,
        }

    def _build_fields(self, definitions: List[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
        fields = {}
        for definition in SYSTEM_FIELDS + list(definitions):
            fields[definition["name"]] = self._field_record(definition)
        return fields

    @staticmethod
    def _find_field(owner: Dict[str, Any], identity: Dict[str, Any]) -> Dict[str, Any]:
        field_id = (identity.get("id") or "").upper()
        name = identity.get("name") or ""
        for record in owner["fields"].values():
            if field_id and record["id"] == field_id:
                return record
            if name and (record["name"] == name or record["id"] == name.upper()):
                return record
        raise NotFoundFault(f"Field '{name or field_id}' not found on '{owner['id']}'")

    @staticmethod
    def _check_cell(record: Dict[str, Any], row: int, column: int) -> None:
        if record["columns"] is None:
            raise InvalidOperationFault(f"Field '{record['name']}' is not a table field")
        if row >= len(record["rows"]):
            raise NotFoundFault(f"Row {row} does not exist in table field '{record['name']}'")
        if column >= len(record["columns"]):
            raise NotFoundFault(f"Column {column} does not exist in table field '{record['name']}'")

    def _write_field(self, owner: Dict[str, Any], identity: Dict[str, Any], value: Any) -> None:
        record = self._find_field(owner, identity)
        row = identity.get("table_row", -1)
        column = identity.get("table_column", -1)
        if row >= 0:
            self._check_cell(record, row, column)
            record["rows"][row][column] = value
            return
        if record["columns"] is not None:
            raise InvalidOperationFault(f"Table field '{record['name']}' is written one cell at a time")
        if record["id"] in (VALID_FIELD_ID, REVIEW_VALID_FIELD_ID):
            value = _as_bool(value)
        record["value"] = value

    def _write_fields(self, owner: Dict[str, Any], updates: Optional[List[Dict[str, Any]]]) -> None:
        for update in updates or []:
            self._write_field(owner, update["identity"], update.get("value"))

    def _write_properties(self, owner: Dict[str, Any], field_properties: Optional[List[Dict[str, Any]]]) -> None:
        for entry in field_properties or []:
            identity = entry["identity"]
            record = self._find_field(owner, identity)
            for prop in entry.get("properties", []):
                name = field_property_name(prop["name"])
                value = prop.get("value")
                if name == "Value":
                    self._write_field(owner, identity, value)
                elif name == "ErrorDescription":
                    record["error_message"] = value
                elif name == "ExtractionConfident":
                    record["extraction_confident"] = _as_bool(value)
                else:
                    record["properties"][name] = value

    @staticmethod
    def _field_snapshot(record: Dict[str, Any], row: int = -1, column: int = -1) -> Dict[str, Any]:
        if row >= 0:
            value = record["rows"][row][column]
        elif record["columns"] is not None:
            value = [dict(zip(record["columns"], r)) for r in record["rows"]]
        else:
            value = record["value"]
        return {
            "identity": {
                "id": record["id"],
                "name": record["name"],
                "table_row": row,
                "table_column": column,
            },
            "value": value,
            "status": record["status"],
            "error_message": record["error_message"],
            "extraction_confident": record["extraction_confident"],
        }

    def _read_field(self, owner: Dict[str, Any], identity: Dict[str, Any]) -> Dict[str, Any]:
        record = self._find_field(owner, identity)
        row = identity.get("table_row", -1)
        column = identity.get("table_column", -1)
        if row >= 0:
            self._check_cell(record, row, column)
        return self._field_snapshot(record, row, column)

    @staticmethod
    def _is_valid(owner: Dict[str, Any]) -> bool:
        return _as_bool(owner["fields"]["Valid"]["value"])

    def _set_field_status(
        self,
        owner: Dict[str, Any],
        identity: Dict[str, Any],
        status: int,
        error_message: Optional[str],
        value: Any
    ) -> None:
        try:
            status = FieldStatus(status)
        except ValueError:
            raise InvalidOperationFault(f"Unknown field status {status}") from None

        record = self._find_field(owner, identity)
        if status == FieldStatus.EXTRACTION_CONFIDENT:
            record["extraction_confident"] = _as_bool(value)
            return
        if status == FieldStatus.VERIFIED and not self._is_valid(owner):
            raise PreconditionFault(
                f"Field '{record['name']}' cannot be verified while '{owner['id']}' is not valid"
            )

        record["status"] = int(status)
        if status == FieldStatus.INVALID:
            record["error_message"] = error_message
        else:
            record["error_message"] = None
        if status == FieldStatus.CONFIRMED and value is not None:
            self._write_field(owner, identity, value)

    def _set_review_status(self, owner: Dict[str, Any], status: int, error_message: Optional[str]) -> None:
        try:
            status = ReviewStatus(status)
        except ValueError:
            raise InvalidOperationFault(f"Unknown review status {status}") from None

        valid_field = owner["fields"]["Valid"]
        if status == ReviewStatus.REVIEW_INVALID:
            valid_field["value"] = False
            owner["error_message"] = error_message
        elif status == ReviewStatus.REVIEW_VALID:
            valid_field["value"] = True
            owner["error_message"] = None
        elif status == ReviewStatus.OVERRIDE:
            owner["override_valid"] = valid_field["value"]
            valid_field["value"] = True
        elif owner.get("override_valid") is not None:
            valid_field["value"] = owner["override_valid"]
            owner["override_valid"] = None
        owner["status"] = int(status)

    # ------------------------------------------------------------------
    # Folders
    # ------------------------------------------------------------------

    def _folder(self, folder_id: Optional[str]) -> Dict[str, Any]:
        try:
            return self._folders[folder_id]
        except KeyError:
            raise NotFoundFault(f"Folder '{folder_id}' not found") from None

    def _depth(self, folder_id: str) -> int:
        depth = 0
        parent_id = self._folder(folder_id)["parent_id"]
        while parent_id is not None:
            depth += 1
            parent_id = self._folders[parent_id]["parent_id"]
        return depth

    def _new_folder(
        self,
        parent_id: Optional[str],
        name: Optional[str] = None,
        folder_type: Optional[Dict[str, Any]] = None,
        insert_index: int = -1
    ) -> Dict[str, Any]:
        parent = self._folder(parent_id) if parent_id is not None else None
        definitions = folder_type["fields"] if folder_type else []
        folder = {
            "id": _new_id(),
            "parent_id": parent_id,
            "name": name,
            "folder_type_id": folder_type["id"] if folder_type else None,
            "folders": [],
            "documents": [],
            "fields": self._build_fields(definitions),
            "status": None,
            "error_message": None,
            "override_valid": None,
            "online_learning": False,
            "max_document_samples": None,
        }
        self._folders[folder["id"]] = folder
        if parent is not None:
            _insert(parent["folders"], folder["id"], insert_index)
        return folder

    def _folder_snapshot(self, folder: Dict[str, Any]) -> Dict[str, Any]:
        folder_type = self._folder_types.get(folder["folder_type_id"]) if folder["folder_type_id"] else None
        return {
            "id": folder["id"],
            "parent_id": folder["parent_id"],
            "name": folder["name"],
            "folder_type": {"id": folder_type["id"], "name": folder_type["name"]} if folder_type else None,
            "folders": [
                {"id": child_id, "name": self._folders[child_id]["name"]}
                for child_id in folder["folders"]
            ],
            "documents": [
                {
                    "id": doc_id,
                    "name": self._documents[doc_id]["name"],
                    "document_type_id": self._documents[doc_id]["document_type_id"],
                }
                for doc_id in folder["documents"]
            ],
            "fields": [self._field_snapshot(r) for r in folder["fields"].values()],
            "status": folder["status"],
            "valid": self._is_valid(folder),
            "online_learning": folder["online_learning"],
        }

    def _op_create_folder(
        self,
        name: Optional[str] = None,
        parent_id: Optional[str] = None,
        fields: Optional[List[Dict[str, Any]]] = None,
        insert_index: int = -1,
        folder_type: Optional[Dict[str, Any]] = None
    ) -> str:
        folder = self._new_folder(parent_id, name, self._folder_type(folder_type), insert_index)
        self._write_fields(folder, fields)
        return folder["id"]

    def _op_create_online_learning_folder(self, max_document_samples: int) -> str:
        if max_document_samples < 1:
            raise InvalidOperationFault("max_document_samples must be at least 1")
        folder = self._new_folder(None)
        folder["online_learning"] = True
        folder["max_document_samples"] = max_document_samples
        return folder["id"]

    def _op_get_folder(self, folder_id: str) -> Dict[str, Any]:
        return self._folder_snapshot(self._folder(folder_id))

    def _remove_folder(self, folder_id: str) -> None:
        folder = self._folders.pop(folder_id)
        for child_id in folder["folders"]:
            self._remove_folder(child_id)
        for doc_id in folder["documents"]:
            self._remove_document(doc_id)

    def _op_delete_folder(self, folder_id: str, options: Any = None, force: bool = False) -> None:
        folder = self._folder(folder_id)
        if folder["parent_id"] is not None:
            self._folders[folder["parent_id"]]["folders"].remove(folder_id)
        self._remove_folder(folder_id)

    def _op_move_folder(self, folder_id: str, new_parent_id: str, index: int) -> None:
        folder = self._folder(folder_id)
        new_parent = self._folder(new_parent_id)
        if self._depth(new_parent_id) + 1 != self._depth(folder_id):
            raise InvalidOperationFault(
                f"Folder '{folder_id}' cannot be moved to a different level of the folder tree"
            )
        self._folders[folder["parent_id"]]["folders"].remove(folder_id)
        _insert(new_parent["folders"], folder_id, index)
        folder["parent_id"] = new_parent_id

    def _op_split_folder(self, folder_id: str, document_index: int) -> str:
        folder = self._folder(folder_id)
        if not 0 < document_index < len(folder["documents"]):
            raise InvalidOperationFault(
                f"Cannot split folder '{folder_id}' at document index {document_index}"
            )
        folder_type = self._folder_types.get(folder["folder_type_id"]) if folder["folder_type_id"] else None
        new_folder = self._new_folder(folder["parent_id"], folder["name"], folder_type)
        if folder["parent_id"] is not None:
            siblings = self._folders[folder["parent_id"]]["folders"]
            siblings.remove(new_folder["id"])
            siblings.insert(siblings.index(folder_id) + 1, new_folder["id"])

        moved = folder["documents"][document_index:]
        del folder["documents"][document_index:]
        new_folder["documents"].extend(moved)
        for doc_id in moved:
            self._documents[doc_id]["parent_id"] = new_folder["id"]
        return new_folder["id"]

    def _op_set_folder_status(self, folder_id: str, status: int, error_message: Optional[str] = None) -> None:
        self._set_review_status(self._folder(folder_id), status, error_message)

    def _op_update_folder_field_values(self, folder_id: str, fields: List[Dict[str, Any]]) -> None:
        self._write_fields(self._folder(folder_id), fields)

    def _op_get_folder_field_values(self, folder_id: str, identities: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        folder = self._folder(folder_id)
        return [self._read_field(folder, identity) for identity in identities]

    def _op_set_folder_field_status(
        self,
        folder_id: str,
        identity: Dict[str, Any],
        status: int,
        error_message: Optional[str] = None,
        value: Any = None
    ) -> None:
        self._set_field_status(self._folder(folder_id), identity, status, error_message, value)

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def _document(self, document_id: str) -> Dict[str, Any]:
        try:
            return self._documents[document_id]
        except KeyError:
            raise NotFoundFault(f"Document '{document_id}' not found") from None

    def _new_document(
        self,
        folder: Dict[str, Any],
        name: Optional[str] = None,
        document_type_id: Optional[str] = None,
        insert_index: int = -1
    ) -> Dict[str, Any]:
        definitions = self._document_type(document_type_id)["fields"] if document_type_id else []
        document = {
            "id": _new_id(),
            "parent_id": folder["id"],
            "name": name,
            "document_type_id": document_type_id,
            "pages": [],
            "fields": self._build_fields(definitions),
            "status": None,
            "error_message": None,
            "override_valid": None,
            "rejected": False,
            "rejection_reason": None,
            "classification_confident": False,
            "confidence_level": 0.0,
            "source_file": None,
            "source_mime_type": None,
            "source_file_name": None,
            "extensions": {},
        }
        self._documents[document["id"]] = document
        _insert(folder["documents"], document["id"], insert_index)
        return document

    def _target_folder(self, parent_id: Optional[str]) -> Dict[str, Any]:
        """The given folder, or a new root folder when parent_id is None."""
        if parent_id is None:
            return self._new_folder(None)
        return self._folder(parent_id)

    def _remove_document(self, document_id: str) -> None:
        document = self._documents.pop(document_id)
        for page_id in document["pages"]:
            self._pages.pop(page_id, None)

    def _detach_document(self, document: Dict[str, Any]) -> None:
        self._folders[document["parent_id"]]["documents"].remove(document["id"])

    def _document_snapshot(self, document: Dict[str, Any]) -> Dict[str, Any]:
        doc_type = self._document_types.get(document["document_type_id"]) if document["document_type_id"] else None
        return {
            "id": document["id"],
            "parent_id": document["parent_id"],
            "name": document["name"],
            "document_type": (
                {"id": doc_type["id"], "name": doc_type["name"], "version": doc_type["version"]}
                if doc_type else None
            ),
            "pages": [self._page_snapshot(self._pages[p], i) for i, p in enumerate(document["pages"])],
            "fields": [self._field_snapshot(r) for r in document["fields"].values()],
            "status": document["status"],
            "valid": self._is_valid(document),
            "rejected": document["rejected"],
            "rejection_reason": document["rejection_reason"],
            "classification_confident": document["classification_confident"],
            "confidence_level": document["confidence_level"],
        }

    def _populate_document(self, document: Dict[str, Any], data: Dict[str, Any]) -> None:
        self._write_fields(document, data.get("fields"))
        self._write_properties(document, data.get("field_properties"))

    def _check_field_writes(self, fields: Dict[str, Dict[str, Any]], data: Dict[str, Any]) -> None:
        """Apply the writes in data to a scratch copy of fields; raises the fault the real write would."""
        self._populate_document({"id": "new item", "fields": copy.deepcopy(fields)}, data)

    def _check_new_document(self, data: Dict[str, Any]) -> None:
        document_type_id = data.get("document_type_id")
        definitions = self._document_type(document_type_id)["fields"] if document_type_id else []
        self._check_field_writes(self._build_fields(definitions), data)

    def _check_folder_fields(self, parent_id: Optional[str], folder_fields: Optional[List[Dict[str, Any]]]) -> None:
        fields = self._folder(parent_id)["fields"] if parent_id is not None else self._build_fields([])
        self._check_field_writes(fields, {"fields": folder_fields})

    @staticmethod
    def _check_page_fields(pages: List[Dict[str, Any]]) -> None:
        for page_data in pages:
            for update in page_data.get("fields", []):
                identity = update["identity"]
                id_or_name = identity.get("id") or identity.get("name")
                if page_property_name(id_or_name) not in _PAGE_ATTRIBUTES:
                    raise NotFoundFault(f"Page property '{id_or_name}' cannot be set")

    @staticmethod
    def _require_distinct(document_ids: List[str]) -> None:
        if len(set(document_ids)) != len(document_ids):
            raise InvalidOperationFault(f"Document ids must be distinct: {document_ids}")

    def _op_create_document(
        self,
        name: Optional[str] = None,
        parent_id: Optional[str] = None,
        fields: Optional[List[Dict[str, Any]]] = None,
        source_file: Optional[bytes] = None,
        source_file_name: Optional[str] = None,
        mime_type: Optional[str] = None,
        insert_index: int = -1,
        document_type_id: Optional[str] = None,
        field_properties: Optional[List[Dict[str, Any]]] = None
    ) -> Dict[str, str]:
        if parent_id is not None:
            self._folder(parent_id)
        self._check_new_document(
            {"document_type_id": document_type_id, "fields": fields, "field_properties": field_properties}
        )
        folder = self._target_folder(parent_id)
        document = self._new_document(folder, name, document_type_id, insert_index)
        self._populate_document(document, {"fields": fields, "field_properties": field_properties})
        if source_file is not None:
            document["source_file"] = source_file
            document["source_mime_type"] = mime_type
            document["source_file_name"] = source_file_name
            self._add_page(document, source_file, mime_type or "image/tiff")
        return {"document_id": document["id"], "folder_id": folder["id"]}

    def _op_create_documents(
        self,
        parent_id: Optional[str],
        folder_fields: Optional[List[Dict[str, Any]]],
        documents: List[Dict[str, Any]]
    ) -> List[Dict[str, str]]:
        self._check_folder_fields(parent_id, folder_fields)
        for data in documents:
            self._check_new_document(data)
        folder = self._target_folder(parent_id)
        self._write_fields(folder, folder_fields)
        created = []
        for data in documents:
            document = self._new_document(folder, data.get("name"), data.get("document_type_id"))
            self._populate_document(document, data)
            created.append({"document_id": document["id"], "folder_id": folder["id"]})
        return created

    def _op_create_document_with_pages(
        self,
        parent_id: Optional[str],
        folder_fields: Optional[List[Dict[str, Any]]],
        document: Dict[str, Any],
        pages: Optional[List[Dict[str, Any]]] = None,
        insert_index: int = -1
    ) -> Dict[str, str]:
        self._check_folder_fields(parent_id, folder_fields)
        self._check_new_document(document)
        self._check_page_fields(pages or [])
        folder = self._target_folder(parent_id)
        self._write_fields(folder, folder_fields)
        created = self._new_document(folder, document.get("name"), document.get("document_type_id"), insert_index)
        self._populate_document(created, document)
        for page_data in pages or []:
            page = self._add_page(created, page_data["image"], page_data.get("mime_type") or "image/tiff")
            for update in page_data.get("fields", []):
                identity = update["identity"]
                self._set_page_property(page, identity.get("id") or identity.get("name"), update.get("value"))
        return {"document_id": created["id"], "folder_id": folder["id"]}

    def _op_get_document(self, document_id: str) -> Dict[str, Any]:
        return self._document_snapshot(self._document(document_id))

    def _op_delete_document(self, document_id: str, options: Any = None, force: bool = False) -> None:
        document = self._document(document_id)
        self._detach_document(document)
        self._remove_document(document_id)

    def _op_delete_documents(self, document_ids: List[str], options: Any = None, force: bool = False) -> None:
        self._require_distinct(document_ids)
        documents = [self._document(doc_id) for doc_id in document_ids]
        for document in documents:
            self._detach_document(document)
            self._remove_document(document["id"])

    def _op_move_document(self, document_id: str, folder_id: str, index: int) -> None:
        document = self._document(document_id)
        folder = self._folder(folder_id)
        self._detach_document(document)
        _insert(folder["documents"], document_id, index)
        document["parent_id"] = folder_id

    @staticmethod
    def _copy_field_record(source: Dict[str, Any], target: Dict[str, Any]) -> None:
        for key in ("value", "status", "error_message", "extraction_confident"):
            target[key] = copy.deepcopy(source[key])
        target["properties"] = copy.deepcopy(source["properties"])
        if source["columns"] is not None and target["columns"] is not None:
            target["rows"] = copy.deepcopy(source["rows"])

    def _copy_data_fields(self, source: Dict[str, Any], target: Dict[str, Any], names: Optional[List[str]] = None) -> None:
        for name, record in source["fields"].items():
            if names and name not in names and record["id"] not in names:
                continue
            if name in target["fields"]:
                self._copy_field_record(record, target["fields"][name])

    def _op_copy_document(
        self,
        source_id: str,
        target_id: Optional[str] = None,
        field_names: Optional[List[str]] = None,
        copy_mode: int = 2
    ) -> str:
        source = self._document(source_id)
        if target_id is None:
            folder = self._folders[source["parent_id"]]
            index = folder["documents"].index(source_id) + 1
            target = self._new_document(folder, source["name"], source["document_type_id"], index)
        else:
            target = self._document(target_id)
            if target["document_type_id"] != source["document_type_id"]:
                self._retype(target, source["document_type_id"])
        target["classification_confident"] = source["classification_confident"]
        target["confidence_level"] = source["confidence_level"]
        self._copy_data_fields(source, target, field_names)
        return target["id"]

    def _op_copy_document_with_pages(self, document_id: str, insert_index: int = -1) -> str:
        source = self._document(document_id)
        folder = self._folders[source["parent_id"]]
        target = self._new_document(folder, source["name"], source["document_type_id"], insert_index)
        self._copy_data_fields(source, target)
        for page_id in source["pages"]:
            original = self._pages[page_id]
            page = copy.deepcopy(original)
            page["id"] = _new_id()
            page["instance_id"] = _new_id()
            page["document_id"] = target["id"]
            self._pages[page["id"]] = page
            target["pages"].append(page["id"])
        return target["id"]

    def _op_copy_document_field_values(self, source_id: str, destination_id: str) -> None:
        source = self._document(source_id)
        destination = self._document(destination_id)
        for name, record in source["fields"].items():
            if record["id"] in (VALID_FIELD_ID, REVIEW_VALID_FIELD_ID):
                continue
            if name in destination["fields"]:
                self._copy_field_record(record, destination["fields"][name])

    def _op_split_document(self, document_id: str, page_index: int) -> str:
        document = self._document(document_id)
        if not 0 < page_index < len(document["pages"]):
            raise InvalidOperationFault(
                f"Cannot split document '{document_id}' at page index {page_index}"
            )
        new_document = self._split_off(document, page_index, len(document["pages"]), document["document_type_id"])
        del document["pages"][page_index:]
        return new_document["id"]

    def _split_off(self, document: Dict[str, Any], start: int, end: int, document_type_id: Optional[str]) -> Dict[str, Any]:
        folder = self._folders[document["parent_id"]]
        index = folder["documents"].index(document["id"]) + 1
        while index < len(folder["documents"]) and self._documents[folder["documents"][index]].get("split_from") == document["id"]:
            index += 1
        new_document = self._new_document(folder, document["name"], document_type_id, index)
        new_document["split_from"] = document["id"]
        moved = document["pages"][start:end]
        new_document["pages"].extend(moved)
        for page_id in moved:
            self._pages[page_id]["document_id"] = new_document["id"]
        return new_document

    def _op_split_document_and_classify(self, document_id: str, splits: List[Dict[str, Any]]) -> List[Dict[str, str]]:
        document = self._document(document_id)
        page_count = len(document["pages"])
        ordered = sorted(splits, key=lambda s: s["split_index"])
        indexes = [s["split_index"] for s in ordered]
        if not ordered or len(set(indexes)) != len(indexes) or not all(0 < i < page_count for i in indexes):
            raise InvalidOperationFault(f"Invalid split points {indexes} for document '{document_id}'")
        for split in ordered:
            if split.get("document_type_id"):
                self._document_type(split["document_type_id"])

        bounds = indexes + [page_count]
        created = []
        for position, split in enumerate(ordered):
            new_document = self._split_off(document, bounds[position], bounds[position + 1], split.get("document_type_id"))
            new_document["classification_confident"] = split.get("classification_confident", False)
            new_document["confidence_level"] = split.get("confidence_level", 0.0)
            new_document["fields"]["ReviewValid"]["value"] = _as_bool(split.get("review_valid", False))
            created.append({"document_id": new_document["id"], "folder_id": new_document["parent_id"]})
        del document["pages"][indexes[0]:]
        return created

    def _op_merge_documents(self, document_ids: List[str]) -> str:
        if len(document_ids) < 2:
            raise InvalidOperationFault("At least two documents are required for a merge")
        self._require_distinct(document_ids)
        documents = [self._document(doc_id) for doc_id in document_ids]
        first = documents[0]
        for other in documents[1:]:
            for page_id in other["pages"]:
                self._pages[page_id]["document_id"] = first["id"]
            first["pages"].extend(other["pages"])
            other["pages"] = []
            self._detach_document(other)
            self._remove_document(other["id"])
        return first["id"]

    def _op_reject_document(self, document_id: str, reason: Optional[str] = None) -> None:
        document = self._document(document_id)
        document["rejected"] = True
        document["rejection_reason"] = reason

    def _op_unreject_documents(self, document_ids: List[str]) -> None:
        for document in [self._document(doc_id) for doc_id in document_ids]:
            document["rejected"] = False
            document["rejection_reason"] = None

    def _retype(self, document: Dict[str, Any], document_type_id: Optional[str]) -> None:
        definitions = self._document_type(document_type_id)["fields"] if document_type_id else []
        old_fields = document["fields"]
        document["fields"] = self._build_fields(definitions)
        for name, record in old_fields.items():
            if name in document["fields"]:
                self._copy_field_record(record, document["fields"][name])
        document["document_type_id"] = document_type_id

    def _op_update_document_type(self, document_id: str, document_type_id: str) -> None:
        self._retype(self._document(document_id), document_type_id)

    def _op_update_document_type_with_confidence(
        self,
        document_id: str,
        document_type_id: str,
        confidence_level: Optional[float] = None,
        classification_confident: Optional[bool] = None
    ) -> None:
        document = self._document(document_id)
        self._retype(document, document_type_id)
        if confidence_level is not None:
            document["confidence_level"] = confidence_level
        if classification_confident is not None:
            document["classification_confident"] = classification_confident

    def _op_set_document_status(self, document_id: str, status: int, error_message: Optional[str] = None) -> None:
        self._set_review_status(self._document(document_id), status, error_message)

    def _op_get_source_file(self, document_id: str) -> Dict[str, Any]:
        document = self._document(document_id)
        return {
            "source_file": document["source_file"],
            "mime_type": document["source_mime_type"],
            "file_name": document["source_file_name"],
        }

    def _op_update_source_file(
        self,
        document_id: str,
        source_file: bytes,
        mime_type: Optional[str] = None,
        file_name: Optional[str] = None
    ) -> None:
        document = self._document(document_id)
        document["source_file"] = source_file
        document["source_mime_type"] = mime_type
        document["source_file_name"] = file_name

    def _op_get_document_file(self, document_id: str, file_type: str) -> Optional[bytes]:
        document = self._document(document_id)
        if document["source_file"] is None:
            return None
        wanted = file_type.lower().lstrip(".")
        known = set()
        if document["source_file_name"] and "." in document["source_file_name"]:
            known.add(document["source_file_name"].rsplit(".", 1)[1].lower())
        if document["source_mime_type"]:
            subtype = document["source_mime_type"].split("/")[-1].lower()
            known.add(subtype)
            if subtype in ("tif", "tiff"):
                known.update(("tif", "tiff"))
        return document["source_file"] if wanted in known else None

    def _op_save_text_extension(self, document_id: str, name: str, value: str) -> None:
        self._document(document_id)["extensions"][name] = value

    def _op_get_text_extension(self, document_id: str, name: str) -> Optional[str]:
        return self._document(document_id)["extensions"].get(name)

    def _op_delete_extension(self, document_id: str, name: str) -> None:
        self._document(document_id)["extensions"].pop(name, None)

    def _op_force_unlock_item(self, item_id: str, item_type: int) -> None:
        if item_type == LockedItemType.DOCUMENT:
            self._document(item_id)
        elif item_type == LockedItemType.FOLDER:
            self._folder(item_id)
        else:
            raise InvalidOperationFault(f"Unknown locked item type {item_type}")

    # ------------------------------------------------------------------
    # Document fields
    # ------------------------------------------------------------------

    def _op_update_document_field_values(self, document_id: str, fields: List[Dict[str, Any]]) -> None:
        self._write_fields(self._document(document_id), fields)

    def _op_get_document_field_value(self, document_id: str, identity: Dict[str, Any]) -> Dict[str, Any]:
        return self._read_field(self._document(document_id), identity)

    def _op_get_document_field_values(self, document_id: str, identities: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        document = self._document(document_id)
        return [self._read_field(document, identity) for identity in identities]

    def _op_update_document_field_property_values(self, document_id: str, field_properties: List[Dict[str, Any]]) -> None:
        self._write_properties(self._document(document_id), field_properties)

    def _op_set_document_field_status(
        self,
        document_id: str,
        identity: Dict[str, Any],
        status: int,
        error_message: Optional[str] = None,
        value: Any = None
    ) -> None:
        self._set_field_status(self._document(document_id), identity, status, error_message, value)

    def _op_insert_table_field_row(self, document_id: str, table_field: Dict[str, Any], row_index: int = -1) -> None:
        record = self._find_field(self._document(document_id), table_field)
        if record["columns"] is None:
            raise InvalidOperationFault(f"Field '{record['name']}' is not a table field")
        _insert(record["rows"], [None] * len(record["columns"]), row_index)

    def _op_get_document_fields_alternatives(
        self,
        document_id: str,
        identities: List[Dict[str, Any]],
        max_alternatives: int = 1
    ) -> List[Dict[str, Any]]:
        document = self._document(document_id)
        results = []
        for identity in identities:
            snapshot = self._read_field(document, identity)
            value = snapshot["value"]
            alternatives = []
            if value not in (None, "") and not isinstance(value, list):
                alternatives.append({"text": str(value), "confidence": 1.0})
            results.append({"identity": snapshot["identity"], "alternatives": alternatives[:max_alternatives]})
        return results

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def _check_value(definition: Dict[str, Any], value: Any) -> Dict[str, Any]:
        name = definition["name"]
        if definition.get("columns"):
            rows = value or []
            for row_number, row in enumerate(rows):
                cells = row if isinstance(row, dict) else dict(zip(definition["columns"], row))
                for column in definition.get("numeric_columns", []):
                    cell = cells.get(column)
                    if cell in (None, ""):
                        continue
                    try:
                        float(cell)
                    except (TypeError, ValueError):
                        return {
                            "field_name": name,
                            "is_valid": False,
                            "error_message": f"{column} in row {row_number} must be a number",
                            "formatted_value": value,
                        }
            return {"field_name": name, "is_valid": True, "error_message": None, "formatted_value": value}

        text = "" if value is None else str(value).strip()
        if definition.get("required") and not text:
            return {"field_name": name, "is_valid": False, "error_message": f"{name} is required", "formatted_value": value}
        return {"field_name": name, "is_valid": True, "error_message": None, "formatted_value": text or value}

    @staticmethod
    def _definition(document_type: Dict[str, Any], identity: Dict[str, Any]) -> Dict[str, Any]:
        for definition in document_type["fields"]:
            if identity.get("id") and identity["id"].upper() == definition["id"]:
                return definition
            if identity.get("name") and identity["name"] == definition["name"]:
                return definition
        raise NotFoundFault(
            f"Field '{identity.get('name') or identity.get('id')}' not found on document type '{document_type['name']}'"
        )

    def _validate_stored(self, document: Dict[str, Any]) -> List[Dict[str, Any]]:
        results = []
        for record in document["fields"].values():
            if record["id"] in (VALID_FIELD_ID, REVIEW_VALID_FIELD_ID):
                continue
            snapshot = self._field_snapshot(record)
            results.append(self._check_value(record["definition"], snapshot["value"]))
        return results

    def _op_validate_document(self, document_id: str) -> bool:
        document = self._document(document_id)
        is_valid = all(r["is_valid"] for r in self._validate_stored(document))
        document["fields"]["Valid"]["value"] = is_valid
        return is_valid

    def _op_validate_document_field(self, document_type_id: str, field: Dict[str, Any]) -> Dict[str, Any]:
        document_type = self._document_type(document_type_id)
        return self._check_value(self._definition(document_type, field["identity"]), field.get("value"))

    def _op_validate_document_fields(self, document_type_id: str, fields: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return [self._op_validate_document_field(document_type_id, field) for field in fields]

    def _op_validate_all_document_fields(
        self,
        document_type_id: str,
        fields: List[Dict[str, Any]],
        system_properties: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        document_type = self._document_type(document_type_id)
        results = self._op_validate_document_fields(document_type_id, fields)
        supplied = {r["field_name"] for r in results}
        for definition in document_type["fields"]:
            if definition["name"] not in supplied:
                results.append(self._check_value(definition, None))
        return results

    def _op_run_document_fields_validation(self, document_id: str, identities: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        document = self._document(document_id)
        results = []
        for identity in identities:
            record = self._find_field(document, identity)
            result = self._check_value(record["definition"], self._field_snapshot(record)["value"])
            record["status"] = int(FieldStatus.VALID if result["is_valid"] else FieldStatus.INVALID)
            record["error_message"] = result["error_message"]
            results.append(result)
        return results

    def _op_validate_document_for_review(self, document_id: str) -> Dict[str, Any]:
        document = self._document(document_id)
        results = self._validate_stored(document)
        return {
            "document_id": document_id,
            "is_valid": not document["rejected"] and all(r["is_valid"] for r in results),
            "field_results": results,
        }

    def _op_get_validation_execution_context(self) -> Dict[str, Any]:
        return {"component": "MockCaptureBackend", "activity_name": None, "job_id": None}

    # ------------------------------------------------------------------
    # Pages and images
    # ------------------------------------------------------------------

    def _page(self, document: Dict[str, Any], page_id: str) -> Dict[str, Any]:
        if page_id not in document["pages"]:
            raise NotFoundFault(f"Page '{page_id}' not found in document '{document['id']}'")
        return self._pages[page_id]

    def _store_image(self, image: bytes, mime_type: str) -> str:
        image_id = _new_id()
        self._images[image_id] = {"image": image, "mime_type": mime_type}
        return image_id

    def _add_page(self, document: Dict[str, Any], image: bytes, mime_type: str) -> Dict[str, Any]:
        page = {
            "id": _new_id(),
            "instance_id": _new_id(),
            "document_id": document["id"],
            "image_id": self._store_image(image, mime_type),
            "mime_type": mime_type,
            "sheet_id": None,
            "is_front": True,
            "rotation": 0,
            "width": 0,
            "height": 0,
            "barcodes": [],
            "rejected": False,
            "rejection_note": None,
            "renditions": {},
            "text_extensions": {},
        }
        self._pages[page["id"]] = page
        document["pages"].append(page["id"])
        return page

    def _set_page_property(self, page: Dict[str, Any], id_or_name: str, value: Any) -> None:
        name = page_property_name(id_or_name)
        if name not in _PAGE_ATTRIBUTES:
            raise NotFoundFault(f"Page property '{id_or_name}' cannot be set")
        if name in ("IsFront", "IsRejected"):
            value = _as_bool(value)
        page[_PAGE_ATTRIBUTES[name]] = value

    @staticmethod
    def _page_snapshot(page: Dict[str, Any], index: int) -> Dict[str, Any]:
        return {
            "id": page["id"],
            "index": index,
            "image_id": page["image_id"],
            "mime_type": page["mime_type"],
            "sheet_id": page["sheet_id"],
            "is_front": page["is_front"],
            "rotation": page["rotation"],
            "width": page["width"],
            "height": page["height"],
            "barcodes": copy.deepcopy(page["barcodes"]),
            "rejected": page["rejected"],
            "rejection_note": page["rejection_note"],
        }

    @staticmethod
    def _check_indexes(document: Dict[str, Any], page_indexes: List[int]) -> None:
        count = len(document["pages"])
        for index in page_indexes:
            if not 0 <= index < count:
                raise InvalidOperationFault(
                    f"Page index {index} is out of range for document '{document['id']}' ({count} pages)"
                )
        if len(set(page_indexes)) != len(page_indexes):
            raise InvalidOperationFault(f"Duplicate page indexes {page_indexes}")

    def _op_move_pages(
        self,
        source_document_id: str,
        destination_document_id: str,
        page_indexes: List[int],
        insert_index: int = -1
    ) -> None:
        source = self._document(source_document_id)
        destination = self._document(destination_document_id)
        self._check_indexes(source, page_indexes)

        moved = [source["pages"][i] for i in page_indexes]
        source["pages"] = [p for p in source["pages"] if p not in moved]
        if insert_index is None or insert_index < 0 or insert_index >= len(destination["pages"]):
            destination["pages"].extend(moved)
        else:
            destination["pages"][insert_index:insert_index] = moved
        for page_id in moved:
            self._pages[page_id]["document_id"] = destination["id"]

    def _op_delete_pages(self, document_id: str, page_indexes: List[int]) -> None:
        document = self._document(document_id)
        self._check_indexes(document, page_indexes)
        doomed = {document["pages"][i] for i in page_indexes}
        document["pages"] = [p for p in document["pages"] if p not in doomed]
        for page_id in doomed:
            del self._pages[page_id]

    def _op_reject_pages(self, document_id: str, page_indexes: List[int], reason: Optional[str] = None) -> None:
        document = self._document(document_id)
        self._check_indexes(document, page_indexes)
        for index in page_indexes:
            page = self._pages[document["pages"][index]]
            page["rejected"] = True
            page["rejection_note"] = reason

    def _op_get_rejected_pages(self, document_id: str) -> Dict[str, Any]:
        document = self._document(document_id)
        return {
            "document_id": document_id,
            "pages": [
                {"page_id": page_id, "index": i, "rejection_note": self._pages[page_id]["rejection_note"]}
                for i, page_id in enumerate(document["pages"])
                if self._pages[page_id]["rejected"]
            ],
        }

    def _op_update_pages(self, document_id: str, pages: List[Dict[str, Any]]) -> None:
        document = self._document(document_id)
        self._check_indexes(document, [p["index"] for p in pages])
        settable = set(_PAGE_ATTRIBUTES.values())
        for update in pages:
            page = self._pages[document["pages"][update["index"]]]
            for key, value in update.items():
                if key == "index":
                    continue
                if key not in settable:
                    raise InvalidOperationFault(f"Page property '{key}' cannot be updated")
                page[key] = value

    def _op_save_page_image(self, image: bytes, mime_type: str, batch_id: str = "") -> Dict[str, Any]:
        image_id = self._store_image(image, mime_type)
        return {"image_id": image_id, "mime_type": mime_type, "size": len(image)}

    def _op_get_image(self, image_id: str, width: int = -1, height: int = -1, image_format: str = "tif") -> Dict[str, Any]:
        try:
            stored = self._images[image_id]
        except KeyError:
            raise NotFoundFault(f"Image '{image_id}' not found") from None
        return {
            "image_id": image_id,
            "image": stored["image"],
            "mime_type": stored["mime_type"],
            "image_format": image_format,
            "width": width,
            "height": height,
        }

    def _rendition(self, page: Dict[str, Any], rendition_number: int) -> Dict[str, Any]:
        try:
            return page["renditions"][rendition_number]
        except KeyError:
            raise NotFoundFault(f"Rendition {rendition_number} not found for page '{page['id']}'") from None

    def _op_save_page_rendition(
        self,
        document_id: str,
        page_id: str,
        rendition_number: int,
        mime_type: str,
        image: bytes
    ) -> None:
        page = self._page(self._document(document_id), page_id)
        page["renditions"][rendition_number] = {"image": image, "mime_type": mime_type}

    def _op_get_page_rendition(self, document_id: str, page_id: str, rendition_number: int) -> bytes:
        page = self._page(self._document(document_id), page_id)
        return self._rendition(page, rendition_number)["image"]

    def _op_set_page_source_image_from_rendition(self, document_id: str, page_id: str, rendition_number: int) -> None:
        page = self._page(self._document(document_id), page_id)
        rendition = self._rendition(page, rendition_number)
        page["image_id"] = self._store_image(rendition["image"], rendition["mime_type"])
        page["mime_type"] = rendition["mime_type"]

    def _op_get_page_summary(self, document_id: str, page_id: str) -> Dict[str, Any]:
        document = self._document(document_id)
        page = self._page(document, page_id)
        return {
            "id": page_id,
            "document_id": document_id,
            "index": document["pages"].index(page_id),
            "image_id": page["image_id"],
            "mime_type": page["mime_type"],
            "rendition_numbers": sorted(page["renditions"]),
            "rejected": page["rejected"],
        }

    def _op_get_page_rendition_image_summary(self, document_id: str, page_id: str, rendition_number: int) -> Dict[str, Any]:
        page = self._page(self._document(document_id), page_id)
        rendition = self._rendition(page, rendition_number)
        return {"mime_type": rendition["mime_type"], "size": len(rendition["image"]), "width": 0, "height": 0}

    def _op_save_page_text_extension(self, document_id: str, page_id: str, name: str, value: str) -> None:
        self._page(self._document(document_id), page_id)["text_extensions"][name] = value

    def _op_get_page_text_extension(self, document_id: str, page_id: str, name: str) -> Optional[str]:
        return self._page(self._document(document_id), page_id)["text_extensions"].get(name)

    def _page_property(self, document: Dict[str, Any], page: Dict[str, Any], id_or_name: str) -> Any:
        name = page_property_name(id_or_name)
        if name is None:
            raise NotFoundFault(f"Unknown page property '{id_or_name}'")
        if name == "PageIndex":
            return document["pages"].index(page["id"])
        if name == "SourceFileData":
            return self._images[page["image_id"]]["image"]
        if name in _PAGE_ATTRIBUTES:
            return copy.deepcopy(page[_PAGE_ATTRIBUTES[name]])
        return None

    def _op_get_page_property_values(self, document_id: str, requests: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        document = self._document(document_id)
        results = []
        for request in requests:
            page = self._page(document, request["page_id"])
            results.append({
                "page_id": page["id"],
                "properties": {
                    page_property_name(name): self._page_property(document, page, name)
                    for name in request.get("property_names", [])
                },
            })
        return results


class MockTransport(CaptureTransport):
    """
    Transport that dispatches to a MockCaptureBackend in-process.

    Payloads and results are deep-copied so that callers only ever see
    by-value snapshots, as they would over the wire.
    """

    def __init__(self, backend: Optional[MockCaptureBackend] = None):
        self.backend = backend if backend is not None else MockCaptureBackend()

    def call(self, operation: str, session_id: str, payload: Dict[str, Any]) -> Any:
        result = self.backend.handle(operation, session_id, copy.deepcopy(payload))
        return copy.deepcopy(result)
