"""
Field models for capture folders, documents and pages.

A field is addressed by a FieldIdentity: either its stable id or its
human-readable name, optionally qualified by a table row and column for
tabular fields. Identity resolution (id vs. name) happens in
field_operations.identity; these models only carry the result.

Typical usage:
    from capture_models import FieldIdentity, FieldUpdate, FieldStatus

    update = FieldUpdate(identity=FieldIdentity(name="CustomerName"), value="Jane Doe")
    client.fields.update_document_field_values(session_id, doc_id, [update])
"""

from enum import Enum, IntEnum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, model_validator


# Well-known ids of the system fields every folder and document carries.
VALID_FIELD_ID = "5B83535412F142669762C8C08CFE690F"
REVIEW_VALID_FIELD_ID = "D735014F88744E3899D6AB8EAA84634A"

SYSTEM_FIELD_NAMES = {
    VALID_FIELD_ID: "Valid",
    REVIEW_VALID_FIELD_ID: "ReviewValid",
}


class FieldStatus(IntEnum):
    """
    Status attached to a field value.

    Transitions form an open cycle:
        INVALID -> {VALID, FORCE_VALID} -> CONFIRMED -> VERIFIED -> UNVERIFIED -> INVALID

    VERIFIED is only accepted by the service when the field's owner is
    currently valid. EXTRACTION_CONFIDENT is not a status of its own: it sets
    the field's extraction-confident flag to the boolean value sent with it.
    """
    INVALID = 0
    VALID = 1
    FORCE_VALID = 2
    CONFIRMED = 3
    VERIFIED = 4
    UNVERIFIED = 5
    EXTRACTION_CONFIDENT = 6


class ReviewStatus(IntEnum):
    """
    Review state requested for a whole folder or document.

    Attributes:
        REVIEW_INVALID: Mark the owner invalid, with an error message
        REVIEW_VALID: Mark the owner valid
        OVERRIDE: Force the owner valid regardless of its fields
        RESTORE: Undo a previous override
    """
    REVIEW_INVALID = 0
    REVIEW_VALID = 1
    OVERRIDE = 2
    RESTORE = 3


class FieldOwnerKind(str, Enum):
    """Entity kinds that own fields."""
    FOLDER = "folder"
    DOCUMENT = "document"


class FieldIdentity(BaseModel):
    """
    Identifies one field, or one cell of a table field.

    Exactly one of id or name is normally set. table_row and table_column are
    -1 for non-tabular fields.
    """
    id: Optional[str] = Field(None, description="Stable field id")
    name: Optional[str] = Field(None, description="Human-readable field name")
    table_row: int = Field(-1, description="Row of a table field cell, -1 when not tabular")
    table_column: int = Field(-1, description="Column of a table field cell, -1 when not tabular")

    @model_validator(mode='after')
    def validate_identity(self):
        """A field must be addressable by id or name."""
        if not self.id and not self.name:
            raise ValueError("FieldIdentity requires an id or a name")
        if (self.table_row < 0) != (self.table_column < 0):
            raise ValueError("table_row and table_column must both be set for a table cell")
        return self

    @property
    def is_table_cell(self) -> bool:
        return self.table_row >= 0 and self.table_column >= 0

    @property
    def label(self) -> str:
        """Short text for log messages."""
        base = self.name or self.id
        if self.is_table_cell:
            return f"{base}[{self.table_row},{self.table_column}]"
        return base


class FieldUpdate(BaseModel):
    """A value to write to one field."""
    identity: FieldIdentity
    value: Any = None


class FieldValue(BaseModel):
    """
    Snapshot of a field value returned by the service.

    Attributes:
        identity: Identity of the field, with both id and name filled in
        value: Current value; table fields hold a list of rows
        status: Current field status
        error_message: Message set with the last INVALID status, if any
        extraction_confident: Whether extraction of the value was confident
    """
    identity: FieldIdentity
    value: Any = None
    status: FieldStatus = FieldStatus.INVALID
    error_message: Optional[str] = None
    extraction_confident: bool = False


class FieldSystemProperty(BaseModel):
    """One system property (Value, Width, ErrorDescription, ...) of a field."""
    name: str
    value: Any = None


class FieldProperties(BaseModel):
    """A batch of system property values for one field."""
    identity: FieldIdentity
    properties: List[FieldSystemProperty] = Field(default_factory=list)


class FieldAlternative(BaseModel):
    """One alternative extraction result for a field."""
    text: str
    confidence: float = 0.0


class FieldAlternatives(BaseModel):
    """Alternatives returned for one field."""
    identity: FieldIdentity
    alternatives: List[FieldAlternative] = Field(default_factory=list)
