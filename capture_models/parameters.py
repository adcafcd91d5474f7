"""
Request parameter models for capture operations.

These models group the optional inputs of the multi-part create, split and
update calls. Fields left as None are not sent, so the service keeps its
current value for them.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .entities import Barcode
from .fields import FieldIdentity, FieldProperties, FieldUpdate


class DocumentDataInput(BaseModel):
    """
    Everything needed to create one document in a multi-document create call.

    Attributes:
        name: Optional document name
        document_type_id: Id of the document type to assign
        fields: Initial field values
        field_properties: Initial field system properties (Value, Width, ...)
    """
    name: Optional[str] = None
    document_type_id: Optional[str] = None
    fields: List[FieldUpdate] = Field(default_factory=list)
    field_properties: List[FieldProperties] = Field(default_factory=list)


class PageDataInput(BaseModel):
    """
    A page to add while creating a document.

    fields carries page system properties by name or id, e.g. SheetId and
    IsFront.
    """
    image: bytes
    mime_type: str = "image/tiff"
    fields: List[FieldUpdate] = Field(default_factory=list)

    @field_validator('image')
    def validate_image(cls, value):
        """Reject empty images before they reach the service."""
        if not value:
            raise ValueError("Page image must not be empty")
        return value


class SplitDocumentInfo(BaseModel):
    """
    One split point for split_document_and_classify.

    Attributes:
        split_index: Page index where the new document starts
        document_type_id: Document type of the new document
        classification_confident: Whether the classification is confident
        confidence_level: Classification confidence between 0 and 1
        review_valid: Initial ReviewValid value of the new document
    """
    split_index: int
    document_type_id: Optional[str] = None
    classification_confident: bool = False
    confidence_level: float = 0.0
    review_valid: bool = False

    @field_validator('split_index')
    def validate_split_index(cls, value):
        """A split needs at least one page before it."""
        if value < 1:
            raise ValueError("split_index must be at least 1")
        return value

    @field_validator('confidence_level')
    def validate_confidence(cls, value):
        if not 0.0 <= value <= 1.0:
            raise ValueError("confidence_level must be between 0 and 1")
        return value


class PageUpdate(BaseModel):
    """
    Property updates for one page, addressed by its current index.

    Properties left as None keep their current value on the service.
    """
    index: int
    sheet_id: Optional[str] = None
    is_front: Optional[bool] = None
    rotation: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    barcodes: Optional[List[Barcode]] = None

    @model_validator(mode='after')
    def validate_has_changes(self):
        """An update that changes nothing is a caller mistake."""
        if all(getattr(self, name) is None for name in
               ("sheet_id", "is_front", "rotation", "width", "height", "barcodes")):
            raise ValueError(f"PageUpdate for index {self.index} changes no property")
        return self

    def changes(self) -> Dict[str, Any]:
        """The properties this update sets."""
        return self.model_dump(exclude={"index"}, exclude_none=True)


class PagePropertiesIdentity(BaseModel):
    """The system properties to read for one page."""
    page_id: str
    property_names: List[str] = Field(default_factory=list)


class DocumentSystemProperties(BaseModel):
    """Document-level values supplied to stateless full-document validation."""
    page_count: int = 0
    rejected: bool = False
    review_valid: bool = False


class FieldValueInput(BaseModel):
    """A field name/value pair for stateless validation calls."""
    identity: FieldIdentity
    value: Any = None
