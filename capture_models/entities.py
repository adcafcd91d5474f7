"""
Capture Entities

Defines Pydantic models for the folders, documents and pages returned by the
capture service. Every instance is a by-value snapshot: mutating it changes
nothing on the service, and it goes stale after the next structural call
(page and sibling positions shift after moves, splits and merges).

Typical usage:
    folder = client.folders.get_folder(session_id, folder_id)
    original_index = folder.folder_index(child_id)
"""

from enum import IntEnum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .fields import FieldValue, ReviewStatus


class LockedItemType(IntEnum):
    """Kinds of items that can be force-unlocked."""
    DOCUMENT = 0
    FOLDER = 1


class DocumentTypeRef(BaseModel):
    """Reference to a document type (classification)."""
    id: str
    name: Optional[str] = None
    version: Optional[int] = None


class FolderTypeRef(BaseModel):
    """Reference to a folder type, by id or name."""
    id: Optional[str] = None
    name: Optional[str] = None


class FolderSummary(BaseModel):
    """Child folder entry inside a Folder snapshot."""
    id: str
    name: Optional[str] = None


class DocumentSummary(BaseModel):
    """Document entry inside a Folder snapshot."""
    id: str
    name: Optional[str] = None
    document_type_id: Optional[str] = None


class Barcode(BaseModel):
    """A barcode recognised on a page."""
    value: str
    width: int = 0
    height: int = 0


class Page(BaseModel):
    """
    Snapshot of a page.

    Attributes:
        id: Stable page id
        index: Position of the page inside its document at snapshot time
        image_id: Id of the stored source image
        mime_type: Mime type of the source image
        sheet_id: Sheet the page was scanned on
        is_front: Whether the page is the front side of its sheet
        rotation: Rotation type applied to the page image
        width: Layout width
        height: Layout height
        barcodes: Barcodes found on the page
        rejected: Whether the page is rejected
        rejection_note: Reason given when the page was rejected
    """
    id: str
    index: int = 0
    image_id: Optional[str] = None
    mime_type: Optional[str] = None
    sheet_id: Optional[str] = None
    is_front: bool = True
    rotation: int = 0
    width: int = 0
    height: int = 0
    barcodes: List[Barcode] = Field(default_factory=list)
    rejected: bool = False
    rejection_note: Optional[str] = None


class Document(BaseModel):
    """
    Snapshot of a document.

    A document belongs to exactly one folder (parent_id) and holds an ordered
    list of pages.
    """
    id: str
    parent_id: str
    name: Optional[str] = None
    document_type: Optional[DocumentTypeRef] = None
    pages: List[Page] = Field(default_factory=list)
    fields: List[FieldValue] = Field(default_factory=list)
    status: Optional[ReviewStatus] = None
    valid: bool = False
    rejected: bool = False
    rejection_reason: Optional[str] = None
    classification_confident: bool = False
    confidence_level: float = 0.0

    @property
    def page_ids(self) -> List[str]:
        return [p.id for p in self.pages]

    def page_index(self, page_id: str) -> int:
        """Current index of a page, or -1 when it is not in this document."""
        ids = self.page_ids
        return ids.index(page_id) if page_id in ids else -1

    def field(self, id_or_name: str) -> Optional[FieldValue]:
        """Find a field value by id or name."""
        for value in self.fields:
            if id_or_name in (value.identity.id, value.identity.name):
                return value
        return None


class Folder(BaseModel):
    """
    Snapshot of a folder.

    parent_id is None for a root folder. Child folders and documents are kept
    in sibling order.
    """
    id: str
    parent_id: Optional[str] = None
    name: Optional[str] = None
    folder_type: Optional[FolderTypeRef] = None
    folders: List[FolderSummary] = Field(default_factory=list)
    documents: List[DocumentSummary] = Field(default_factory=list)
    fields: List[FieldValue] = Field(default_factory=list)
    status: Optional[ReviewStatus] = None
    valid: bool = False
    online_learning: bool = False

    def folder_index(self, folder_id: str) -> int:
        """Sibling index of a child folder, or -1 when absent."""
        ids = [f.id for f in self.folders]
        return ids.index(folder_id) if folder_id in ids else -1

    def document_index(self, document_id: str) -> int:
        """Sibling index of a document, or -1 when absent."""
        ids = [d.id for d in self.documents]
        return ids.index(document_id) if document_id in ids else -1

    def field(self, id_or_name: str) -> Optional[FieldValue]:
        """Find a field value by id or name."""
        for value in self.fields:
            if id_or_name in (value.identity.id, value.identity.name):
                return value
        return None


class CreatedDocumentIds(BaseModel):
    """Ids returned when a document is created: the document and its folder."""
    document_id: str
    folder_id: str


class PageImageData(BaseModel):
    """Result of storing a page image."""
    image_id: str
    mime_type: str
    size: int = 0


class ImageData(BaseModel):
    """A page image rendered by the service."""
    image_id: str
    image: bytes
    mime_type: Optional[str] = None
    image_format: Optional[str] = None
    width: int = -1
    height: int = -1


class ImageSummary(BaseModel):
    """Size and type information for an image or rendition."""
    mime_type: Optional[str] = None
    size: int = 0
    width: int = 0
    height: int = 0


class PageSummary(BaseModel):
    """Light-weight page information."""
    id: str
    document_id: str
    index: int
    image_id: Optional[str] = None
    mime_type: Optional[str] = None
    rendition_numbers: List[int] = Field(default_factory=list)
    rejected: bool = False


class DocumentSourceFile(BaseModel):
    """The original file a document was created from."""
    source_file: Optional[bytes] = None
    mime_type: Optional[str] = None
    file_name: Optional[str] = None


class RejectedPage(BaseModel):
    """A rejected page and its note."""
    page_id: str
    index: int
    rejection_note: Optional[str] = None


class RejectedPages(BaseModel):
    """All rejected pages of a document."""
    document_id: str
    pages: List[RejectedPage] = Field(default_factory=list)


class PageProperties(BaseModel):
    """Requested system property values of one page."""
    page_id: str
    properties: Dict[str, Any] = Field(default_factory=dict)


class Category(BaseModel):
    """A configuration category."""
    id: str
    name: str
    level: int = 1


class ClassificationGroup(BaseModel):
    """A classification group, holding document types."""
    id: str
    name: str
    category_id: str


class DocumentType(BaseModel):
    """A document type available in a classification group."""
    id: str
    name: str
    version: int = 1
    classification_group_id: Optional[str] = None
    field_names: List[str] = Field(default_factory=list)
