"""
Capture Models

Pydantic models shared by every capture operation package: entity snapshots,
field identities and values, request parameters, validation verdicts and
result holders.
"""

from .fields import (
    VALID_FIELD_ID,
    REVIEW_VALID_FIELD_ID,
    SYSTEM_FIELD_NAMES,
    FieldStatus,
    ReviewStatus,
    FieldOwnerKind,
    FieldIdentity,
    FieldUpdate,
    FieldValue,
    FieldSystemProperty,
    FieldProperties,
    FieldAlternative,
    FieldAlternatives
)
from .entities import (
    LockedItemType,
    DocumentTypeRef,
    FolderTypeRef,
    FolderSummary,
    DocumentSummary,
    Barcode,
    Page,
    Document,
    Folder,
    CreatedDocumentIds,
    PageImageData,
    ImageData,
    ImageSummary,
    PageSummary,
    DocumentSourceFile,
    RejectedPage,
    RejectedPages,
    PageProperties,
    Category,
    ClassificationGroup,
    DocumentType
)
from .parameters import (
    DocumentDataInput,
    PageDataInput,
    SplitDocumentInfo,
    PageUpdate,
    PagePropertiesIdentity,
    DocumentSystemProperties,
    FieldValueInput
)
from .validation import (
    ValidationResult,
    ReviewValidationResult,
    ValidationExecutionContext
)
from .results import CreatedFolders, CreatedDocuments, OperationResult
from .properties import (
    FIELD_PROPERTY_IDS,
    PAGE_PROPERTY_IDS,
    ALL_PAGE_PROPERTY_NAMES,
    page_property_name,
    field_property_name
)

__all__ = [
    'VALID_FIELD_ID',
    'REVIEW_VALID_FIELD_ID',
    'SYSTEM_FIELD_NAMES',
    'FieldStatus',
    'ReviewStatus',
    'FieldOwnerKind',
    'FieldIdentity',
    'FieldUpdate',
    'FieldValue',
    'FieldSystemProperty',
    'FieldProperties',
    'FieldAlternative',
    'FieldAlternatives',
    'LockedItemType',
    'DocumentTypeRef',
    'FolderTypeRef',
    'FolderSummary',
    'DocumentSummary',
    'Barcode',
    'Page',
    'Document',
    'Folder',
    'CreatedDocumentIds',
    'PageImageData',
    'ImageData',
    'ImageSummary',
    'PageSummary',
    'DocumentSourceFile',
    'RejectedPage',
    'RejectedPages',
    'PageProperties',
    'Category',
    'ClassificationGroup',
    'DocumentType',
    'DocumentDataInput',
    'PageDataInput',
    'SplitDocumentInfo',
    'PageUpdate',
    'PagePropertiesIdentity',
    'DocumentSystemProperties',
    'FieldValueInput',
    'ValidationResult',
    'ReviewValidationResult',
    'ValidationExecutionContext',
    'CreatedFolders',
    'CreatedDocuments',
    'OperationResult',
    'FIELD_PROPERTY_IDS',
    'PAGE_PROPERTY_IDS',
    'ALL_PAGE_PROPERTY_NAMES',
    'page_property_name',
    'field_property_name'
]
