"""
Document sample workflows.

The create workflows look up the "NW Form" and "TS Form" document types in
the "SDK Samples" category of the capture configuration.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

from capture_models import (
    VALID_FIELD_ID,
    REVIEW_VALID_FIELD_ID,
    FIELD_PROPERTY_IDS,
    CreatedDocuments,
    DocumentDataInput,
    DocumentSourceFile,
    FieldProperties,
    FieldStatus,
    FieldSystemProperty,
    LockedItemType,
    PageDataInput,
    PAGE_PROPERTY_IDS,
    ReviewStatus,
    SplitDocumentInfo
)
from capture_ops_exceptions import PreconditionFault
from field_operations import field_update, resolve_field_identity
from utils.files import read_image_bytes

from .folders import SAMPLE_ERROR_MESSAGE, SAMPLE_CONFIRMED_VALUE

logger = logging.getLogger(__name__)

SAMPLE_CATEGORY = "SDK Samples"
SAMPLE_CLASSIFICATION_GROUP = "SDK Samples Group"
NORTHWEST_FORM = "NW Form"
TRI_SPECTRUM_FORM = "TS Form"

SPLIT_CONFIDENCE_LEVEL = 0.45


def sample_document_type_ids(client, session_id: str) -> Tuple[str, str]:
    """Ids of the Northwest and Tri-Spectrum order form document types."""
    northwest = client.catalog.find_document_type_id(
        session_id, SAMPLE_CATEGORY, SAMPLE_CLASSIFICATION_GROUP, NORTHWEST_FORM
    )
    tri_spectrum = client.catalog.find_document_type_id(
        session_id, SAMPLE_CATEGORY, SAMPLE_CLASSIFICATION_GROUP, TRI_SPECTRUM_FORM
    )
    return northwest, tri_spectrum


def _named_field_properties(field_name: str, value, width: int) -> FieldProperties:
    # Properties addressed by id, the way configuration exports carry them
    return FieldProperties(
        identity=resolve_field_identity(field_name),
        properties=[
            FieldSystemProperty(name=FIELD_PROPERTY_IDS["Value"], value=value),
            FieldSystemProperty(name=FIELD_PROPERTY_IDS["Width"], value=width),
        ]
    )


def _review_fields(valid: bool, review_valid: bool = False):
    return [field_update(VALID_FIELD_ID, valid), field_update(REVIEW_VALID_FIELD_ID, review_valid)]


def create_documents(
    client,
    session_id: str,
    parent_id: str,
    file_path1: Union[str, Path],
    file_path2: Union[str, Path]
) -> CreatedDocuments:
    """
    Create two typed documents from local files under parent_id.

    Document 1 is a valid Northwest form at position 0, document 2 a
    Tri-Spectrum form at position 1. A third document is created without a
    parent, which makes the service create a root folder for it; that folder
    is deleted again.
    """
    northwest_id, tri_spectrum_id = sample_document_type_ids(client, session_id)

    created = CreatedDocuments()
    created.document1_id = client.create_document(
        session_id,
        parent_id=parent_id,
        fields=[field_update(VALID_FIELD_ID, True)],
        file_path=file_path1,
        insert_index=0,
        document_type_id=northwest_id
    ).document_id
    created.document2_id = client.create_document(
        session_id,
        parent_id=parent_id,
        file_path=file_path2,
        insert_index=1,
        document_type_id=tri_spectrum_id
    ).document_id

    folder_id = client.create_document(session_id, file_path=file_path1, insert_index=0).folder_id
    client.delete_folder(session_id, folder_id)
    return created


def create_documents2(client, session_id: str, parent_id: str) -> CreatedDocuments:
    """Create a Northwest and a Tri-Spectrum document with one call, with field values and widths."""
    northwest_id, tri_spectrum_id = sample_document_type_ids(client, session_id)
    results = client.documents.create_documents(
        session_id,
        parent_id,
        _review_fields(False),
        [
            DocumentDataInput(
                document_type_id=northwest_id,
                fields=_review_fields(True),
                field_properties=[
                    _named_field_properties("CustomerName", "First and Last Name", 150),
                    _named_field_properties("Address", "Street City Zip", 250),
                ]
            ),
            DocumentDataInput(
                document_type_id=tri_spectrum_id,
                fields=_review_fields(False),
                field_properties=[
                    _named_field_properties("CustomerName", "Another Name", 175),
                    _named_field_properties("Address", "Another Address", 275),
                ]
            ),
        ]
    )
    return CreatedDocuments(document1_id=results[0].document_id, document2_id=results[1].document_id)


def create_document3(client, session_id: str, parent_id: str) -> str:
    """Create one Northwest document, without pages, at the front of the folder."""
    northwest_id, _ = sample_document_type_ids(client, session_id)
    document = DocumentDataInput(
        document_type_id=northwest_id,
        fields=_review_fields(True),
        field_properties=[
            _named_field_properties("CustomerName", "First and Last Name", 150),
            _named_field_properties("Address", "Street City Zip", 250),
        ]
    )
    return client.documents.create_document_with_pages(
        session_id, parent_id, _review_fields(False), document, insert_index=0
    ).document_id


def create_document_with_pages(
    client,
    session_id: str,
    parent_id: str,
    file_path1: Union[str, Path],
    file_path2: Union[str, Path]
) -> str:
    """Create a Northwest document whose two pages are the front and back of one sheet."""
    northwest_id, _ = sample_document_type_ids(client, session_id)
    document = DocumentDataInput(document_type_id=northwest_id, fields=_review_fields(False))
    pages = [
        PageDataInput(
            image=read_image_bytes(file_path),
            fields=[
                field_update(PAGE_PROPERTY_IDS["SheetId"], "Sheet1"),
                field_update(PAGE_PROPERTY_IDS["IsFront"], is_front),
            ]
        )
        for file_path, is_front in ((file_path1, True), (file_path2, False))
    ]
    return client.documents.create_document_with_pages(session_id, parent_id, None, document, pages).document_id


def copy_document(client, session_id: str, source_id: str, field_name_to_copy: str) -> str:
    """
    Copy one field into a new document, then copy everything into it.

    An empty field list copies all of the source's properties and field data.
    """
    new_id = client.documents.copy_document(session_id, source_id, None, [field_name_to_copy])
    client.documents.copy_document(session_id, source_id, new_id, [])
    return new_id


def copy_document_with_pages(client, session_id: str, document_id: str) -> str:
    return client.documents.copy_document_with_pages(session_id, document_id, -1)


def move_document(client, session_id: str, document_id: str, folder_id: str) -> None:
    """Move a document to the front of another folder, then back to where it was."""
    document = client.documents.get_document(session_id, document_id)
    parent = client.folders.get_folder(session_id, document.parent_id)
    original_index = parent.document_index(document_id)

    client.documents.move_document(session_id, document_id, folder_id, 0)
    client.documents.move_document(session_id, document_id, document.parent_id, original_index)


def split_document(client, session_id: str, document_id: str, page_index: int) -> str:
    """Split at page_index and merge the new document straight back."""
    new_id = client.split_document(session_id, document_id, page_index)
    client.merge_documents(session_id, [document_id, new_id])
    return new_id


def split_document_and_classify(client, session_id: str, document_id: str, page_index: int) -> str:
    """Split off a new document of the same type with a low-confidence classification."""
    document = client.documents.get_document(session_id, document_id)
    created = client.documents.split_document_and_classify(
        session_id,
        document_id,
        [
            SplitDocumentInfo(
                split_index=page_index,
                document_type_id=document.document_type.id if document.document_type else None,
                classification_confident=False,
                confidence_level=SPLIT_CONFIDENCE_LEVEL,
                review_valid=False
            )
        ]
    )
    return created[0].document_id


def merge_documents(client, session_id: str, document_id1: str, document_id2: str) -> str:
    return client.merge_documents(session_id, [document_id1, document_id2])


def reject_and_unreject(client, session_id: str, document_id1: str, document_id2: str, reason: str) -> None:
    client.documents.reject_document(session_id, document_id1, reason)
    client.documents.reject_document(session_id, document_id2, reason)
    client.documents.unreject_documents(session_id, [document_id1, document_id2])


def delete_documents(client, session_id: str, document_ids: Sequence[str]) -> None:
    client.documents.delete_documents(session_id, document_ids)


def set_document_field_status(client, session_id: str, document_id: str, field_id_or_name: str) -> None:
    """
    Walk a document field through every status.

    VERIFIED is refused while the document is not valid. The last step sets
    the field's extraction-confident flag.
    """
    def set_status(status, error_message=None, value=None):
        return client.set_field_status(
            session_id, document_id, field_id_or_name, status, error_message=error_message, value=value
        )

    set_status(FieldStatus.INVALID, error_message=SAMPLE_ERROR_MESSAGE)
    set_status(FieldStatus.VALID)
    set_status(FieldStatus.FORCE_VALID)
    set_status(FieldStatus.CONFIRMED, value=SAMPLE_CONFIRMED_VALUE)
    client.attempt(set_status, FieldStatus.VERIFIED, expected=(PreconditionFault,))
    set_status(FieldStatus.UNVERIFIED)
    set_status(FieldStatus.EXTRACTION_CONFIDENT, value=True)


def set_document_status(client, session_id: str, document_id: str) -> None:
    client.documents.set_document_status(session_id, document_id, ReviewStatus.REVIEW_INVALID, SAMPLE_ERROR_MESSAGE)
    client.documents.set_document_status(session_id, document_id, ReviewStatus.REVIEW_VALID)
    client.documents.set_document_status(session_id, document_id, ReviewStatus.OVERRIDE)
    client.documents.set_document_status(session_id, document_id, ReviewStatus.RESTORE)


def update_document_type(
    client,
    session_id: str,
    document_id: str,
    document_type_id: str,
    confidence_level: Optional[float] = None,
    classification_confident: Optional[bool] = None
) -> None:
    client.documents.update_document_type(
        session_id, document_id, document_type_id, confidence_level, classification_confident
    )


def update_source_file(client, session_id: str, document_id: str, file_path: Union[str, Path]) -> None:
    client.documents.update_source_file(session_id, document_id, file_path)


def get_source_file(client, session_id: str, document_id: str) -> DocumentSourceFile:
    return client.documents.get_source_file(session_id, document_id)


def get_document_file_length(client, session_id: str, document_id: str, file_type: str) -> int:
    """Size of the document rendered as file_type, 0 when the service has no such file."""
    data = client.documents.get_document_file(session_id, document_id, file_type)
    return len(data) if data is not None else 0


def get_text_extension(client, session_id: str, document_id: str, name: str) -> Optional[str]:
    return client.documents.get_text_extension(session_id, document_id, name)


def delete_extension(client, session_id: str, document_id: str, name: str) -> None:
    client.documents.delete_extension(session_id, document_id, name)


def force_unlock_items(client, session_id: str, folder_id: str, document_id: str) -> None:
    """Release the document lock, then the folder lock."""
    client.documents.force_unlock_item(session_id, document_id, LockedItemType.DOCUMENT)
    client.documents.force_unlock_item(session_id, folder_id, LockedItemType.FOLDER)
