"""
Folder sample workflows.

Each workflow takes a CaptureClient and a session id and runs a short,
fixed sequence of folder operations against the service.
"""

import logging
from typing import Optional

from capture_models import (
    VALID_FIELD_ID,
    CreatedFolders,
    FieldOwnerKind,
    FieldStatus,
    ReviewStatus
)
from capture_ops_exceptions import InvalidOperationFault, PreconditionFault
from field_operations import field_update

logger = logging.getLogger(__name__)

SAMPLE_FOLDER_TYPE = "SDKSample"
SAMPLE_ERROR_MESSAGE = "A sample error message."
SAMPLE_CONFIRMED_VALUE = "A sample value"


def create_folders(client, session_id: str) -> CreatedFolders:
    """
    Build a small folder tree.

    The root folder gets the SDKSample folder type. Child folder 1 is
    appended and starts out Valid, child folders 2 and 3 are placed at
    positions 1 and 2, and a grandchild is appended under child folder 2.
    """
    created = CreatedFolders()
    created.root_folder_id = client.create_folder(session_id, folder_type=SAMPLE_FOLDER_TYPE)
    created.child_folder1_id = client.create_folder(
        session_id,
        parent_id=created.root_folder_id,
        fields=[field_update(VALID_FIELD_ID, True)],
        insert_index=-1
    )
    created.child_folder2_id = client.create_folder(session_id, parent_id=created.root_folder_id, insert_index=1)
    created.child_folder3_id = client.create_folder(session_id, parent_id=created.root_folder_id, insert_index=2)
    created.grand_child_folder1_id = client.create_folder(
        session_id, parent_id=created.child_folder2_id, insert_index=-1
    )
    logger.info(f"Created sample folder tree under root '{created.root_folder_id}'")
    return created


def create_online_learning_folder(client, session_id: str, max_document_samples: int = 10) -> str:
    return client.folders.create_online_learning_folder(session_id, max_document_samples)


def move_folder(client, session_id: str, folder_id: str, parent_folder_id: str, sibling_folder_id: str) -> None:
    """
    Reorder a folder among its siblings and put it back.

    Moving the folder into a sibling would change its tree level; the service
    rejects that and the workflow carries on.
    """
    parent = client.folders.get_folder(session_id, parent_folder_id)
    original_index = parent.folder_index(folder_id)

    client.move_folder(session_id, folder_id, parent_folder_id, 0)

    result = client.attempt(
        client.move_folder, session_id, folder_id, sibling_folder_id, 0,
        expected=(InvalidOperationFault,)
    )
    if result.ok:
        logger.warning(f"Folder '{folder_id}' moved into sibling '{sibling_folder_id}' unexpectedly")

    client.move_folder(session_id, folder_id, parent_folder_id, original_index)


def split_folder(client, session_id: str, folder_id: str, document_index: int) -> str:
    return client.split_folder(session_id, folder_id, document_index)


def delete_folder(client, session_id: str, folder_id: str) -> None:
    client.delete_folder(session_id, folder_id)


def set_folder_field_status(client, session_id: str, folder_id: str, field_id_or_name: str) -> None:
    """
    Walk a folder field through every status.

    VERIFIED is only accepted while the folder is valid, so that step may be
    refused with a PreconditionFault.
    """
    def set_status(status, error_message=None, value=None):
        return client.set_field_status(
            session_id, folder_id, field_id_or_name, status,
            error_message=error_message, value=value, owner_kind=FieldOwnerKind.FOLDER
        )

    set_status(FieldStatus.INVALID, error_message=SAMPLE_ERROR_MESSAGE)
    set_status(FieldStatus.VALID)
    set_status(FieldStatus.FORCE_VALID)
    set_status(FieldStatus.CONFIRMED, value=SAMPLE_CONFIRMED_VALUE)
    client.attempt(set_status, FieldStatus.VERIFIED, expected=(PreconditionFault,))
    set_status(FieldStatus.UNVERIFIED)


def set_folder_status(client, session_id: str, folder_id: str) -> None:
    """Review invalid, review valid, override, then restore."""
    client.folders.set_folder_status(session_id, folder_id, ReviewStatus.REVIEW_INVALID, SAMPLE_ERROR_MESSAGE)
    client.folders.set_folder_status(session_id, folder_id, ReviewStatus.REVIEW_VALID)
    client.folders.set_folder_status(session_id, folder_id, ReviewStatus.OVERRIDE)
    client.folders.set_folder_status(session_id, folder_id, ReviewStatus.RESTORE)


def update_folder_field_value(
    client,
    session_id: str,
    folder_id: str,
    system_field: Optional[str],
    system_value,
    data_field: Optional[str],
    data_value
) -> None:
    """Update a system field and a data field with one call each; blank field names are skipped."""
    if system_field and system_field.strip():
        client.fields.update_field_value(
            session_id, FieldOwnerKind.FOLDER, folder_id, system_field, system_value
        )
    if data_field and data_field.strip():
        client.fields.update_field_value(
            session_id, FieldOwnerKind.FOLDER, folder_id, data_field, data_value
        )


def update_folder_field_values(
    client,
    session_id: str,
    folder_id: str,
    system_field: str,
    system_value,
    data_field: Optional[str],
    data_value
) -> None:
    """Update a system field and a data field in a single batch."""
    if not data_field or not data_field.strip():
        return
    client.fields.update_folder_field_values(
        session_id,
        folder_id,
        [field_update(system_field, system_value), field_update(data_field, data_value)]
    )


def get_folder_field_values(client, session_id: str, folder_id: str, system_field: str, data_field: str) -> Optional[str]:
    """Read two folder fields and join their values as "system|data"."""
    if not system_field or not data_field:
        return None
    values = client.fields.get_folder_field_values(session_id, folder_id, [system_field, data_field])
    return "|".join("" if v.value is None else str(v.value) for v in values)
