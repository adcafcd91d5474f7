"""
Field Operations Module

Reading and writing field values, properties and statuses of folders and
documents, plus helpers that resolve id-or-name field tokens.
"""

from .manager import FieldManager
from .identity import (
    FieldRef,
    is_field_id,
    resolve_field_identity,
    as_identity,
    field_update,
    table_row_updates
)

__all__ = [
    'FieldManager',
    'FieldRef',
    'is_field_id',
    'resolve_field_identity',
    'as_identity',
    'field_update',
    'table_row_updates'
]
