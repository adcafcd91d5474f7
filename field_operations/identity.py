"""
Field identity helpers.

Callers usually know a field by a single token: either its 32-hex-digit
stable id or its display name. These helpers turn such tokens into
FieldIdentity / FieldUpdate models.
"""

import re
from typing import Any, List, Mapping, Optional, Sequence, Union

from capture_models import FieldIdentity, FieldUpdate

FIELD_ID_PATTERN = re.compile(r'^[0-9A-Fa-f]{32}$')

FieldRef = Union[str, FieldIdentity]


def is_field_id(token: str) -> bool:
    """True when the token looks like a stable field id."""
    return bool(FIELD_ID_PATTERN.match(token))


def resolve_field_identity(id_or_name: str, table_row: int = -1, table_column: int = -1) -> FieldIdentity:
    """
    Build a FieldIdentity from an id-or-name token.

    A 32-hex-digit token is treated as a stable id, anything else as a name.

    Raises:
        ValueError: If the token is empty
    """
    if not id_or_name or not id_or_name.strip():
        raise ValueError("A field id or name is required")
    token = id_or_name.strip()
    if is_field_id(token):
        return FieldIdentity(id=token.upper(), table_row=table_row, table_column=table_column)
    return FieldIdentity(name=token, table_row=table_row, table_column=table_column)


def as_identity(field: FieldRef) -> FieldIdentity:
    """Accept either a ready FieldIdentity or an id-or-name token."""
    if isinstance(field, FieldIdentity):
        return field
    return resolve_field_identity(field)


def field_update(id_or_name: str, value: Any, table_row: int = -1, table_column: int = -1) -> FieldUpdate:
    """Shorthand for a FieldUpdate addressed by an id-or-name token."""
    return FieldUpdate(identity=resolve_field_identity(id_or_name, table_row, table_column), value=value)


def table_row_updates(
    table_field: FieldRef,
    row_index: int,
    row: Mapping[Union[str, int], Any],
    columns: Optional[Sequence[str]] = None
) -> List[FieldUpdate]:
    """
    Build the per-cell updates that write one line item of a table field.

    Args:
        table_field: The table field, by id-or-name token or FieldIdentity
        row_index: Row to write
        row: Cell values keyed by column index or column name
        columns: Column names in table order; required when row is keyed by name

    Returns:
        One FieldUpdate per cell, in the order of row

    Example:
        >>> table_row_updates("LineItems", 0, {"Quantity": 2, "Item": "Widget"},
        ...                   columns=["Quantity", "Item", "Unit Price", "Amount"])
    """
    if row_index < 0:
        raise ValueError("row_index must be zero or greater")
    base = as_identity(table_field)

    updates = []
    for key, value in row.items():
        if isinstance(key, int):
            column = key
        else:
            if columns is None:
                raise ValueError(f"Column '{key}' given by name but no column list supplied")
            try:
                column = list(columns).index(key)
            except ValueError:
                raise ValueError(f"Unknown column '{key}', expected one of {list(columns)}") from None
        identity = FieldIdentity(id=base.id, name=base.name, table_row=row_index, table_column=column)
        updates.append(FieldUpdate(identity=identity, value=value))
    return updates
