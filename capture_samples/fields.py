"""
Field sample workflows: reading and writing field values and properties,
table line items and field alternatives.
"""

import logging
from typing import Any, Mapping, Optional

from capture_models import FieldOwnerKind, FieldProperties, FieldSystemProperty
from field_operations import field_update, resolve_field_identity

logger = logging.getLogger(__name__)

LINE_ITEM_COLUMNS = ["Quantity", "Item", "Unit Price", "Amount"]


def update_document_field_value(
    client,
    session_id: str,
    document_id: str,
    system_field: str,
    system_value: Any,
    data_field: str,
    data_value: Any
) -> None:
    """Update a system field and then a data field, one call each."""
    client.fields.update_field_value(session_id, FieldOwnerKind.DOCUMENT, document_id, system_field, system_value)
    client.fields.update_field_value(session_id, FieldOwnerKind.DOCUMENT, document_id, data_field, data_value)


def insert_line_item(
    client,
    session_id: str,
    document_id: str,
    table_field: str,
    row_index: int,
    line_item: Mapping[str, Any]
) -> None:
    """
    Write one line item into a table field.

    line_item maps column names (Quantity, Item, Unit Price, Amount) to
    values. The row must already exist; see insert_table_field_row.
    """
    client.fields.update_table_row(session_id, document_id, table_field, row_index, line_item, LINE_ITEM_COLUMNS)


def insert_table_field_row(client, session_id: str, document_id: str, table_field: str) -> None:
    client.fields.insert_table_field_row(session_id, document_id, table_field, -1)


def copy_document_field_values(client, session_id: str, source_id: str, destination_id: str) -> None:
    client.documents.copy_document_field_values(session_id, source_id, destination_id)


def update_document_field_property_values(
    client,
    session_id: str,
    document_id: str,
    field1: str,
    field1_value: Any,
    field1_error: str,
    field2: str,
    field2_value: Any,
    field2_extraction_confident: bool,
    field3: str,
    field3_row: int,
    field3_column: int,
    field3_value: Any,
    field3_width: Any
) -> None:
    """
    Write system properties of three fields in one call.

    Field 1 gets a value and an error description, field 2 a value and its
    extraction-confident flag, and the field 3 table cell a value and a width.
    """
    client.fields.update_document_field_property_values(
        session_id,
        document_id,
        [
            FieldProperties(
                identity=resolve_field_identity(field1),
                properties=[
                    FieldSystemProperty(name="Value", value=field1_value),
                    FieldSystemProperty(name="ErrorDescription", value=field1_error),
                ]
            ),
            FieldProperties(
                identity=resolve_field_identity(field2),
                properties=[
                    FieldSystemProperty(name="Value", value=field2_value),
                    FieldSystemProperty(name="ExtractionConfident", value=field2_extraction_confident),
                ]
            ),
            FieldProperties(
                identity=resolve_field_identity(field3, field3_row, field3_column),
                properties=[
                    FieldSystemProperty(name="Value", value=field3_value),
                    FieldSystemProperty(name="Width", value=field3_width),
                ]
            ),
        ]
    )


def get_document_field_value(client, session_id: str, document_id: str, system_field: str, data_field: str) -> str:
    """Read a system field and a data field and join their values as "system|data"."""
    values = [
        client.fields.get_document_field_value(session_id, document_id, field).value
        for field in (system_field, data_field)
    ]
    return "|".join("" if v is None else str(v) for v in values)


def get_document_field_alternative(client, session_id: str, document_id: str, field: str) -> Optional[str]:
    """Text of the best alternative for a field, or None when the service has none."""
    alternatives = client.fields.get_document_field_alternatives(session_id, document_id, [field], 1)
    if alternatives and alternatives[0].alternatives:
        return alternatives[0].alternatives[0].text
    return None


def update_document_field_values(client, session_id: str, document_id: str, values: Mapping[str, Any]) -> None:
    """Write several fields, given as id-or-name -> value, in one batch."""
    client.fields.update_document_field_values(
        session_id, document_id, [field_update(name, value) for name, value in values.items()]
    )
