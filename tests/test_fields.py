"""Tests for field_operations: identity resolution, values, statuses and table fields."""

import pytest
from pydantic import ValidationError

from capture_models import (
    VALID_FIELD_ID,
    FieldIdentity,
    FieldOwnerKind,
    FieldProperties,
    FieldStatus,
    FieldSystemProperty
)
from capture_ops_exceptions import InvalidOperationFault, NotFoundFault, PreconditionFault
from field_operations import field_update, resolve_field_identity, table_row_updates

COLUMNS = ["Quantity", "Item", "Unit Price", "Amount"]


class TestIdentity:
    """Id-or-name tokens and table cell identities."""

    def test_hex_token_is_an_id(self):
        identity = resolve_field_identity(VALID_FIELD_ID.lower())
        assert identity.id == VALID_FIELD_ID
        assert identity.name is None

    def test_other_token_is_a_name(self):
        identity = resolve_field_identity("  CustomerName ")
        assert identity.name == "CustomerName"
        assert identity.id is None
        assert identity.is_table_cell is False

    def test_empty_token_rejected(self):
        with pytest.raises(ValueError):
            resolve_field_identity("   ")

    def test_cell_needs_row_and_column(self):
        with pytest.raises(ValidationError):
            FieldIdentity(name="LineItems", table_row=0)

    def test_identity_needs_id_or_name(self):
        with pytest.raises(ValidationError):
            FieldIdentity()

    def test_cell_label(self):
        assert resolve_field_identity("LineItems", 1, 2).label == "LineItems[1,2]"

    def test_table_row_updates_by_column_name(self):
        updates = table_row_updates("LineItems", 3, {"Item": "Widget", "Amount": 9.5}, COLUMNS)
        assert [(u.identity.table_row, u.identity.table_column, u.value) for u in updates] == [
            (3, 1, "Widget"),
            (3, 3, 9.5),
        ]

    def test_table_row_updates_by_column_index(self):
        updates = table_row_updates("LineItems", 0, {0: 2})
        assert updates[0].identity.table_column == 0

    @pytest.mark.parametrize("row, columns", [
        ({"Item": "Widget"}, None),
        ({"Colour": "Red"}, COLUMNS),
    ])
    def test_table_row_updates_bad_columns(self, row, columns):
        with pytest.raises(ValueError):
            table_row_updates("LineItems", 0, row, columns)

    def test_table_row_updates_negative_row(self):
        with pytest.raises(ValueError):
            table_row_updates("LineItems", -1, {0: 1})


class TestFieldValues:
    """Single and batch writes go through one call each."""

    def test_single_update_is_one_call(self, client, session_id, make_document, backend):
        document_id = make_document(page_count=1)
        calls_before = len(backend.calls)

        client.fields.update_field_value(session_id, FieldOwnerKind.DOCUMENT, document_id, "CustomerName", "Jane")

        assert backend.calls[calls_before:] == ["UpdateDocumentFieldValues"]
        assert client.fields.get_document_field_value(session_id, document_id, "CustomerName").value == "Jane"

    def test_batch_update_and_read(self, client, session_id, make_document):
        document_id = make_document(page_count=1)

        client.fields.update_document_field_values(
            session_id, document_id, [field_update("CustomerName", "Jane"), field_update("Address", "Main St")]
        )

        values = client.fields.get_document_field_values(session_id, document_id, ["Address", "CustomerName"])
        assert [v.value for v in values] == ["Main St", "Jane"]
        assert values[0].identity.name == "Address"
        assert values[0].identity.id is not None

    def test_empty_batch_rejected(self, client, session_id, make_document):
        document_id = make_document(page_count=1)
        with pytest.raises(ValueError):
            client.fields.update_document_field_values(session_id, document_id, [])

    def test_unknown_field_faults(self, client, session_id, make_document):
        document_id = make_document(page_count=1)
        with pytest.raises(NotFoundFault):
            client.fields.update_field_value(session_id, "document", document_id, "NoSuchField", 1)

    def test_valid_field_by_id_coerces_to_bool(self, client, session_id, folders):
        client.fields.update_folder_field_values(session_id, folders.child_folder2_id, [field_update(VALID_FIELD_ID, "true")])
        assert client.folders.get_folder(session_id, folders.child_folder2_id).valid is True

    def test_folder_field_values(self, client, session_id, folders):
        client.fields.update_field_value(session_id, FieldOwnerKind.FOLDER, folders.root_folder_id, "Region", "North")

        values = client.fields.get_folder_field_values(session_id, folders.root_folder_id, ["Region", "Valid"])
        assert [v.value for v in values] == ["North", False]

    def test_property_values(self, client, session_id, make_document):
        document_id = make_document(page_count=1)

        client.fields.update_document_field_property_values(
            session_id,
            document_id,
            [FieldProperties(
                identity=resolve_field_identity("CustomerName"),
                properties=[
                    FieldSystemProperty(name="Value", value="Jane"),
                    FieldSystemProperty(name="ErrorDescription", value="Check spelling"),
                    FieldSystemProperty(name="ExtractionConfident", value=True),
                ]
            )]
        )

        value = client.fields.get_document_field_value(session_id, document_id, "CustomerName")
        assert value.value == "Jane"
        assert value.error_message == "Check spelling"
        assert value.extraction_confident is True

    def test_alternatives(self, client, session_id, make_document):
        document_id = make_document(page_count=1)
        client.fields.update_field_value(session_id, "document", document_id, "CustomerName", "Jane")

        alternatives = client.fields.get_document_field_alternatives(session_id, document_id, ["CustomerName", "Address"])

        assert [a.text for a in alternatives[0].alternatives] == ["Jane"]
        assert alternatives[1].alternatives == []

    def test_alternatives_limit_checked_locally(self, client, session_id, make_document):
        document_id = make_document(page_count=1)
        with pytest.raises(ValueError):
            client.fields.get_document_field_alternatives(session_id, document_id, ["CustomerName"], 0)


class TestFieldStatus:
    """Status transitions and the Verified guard."""

    def test_invalid_stores_message(self, client, session_id, make_document):
        document_id = make_document(page_count=1)

        client.set_field_status(session_id, document_id, "CustomerName", FieldStatus.INVALID, error_message="Missing")

        value = client.fields.get_document_field_value(session_id, document_id, "CustomerName")
        assert value.status == FieldStatus.INVALID
        assert value.error_message == "Missing"

    def test_confirmed_writes_value(self, client, session_id, make_document):
        document_id = make_document(page_count=1)

        client.set_field_status(session_id, document_id, "Address", FieldStatus.CONFIRMED, value="Main St")

        value = client.fields.get_document_field_value(session_id, document_id, "Address")
        assert value.status == FieldStatus.CONFIRMED
        assert value.value == "Main St"

    def test_verified_requires_valid_owner(self, client, session_id, make_document):
        document_id = make_document(page_count=1, valid=False)

        with pytest.raises(PreconditionFault) as exc_info:
            client.set_field_status(session_id, document_id, "CustomerName", FieldStatus.VERIFIED)

        assert exc_info.value.operation == "SetDocumentFieldStatus"
        value = client.fields.get_document_field_value(session_id, document_id, "CustomerName")
        assert value.status != FieldStatus.VERIFIED

    def test_verified_on_valid_owner(self, client, session_id, make_document):
        document_id = make_document(page_count=1, valid=True)

        client.set_field_status(session_id, document_id, "CustomerName", FieldStatus.VERIFIED)

        value = client.fields.get_document_field_value(session_id, document_id, "CustomerName")
        assert value.status == FieldStatus.VERIFIED

    def test_verified_on_folder_field(self, client, session_id, folders):
        client.set_field_status(
            session_id, folders.child_folder1_id, "Valid", FieldStatus.VERIFIED, owner_kind=FieldOwnerKind.FOLDER
        )
        with pytest.raises(PreconditionFault):
            client.set_field_status(
                session_id, folders.child_folder2_id, "Valid", FieldStatus.VERIFIED, owner_kind=FieldOwnerKind.FOLDER
            )

    def test_extraction_confident_sets_flag_only(self, client, session_id, make_document):
        document_id = make_document(page_count=1)
        client.set_field_status(session_id, document_id, "CustomerName", FieldStatus.VALID)

        client.set_field_status(session_id, document_id, "CustomerName", FieldStatus.EXTRACTION_CONFIDENT, value=True)

        value = client.fields.get_document_field_value(session_id, document_id, "CustomerName")
        assert value.extraction_confident is True
        assert value.status == FieldStatus.VALID


class TestTableFields:
    def test_insert_row_and_write_line_item(self, client, session_id, make_document):
        document_id = make_document(page_count=1)
        client.fields.insert_table_field_row(session_id, document_id, "LineItems")

        client.fields.update_table_row(
            session_id, document_id, "LineItems", 0,
            {"Quantity": 2, "Item": "Widget", "Unit Price": 1.5, "Amount": 3.0}, COLUMNS
        )

        cell = client.fields.get_document_field_value(
            session_id, document_id, resolve_field_identity("LineItems", 0, 1)
        )
        assert cell.value == "Widget"
        table = client.fields.get_document_field_value(session_id, document_id, "LineItems")
        assert table.value == [{"Quantity": 2, "Item": "Widget", "Unit Price": 1.5, "Amount": 3.0}]

    def test_cell_write_needs_existing_row(self, client, session_id, make_document):
        document_id = make_document(page_count=1)
        with pytest.raises(NotFoundFault):
            client.fields.update_table_row(session_id, document_id, "LineItems", 0, {0: 1})

    def test_whole_table_write_rejected(self, client, session_id, make_document):
        document_id = make_document(page_count=1)
        with pytest.raises(InvalidOperationFault):
            client.fields.update_field_value(session_id, "document", document_id, "LineItems", [])

    def test_rows_insert_at_index(self, client, session_id, make_document):
        document_id = make_document(page_count=1)
        for _ in range(2):
            client.fields.insert_table_field_row(session_id, document_id, "LineItems")
        client.fields.update_table_row(session_id, document_id, "LineItems", 0, {1: "first"})

        client.fields.insert_table_field_row(session_id, document_id, "LineItems", 0)

        table = client.fields.get_document_field_value(session_id, document_id, "LineItems")
        assert [row["Item"] for row in table.value] == [None, "first", None]
