"""Tests for validation_operations."""

import pytest

from capture_models import FieldStatus, FieldValueInput, DocumentSystemProperties
from capture_ops_exceptions import NotFoundFault
from field_operations import resolve_field_identity


class TestDocumentValidation:
    """Validation of stored documents updates Valid and field statuses."""

    def test_validate_document_updates_valid(self, client, session_id, make_document):
        document_id = make_document(page_count=1, valid=True)

        assert client.validate_document(session_id, document_id) is False
        assert client.documents.get_document(session_id, document_id).valid is False

        client.fields.update_field_value(session_id, "document", document_id, "CustomerName", "Jane Doe")
        assert client.validate_document(session_id, document_id) is True
        assert client.documents.get_document(session_id, document_id).valid is True

    def test_run_fields_validation_sets_status(self, client, session_id, make_document):
        document_id = make_document(page_count=1)
        client.fields.update_field_value(session_id, "document", document_id, "Address", "Main St")

        results = client.validation.run_document_fields_validation(session_id, document_id, ["CustomerName", "Address"])

        assert [r.is_valid for r in results] == [False, True]
        assert results[0].error_message == "CustomerName is required"
        values = client.fields.get_document_field_values(session_id, document_id, ["CustomerName", "Address"])
        assert [v.status for v in values] == [FieldStatus.INVALID, FieldStatus.VALID]

    def test_run_fields_validation_needs_fields(self, client, session_id, make_document):
        document_id = make_document(page_count=1)
        with pytest.raises(ValueError):
            client.validation.run_document_fields_validation(session_id, document_id, [])

    def test_validate_for_review(self, client, session_id, make_document):
        document_id = make_document(page_count=1)

        result = client.validation.validate_document_for_review(session_id, document_id)

        assert result.is_valid is False
        assert result.invalid_fields == ["CustomerName"]

    def test_rejected_document_not_ready_for_review(self, client, session_id, make_document):
        document_id = make_document(page_count=1)
        client.fields.update_field_value(session_id, "document", document_id, "CustomerName", "Jane Doe")
        client.documents.reject_document(session_id, document_id, "Duplicate")

        result = client.validation.validate_document_for_review(session_id, document_id)

        assert result.is_valid is False
        assert result.invalid_fields == []


class TestStatelessValidation:
    """Values validated against a document type without a stored document."""

    def test_validate_single_field(self, client, session_id, document_types):
        result = client.validate_document_field(session_id, document_types[0], "CustomerName", "  Jane ")
        assert result.is_valid is True
        assert result.formatted_value == "Jane"

        result = client.validate_document_field(session_id, document_types[0], "CustomerName", "")
        assert result.is_valid is False

    def test_unknown_field_faults(self, client, session_id, document_types):
        with pytest.raises(NotFoundFault):
            client.validate_document_field(session_id, document_types[0], "Nope", "x")

    def test_validate_fields_keeps_order(self, client, session_id, document_types):
        results = client.validation.validate_document_fields(
            session_id,
            document_types[0],
            [
                FieldValueInput(identity=resolve_field_identity("Address"), value="Main St"),
                FieldValueInput(identity=resolve_field_identity("CustomerName"), value=None),
            ]
        )
        assert [(r.field_name, r.is_valid) for r in results] == [("Address", True), ("CustomerName", False)]

    def test_validate_fields_from_mapping(self, client, session_id, document_types):
        results = client.validation.validate_document_fields(
            session_id, document_types[1], {"CustomerName": "Jane"}
        )
        assert results[0].is_valid is True

    def test_validate_fields_needs_values(self, client, session_id, document_types):
        with pytest.raises(ValueError):
            client.validation.validate_document_fields(session_id, document_types[0], {})

    def test_validate_all_fields(self, client, session_id, document_types):
        results = client.validation.validate_all_document_fields(
            session_id,
            document_types[0],
            {"Address": "Main St", "LineItems": [{"Quantity": "two", "Item": "Widget"}]},
            DocumentSystemProperties(page_count=2, review_valid=True)
        )

        assert [r.field_name for r in results] == ["Address", "LineItems", "CustomerName"]
        assert [r.is_valid for r in results] == [True, False, False]
        assert results[1].error_message == "Quantity in row 0 must be a number"

    def test_execution_context(self, client, session_id):
        context = client.validation.get_validation_execution_context(session_id)
        assert context.component == "MockCaptureBackend"
