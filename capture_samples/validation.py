"""
Validation sample workflows.
"""

from typing import Any

from capture_models import (
    DocumentSystemProperties,
    FieldValueInput,
    ReviewValidationResult,
    ValidationExecutionContext,
    ValidationResult
)
from field_operations import resolve_field_identity


def _summary(field1: str, field2: str, results) -> str:
    return f"{field1}: {results[0].is_valid}, {field2}: {results[1].is_valid}"


def validate_document(client, session_id: str, document_id: str) -> bool:
    return client.validate_document(session_id, document_id)


def validate_document_field(client, session_id: str, document_type_id: str, field_name: str, field_value: Any) -> ValidationResult:
    return client.validate_document_field(session_id, document_type_id, field_name, field_value)


def validate_document_fields(
    client,
    session_id: str,
    document_type_id: str,
    field1: str,
    field1_value: Any,
    field2: str,
    field2_value: Any
) -> str:
    """Validate two values and report them as "field1: True, field2: False"."""
    results = client.validation.validate_document_fields(
        session_id,
        document_type_id,
        [
            FieldValueInput(identity=resolve_field_identity(field1), value=field1_value),
            FieldValueInput(identity=resolve_field_identity(field2), value=field2_value),
        ]
    )
    return _summary(field1, field2, results)


def validate_all_document_fields(
    client,
    session_id: str,
    document_type_id: str,
    field1: str,
    field1_value: Any,
    field2: str,
    field2_value: Any
) -> str:
    """Validate a full set of values for a two-page, review-valid document."""
    results = client.validation.validate_all_document_fields(
        session_id,
        document_type_id,
        {field1: field1_value, field2: field2_value},
        DocumentSystemProperties(page_count=2, rejected=False, review_valid=True)
    )
    return _summary(field1, field2, results)


def run_document_fields_validation(client, session_id: str, document_id: str, field_name: str) -> ValidationResult:
    return client.validation.run_document_fields_validation(session_id, document_id, [field_name])[0]


def validate_document_for_review(client, session_id: str, document_id: str) -> ReviewValidationResult:
    return client.validation.validate_document_for_review(session_id, document_id)


def get_validation_execution_context(client, session_id: str) -> ValidationExecutionContext:
    return client.validation.get_validation_execution_context(session_id)
