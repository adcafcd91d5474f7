"""
Validation Manager for the capture service.

All validation rules live on the service. This manager sends values (or
references to stored values) and returns the service's verdicts.
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

from connection_management import ConnectionManager
from capture_models import (
    DocumentSystemProperties,
    FieldIdentity,
    FieldValueInput,
    ReviewValidationResult,
    ValidationExecutionContext,
    ValidationResult
)
from field_operations.identity import FieldRef, as_identity, resolve_field_identity

logger = logging.getLogger(__name__)

FieldValues = Union[Mapping[str, Any], Sequence[FieldValueInput]]


def _field_inputs(fields: FieldValues) -> List[dict]:
    if isinstance(fields, Mapping):
        inputs = [FieldValueInput(identity=resolve_field_identity(name), value=value) for name, value in fields.items()]
    else:
        inputs = list(fields)
    if not inputs:
        raise ValueError("At least one field value is required")
    return [i.model_dump() for i in inputs]


class ValidationManager:
    """
    Runs service-side validation of documents and field values.

    Stateless checks (validate_document_field, validate_document_fields,
    validate_all_document_fields) validate values against a document type
    without touching any document.
    """

    def __init__(self, connection_manager: ConnectionManager):
        """
        Initialize the ValidationManager.

        Args:
            connection_manager: The ConnectionManager used for remote calls
        """
        self._connection_manager = connection_manager

    def validate_document(self, session_id: str, document_id: str) -> bool:
        """Validate a stored document; the service updates its Valid field."""
        is_valid = self._connection_manager.call("ValidateDocument", session_id, document_id=document_id)
        logger.info(f"Document '{document_id}' validated: {'valid' if is_valid else 'invalid'}")
        return bool(is_valid)

    def validate_document_field(
        self,
        session_id: str,
        document_type_id: str,
        name: Union[str, FieldIdentity],
        value: Any
    ) -> ValidationResult:
        """Validate one value against a field of a document type."""
        field = FieldValueInput(identity=as_identity(name), value=value)
        result = self._connection_manager.call(
            "ValidateDocumentField",
            session_id,
            document_type_id=document_type_id,
            field=field.model_dump()
        )
        return ValidationResult.model_validate(result)

    def validate_document_fields(
        self,
        session_id: str,
        document_type_id: str,
        fields: FieldValues
    ) -> List[ValidationResult]:
        """
        Validate several values against a document type.

        fields is either a name -> value mapping or a sequence of
        FieldValueInput. Results come back in the same order.
        """
        results = self._connection_manager.call(
            "ValidateDocumentFields",
            session_id,
            document_type_id=document_type_id,
            fields=_field_inputs(fields)
        )
        return [ValidationResult.model_validate(r) for r in results]

    def validate_all_document_fields(
        self,
        session_id: str,
        document_type_id: str,
        fields: FieldValues,
        system_properties: Optional[DocumentSystemProperties] = None
    ) -> List[ValidationResult]:
        """
        Validate a complete set of field values for a document type.

        Supplied fields come first, in order, followed by the type's
        remaining fields validated as empty.
        """
        system_properties = system_properties or DocumentSystemProperties()
        results = self._connection_manager.call(
            "ValidateAllDocumentFields",
            session_id,
            document_type_id=document_type_id,
            fields=_field_inputs(fields),
            system_properties=system_properties.model_dump()
        )
        return [ValidationResult.model_validate(r) for r in results]

    def run_document_fields_validation(
        self,
        session_id: str,
        document_id: str,
        fields: Sequence[FieldRef]
    ) -> List[ValidationResult]:
        """Validate stored field values of a document and update their statuses."""
        if not fields:
            raise ValueError("At least one field is required")
        results = self._connection_manager.call(
            "RunDocumentFieldsValidation",
            session_id,
            document_id=document_id,
            identities=[as_identity(f).model_dump() for f in fields]
        )
        return [ValidationResult.model_validate(r) for r in results]

    def validate_document_for_review(self, session_id: str, document_id: str) -> ReviewValidationResult:
        result = ReviewValidationResult.model_validate(
            self._connection_manager.call("ValidateDocumentForReview", session_id, document_id=document_id)
        )
        if not result.is_valid:
            logger.info(f"Document '{document_id}' not ready for review, invalid fields: {result.invalid_fields}")
        return result

    def get_validation_execution_context(self, session_id: str) -> ValidationExecutionContext:
        return ValidationExecutionContext.model_validate(
            self._connection_manager.call("GetValidationExecutionContext", session_id)
        )
