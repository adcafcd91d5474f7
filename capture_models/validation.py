"""
Validation result models.

All validation rules are owned and evaluated by the capture service; these
models only carry its verdicts back to the caller.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class ValidationResult(BaseModel):
    """
    Verdict for one field value.

    Attributes:
        field_name: Name of the validated field
        is_valid: Whether the value passed the field's validators
        error_message: Why the value failed, when it did
        formatted_value: The value after the field's formatter ran
    """
    field_name: str
    is_valid: bool
    error_message: Optional[str] = None
    formatted_value: Any = None


class ReviewValidationResult(BaseModel):
    """Verdict of validating a whole document for review."""
    document_id: str
    is_valid: bool
    field_results: List[ValidationResult] = Field(default_factory=list)

    @property
    def invalid_fields(self) -> List[str]:
        return [r.field_name for r in self.field_results if not r.is_valid]


class ValidationExecutionContext(BaseModel):
    """Where in a job or process validation logic is currently executing."""
    component: str = "Unknown"
    activity_name: Optional[str] = None
    job_id: Optional[str] = None
