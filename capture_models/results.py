"""
Result holder types.

CreatedFolders and CreatedDocuments collect the ids produced by the
multi-step create workflows. OperationResult is the explicit result of a
single call made through CaptureClient.attempt.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class CreatedFolders(BaseModel):
    """Ids of the folder tree built by the create-folders workflow."""
    root_folder_id: Optional[str] = None
    child_folder1_id: Optional[str] = None
    child_folder2_id: Optional[str] = None
    child_folder3_id: Optional[str] = None
    grand_child_folder1_id: Optional[str] = None


class CreatedDocuments(BaseModel):
    """Ids of the two documents built by the create-documents workflows."""
    document1_id: Optional[str] = None
    document2_id: Optional[str] = None


class OperationResult(BaseModel):
    """
    Outcome of one remote call.

    Attributes:
        operation: Name of the called operation
        ok: True when the call returned normally
        value: The call's return value when ok
        error: The expected fault when not ok
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    operation: str
    ok: bool
    value: Any = None
    error: Optional[Exception] = None

    def unwrap(self) -> Any:
        """Return the value, or raise the captured fault."""
        if not self.ok:
            raise self.error
        return self.value
