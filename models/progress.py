"""Pydantic models for form completion tracking."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FieldStatus(StrEnum):
    """Validation lifecycle of a single field within a form session."""

    UNTOUCHED = "untouched"
    VALIDATED_FAST = "validated-fast"
    VALIDATED_FULL = "validated-full"


class ProgressInfo(BaseModel):
    """Completion summary for one form variant.

    Attributes:
        total_fields: Size of the required-field universe, including
            conditionally required fields that are currently active.
        completed_fields: Required fields that are satisfied.
        missing_fields: Required fields that still need a value.
        progress_percentage: ``completed_fields / total_fields`` as a rounded
            percentage, ``0`` when there is nothing to complete.
        is_complete: ``True`` when no required field is missing.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_fields: int = Field(0, alias="totalFields", ge=0)
    completed_fields: int = Field(0, alias="completedFields", ge=0)
    missing_fields: int = Field(0, alias="missingFields", ge=0)
    progress_percentage: int = Field(0, alias="progressPercentage", ge=0, le=100)
    is_complete: bool = Field(False, alias="isComplete")

    @model_validator(mode="after")
    def _check_counts(self) -> "ProgressInfo":
        if self.completed_fields + self.missing_fields != self.total_fields:
            raise ValueError("completed_fields + missing_fields must equal total_fields")
        if self.is_complete != (self.missing_fields == 0):
            raise ValueError("is_complete must be True exactly when no field is missing")
        return self


__all__ = ["FieldStatus", "ProgressInfo"]
