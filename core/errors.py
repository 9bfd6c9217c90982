"""Custom exception types for form configuration handling."""

from __future__ import annotations


class FormEngineError(Exception):
    """Base exception for the form engine."""


class FormConfigError(FormEngineError):
    """Raised when a field configuration payload cannot be used."""

    def __init__(self, message: str, *, field_id: str | None = None) -> None:
        self.field_id = field_id
        if field_id:
            message = f"{message} (field: {field_id})"
        super().__init__(message)
