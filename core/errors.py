"""Custom exception types for the form engine."""

from __future__ import annotations


LOAD_ERROR_MESSAGE = "Failed to load the form structure. Please try again."


class FormError(Exception):
    """Base exception for form engine issues."""


class SchemaLoadError(FormError):
    """Raised when no schema is registered for a step identifier."""

    def __init__(self, step_id: object, message: str | None = None) -> None:
        self.step_id = step_id
        super().__init__(message or f"No form schema registered for step '{step_id}'.")
