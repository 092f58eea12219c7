"""Field definitions describing the inputs of a form step."""

from __future__ import annotations

from enum import StrEnum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FieldType(StrEnum):
    """Input widgets a field can be rendered with."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    PASSWORD = "password"
    DROPDOWN = "dropdown"


class FieldDefinition(BaseModel):
    """Immutable description of a single form input.

    Attributes:
        name: Key under which the entered value is stored. Unique within a step.
        type: Widget type used by the presentation layer.
        label: Human readable label.
        required: Whether the field must be filled before submitting.
        options: Choices for ``dropdown`` fields; empty for every other type.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1)
    type: FieldType = FieldType.TEXT
    label: str = ""
    required: bool = False
    options: Tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_options(self) -> "FieldDefinition":
        """Allow ``options`` exactly when the field is a dropdown."""

        if self.type is FieldType.DROPDOWN and not self.options:
            raise ValueError(f"Dropdown field '{self.name}' needs at least one option.")
        if self.type is not FieldType.DROPDOWN and self.options:
            raise ValueError(f"Field '{self.name}' of type '{self.type}' cannot declare options.")
        return self


StepSchema = Tuple[FieldDefinition, ...]


__all__ = ["FieldDefinition", "FieldType", "StepSchema"]
