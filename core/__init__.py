"""Core package for form schemas and errors."""

from .errors import FormError, SchemaLoadError
from .schema import FieldDefinition, FieldType, StepSchema
from .schema_registry import DEFAULT_REGISTRY, SchemaRegistry

__all__ = [
    "DEFAULT_REGISTRY",
    "FieldDefinition",
    "FieldType",
    "FormError",
    "SchemaLoadError",
    "SchemaRegistry",
    "StepSchema",
]
