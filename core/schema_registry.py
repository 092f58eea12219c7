"""Static lookup table from form step to its ordered field definitions.

The table is built once at import time and never changes for the lifetime of
the process. Consumers should go through :data:`DEFAULT_REGISTRY` (or inject a
custom :class:`SchemaRegistry` in tests) instead of reaching for the raw
definitions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Final

from constants.steps import StepId
from core.errors import SchemaLoadError
from core.schema import FieldDefinition, FieldType, StepSchema

logger = logging.getLogger(__name__)


DEFAULT_SCHEMAS: Final[Mapping[StepId, StepSchema]] = MappingProxyType(
    {
        StepId.PERSONAL: (
            FieldDefinition(name="firstName", type=FieldType.TEXT, label="First Name", required=True),
            FieldDefinition(name="lastName", type=FieldType.TEXT, label="Last Name", required=True),
            FieldDefinition(name="age", type=FieldType.NUMBER, label="Age", required=False),
        ),
        StepId.ADDRESS: (
            FieldDefinition(name="street", type=FieldType.TEXT, label="Street", required=True),
            FieldDefinition(name="city", type=FieldType.TEXT, label="City", required=True),
            FieldDefinition(
                name="state",
                type=FieldType.DROPDOWN,
                label="State",
                options=("California", "Texas", "New York"),
                required=True,
            ),
            FieldDefinition(name="zipCode", type=FieldType.TEXT, label="Zip Code", required=False),
        ),
        StepId.PAYMENT: (
            FieldDefinition(name="cardNumber", type=FieldType.TEXT, label="Card Number", required=True),
            FieldDefinition(name="expiryDate", type=FieldType.DATE, label="Expiry Date", required=True),
            FieldDefinition(name="cvv", type=FieldType.PASSWORD, label="CVV", required=True),
            FieldDefinition(name="cardholderName", type=FieldType.TEXT, label="Cardholder Name", required=True),
        ),
    }
)


def _freeze_schema(step_id: StepId, fields: Iterable[FieldDefinition]) -> StepSchema:
    """Return ``fields`` as a tuple after checking names are unique."""

    schema = tuple(fields)
    seen: set[str] = set()
    for field in schema:
        if field.name in seen:
            raise ValueError(f"Duplicate field name '{field.name}' in step '{step_id}'.")
        seen.add(field.name)
    return schema


class SchemaRegistry:
    """Read-only mapping of :class:`StepId` to :data:`StepSchema`."""

    def __init__(self, schemas: Mapping[str, Iterable[FieldDefinition]]) -> None:
        table: dict[StepId, StepSchema] = {}
        for raw_key, fields in schemas.items():
            step_id = StepId(raw_key)
            table[step_id] = _freeze_schema(step_id, fields)
        self._schemas: Mapping[StepId, StepSchema] = MappingProxyType(table)

    def lookup(self, step_id: object) -> StepSchema:
        """Return the schema for ``step_id`` or raise :class:`SchemaLoadError`."""

        try:
            return self._schemas[step_id]  # type: ignore[index]
        except (KeyError, TypeError):
            logger.warning("No schema registered for step %r", step_id)
            raise SchemaLoadError(step_id) from None

    def step_ids(self) -> tuple[StepId, ...]:
        return tuple(self._schemas)

    def field_names(self) -> tuple[str, ...]:
        """Return every field name across all steps, without duplicates."""

        names = (field.name for schema in self._schemas.values() for field in schema)
        return tuple(dict.fromkeys(names))

    def __contains__(self, step_id: object) -> bool:
        try:
            return step_id in self._schemas
        except TypeError:
            return False


DEFAULT_REGISTRY: Final[SchemaRegistry] = SchemaRegistry(DEFAULT_SCHEMAS)


__all__ = ["DEFAULT_REGISTRY", "DEFAULT_SCHEMAS", "SchemaRegistry"]
