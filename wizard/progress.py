"""Completion percentage for the active step."""

from __future__ import annotations

from state.field_store import FieldValueStore
from core.schema import StepSchema


def _is_filled(store: FieldValueStore, name: str) -> bool:
    return name in store and bool(store.get(name).strip())


def count_filled(store: FieldValueStore, schema: StepSchema) -> int:
    """Return how many fields of ``schema`` hold a non-blank value."""

    return sum(1 for field in schema if _is_filled(store, field.name))


def missing_required(store: FieldValueStore, schema: StepSchema) -> tuple[str, ...]:
    """Return the names of required ``schema`` fields that are still blank."""

    return tuple(
        field.name for field in schema if field.required and not _is_filled(store, field.name)
    )


def compute(store: FieldValueStore, schema: StepSchema) -> int:
    """Return the share of filled ``schema`` fields as an integer percentage.

    Values are rounded half-up (1 of 3 -> 33, 2 of 3 -> 67). Keys that belong
    to other steps are ignored. An empty schema yields ``0``.
    """

    total = len(schema)
    if total == 0:
        return 0
    filled = count_filled(store, schema)
    return (filled * 200 + total) // (2 * total)


__all__ = ["compute", "count_filled", "missing_required"]
