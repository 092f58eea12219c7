"""Insertion-ordered storage for the values entered into the form."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterator

logger = logging.getLogger(__name__)


def coerce_value(value: object) -> str:
    """Return ``value`` normalised as the string stored for a field."""

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class FieldValueStore:
    """Map field names to entered values, shared by every step.

    Keys keep the order in which they were first entered; overwriting a value
    does not move it. Field names are global, so two steps declaring the same
    name read and write the same entry.
    """

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def set(self, name: str, value: object) -> None:
        self._values[name] = coerce_value(value)

    def delete(self, name: str) -> bool:
        """Remove ``name``; return ``False`` when it was not stored."""

        if name not in self._values:
            logger.debug("Ignoring delete of absent field %r", name)
            return False
        del self._values[name]
        return True

    def get(self, name: str, default: str = "") -> str:
        return self._values.get(name, default)

    def snapshot(self) -> tuple[tuple[str, str], ...]:
        """Return ``(name, value)`` pairs in insertion order."""

        return tuple(self._values.items())

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._values))


__all__ = ["FieldValueStore", "coerce_value"]
