"""Streamlit widgets for schema-driven form fields."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import Any

import streamlit as st

from core.schema import FieldDefinition, FieldType

__all__ = ["field_label", "render_field", "to_widget_value"]

_REQUIRED_MARKER = " *"


def field_label(field: FieldDefinition) -> str:
    return f"{field.label or field.name}{_REQUIRED_MARKER if field.required else ''}"


def to_widget_value(field: FieldDefinition, stored: str) -> Any:
    """Convert the stored string into the value type the widget expects."""

    if field.type is FieldType.NUMBER:
        if not stored.strip():
            return None
        try:
            number = float(stored)
        except ValueError:
            return None
        return number
    if field.type is FieldType.DATE:
        try:
            return date.fromisoformat(stored) if stored else None
        except ValueError:
            return None
    if field.type is FieldType.DROPDOWN:
        return stored if stored in field.options else ""
    return stored


def render_field(
    field: FieldDefinition,
    *,
    stored: str,
    key: str,
    on_change: Callable[[], None],
) -> Any:
    """Render the widget for ``field`` bound to ``key`` in session state.

    The widget is seeded from ``stored`` only when ``key`` is not yet in
    ``st.session_state``; afterwards Streamlit owns the widget value and
    ``on_change`` pushes edits back to the form engine.
    """

    if key not in st.session_state:
        st.session_state[key] = to_widget_value(field, stored)

    label = field_label(field)
    if field.type is FieldType.NUMBER:
        return st.number_input(label, key=key, on_change=on_change)
    if field.type is FieldType.DATE:
        return st.date_input(label, key=key, on_change=on_change)
    if field.type is FieldType.PASSWORD:
        return st.text_input(label, key=key, type="password", on_change=on_change)
    if field.type is FieldType.DROPDOWN:
        placeholder = f"Select {field.label or field.name}"
        return st.selectbox(
            label,
            options=("", *field.options),
            format_func=lambda option: option or placeholder,
            key=key,
            on_change=on_change,
        )
    return st.text_input(label, key=key, on_change=on_change)
