"""Streamlit view over the :class:`FormEngine` of the current session."""

from __future__ import annotations

from typing import Final

import streamlit as st

import config
from components.form_fields import render_field
from constants.keys import UIKeys
from state.ensure_state import get_engine
from state.messages import SAVE_MESSAGE_KEY
from utils.errors import display_error
from wizard.engine import FormEngine

CONFIRMATION_TITLE: Final[str] = "Sign Up Successful"
CONFIRMATION_BODY: Final[str] = "Your form has been successfully submitted!"
MISSING_REQUIRED_HINT: Final[str] = "Fill in the required fields to submit: {labels}"
# Notice fragments re-read the message bus on this cadence.
NOTICE_REFRESH_SECONDS: Final[float] = 1.0


def _forget_widgets(name: str) -> None:
    """Drop widget state for ``name`` so the next render re-seeds from the store."""

    st.session_state.pop(UIKeys.field(name), None)
    st.session_state.pop(UIKeys.record(name), None)


def _on_field_change(engine: FormEngine, name: str) -> None:
    engine.set_value(name, st.session_state.get(UIKeys.field(name)))
    st.session_state.pop(UIKeys.record(name), None)


def _on_record_change(engine: FormEngine, name: str) -> None:
    engine.set_value(name, st.session_state.get(UIKeys.record(name)))
    st.session_state.pop(UIKeys.field(name), None)


def _on_record_delete(engine: FormEngine, name: str) -> None:
    if engine.record_table.delete_field(name):
        _forget_widgets(name)


def _on_step_picked(engine: FormEngine) -> None:
    engine.select_step(st.session_state.get(UIKeys.STEP_PICKER))


def render_progress(engine: FormEngine) -> None:
    value = engine.get_progress()
    st.progress(value, text=f"Progress: {value}%")


def render_step_picker(engine: FormEngine) -> None:
    st.session_state[UIKeys.STEP_PICKER] = engine.get_active_step()
    st.selectbox(
        "Select Form Type:",
        options=engine.step_order,
        format_func=engine.step_label,
        key=UIKeys.STEP_PICKER,
        on_change=_on_step_picked,
        args=(engine,),
    )


def render_fields(engine: FormEngine) -> None:
    for field in engine.get_schema():
        render_field(
            field,
            stored=engine.get_value(field.name),
            key=UIKeys.field(field.name),
            on_change=lambda name=field.name: _on_field_change(engine, name),
        )


def render_actions(engine: FormEngine) -> None:
    if engine.is_terminal_step():
        missing = engine.missing_required_fields()
        st.button(
            "Submit",
            key="ui.action.submit",
            type="primary",
            on_click=engine.submit_final,
            disabled=bool(missing),
        )
        if missing:
            labels = {field.name: field.label for field in engine.get_schema()}
            st.caption(MISSING_REQUIRED_HINT.format(labels=", ".join(labels[name] for name in missing)))
        return
    save_col, next_col = st.columns(2)
    with save_col:
        st.button("Save", key="ui.action.save", on_click=engine.save, disabled=not engine.can_save())
    with next_col:
        st.button("Next", key="ui.action.next", type="primary", on_click=engine.advance_step)


def render_confirmation(engine: FormEngine) -> None:
    with st.container(border=True):
        st.subheader(CONFIRMATION_TITLE)
        st.write(CONFIRMATION_BODY)
        st.button("Close", key="ui.action.close_confirmation", on_click=engine.close_confirmation)


@st.fragment(run_every=NOTICE_REFRESH_SECONDS)
def render_notice(engine: FormEngine, key: str, *, success: bool = False) -> None:
    """Show the live message posted under ``key``, if any."""

    text = engine.get_messages().get(key)
    if not text:
        return
    if success:
        st.success(text)
    else:
        st.info(text)


@st.fragment(run_every=NOTICE_REFRESH_SECONDS)
def render_orphan_notices(engine: FormEngine, row_names: frozenset[str]) -> None:
    """Show notices whose row is gone, such as those of deleted fields."""

    for key, text in engine.get_messages().items():
        if key != SAVE_MESSAGE_KEY and key not in row_names:
            st.info(text)


def render_record_table(engine: FormEngine) -> None:
    st.subheader("Form Data:")
    rows = engine.record_table.rows()
    header = st.columns([2, 4, 1, 1])
    header[0].markdown("**Field**")
    header[1].markdown("**Value**")
    header[2].markdown("**Action**")
    for name, value in rows:
        record_key = UIKeys.record(name)
        if record_key not in st.session_state:
            st.session_state[record_key] = value
        name_col, value_col, delete_col, edit_col = st.columns([2, 4, 1, 1])
        name_col.markdown(f"**{name}**")
        value_col.text_input(
            name,
            key=record_key,
            label_visibility="collapsed",
            on_change=_on_record_change,
            args=(engine, name),
        )
        delete_col.button("Delete", key=f"ui.record.delete.{name}", on_click=_on_record_delete, args=(engine, name))
        edit_col.button("Edit", key=f"ui.record.edit.{name}", on_click=engine.edit_field, args=(name,))
        render_notice(engine, name)

    render_orphan_notices(engine, frozenset(name for name, _ in rows))

    st.button("Submit", key="ui.record.resubmit", on_click=engine.resubmit)


def render_debug_panel(engine: FormEngine) -> None:
    with st.sidebar.expander("Form state"):
        st.json(
            {
                "step": str(engine.get_active_step()),
                "progress": engine.get_progress(),
                "values": dict(engine.get_values()),
                "messages": engine.get_messages(),
                "submitted": engine.get_submission_flag(),
            }
        )


def run_form() -> None:
    """Render the complete form for the current session."""

    engine = get_engine()
    st.header(config.APP_TITLE)

    load_error = engine.get_load_error()
    if load_error:
        display_error(load_error)

    render_progress(engine)
    render_step_picker(engine)
    if not load_error:
        render_fields(engine)
    render_actions(engine)

    render_notice(engine, SAVE_MESSAGE_KEY, success=True)

    if engine.get_confirmation_open():
        render_confirmation(engine)

    st.divider()
    if engine.is_record_table_visible():
        render_record_table(engine)

    if config.DEBUG:
        render_debug_panel(engine)


__all__ = [
    "CONFIRMATION_BODY",
    "CONFIRMATION_TITLE",
    "MISSING_REQUIRED_HINT",
    "render_notice",
    "render_orphan_notices",
    "run_form",
]
