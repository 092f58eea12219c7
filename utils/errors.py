"""Utility helpers for rendering error messages in Streamlit."""

from __future__ import annotations

from typing import Final

import streamlit as st

import config

_DETAILS_LABEL: Final[str] = "Details"


def display_error(msg: str, detail: str | None = None) -> None:
    """Render a user-facing error with optional debug details.

    Args:
        msg: Short error message for the user.
        detail: Optional technical detail shown when ``FORM_DEBUG`` is enabled.
    """

    st.error(msg)
    if detail and config.DEBUG:
        with st.expander(_DETAILS_LABEL):
            st.code(detail)
