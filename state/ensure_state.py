"""Helpers for initializing Streamlit session state."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable

import streamlit as st

from constants.keys import StateKeys
from utils.logging_context import set_session_id
from wizard.engine import FormEngine


logger = logging.getLogger(__name__)


_DEFAULT_STATE_FACTORIES: Mapping[str, Callable[[], Any]] = MappingProxyType(
    {
        StateKeys.SESSION_ID: lambda: uuid.uuid4().hex[:12],
        StateKeys.FORM_ENGINE: FormEngine,
    }
)


def ensure_state() -> None:
    """Initialize ``st.session_state`` with required keys.

    Existing keys are preserved so the engine survives Streamlit reruns.
    """

    for key, factory in _DEFAULT_STATE_FACTORIES.items():
        if key not in st.session_state:
            st.session_state[key] = factory()
    if not isinstance(st.session_state.get(StateKeys.FORM_ENGINE), FormEngine):
        logger.warning("Replacing invalid form engine found in session state")
        st.session_state[StateKeys.FORM_ENGINE] = FormEngine()
    set_session_id(str(st.session_state[StateKeys.SESSION_ID]))


def get_engine() -> FormEngine:
    """Return the session's :class:`FormEngine`, creating it on first use."""

    ensure_state()
    return st.session_state[StateKeys.FORM_ENGINE]


def reset_state() -> None:
    """Discard the current form session and start a fresh one."""

    engine = st.session_state.get(StateKeys.FORM_ENGINE)
    if isinstance(engine, FormEngine):
        engine.shutdown()
    for key in list(st.session_state.keys()):
        del st.session_state[key]
    ensure_state()
