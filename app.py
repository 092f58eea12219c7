# app.py — Dynamic Form (Streamlit entrypoint)
from __future__ import annotations

from pathlib import Path
import sys

import streamlit as st

APP_ROOT = Path(__file__).resolve().parent
if str(APP_ROOT) not in sys.path:
    sys.path.insert(0, str(APP_ROOT))

import config  # noqa: E402
from state.ensure_state import ensure_state  # noqa: E402
from utils.logging_context import configure_logging  # noqa: E402
from wizard import run_form  # noqa: E402

configure_logging(level=config.log_level_value())

st.set_page_config(
    page_title=config.APP_TITLE,
    page_icon="📝",
    layout="centered",
)

ensure_state()
run_form()
