"""Form engine package."""

from __future__ import annotations

import importlib
from typing import Any

from .engine import FormEngine
from .record_table import SubmissionRecordTable
from .step_controller import StepController

__all__ = [
    "FormEngine",
    "StepController",
    "SubmissionRecordTable",
    "run_form",
]

_UI_EXPORTS = frozenset({"run_form"})


def __getattr__(name: str) -> Any:
    """Load Streamlit rendering helpers from ``wizard.ui`` on first access."""

    if name not in _UI_EXPORTS:
        raise AttributeError(f"module {__name__} has no attribute {name}")
    ui = importlib.import_module(f"{__name__}.ui")
    value: Any = getattr(ui, name)
    globals()[name] = value
    return value
