"""Attach the browser session and the active form step to every log record."""

from __future__ import annotations

import contextvars
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [session=%(session_id)s step=%(form_step)s] %(name)s: %(message)s"
UNSET = "-"

_session_id: contextvars.ContextVar[str] = contextvars.ContextVar("form_session_id", default=UNSET)
_form_step: contextvars.ContextVar[str] = contextvars.ContextVar("form_step", default=UNSET)
_base_record_factory = logging.getLogRecordFactory()


def _record_with_form_context(*args: object, **kwargs: object) -> logging.LogRecord:
    record = _base_record_factory(*args, **kwargs)
    record.session_id = _session_id.get()
    record.form_step = _form_step.get()
    return record


def _normalise(value: object) -> str:
    text = "" if value is None else str(value).strip()
    return text or UNSET


def configure_logging(*, level: int = logging.INFO) -> None:
    """Install the context-aware record factory and format root handlers.

    Safe to call on every script rerun; the factory is installed once and
    handlers that already carry a formatter keep it.
    """

    if logging.getLogRecordFactory() is not _record_with_form_context:
        logging.setLogRecordFactory(_record_with_form_context)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    root.setLevel(level)
    for handler in root.handlers:
        if handler.formatter is None:
            handler.setFormatter(logging.Formatter(LOG_FORMAT))


def set_session_id(session_id: object) -> None:
    _session_id.set(_normalise(session_id))


def set_form_step(step: object) -> None:
    """Bind the step whose schema the engine just loaded."""

    _form_step.set(_normalise(step))


__all__ = ["LOG_FORMAT", "UNSET", "configure_logging", "set_form_step", "set_session_id"]
