"""Central configuration for the dynamic form app.

Settings are read from environment variables (``.env`` files are loaded via
python-dotenv first). Invalid values emit a ``RuntimeWarning`` and fall back to
the documented default instead of failing the app start.

``FORM_MESSAGE_TTL_SECONDS`` controls how long save/edit/delete notices stay
visible; ``FORM_LOG_LEVEL`` sets the root log level used by ``app.py``.
"""

import logging
import os
import warnings

from dotenv import load_dotenv

load_dotenv()


logger = logging.getLogger(__name__)

_TRUTHY_ENV_VALUES: tuple[str, ...] = ("1", "true", "yes", "on")
_LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_MESSAGE_TTL_SECONDS = 3.0


def _is_truthy_flag(value: str | None) -> bool:
    """Return ``True`` when ``value`` matches a truthy environment token."""

    if value is None:
        return False
    return value.strip().lower() in _TRUTHY_ENV_VALUES


def _parse_positive_float_env(value: object | None, *, env_var: str, default: float) -> float:
    """Return a positive float parsed from ``value`` or ``default``."""

    if value is None:
        return default
    if isinstance(value, str):
        candidate = value.strip()
        if not candidate:
            return default
        try:
            parsed = float(candidate)
        except ValueError:
            warnings.warn(
                "%s is not a number; ignoring %s" % (candidate, env_var),
                RuntimeWarning,
            )
            return default
    elif isinstance(value, (int, float)):
        parsed = float(value)
    else:
        warnings.warn(
            "Unsupported %s value '%s'; falling back to %.1f." % (env_var, value, default),
            RuntimeWarning,
        )
        return default
    if parsed <= 0:
        warnings.warn(
            "%s must be positive; falling back to %.1f." % (env_var, default),
            RuntimeWarning,
        )
        return default
    return parsed


def normalise_log_level(value: object | None, *, default: str = "INFO") -> str:
    """Return a supported logging level name or ``default`` when invalid."""

    if not isinstance(value, str):
        return default
    candidate = value.strip().upper()
    if not candidate:
        return default
    if candidate in _LOG_LEVELS:
        return candidate
    warnings.warn(
        "Unsupported FORM_LOG_LEVEL '%s'; falling back to '%s'." % (candidate, default),
        RuntimeWarning,
    )
    return default


MESSAGE_TTL_SECONDS = _parse_positive_float_env(
    os.getenv("FORM_MESSAGE_TTL_SECONDS"),
    env_var="FORM_MESSAGE_TTL_SECONDS",
    default=DEFAULT_MESSAGE_TTL_SECONDS,
)
LOG_LEVEL = normalise_log_level(os.getenv("FORM_LOG_LEVEL", "INFO"))
APP_TITLE = os.getenv("FORM_APP_TITLE", "Dynamic Form").strip() or "Dynamic Form"
DEBUG = _is_truthy_flag(os.getenv("FORM_DEBUG"))


def log_level_value() -> int:
    """Return :data:`LOG_LEVEL` as the numeric ``logging`` constant."""

    return logging.getLevelName(LOG_LEVEL)
