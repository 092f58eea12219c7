class UIKeys:
    """Keys for UI widgets in ``st.session_state``."""

    STEP_PICKER = "ui.step_picker"
    FIELD_PREFIX = "ui.field."
    RECORD_PREFIX = "ui.record."

    @classmethod
    def field(cls, name: str) -> str:
        return f"{cls.FIELD_PREFIX}{name}"

    @classmethod
    def record(cls, name: str) -> str:
        return f"{cls.RECORD_PREFIX}{name}"


class StateKeys:
    """Keys for data stored in ``st.session_state``."""

    FORM_ENGINE = "form.engine"
    SESSION_ID = "form.session_id"
