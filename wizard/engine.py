"""Orchestrates schema lookup, step changes, values, progress and messages."""

from __future__ import annotations

import logging

from constants.steps import SAVE_MESSAGES, STEP_LABELS, StepId
from core.errors import LOAD_ERROR_MESSAGE, SchemaLoadError
from core.schema import StepSchema
from core.schema_registry import DEFAULT_REGISTRY, SchemaRegistry
from state.field_store import FieldValueStore
from state.messages import SAVE_MESSAGE_KEY, Scheduler, TransientMessageBus
from utils.logging_context import set_form_step
from wizard import progress
from wizard.record_table import SubmissionRecordTable, delete_with_notice
from wizard.step_controller import StepController

logger = logging.getLogger(__name__)


class FormEngine:
    """State behind the multi-step form for one user session.

    The presentation layer reads through the ``get_*`` accessors and mutates
    only through the action methods. Every step change re-reads the schema
    from the registry and recomputes progress; every value change recomputes
    progress.
    """

    def __init__(
        self,
        *,
        registry: SchemaRegistry = DEFAULT_REGISTRY,
        messages: TransientMessageBus | None = None,
        scheduler: Scheduler | None = None,
        message_ttl: float | None = None,
    ) -> None:
        self._registry = registry
        self._store = FieldValueStore()
        self._messages = messages or TransientMessageBus(ttl=message_ttl, scheduler=scheduler)
        self._steps = StepController()
        self._schema: StepSchema = ()
        self._known_fields: set[str] = set()
        self._load_error: str | None = None
        self._progress = 0
        self._submitted = False
        self._confirmation_open = False
        self._record_table = SubmissionRecordTable(
            self._store,
            self._messages,
            is_active=lambda: self._submitted,
            on_resubmit=self.submit_final,
            on_delete=self.delete_value,
        )
        self._load_active_schema()

    # -- read accessors -------------------------------------------------

    def get_active_step(self) -> StepId:
        return self._steps.current

    def get_schema(self) -> StepSchema:
        return self._schema

    def get_values(self) -> tuple[tuple[str, str], ...]:
        return self._store.snapshot()

    def get_value(self, name: str) -> str:
        return self._store.get(name)

    def get_progress(self) -> int:
        return self._progress

    def get_messages(self) -> dict[str, str]:
        return self._messages.messages()

    def get_load_error(self) -> str | None:
        return self._load_error

    def get_submission_flag(self) -> bool:
        return self._submitted

    def get_confirmation_open(self) -> bool:
        return self._confirmation_open

    def is_record_table_visible(self) -> bool:
        return self._submitted and not self._confirmation_open

    def is_terminal_step(self) -> bool:
        return self._steps.is_terminal

    def can_save(self) -> bool:
        return self._steps.current in SAVE_MESSAGES

    def missing_required_fields(self) -> tuple[str, ...]:
        return progress.missing_required(self._store, self._schema)

    @property
    def step_order(self) -> tuple[StepId, ...]:
        return self._steps.order

    @property
    def record_table(self) -> SubmissionRecordTable:
        return self._record_table

    @staticmethod
    def step_label(step_id: StepId) -> str:
        return STEP_LABELS.get(step_id, str(step_id))

    # -- actions --------------------------------------------------------

    def set_value(self, name: str, value: object) -> None:
        """Store ``value`` for ``name`` when the name belongs to a loaded schema."""

        if name not in self._known_fields:
            logger.debug("Ignoring write to unknown field %r", name)
            return
        self._store.set(name, value)
        self._refresh_progress()

    def delete_value(self, name: str) -> bool:
        """Remove ``name`` and post its deletion notice; absent names are a no-op."""

        deleted = delete_with_notice(self._store, self._messages, name)
        if deleted:
            self._refresh_progress()
        return deleted

    def edit_field(self, name: str) -> bool:
        return self._record_table.edit_field(name)

    def save(self) -> str | None:
        """Post the save notice for the active step; ``payment`` has none."""

        text = SAVE_MESSAGES.get(self._steps.current)
        if text is None:
            logger.debug("No save action on step '%s'", self._steps.current)
            return None
        self._messages.post(SAVE_MESSAGE_KEY, text)
        logger.info("Saved step '%s'", self._steps.current)
        return text

    def advance_step(self) -> StepId:
        previous = self._steps.current
        current = self._steps.advance()
        if current != previous:
            logger.info("Advanced from '%s' to '%s'", previous, current)
        self._load_active_schema()
        return current

    def select_step(self, step_id: object) -> StepId:
        """Jump to ``step_id``; unknown steps set the persistent load error."""

        try:
            self._steps.select(step_id)
        except SchemaLoadError as error:
            self._fail_load(error)
            return self._steps.current
        logger.info("Selected step '%s'", self._steps.current)
        self._load_active_schema()
        return self._steps.current

    def submit_final(self) -> None:
        self._submitted = True
        self._confirmation_open = True
        logger.info("Form submitted with %d captured fields", len(self._store))

    def resubmit(self) -> bool:
        return self._record_table.resubmit()

    def close_confirmation(self) -> None:
        self._confirmation_open = False

    def shutdown(self) -> None:
        """Cancel pending message timers."""

        self._messages.clear()

    # -- internals ------------------------------------------------------

    def _load_active_schema(self) -> None:
        step_id = self._steps.current
        set_form_step(step_id)
        try:
            schema = self._registry.lookup(step_id)
        except SchemaLoadError as error:
            self._fail_load(error)
            return
        self._schema = schema
        self._known_fields.update(field.name for field in schema)
        self._load_error = None
        self._refresh_progress()

    def _fail_load(self, error: SchemaLoadError) -> None:
        logger.warning("Failed to load form structure: %s", error)
        self._schema = ()
        self._load_error = LOAD_ERROR_MESSAGE
        self._refresh_progress()

    def _refresh_progress(self) -> None:
        self._progress = progress.compute(self._store, self._schema)


__all__ = ["FormEngine"]
