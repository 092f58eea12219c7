"""Forward-only state machine over the form steps."""

from __future__ import annotations

import logging
from typing import Sequence

from constants.steps import STEP_ORDER, StepId
from core.errors import SchemaLoadError

logger = logging.getLogger(__name__)


class StepController:
    """Track the active step.

    ``advance`` only moves forward along :data:`STEP_ORDER` and stays put on
    the last step. ``select`` jumps to any known step, which is how the step
    picker moves backwards. The controller knows nothing about schemas.
    """

    def __init__(self, order: Sequence[StepId] = STEP_ORDER, *, initial: StepId | None = None) -> None:
        if not order:
            raise ValueError("StepController needs at least one step.")
        self._order: tuple[StepId, ...] = tuple(order)
        self._current = initial if initial is not None else self._order[0]
        if self._current not in self._order:
            raise ValueError(f"Initial step '{self._current}' is not part of the step order.")

    @property
    def current(self) -> StepId:
        return self._current

    @property
    def order(self) -> tuple[StepId, ...]:
        return self._order

    @property
    def is_terminal(self) -> bool:
        return self._current == self._order[-1]

    def advance(self) -> StepId:
        if self.is_terminal:
            logger.debug("advance() on terminal step '%s' ignored", self._current)
            return self._current
        index = self._order.index(self._current)
        self._current = self._order[index + 1]
        return self._current

    def select(self, step_id: object) -> StepId:
        """Jump to ``step_id``; unknown identifiers raise :class:`SchemaLoadError`."""

        try:
            target = StepId(step_id)
        except ValueError:
            raise SchemaLoadError(step_id) from None
        if target not in self._order:
            raise SchemaLoadError(step_id)
        self._current = target
        return self._current


__all__ = ["StepController"]
