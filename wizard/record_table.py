"""Editable table of captured values shown after the final submit."""

from __future__ import annotations

import logging
from typing import Callable

from state.field_store import FieldValueStore
from state.messages import TransientMessageBus

logger = logging.getLogger(__name__)

EDITABLE_MESSAGE = 'Field "{key}" is now editable.'
DELETED_MESSAGE = 'Field "{key}" has been deleted.'


def delete_with_notice(
    store: FieldValueStore, messages: TransientMessageBus, key: str
) -> bool:
    """Remove ``key`` from ``store`` and post the deletion notice.

    Returns ``False`` without posting anything when the key is absent.
    """

    if not store.delete(key):
        logger.debug("Ignoring delete of absent field %r", key)
        return False
    messages.post(key, DELETED_MESSAGE.format(key=key))
    logger.info("Deleted captured field %r", key)
    return True


class SubmissionRecordTable:
    """Post-submission view over a :class:`FieldValueStore`.

    Row actions are only honoured while ``is_active`` returns ``True``; before
    the form was submitted they are ignored. Values stay editable through the
    regular store ``set`` path regardless of :meth:`edit_field`.
    """

    def __init__(
        self,
        store: FieldValueStore,
        messages: TransientMessageBus,
        *,
        is_active: Callable[[], bool],
        on_resubmit: Callable[[], None],
        on_delete: Callable[[str], bool] | None = None,
    ) -> None:
        self._store = store
        self._messages = messages
        self._is_active = is_active
        self._on_resubmit = on_resubmit
        self._on_delete = on_delete or (lambda key: delete_with_notice(store, messages, key))

    @property
    def active(self) -> bool:
        return self._is_active()

    def rows(self) -> tuple[tuple[str, str], ...]:
        return self._store.snapshot()

    def edit_field(self, key: str) -> bool:
        if not self._accepts(key, "edit"):
            return False
        self._messages.post(key, EDITABLE_MESSAGE.format(key=key))
        return True

    def delete_field(self, key: str) -> bool:
        if not self._accepts(key, "delete"):
            return False
        return self._on_delete(key)

    def resubmit(self) -> bool:
        if not self._is_active():
            logger.debug("Ignoring resubmit before submission")
            return False
        self._on_resubmit()
        return True

    def _accepts(self, key: str, action: str) -> bool:
        if not self._is_active():
            logger.debug("Ignoring %s of %r before submission", action, key)
            return False
        if key not in self._store:
            logger.debug("Ignoring %s of absent field %r", action, key)
            return False
        return True


__all__ = [
    "DELETED_MESSAGE",
    "EDITABLE_MESSAGE",
    "SubmissionRecordTable",
    "delete_with_notice",
]
