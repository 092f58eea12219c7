"""Short-lived status messages with per-key expiry tasks."""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Protocol

import config

logger = logging.getLogger(__name__)

SAVE_MESSAGE_KEY = "save"


class ScheduledTask(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Runs ``callback`` once after ``delay`` seconds unless cancelled."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledTask: ...


class TimerScheduler:
    """Scheduler backed by daemon :class:`threading.Timer` objects."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


@dataclass(frozen=True)
class TransientMessage:
    """Advisory status text shown until ``expires_after`` seconds elapse."""

    key: str
    text: str
    expires_after: float


class TransientMessageBus:
    """Keep at most one message and one pending expiry task per key.

    Posting to a key that already holds a message replaces the text and
    restarts the countdown. Expiry callbacks carry a token and only remove the
    message when that token still belongs to the live task, so a timer that
    lost a race with a newer post never deletes the newer message.
    """

    def __init__(self, *, ttl: float | None = None, scheduler: Scheduler | None = None) -> None:
        self._ttl = ttl if ttl is not None else config.MESSAGE_TTL_SECONDS
        self._scheduler: Scheduler = scheduler or TimerScheduler()
        self._messages: dict[str, TransientMessage] = {}
        self._tasks: dict[str, tuple[int, ScheduledTask]] = {}
        self._tokens = itertools.count(1)
        self._lock = threading.RLock()

    @property
    def ttl(self) -> float:
        return self._ttl

    def post(self, key: str, text: str) -> TransientMessage:
        """Create or replace the message under ``key`` and restart its timer."""

        with self._lock:
            self._cancel_task(key)
            message = TransientMessage(key=key, text=text, expires_after=self._ttl)
            self._messages[key] = message
            token = next(self._tokens)
            task = self._scheduler.schedule(self._ttl, lambda: self._expire_if_current(key, token))
            self._tasks[key] = (token, task)
        logger.debug("Posted message %r: %s", key, text)
        return message

    def expire(self, key: str) -> None:
        """Remove the message under ``key``; absent keys are ignored."""

        with self._lock:
            self._cancel_task(key)
            self._messages.pop(key, None)

    def get(self, key: str) -> str | None:
        with self._lock:
            message = self._messages.get(key)
        return message.text if message is not None else None

    def messages(self) -> dict[str, str]:
        with self._lock:
            return {key: message.text for key, message in self._messages.items()}

    def pending_keys(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._tasks)

    def clear(self) -> None:
        """Drop every message and cancel all pending timers."""

        with self._lock:
            for key in list(self._tasks):
                self._cancel_task(key)
            self._messages.clear()

    def _cancel_task(self, key: str) -> None:
        entry = self._tasks.pop(key, None)
        if entry is not None:
            entry[1].cancel()

    def _expire_if_current(self, key: str, token: int) -> None:
        with self._lock:
            entry = self._tasks.get(key)
            if entry is None or entry[0] != token:
                return
            del self._tasks[key]
            self._messages.pop(key, None)
        logger.debug("Message %r expired", key)


__all__ = [
    "SAVE_MESSAGE_KEY",
    "ScheduledTask",
    "Scheduler",
    "TimerScheduler",
    "TransientMessage",
    "TransientMessageBus",
]
