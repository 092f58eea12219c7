from pathlib import Path
import sys
from dataclasses import dataclass, field
from typing import Callable

import streamlit as st

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@dataclass
class _SessionDict(dict[str, object]):
    """Lightweight replacement for ``st.session_state`` during tests."""

    def clear(self) -> None:  # type: ignore[override]
        super().clear()


@pytest.fixture(autouse=True)
def _stub_streamlit_session_state(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    """Replace Streamlit's runtime-bound session state with a plain dictionary.

    Tests marked ``streamlit_app`` drive a real script through ``AppTest`` and
    keep the genuine session state.
    """

    if request.node.get_closest_marker("streamlit_app") is not None:
        yield
        return
    session_state = _SessionDict()
    monkeypatch.setattr(st, "session_state", session_state, raising=False)
    yield


@dataclass
class ManualTask:
    due: float
    callback: Callable[[], None]
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler:
    """Deterministic scheduler; time only moves through :meth:`advance`."""

    now: float = 0.0
    tasks: list[ManualTask] = field(default_factory=list)

    def schedule(self, delay: float, callback: Callable[[], None]) -> ManualTask:
        task = ManualTask(due=self.now + delay, callback=callback)
        self.tasks.append(task)
        return task

    def advance(self, seconds: float) -> None:
        self.now += seconds
        for task in sorted(self.tasks, key=lambda item: item.due):
            if task.due <= self.now and not task.cancelled and not task.fired:
                task.fired = True
                task.callback()

    def fire_all(self, *, include_cancelled: bool = False) -> None:
        """Run every callback, optionally including cancelled ones (stale timers)."""

        for task in list(self.tasks):
            if task.fired or (task.cancelled and not include_cancelled):
                continue
            task.fired = True
            task.callback()

    @property
    def live_tasks(self) -> list[ManualTask]:
        return [task for task in self.tasks if not task.cancelled and not task.fired]


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()
