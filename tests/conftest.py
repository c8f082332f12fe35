"""Shared test fixtures for the tabconsole test suite."""

from __future__ import annotations

import pytest

from tabconsole.events import Resize, Submit
from tabconsole.session import SessionController


class RecordingExecutor:
    """Executor stub that records every call.

    ``output`` may be a string or ``None`` (echo the command back).
    """

    def __init__(self, output=None, failure=None) -> None:
        self.calls: list[tuple[str, str]] = []
        self.output = output
        self.failure = failure

    def __call__(self, tab: str, command: str):
        self.calls.append((tab, command))
        text = f"echo:{command}" if self.output is None else self.output
        return text, self.failure


@pytest.fixture
def make_executor():
    """Factory for recording executor stubs."""
    return RecordingExecutor


@pytest.fixture
def recorder() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def submit():
    """Return a helper that types *text* into the input line and presses Enter."""

    def _submit(session: SessionController, text: str):
        session.input.set_value(text)
        return session.handle(Submit())

    return _submit


@pytest.fixture
def session(recorder) -> SessionController:
    """Two-tab session that has not seen a terminal size yet."""
    return SessionController(["A", "B"], recorder)


@pytest.fixture
def ready_session(session) -> SessionController:
    """Two-tab session laid out for an 80x24 terminal."""
    session.handle(Resize(80, 24))
    return session
