"""
Shared test doubles and event factories.
"""

from datetime import datetime, timezone
from typing import List

from statements.core import RenderedStatement, TransportError
from statements.transport import DispatchResult, StatementTransport

T = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
T_ISO = "2024-03-01T09:30:00.000Z"


class RecordingTransport(StatementTransport):
    """In-memory transport that records every statement it is sent."""

    def __init__(self) -> None:
        self.sent: List[RenderedStatement] = []

    def send(self, statement: RenderedStatement) -> DispatchResult:
        self.sent.append(statement)
        return DispatchResult(statement_id=statement.id, location="memory", committed=True)


class FailingTransport(StatementTransport):
    def __init__(self, message: str = "lrs unreachable") -> None:
        self.message = message
        self.calls = 0

    def send(self, statement: RenderedStatement) -> DispatchResult:
        self.calls += 1
        raise TransportError(self.message)


class BrokenTransport(StatementTransport):
    """Transport whose client raises something other than TransportError."""

    def __init__(self, exc: Exception) -> None:
        self.exc = exc
        self.calls = 0

    def send(self, statement: RenderedStatement) -> DispatchResult:
        self.calls += 1
        raise self.exc


class CallbackRecorder:
    """Callback that remembers every (error, result) it was called with."""

    def __init__(self) -> None:
        self.calls = []

    def __call__(self, error, result) -> None:
        self.calls.append((error, result))


def make_event(metadata, actor=None, timestamp=T) -> dict:
    return {
        "actor": actor if actor is not None else {"id": "u1"},
        "timestamp": timestamp,
        "metadata": metadata,
    }
