"""
Transport interfaces.

Defines the contract between the statement processor and whatever persists
or forwards finished statements.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Optional

from ..core.statement import RenderedStatement


@dataclass(frozen=True)
class DispatchResult:
    """
    Result of a send.

    When duplicate is True the statement id was already known to the
    transport and nothing new was written (committed is False).
    """

    statement_id: str
    location: str
    committed: bool
    duplicate: bool = False


class StatementTransport(ABC):
    """
    Receives rendered statements.

    Implementations must:
    - Report exactly one outcome per send (a DispatchResult or a TransportError)
    - Own any retries, timeouts or buffering themselves
    """

    @abstractmethod
    def send(self, statement: RenderedStatement) -> DispatchResult:
        """
        Persist or forward a statement.

        Raises:
            TransportError: If the statement could not be handed off
        """
        ...


class StatementStore(StatementTransport):
    """
    Transport that keeps statements and can read them back.

    Stores address statements by their derived id, so re-sending the same
    logical statement is reported as a duplicate instead of stored twice.
    """

    @abstractmethod
    def read(self) -> Iterator[RenderedStatement]:
        """
        Yield stored statements.

        Raises:
            TransportError: If the store cannot be read
        """
        ...

    def get(self, statement_id: str) -> Optional[RenderedStatement]:
        """
        Return a stored statement by id, or None.

        Implementations may override with a direct lookup. Default scans read().
        """
        for statement in self.read():
            if statement.id == statement_id:
                return statement
        return None
