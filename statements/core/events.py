"""
Event model for statement generation.

Events are immutable records of something a person did on the platform.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional


@dataclass(frozen=True)
class Actor:
    """
    Person performing the action.

    Fields:
        id: Stable user reference on the platform
        name: Display name
        home_page: Home page of the account system the id belongs to
        email: Email address (rendered as an xAPI mbox)
    """
    id: str
    name: Optional[str] = None
    home_page: Optional[str] = None
    email: Optional[str] = None

    @staticmethod
    def from_value(value: Any) -> Optional["Actor"]:
        """
        Build an Actor from an Actor or a mapping.

        Returns None when no user id can be found, which validation then
        reports as a missing actor.
        """
        if isinstance(value, Actor):
            return value
        if not isinstance(value, Mapping):
            return None
        user_id = value.get("id")
        if user_id is None or user_id == "":
            return None
        return Actor(
            id=str(user_id),
            name=value.get("name"),
            home_page=value.get("home_page") or value.get("homePage"),
            email=value.get("email"),
        )


def get_user_id(actor: Actor) -> str:
    """Stable user reference shared by both statement formats."""
    return actor.id


@dataclass(frozen=True)
class Event:
    """
    Immutable learning event.

    Fields:
        actor: Person performing the action (None if not supplied)
        timestamp: Point in time the event occurred (datetime or ISO string)
        metadata: Event-specific fields (read-only view)
    """
    actor: Optional[Actor]
    timestamp: Any
    metadata: Mapping = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.metadata, Mapping) and not isinstance(self.metadata, MappingProxyType):
            object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def get(self, key: str) -> Any:
        """Metadata value or None when absent."""
        if not isinstance(self.metadata, Mapping):
            return None
        return self.metadata.get(key)

    def require_actor(self) -> Actor:
        """
        Get the actor or raise if none was supplied.

        Raises:
            ValueError: If actor is None
        """
        if self.actor is None:
            raise ValueError("Event.actor is required but None")
        return self.actor

    @staticmethod
    def coerce(value: Any) -> "Event":
        """
        Accept an Event or a plain mapping of the form
        {"actor": {...}, "timestamp": ..., "metadata": {...}}.
        """
        if isinstance(value, Event):
            return value
        if not isinstance(value, Mapping):
            raise TypeError(f"cannot build an Event from {type(value).__name__}")
        metadata = value.get("metadata")
        return Event(
            actor=Actor.from_value(value.get("actor")),
            timestamp=value.get("timestamp"),
            metadata={} if metadata is None else metadata,
        )
