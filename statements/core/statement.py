"""
Rendered statement model.

A rendered statement carries both target payloads plus the envelope fields
they share. It is built fresh per call and handed straight to a transport.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class RenderedStatement:
    """
    Dual-format statement.

    Fields:
        id: Derived primary identifier (uuid string)
        kind: Event kind that produced it (e.g. "assignment.create")
        verb: xAPI verb IRI
        actor: User reference of the actor
        timestamp: Canonical timestamp string
        xapi: Flat-format payload
        caliper: Structured-format payload
    """
    id: str
    kind: str
    verb: str
    actor: str
    timestamp: str
    xapi: Dict[str, Any] = field(default_factory=dict)
    caliper: Dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> Dict[str, Any]:
        """Storage record (JSON-ready)."""
        return {
            "id": self.id,
            "kind": self.kind,
            "verb": self.verb,
            "actor": self.actor,
            "timestamp": self.timestamp,
            "xapi": self.xapi,
            "caliper": self.caliper,
        }

    @staticmethod
    def from_record(rec: Dict[str, Any]) -> "RenderedStatement":
        return RenderedStatement(
            id=rec["id"],
            kind=rec.get("kind", ""),
            verb=rec.get("verb", ""),
            actor=rec.get("actor", ""),
            timestamp=rec.get("timestamp", ""),
            xapi=rec.get("xapi", {}),
            caliper=rec.get("caliper", {}),
        )
