"""
Exception types for statement processing.
"""

from enum import Enum
from typing import Optional


class StatementError(Exception):
    """Base class for all statement processing errors."""
    pass


class ValidationReason(str, Enum):
    MISSING = "missing"
    WRONG_TYPE = "wrong_type"


class ValidationError(StatementError):
    """
    Raised (or returned) when an event does not satisfy its rule set.

    Fields:
        field: Name of the first offending field
        reason: ValidationReason.MISSING or ValidationReason.WRONG_TYPE
        expected: Expected field kind for type mismatches
    """

    def __init__(self, field: str, reason: ValidationReason, expected: Optional[str] = None) -> None:
        self.field = field
        self.reason = reason
        self.expected = expected
        if reason is ValidationReason.MISSING:
            message = f"Missing required field: {field}"
        else:
            message = f"Invalid field '{field}': expected {expected}"
        super().__init__(message)


class TransportError(StatementError):
    """Raised when a transport fails to persist or forward a statement."""
    pass


class VocabularyError(StatementError):
    """Raised when an event kind or vocabulary term is unknown or registered twice."""
    pass
