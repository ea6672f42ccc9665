"""
Core statement primitives.

This module provides the building blocks every statement goes through:
- Event / Actor: Immutable input records
- Validation: Declarative field rules with short-circuit checking
- Canonical: Deterministic serialization and absent-value pruning
- IDs: Deterministic statement identifiers
- Timestamps: Canonical instant rendering
- RenderedStatement: Dual-format output record
"""

from .events import Actor, Event, get_user_id
from .validation import FieldKind, FieldRule, rules, validate, validate_event
from .canonical import canonicalize, canonical_json_bytes, canonical_json_str, is_absent, prune
from .ids import STATEMENT_NAMESPACE, derive_statement_id
from .timestamps import format_timestamp, parse_timestamp
from .statement import RenderedStatement
from .config import PlatformConfig
from .errors import (
    StatementError,
    TransportError,
    ValidationError,
    ValidationReason,
    VocabularyError,
)

__all__ = [
    "Actor",
    "Event",
    "get_user_id",
    "FieldKind",
    "FieldRule",
    "rules",
    "validate",
    "validate_event",
    "canonicalize",
    "canonical_json_bytes",
    "canonical_json_str",
    "is_absent",
    "prune",
    "STATEMENT_NAMESPACE",
    "derive_statement_id",
    "format_timestamp",
    "parse_timestamp",
    "RenderedStatement",
    "PlatformConfig",
    "StatementError",
    "TransportError",
    "ValidationError",
    "ValidationReason",
    "VocabularyError",
]
