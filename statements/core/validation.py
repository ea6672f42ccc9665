"""
Declarative field validation.

A rule set maps metadata field names to a FieldRule (kind + required flag).
Validation walks the rules in declared order and reports the first failure
only.
"""

import math
import numbers
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Optional

from .canonical import is_absent
from .errors import ValidationError, ValidationReason
from .events import Event
from .timestamps import is_timestamp


class FieldKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    URI = "uri"
    ARRAY = "array"


@dataclass(frozen=True)
class FieldRule:
    kind: FieldKind
    required: bool = False


# RFC 3986 scheme followed by a non-empty hierarchical part
_URI_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*:[^\s]+")


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def _is_uri(value: Any) -> bool:
    return isinstance(value, str) and _URI_RE.fullmatch(value) is not None


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


_CHECKS: Dict[FieldKind, Callable[[Any], bool]] = {
    FieldKind.STRING: _is_string,
    FieldKind.NUMBER: _is_number,
    FieldKind.DATE: is_timestamp,
    FieldKind.URI: _is_uri,
    FieldKind.ARRAY: _is_array,
}


def rules(**fields: FieldRule) -> Mapping:
    """
    Build an immutable, ordered rule set.

    Example:
        CREATE_RULES = rules(
            id=FieldRule(FieldKind.URI, required=True),
            title=FieldRule(FieldKind.STRING, required=True),
        )
    """
    return MappingProxyType(dict(fields))


def conforms(kind: FieldKind, value: Any) -> bool:
    """Check a single present value against a field kind."""
    return _CHECKS[kind](value)


def validate(rule_set: Mapping, metadata: Mapping) -> Optional[ValidationError]:
    """
    Validate metadata against a rule set.

    Fields not listed in the rule set are ignored. Returns the first
    failure in rule order, or None when every declared field passes.
    """
    for name, rule in rule_set.items():
        value = metadata.get(name)
        if is_absent(value):
            if rule.required:
                return ValidationError(name, ValidationReason.MISSING)
            continue
        if not conforms(rule.kind, value):
            return ValidationError(name, ValidationReason.WRONG_TYPE, rule.kind.value)
    return None


def validate_event(rule_set: Mapping, event: Event) -> Optional[ValidationError]:
    """
    Validate the event envelope, then its metadata.

    Envelope checks, in order: actor with a user id, timestamp present and
    parseable, metadata is a mapping.
    """
    if event.actor is None:
        return ValidationError("actor", ValidationReason.MISSING)
    if is_absent(event.timestamp):
        return ValidationError("timestamp", ValidationReason.MISSING)
    if not is_timestamp(event.timestamp):
        return ValidationError("timestamp", ValidationReason.WRONG_TYPE, FieldKind.DATE.value)
    if not isinstance(event.metadata, Mapping):
        return ValidationError("metadata", ValidationReason.WRONG_TYPE, "mapping")
    return validate(rule_set, event.metadata)
