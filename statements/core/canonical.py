"""
Canonical serialization and pruning.

All statement hashing and storage goes through these functions so that the
same logical statement always produces the same bytes.
"""

import json
from datetime import date, datetime
from collections.abc import Mapping
from typing import Any, Dict, Optional

from .timestamps import format_timestamp


def is_absent(value: Any) -> bool:
    """
    Absent values are None and the empty string.

    Zero, False and empty sequences are real values and are kept.
    """
    return value is None or (isinstance(value, str) and value == "")


def canonicalize(obj: Any) -> Any:
    """
    Convert arbitrary nested dict/list to canonical form.

    Rules:
    - dict keys sorted alphabetically
    - tuples converted to lists
    - datetimes rendered as canonical timestamp strings
    - recursive normalization
    """
    if isinstance(obj, Mapping):
        return {k: canonicalize(obj[k]) for k in sorted(obj.keys())}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    if isinstance(obj, (datetime, date)):
        return format_timestamp(obj)
    return obj


def canonical_json_bytes(obj: Any) -> bytes:
    """
    Deterministic JSON bytes for hashing.

    Guarantees:
    - sort_keys=True (secondary safety)
    - separators remove whitespace
    - ensure_ascii=False keeps UTF-8 stable
    - canonical preprocessing via canonicalize()
    """
    canon = canonicalize(obj)
    s = json.dumps(canon, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def canonical_json_str(obj: Any) -> str:
    """Deterministic JSON string (for identifiers and storage)."""
    return canonical_json_bytes(obj).decode("utf-8")


def prune(attributes: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Return a copy of a mapping without its absent values.

    Only the top level is pruned; nested objects are expected to have been
    built by a renderer that already pruned them. Datetime values are
    rendered as canonical timestamp strings.
    """
    out: Dict[str, Any] = {}
    for key, value in (attributes or {}).items():
        if is_absent(value):
            continue
        if isinstance(value, (datetime, date)):
            value = format_timestamp(value)
        out[key] = value
    return out
