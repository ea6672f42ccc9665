"""
Stable statement identifier derivation.

Identifiers are derived, never random: re-sending the same logical event
yields the same identifier, which lets downstream stores drop duplicates.
"""

import uuid
from typing import Any, Sequence

from .canonical import canonical_json_str

# Namespace for all statement identifiers (uuid5 of the project URL)
STATEMENT_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "https://learning-statements.invalid/statement")


def derive_statement_id(platform: str, verb: str, parts: Sequence[Any]) -> str:
    """
    Derive a version-5 UUID from the platform, the verb and ordered parts.

    The name hashed into the UUID is the canonical JSON array
    [platform, verb, *parts]. JSON string quoting keeps the encoding
    unambiguous, so ["a|b"] and ["a", "b"] never collide. Datetime parts are
    rendered as canonical timestamp strings first.

    Args:
        platform: Platform identity (namespace seed)
        verb: Verb IRI of the statement
        parts: Ordered identifier parts (strings, numbers or datetimes)

    Returns:
        Lowercase hyphenated UUID string

    Example:
        derive_statement_id("acme", VERB_IRI, ["https://x/a1"]) -> "5b0c..."
    """
    name = canonical_json_str([platform, verb, *parts])
    return str(uuid.uuid5(STATEMENT_NAMESPACE, name))
