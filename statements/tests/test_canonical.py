"""
Tests for canonical serialization and pruning.

Critical: identifiers and stored records depend on these being stable.
"""

from datetime import datetime, timezone

from statements.core.canonical import canonicalize, canonical_json_bytes, canonical_json_str, prune


def test_canonicalize_dict_key_order():
    """Dict key order must not affect canonical output."""
    d1 = {"z": 1, "a": 2, "m": 3}
    d2 = {"a": 2, "m": 3, "z": 1}

    assert canonical_json_str(d1) == canonical_json_str(d2)


def test_canonicalize_nested():
    """Nested structures must be canonicalized recursively; list order is kept."""
    canon = canonicalize({"outer": {"z": (3, 1, 2), "a": {"nested": True}}})

    assert list(canon["outer"].keys()) == ["a", "z"]
    assert canon["outer"]["z"] == [3, 1, 2]


def test_canonicalize_datetimes():
    """Datetimes render as canonical UTC timestamps."""
    ts = datetime(2024, 3, 1, 9, 30, 0, 123456, tzinfo=timezone.utc)

    assert canonicalize([ts]) == ["2024-03-01T09:30:00.123Z"]


def test_canonical_json_bytes_determinism():
    obj = {"b": 2, "a": 1, "c": {"x": 10, "y": 20}}

    assert canonical_json_bytes(obj) == canonical_json_bytes(obj)
    assert canonical_json_str({"b": 2, "a": 1}) == '{"a":1,"b":2}'


def test_canonical_handles_unicode():
    """ensure_ascii=False keeps unicode readable and stable."""
    assert "日本語" in canonical_json_str({"key": "日本語"})


def test_prune_drops_none_and_empty_string_only():
    """Zero, False and empty lists are values, not absence."""
    pruned = prune({"a": None, "b": "", "c": 0, "d": False, "e": [], "f": "x"})

    assert pruned == {"c": 0, "d": False, "e": [], "f": "x"}


def test_prune_handles_missing_mapping():
    assert prune(None) == {}
