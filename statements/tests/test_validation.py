"""
Tests for declarative field validation.
"""

from datetime import date, datetime

import pytest

from statements.core.errors import ValidationReason
from statements.core.events import Actor, Event
from statements.core.validation import FieldKind, FieldRule, conforms, rules, validate, validate_event
from statements.core import validation
from statements.tests.fixtures import T

RULES = rules(
    id=FieldRule(FieldKind.URI, required=True),
    title=FieldRule(FieldKind.STRING, required=True),
    due_at=FieldRule(FieldKind.DATE),
    max_points=FieldRule(FieldKind.NUMBER),
    submission_types=FieldRule(FieldKind.ARRAY),
)


def test_every_field_kind_has_a_check():
    """Type checks must cover every field kind."""
    assert set(validation._CHECKS) == set(FieldKind)


def test_valid_metadata_passes():
    md = {
        "id": "https://x/a1",
        "title": "Essay",
        "due_at": "2024-03-08T23:59:00Z",
        "max_points": 50,
        "submission_types": ["online_text_entry"],
    }

    assert validate(RULES, md) is None


def test_optional_fields_may_be_absent():
    assert validate(RULES, {"id": "https://x/a1", "title": "Essay"}) is None
    assert validate(RULES, {"id": "https://x/a1", "title": "Essay", "due_at": None}) is None


def test_unlisted_fields_are_ignored():
    md = {"id": "https://x/a1", "title": "Essay", "whatever": object()}

    assert validate(RULES, md) is None


@pytest.mark.parametrize("value", [None, ""])
def test_required_absent_is_missing(value):
    """None and empty string count as missing."""
    err = validate(RULES, {"id": "https://x/a1", "title": value})

    assert err.field == "title"
    assert err.reason is ValidationReason.MISSING
    assert err.expected is None


def test_short_circuits_on_first_failure_in_rule_order():
    """Only the first failing field (in declared order) is reported."""
    err = validate(RULES, {"id": "not a uri", "max_points": "many"})

    assert err.field == "id"
    assert err.reason is ValidationReason.WRONG_TYPE
    assert err.expected == "uri"


def test_wrong_type_names_expected_kind():
    err = validate(RULES, {"id": "https://x/a1", "title": "Essay", "max_points": "50"})

    assert err.field == "max_points"
    assert err.expected == "number"
    assert "max_points" in str(err)


@pytest.mark.parametrize(
    "kind,value,ok",
    [
        (FieldKind.STRING, "text", True),
        (FieldKind.STRING, 5, False),
        (FieldKind.NUMBER, 5, True),
        (FieldKind.NUMBER, 4.5, True),
        (FieldKind.NUMBER, True, False),
        (FieldKind.NUMBER, float("nan"), False),
        (FieldKind.NUMBER, "5", False),
        (FieldKind.DATE, datetime(2024, 1, 1), True),
        (FieldKind.DATE, date(2024, 1, 1), True),
        (FieldKind.DATE, "2024-01-01", True),
        (FieldKind.DATE, "2024-01-01T10:00:00.000Z", True),
        (FieldKind.DATE, "next tuesday", False),
        (FieldKind.DATE, 1704067200, False),
        (FieldKind.URI, "https://x/a1", True),
        (FieldKind.URI, "urn:uuid:1234", True),
        (FieldKind.URI, "/relative/path", False),
        (FieldKind.URI, "https://x/has space", False),
        (FieldKind.URI, "https:", False),
        (FieldKind.ARRAY, ["a"], True),
        (FieldKind.ARRAY, ("a",), True),
        (FieldKind.ARRAY, "a", False),
        (FieldKind.ARRAY, {"a": 1}, False),
    ],
)
def test_field_kinds(kind, value, ok):
    assert conforms(kind, value) is ok


@pytest.mark.parametrize("value", ["https://x/a1\n", "https://x/a1 ", " https://x/a1", "https://x/a1\t", "\nhttps://x/a1"])
def test_uri_rejects_surrounding_whitespace(value):
    """A trailing newline must not slip through as an absolute URI."""
    err = validate(rules(id=FieldRule(FieldKind.URI, required=True)), {"id": value})

    assert conforms(FieldKind.URI, value) is False
    assert err is not None
    assert err.reason == ValidationReason.WRONG_TYPE


def test_rule_sets_are_read_only():
    with pytest.raises(TypeError):
        RULES["extra"] = FieldRule(FieldKind.STRING)


def test_validate_event_requires_actor():
    err = validate_event(RULES, Event.coerce({"timestamp": T, "metadata": {}}))

    assert err.field == "actor"
    assert err.reason is ValidationReason.MISSING


def test_validate_event_actor_without_id_is_missing():
    err = validate_event(RULES, Event.coerce({"actor": {"name": "Ann"}, "timestamp": T, "metadata": {}}))

    assert err.field == "actor"


def test_validate_event_timestamp_checks():
    missing = validate_event(RULES, Event.coerce({"actor": {"id": "u1"}, "metadata": {}}))
    garbage = validate_event(RULES, Event.coerce({"actor": {"id": "u1"}, "timestamp": "soon", "metadata": {}}))

    assert missing.field == "timestamp" and missing.reason is ValidationReason.MISSING
    assert garbage.field == "timestamp" and garbage.reason is ValidationReason.WRONG_TYPE


def test_validate_event_metadata_must_be_mapping():
    err = validate_event(RULES, Event(actor=Actor(id="u1"), timestamp=T, metadata=["id"]))

    assert err.field == "metadata"
    assert err.reason is ValidationReason.WRONG_TYPE


def test_validate_event_checks_envelope_before_metadata():
    err = validate_event(RULES, Event.coerce({"timestamp": T, "metadata": {"id": "bad"}}))

    assert err.field == "actor"
