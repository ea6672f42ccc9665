"""
Tests for entity/person renderers in both formats.

Critical: absent attributes must never appear in rendered objects.
"""

from datetime import datetime, timezone

from statements.core.events import Actor
from statements.render import (
    StatementRef,
    render_activity,
    render_agent,
    render_edapp,
    render_entity,
    render_person,
    render_result,
    render_score,
)
from statements.render.xapi import render_object


def test_entity_prunes_absent_attributes():
    entity = render_entity("AssignableDigitalResource", {
        "id": "https://x/a1",
        "name": "Essay",
        "description": None,
        "maxScore": None,
    })

    assert entity == {"id": "https://x/a1", "type": "AssignableDigitalResource", "name": "Essay"}


def test_entity_keeps_zero_values():
    entity = render_entity("Result", {"totalScore": 0})

    assert entity["totalScore"] == 0


def test_entity_extensions_pruned_and_omitted_when_empty():
    key = "https://example.org/ext"

    with_value = render_entity("Entity", {"id": "urn:x"}, {key: ["a"], "https://example.org/other": None})
    without = render_entity("Entity", {"id": "urn:x"}, {key: None})

    assert with_value["extensions"] == {key: ["a"]}
    assert "extensions" not in without


def test_entity_without_kind_is_generic():
    assert render_entity(None, {"id": "urn:x"})["type"] == "Entity"


def test_entity_renders_dates():
    entity = render_entity("Entity", {"dateToSubmit": datetime(2024, 3, 8, 23, 59, tzinfo=timezone.utc)})

    assert entity["dateToSubmit"] == "2024-03-08T23:59:00.000Z"


def test_person_and_agent_share_user_reference():
    actor = Actor(id="u1", name="Ann")

    person = render_person(actor)
    agent = render_agent(actor, home_page="https://lms.example.org")

    assert person == {"id": "u1", "type": "Person", "name": "Ann"}
    assert agent["account"]["name"] == person["id"]
    assert agent["account"]["homePage"] == "https://lms.example.org"


def test_agent_prunes_absent_fields():
    agent = render_agent(Actor(id="u1"))

    assert agent == {"objectType": "Agent", "account": {"name": "u1"}}


def test_agent_prefers_actor_home_page_and_renders_mbox():
    agent = render_agent(Actor(id="u1", home_page="https://idp.example.org", email="ann@example.org"),
                         home_page="https://lms.example.org")

    assert agent["account"]["homePage"] == "https://idp.example.org"
    assert agent["mbox"] == "mailto:ann@example.org"


def test_activity_prunes_definition():
    activity = render_activity("https://x/a1", type="http://adlnet.gov/expapi/activities/assessment",
                               name="Essay", description=None, extensions={"https://e/x": None})

    assert activity == {
        "objectType": "Activity",
        "id": "https://x/a1",
        "definition": {
            "type": "http://adlnet.gov/expapi/activities/assessment",
            "name": {"en-US": "Essay"},
        },
    }


def test_activity_without_definition():
    assert render_activity("https://x/a1") == {"objectType": "Activity", "id": "https://x/a1"}


def test_result_and_score_pruning():
    assert render_result() is None
    assert render_score() is None
    assert render_result(completion=True, response=None) == {"completion": True}
    assert render_result(score=render_score(raw=45, max=None, scaled=None)) == {"score": {"raw": 45}}


def test_statement_ref_object():
    assert render_object(StatementRef("abc")) == {"objectType": "StatementRef", "id": "abc"}


def test_edapp():
    assert render_edapp(None) is None
    assert render_edapp("https://lms.example.org") == {
        "id": "https://lms.example.org",
        "type": "SoftwareApplication",
    }
