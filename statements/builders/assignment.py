"""
Statements for assignments: create, view, submit, grade and feedback.
"""

from typing import Any, Mapping, Optional

from ..core.canonical import is_absent
from ..core.config import PlatformConfig
from ..core.events import Event, get_user_id
from ..core.ids import derive_statement_id
from ..core.timestamps import format_timestamp
from ..core.validation import FieldKind, FieldRule, rules
from ..processor import CaliperTemplate, StatementDescriptor, XapiTemplate
from ..registry import REGISTRY
from ..render.caliper import render_entity, render_person
from ..render.xapi import StatementRef, render_activity, render_result, render_score
from ..vocabulary import (
    SUBMISSION_TYPES_EXTENSION,
    ActivityType,
    CaliperDigitalResourceType,
    CaliperEntityType,
    CaliperEventType,
    verb,
)

CREATED = verb("created")
VIEWED = verb("viewed")
SUBMITTED = verb("submitted")
SCORED = verb("scored")
COMMENTED = verb("commented")

CREATE_RULES = rules(
    id=FieldRule(FieldKind.URI, required=True),
    title=FieldRule(FieldKind.STRING, required=True),
    description=FieldRule(FieldKind.STRING),
    due_at=FieldRule(FieldKind.DATE),
    max_points=FieldRule(FieldKind.NUMBER),
    submission_types=FieldRule(FieldKind.ARRAY),
)

VIEW_RULES = rules(
    assignment=FieldRule(FieldKind.URI, required=True),
)

SUBMIT_RULES = rules(
    id=FieldRule(FieldKind.URI, required=True),
    assignment=FieldRule(FieldKind.URI, required=True),
    submission=FieldRule(FieldKind.STRING),
)

GRADE_RULES = rules(
    id=FieldRule(FieldKind.URI, required=True),
    assignment=FieldRule(FieldKind.URI, required=True),
    grade=FieldRule(FieldKind.NUMBER, required=True),
    grade_min=FieldRule(FieldKind.NUMBER),
    grade_max=FieldRule(FieldKind.NUMBER),
)

FEEDBACK_RULES = rules(
    id=FieldRule(FieldKind.URI, required=True),
    submission=FieldRule(FieldKind.URI, required=True),
    feedback=FieldRule(FieldKind.STRING, required=True),
)


def _creation_ref(config: PlatformConfig, assignment: str) -> StatementRef:
    """Reference to the statement that created an assignment."""
    return StatementRef(derive_statement_id(config.platform, CREATED.id, [assignment]))


def _submission_ref(config: PlatformConfig, submission: str) -> StatementRef:
    """Reference to the statement that submitted a submission."""
    return StatementRef(derive_statement_id(config.platform, SUBMITTED.id, [submission]))


def _timestamp_or_none(value: Any) -> Optional[str]:
    if is_absent(value):
        return None
    return format_timestamp(value)


def scaled_score(metadata: Mapping[str, Any]) -> Optional[float]:
    """
    grade / grade_max, or None when no non-zero maximum is supplied.
    """
    grade_max = metadata.get("grade_max")
    if not grade_max:
        return None
    return metadata["grade"] / grade_max


@REGISTRY.builder("assignment.create", CREATE_RULES)
def create(config: PlatformConfig, event: Event) -> StatementDescriptor:
    """
    A user created an assignment.

    Metadata:
        id: URL of the assignment
        title: Title of the assignment
        description: Description of the assignment (optional)
        due_at: Due date (optional)
        max_points: Maximum number of points (optional)
        submission_types: Accepted submission types (optional)
    """
    md = event.metadata
    extensions = {SUBMISSION_TYPES_EXTENSION: md.get("submission_types")}
    return StatementDescriptor(
        verb=CREATED,
        xapi=XapiTemplate(
            uuid_parts=[md["id"]],
            object=render_activity(
                md["id"],
                type=ActivityType.ASSESSMENT,
                name=md["title"],
                description=md.get("description"),
                extensions=extensions,
            ),
        ),
        caliper=CaliperTemplate(
            type=CaliperEventType.ASSESSMENT,
            object=render_entity(CaliperDigitalResourceType.ASSIGNABLE_DIGITAL_RESOURCE, {
                "id": md["id"],
                "name": md["title"],
                "description": md.get("description"),
                "dateToSubmit": _timestamp_or_none(md.get("due_at")),
                "maxScore": md.get("max_points"),
            }, extensions),
        ),
    )


@REGISTRY.builder("assignment.view", VIEW_RULES)
def view(config: PlatformConfig, event: Event) -> StatementDescriptor:
    """
    A user viewed an assignment.

    There is no natural id for a view, so the statement id is derived from
    the time, the assignment and the viewer.

    Metadata:
        assignment: URL of the viewed assignment
    """
    assignment = event.metadata["assignment"]
    return StatementDescriptor(
        verb=VIEWED,
        xapi=XapiTemplate(
            uuid_parts=[format_timestamp(event.timestamp), assignment, get_user_id(event.require_actor())],
            object=_creation_ref(config, assignment),
        ),
        caliper=CaliperTemplate(
            type=CaliperEventType.VIEWED,
            object=render_entity(CaliperDigitalResourceType.ASSIGNABLE_DIGITAL_RESOURCE, {
                "id": assignment,
            }),
        ),
    )


@REGISTRY.builder("assignment.submit", SUBMIT_RULES)
def submit(config: PlatformConfig, event: Event) -> StatementDescriptor:
    """
    A user submitted an assignment submission.

    Metadata:
        id: URL of the submission
        assignment: URL of the assignment
        submission: Text response or link to the response (optional)
    """
    md = event.metadata
    return StatementDescriptor(
        verb=SUBMITTED,
        xapi=XapiTemplate(
            uuid_parts=[md["id"]],
            object=_creation_ref(config, md["assignment"]),
            result=render_result(completion=True, response=md.get("submission")),
        ),
        caliper=CaliperTemplate(
            type=CaliperEventType.ASSESSMENT,
            object=render_entity(CaliperDigitalResourceType.ASSIGNABLE_DIGITAL_RESOURCE, {
                "id": md["assignment"],
            }),
            generated=render_entity(CaliperEntityType.ATTEMPT, {
                "id": md["id"],
                "description": md.get("submission"),
                "assignable": md["assignment"],
                "endedAtTime": format_timestamp(event.timestamp),
                "actor": render_person(event.require_actor()),
            }),
        ),
    )


@REGISTRY.builder("assignment.grade", GRADE_RULES)
def grade(config: PlatformConfig, event: Event) -> StatementDescriptor:
    """
    A user graded an assignment submission.

    Metadata:
        id: URL of the graded submission
        assignment: URL of the assignment
        grade: Grade for the submission
        grade_min: Minimum possible grade (optional)
        grade_max: Maximum possible grade (optional)
    """
    md = event.metadata
    scaled = scaled_score(md)
    return StatementDescriptor(
        verb=SCORED,
        xapi=XapiTemplate(
            uuid_parts=[md["id"]],
            object=_submission_ref(config, md["id"]),
            result=render_result(score=render_score(
                raw=md["grade"],
                min=md.get("grade_min"),
                max=md.get("grade_max"),
                scaled=scaled,
            )),
        ),
        caliper=CaliperTemplate(
            type=None,
            object=render_entity(CaliperEntityType.ATTEMPT, {"id": md["id"]}),
            generated=render_entity(CaliperEntityType.RESULT, {
                "assignable": md["assignment"],
                "totalScore": md["grade"],
                "normalScore": scaled,
                "scoredBy": render_person(event.require_actor()),
            }),
        ),
    )


@REGISTRY.builder("assignment.feedback", FEEDBACK_RULES)
def feedback(config: PlatformConfig, event: Event) -> StatementDescriptor:
    """
    A user left feedback on an assignment submission.

    Metadata:
        id: URL of the feedback
        submission: URL of the submission the feedback is for
        feedback: The feedback text

    The structured target is the Attempt named by `submission`. The feedback
    id appears only as the object, never as the target.
    """
    md = event.metadata
    return StatementDescriptor(
        verb=COMMENTED,
        xapi=XapiTemplate(
            uuid_parts=[md["id"]],
            object=_submission_ref(config, md["submission"]),
            result=render_result(response=md["feedback"]),
        ),
        caliper=CaliperTemplate(
            type=None,
            object=render_entity(None, {
                "id": md["id"],
                "description": md["feedback"],
            }),
            target=render_entity(CaliperEntityType.ATTEMPT, {"id": md["submission"]}),
        ),
    )
