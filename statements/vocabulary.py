"""
Controlled vocabularies for both statement formats.

Verbs live in two parallel tables keyed by the same semantic names: the xAPI
verb IRI and the Caliper action. verb() joins them and fails loudly when a
name is missing from either table. Tables are read-only for the lifetime of
the process.
"""

from dataclasses import dataclass
from types import MappingProxyType

from .core.errors import VocabularyError

XAPI_VERBS = MappingProxyType({
    "created": "http://activitystrea.ms/schema/1.0/create",
    "viewed": "http://id.tincanapi.com/verb/viewed",
    "submitted": "http://activitystrea.ms/schema/1.0/submit",
    "scored": "http://adlnet.gov/expapi/verbs/scored",
    "commented": "http://adlnet.gov/expapi/verbs/commented",
})

CALIPER_ACTIONS = MappingProxyType({
    "created": "Created",
    "viewed": "Viewed",
    "submitted": "Submitted",
    "scored": "Graded",
    "commented": "Commented",
})


@dataclass(frozen=True)
class Verb:
    """
    A verb as used by both formats.

    Fields:
        name: Semantic name (also the xAPI display text)
        id: xAPI verb IRI
        action: Caliper action
    """
    name: str
    id: str
    action: str

    def display(self, language: str = "en-US") -> dict:
        return {language: self.name}


def verb(name: str) -> Verb:
    """
    Look up a verb by semantic name.

    Raises:
        VocabularyError: If the name is missing from either table
    """
    if name not in XAPI_VERBS or name not in CALIPER_ACTIONS:
        raise VocabularyError(f"Unknown verb: {name}")
    return Verb(name=name, id=XAPI_VERBS[name], action=CALIPER_ACTIONS[name])


class ActivityType:
    """xAPI activity types."""
    ASSESSMENT = "http://adlnet.gov/expapi/activities/assessment"


class CaliperEventType:
    EVENT = "Event"
    ASSESSMENT = "AssessmentEvent"
    VIEWED = "ViewEvent"


class CaliperEntityType:
    ENTITY = "Entity"
    ATTEMPT = "Attempt"
    RESULT = "Result"
    PERSON = "Person"
    SOFTWARE_APPLICATION = "SoftwareApplication"


class CaliperDigitalResourceType:
    ASSIGNABLE_DIGITAL_RESOURCE = "AssignableDigitalResource"


CALIPER_CONTEXT = "http://purl.imsglobal.org/ctx/caliper/v1p1"

# Extension keys
SUBMISSION_TYPES_EXTENSION = "https://canvas.instructure.com/xapi/assignments/submissions_types"
