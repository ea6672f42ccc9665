"""
Flat-format (xAPI-style) renderers.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from ..core.canonical import is_absent, prune
from ..core.events import Actor, get_user_id

LANGUAGE = "en-US"


@dataclass(frozen=True)
class StatementRef:
    """Object pointing at another statement by its derived identifier."""
    id: str

    def to_dict(self) -> Dict[str, Any]:
        return {"objectType": "StatementRef", "id": self.id}


XapiObject = Union[StatementRef, Dict[str, Any]]


def _language_map(text: Optional[str]) -> Optional[Dict[str, str]]:
    if is_absent(text):
        return None
    return {LANGUAGE: text}


def render_agent(actor: Actor, home_page: Optional[str] = None) -> Dict[str, Any]:
    """
    Render an actor as an xAPI Agent identified by account.

    The account name is the same user reference the structured format uses
    for its Person id.
    """
    account = prune({
        "homePage": actor.home_page or home_page,
        "name": get_user_id(actor),
    })
    return prune({
        "objectType": "Agent",
        "name": actor.name,
        "mbox": f"mailto:{actor.email}" if actor.email else None,
        "account": account,
    })


def render_activity(
    id: str,
    type: Optional[str] = None,
    name: Optional[str] = None,
    description: Optional[str] = None,
    extensions: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    definition = prune({
        "type": type,
        "name": _language_map(name),
        "description": _language_map(description),
        "extensions": prune(extensions) or None,
    })
    return prune({
        "objectType": "Activity",
        "id": id,
        "definition": definition or None,
    })


def render_score(
    raw: Any = None,
    min: Any = None,
    max: Any = None,
    scaled: Any = None,
) -> Optional[Dict[str, Any]]:
    score = prune({"scaled": scaled, "raw": raw, "min": min, "max": max})
    return score or None


def render_result(
    completion: Optional[bool] = None,
    response: Optional[str] = None,
    score: Optional[Mapping[str, Any]] = None,
) -> Optional[Dict[str, Any]]:
    """Render a result; None when every field is absent."""
    result = prune({"score": score, "completion": completion, "response": response})
    return result or None


def render_object(obj: XapiObject) -> Dict[str, Any]:
    if isinstance(obj, StatementRef):
        return obj.to_dict()
    return dict(obj)
