"""
Structured-format (Caliper-style) renderers.
"""

from typing import Any, Dict, Mapping, Optional

from ..core.canonical import prune
from ..core.events import Actor, get_user_id
from ..vocabulary import CaliperEntityType


def render_entity(
    kind: Optional[str],
    attributes: Mapping[str, Any],
    extensions: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Render a typed entity.

    Absent attributes and extension values are omitted; the extensions key
    itself is omitted when nothing is left. A missing kind renders as the
    generic Entity type.

    Args:
        kind: Entity, digital resource or person type
        attributes: Entity attributes (id, name, description, ...)
        extensions: Free-form attributes keyed by IRI

    Returns:
        Dict ready for JSON serialization
    """
    attrs = prune(attributes)
    entity: Dict[str, Any] = {}
    if "id" in attrs:
        entity["id"] = attrs.pop("id")
    entity["type"] = kind or CaliperEntityType.ENTITY
    entity.update(attrs)

    ext = prune(extensions)
    if ext:
        entity["extensions"] = ext
    return entity


def render_person(actor: Actor) -> Dict[str, Any]:
    return render_entity(CaliperEntityType.PERSON, {
        "id": get_user_id(actor),
        "name": actor.name,
    })


def render_edapp(platform_url: Optional[str]) -> Optional[Dict[str, Any]]:
    if not platform_url:
        return None
    return render_entity(CaliperEntityType.SOFTWARE_APPLICATION, {"id": platform_url})
