"""
Renderers for the two statement formats.

- xapi: flat activity-stream statements (agent, activity, result)
- caliper: structured events (entity, person)

Renderers never validate and never fail; absent values are omitted.
"""

from .xapi import StatementRef, render_activity, render_agent, render_result, render_score
from .caliper import render_edapp, render_entity, render_person

__all__ = [
    "StatementRef",
    "render_activity",
    "render_agent",
    "render_result",
    "render_score",
    "render_edapp",
    "render_entity",
    "render_person",
]
