"""
Statement processor: render one event into both formats and dispatch it.

process_statement() is the only place that talks to the transport. Each call
is a single derive -> render -> dispatch sequence with exactly one reported
outcome.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence

from .core.canonical import prune
from .core.config import PlatformConfig
from .core.errors import StatementError, TransportError
from .core.events import Event, get_user_id
from .core.ids import derive_statement_id
from .core.statement import RenderedStatement
from .core.timestamps import format_timestamp
from .logging_config import get_logger
from .render.caliper import render_edapp, render_person
from .render.xapi import XapiObject, render_agent, render_object
from .transport.store import DispatchResult
from .vocabulary import CALIPER_CONTEXT, CaliperEventType, Verb

Callback = Callable[[Optional[StatementError], Optional[DispatchResult]], None]


@dataclass(frozen=True)
class XapiTemplate:
    """
    Flat-format part of a descriptor.

    Fields:
        uuid_parts: Ordered parts the statement id is derived from
        object: Rendered activity or a StatementRef
        result: Rendered result (None when absent)
    """
    uuid_parts: Sequence[Any]
    object: XapiObject
    result: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class CaliperTemplate:
    """
    Structured-format part of a descriptor.

    A type of None renders as the generic Event type.
    """
    type: Optional[str]
    object: Optional[Dict[str, Any]] = None
    generated: Optional[Dict[str, Any]] = None
    target: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class StatementDescriptor:
    verb: Verb
    xapi: XapiTemplate
    caliper: CaliperTemplate


@dataclass(frozen=True)
class ProcessOutcome:
    """
    Single outcome of one statement call.

    Exactly one of error/result is set.
    """
    error: Optional[StatementError] = None
    result: Optional[DispatchResult] = None
    statement: Optional[RenderedStatement] = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> DispatchResult:
        """
        Return the dispatch result or raise the error.

        Raises:
            StatementError: The validation or transport error of this call
        """
        if self.error is not None:
            raise self.error
        if self.result is None:
            raise StatementError("Outcome carries neither an error nor a result")
        return self.result


def complete(outcome: ProcessOutcome, callback: Optional[Callback]) -> ProcessOutcome:
    """Deliver an outcome to the caller's callback (if any) and return it."""
    if callback is not None:
        callback(outcome.error, outcome.result)
    return outcome


def render_statement(
    config: PlatformConfig,
    event: Event,
    descriptor: StatementDescriptor,
    kind: str = "",
) -> RenderedStatement:
    """
    Build both payloads for a validated event.

    Pure: no I/O, same inputs always produce the same statement.
    """
    actor = event.require_actor()
    statement_id = derive_statement_id(config.platform, descriptor.verb.id, descriptor.xapi.uuid_parts)
    timestamp = format_timestamp(event.timestamp)

    xapi = prune({
        "id": statement_id,
        "actor": render_agent(actor, home_page=config.platform_url),
        "verb": {"id": descriptor.verb.id, "display": descriptor.verb.display()},
        "object": render_object(descriptor.xapi.object),
        "result": descriptor.xapi.result,
        "timestamp": timestamp,
        "context": {"platform": config.platform},
    })

    caliper = prune({
        "@context": CALIPER_CONTEXT,
        "id": f"urn:uuid:{statement_id}",
        "type": descriptor.caliper.type or CaliperEventType.EVENT,
        "actor": render_person(actor),
        "action": descriptor.verb.action,
        "object": descriptor.caliper.object,
        "generated": descriptor.caliper.generated,
        "target": descriptor.caliper.target,
        "eventTime": timestamp,
        "edApp": render_edapp(config.platform_url),
    })

    return RenderedStatement(
        id=statement_id,
        kind=kind,
        verb=descriptor.verb.id,
        actor=get_user_id(actor),
        timestamp=timestamp,
        xapi=xapi,
        caliper=caliper,
    )


def process_statement(
    config: PlatformConfig,
    event: Event,
    descriptor: StatementDescriptor,
    callback: Optional[Callback] = None,
    kind: str = "",
) -> ProcessOutcome:
    """
    Render a validated event and hand it to the configured transport.

    Args:
        config: Platform configuration (platform identity + transport)
        event: Validated event
        descriptor: Verb and templates for both formats
        callback: Optional callable(error, result), invoked exactly once
        kind: Event kind, recorded on the statement for storage

    Returns:
        ProcessOutcome with the DispatchResult or the TransportError
    """
    statement = render_statement(config, event, descriptor, kind=kind)
    logger = get_logger(__name__, trace_id=statement.id)
    logger.info("Dispatching statement", extra={"kind": kind, "verb": descriptor.verb.name})

    try:
        result = config.transport.send(statement)
    except TransportError as ex:
        logger.error("Transport failed: %s", ex)
        return complete(ProcessOutcome(error=ex, statement=statement), callback)
    except Exception as ex:
        error = TransportError(f"{type(ex).__name__}: {ex}")
        error.__cause__ = ex
        logger.error("Transport failed: %s", error)
        return complete(ProcessOutcome(error=error, statement=statement), callback)

    if result.duplicate:
        logger.info("Statement already delivered", extra={"location": result.location})
    return complete(ProcessOutcome(result=result, statement=statement), callback)
