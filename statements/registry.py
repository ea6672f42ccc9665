"""
Registry of event builders keyed by event kind.

Each builder pairs a validation rule set with a pure function that turns a
validated event into a StatementDescriptor.

Usage:
    registry = StatementRegistry()

    @registry.builder("assignment.view", rules(assignment=FieldRule(FieldKind.URI, required=True)))
    def view(config, event):
        return StatementDescriptor(...)

    outcome = view(config, {"actor": {"id": "u1"}, "timestamp": ts, "metadata": {...}})
"""

import functools
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from .core.config import PlatformConfig
from .core.errors import VocabularyError
from .core.events import Event
from .core.validation import FieldRule, validate_event
from .logging_config import get_logger
from .processor import Callback, ProcessOutcome, StatementDescriptor, complete, process_statement

# Build signature: (config, validated_event) -> descriptor
Build = Callable[[PlatformConfig, Event], StatementDescriptor]


@dataclass(frozen=True)
class EventBuilder:
    kind: str
    rules: Mapping
    build: Build


class StatementRegistry:
    """
    Static table of event builders.

    Registration problems (duplicate kinds, malformed rule sets) raise
    VocabularyError immediately so they surface at import time.
    """

    def __init__(self) -> None:
        self._builders: Dict[str, EventBuilder] = {}

    def register(self, builder: EventBuilder) -> None:
        """
        Register an event builder.

        Raises:
            VocabularyError: If the kind is already registered or a rule is malformed
        """
        if builder.kind in self._builders:
            raise VocabularyError(f"Event kind already registered: {builder.kind}")
        for name, rule in builder.rules.items():
            if not isinstance(rule, FieldRule):
                raise VocabularyError(f"Invalid rule for {builder.kind}.{name}: {rule!r}")
        self._builders[builder.kind] = builder

    def get(self, kind: str) -> EventBuilder:
        """
        Raises:
            VocabularyError: If no builder is registered for kind
        """
        if kind not in self._builders:
            raise VocabularyError(f"No builder for event kind: {kind}")
        return self._builders[kind]

    def kinds(self) -> List[str]:
        return sorted(self._builders.keys())

    def emit(
        self,
        kind: str,
        config: PlatformConfig,
        event: Any,
        callback: Optional[Callback] = None,
    ) -> ProcessOutcome:
        """
        Validate, build and process one event.

        Validation failures are delivered to the callback and never reach
        the transport.

        Args:
            kind: Registered event kind
            config: Platform configuration
            event: Event or mapping {"actor", "timestamp", "metadata"}
            callback: Optional callable(error, result), invoked exactly once

        Raises:
            VocabularyError: If kind is not registered
        """
        builder = self.get(kind)
        event = Event.coerce(event)

        error = validate_event(builder.rules, event)
        if error is not None:
            logger = get_logger(__name__, trace_id=kind)
            logger.warning("Event rejected: %s", error)
            return complete(ProcessOutcome(error=error), callback)

        descriptor = builder.build(config, event)
        return process_statement(config, event, descriptor, callback, kind=kind)

    def builder(self, kind: str, rules: Mapping) -> Callable[[Build], Callable[..., ProcessOutcome]]:
        """
        Decorator registering a build function under kind.

        The decorated name becomes the public operation
        op(config, event, callback=None) -> ProcessOutcome. The build function
        stays reachable as op.build.
        """
        def decorator(build: Build) -> Callable[..., ProcessOutcome]:
            self.register(EventBuilder(kind=kind, rules=rules, build=build))

            @functools.wraps(build)
            def operation(config: PlatformConfig, event: Any, callback: Optional[Callback] = None) -> ProcessOutcome:
                return self.emit(kind, config, event, callback)

            operation.build = build  # type: ignore[attr-defined]
            operation.kind = kind  # type: ignore[attr-defined]
            return operation

        return decorator


# Process-wide registry holding the built-in builders
REGISTRY = StatementRegistry()
