"""Shared mutable state threaded through every instrumented call."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from tickprof.graph.aggregator import TICK_NODE
from tickprof.instrument.actions import ActionSet, OutcomePolicy, SentinelOutcome
from tickprof.session.state import Session


@dataclass(slots=True)
class ProfilerContext:
    """Per-process instrumentation state owned by the session controller.

    `current_caller` only remembers the immediate caller. Wrappers save it on
    entry and restore it on exit, which matches call/return order, so edges
    are exact for one hop and approximate under recursion.
    """

    clock: Callable[[], float]
    actions: ActionSet = field(default_factory=ActionSet)
    outcome: OutcomePolicy = field(default_factory=SentinelOutcome)
    session: Session | None = None
    recording: bool = False
    depth: int = 0
    current_caller: str = TICK_NODE
    slice_successes: int = 0
    slice_failures: int = 0

    def begin_slice(self) -> None:
        self.depth = 0
        self.current_caller = TICK_NODE
        self.slice_successes = 0
        self.slice_failures = 0
