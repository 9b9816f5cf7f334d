"""Callable instrumentation."""

from tickprof.instrument.actions import ActionSet, OutcomePolicy, SentinelOutcome
from tickprof.instrument.context import ProfilerContext
from tickprof.instrument.register import profile_function, profile_object
from tickprof.instrument.wrapper import CallMode, is_wrapped, wrap

__all__ = [
    "ActionSet",
    "OutcomePolicy",
    "SentinelOutcome",
    "ProfilerContext",
    "CallMode",
    "wrap",
    "is_wrapped",
    "profile_object",
    "profile_function",
]
