"""Measuring wrappers around arbitrary callables."""

from __future__ import annotations

import functools
from collections.abc import Callable
from enum import Enum
from typing import Any

from tickprof.core.exceptions import AlreadyWrappedError, ConfigurationError
from tickprof.instrument.context import ProfilerContext

WRAPPED_MARKER = "__tickprof_wrapped__"
NAME_ATTR = "__tickprof_name__"


class CallMode(str, Enum):
    CALL = "call"
    CONSTRUCT = "construct"


def is_wrapped(target: Any) -> bool:
    return bool(getattr(target, WRAPPED_MARKER, False))


def wrap(
    name: str,
    original: Callable[..., Any],
    context: ProfilerContext,
    *,
    mode: CallMode = CallMode.CALL,
) -> Callable[..., Any]:
    """Return a callable that records each invocation of `original` under `name`.

    With `CallMode.CONSTRUCT`, `original` must be a class and the returned
    factory builds instances of it. Exceptions raised by `original` reach the
    caller unchanged.
    """

    if is_wrapped(original):
        raise AlreadyWrappedError(f"'{name}' is already wrapped by the profiler.")

    if mode is CallMode.CONSTRUCT:
        if not isinstance(original, type):
            raise ConfigurationError(
                f"CallMode.CONSTRUCT requires a class, got {type(original).__name__} for '{name}'."
            )
        # Class namespaces must not be copied onto the factory function.
        decorate = functools.wraps(original, updated=())
    else:
        decorate = functools.wraps(original)

    @decorate
    def wrapped(*args: Any, **kwargs: Any) -> Any:
        if not context.recording:
            return original(*args, **kwargs)

        session = context.session
        name_matches = name == session.name_filter
        if name_matches:
            context.depth += 1
        caller = context.current_caller
        context.current_caller = name

        succeeded = False
        start = context.clock()
        try:
            result = original(*args, **kwargs)
            succeeded = True
            return result
        finally:
            end = context.clock()
            successes = failures = 0
            if name in context.actions:
                if succeeded and context.outcome(result):
                    successes = 1
                    context.slice_successes += 1
                else:
                    failures = 1
                    context.slice_failures += 1
            context.current_caller = caller
            if context.depth > 0 or not session.name_filter:
                session.graph.record(name, end - start, successes, failures, caller)
            if name_matches:
                context.depth -= 1

    setattr(wrapped, WRAPPED_MARKER, True)
    setattr(wrapped, NAME_ATTR, name)
    return wrapped
