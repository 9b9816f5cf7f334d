"""Walk classes, modules and objects and instrument their callables."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Collection
from typing import Any

from tickprof.instrument.context import ProfilerContext
from tickprof.instrument.wrapper import wrap

logger = logging.getLogger(__name__)

DEFAULT_BLACKLIST: tuple[str, ...] = ("now", "current_tick")


def _skip(attr: str, blacklist: Collection[str]) -> bool:
    return attr.startswith("__") or attr in blacklist


def _assign(target: Any, attr: str, value: Any) -> bool:
    try:
        setattr(target, attr, value)
    except (AttributeError, TypeError) as exc:
        logger.debug("Cannot instrument %r.%s: %s", target, attr, exc)
        return False
    return True


def _wrap_property(prop: property, label: str, context: ProfilerContext) -> property:
    fget = wrap(f"{label}:get", prop.fget, context) if prop.fget is not None else None
    fset = wrap(f"{label}:set", prop.fset, context) if prop.fset is not None else None
    fdel = wrap(f"{label}:delete", prop.fdel, context) if prop.fdel is not None else None
    return property(fget, fset, fdel, prop.__doc__)


def _instrument_class(
    cls: type,
    label: str,
    context: ProfilerContext,
    blacklist: Collection[str],
) -> int:
    count = 0
    for attr, value in list(vars(cls).items()):
        if _skip(attr, blacklist):
            continue
        extended = f"{label}.{attr}"
        if isinstance(value, staticmethod):
            replacement: Any = staticmethod(wrap(extended, value.__func__, context))
        elif isinstance(value, classmethod):
            replacement = classmethod(wrap(extended, value.__func__, context))
        elif isinstance(value, property):
            replacement = _wrap_property(value, extended, context)
        elif inspect.isfunction(value):
            replacement = wrap(extended, value, context)
        else:
            continue
        if _assign(cls, attr, replacement):
            count += 1
    return count


def _instrument_namespace(
    target: Any,
    label: str,
    context: ProfilerContext,
    blacklist: Collection[str],
) -> int:
    count = 0
    for attr, value in list(vars(target).items()):
        if _skip(attr, blacklist) or isinstance(value, type) or not callable(value):
            continue
        if _assign(target, attr, wrap(f"{label}.{attr}", value, context)):
            count += 1
    return count


def profile_object(
    target: Any,
    label: str,
    context: ProfilerContext,
    *,
    blacklist: Collection[str] = DEFAULT_BLACKLIST,
) -> int:
    """Instrument the callables a class or object defines itself.

    Classes contribute plain functions, static/class methods and property
    accessors; modules, namespaces and instances contribute their own
    callable attributes. Returns the number of attributes instrumented.
    """

    if target is None:
        return 0
    if isinstance(target, type):
        count = _instrument_class(target, label, context, blacklist)
    elif hasattr(target, "__dict__"):
        count = _instrument_namespace(target, label, context, blacklist)
    else:
        logger.debug("Skipping %s: object has no attribute namespace.", label)
        return 0
    logger.debug("Instrumented %d callables under %s.", count, label)
    return count


def profile_function(
    fn: Callable[..., Any],
    context: ProfilerContext,
    name: str | None = None,
) -> Callable[..., Any]:
    """Wrap a single function, naming it after its qualified name by default."""

    fn_name = name or getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None)
    if not fn_name:
        logger.warning("Could not resolve a name for %r; it will not be profiled.", fn)
        return fn
    return wrap(fn_name, fn, context)
