"""Billable action names and outcome classification."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, Protocol


class OutcomePolicy(Protocol):
    def __call__(self, result: Any) -> bool:
        """Return True when a billable action's result counts as a success."""


@dataclass(frozen=True, slots=True)
class SentinelOutcome:
    """Success iff the result equals a fixed OK value."""

    ok: Any = 0

    def __call__(self, result: Any) -> bool:
        return result == self.ok


@dataclass(slots=True)
class ActionSet:
    """Identifiers charged a flat cost per successful call."""

    _names: set[str] = field(default_factory=set)

    @classmethod
    def of(cls, names: Iterable[str]) -> ActionSet:
        return cls(_names={str(name) for name in names})

    def add(self, *names: str) -> None:
        self._names.update(names)

    def remove(self, *names: str) -> None:
        for name in names:
            self._names.discard(name)

    def replace(self, names: Iterable[str]) -> None:
        self._names = {str(name) for name in names}

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._names))

    def __len__(self) -> int:
        return len(self._names)
