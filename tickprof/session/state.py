"""Session data containers and profiling modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from tickprof.core.exceptions import ConfigurationError
from tickprof.graph.aggregator import CallGraph


class ProfileMode(str, Enum):
    STREAM = "stream"
    SNAPSHOT = "snapshot"
    EMAIL = "email"
    BACKGROUND = "background"


class SessionState(str, Enum):
    INACTIVE = "inactive"
    ARMED = "armed"
    ACTIVE = "active"


_MODE_ALIASES: dict[str, ProfileMode] = {"profile": ProfileMode.SNAPSHOT}


def parse_mode(value: str | ProfileMode) -> ProfileMode:
    """Resolve a mode name, accepting `profile` as an alias of snapshot."""

    if isinstance(value, ProfileMode):
        return value
    normalized = str(value).strip().lower()
    if normalized in _MODE_ALIASES:
        return _MODE_ALIASES[normalized]
    try:
        return ProfileMode(normalized)
    except ValueError as exc:
        known = ", ".join(mode.value for mode in ProfileMode)
        raise ConfigurationError(
            f"Unsupported profile mode '{value}'. Expected one of: {known}, profile."
        ) from exc


@dataclass(slots=True)
class Session:
    """One profiling run; `end_tick=None` means unbounded."""

    mode: ProfileMode
    start_tick: int
    end_tick: int | None = None
    name_filter: str | None = None
    total_time: float = 0.0
    total_successes: int = 0
    total_failures: int = 0
    graph: CallGraph = field(default_factory=CallGraph)

    def state_at(self, tick: int) -> SessionState:
        if tick < self.start_tick:
            return SessionState.ARMED
        if self.end_tick is None or tick <= self.end_tick:
            return SessionState.ACTIVE
        return SessionState.INACTIVE

    @property
    def duration(self) -> int | None:
        if self.end_tick is None:
            return None
        return self.end_tick - self.start_tick + 1

    def elapsed_ticks(self, tick: int) -> int:
        """Number of slices recorded so far, capped at the session end."""

        last = tick if self.end_tick is None else min(self.end_tick, tick)
        return max(last - self.start_tick + 1, 0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value,
            "start_tick": self.start_tick,
            "end_tick": self.end_tick,
            "name_filter": self.name_filter,
            "total_time": self.total_time,
            "total_successes": self.total_successes,
            "total_failures": self.total_failures,
            "graph": self.graph.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Session:
        end_tick = data.get("end_tick")
        return cls(
            mode=parse_mode(data["mode"]),
            start_tick=int(data["start_tick"]),
            end_tick=None if end_tick is None else int(end_tick),
            name_filter=data.get("name_filter"),
            total_time=float(data.get("total_time", 0.0)),
            total_successes=int(data.get("total_successes", 0)),
            total_failures=int(data.get("total_failures", 0)),
            graph=CallGraph.from_dict(data.get("graph") or {}),
        )
