"""Host collaborators: slice clock, tick counter and output channels."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Protocol

logger = logging.getLogger(__name__)
notify_logger = logging.getLogger("tickprof.notify")


class Host(Protocol):
    """Everything the profiler consumes from its execution environment."""

    def now(self) -> float:
        """CPU used so far in the current slice; never decreases within a slice."""

    def current_tick(self) -> int:
        """Monotonically increasing slice counter."""

    def notify(self, text: str) -> None:
        """Out-of-band delivery used by email mode."""

    def log(self, text: str) -> None:
        """Synchronous text output."""


@dataclass(slots=True)
class ProcessHost:
    """Host backed by the current process CPU clock.

    The owner advances ticks explicitly; every `advance()` starts a new slice
    and moves the clock baseline, so `now()` only reports CPU spent since.
    """

    tick: int = 0
    outbox: list[str] = field(default_factory=list)
    _baseline: float = field(default_factory=time.process_time)

    def advance(self) -> int:
        self.tick += 1
        self._baseline = time.process_time()
        return self.tick

    def now(self) -> float:
        return time.process_time() - self._baseline

    def current_tick(self) -> int:
        return self.tick

    def notify(self, text: str) -> None:
        self.outbox.append(text)
        notify_logger.warning(text)

    def log(self, text: str) -> None:
        logger.info(text)
