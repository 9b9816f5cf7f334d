"""Public profiler surface: instrumentation, sessions, slices and reports."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Any, TypeVar

import pandas as pd

from tickprof.config import ProfilerConfig
from tickprof.core.host import Host
from tickprof.core.registry import TargetRegistry, build_target_registry
from tickprof.graph.aggregator import CallGraph
from tickprof.instrument.actions import ActionSet, SentinelOutcome
from tickprof.instrument.context import ProfilerContext
from tickprof.instrument.register import profile_function, profile_object
from tickprof.instrument.wrapper import CallMode, wrap
from tickprof.report.callgrind import render_callgrind
from tickprof.report.frame import graph_to_frame
from tickprof.report.table import render_table
from tickprof.session.controller import SessionController
from tickprof.session.state import ProfileMode, Session, SessionState
from tickprof.utils.io import save_text

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Profiler:
    """Call-graph profiler bound to one host.

    Typical use::

        profiler = Profiler(host, config)
        profiler.add_target("Creep", Creep)
        profiler.enable()
        profiler.start_snapshot(50)
        while True:
            profiler.run_slice(loop)
    """

    def __init__(self, host: Host, config: ProfilerConfig | None = None) -> None:
        self.host = host
        self.config = config or ProfilerConfig()
        self.targets: TargetRegistry = build_target_registry()
        self.context = ProfilerContext(
            clock=host.now,
            actions=ActionSet.of(self.config.action_names),
            outcome=SentinelOutcome(ok=self.config.ok_value),
        )
        self.controller = SessionController(host, self.context)
        self._instrumented: set[str] = set()
        if self.config.enabled:
            self.enable()

    # -- instrumentation ---------------------------------------------------

    @property
    def actions(self) -> ActionSet:
        return self.context.actions

    def wrap(
        self,
        name: str,
        fn: Callable[..., Any],
        *,
        mode: CallMode = CallMode.CALL,
    ) -> Callable[..., Any]:
        return wrap(name, fn, self.context, mode=mode)

    def register_function(self, fn: Callable[..., Any], name: str | None = None) -> Callable[..., Any]:
        return profile_function(fn, self.context, name)

    def register_object(self, target: Any, label: str) -> int:
        return profile_object(target, label, self.context, blacklist=self.config.blacklist)

    def register_class(self, cls: type, label: str | None = None) -> int:
        return self.register_object(cls, label or cls.__name__)

    def add_target(self, label: str, target: Any) -> None:
        """Queue `target` for instrumentation; applied immediately when enabled.

        If instrumenting a target fails part way (for example with
        `AlreadyWrappedError`), some of its attributes stay wrapped and the label
        is not marked as done. Remove it with `targets.unregister(label)` before
        registering it again.
        """

        self.targets.register(label, target)
        if self.controller.enabled:
            self._hook_up_targets()

    def _hook_up_targets(self) -> None:
        for label, target in self.targets.items():
            if label in self._instrumented:
                continue
            self.register_object(target, label)
            self._instrumented.add(label)

    def enable(self) -> None:
        self._hook_up_targets()
        self.controller.set_enabled(True)

    def disable(self) -> None:
        self.controller.set_enabled(False)

    # -- sessions ----------------------------------------------------------

    @property
    def session(self) -> Session | None:
        return self.controller.session

    @property
    def state(self) -> SessionState:
        return self.controller.state

    def is_profiling(self) -> bool:
        return self.controller.is_recording()

    def start_stream(self, duration: int | None = None, name_filter: str | None = None) -> Session:
        return self.controller.start(
            ProfileMode.STREAM, self.config.stream_duration if duration is None else duration, name_filter
        )

    def start_snapshot(self, duration: int | None = None, name_filter: str | None = None) -> Session:
        return self.controller.start(
            ProfileMode.SNAPSHOT, self.config.snapshot_duration if duration is None else duration, name_filter
        )

    start_profile = start_snapshot

    def start_email(self, duration: int | None = None, name_filter: str | None = None) -> Session:
        return self.controller.start(
            ProfileMode.EMAIL, self.config.email_duration if duration is None else duration, name_filter
        )

    def start_background(self, name_filter: str | None = None) -> Session:
        return self.controller.start(ProfileMode.BACKGROUND, None, name_filter)

    def restart(self) -> bool:
        return self.controller.restart()

    def reset(self) -> None:
        self.controller.reset()

    def export_state(self) -> dict[str, Any] | None:
        return self.controller.export_state()

    def load_state(self, data: dict[str, Any] | None) -> None:
        self.controller.load_state(data)

    # -- slices ------------------------------------------------------------

    def run_slice(self, body: Callable[[], T]) -> T:
        """Run one slice of host work, recording it when a session is active."""

        self.controller.begin_slice()
        if not self.controller.is_recording():
            return body()

        result = body()
        if self.controller.end_slice(self.host.now()):
            self._report()
        return result

    def _report(self) -> None:
        session = self.controller.session
        if session is None:
            return
        if session.mode is ProfileMode.EMAIL:
            self.host.notify(self.render_table(self.config.email_max_chars))
        else:
            self.host.log(self.render_table())

    # -- reports -----------------------------------------------------------

    def render_table(self, max_chars: int | None = None) -> str:
        return render_table(
            self.controller.session,
            self.host.current_tick(),
            max_chars or self.config.max_chars,
        )

    output = render_table

    def render_callgrind(self) -> str:
        return render_callgrind(
            self.controller.session,
            self.host.current_tick(),
            action_cost=self.config.action_cost,
            scale=self.config.callgrind_scale,
        )

    def save_callgrind(self, directory: str | Path) -> Path | None:
        """Write `callgrind.<date>.<tick>` into `directory`; None when inactive."""

        if self.controller.session is None:
            logger.info("No session to dump.")
            return None
        tick = self.host.current_tick()
        target = Path(directory) / f"callgrind.{date.today().isoformat()}.{tick}"
        save_text(target, self.render_callgrind())
        return target

    def to_frame(self) -> pd.DataFrame:
        session = self.controller.session
        return graph_to_frame(session.graph if session is not None else CallGraph())
