"""Session state machine: INACTIVE -> ARMED -> ACTIVE -> INACTIVE."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from tickprof.core.exceptions import ConfigurationError
from tickprof.session.state import ProfileMode, Session, SessionState

if TYPE_CHECKING:
    from tickprof.core.host import Host
    from tickprof.instrument.context import ProfilerContext

logger = logging.getLogger(__name__)


class SessionController:
    """Owns the live session and the instrumentation context.

    Recording always starts on the tick after the request; the slice in
    which a session is requested is never measured.
    """

    def __init__(self, host: Host, context: ProfilerContext) -> None:
        self._host = host
        self.context = context
        self.enabled = False

    @property
    def session(self) -> Session | None:
        return self.context.session

    @property
    def state(self) -> SessionState:
        session = self.context.session
        if session is None:
            return SessionState.INACTIVE
        return session.state_at(self._host.current_tick())

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = bool(enabled)
        self._refresh()

    def start(
        self,
        mode: ProfileMode,
        duration: int | None,
        name_filter: str | None = None,
    ) -> Session:
        """Arm a new session, discarding any previous one."""

        if duration is not None and int(duration) <= 0:
            raise ConfigurationError(
                f"{mode.value} session duration must be a positive integer, got {duration}."
            )
        tick = self._host.current_tick()
        end_tick = None if duration is None else tick + int(duration)
        session = Session(
            mode=mode,
            start_tick=tick + 1,
            end_tick=end_tick,
            name_filter=name_filter or None,
        )
        self.context.session = session
        self._refresh()
        logger.info(
            "Armed %s session for ticks %d..%s (filter=%s).",
            mode.value,
            session.start_tick,
            "open" if end_tick is None else end_tick,
            session.name_filter,
        )
        return session

    def restart(self) -> bool:
        """Re-arm the active session with the same mode, filter and span."""

        session = self.context.session
        if session is None or self.state is not SessionState.ACTIVE:
            logger.info("Restart ignored: no active session.")
            return False
        self.start(session.mode, session.duration, session.name_filter)
        return True

    def reset(self) -> None:
        if self.context.session is not None:
            logger.info("Session discarded.")
        self.context.session = None
        self._refresh()

    def begin_slice(self) -> None:
        """Prepare per-slice state and drop a session whose last tick has passed."""

        session = self.context.session
        if session is not None and self.state is SessionState.INACTIVE:
            logger.info(
                "%s session ended at tick %s; discarding.", session.mode.value, session.end_tick
            )
            self.context.session = None
        self.context.begin_slice()
        self._refresh()

    def end_slice(self, cpu_used: float) -> bool:
        """Fold slice totals into the session; return True when a report is due."""

        session = self.context.session
        if session is None or self.state is not SessionState.ACTIVE:
            return False
        session.total_time += cpu_used
        session.total_successes += self.context.slice_successes
        session.total_failures += self.context.slice_failures
        return self._report_due(session)

    def _report_due(self, session: Session) -> bool:
        if session.mode is ProfileMode.STREAM:
            return True
        if session.mode is ProfileMode.BACKGROUND:
            return False
        return session.end_tick == self._host.current_tick()

    def is_recording(self) -> bool:
        return self.enabled and self.state is SessionState.ACTIVE

    def _refresh(self) -> None:
        self.context.recording = self.is_recording()

    def export_state(self) -> dict[str, Any] | None:
        session = self.context.session
        return None if session is None else session.to_dict()

    def load_state(self, data: dict[str, Any] | None) -> None:
        self.context.session = None if data is None else Session.from_dict(data)
        self._refresh()
