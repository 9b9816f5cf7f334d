"""Profiling sessions and their state machine."""

from tickprof.session.state import ProfileMode, Session, SessionState, parse_mode
from tickprof.session.controller import SessionController

__all__ = ["ProfileMode", "Session", "SessionState", "SessionController", "parse_mode"]
