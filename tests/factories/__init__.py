"""Shared test factories."""

from .config_factory import build_profiler_cfg
from .host_factory import FakeHost

__all__ = ["FakeHost", "build_profiler_cfg"]
