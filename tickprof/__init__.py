"""Non-sampling call-graph profiler for slice-metered hosts."""

from tickprof.config import ProfilerConfig, build_profiler_config
from tickprof.core.exceptions import (
    AlreadyWrappedError,
    ConfigurationError,
    RegistryError,
    TickProfError,
)
from tickprof.core.host import Host, ProcessHost
from tickprof.instrument.wrapper import CallMode
from tickprof.profiler import Profiler
from tickprof.report.table import NOT_ACTIVE

__all__ = [
    "Profiler",
    "ProfilerConfig",
    "build_profiler_config",
    "Host",
    "ProcessHost",
    "CallMode",
    "NOT_ACTIVE",
    "TickProfError",
    "AlreadyWrappedError",
    "RegistryError",
    "ConfigurationError",
]
