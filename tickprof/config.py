"""Profiler configuration resolved from OmegaConf/Hydra config."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from omegaconf import DictConfig

from tickprof.core.exceptions import ConfigurationError
from tickprof.instrument.register import DEFAULT_BLACKLIST
from tickprof.report.callgrind import DEFAULT_ACTION_COST, DEFAULT_SCALE
from tickprof.report.table import DEFAULT_MAX_CHARS


@dataclass(slots=True, frozen=True)
class ProfilerConfig:
    """Resolved profiler configuration."""

    enabled: bool = False
    stream_duration: int = 10
    snapshot_duration: int = 100
    email_duration: int = 100
    max_chars: int = DEFAULT_MAX_CHARS
    email_max_chars: int = DEFAULT_MAX_CHARS
    action_names: tuple[str, ...] = ()
    ok_value: Any = 0
    action_cost: float = DEFAULT_ACTION_COST
    callgrind_scale: float = DEFAULT_SCALE
    blacklist: tuple[str, ...] = DEFAULT_BLACKLIST
    log_level: str = "INFO"


def _positive_int(section: Any, key: str, default: int, path: str) -> int:
    value = int(section.get(key, default)) if section is not None else default
    if value <= 0:
        raise ConfigurationError(f"{path}.{key} must be a positive integer, got {value}.")
    return value


def build_profiler_config(cfg: DictConfig | None) -> ProfilerConfig:
    """Resolve the `profiler` section of a top-level config."""

    if cfg is None:
        return ProfilerConfig()
    prof_cfg = cfg.get("profiler")
    if prof_cfg is None:
        return ProfilerConfig()

    durations = prof_cfg.get("durations")
    output = prof_cfg.get("output")
    actions = prof_cfg.get("actions")
    callgrind = prof_cfg.get("callgrind")

    names: tuple[str, ...] = ()
    ok_value: Any = 0
    action_cost = DEFAULT_ACTION_COST
    if actions is not None:
        raw_names = actions.get("names") or []
        names = tuple(str(name) for name in raw_names)
        ok_value = actions.get("ok_value", 0)
        action_cost = float(actions.get("cost", DEFAULT_ACTION_COST))
    if action_cost < 0:
        raise ConfigurationError(f"profiler.actions.cost must be >= 0, got {action_cost}.")

    scale = float(callgrind.get("scale", DEFAULT_SCALE)) if callgrind is not None else DEFAULT_SCALE
    if scale <= 0:
        raise ConfigurationError(f"profiler.callgrind.scale must be positive, got {scale}.")

    raw_blacklist = prof_cfg.get("blacklist")
    blacklist = (
        DEFAULT_BLACKLIST
        if raw_blacklist is None
        else tuple(str(name) for name in raw_blacklist)
    )

    return ProfilerConfig(
        enabled=bool(prof_cfg.get("enabled", False)),
        stream_duration=_positive_int(durations, "stream", 10, "profiler.durations"),
        snapshot_duration=_positive_int(durations, "snapshot", 100, "profiler.durations"),
        email_duration=_positive_int(durations, "email", 100, "profiler.durations"),
        max_chars=_positive_int(output, "max_chars", DEFAULT_MAX_CHARS, "profiler.output"),
        email_max_chars=_positive_int(
            output, "email_max_chars", DEFAULT_MAX_CHARS, "profiler.output"
        ),
        action_names=names,
        ok_value=ok_value,
        action_cost=action_cost,
        callgrind_scale=scale,
        blacklist=blacklist,
        log_level=str(prof_cfg.get("log_level", "INFO")).upper(),
    )
