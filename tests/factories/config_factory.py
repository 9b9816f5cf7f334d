from __future__ import annotations

from typing import Any

from omegaconf import DictConfig, OmegaConf


def build_profiler_cfg(**overrides: Any) -> DictConfig:
    profiler: dict[str, Any] = {
        "enabled": False,
        "durations": {"stream": 10, "snapshot": 100, "email": 100},
        "output": {"max_chars": 1000, "email_max_chars": 1000},
        "actions": {"names": [], "ok_value": 0, "cost": 0.2},
        "callgrind": {"scale": 1000000},
    }
    profiler.update(overrides)
    return OmegaConf.create({"profiler": profiler})
