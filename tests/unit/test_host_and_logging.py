from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tickprof.core.exceptions import RegistryError
from tickprof.core.host import ProcessHost
from tickprof.core.registry import Registry, build_target_registry
from tickprof.logging.factory import setup_logger


def test_process_host_ticks_and_clock() -> None:
    host = ProcessHost(tick=7)
    assert host.current_tick() == 7
    assert host.advance() == 8
    first = host.now()
    sum(i for i in range(10_000))
    assert host.now() >= first >= 0.0


def test_process_host_channels(caplog: pytest.LogCaptureFixture) -> None:
    host = ProcessHost()
    with caplog.at_level(logging.INFO):
        host.log("table text")
        host.notify("mail text")
    assert host.outbox == ["mail text"]
    messages = [record.getMessage() for record in caplog.records]
    assert "table text" in messages
    assert "mail text" in messages


def test_setup_logger_is_idempotent(tmp_path: Path) -> None:
    logger = setup_logger("tickprof.test", logging.DEBUG, str(tmp_path / "prof.log"))
    again = setup_logger("tickprof.test", logging.WARNING)
    assert logger is again
    assert len(logger.handlers) == 2
    assert logger.level == logging.WARNING


def test_target_registry_register_unregister() -> None:
    registry = build_target_registry()
    registry.register("Room", object)
    assert "Room" in registry
    assert registry.items() == (("Room", object),)
    assert registry.unregister("Room") is object
    assert len(registry) == 0
    with pytest.raises(RegistryError, match="Unknown target 'Room'"):
        registry.unregister("Room")


def test_registry_get_unknown_lists_available() -> None:
    registry: Registry[int] = Registry(namespace="demo")
    registry.register("b", 2)
    registry.register("a", 1)
    assert registry.keys() == ("a", "b")
    with pytest.raises(RegistryError, match="Available: a, b"):
        registry.get("c")
