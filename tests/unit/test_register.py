from __future__ import annotations

from collections.abc import Callable
from types import SimpleNamespace

import pytest

from tests.factories.host_factory import FakeHost
from tickprof.core.exceptions import AlreadyWrappedError, RegistryError
from tickprof.instrument.register import profile_function, profile_object
from tickprof.instrument.wrapper import is_wrapped
from tickprof.profiler import Profiler


def _make_creep_class(host: FakeHost) -> type:
    class Creep:
        def __init__(self, name: str) -> None:
            self.name = name
            self._memory: dict[str, str] = {}

        def move(self, direction: int) -> int:
            host.spend(0.2)
            return 0 if direction else -10

        @staticmethod
        def body_cost(parts: int) -> int:
            return parts * 50

        @classmethod
        def spawn(cls, name: str) -> Creep:
            return cls(name)

        @property
        def memory(self) -> dict[str, str]:
            host.spend(0.1)
            return self._memory

        @memory.setter
        def memory(self, value: dict[str, str]) -> None:
            self._memory = value

        def now(self) -> float:
            return host.now()

    return Creep


def test_profile_class_wraps_methods_accessors_and_skips_dunders(
    host: FakeHost, profiler: Profiler
) -> None:
    creep_cls = _make_creep_class(host)
    count = profiler.register_class(creep_cls)

    assert count == 4
    assert is_wrapped(vars(creep_cls)["move"])
    assert is_wrapped(vars(creep_cls)["body_cost"].__func__)
    assert is_wrapped(vars(creep_cls)["spawn"].__func__)
    assert is_wrapped(vars(creep_cls)["memory"].fget)
    assert not is_wrapped(vars(creep_cls)["__init__"])
    assert not is_wrapped(vars(creep_cls)["now"])


def test_instrumented_class_behaves_and_records(host: FakeHost, profiler: Profiler) -> None:
    creep_cls = _make_creep_class(host)
    profiler.register_object(creep_cls, "Creep")
    profiler.start_background()
    host.advance()

    def body() -> None:
        creep = creep_cls.spawn("scout")
        assert creep.move(1) == 0
        assert creep_cls.body_cost(2) == 100
        creep.memory = {"role": "scout"}
        assert creep.memory == {"role": "scout"}

    profiler.run_slice(body)
    graph = profiler.session.graph
    assert graph.get("Creep.spawn").calls == 1
    assert graph.get("Creep.move").time == pytest.approx(0.2)
    assert graph.get("Creep.body_cost").calls == 1
    assert graph.get("Creep.memory:set").calls == 1
    assert graph.get("Creep.memory:get").calls == 1


def test_registering_same_class_twice_fails_loudly(host: FakeHost, profiler: Profiler) -> None:
    creep_cls = _make_creep_class(host)
    profiler.register_class(creep_cls)
    with pytest.raises(AlreadyWrappedError):
        profiler.register_class(creep_cls)


def test_profile_namespace_object(host: FakeHost, profiler: Profiler) -> None:
    game = SimpleNamespace(
        notify=lambda text: 0,
        time=12,
        __hidden__=lambda: None,
    )
    count = profile_object(game, "Game", profiler.context)
    assert count == 1
    assert is_wrapped(game.notify)
    assert game.time == 12


def test_profile_object_ignores_none_and_plain_values(profiler: Profiler) -> None:
    assert profile_object(None, "Nothing", profiler.context) == 0
    assert profile_object(42, "Number", profiler.context) == 0


def test_custom_blacklist(host: FakeHost, make_profiler: Callable[..., Profiler]) -> None:
    profiler = make_profiler(blacklist=("move",))
    creep_cls = _make_creep_class(host)
    profiler.register_class(creep_cls)
    assert not is_wrapped(vars(creep_cls)["move"])
    assert is_wrapped(vars(creep_cls)["now"])


def test_builtin_types_are_skipped(profiler: Profiler) -> None:
    assert profiler.register_object(dict, "dict") == 0


def test_profile_function_uses_qualname(host: FakeHost, profiler: Profiler) -> None:
    def find_path() -> int:
        return 3

    wrapped = profile_function(find_path, profiler.context)
    assert wrapped.__tickprof_name__.endswith("find_path")
    assert wrapped() == 3

    named = profiler.register_function(lambda: 1, name="PathFinder.search")
    assert named.__tickprof_name__ == "PathFinder.search"


def test_targets_are_hooked_once_on_enable(host: FakeHost) -> None:
    profiler = Profiler(host)
    creep_cls = _make_creep_class(host)
    profiler.add_target("Creep", creep_cls)
    assert not is_wrapped(vars(creep_cls)["move"])

    profiler.enable()
    profiler.disable()
    profiler.enable()
    assert is_wrapped(vars(creep_cls)["move"])


def test_add_target_after_enable_instruments_immediately(
    host: FakeHost, profiler: Profiler
) -> None:
    creep_cls = _make_creep_class(host)
    profiler.add_target("Creep", creep_cls)
    assert is_wrapped(vars(creep_cls)["move"])
    with pytest.raises(RegistryError, match="already has item 'Creep'"):
        profiler.add_target("Creep", creep_cls)


def test_partially_instrumented_target_must_be_unregistered(profiler: Profiler) -> None:
    squad = SimpleNamespace(scout=lambda: 1, patrol=profiler.wrap("Squad.patrol", lambda: 2))
    with pytest.raises(AlreadyWrappedError):
        profiler.add_target("Squad", squad)
    assert "Squad" not in profiler._instrumented
    assert is_wrapped(squad.scout)

    with pytest.raises(AlreadyWrappedError):
        profiler.enable()

    assert profiler.targets.unregister("Squad") is squad
    profiler.enable()
    fresh = SimpleNamespace(scout=lambda: 1, patrol=lambda: 2)
    profiler.add_target("Squad", fresh)
    assert "Squad" in profiler._instrumented
    assert is_wrapped(fresh.patrol)
