from __future__ import annotations

from collections.abc import Callable

import pytest

from tests.factories.host_factory import FakeHost
from tickprof.config import ProfilerConfig
from tickprof.instrument.context import ProfilerContext
from tickprof.profiler import Profiler


@pytest.fixture
def host() -> FakeHost:
    return FakeHost(tick=100)


@pytest.fixture
def context(host: FakeHost) -> ProfilerContext:
    return ProfilerContext(clock=host.now)


@pytest.fixture
def make_profiler(host: FakeHost) -> Callable[..., Profiler]:
    def _make(**config: object) -> Profiler:
        profiler = Profiler(host, ProfilerConfig(**config))  # type: ignore[arg-type]
        profiler.enable()
        return profiler

    return _make


@pytest.fixture
def profiler(make_profiler: Callable[..., Profiler]) -> Profiler:
    return make_profiler()


@pytest.fixture
def run_slices(host: FakeHost, profiler: Profiler) -> Callable[..., None]:
    """Advance the host and run `body` once per tick."""

    def _run(body: Callable[[], object], count: int = 1) -> None:
        for _ in range(count):
            host.advance()
            profiler.run_slice(body)

    return _run
