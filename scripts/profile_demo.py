"""CLI that profiles a small synthetic slice-based workload."""

from __future__ import annotations

import random
import sys
from pathlib import Path

import hydra
from omegaconf import DictConfig

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from tickprof import ProcessHost, Profiler, build_profiler_config  # noqa: E402
from tickprof.logging.factory import setup_logger  # noqa: E402
from tickprof.report.frame import edges_to_frame  # noqa: E402
from tickprof.utils.env import load_env_file  # noqa: E402
from tickprof.utils.hydra import as_yaml  # noqa: E402
from tickprof.utils.io import load_json, save_json  # noqa: E402

load_env_file()

ERR_TIRED = -4


class Worker:
    def __init__(self, ident: int) -> None:
        self.ident = ident
        self.fatigue = 0

    def plan(self) -> list[int]:
        return sorted(random.sample(range(200), 25))

    def move(self, step: int) -> int:
        self.fatigue += step % 3
        if self.fatigue > 40:
            self.fatigue = 0
            return ERR_TIRED
        return 0

    def work(self) -> None:
        for step in self.plan():
            self.move(step)


class Colony:
    def __init__(self, size: int) -> None:
        self.workers = [Worker(i) for i in range(size)]

    def run(self) -> None:
        for worker in self.workers:
            worker.work()
        self.census()

    def census(self) -> int:
        return sum(worker.fatigue for worker in self.workers)


@hydra.main(version_base=None, config_path="../configs", config_name="config")
def main(cfg: DictConfig) -> None:
    print(as_yaml(cfg))
    prof_cfg = build_profiler_config(cfg)
    setup_logger(level=prof_cfg.log_level)

    host = ProcessHost()
    profiler = Profiler(host, prof_cfg)
    profiler.actions.add("Worker.move")
    profiler.add_target("Worker", Worker)
    profiler.add_target("Colony", Colony)
    profiler.enable()

    demo = cfg.demo
    state_path = demo.get("state_path")
    if state_path and Path(state_path).exists():
        profiler.load_state(load_json(state_path))
    else:
        mode = str(demo.mode)
        duration = int(demo.duration)
        name_filter = demo.get("filter")
        if mode == "background":
            profiler.start_background(name_filter)
        else:
            starter = getattr(profiler, f"start_{mode}")
            starter(duration, name_filter)

    colony = Colony(int(demo.workers))
    for _ in range(int(demo.slices)):
        host.advance()
        profiler.run_slice(colony.run)

    print(profiler.render_table())
    for note in host.outbox:
        print(note)

    output_dir = demo.get("output_dir")
    if output_dir:
        dump_path = profiler.save_callgrind(output_dir)
        if dump_path is not None:
            profiler.to_frame().to_csv(Path(output_dir) / "profile.csv", index=False)
            edges_to_frame(profiler.session.graph).to_csv(Path(output_dir) / "edges.csv", index=False)
            print(f"callgrind dump written to {dump_path}")
    if state_path:
        state = profiler.export_state()
        if state is not None:
            save_json(state_path, state)


if __name__ == "__main__":
    main()
