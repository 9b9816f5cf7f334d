"""Callgrind-format dump for call-graph visualizers such as KCachegrind."""

from __future__ import annotations

import math
from dataclasses import dataclass

from tickprof.graph.aggregator import ROOT_NODE, TICK_NODE, CallNode
from tickprof.report.table import NOT_ACTIVE
from tickprof.session.state import Session

DEFAULT_SCALE = 1_000_000
DEFAULT_ACTION_COST = 0.2

EVENT_HEADER = (
    "event: uCPU_wall : uCPU total\n"
    "event: uCPU_action : uCPU [A]action cost\n"
    "event: uCPU_wall_minus_action : uCPU without [A]action cost\n"
    "event: failures : failed [A]action calls\n"
    "events: uCPU_wall uCPU_action uCPU_wall_minus_action failures\n"
)


def _round(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(slots=True)
class CostLine:
    wall: float
    action: float
    failures: int

    def format(self) -> str:
        return (
            f"1 {_round(self.wall)} {_round(self.action)} "
            f"{_round(self.wall - self.action)} {self.failures}"
        )


def with_synthetic_nodes(session: Session, tick: int) -> dict[str, CallNode]:
    """Copy of the root mapping with `(root)` and `(tick)` entries filled in.

    Every recorded call hangs off `(tick)` through its first caller, so the
    injected `(root) -> (tick)` edge gives the dump a single tree root.
    """

    elapsed = session.elapsed_ticks(tick)
    recorded_tick = session.graph.get(TICK_NODE)
    tick_node = CallNode(
        name=TICK_NODE,
        calls=elapsed,
        time=session.total_time,
        edges=dict(recorded_tick.edges) if recorded_tick is not None else {},
    )
    root = CallNode(name=ROOT_NODE, calls=1, time=session.total_time)
    root.edges[TICK_NODE] = CallNode(name=TICK_NODE, calls=elapsed, time=session.total_time)

    nodes: dict[str, CallNode] = {ROOT_NODE: root, TICK_NODE: tick_node}
    for node in session.graph:
        if node.name not in nodes:
            nodes[node.name] = node
    return nodes


def render_callgrind(
    session: Session | None,
    tick: int,
    *,
    action_cost: float = DEFAULT_ACTION_COST,
    scale: float = DEFAULT_SCALE,
) -> str:
    """Render the session graph in callgrind format.

    Function records carry exclusive cost (inclusive minus direct callees);
    `cfn` records carry the callee's inclusive cost along that edge. The
    session itself is left untouched.
    """

    if session is None:
        return NOT_ACTIVE
    scaled_action = action_cost * scale

    total_action = 0.0
    total_wall_minus_action = 0.0
    total_failures = 0
    body: list[str] = []
    for node in with_synthetic_nodes(session, tick).values():
        own = CostLine(
            wall=node.exclusive_time * scale,
            action=node.successes * scaled_action,
            failures=node.failures,
        )
        total_action += own.action
        total_wall_minus_action += own.wall - own.action
        total_failures += own.failures

        body.append(f"\nfn={node.name}\n{own.format()}\n")
        for edge in node.edges.values():
            inner = CostLine(
                wall=edge.time * scale,
                action=edge.successes * scaled_action,
                failures=edge.failures,
            )
            body.append(f"cfn={edge.name}\ncalls={edge.calls} 1\n{inner.format()}\n")

    summary = (
        f"summary: {_round(session.total_time * scale)} {_round(total_action)} "
        f"{_round(total_wall_minus_action)} {total_failures}\n"
    )
    return EVENT_HEADER + summary + "".join(body)
