"""Two-level call graph: per-function totals plus caller/callee edges."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

TICK_NODE = "(tick)"
ROOT_NODE = "(root)"


@dataclass(slots=True)
class CallNode:
    """Aggregated statistics for one function or one caller->callee edge.

    `time` is inclusive: it covers everything that ran during the call.
    Edge entries share this shape and keep `edges` empty.
    """

    name: str
    calls: int = 0
    time: float = 0.0
    successes: int = 0
    failures: int = 0
    edges: dict[str, CallNode] = field(default_factory=dict)

    def add(self, elapsed: float, successes: int = 0, failures: int = 0) -> None:
        self.calls += 1
        self.time += elapsed
        self.successes += successes
        self.failures += failures

    @property
    def edge_time(self) -> float:
        return sum(edge.time for edge in self.edges.values())

    @property
    def exclusive_time(self) -> float:
        """Inclusive time minus the inclusive time of direct callees."""

        return self.time - self.edge_time

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "calls": self.calls,
            "time": self.time,
            "successes": self.successes,
            "failures": self.failures,
        }
        if self.edges:
            payload["edges"] = {name: edge.to_dict() for name, edge in self.edges.items()}
        return payload

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any]) -> CallNode:
        node = cls(
            name=name,
            calls=int(data.get("calls", 0)),
            time=float(data.get("time", 0.0)),
            successes=int(data.get("successes", 0)),
            failures=int(data.get("failures", 0)),
        )
        for edge_name, edge_data in (data.get("edges") or {}).items():
            node.edges[edge_name] = cls.from_dict(edge_name, edge_data)
        return node


def _ensure(mapping: dict[str, CallNode], name: str) -> CallNode:
    node = mapping.get(name)
    if node is None:
        node = CallNode(name=name)
        mapping[name] = node
    return node


@dataclass(slots=True)
class CallGraph:
    """Root-level node mapping, kept in discovery order."""

    nodes: dict[str, CallNode] = field(default_factory=dict)

    def ensure(self, name: str) -> CallNode:
        return _ensure(self.nodes, name)

    def record(
        self,
        name: str,
        elapsed: float,
        successes: int = 0,
        failures: int = 0,
        caller: str | None = None,
    ) -> None:
        """Attribute one finished invocation to `name` and to the `caller` edge."""

        _ensure(self.nodes, name).add(elapsed, successes, failures)
        if caller is not None:
            parent = _ensure(self.nodes, caller)
            _ensure(parent.edges, name).add(elapsed, successes, failures)

    def get(self, name: str) -> CallNode | None:
        return self.nodes.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.nodes

    def __iter__(self) -> Iterator[CallNode]:
        return iter(self.nodes.values())

    def __len__(self) -> int:
        return len(self.nodes)

    def to_dict(self) -> dict[str, Any]:
        return {name: node.to_dict() for name, node in self.nodes.items()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CallGraph:
        return cls(nodes={name: CallNode.from_dict(name, item) for name, item in data.items()})
