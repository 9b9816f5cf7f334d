"""pandas views of the call graph for interactive inspection."""

from __future__ import annotations

import numpy as np
import pandas as pd

from tickprof.graph.aggregator import CallGraph

NODE_COLUMNS: tuple[str, ...] = (
    "name",
    "calls",
    "time",
    "avg",
    "exclusive",
    "successes",
    "failures",
)
EDGE_COLUMNS: tuple[str, ...] = ("caller", "callee", "calls", "time", "successes", "failures")


def graph_to_frame(graph: CallGraph) -> pd.DataFrame:
    """One row per function, sorted by descending inclusive time."""

    frame = pd.DataFrame(
        {
            "name": [node.name for node in graph],
            "calls": np.array([node.calls for node in graph], dtype=np.int64),
            "time": np.array([node.time for node in graph], dtype=np.float64),
            "exclusive": np.array([node.exclusive_time for node in graph], dtype=np.float64),
            "successes": np.array([node.successes for node in graph], dtype=np.int64),
            "failures": np.array([node.failures for node in graph], dtype=np.int64),
        }
    )
    calls = frame["calls"].to_numpy(dtype=np.float64)
    times = frame["time"].to_numpy(dtype=np.float64)
    frame["avg"] = np.divide(times, calls, out=np.zeros_like(times), where=calls > 0)
    frame = frame.sort_values("time", ascending=False, kind="stable")
    return frame.loc[:, list(NODE_COLUMNS)].reset_index(drop=True)


def edges_to_frame(graph: CallGraph) -> pd.DataFrame:
    rows = [
        (node.name, edge.name, edge.calls, edge.time, edge.successes, edge.failures)
        for node in graph
        for edge in node.edges.values()
    ]
    return pd.DataFrame(rows, columns=list(EDGE_COLUMNS))
