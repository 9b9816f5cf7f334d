"""Size-bounded text table of per-function totals."""

from __future__ import annotations

from tickprof.graph.aggregator import CallNode
from tickprof.session.state import Session

NOT_ACTIVE = "Profiler not active."
DEFAULT_MAX_CHARS = 1000
HEADER = "calls\t\ttime\t\tavg\t\tfunction"


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


def format_row(node: CallNode) -> str:
    return "\t\t".join(
        [
            str(node.calls),
            f"{node.time:.1f}",
            f"{_ratio(node.time, node.calls):.3f}",
            node.name,
        ]
    )


def format_footer(session: Session, tick: int) -> str:
    elapsed = session.elapsed_ticks(tick)
    return "\t".join(
        [
            f"Avg: {_ratio(session.total_time, elapsed):.2f}",
            f"Total: {session.total_time:.2f}",
            f"Ticks: {elapsed}",
        ]
    )


def table_rows(session: Session) -> list[str]:
    """Rows sorted by descending total time; ties keep discovery order."""

    ordered = sorted(session.graph, key=lambda node: node.time, reverse=True)
    return [format_row(node) for node in ordered]


def render_table(session: Session | None, tick: int, max_chars: int | None = None) -> str:
    """Render the graph as a table no longer than `max_chars` characters.

    Header and footer are always present and are charged against the budget
    first; rows are appended until the next one would not fit.
    """

    if session is None:
        return NOT_ACTIVE
    limit = max_chars or DEFAULT_MAX_CHARS
    footer = format_footer(session, tick)

    lines = [HEADER]
    current_length = len(HEADER) + 1 + len(footer)
    for row in table_rows(session):
        if current_length + len(row) + 1 >= limit:
            break
        lines.append(row)
        current_length += len(row) + 1
    lines.append(footer)
    return "\n".join(lines)
