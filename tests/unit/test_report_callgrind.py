from __future__ import annotations

from tickprof.report.callgrind import render_callgrind, with_synthetic_nodes
from tickprof.report.table import NOT_ACTIVE
from tickprof.session.state import ProfileMode, Session


def _fn_block(dump: str, name: str) -> list[str]:
    """Lines of the record for `name`, up to the next blank line."""

    block = dump.split(f"\nfn={name}\n", 1)[1]
    return block.split("\n\n", 1)[0].rstrip("\n").split("\n")


def _scenario_session() -> Session:
    session = Session(mode=ProfileMode.BACKGROUND, start_tick=101, total_time=5.0)
    session.graph.record("B", 2.0, caller="A")
    session.graph.record("B", 2.0, caller="A")
    session.graph.record("A", 5.0, caller="(tick)")
    return session


def test_render_callgrind_without_session() -> None:
    assert render_callgrind(None, 5) == NOT_ACTIVE


def test_exclusive_cost_for_caller_and_inclusive_cost_for_edge() -> None:
    dump = render_callgrind(_scenario_session(), 101)

    assert _fn_block(dump, "A") == [
        "1 1000000 0 1000000 0",
        "cfn=B",
        "calls=2 1",
        "1 4000000 0 4000000 0",
    ]
    assert _fn_block(dump, "B") == ["1 4000000 0 4000000 0"]


def test_synthetic_root_and_tick_nodes() -> None:
    session = _scenario_session()
    nodes = with_synthetic_nodes(session, 103)

    assert list(nodes)[:2] == ["(root)", "(tick)"]
    assert nodes["(root)"].edges["(tick)"].calls == 3
    assert nodes["(tick)"].calls == 3
    assert nodes["(tick)"].time == 5.0
    assert nodes["(tick)"].edges["A"].calls == 1
    # the session graph itself is not modified
    assert session.graph.get("(tick)").calls == 0
    assert "(root)" not in session.graph


def test_header_and_summary_totals() -> None:
    dump = render_callgrind(_scenario_session(), 101)
    lines = dump.splitlines()

    assert lines[4] == "events: uCPU_wall uCPU_action uCPU_wall_minus_action failures"
    assert lines[5] == "summary: 5000000 0 5000000 0"
    assert _fn_block(dump, "(root)") == [
        "1 0 0 0 0",
        "cfn=(tick)",
        "calls=1 1",
        "1 5000000 0 5000000 0",
    ]


def test_action_cost_uses_successes() -> None:
    session = Session(mode=ProfileMode.BACKGROUND, start_tick=1, total_time=1.0)
    for outcome in (1, 0, 1, 1, 0):
        session.graph.record(
            "Creep.move", 0.0, successes=outcome, failures=1 - outcome, caller="(tick)"
        )

    dump = render_callgrind(session, 1, action_cost=0.2, scale=1_000_000)
    assert _fn_block(dump, "Creep.move") == ["1 0 600000 -600000 2"]
    tick_block = _fn_block(dump, "(tick)")
    assert tick_block[1:] == ["cfn=Creep.move", "calls=5 1", "1 0 600000 -600000 2"]
    assert dump.splitlines()[5] == "summary: 1000000 600000 400000 2"


def test_custom_scale() -> None:
    dump = render_callgrind(_scenario_session(), 101, scale=1000)
    assert _fn_block(dump, "A")[0] == "1 1000 0 1000 0"
