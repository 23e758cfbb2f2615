"""Tests for begin-event dependency graphs."""

import pytest

from typing_svg.timeline.begin_graph import (
    BeginExpression,
    BeginGraph,
    EndTrigger,
    LoadTrigger,
    block_graph,
    chained_graph,
)


def test_trigger_serialization():
    assert LoadTrigger().serialize() == "0s"
    assert EndTrigger(2).serialize() == "d2.end"
    assert EndTrigger(1, 800).serialize() == "d1.end+800ms"
    assert EndTrigger(1, 12.5).serialize() == "d1.end+12.5ms"
    assert BeginExpression((LoadTrigger(),)).serialize() == "0s"


def test_chained_graph_without_repeat():
    graph = chained_graph(3, repeat=False, cycle_pause_ms=800)

    assert graph.begin_expression(0).serialize() == "0s"
    assert graph.begin_expression(1).serialize() == "d0.end"
    assert graph.begin_expression(2).serialize() == "d1.end"


def test_chained_graph_restarts_after_last_line():
    graph = chained_graph(2, repeat=True, cycle_pause_ms=800)

    first = graph.begin_expression(0)
    assert first.serialize() == "0s;d1.end+800ms"
    assert first.triggers == (LoadTrigger(), EndTrigger(1, 800))


def test_block_graph_starts_all_lines_together():
    graph = block_graph(3, repeat=True, cycle_pause_ms=500)

    for index in range(3):
        assert graph.begin_expression(index).serialize() == "0s;d2.end+500ms"

    once = block_graph(2, repeat=False, cycle_pause_ms=500)
    assert once.begin_expression(1) == BeginExpression((LoadTrigger(),))


def test_node_without_trigger_is_rejected():
    graph = BeginGraph(2)
    graph.start_at_load(0)

    with pytest.raises(ValueError, match="no start trigger"):
        graph.begin_expression(1)
    with pytest.raises(ValueError, match="out of range"):
        graph.start_after(5, 0)


def test_custom_id_prefix():
    expression = BeginExpression((LoadTrigger(), EndTrigger(0, 100)))

    assert expression.serialize("line") == "0s;line0.end+100ms"
