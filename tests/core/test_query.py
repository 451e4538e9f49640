"""Tests for the highlight query engine."""

import pytest

from linetrace.graph.categories import ALL_CATEGORIES, Category
from linetrace.graph.query import Depth, Direction, HighlightQueryEngine, HighlightResult, run_query
from tests.core.graph_test_helpers import build_graph, make_edge, make_node


@pytest.fixture
def fan_graph():
    """Line 5 is justified by 1 (explicit assumption) and 2 (implicit assumption);
    line 1 is justified by line 9 (implicit assertion); 5 justifies 7."""
    return build_graph(
        [
            make_node("e", "Assumption", "Explicit", line=1),
            make_node("i", "Assumption", "Implicit", line=2),
            make_node("t", "Assertion", "Implicit", line=5),
            make_node("u", "Assertion", "Implicit", line=7),
            make_node("r", "Assertion", "Implicit", line=9),
        ],
        [
            make_edge("e", "t"),
            make_edge("i", "t"),
            make_edge("t", "u"),
            make_edge("r", "e"),
        ],
    )


class TestRunQuery:
    def test_scenario_direct_cause(self):
        graph = build_graph(
            [
                make_node("n1", "Assertion", "Explicit", line=3),
                make_node("n2", "Assumption", "Explicit", line=1),
            ],
            [make_edge("n2", "n1")],
        )

        result = run_query(graph, 3, Direction.CAUSES, Depth.DIRECT)

        assert result.direct == (1,)
        assert result.indirect == ()

    def test_filter_hides_excluded_neighbours(self, fan_graph):
        enabled = ALL_CATEGORIES - {Category.IMPLICIT_ASSUMPTION}

        result = run_query(fan_graph, 5, Direction.CAUSES, Depth.DIRECT, enabled)

        assert result.direct == (1,)

    def test_effects_direction(self, fan_graph):
        result = run_query(fan_graph, 5, Direction.EFFECTS)

        assert result.direct == (7,)
        assert result.direction is Direction.EFFECTS

    def test_indirect_excludes_direct_and_selected(self, fan_graph):
        result = run_query(fan_graph, 5, Direction.CAUSES, Depth.INDIRECT)

        assert result.direct == (1, 2)
        assert result.indirect == (9,)
        assert set(result.direct).isdisjoint(result.indirect)

    def test_direct_depth_has_empty_indirect(self, fan_graph):
        assert run_query(fan_graph, 5, Direction.CAUSES, Depth.DIRECT).indirect == ()

    def test_line_without_vertex_gives_empty_result(self, fan_graph):
        result = run_query(fan_graph, 42, Direction.CAUSES, Depth.INDIRECT)

        assert result == HighlightResult.empty(42, Direction.CAUSES)

    def test_selected_line_not_in_indirect_on_cycle(self):
        graph = build_graph(
            [make_node("a", line=1), make_node("b", "Assumption", "Implicit", line=2)],
            [make_edge("a", "b"), make_edge("b", "a")],
        )

        result = run_query(graph, 1, Direction.CAUSES, Depth.INDIRECT)

        assert result.direct == (2,)
        assert result.indirect == ()

    def test_filter_is_monotonic(self, fan_graph):
        smaller = frozenset({Category.EXPLICIT_ASSUMPTION})
        larger = smaller | {Category.IMPLICIT_ASSERTION}

        a = run_query(fan_graph, 5, Direction.CAUSES, Depth.INDIRECT, smaller)
        b = run_query(fan_graph, 5, Direction.CAUSES, Depth.INDIRECT, larger)

        assert set(a.direct) <= set(b.direct)
        assert set(a.indirect) <= set(b.indirect)

    def test_query_is_idempotent(self, fan_graph):
        first = run_query(fan_graph, 5, Direction.CAUSES, Depth.INDIRECT)
        second = run_query(fan_graph, 5, Direction.CAUSES, Depth.INDIRECT)

        assert first == second


class TestHighlightResult:
    def test_message_shape(self):
        result = HighlightResult(line=5, direct=(1, 2), indirect=(9,), direction=Direction.EFFECTS)

        assert result.to_message() == {"line": 5, "direct": [1, 2], "indirect": [9], "direction": "effects"}

    def test_with_sequence_keeps_content(self):
        result = HighlightResult(line=5, direct=(1,)).with_sequence(4)

        assert result.sequence == 4
        assert result.direct == (1,)

    def test_clear_result(self):
        assert HighlightResult.empty(0, Direction.CAUSES).is_clear

    def test_direction_toggle(self):
        assert Direction.CAUSES.toggled is Direction.EFFECTS
        assert Direction.EFFECTS.toggled is Direction.CAUSES


class TestHighlightQueryEngine:
    def test_reads_current_modes(self, fan_graph):
        engine = HighlightQueryEngine(fan_graph)

        assert engine.query(5).direct == (1, 2)

        engine.direction = Direction.EFFECTS
        assert engine.query(5).direct == (7,)

    def test_enable_disable(self, fan_graph):
        engine = HighlightQueryEngine(fan_graph)

        engine.disable(Category.IMPLICIT_ASSUMPTION)
        assert engine.query(5).direct == (1,)

        engine.enable(Category.IMPLICIT_ASSUMPTION)
        assert engine.query(5).direct == (1, 2)
