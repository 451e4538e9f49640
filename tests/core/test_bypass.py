"""Tests for BypassResolver."""

from linetrace.graph.bypass import BypassResolver
from linetrace.graph.categories import Category
from linetrace.graph.relations import LineEdge

EA = frozenset({Category.EXPLICIT_ASSERTION})
IA = frozenset({Category.IMPLICIT_ASSUMPTION})


def _resolve(pairs, categories):
    resolver = BypassResolver([LineEdge(s, t) for s, t in pairs], categories)
    return sorted(e.key for e in resolver.resolve())


class TestRealSources:
    def test_plain_line_is_its_own_source(self):
        resolver = BypassResolver([LineEdge(1, 2)], {1: IA})
        assert resolver.real_sources(1) == [1]

    def test_assertion_without_parents_is_kept(self):
        resolver = BypassResolver([LineEdge(1, 2)], {1: EA})
        assert resolver.real_sources(1) == [1]

    def test_chain_of_assertions(self):
        resolver = BypassResolver([LineEdge(1, 2), LineEdge(2, 3), LineEdge(3, 4)], {2: EA, 3: EA})
        assert resolver.real_sources(3) == [1]

    def test_diamond_resolves_each_branch_once(self):
        # 1 -> 2, 1 -> 3, 2 -> 4, 3 -> 4 with 2, 3 and 4 explicit assertions
        edges = [LineEdge(1, 2), LineEdge(1, 3), LineEdge(2, 4), LineEdge(3, 4), LineEdge(4, 5)]
        resolver = BypassResolver(edges, {2: EA, 3: EA, 4: EA})
        assert resolver.real_sources(4) == [1]

    def test_pure_cycle_falls_back_to_line(self):
        resolver = BypassResolver([LineEdge(1, 2), LineEdge(2, 1), LineEdge(2, 3)], {1: EA, 2: EA})
        assert resolver.real_sources(2) == [2]

    def test_deep_chain_does_not_recurse(self):
        n = 5000
        edges = [LineEdge(i, i + 1) for i in range(1, n)]
        categories = {i: EA for i in range(2, n)}
        resolver = BypassResolver(edges, categories)
        assert resolver.real_sources(n - 1) == [1]


class TestResolve:
    def test_scenario_rewrites_assertion_source(self):
        assert _resolve([(2, 5), (5, 7)], {5: EA, 2: IA}) == [(2, 5), (2, 7)]

    def test_drops_self_edges_created_by_bypass(self):
        # 1 -> 2 -> 1 with 2 explicit: (2, 1) would become (1, 1)
        assert _resolve([(1, 2), (2, 1)], {2: EA}) == [(1, 2)]

    def test_no_duplicate_pairs(self):
        assert _resolve([(1, 3), (3, 4), (1, 4)], {3: EA}) == [(1, 3), (1, 4)]

    def test_multiple_parents_fan_in(self):
        assert _resolve([(1, 3), (2, 3), (3, 4)], {3: EA}) == [(1, 3), (1, 4), (2, 3), (2, 4)]

    def test_real_sources_never_explicit_assertion_with_parents(self):
        edges = [(1, 2), (2, 3), (3, 4), (2, 5), (6, 3)]
        categories = {2: EA, 3: EA}
        resolver = BypassResolver([LineEdge(s, t) for s, t in edges], categories)
        for edge in resolver.resolve():
            assert not (resolver.should_bypass(edge.source) and resolver.parents(edge.source))

    def test_labels_are_merged(self):
        resolver = BypassResolver(
            [LineEdge(1, 2, frozenset({"a"})), LineEdge(2, 3, frozenset({"b"})), LineEdge(1, 3, frozenset({"c"}))],
            {2: EA},
        )
        by_key = {e.key: e.labels for e in resolver.resolve()}
        assert by_key[(1, 3)] == {"b", "c"}
