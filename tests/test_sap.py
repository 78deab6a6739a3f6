from __future__ import annotations

import random

import networkx as nx
import pytest

from wordnet_sap import SAP, Digraph, SapResult


def test_digraph1_pairs(digraph1: Digraph) -> None:
    sap = SAP(digraph1)
    assert (sap.length(3, 11), sap.ancestor(3, 11)) == (4, 1)
    assert (sap.length(9, 12), sap.ancestor(9, 12)) == (3, 5)
    assert (sap.length(7, 2), sap.ancestor(7, 2)) == (4, 0)
    assert (sap.length(1, 6), sap.ancestor(1, 6)) == (-1, -1)


def test_chain_to_common_ancestor() -> None:
    sap = SAP(Digraph.from_edges(4, [(0, 1), (1, 2), (3, 1)]))
    assert sap.length(0, 3) == 2
    assert sap.ancestor(0, 3) == 1


def test_meeting_at_shared_parent() -> None:
    sap = SAP(Digraph.from_edges(4, [(0, 2), (1, 2), (2, 3)]))
    assert sap.length(0, 1) == 2
    assert sap.ancestor(0, 1) == 2


def test_disconnected_vertices() -> None:
    sap = SAP(Digraph(2))
    assert sap.query(0, 1) == SapResult(-1, -1)
    assert not sap.query(0, 1).found


def test_one_side_is_ancestor_of_the_other() -> None:
    sap = SAP(Digraph.from_edges(4, [(0, 1), (1, 2), (2, 3)]))
    assert sap.query(0, 3) == SapResult(3, 3)
    assert sap.query(3, 0) == SapResult(3, 3)


def test_same_vertex_skips_search(digraph1: Digraph) -> None:
    sap = SAP(digraph1)
    for v in range(digraph1.num_vertices):
        assert sap.length(v, v) == 0
        assert sap.ancestor(v, v) == v
    assert sap.stats.layers_expanded == 0
    assert sap.stats.searches == 0


def test_intersecting_sets_skip_search() -> None:
    sap = SAP(Digraph.from_edges(6, [(0, 1), (1, 2), (4, 2), (5, 3)]))
    assert sap.length({0, 4}, {4, 5}) == 0
    assert sap.ancestor({0, 4}, {4, 5}) == 4
    assert sap.ancestor([5, 3, 1], [3, 5]) == 3
    assert sap.stats.layers_expanded == 0
    assert sap.stats.searches == 0


def test_ties_pick_smallest_ancestor() -> None:
    # vertex 3 is listed first but 2 is just as close
    sap = SAP(Digraph(4, [[3, 2], [3, 2], [], []]))
    assert sap.query(0, 1) == SapResult(2, 2)
    assert sap.query(1, 0) == SapResult(2, 2)


def test_ties_between_sets_pick_smallest_ancestor() -> None:
    edges = [(0, 6), (1, 5), (2, 6), (3, 5), (4, 7), (5, 7), (6, 7)]
    sap = SAP(Digraph.from_edges(8, edges))
    assert sap.query([0, 1], [2, 3]) == SapResult(2, 5)


def test_sets_pick_the_closest_members(digraph1: Digraph) -> None:
    sap = SAP(digraph1)
    assert sap.length([7, 4], [11, 12, 9]) == 3
    assert sap.ancestor([7, 4], [11, 12, 9]) == 1
    assert sap.length([12, 9], [2]) == 4


def test_empty_sets_have_no_ancestor(digraph1: Digraph) -> None:
    sap = SAP(digraph1)
    assert sap.query([], [1, 2]) == SapResult(-1, -1)
    assert sap.query([3], set()) == SapResult(-1, -1)
    assert sap.stats.layers_expanded == 0


def test_validation_happens_before_any_work(digraph1: Digraph) -> None:
    sap = SAP(digraph1)
    with pytest.raises(ValueError):
        sap.length(0, 13)
    with pytest.raises(ValueError):
        sap.ancestor(-1, 0)
    with pytest.raises(ValueError):
        sap.length([1, 2], [3, 99])
    with pytest.raises(ValueError):
        sap.length(None, [1])
    with pytest.raises(ValueError):
        sap.length([1, None], [2])
    with pytest.raises(ValueError):
        sap.length("12", [2])
    with pytest.raises(ValueError):
        sap.length(True, 2)
    assert sap.stats.queries == 0
    assert sap.query(3, 11) == SapResult(4, 1)


def test_repeated_query_is_served_from_cache(digraph1: Digraph) -> None:
    sap = SAP(digraph1)
    first = sap.query(3, 11)
    searches = sap.stats.searches
    layers = sap.stats.layers_expanded
    assert sap.length(3, 11) == first.length
    assert sap.ancestor(11, 3) == first.ancestor
    assert sap.ancestor([11], (3, 3)) == first.ancestor
    stats = sap.stats
    assert stats.searches == searches == 1
    assert stats.layers_expanded == layers
    assert stats.cache_hits == 3
    assert stats.queries == 4


def test_single_slot_cache_is_evicted(digraph1: Digraph) -> None:
    sap = SAP(digraph1)
    sap.length(3, 11)
    sap.length(9, 12)
    sap.length(3, 11)
    assert sap.stats.searches == 3
    assert sap.stats.cache_hits == 0


def test_larger_cache_keeps_recent_queries(digraph1: Digraph) -> None:
    sap = SAP(digraph1, cache_size=2)
    sap.length(3, 11)
    sap.length(9, 12)
    sap.length(11, 3)
    assert sap.stats.searches == 2
    sap.length(7, 2)
    sap.length(9, 12)
    assert sap.stats.searches == 4


def test_disabled_cache_always_searches(digraph1: Digraph) -> None:
    sap = SAP(digraph1, cache_size=0)
    sap.length(3, 11)
    sap.length(3, 11)
    assert sap.stats.searches == 2
    sap.clear_cache()


def test_graph_is_copied() -> None:
    adjacency = [[1], [], []]
    graph = Digraph(3, adjacency)
    sap = SAP(graph)
    adjacency[2].append(1)
    assert sap.length(0, 2) == -1
    assert sap.graph == graph
    assert sap.graph is not graph


def test_constructor_validation() -> None:
    with pytest.raises(ValueError):
        SAP(None)
    with pytest.raises(TypeError):
        SAP({0: [1]})
    with pytest.raises(ValueError):
        SAP(Digraph(1), cache_size=-1)


def _random_graph(rng: random.Random, num_vertices: int, edge_probability: float) -> Digraph:
    edges = [
        (v, w)
        for v in range(num_vertices)
        for w in range(num_vertices)
        if v != w and rng.random() < edge_probability
    ]
    return Digraph.from_edges(num_vertices, edges)


def _brute_force(graph: nx.DiGraph, sources_a, sources_b) -> SapResult:
    def distances(sources):
        best = {}
        for source in sources:
            for node, dist in nx.single_source_shortest_path_length(graph, source).items():
                if dist < best.get(node, dist + 1):
                    best[node] = dist
        return best

    dist_a = distances(sources_a)
    dist_b = distances(sources_b)
    candidates = [(dist_a[x] + dist_b[x], x) for x in dist_a if x in dist_b]
    if not candidates:
        return SapResult(-1, -1)
    length, ancestor = min(candidates)
    return SapResult(length, ancestor)


@pytest.mark.parametrize("seed", range(12))
def test_matches_brute_force_on_random_graphs(seed: int) -> None:
    rng = random.Random(seed)
    num_vertices = rng.randint(2, 12)
    graph = _random_graph(rng, num_vertices, rng.choice([0.08, 0.15, 0.3]))
    reference = graph.to_networkx()
    sap = SAP(graph)
    for _ in range(30):
        sources_a = rng.sample(range(num_vertices), rng.randint(1, min(3, num_vertices)))
        sources_b = rng.sample(range(num_vertices), rng.randint(1, min(3, num_vertices)))
        expected = _brute_force(reference, sources_a, sources_b)
        assert sap.query(sources_a, sources_b) == expected
        assert sap.query(sources_b, sources_a) == expected
    for v in range(num_vertices):
        for w in range(num_vertices):
            assert sap.query(v, w) == _brute_force(reference, [v], [w])


@pytest.mark.parametrize("seed", range(6))
def test_removing_edges_never_shortens_paths(seed: int) -> None:
    rng = random.Random(1000 + seed)
    num_vertices = 10
    graph = _random_graph(rng, num_vertices, 0.25)
    edges = list(graph.edges())
    sap = SAP(graph)
    while edges:
        edges.pop(rng.randrange(len(edges)))
        smaller = SAP(Digraph.from_edges(num_vertices, edges))
        for _ in range(10):
            v, w = rng.randrange(num_vertices), rng.randrange(num_vertices)
            before = sap.length(v, w)
            after = smaller.length(v, w)
            if before == -1:
                assert after == -1
            elif after != -1:
                assert after >= before
        sap = smaller
