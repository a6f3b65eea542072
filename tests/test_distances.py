"""Tests for BFS distances and the sampled average distance estimator."""

import random

import networkx as nx
import pytest

from review_graph.network_analysis.distances import (
    bfs_distances,
    calculate_average_distance,
    sample_sources,
)


def exhaustive_average(g, include_self=True):
    total, pairs = 0, 0
    for src in g.nodes():
        for tgt, d in nx.single_source_shortest_path_length(g, src).items():
            if tgt == src and not include_self:
                continue
            total += d
            pairs += 1
    return total / pairs if pairs else 0.0


def test_bfs_on_path():
    g = nx.path_graph(4, create_using=nx.MultiGraph)
    assert bfs_distances(g, 0) == {0: 0, 1: 1, 2: 2, 3: 3}
    assert bfs_distances(g, 2) == {0: 2, 1: 1, 2: 0, 3: 1}


def test_bfs_levels_are_consistent():
    g = nx.connected_watts_strogatz_graph(60, 4, 0.3, seed=3)
    for source in (0, 17, 42):
        dist = bfs_distances(g, source)
        assert dist[source] == 0
        assert set(dist) == set(g.nodes())
        for u, v in g.edges():
            assert abs(dist[u] - dist[v]) <= 1
        for node, d in dist.items():
            if node != source:
                assert any(dist[nb] == d - 1 for nb in g.adj[node])


def test_bfs_matches_networkx():
    g = nx.gnm_random_graph(50, 70, seed=11)
    for source in (0, 25, 49):
        assert bfs_distances(g, source) == dict(nx.single_source_shortest_path_length(g, source))


def test_bfs_only_reaches_own_component():
    g = nx.MultiGraph([(0, 1), (2, 3)])
    g.add_node(4)
    assert bfs_distances(g, 0) == {0: 0, 1: 1}
    assert bfs_distances(g, 4) == {4: 0}


def test_exhaustive_sample_on_path_of_three():
    g = nx.path_graph(3, create_using=nx.MultiGraph)
    # per source: (0+1+2), (1+0+1), (2+1+0) over 9 pairs
    assert calculate_average_distance(g, 10, seed=0) == pytest.approx(8 / 9)
    assert calculate_average_distance(g, 10, seed=0, include_self=False) == pytest.approx(8 / 6)


def test_exhaustive_sample_equals_true_average():
    g = nx.MultiGraph(nx.gnm_random_graph(40, 45, seed=5))
    g.add_node(99)
    n = g.number_of_nodes()

    assert calculate_average_distance(g, n, seed=1) == pytest.approx(exhaustive_average(g))
    assert calculate_average_distance(g, n + 100, seed=2) == pytest.approx(exhaustive_average(g))
    assert calculate_average_distance(g, n, seed=1, include_self=False) == pytest.approx(
        exhaustive_average(g, include_self=False)
    )


def test_degenerate_inputs_return_zero():
    assert calculate_average_distance(nx.MultiGraph(), 100) == 0.0
    assert calculate_average_distance(nx.path_graph(5), 0) == 0.0

    isolated = nx.MultiGraph()
    isolated.add_nodes_from(range(3))
    assert calculate_average_distance(isolated, 3) == 0.0
    assert calculate_average_distance(isolated, 3, include_self=False) == 0.0


def test_negative_sample_size_rejected():
    with pytest.raises(ValueError):
        calculate_average_distance(nx.path_graph(3), -1)


def test_seeded_runs_are_reproducible():
    g = nx.gnm_random_graph(200, 300, seed=9)
    first = calculate_average_distance(g, 20, seed=123)
    second = calculate_average_distance(g, 20, seed=123)
    assert first == second

    assert calculate_average_distance(g, 20, rng=random.Random(7)) == calculate_average_distance(
        g, 20, rng=random.Random(7)
    )


def test_sample_sources_distinct_and_bounded():
    g = nx.path_graph(10)
    sample = sample_sources(g, 4, random.Random(0))
    assert len(sample) == len(set(sample)) == 4
    assert set(sample) <= set(g.nodes())
    assert sorted(sample_sources(g, 50, random.Random(0))) == list(range(10))
