import numpy as np
import pytest
from scipy.sparse.csgraph import floyd_warshall

from synchronised_distance.shortest_path import compute_shortest_distance_matrix

INF = np.inf


def _random_graph(n, edge_prob, seed):
    rng = np.random.default_rng(seed)
    weights = rng.uniform(0.1, 5.0, size=(n, n))
    mask = rng.random((n, n)) < edge_prob
    graph = np.where(mask, weights, INF)
    graph = np.minimum(graph, graph.T)
    np.fill_diagonal(graph, 0.0)
    return graph


def test_two_hop_path_through_shared_neighbour():
    graph = np.array([[0.0, 1.0, INF], [1.0, 0.0, 2.0], [INF, 2.0, 0.0]])
    closed = compute_shortest_distance_matrix(graph)
    assert closed[0, 2] == pytest.approx(3.0)
    assert closed[2, 0] == pytest.approx(3.0)


def test_shorter_indirect_path_replaces_direct_edge():
    graph = np.array([[0.0, 1.0, 10.0], [1.0, 0.0, 1.0], [10.0, 1.0, 0.0]])
    assert compute_shortest_distance_matrix(graph)[0, 2] == pytest.approx(2.0)


def test_input_graph_is_not_modified():
    graph = np.array([[0.0, 1.0, INF], [1.0, 0.0, 2.0], [INF, 2.0, 0.0]])
    before = graph.copy()
    compute_shortest_distance_matrix(graph)
    assert np.array_equal(graph, before)


def test_disconnected_pairs_stay_infinite():
    graph = np.array([[0.0, 1.0, INF], [1.0, 0.0, INF], [INF, INF, 0.0]])
    closed = compute_shortest_distance_matrix(graph)
    assert np.isinf(closed[0, 2]) and np.isinf(closed[1, 2])


def test_matches_scipy_floyd_warshall():
    graph = _random_graph(25, 0.15, seed=3)
    closed = compute_shortest_distance_matrix(graph)
    expected = floyd_warshall(graph, directed=False)
    assert np.allclose(closed, expected)
    assert np.array_equal(np.isinf(closed), np.isinf(expected))


def test_closure_properties():
    graph = _random_graph(20, 0.2, seed=11)
    closed = compute_shortest_distance_matrix(graph)
    assert np.array_equal(closed, closed.T)
    assert np.all(closed <= graph)
    assert np.all(np.diag(closed) == 0.0)
    # triangle inequality: closed[i, j] <= closed[i, k] + closed[k, j]
    via = closed[:, :, np.newaxis] + closed[np.newaxis, :, :]
    assert np.all(closed[:, np.newaxis, :] <= via + 1e-9)


def test_non_square_input_is_rejected():
    with pytest.raises(ValueError):
        compute_shortest_distance_matrix(np.zeros((2, 3)))


def test_progress_reports_each_intermediate_node():
    seen = []
    compute_shortest_distance_matrix(np.zeros((4, 4)), progress=lambda stage, done, total: seen.append(done))
    assert seen == [1, 2, 3, 4]
