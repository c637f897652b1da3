"""Tests for fan-in/fan-out metrics and edge weight aggregation."""

from __future__ import annotations

from graph_risk.analysis.metrics import aggregate_edge_weights, compute_graph_metrics
from graph_risk.ir import build_graph


def test_aggregate_parallel_edges():
    g = build_graph("abc", [("a", "b", 2), ("a", "b", 3), ("b", "c", 1), ("a", "ghost", 9)])
    assert aggregate_edge_weights(g) == {("a", "b"): 5.0, ("b", "c"): 1.0}


def test_aggregate_scoped_to_nodes():
    g = build_graph("abc", [("a", "b"), ("b", "c")])
    assert aggregate_edge_weights(g, node_ids=["a", "b"]) == {("a", "b"): 1.0}


def test_graph_metrics():
    # a → b, a → c, b → c
    g = build_graph("abc", [("a", "b"), ("a", "c"), ("b", "c")])
    m = compute_graph_metrics(g)
    assert m.node_count == 3
    assert m.edge_count == 3
    assert m.max_fan_out == 2
    assert m.avg_fan_out == 1.0
    assert m.max_fan_in == 2
    assert m.avg_fan_in == 1.5
    assert m.coupling_score == 50


def test_metrics_empty_graph():
    m = compute_graph_metrics(build_graph([]))
    assert m.node_count == 0
    assert m.coupling_score == 0


def test_metrics_single_node():
    m = compute_graph_metrics(build_graph("a"))
    assert m.node_count == 1
    assert m.coupling_score == 0
    assert m.avg_fan_in == 0.0


def test_coupling_capped_at_100():
    g = build_graph("ab", [("a", "b")] * 5)
    assert compute_graph_metrics(g).coupling_score == 100


def test_coupling_rounds_halves_up():
    # 9 edges over 9 * 8 possible pairs is exactly 12.5%
    ring = [f"n{i}" for i in range(9)]
    g = build_graph(ring, [(ring[i], ring[(i + 1) % 9]) for i in range(9)])
    m = compute_graph_metrics(g)
    assert m.edge_count == 9
    assert m.coupling_score == 13


def test_average_fan_rounds_halves_up():
    # one edge over eight nodes: average fan-out 0.125
    g = build_graph("abcdefgh", [("a", "b")])
    assert compute_graph_metrics(g).avg_fan_out == 0.13
