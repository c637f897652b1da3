"""Tests for the blocking-chain closure around flagged nodes."""

from __future__ import annotations

from graph_risk.analysis.critical_path import extract_critical_path
from graph_risk.ir import build_graph


def blocked(node) -> bool:
    return node.attributes.get("status") == "blocked"


def test_blocker_and_dependent_collected():
    # Y blocks X, X blocks Z
    g = build_graph({"X": {"status": "blocked"}, "Y": {}, "Z": {}}, [("Y", "X"), ("X", "Z")])
    result = extract_critical_path(g, blocked)
    assert set(result.node_ids) == {"X", "Y", "Z"}
    assert set(result.edge_ids) == {("Y", "X"), ("X", "Z")}
    assert result.flagged == ["X"]


def test_transitive_closure():
    g = build_graph(
        {"a": {}, "b": {}, "x": {"status": "blocked"}, "c": {}, "d": {}, "other": {}},
        [("a", "b"), ("b", "x"), ("x", "c"), ("c", "d"), ("other", "a")],
    )
    result = extract_critical_path(g, blocked)
    assert result.node_ids == ["a", "b", "c", "d", "other", "x"]


def test_unrelated_nodes_excluded():
    g = build_graph(
        {"x": {"status": "blocked"}, "y": {}, "free": {}, "free2": {}},
        [("y", "x"), ("free", "free2")],
    )
    result = extract_critical_path(g, blocked)
    assert set(result.node_ids) == {"x", "y"}
    assert not result.contains_node("free")
    assert result.contains_edge("y", "x")


def test_cycle_safe():
    g = build_graph(
        {"x": {"status": "blocked"}, "y": {}},
        [("x", "y"), ("y", "x")],
    )
    result = extract_critical_path(g, blocked)
    assert result.node_ids == ["x", "y"]
    assert result.edge_ids == [("x", "y"), ("y", "x")]


def test_isolated_flagged_node():
    g = build_graph({"x": {"status": "blocked"}})
    result = extract_critical_path(g, blocked)
    assert result.node_ids == ["x"]
    assert result.edge_ids == []


def test_no_flagged_nodes():
    g = build_graph({"a": {}, "b": {}}, [("a", "b")])
    result = extract_critical_path(g, blocked)
    assert result.node_ids == []
    assert result.flagged == []


def test_dangling_and_kind_filter():
    g = build_graph(
        {"x": {"status": "blocked"}, "y": {}, "z": {}},
        [("ghost", "x"), ("y", "x", 1, "blocks"), ("z", "x", 1, "relates_to")],
    )
    result = extract_critical_path(g, blocked, edge_kinds={"blocks"})
    assert result.node_ids == ["x", "y"]


def test_parallel_edges_reported_once():
    g = build_graph({"x": {"status": "blocked"}, "y": {}}, [("y", "x"), ("y", "x")])
    assert extract_critical_path(g, blocked).edge_ids == [("y", "x")]
