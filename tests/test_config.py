"""Tests for policy files and graph documents."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from graph_risk.config import load_policy
from graph_risk.errors import InvalidArgument
from graph_risk.ir import build_graph
from graph_risk.schemas.document import GraphDocument


def test_load_yaml_policy(tmp_path):
    p = tmp_path / "policy.yaml"
    p.write_text("metrics:\n  complexity: {cap: 30}\n  change_count: 20\n")
    policy = load_policy(p)
    assert policy.names == ["complexity", "change_count"]
    assert [m.cap for m in policy.metrics] == [30.0, 20.0]
    assert not policy.weighted


def test_load_json_policy_with_weights(tmp_path):
    p = tmp_path / "policy.json"
    p.write_text('{"metrics": {"a": {"cap": 1, "weight": 0.25}, "b": {"cap": 2, "weight": 0.75}}}')
    policy = load_policy(p)
    assert policy.weighted
    assert [m.weight for m in policy.metrics] == [0.25, 0.75]


def test_zero_cap_rejected(tmp_path):
    p = tmp_path / "policy.yaml"
    p.write_text("metrics:\n  complexity: 0\n")
    with pytest.raises(InvalidArgument):
        load_policy(p)


def test_empty_policy_rejected(tmp_path):
    p = tmp_path / "policy.yaml"
    p.write_text("metrics: {}\n")
    with pytest.raises(InvalidArgument):
        load_policy(p)


def test_non_mapping_rejected(tmp_path):
    p = tmp_path / "policy.yaml"
    p.write_text("- just\n- a list\n")
    with pytest.raises(InvalidArgument):
        load_policy(p)


def test_wrong_types_rejected(tmp_path):
    p = tmp_path / "policy.yaml"
    p.write_text("metrics:\n  complexity: {cap: lots}\n")
    with pytest.raises(ValidationError):
        load_policy(p)


def test_graph_document_roundtrip():
    g = build_graph({"a": {"complexity": 4, "name": "main"}, "b": {}}, [("a", "b", 2, "calls")])
    doc = GraphDocument.from_graph(g)
    rebuilt = GraphDocument.model_validate_json(doc.model_dump_json()).to_graph()
    assert rebuilt.get_node("a").attributes == {"complexity": 4, "name": "main"}
    assert [(e.source, e.target, e.weight, e.kind) for e in rebuilt.all_edges()] == [
        ("a", "b", 2.0, "calls"),
    ]


def test_graph_document_defaults():
    doc = GraphDocument.model_validate({"nodes": [{"id": "a"}], "edges": [{"source": "a", "target": "x"}]})
    g = doc.to_graph()
    assert g.all_edges()[0].kind == "depends_on"
    assert g.neighbors("a") == []


def test_graph_document_drops_null_attributes():
    doc = GraphDocument.model_validate(
        {"nodes": [{"id": "a", "attributes": {"complexity": None, "name": "main"}}]}
    )
    assert doc.to_graph().get_node("a").attributes == {"name": "main"}
