"""Pydantic model for serialized graphs (CLI input)."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from graph_risk.ir.graph import CodeGraph


class NodeEntry(BaseModel):
    id: str
    attributes: dict[str, int | float | str] = Field(default_factory=dict)

    @field_validator("attributes", mode="before")
    @classmethod
    def _drop_nulls(cls, value):
        # ``"complexity": null`` means the metric is absent
        if isinstance(value, dict):
            return {key: v for key, v in value.items() if v is not None}
        return value


class EdgeEntry(BaseModel):
    source: str
    target: str
    weight: float = 1.0
    kind: str = "depends_on"


class GraphDocument(BaseModel):
    nodes: list[NodeEntry] = Field(default_factory=list)
    edges: list[EdgeEntry] = Field(default_factory=list)

    def to_graph(self) -> CodeGraph:
        graph = CodeGraph()
        for node in self.nodes:
            graph.add_node(node.id, node.attributes)
        for edge in self.edges:
            graph.add_edge(edge.source, edge.target, edge.weight, edge.kind)
        return graph

    @classmethod
    def from_graph(cls, graph: CodeGraph) -> GraphDocument:
        return cls(
            nodes=[NodeEntry(id=n.id, attributes=n.attributes) for n in graph.all_nodes()],
            edges=[
                EdgeEntry(source=e.source, target=e.target, weight=e.weight, kind=e.kind)
                for e in graph.all_edges()
            ],
        )
