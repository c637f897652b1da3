"""CodeGraph: nodes, directed multi-edges, forward/backward adjacency."""

from __future__ import annotations

from collections import defaultdict
from typing import Callable, Iterable

from graph_risk.errors import InvalidArgument
from graph_risk.ir.nodes import Edge, NeighborDirection, Node


class CodeGraph:
    """Directed multigraph of code entities.

    Edges may reference ids that have no node yet; such edges are kept but
    skipped by ``neighbors`` and by every traversal in ``graph_risk.analysis``.
    Graphs are treated as immutable snapshots once handed to the engine.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, Node] = {}
        self._edges: list[Edge] = []
        # Forward adjacency: source_id → [edge index]
        self._fwd: dict[str, list[int]] = defaultdict(list)
        # Backward adjacency: target_id → [edge index]
        self._bwd: dict[str, list[int]] = defaultdict(list)

    def add_node(self, node_id: str, attributes: dict | None = None) -> Node:
        """Add a node. Re-adding an id replaces its attributes and keeps its edges."""
        node = Node(id=node_id, attributes=dict(attributes or {}))
        self._nodes[node_id] = node
        return node

    def add_edge(
        self,
        source: str,
        target: str,
        weight: float = 1.0,
        kind: str = "depends_on",
    ) -> Edge:
        """Add a directed edge (parallel edges are allowed and preserved)."""
        edge = Edge(source=source, target=target, weight=weight, kind=kind)
        idx = len(self._edges)
        self._edges.append(edge)
        self._fwd[source].append(idx)
        self._bwd[target].append(idx)
        return edge

    def get_node(self, node_id: str) -> Node | None:
        return self._nodes.get(node_id)

    def nodes_matching(self, pred: Callable[[Node], bool]) -> list[Node]:
        """Return all nodes matching the predicate, in insertion order."""
        return [n for n in self._nodes.values() if pred(n)]

    def outgoing_edges(self, node_id: str, edge_kinds: set[str] | None = None) -> list[Edge]:
        return [
            self._edges[i] for i in self._fwd.get(node_id, [])
            if not edge_kinds or self._edges[i].kind in edge_kinds
        ]

    def incoming_edges(self, node_id: str, edge_kinds: set[str] | None = None) -> list[Edge]:
        return [
            self._edges[i] for i in self._bwd.get(node_id, [])
            if not edge_kinds or self._edges[i].kind in edge_kinds
        ]

    def neighbors(
        self,
        node_id: str,
        direction: NeighborDirection | str = NeighborDirection.OUT,
        edge_kinds: set[str] | None = None,
    ) -> list[str]:
        """Ids adjacent to ``node_id``, one entry per edge, in edge insertion order.

        Unknown ids yield ``[]``. Edges whose far end is not a node are skipped.
        """
        direction = _coerce_direction(direction)
        if node_id not in self._nodes:
            return []

        if direction is NeighborDirection.OUT:
            indices: Iterable[int] = self._fwd.get(node_id, [])
        elif direction is NeighborDirection.IN:
            indices = self._bwd.get(node_id, [])
        else:
            indices = sorted(set(self._fwd.get(node_id, [])) | set(self._bwd.get(node_id, [])))

        result: list[str] = []
        for i in indices:
            edge = self._edges[i]
            if edge_kinds and edge.kind not in edge_kinds:
                continue
            if direction is NeighborDirection.OUT:
                other = edge.target
            elif direction is NeighborDirection.IN:
                other = edge.source
            else:
                other = edge.target if edge.source == node_id else edge.source
            if other in self._nodes:
                result.append(other)
        return result

    def all_nodes(self) -> list[Node]:
        return list(self._nodes.values())

    def all_edges(self) -> list[Edge]:
        return list(self._edges)

    def node_ids(self) -> list[str]:
        return list(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)


def _coerce_direction(direction: NeighborDirection | str) -> NeighborDirection:
    try:
        return NeighborDirection(direction)
    except ValueError:
        raise InvalidArgument(f"unknown neighbor direction: {direction!r}") from None
