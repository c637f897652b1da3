"""IR package: the graph model every analysis runs on.

Provides:
    build_graph(nodes, edges) -> CodeGraph
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from graph_risk.ir.graph import CodeGraph
from graph_risk.ir.nodes import Edge, NeighborDirection, Node

log = logging.getLogger(__name__)


def build_graph(
    nodes: Mapping[str, Mapping] | Iterable[str],
    edges: Iterable[Edge | tuple] = (),
) -> CodeGraph:
    """Build a CodeGraph from node ids (or id → attributes) and edges.

    Edges may be ``Edge`` instances or ``(source, target[, weight[, kind]])``
    tuples.
    """
    graph = CodeGraph()
    if isinstance(nodes, Mapping):
        for node_id, attrs in nodes.items():
            graph.add_node(node_id, dict(attrs or {}))
    else:
        for node_id in nodes:
            graph.add_node(node_id)

    for edge in edges:
        if isinstance(edge, Edge):
            graph.add_edge(edge.source, edge.target, edge.weight, edge.kind)
        else:
            graph.add_edge(*edge)

    log.debug("CodeGraph built: %d nodes, %d edges", len(graph), len(graph.all_edges()))
    return graph


__all__ = ["build_graph", "CodeGraph", "Edge", "NeighborDirection", "Node"]
