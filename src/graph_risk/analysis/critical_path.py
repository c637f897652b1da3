"""Blocking-chain closure around flagged nodes.

Edges point blocker → blocked. For every flagged node the extractor walks
backward to collect all transitive blockers and forward to collect everything
the flagged node transitively gates, then unions the results. This is plain
reachability: no durations, no longest-path scheduling.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable

from graph_risk.analysis.models import CriticalPathResult
from graph_risk.ir.graph import CodeGraph
from graph_risk.ir.nodes import Edge, Node

log = logging.getLogger(__name__)


def extract_critical_path(
    graph: CodeGraph,
    is_flagged: Callable[[Node], bool],
    *,
    edge_kinds: set[str] | None = None,
) -> CriticalPathResult:
    """Nodes and edges connecting flagged nodes to their blockers and dependents.

    Args:
        graph: Graph whose edges point from blocker to blocked.
        is_flagged: Predicate marking flagged nodes (e.g. status == "blocked").
        edge_kinds: Restrict the walk to these edge kinds (e.g. {"blocks"}).
    """
    flagged = [n.id for n in graph.nodes_matching(is_flagged)]
    node_ids: set[str] = set()
    edge_ids: set[tuple[str, str]] = set()

    for node_id in flagged:
        node_ids.add(node_id)
        _walk(node_id, graph.incoming_edges, lambda e: e.source, graph, edge_kinds,
              node_ids, edge_ids)
        _walk(node_id, graph.outgoing_edges, lambda e: e.target, graph, edge_kinds,
              node_ids, edge_ids)

    log.debug(
        "Critical path: %d flagged → %d nodes, %d edges",
        len(flagged), len(node_ids), len(edge_ids),
    )
    return CriticalPathResult(
        flagged=sorted(flagged),
        node_ids=sorted(node_ids),
        edge_ids=sorted(edge_ids),
    )


def _walk(
    start: str,
    edges_of: Callable[..., list[Edge]],
    far_end: Callable[[Edge], str],
    graph: CodeGraph,
    edge_kinds: set[str] | None,
    node_ids: set[str],
    edge_ids: set[tuple[str, str]],
) -> None:
    """BFS from start along one edge direction, recording nodes and edges."""
    visited: set[str] = {start}
    queue: deque[str] = deque([start])
    while queue:
        current = queue.popleft()
        for edge in edges_of(current, edge_kinds):
            other = far_end(edge)
            if other not in graph:
                continue  # Dangling reference
            edge_ids.add(edge.key)
            node_ids.add(other)
            if other not in visited:
                visited.add(other)
                queue.append(other)
