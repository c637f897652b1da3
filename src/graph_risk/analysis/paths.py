"""Path queries: shortest forward path and cycle detection."""

from __future__ import annotations

import logging
from collections import deque

from graph_risk.config import FIND_PATH_MAX_DEPTH
from graph_risk.ir.graph import CodeGraph
from graph_risk.ir.nodes import NeighborDirection

log = logging.getLogger(__name__)


def find_path(
    graph: CodeGraph,
    source: str,
    target: str,
    *,
    max_depth: int = FIND_PATH_MAX_DEPTH,
    edge_kinds: set[str] | None = None,
) -> list[str] | None:
    """Shortest forward path from source to target as a list of node ids.

    A path is no longer extended once it holds more than ``max_depth``
    nodes. Returns None when either end is unknown or no path exists.
    """
    if source not in graph or target not in graph:
        return None
    if source == target:
        return [source]

    visited: set[str] = {source}
    queue: deque[list[str]] = deque([[source]])
    while queue:
        path = queue.popleft()
        if len(path) > max_depth:
            continue
        for nxt in graph.neighbors(path[-1], NeighborDirection.OUT, edge_kinds):
            if nxt in visited:
                continue
            if nxt == target:
                return path + [nxt]
            visited.add(nxt)
            queue.append(path + [nxt])
    return None


def detect_cycles(
    graph: CodeGraph,
    *,
    start: str | None = None,
    edge_kinds: set[str] | None = None,
) -> list[list[str]]:
    """Find cycles with a DFS recursion stack.

    Every edge back into the current DFS path yields the slice of the path
    from the re-entered node to the end. With ``start`` only the part of the
    graph reachable from it is searched.
    """
    if start is not None:
        starts = [start] if start in graph else []
    else:
        starts = graph.node_ids()

    cycles: list[list[str]] = []
    visited: set[str] = set()

    for root in starts:
        if root in visited:
            continue
        visited.add(root)
        path: list[str] = [root]
        on_path: set[str] = {root}
        stack = [iter(graph.neighbors(root, NeighborDirection.OUT, edge_kinds))]
        while stack:
            for nxt in stack[-1]:
                if nxt not in visited:
                    visited.add(nxt)
                    path.append(nxt)
                    on_path.add(nxt)
                    stack.append(iter(graph.neighbors(nxt, NeighborDirection.OUT, edge_kinds)))
                    break
                if nxt in on_path:
                    cycles.append(path[path.index(nxt):])
            else:
                stack.pop()
                on_path.discard(path.pop())

    log.debug("Detected %d cycles", len(cycles))
    return cycles
