"""Depth assignment over a CodeGraph.

``assign_depths`` runs a multi-source BFS from a root set. Forward hops add
one to the depth, backward hops subtract one. A single visited map keyed by
node id guarantees termination in O(V+E) on cyclic input: a node keeps the
depth at which it was first discovered and is never expanded twice.

In ``both`` mode the two sub-traversals advance level by level in lock step
and share the visited map, so a node reachable both ways lands at the
smaller |depth|. At equal |depth| the backward (caller) side claims it
first. This is first-discovered-wins, not shortest path in general graphs.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable

from graph_risk.errors import InvalidArgument
from graph_risk.ir.graph import CodeGraph
from graph_risk.ir.nodes import NeighborDirection

log = logging.getLogger(__name__)


class Direction(str, Enum):
    FORWARD = "forward"    # along outgoing edges, depth >= 0
    BACKWARD = "backward"  # along incoming edges, depth <= 0
    BOTH = "both"


def coerce_direction(direction: Direction | str) -> Direction:
    try:
        return Direction(direction)
    except ValueError:
        raise InvalidArgument(f"unknown layering direction: {direction!r}") from None


def assign_depths(
    graph: CodeGraph,
    roots: Iterable[str],
    direction: Direction | str = Direction.FORWARD,
    *,
    max_depth: int | None = None,
    edge_kinds: set[str] | None = None,
) -> dict[str, int]:
    """Assign a signed depth to every node reachable from ``roots``.

    Args:
        graph: Graph to traverse. Not mutated.
        roots: Non-empty collection of root ids. Ids missing from the graph
            are ignored.
        direction: ``forward``, ``backward`` or ``both``.
        max_depth: Drop nodes whose |depth| would exceed this. None = no limit.
        edge_kinds: Only follow edges with these kinds. None = all edges.

    Returns:
        ``{node_id: depth}`` in discovery order. Unreachable nodes are absent.

    Raises:
        InvalidArgument: empty root set, negative max_depth, bad direction.
    """
    direction = coerce_direction(direction)
    root_ids = _root_list(roots)
    if max_depth is not None and max_depth < 0:
        raise InvalidArgument(f"max_depth must be >= 0, got {max_depth}")

    depths: dict[str, int] = {}
    for root in root_ids:
        if root not in graph:
            log.debug("Ignoring root %r: not in graph", root)
            continue
        depths.setdefault(root, 0)

    # (neighbor direction, depth sign); backward first so callers win ties
    steps: list[tuple[NeighborDirection, int]] = []
    if direction in (Direction.BACKWARD, Direction.BOTH):
        steps.append((NeighborDirection.IN, -1))
    if direction in (Direction.FORWARD, Direction.BOTH):
        steps.append((NeighborDirection.OUT, 1))

    frontiers: dict[int, list[str]] = {sign: list(depths) for _, sign in steps}
    hop = 0
    while any(frontiers.values()):
        hop += 1
        if max_depth is not None and hop > max_depth:
            break
        for neighbor_dir, sign in steps:
            next_frontier: list[str] = []
            for node_id in frontiers[sign]:
                for other in graph.neighbors(node_id, neighbor_dir, edge_kinds):
                    if other in depths:
                        continue  # Cycle / already claimed
                    depths[other] = sign * hop
                    next_frontier.append(other)
            frontiers[sign] = next_frontier

    log.debug(
        "Layered %d nodes from %d roots (%s, max_depth=%s)",
        len(depths), len(root_ids), direction.value, max_depth,
    )
    return depths


def blocker_levels(
    graph: CodeGraph,
    node_ids: Iterable[str] | None = None,
    *,
    edge_kinds: set[str] | None = None,
) -> dict[str, int]:
    """Level every node by its longest chain of blockers.

    Edges point blocker → blocked. A node without blockers is level 0,
    otherwise ``1 + max(level of its blockers)``. A blocker that is still
    being resolved (i.e. part of a cycle) counts as level 0.
    """
    ids = list(node_ids) if node_ids is not None else graph.node_ids()
    levels: dict[str, int] = {}
    visited: set[str] = set()

    for start in ids:
        if start not in graph or start in visited:
            continue
        visited.add(start)
        stack = [(start, iter(graph.neighbors(start, NeighborDirection.IN, edge_kinds)))]
        while stack:
            node_id, pending = stack[-1]
            descended = False
            for blocker in pending:
                if blocker not in visited:
                    visited.add(blocker)
                    stack.append(
                        (blocker, iter(graph.neighbors(blocker, NeighborDirection.IN, edge_kinds)))
                    )
                    descended = True
                    break
            if descended:
                continue
            stack.pop()
            blockers = graph.neighbors(node_id, NeighborDirection.IN, edge_kinds)
            if blockers:
                levels[node_id] = 1 + max(levels.get(b, 0) for b in blockers)
            else:
                levels[node_id] = 0

    return {nid: levels[nid] for nid in ids if nid in levels}


def _root_list(roots: Iterable[str]) -> list[str]:
    if isinstance(roots, str):
        roots = [roots]
    root_ids = list(dict.fromkeys(roots))
    if not root_ids:
        raise InvalidArgument("root set must not be empty")
    return root_ids
