"""Pack depth assignments into ordinal levels."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, Iterable, Mapping

from graph_risk.analysis.layering import Direction, assign_depths
from graph_risk.analysis.models import LayeredNode, LevelLayout
from graph_risk.ir.graph import CodeGraph


def pack_levels(
    depths: Mapping[str, int],
    *,
    key: Callable[[str], Any] | None = None,
) -> LevelLayout:
    """Group nodes by depth and give each a dense 0-based order within it.

    Within a depth, nodes keep the mapping's iteration order (the BFS
    discovery order when fed from ``assign_depths``) unless ``key`` is given,
    in which case they are stable-sorted by ``key(node_id)``. For a
    comparator, wrap it with ``functools.cmp_to_key``.
    """
    buckets: dict[int, list[str]] = defaultdict(list)
    for node_id, depth in depths.items():
        buckets[depth].append(node_id)

    nodes: list[LayeredNode] = []
    counts: dict[int, int] = {}
    for depth in sorted(buckets):
        members = buckets[depth]
        if key is not None:
            members = sorted(members, key=key)
        counts[depth] = len(members)
        nodes.extend(
            LayeredNode(id=node_id, depth=depth, order=order)
            for order, node_id in enumerate(members)
        )

    return LevelLayout(nodes=nodes, counts=counts)


def layer_graph(
    graph: CodeGraph,
    roots: Iterable[str],
    direction: Direction | str = Direction.FORWARD,
    *,
    max_depth: int | None = None,
    edge_kinds: set[str] | None = None,
    key: Callable[[str], Any] | None = None,
) -> LevelLayout:
    """assign_depths followed by pack_levels."""
    depths = assign_depths(
        graph, roots, direction, max_depth=max_depth, edge_kinds=edge_kinds,
    )
    return pack_levels(depths, key=key)
