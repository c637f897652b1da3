"""Work-item adapter: blocked-by relations → dependency board."""

from __future__ import annotations

import logging
from typing import Iterable

from pydantic import BaseModel, Field

from graph_risk.analysis.critical_path import extract_critical_path
from graph_risk.analysis.layering import blocker_levels
from graph_risk.analysis.models import CriticalPathResult, LevelLayout
from graph_risk.analysis.packing import pack_levels
from graph_risk.config import BOARD_FALLBACK_LIMIT
from graph_risk.ir.graph import CodeGraph
from graph_risk.ir.nodes import NeighborDirection

log = logging.getLogger(__name__)

BLOCKS = "blocks"
BLOCKED_STATUS = "blocked"


class WorkItem(BaseModel):
    id: str
    title: str = ""
    status: str = "backlog"   # backlog|ready|in_progress|in_review|blocked|completed
    blocked_by: list[str] = Field(default_factory=list)


class BoardEdge(BaseModel):
    source: str               # blocker
    target: str               # blocked item
    is_critical: bool = False


class DependencyBoard(BaseModel):
    layout: LevelLayout
    edges: list[BoardEdge] = Field(default_factory=list)
    critical_path: CriticalPathResult
    blocked_count: int = 0


def build_work_graph(items: Iterable[WorkItem]) -> CodeGraph:
    items = list(items)
    graph = CodeGraph()
    for item in items:
        graph.add_node(item.id, {"title": item.title, "status": item.status})
    for item in items:
        for blocker in item.blocked_by:
            graph.add_edge(blocker, item.id, kind=BLOCKS)
    return graph


def plan_board(
    items: Iterable[WorkItem],
    *,
    only_blocked: bool = False,
    fallback_limit: int = BOARD_FALLBACK_LIMIT,
) -> DependencyBoard:
    """Lay out work items by blocker level and mark the blocking chains.

    Shown are items taking part in any blocking relation (plus every item
    with status ``blocked`` when ``only_blocked`` is set). If nothing
    qualifies, the first ``fallback_limit`` items are shown instead.
    """
    items = list(items)
    graph = build_work_graph(items)
    edge_kinds = {BLOCKS}

    def related(item: WorkItem) -> bool:
        return bool(graph.neighbors(item.id, NeighborDirection.BOTH, edge_kinds))

    def is_blocked(node_id: str) -> bool:
        node = graph.get_node(node_id)
        return node is not None and node.attributes.get("status") == BLOCKED_STATUS

    shown = [
        i for i in items
        if related(i) or (only_blocked and i.status == BLOCKED_STATUS)
    ]
    if not shown:
        shown = items[:fallback_limit]
    shown_ids = list(dict.fromkeys(i.id for i in shown))

    levels = blocker_levels(graph, [i.id for i in items], edge_kinds=edge_kinds)
    layout = pack_levels({nid: levels.get(nid, 0) for nid in shown_ids})

    visible = set(shown_ids)
    edges: list[BoardEdge] = []
    for nid in shown_ids:
        critical_edge = is_blocked(nid)
        for blocker in dict.fromkeys(graph.neighbors(nid, NeighborDirection.IN, edge_kinds)):
            if blocker in visible:
                edges.append(BoardEdge(source=blocker, target=nid, is_critical=critical_edge))

    critical = extract_critical_path(graph, lambda n: is_blocked(n.id), edge_kinds=edge_kinds)
    blocked_count = sum(1 for nid in shown_ids if is_blocked(nid))

    log.info(
        "Board: %d of %d items shown, %d blocked, %d on critical path",
        len(shown_ids), len(items), blocked_count, len(critical.node_ids),
    )
    return DependencyBoard(
        layout=layout,
        edges=edges,
        critical_path=critical,
        blocked_count=blocked_count,
    )
