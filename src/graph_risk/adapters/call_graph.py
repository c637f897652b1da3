"""Call-graph adapter: symbols + references → layered call graph."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable

from pydantic import BaseModel, Field

from graph_risk.analysis.layering import Direction, assign_depths
from graph_risk.analysis.metrics import aggregate_edge_weights, compute_graph_metrics
from graph_risk.analysis.models import GraphMetrics, LevelLayout
from graph_risk.analysis.packing import pack_levels
from graph_risk.config import CALL_GRAPH_MAX_DEPTH
from graph_risk.errors import InvalidArgument
from graph_risk.ir.graph import CodeGraph

log = logging.getLogger(__name__)


class CallDirection(str, Enum):
    CALLERS = "callers"
    CALLEES = "callees"
    BOTH = "both"


_LAYER_DIRECTION = {
    CallDirection.CALLERS: Direction.BACKWARD,
    CallDirection.CALLEES: Direction.FORWARD,
    CallDirection.BOTH: Direction.BOTH,
}


class Symbol(BaseModel):
    id: str
    name: str = ""
    kind: str = "FUNCTION"     # FUNCTION|METHOD|CLASS|INTERFACE|...
    file_path: str = ""
    complexity: float | None = None


class SymbolReference(BaseModel):
    caller_id: str
    callee_id: str
    kind: str = "CALL"         # CALL|INSTANTIATION|...
    call_count: int = 1


class LayoutEdge(BaseModel):
    source: str
    target: str
    kind: str
    call_count: int


class CallGraphLayout(BaseModel):
    root_id: str
    direction: CallDirection
    layout: LevelLayout
    edges: list[LayoutEdge] = Field(default_factory=list)
    metrics: GraphMetrics = Field(default_factory=GraphMetrics)


def build_call_graph(
    symbols: Iterable[Symbol],
    references: Iterable[SymbolReference],
) -> CodeGraph:
    """One node per symbol, one edge (caller → callee) per reference."""
    graph = CodeGraph()
    for sym in symbols:
        attrs: dict = {"name": sym.name, "kind": sym.kind, "file_path": sym.file_path}
        if sym.complexity is not None:
            attrs["complexity"] = sym.complexity
        graph.add_node(sym.id, attrs)
    for ref in references:
        graph.add_edge(ref.caller_id, ref.callee_id, weight=ref.call_count, kind=ref.kind)
    return graph


def layout_call_graph(
    graph: CodeGraph,
    root_id: str,
    direction: CallDirection | str = CallDirection.BOTH,
    *,
    max_depth: int | None = CALL_GRAPH_MAX_DEPTH,
) -> CallGraphLayout:
    """Layer the call graph around one symbol.

    Callers get negative depths, callees positive ones. Edges between laid
    out symbols are merged per (caller, callee) with call counts summed.
    """
    try:
        direction = CallDirection(direction)
    except ValueError:
        raise InvalidArgument(f"unknown call-graph direction: {direction!r}") from None

    depths = assign_depths(graph, [root_id], _LAYER_DIRECTION[direction], max_depth=max_depth)
    layout = pack_levels(depths)

    kinds: dict[tuple[str, str], str] = {}
    for edge in graph.all_edges():
        kinds.setdefault(edge.key, edge.kind)
    weights = aggregate_edge_weights(graph, node_ids=depths)
    edges = [
        LayoutEdge(source=src, target=dst, kind=kinds[(src, dst)], call_count=int(total))
        for (src, dst), total in weights.items()
    ]

    log.info(
        "Call graph for %s: %d symbols over depths %d..%d, %d edges",
        root_id, len(depths), layout.min_depth, layout.max_depth, len(edges),
    )
    return CallGraphLayout(
        root_id=root_id,
        direction=direction,
        layout=layout,
        edges=edges,
        metrics=compute_graph_metrics(graph, node_ids=depths),
    )
