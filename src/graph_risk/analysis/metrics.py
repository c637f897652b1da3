"""Structural metrics: fan-in, fan-out, coupling, parallel-edge weights."""

from __future__ import annotations

import math
from typing import Iterable

from graph_risk.analysis.models import GraphMetrics
from graph_risk.ir.graph import CodeGraph


def aggregate_edge_weights(
    graph: CodeGraph,
    *,
    node_ids: Iterable[str] | None = None,
    edge_kinds: set[str] | None = None,
) -> dict[tuple[str, str], float]:
    """Sum the weights of parallel edges per (source, target), first-seen order.

    With ``node_ids`` only edges with both ends in that set are counted.
    """
    scope = set(node_ids) if node_ids is not None else None
    totals: dict[tuple[str, str], float] = {}
    for edge in graph.all_edges():
        if edge_kinds and edge.kind not in edge_kinds:
            continue
        if edge.source not in graph or edge.target not in graph:
            continue
        if scope is not None and (edge.source not in scope or edge.target not in scope):
            continue
        totals[edge.key] = totals.get(edge.key, 0.0) + edge.weight
    return totals


def compute_graph_metrics(
    graph: CodeGraph,
    *,
    node_ids: Iterable[str] | None = None,
    edge_kinds: set[str] | None = None,
) -> GraphMetrics:
    """Fan-out/fan-in statistics and a 0–100 coupling score.

    Every edge counts (parallel edges included). Average fan-in is taken over
    nodes that have at least one incoming edge.
    """
    ids = list(dict.fromkeys(node_ids)) if node_ids is not None else graph.node_ids()
    ids = [nid for nid in ids if nid in graph]
    if not ids:
        return GraphMetrics()

    scope = set(ids)
    fan_out = {nid: 0 for nid in ids}
    fan_in: dict[str, int] = {}
    edge_count = 0
    for edge in graph.all_edges():
        if edge_kinds and edge.kind not in edge_kinds:
            continue
        if edge.source not in scope or edge.target not in scope:
            continue
        edge_count += 1
        fan_out[edge.source] += 1
        fan_in[edge.target] = fan_in.get(edge.target, 0) + 1

    n = len(ids)
    possible = n * (n - 1)
    coupling = _round_half_up(edge_count / possible * 100) if possible > 0 else 0

    return GraphMetrics(
        node_count=n,
        edge_count=edge_count,
        avg_fan_out=_round_half_up(sum(fan_out.values()) / n, 2),
        avg_fan_in=_round_half_up(sum(fan_in.values()) / len(fan_in), 2) if fan_in else 0.0,
        max_fan_out=max(fan_out.values()),
        max_fan_in=max(fan_in.values()) if fan_in else 0,
        coupling_score=min(100, coupling),
    )


def _round_half_up(value: float, places: int = 0) -> float | int:
    # Halves go up (12.5 -> 13), not to the nearest even number like round().
    if places == 0:
        return math.floor(value + 0.5)
    scale = 10 ** places
    return math.floor(value * scale + 0.5) / scale
