"""Analysis engine: layering, packing, risk, critical path.

Usage:
    from graph_risk.analysis import assign_depths, pack_levels

    depths = assign_depths(graph, ["main"], Direction.FORWARD)
    layout = pack_levels(depths)
"""

from __future__ import annotations

from graph_risk.analysis.critical_path import extract_critical_path
from graph_risk.analysis.layering import Direction, assign_depths, blocker_levels
from graph_risk.analysis.metrics import aggregate_edge_weights, compute_graph_metrics
from graph_risk.analysis.models import (
    CriticalPathResult,
    GraphMetrics,
    LayeredNode,
    LevelLayout,
    RiskAssessment,
    RiskCategory,
    RiskReport,
)
from graph_risk.analysis.packing import layer_graph, pack_levels
from graph_risk.analysis.paths import detect_cycles, find_path
from graph_risk.analysis.risk import (
    MetricCap,
    RiskPolicy,
    assess,
    categorize,
    classify_nodes,
    classify_values,
    composite_score,
    normalize,
)

__all__ = [
    "CriticalPathResult",
    "Direction",
    "GraphMetrics",
    "LayeredNode",
    "LevelLayout",
    "MetricCap",
    "RiskAssessment",
    "RiskCategory",
    "RiskPolicy",
    "RiskReport",
    "aggregate_edge_weights",
    "assess",
    "assign_depths",
    "blocker_levels",
    "categorize",
    "classify_nodes",
    "classify_values",
    "composite_score",
    "compute_graph_metrics",
    "detect_cycles",
    "extract_critical_path",
    "find_path",
    "layer_graph",
    "normalize",
    "pack_levels",
]
