"""Pydantic models for everything the analysis engine emits."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, computed_field


# ── Layout ──────────────────────────────────────────────────────────────────

class LayeredNode(BaseModel):
    id: str
    depth: int            # signed hop distance from the nearest root
    order: int = 0        # 0-based position within its depth bucket


class LevelLayout(BaseModel):
    """Ordinal layout: nodes grouped by depth with a dense order per depth.

    Geometry is left to the caller, who maps ``(depth, order, counts[depth])``
    to whatever coordinate system it renders in.
    """
    nodes: list[LayeredNode] = Field(default_factory=list)
    counts: dict[int, int] = Field(default_factory=dict)

    @computed_field
    @property
    def min_depth(self) -> int:
        return min(self.counts) if self.counts else 0

    @computed_field
    @property
    def max_depth(self) -> int:
        return max(self.counts) if self.counts else 0

    def at_depth(self, depth: int) -> list[LayeredNode]:
        return [n for n in self.nodes if n.depth == depth]

    def get(self, node_id: str) -> LayeredNode | None:
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None

    def depths(self) -> dict[str, int]:
        return {n.id: n.depth for n in self.nodes}


# ── Risk ────────────────────────────────────────────────────────────────────

class RiskCategory(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RiskAssessment(BaseModel):
    node_id: str
    score: float                                   # composite, in [0, 1]
    category: RiskCategory
    normalized: dict[str, float] = Field(default_factory=dict)
    # Metrics the node did not carry; each was scored as 0, pulling the
    # composite down.
    missing_metrics: list[str] = Field(default_factory=list)


class RiskReport(BaseModel):
    assessments: list[RiskAssessment] = Field(default_factory=list)

    # ── Category counts ──

    @computed_field
    @property
    def critical_count(self) -> int:
        return sum(1 for a in self.assessments if a.category == RiskCategory.CRITICAL)

    @computed_field
    @property
    def high_count(self) -> int:
        return sum(1 for a in self.assessments if a.category == RiskCategory.HIGH)

    @computed_field
    @property
    def medium_count(self) -> int:
        return sum(1 for a in self.assessments if a.category == RiskCategory.MEDIUM)

    @computed_field
    @property
    def low_count(self) -> int:
        return sum(1 for a in self.assessments if a.category == RiskCategory.LOW)

    @computed_field
    @property
    def average_score(self) -> float:
        if not self.assessments:
            return 0.0
        return sum(a.score for a in self.assessments) / len(self.assessments)

    def by_node(self) -> dict[str, RiskAssessment]:
        return {a.node_id: a for a in self.assessments}


# ── Critical path ───────────────────────────────────────────────────────────

class CriticalPathResult(BaseModel):
    """Reachability closure between flagged nodes and their blockers/dependents.

    Not a scheduling critical path: there are no durations, only reachability.
    Ids are sorted and de-duplicated so serialized output is stable.
    """
    flagged: list[str] = Field(default_factory=list)
    node_ids: list[str] = Field(default_factory=list)
    edge_ids: list[tuple[str, str]] = Field(default_factory=list)

    def contains_node(self, node_id: str) -> bool:
        return node_id in self.node_ids

    def contains_edge(self, source: str, target: str) -> bool:
        return (source, target) in self.edge_ids


# ── Graph metrics ───────────────────────────────────────────────────────────

class GraphMetrics(BaseModel):
    node_count: int = 0
    edge_count: int = 0
    avg_fan_out: float = 0.0
    avg_fan_in: float = 0.0
    max_fan_out: int = 0
    max_fan_in: int = 0
    coupling_score: int = 0   # 0–100
