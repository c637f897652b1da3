"""Hotspot adapter: complexity × churn → risk categories."""

from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel

from graph_risk.analysis.models import RiskCategory, RiskReport
from graph_risk.analysis.risk import RiskPolicy, assess
from graph_risk.config import (
    LEGACY_BADGE_THRESHOLDS,
    LEGACY_CHANGE_COUNT_CAP,
    LEGACY_COMPLEXITY_CAP,
)


class Hotspot(BaseModel):
    path: str
    complexity: float | None = None
    change_count: int = 0
    unique_authors: int = 0
    risk_score: float = 0.0   # precomputed upstream, 0–100


LEGACY_HOTSPOT_POLICY = RiskPolicy.from_caps({
    "complexity": LEGACY_COMPLEXITY_CAP,
    "change_count": LEGACY_CHANGE_COUNT_CAP,
})


def classify_hotspots(
    hotspots: Iterable[Hotspot],
    policy: RiskPolicy = LEGACY_HOTSPOT_POLICY,
) -> RiskReport:
    """Score each hotspot; unknown complexity counts as 0."""
    return RiskReport(assessments=[
        assess(h.path, {"complexity": h.complexity, "change_count": h.change_count}, policy)
        for h in hotspots
    ])


def badge_category(risk_score: float) -> RiskCategory:
    """Category for an upstream 0–100 risk score."""
    low, medium, high = LEGACY_BADGE_THRESHOLDS
    if risk_score < low:
        return RiskCategory.LOW
    if risk_score < medium:
        return RiskCategory.MEDIUM
    if risk_score < high:
        return RiskCategory.HIGH
    return RiskCategory.CRITICAL
