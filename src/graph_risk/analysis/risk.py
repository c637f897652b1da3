"""Composite risk scoring: N capped metrics → score in [0, 1] → category.

Each metric is normalized as ``min(raw / cap, 1)`` against a caller-chosen
cap, so scores do not drift as the dataset grows. The composite is the plain
mean of the normalized metrics, or a weighted sum when every metric carries a
weight and the weights sum to 1.

Missing metrics score 0. A node that lacks a metric is never dropped, but its
composite is biased downward: two metrics both at cap give 1.0 (critical),
one at cap and one missing give 0.5 (high).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

from graph_risk.analysis.models import RiskAssessment, RiskCategory, RiskReport
from graph_risk.errors import InvalidArgument
from graph_risk.ir.graph import CodeGraph
from graph_risk.ir.nodes import Node

log = logging.getLogger(__name__)

# Upper bounds (exclusive) of each category; anything >= 0.75 is critical.
# A score sitting exactly on a bound belongs to the higher category.
RISK_THRESHOLDS: tuple[tuple[float, RiskCategory], ...] = (
    (0.25, RiskCategory.LOW),
    (0.50, RiskCategory.MEDIUM),
    (0.75, RiskCategory.HIGH),
)

_WEIGHT_TOLERANCE = 1e-9


@dataclass(frozen=True)
class MetricCap:
    name: str
    cap: float                    # raw value at which the metric saturates
    weight: float | None = None   # None = equal weighting

    def __post_init__(self) -> None:
        if not isinstance(self.cap, (int, float)) or not math.isfinite(self.cap) or self.cap <= 0:
            raise InvalidArgument(f"cap for metric {self.name!r} must be > 0, got {self.cap!r}")
        if self.weight is not None and (not math.isfinite(self.weight) or self.weight < 0):
            raise InvalidArgument(f"weight for metric {self.name!r} must be >= 0, got {self.weight!r}")


@dataclass(frozen=True)
class RiskPolicy:
    metrics: tuple[MetricCap, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "metrics", tuple(self.metrics))
        if not self.metrics:
            raise InvalidArgument("risk policy needs at least one metric")

        names = [m.name for m in self.metrics]
        if len(set(names)) != len(names):
            raise InvalidArgument(f"duplicate metric names in policy: {names}")

        weighted = [m for m in self.metrics if m.weight is not None]
        if weighted and len(weighted) != len(self.metrics):
            raise InvalidArgument("weights must be given for every metric or for none")
        if weighted:
            total = sum(m.weight for m in weighted)
            if abs(total - 1.0) > _WEIGHT_TOLERANCE:
                raise InvalidArgument(f"metric weights must sum to 1, got {total}")

    @classmethod
    def from_caps(
        cls,
        caps: Mapping[str, float],
        weights: Mapping[str, float] | None = None,
    ) -> RiskPolicy:
        weights = weights or {}
        return cls(tuple(
            MetricCap(name=name, cap=cap, weight=weights.get(name))
            for name, cap in caps.items()
        ))

    @property
    def names(self) -> list[str]:
        return [m.name for m in self.metrics]

    @property
    def weighted(self) -> bool:
        return self.metrics[0].weight is not None


def normalize(raw: float, cap: float) -> float:
    """Map a raw metric onto [0, 1] against its cap.

    Negative and non-finite values (NaN, inf) map to 0.
    """
    if not math.isfinite(raw) or raw <= 0:
        return 0.0
    return min(raw / cap, 1.0)


def categorize(score: float) -> RiskCategory:
    for upper, category in RISK_THRESHOLDS:
        if score < upper:
            return category
    return RiskCategory.CRITICAL


def composite_score(values: Mapping[str, Any], policy: RiskPolicy) -> float:
    """Composite risk score for one set of raw metric values."""
    return _score(values, policy)[0]


def assess(node_id: str, values: Mapping[str, Any], policy: RiskPolicy) -> RiskAssessment:
    score, normalized, missing = _score(values, policy)
    if missing:
        log.debug("Node %s missing metrics %s, scored as 0", node_id, missing)
    return RiskAssessment(
        node_id=node_id,
        score=score,
        category=categorize(score),
        normalized=normalized,
        missing_metrics=missing,
    )


def classify_values(
    records: Mapping[str, Mapping[str, Any]],
    policy: RiskPolicy,
) -> RiskReport:
    """Classify ``{id: {metric: raw}}`` records, preserving record order."""
    return RiskReport(assessments=[
        assess(record_id, values, policy) for record_id, values in records.items()
    ])


def classify_nodes(
    graph: CodeGraph,
    policy: RiskPolicy,
    *,
    node_ids: Iterable[str] | None = None,
    metrics_of: Callable[[Node], Mapping[str, Any]] | None = None,
) -> RiskReport:
    """Classify graph nodes, reading metrics from node attributes by default."""
    metrics_of = metrics_of or (lambda n: n.attributes)
    ids = list(node_ids) if node_ids is not None else graph.node_ids()

    assessments: list[RiskAssessment] = []
    for node_id in ids:
        node = graph.get_node(node_id)
        if node is None:
            continue
        assessments.append(assess(node_id, metrics_of(node), policy))
    return RiskReport(assessments=assessments)


# ── Helpers ───────────────────────────────────────────────────────────────


def _score(
    values: Mapping[str, Any],
    policy: RiskPolicy,
) -> tuple[float, dict[str, float], list[str]]:
    normalized: dict[str, float] = {}
    missing: list[str] = []
    for metric in policy.metrics:
        raw = _numeric(values.get(metric.name))
        if raw is None:
            missing.append(metric.name)
            raw = 0.0
        normalized[metric.name] = normalize(raw, metric.cap)

    if policy.weighted:
        score = sum(m.weight * normalized[m.name] for m in policy.metrics)
    else:
        score = sum(normalized.values()) / len(normalized)
    return min(max(score, 0.0), 1.0), normalized, missing


def _numeric(value: Any) -> float | None:
    """Coerce an attribute value to float; None when absent or not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            parsed = float(value)
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None
