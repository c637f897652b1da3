"""Pydantic model for risk policy files."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from graph_risk.analysis.risk import MetricCap, RiskPolicy


class MetricEntry(BaseModel):
    cap: float
    weight: float | None = None


class PolicyFile(BaseModel):
    metrics: dict[str, MetricEntry] = Field(default_factory=dict)

    @field_validator("metrics", mode="before")
    @classmethod
    def _bare_caps(cls, value):
        # Allow the shorthand ``complexity: 30`` for ``complexity: {cap: 30}``
        if isinstance(value, dict):
            return {
                name: {"cap": entry} if isinstance(entry, (int, float)) else entry
                for name, entry in value.items()
            }
        return value

    def to_policy(self) -> RiskPolicy:
        return RiskPolicy(tuple(
            MetricCap(name=name, cap=entry.cap, weight=entry.weight)
            for name, entry in self.metrics.items()
        ))
