"""Tests for composite risk scoring and categories."""

from __future__ import annotations

import pytest

from graph_risk.analysis.models import RiskCategory
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
from graph_risk.errors import InvalidArgument
from graph_risk.ir import build_graph

POLICY = RiskPolicy.from_caps({"a": 10, "b": 20})


class TestCategorize:
    def test_boundaries(self):
        assert categorize(0.0) == RiskCategory.LOW
        assert categorize(0.2499999) == RiskCategory.LOW
        assert categorize(0.25) == RiskCategory.MEDIUM
        assert categorize(0.4999) == RiskCategory.MEDIUM
        assert categorize(0.5) == RiskCategory.HIGH
        assert categorize(0.75) == RiskCategory.CRITICAL
        assert categorize(1.0) == RiskCategory.CRITICAL

    def test_exact_quarter_score_is_medium(self):
        # 15/30 = 0.5 and 0/20 = 0 → mean 0.25
        policy = RiskPolicy.from_caps({"complexity": 30, "change_count": 20})
        score = composite_score({"complexity": 15, "change_count": 0}, policy)
        assert score == 0.25
        assert categorize(score) == RiskCategory.MEDIUM


class TestNormalize:
    def test_caps_at_one(self):
        assert normalize(50, 10) == 1.0

    def test_fraction(self):
        assert normalize(5, 10) == 0.5

    def test_negative_clamped(self):
        assert normalize(-3, 10) == 0.0

    def test_non_finite_clamped(self):
        assert normalize(float("nan"), 10) == 0.0
        assert normalize(float("inf"), 10) == 0.0
        assert normalize(float("-inf"), 10) == 0.0


class TestCompositeScore:
    def test_equal_weights_mean(self):
        assert composite_score({"a": 5, "b": 20}, POLICY) == 0.75

    def test_explicit_weights(self):
        policy = RiskPolicy.from_caps({"a": 10, "b": 10}, weights={"a": 0.8, "b": 0.2})
        assert composite_score({"a": 10, "b": 0}, policy) == pytest.approx(0.8)

    def test_bounded(self):
        assert composite_score({"a": 1e9, "b": 1e9}, POLICY) == 1.0
        assert composite_score({}, POLICY) == 0.0

    def test_numeric_strings_accepted(self):
        assert composite_score({"a": "10", "b": "20"}, POLICY) == 1.0

    def test_non_numeric_treated_as_missing(self):
        result = assess("n", {"a": "lots", "b": True}, POLICY)
        assert result.score == 0.0
        assert result.missing_metrics == ["a", "b"]


class TestMissingMetricBias:
    def test_both_present_at_cap_is_critical(self):
        result = assess("full", {"a": 10, "b": 20}, POLICY)
        assert result.score == 1.0
        assert result.category == RiskCategory.CRITICAL
        assert result.missing_metrics == []

    def test_one_missing_is_high(self):
        result = assess("partial", {"a": 10}, POLICY)
        assert result.score == 0.5
        assert result.category == RiskCategory.HIGH
        assert result.missing_metrics == ["b"]
        assert result.normalized == {"a": 1.0, "b": 0.0}


class TestPolicyValidation:
    @pytest.mark.parametrize("cap", [0, -1, float("nan"), float("inf")])
    def test_bad_cap(self, cap):
        with pytest.raises(InvalidArgument):
            MetricCap("a", cap)

    def test_empty_policy(self):
        with pytest.raises(InvalidArgument):
            RiskPolicy(())

    def test_weights_must_sum_to_one(self):
        with pytest.raises(InvalidArgument):
            RiskPolicy.from_caps({"a": 1, "b": 1}, weights={"a": 0.5, "b": 0.6})

    def test_weights_all_or_none(self):
        with pytest.raises(InvalidArgument):
            RiskPolicy.from_caps({"a": 1, "b": 1}, weights={"a": 1.0})

    def test_negative_weight(self):
        with pytest.raises(InvalidArgument):
            MetricCap("a", 1, weight=-0.1)

    def test_duplicate_names(self):
        with pytest.raises(InvalidArgument):
            RiskPolicy((MetricCap("a", 1), MetricCap("a", 2)))

    def test_list_coerced_to_tuple(self):
        policy = RiskPolicy([MetricCap("a", 1)])
        assert policy.metrics == (MetricCap("a", 1),)
        assert policy.names == ["a"]


class TestClassify:
    def test_classify_nodes_reads_attributes(self):
        g = build_graph({"x": {"a": 10, "b": 20}, "y": {"a": 1}, "z": {}})
        report = classify_nodes(g, POLICY)
        by_node = report.by_node()
        assert by_node["x"].category == RiskCategory.CRITICAL
        assert by_node["y"].category == RiskCategory.LOW
        assert by_node["z"].score == 0.0
        assert report.critical_count == 1
        assert report.low_count == 2
        assert report.average_score == pytest.approx((1.0 + 0.05 + 0.0) / 3)

    def test_classify_nodes_subset_skips_unknown(self):
        g = build_graph({"x": {"a": 10}})
        report = classify_nodes(g, POLICY, node_ids=["x", "ghost"])
        assert [a.node_id for a in report.assessments] == ["x"]

    def test_custom_metric_source(self):
        g = build_graph({"x": {"stats": "ignored"}})
        report = classify_nodes(g, POLICY, metrics_of=lambda n: {"a": 10, "b": 20})
        assert report.assessments[0].score == 1.0

    def test_classify_values_keeps_order(self):
        report = classify_values({"q": {"a": 0}, "p": {"a": 10, "b": 20}}, POLICY)
        assert [a.node_id for a in report.assessments] == ["q", "p"]
        assert report.high_count == 0
        assert report.medium_count == 0

    def test_repeat_classification_is_identical(self):
        g = build_graph({"x": {"a": 10, "b": 20}, "y": {"a": 5}, "z": {"b": "n/a"}})
        first = classify_nodes(g, POLICY)
        second = classify_nodes(g, POLICY)
        assert first.model_dump_json() == second.model_dump_json()
        assert [a.category for a in first.assessments] == [
            RiskCategory.CRITICAL, RiskCategory.MEDIUM, RiskCategory.LOW,
        ]

    def test_empty_report(self):
        report = classify_values({}, POLICY)
        assert report.average_score == 0.0
        assert report.model_dump()["critical_count"] == 0
