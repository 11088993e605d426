"""Tests for performance anomaly detection."""

import pytest

from analytics.anomalies import ANOMALY_RULES, detect_anomalies
from analytics.rules import Rule, fixed
from core.constants import Level


@pytest.mark.unit
class TestAnomalyRules:
    def test_healthy_flow_has_no_anomalies(self, make_flow):
        assert detect_anomalies([make_flow()]) == []

    def test_slow_execution(self, make_flow):
        [report] = detect_anomalies([make_flow(avg_execution_time=75.5)])
        assert report.rule == "slow_execution"
        assert report.anomaly == "Slow execution time: 75.5s"
        assert report.impact == Level.MEDIUM
        assert report.recommendation == "Review flow complexity and optimize triggers"

    def test_large_value_rendered_in_full(self, make_flow):
        [report] = detect_anomalies([make_flow(avg_execution_time=1234567.0)])
        assert report.anomaly == "Slow execution time: 1234567s"

    def test_precise_value_rendered_in_full(self, make_flow):
        [report] = detect_anomalies([make_flow(per_execution=1500000.25)])
        assert report.anomaly == "High cost per execution: $1500000.25"

    def test_fractional_success_rate(self, make_flow):
        [report] = detect_anomalies([make_flow(success_rate=84.123456789)])
        assert report.anomaly == "Low success rate: 84.123456789%"

    def test_slow_execution_boundary(self, make_flow):
        assert detect_anomalies([make_flow(avg_execution_time=60.0)]) == []

    def test_low_success_rate(self, make_flow):
        [report] = detect_anomalies([make_flow(success_rate=80.0)])
        assert report.anomaly == "Low success rate: 80%"
        assert report.impact == Level.HIGH
        assert report.recommendation == "Review error logs and fix failing conditions"

    def test_low_success_rate_boundary(self, make_flow):
        assert detect_anomalies([make_flow(success_rate=85.0)]) == []

    def test_high_cost(self, make_flow):
        [report] = detect_anomalies([make_flow(per_execution=0.75)])
        assert report.anomaly == "High cost per execution: $0.75"
        assert report.impact == Level.MEDIUM
        assert report.recommendation == "Consider optimizing to reduce API calls"

    def test_high_cost_boundary(self, make_flow):
        assert detect_anomalies([make_flow(per_execution=0.5)]) == []

    def test_realtime_with_low_usage(self, make_flow):
        [report] = detect_anomalies([make_flow(frequency="realtime", monthly_executions=50)])
        assert report.anomaly == "Real-time trigger with low usage"
        assert report.impact == Level.LOW
        assert report.recommendation == "Consider changing to scheduled trigger"

    def test_realtime_with_enough_usage(self, make_flow):
        flow = make_flow(frequency="realtime", monthly_executions=100)
        assert detect_anomalies([flow]) == []

    def test_low_usage_without_realtime(self, make_flow):
        assert detect_anomalies([make_flow(monthly_executions=5)]) == []


@pytest.mark.unit
class TestDetectAnomalies:
    def test_empty_input(self):
        assert detect_anomalies([]) == []

    def test_one_record_per_rule_in_table_order(self, make_flow):
        flow = make_flow(
            avg_execution_time=120.0,
            success_rate=20.0,
            per_execution=1.0,
            frequency="realtime",
            monthly_executions=10,
        )
        reports = detect_anomalies([flow])
        assert [r.rule for r in reports] == [r.name for r in ANOMALY_RULES]

    def test_grouped_by_flow_in_input_order(self, make_flow):
        flows = [
            make_flow(id="a", per_execution=2.0, avg_execution_time=90.0),
            make_flow(id="b"),
            make_flow(id="c", success_rate=50.0),
        ]
        reports = detect_anomalies(flows)
        assert [(r.flow.id, r.rule) for r in reports] == [
            ("a", "slow_execution"),
            ("a", "high_cost"),
            ("c", "low_success_rate"),
        ]

    def test_custom_rule_table(self, make_flow):
        rules = (
            Rule(
                name="no_actions",
                level=Level.LOW,
                predicate=lambda f: not f.actions,
                message=fixed("Flow has no actions"),
            ),
        )
        reports = detect_anomalies([make_flow(actions=())], rules=rules)
        assert [r.anomaly for r in reports] == ["Flow has no actions"]

    def test_to_dict(self, make_flow):
        report = detect_anomalies([make_flow(id="slow", avg_execution_time=61.0)])[0]
        assert report.to_dict() == {
            "flow": {"id": "slow", "name": "Sync new leads to CRM"},
            "rule": "slow_execution",
            "anomaly": "Slow execution time: 61s",
            "impact": "medium",
            "recommendation": "Review flow complexity and optimize triggers",
        }
