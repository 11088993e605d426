"""Tests for flow and execution log records."""

import dataclasses
from datetime import datetime, timezone

import pytest

from analytics.models import ExecutionLog, Flow
from core.utils import parse_timestamp


# ─── Client records ───

@pytest.mark.unit
class TestFlowFromClientRecord:
    def test_reads_camel_case(self, flow_payload):
        flow = Flow.from_dict(flow_payload(id="z1", successRate=92.5))
        assert flow.id == "z1"
        assert flow.tool == "zapier"
        assert flow.trigger.type == "webhook"
        assert flow.success_rate == 92.5
        assert flow.monthly_executions == 200
        assert flow.cost.per_execution == 0.1
        assert flow.performance.avg_response_time == 1.2
        assert flow.last_run == datetime(2024, 5, 31, 12, 0, tzinfo=timezone.utc)

    def test_action_ids_default_to_position(self):
        flow = Flow.from_dict({
            "id": "f",
            "actions": [{"type": "send_email"}, {"type": "tag_contact"}],
        })
        assert [a.id for a in flow.actions] == ["0", "1"]
        assert [a.type for a in flow.actions] == ["send_email", "tag_contact"]

    def test_missing_fields_use_defaults(self):
        flow = Flow.from_dict({"id": "bare"})
        assert flow.name == ""
        assert flow.trigger.type == "manual"
        assert flow.actions == ()
        assert flow.status == "active"
        assert flow.last_run is None
        assert flow.frequency == "daily"

    def test_nested_records(self, flow_payload):
        flow = Flow.from_dict(flow_payload())
        assert flow.cost.monthly == 10.0
        assert flow.trigger.config == {}
        assert flow.performance.warning_count == 0
        assert flow.ref() == {"id": "flow-1", "name": "Sync new leads to CRM"}

    def test_frozen(self, flow_payload):
        flow = Flow.from_dict(flow_payload())
        with pytest.raises(dataclasses.FrozenInstanceError):
            flow.name = "changed"


# ─── Database rows ───

@pytest.mark.unit
class TestFlowFromDatabaseRow:
    def test_reads_flat_snake_case(self):
        row = {
            "id": "row-1",
            "name": "Lemlist reply sync",
            "description": "Pushes replies to HubSpot",
            "tool": "lemlist",
            "department": "marketing",
            "trigger_type": "event",
            "trigger_config": {"event": "reply"},
            "actions": [{"id": "a", "type": "update_deal"}],
            "status": "error",
            "success_rate": 70,
            "avg_execution_time": 3.5,
            "monthly_executions": 40,
            "total_executions": 400,
            "monthly_cost": 12,
            "cost_per_execution": 0.3,
            "error_count": 7,
            "warning_count": 2,
            "last_run": "2024-05-01T08:30:00Z",
            "frequency": "hourly",
            "duplicate_of": None,
            "owner_id": "u-9",
            "business_value": "high",
        }
        flow = Flow.from_dict(row)
        assert flow.summary == "Pushes replies to HubSpot"
        assert flow.trigger.type == "event"
        assert flow.trigger.config == {"event": "reply"}
        assert flow.cost.monthly == 12.0
        assert flow.cost.per_execution == 0.3
        assert flow.performance.error_count == 7
        assert flow.performance.warning_count == 2
        assert flow.owner == "u-9"
        assert flow.business_value == "high"
        assert flow.last_run == datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)

    def test_null_numbers_become_zero(self):
        flow = Flow.from_dict({"id": "n", "success_rate": None, "monthly_cost": None})
        assert flow.success_rate == 0.0
        assert flow.cost.monthly == 0.0


@pytest.mark.unit
class TestExecutionLog:
    def test_both_shapes(self):
        camel = ExecutionLog.from_dict({
            "id": "1", "flowId": "f", "status": "failure",
            "errorMessage": "timeout", "dataProcessed": 3,
        })
        snake = ExecutionLog.from_dict({
            "id": "1", "flow_id": "f", "status": "failure",
            "error_message": "timeout", "data_processed": 3,
        })
        assert camel == snake
        assert camel.error_message == "timeout"

    def test_timestamps(self):
        log = ExecutionLog.from_dict({
            "id": "1", "flowId": "f", "status": "success",
            "startTime": "2024-05-01T00:00:00Z",
        })
        assert log.flow_id == "f"
        assert log.start_time == datetime(2024, 5, 1, tzinfo=timezone.utc)
        assert log.end_time is None


@pytest.mark.unit
class TestParseTimestamp:
    def test_empty_values(self):
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None

    def test_naive_is_utc(self):
        assert parse_timestamp("2024-01-01T00:00:00").tzinfo == timezone.utc

    def test_offset_is_converted(self):
        parsed = parse_timestamp("2024-01-01T02:00:00+02:00")
        assert parsed == datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc)

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_timestamp("yesterday")
