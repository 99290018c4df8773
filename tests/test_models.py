"""
Tests for splitledger models

Test strategy:
1. Unit tests for models and amount helpers
2. Component tests for store, calculator, codec, parser and reporter
3. Session-level tests that drive the ledger through command lines
"""

import pytest
from decimal import Decimal
from uuid import uuid4

from splitledger.errors import InvalidAmountError
from splitledger.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)
from splitledger.models.command import PrintCommand, PrintMode
from splitledger.models.ledger import (
    MAX_AMOUNT,
    MAX_MINOR,
    Participant,
    Task,
    format_amount,
    in_range,
    is_reserved,
    parse_amount,
    to_major,
)
from splitledger.models.snapshot import LedgerSnapshot, ParticipantRecord, TaskRecord


class TestAmounts:
    """Tests for amount parsing and formatting."""

    @pytest.mark.parametrize("text,expected", [
        ("30.00", 3000),
        ("30", 3000),
        ("0", 0),
        ("12.345", 1235),
        ("0.005", 1),
        ("0.004", 0),
        ("  7.5 ", 750),
    ])
    def test_parse_amount(self, text, expected):
        """Test decimal text becomes integer minor units."""
        assert parse_amount(text) == expected

    @pytest.mark.parametrize("text", ["abc", "", "1,50", "nan", "inf", "-Infinity"])
    def test_parse_amount_rejects_non_numbers(self, text):
        """Test non-numeric and non-finite text is rejected."""
        with pytest.raises(InvalidAmountError):
            parse_amount(text)

    def test_parse_amount_rejects_negative(self):
        """Test negative amounts are rejected."""
        with pytest.raises(InvalidAmountError, match="negative"):
            parse_amount("-1.00")

    @pytest.mark.parametrize("text", ["1e30", "10000000000000.01", "1e999999999"])
    def test_parse_amount_rejects_oversized(self, text):
        """Test amounts beyond the largest supported value are rejected."""
        with pytest.raises(InvalidAmountError, match="exceed"):
            parse_amount(text)

    def test_parse_amount_accepts_maximum(self):
        assert parse_amount(str(MAX_AMOUNT)) == MAX_MINOR

    def test_in_range(self):
        assert in_range(MAX_MINOR)
        assert in_range(-MAX_MINOR)
        assert not in_range(MAX_MINOR + 1)

    def test_to_major(self):
        """Test minor units become two-place decimals."""
        assert to_major(1234) == Decimal("12.34")
        assert to_major(-1500) == Decimal("-15.00")
        assert to_major(0) == Decimal("0.00")

    def test_format_amount(self):
        """Test money renders with two decimals."""
        assert format_amount(Decimal("-15")) == "-15.00"
        assert format_amount(Decimal("3.5")) == "3.50"

    def test_reserved_names(self):
        """Test the command-line tokens are reserved."""
        assert is_reserved("all")
        assert is_reserved("-a")
        assert not is_reserved("Alice")


class TestEntityModels:
    """Tests for Participant and Task."""

    def test_participant_defaults(self):
        """Test a new participant has no tasks, payments or balance."""
        participant = Participant(name="Alice")
        assert participant.tasks == set()
        assert participant.paid_tasks == set()
        assert participant.payments == []
        assert participant.cached_balance is None

    def test_participant_invalidate(self):
        """Test invalidation clears the cached balance."""
        participant = Participant(name="Alice", cached_balance=Decimal("1.00"))
        participant.invalidate()
        assert participant.cached_balance is None

    def test_task_rejects_negative_cost(self):
        """Test that negative costs are rejected."""
        with pytest.raises(ValueError):
            Task(name="Dinner", owner="Alice", participants={"Alice"}, cost=-1)

    def test_task_rejects_oversized_cost(self):
        with pytest.raises(ValueError):
            Task(name="Dinner", owner="Alice", participants={"Alice"}, cost=MAX_MINOR + 1)

    def test_participant_rejects_empty_name(self):
        with pytest.raises(ValueError):
            Participant(name="")


class TestSnapshotModels:
    """Tests for the snapshot transport form."""

    def test_participant_record_uses_document_aliases(self):
        """Test field names in the document match the snapshot format."""
        record = ParticipantRecord(tasks=["Dinner"], paid_tasks=["Dinner"], payments=[500])
        dumped = record.model_dump(by_alias=True)
        assert dumped == {
            "tasks": ["Dinner"],
            "paidTasks": ["Dinner"],
            "paymentsMade": [500],
        }

    def test_participant_record_accepts_aliases(self):
        record = ParticipantRecord.model_validate({"paidTasks": ["X"], "paymentsMade": [-5]})
        assert record.paid_tasks == ["X"]
        assert record.payments == [-5]

    def test_task_record_rejects_unknown_fields(self):
        """Test extra keys are not silently dropped."""
        with pytest.raises(ValueError):
            TaskRecord.model_validate(
                {"owner": "Alice", "participants": ["Alice"], "cost": 1, "note": "x"}
            )

    def test_snapshot_rejects_unknown_sections(self):
        with pytest.raises(ValueError):
            LedgerSnapshot.model_validate({"tasks": {}, "participants": {}, "notes": []})


class TestCommandModels:
    def test_print_defaults_to_summary(self):
        command = PrintCommand()
        assert command.mode == PrintMode.SUMMARY
        assert command.names == []


class TestActivityModels:
    """Tests for activity event models."""

    def test_activity_event_creation(self):
        """Test ActivityEvent model creation."""
        event = ActivityEvent(
            event_type=ActivityEventType.COMMAND_APPLIED,
            description="Command applied: add",
        )
        assert event.severity == ActivitySeverity.INFO
        assert event.correlation_id is None

    def test_activity_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        correlation_id = uuid4()
        event = ActivityEventBuilder.command_applied("pay", 3, correlation_id)
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "command_applied"
        assert log_dict["correlation_id"] == str(correlation_id)
        assert log_dict["details"] == {"verb": "pay", "argument_count": 3}

    def test_command_rejected_is_warning(self):
        event = ActivityEventBuilder.command_rejected(
            verb=None,
            error_type="malformed_command",
            error_message="command formatted incorrectly",
            correlation_id=uuid4(),
        )
        assert event.severity == ActivitySeverity.WARNING
        assert event.description == "Command rejected: <empty>"
        assert event.error_type == "malformed_command"

    def test_snapshot_saved_to_console(self):
        """Test a save without a path is described as going to the console."""
        event = ActivityEventBuilder.snapshot_saved(None, 2, 1, uuid4())
        assert event.details["location"] == "console"
        assert event.details["participants"] == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
