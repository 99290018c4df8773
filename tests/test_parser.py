"""Tests for the CommandParser."""

import pytest

from splitledger.commands import USAGE, CommandParser
from splitledger.errors import (
    InvalidAmountError,
    MalformedCommandError,
    UnknownCommandError,
)
from splitledger.models.command import (
    AddCommand,
    HelpCommand,
    LoadCommand,
    PartCommand,
    PayCommand,
    PaymentCommand,
    PrintCommand,
    PrintMode,
    RemoveCommand,
    RenameCommand,
    SaveCommand,
)
from splitledger.models.ledger import MAX_MINOR


@pytest.fixture
def parser():
    return CommandParser()


class TestVerbs:
    """Tests for each verb's grammar."""

    def test_add(self, parser):
        assert parser.parse("add Alice Bob") == AddCommand(names=["Alice", "Bob"])

    def test_pay(self, parser):
        """Test the amount is converted to minor units."""
        command = parser.parse("pay Alice Dinner 30.00")
        assert command == PayCommand(payer="Alice", task="Dinner", amount=3000)

    def test_part(self, parser):
        command = parser.parse("part Dinner Bob Carol")
        assert command == PartCommand(task="Dinner", participants=["Bob", "Carol"])

    def test_part_all_tasks(self, parser):
        command = parser.parse("part all Bob")
        assert command.task is None
        assert command.participants == ["Bob"]

    def test_part_all_participants(self, parser):
        """Test `all` anywhere in the names means every participant."""
        command = parser.parse("part Dinner Bob all")
        assert command.task == "Dinner"
        assert command.participants is None

    def test_payment(self, parser):
        command = parser.parse("payment Bob Alice 15")
        assert command == PaymentCommand(payer="Bob", payee="Alice", amount=1500)

    def test_rename(self, parser):
        assert parser.parse("rename Bob Robert") == RenameCommand(
            old_name="Bob", new_name="Robert"
        )

    def test_remove(self, parser):
        assert parser.parse("remove Dinner") == RemoveCommand(name="Dinner")

    def test_remove_from_task(self, parser):
        assert parser.parse("remove Bob Dinner") == RemoveCommand(name="Bob", task="Dinner")

    def test_save(self, parser):
        assert parser.parse("save") == SaveCommand()
        assert parser.parse("save ledger.json") == SaveCommand(path="ledger.json")

    def test_load(self, parser):
        assert parser.parse("load ledger.json") == LoadCommand(path="ledger.json")

    def test_help(self, parser):
        assert parser.parse("help") == HelpCommand()

    def test_extra_whitespace_is_ignored(self, parser):
        assert parser.parse("  add   Alice\tBob  ") == AddCommand(names=["Alice", "Bob"])

    def test_verbs(self, parser):
        assert set(parser.verbs) == {
            "add", "pay", "part", "payment", "rename",
            "remove", "print", "save", "load", "help",
        }

    def test_usage_mentions_every_verb(self, parser):
        for verb in parser.verbs:
            assert verb in USAGE


class TestPrintModes:
    """Tests for the print variants."""

    @pytest.mark.parametrize("line,mode", [
        ("print", PrintMode.SUMMARY),
        ("print -a", PrintMode.ALL_DETAIL),
        ("print all", PrintMode.ALL_DETAIL),
        ("print -t", PrintMode.TASKS),
    ])
    def test_modes(self, parser, line, mode):
        assert parser.parse(line).mode == mode

    def test_named(self, parser):
        command = parser.parse("print Alice Dinner")
        assert command == PrintCommand(mode=PrintMode.NAMED, names=["Alice", "Dinner"])

    @pytest.mark.parametrize("line", ["print -a Alice", "print -t Dinner", "print all Bob"])
    def test_flags_stand_alone(self, parser, line):
        with pytest.raises(MalformedCommandError):
            parser.parse(line)


class TestRejections:
    """Tests for lines that never reach a handler."""

    @pytest.mark.parametrize("line", ["", "   ", "\t"])
    def test_empty_line(self, parser, line):
        with pytest.raises(MalformedCommandError, match="command formatted incorrectly"):
            parser.parse(line)

    def test_unknown_verb(self, parser):
        with pytest.raises(UnknownCommandError) as excinfo:
            parser.parse("frobnicate Alice")
        assert excinfo.value.verb == "frobnicate"

    def test_verbs_are_case_sensitive(self, parser):
        with pytest.raises(UnknownCommandError):
            parser.parse("ADD Alice")

    @pytest.mark.parametrize("line", [
        "add",
        "pay Alice Dinner",
        "pay Alice Dinner 30 extra",
        "part Dinner",
        "payment Bob Alice",
        "rename Bob",
        "rename Bob Robert Rob",
        "remove",
        "remove Bob Dinner Lunch",
        "save a.json b.json",
        "load",
        "load a.json b.json",
        "help me",
    ])
    def test_wrong_arity(self, parser, line):
        """Test missing and surplus arguments are malformed."""
        with pytest.raises(MalformedCommandError):
            parser.parse(line)

    @pytest.mark.parametrize("line", [
        "pay Alice Dinner abc",
        "pay Alice Dinner -5",
        "payment Bob Alice nan",
        "payment Bob Alice 1,50",
        "pay Alice Dinner 1e30",
        "payment Bob Alice 1e40",
        "pay Alice Dinner 10000000000000.01",
        "pay Alice Dinner 1e999999999",
    ])
    def test_invalid_amount(self, parser, line):
        with pytest.raises(InvalidAmountError):
            parser.parse(line)

    def test_largest_amount_is_accepted(self, parser):
        command = parser.parse("pay Alice Dinner 10000000000000")
        assert command.amount == MAX_MINOR


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
