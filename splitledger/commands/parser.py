"""
Command Parser

Turns one line of text into exactly one Command variant.

Lines are split on whitespace; empty tokens never reach the grammar.
Arity and amounts are checked here, before any handler runs, so a
rejected line never mutates the ledger.
"""

from typing import Callable

from splitledger.errors import MalformedCommandError, UnknownCommandError
from splitledger.models.command import (
    AddCommand,
    Command,
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
from splitledger.models.ledger import ALL_FLAG, ALL_TOKEN, parse_amount


USAGE = """usage:
  add NAME...
  pay PARTICIPANT TASK AMOUNT
  part TASK|all PARTICIPANT...|all
  payment PAYER PAYEE AMOUNT
  rename OLD NEW
  remove NAME
  remove PARTICIPANT TASK
  print [-a | -t | NAME...]
  save [PATH]
  load PATH
  help"""

TASKS_FLAG = "-t"


def tokenize(line: str) -> list[str]:
    return line.split()


def _arity(verb: str, args: list[str], minimum: int, maximum: int = -1) -> None:
    if len(args) < minimum:
        raise MalformedCommandError(f"{verb}: not enough arguments")
    if maximum >= 0 and len(args) > maximum:
        raise MalformedCommandError(f"{verb}: too many arguments")


class CommandParser:
    """Parses command lines into pre-validated Command variants."""

    def __init__(self):
        self._grammar: dict[str, Callable[[list[str]], Command]] = {
            "add": self._parse_add,
            "pay": self._parse_pay,
            "part": self._parse_part,
            "payment": self._parse_payment,
            "rename": self._parse_rename,
            "remove": self._parse_remove,
            "print": self._parse_print,
            "save": self._parse_save,
            "load": self._parse_load,
            "help": self._parse_help,
        }

    @property
    def verbs(self) -> list[str]:
        return list(self._grammar)

    def parse(self, line: str) -> Command:
        """
        Parse a command line.

        Raises:
            MalformedCommandError: Empty line, or wrong number of arguments
            UnknownCommandError: First token is not a verb
            InvalidAmountError: An amount is not a non-negative decimal
        """
        tokens = tokenize(line)
        if not tokens:
            raise MalformedCommandError("command formatted incorrectly")

        verb, args = tokens[0], tokens[1:]
        handler = self._grammar.get(verb)
        if handler is None:
            raise UnknownCommandError(verb)
        return handler(args)

    # =========================================================================
    # VERBS
    # =========================================================================

    def _parse_add(self, args: list[str]) -> AddCommand:
        _arity("add", args, 1)
        return AddCommand(names=args)

    def _parse_pay(self, args: list[str]) -> PayCommand:
        _arity("pay", args, 3, 3)
        payer, task, amount = args
        return PayCommand(payer=payer, task=task, amount=parse_amount(amount))

    def _parse_part(self, args: list[str]) -> PartCommand:
        _arity("part", args, 2)
        task, names = args[0], args[1:]
        return PartCommand(
            task=None if task == ALL_TOKEN else task,
            participants=None if ALL_TOKEN in names else names,
        )

    def _parse_payment(self, args: list[str]) -> PaymentCommand:
        _arity("payment", args, 3, 3)
        payer, payee, amount = args
        return PaymentCommand(payer=payer, payee=payee, amount=parse_amount(amount))

    def _parse_rename(self, args: list[str]) -> RenameCommand:
        _arity("rename", args, 2, 2)
        return RenameCommand(old_name=args[0], new_name=args[1])

    def _parse_remove(self, args: list[str]) -> RemoveCommand:
        _arity("remove", args, 1, 2)
        return RemoveCommand(name=args[0], task=args[1] if len(args) == 2 else None)

    def _parse_print(self, args: list[str]) -> PrintCommand:
        if not args:
            return PrintCommand(mode=PrintMode.SUMMARY)
        if args[0] in (ALL_FLAG, ALL_TOKEN, TASKS_FLAG):
            _arity("print", args, 1, 1)
            mode = PrintMode.TASKS if args[0] == TASKS_FLAG else PrintMode.ALL_DETAIL
            return PrintCommand(mode=mode)
        return PrintCommand(mode=PrintMode.NAMED, names=args)

    def _parse_save(self, args: list[str]) -> SaveCommand:
        _arity("save", args, 0, 1)
        return SaveCommand(path=args[0] if args else None)

    def _parse_load(self, args: list[str]) -> LoadCommand:
        _arity("load", args, 1, 1)
        return LoadCommand(path=args[0])

    def _parse_help(self, args: list[str]) -> HelpCommand:
        _arity("help", args, 0, 0)
        return HelpCommand()
