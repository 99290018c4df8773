"""
Command Variants

The closed set of commands the ledger understands. The parser builds
exactly one of these per input line with every positional field
already checked, so handlers never look at raw tokens.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class PrintMode(str, Enum):
    """Which report a print command asks for."""
    SUMMARY = "summary"        # every participant's name and balance
    ALL_DETAIL = "all"         # -a: every participant in full
    TASKS = "tasks"            # -t: every task in full
    NAMED = "named"            # the named participants/tasks in full


class AddCommand(BaseModel):
    verb: Literal["add"] = "add"
    names: list[str] = Field(..., min_length=1)


class PayCommand(BaseModel):
    """payer fronted `amount` minor units for task."""
    verb: Literal["pay"] = "pay"
    payer: str
    task: str
    amount: int = Field(..., ge=0)


class PartCommand(BaseModel):
    """
    Associate participants with a task.

    task=None means every existing task, participants=None means every
    existing participant (the `all` token on the command line).
    """
    verb: Literal["part"] = "part"
    task: Optional[str] = None
    participants: Optional[list[str]] = None


class PaymentCommand(BaseModel):
    """Direct transfer between two participants."""
    verb: Literal["payment"] = "payment"
    payer: str
    payee: str
    amount: int = Field(..., ge=0)


class RenameCommand(BaseModel):
    verb: Literal["rename"] = "rename"
    old_name: str
    new_name: str


class RemoveCommand(BaseModel):
    """Remove an entity, or detach a participant from a task when task is set."""
    verb: Literal["remove"] = "remove"
    name: str
    task: Optional[str] = None


class PrintCommand(BaseModel):
    verb: Literal["print"] = "print"
    mode: PrintMode = PrintMode.SUMMARY
    names: list[str] = Field(default_factory=list)


class SaveCommand(BaseModel):
    """Save to path, or echo the document when path is None."""
    verb: Literal["save"] = "save"
    path: Optional[str] = None


class LoadCommand(BaseModel):
    verb: Literal["load"] = "load"
    path: str


class HelpCommand(BaseModel):
    verb: Literal["help"] = "help"


Command = Annotated[
    Union[
        AddCommand,
        PayCommand,
        PartCommand,
        PaymentCommand,
        RenameCommand,
        RemoveCommand,
        PrintCommand,
        SaveCommand,
        LoadCommand,
        HelpCommand,
    ],
    Field(discriminator="verb"),
]
