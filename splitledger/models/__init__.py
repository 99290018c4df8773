"""
Data Models Package

This package contains all Pydantic models used by the ledger:
entities, the snapshot transport form, command variants, report rows
and activity events.
"""

from splitledger.models.ledger import (
    ALL_FLAG,
    ALL_TOKEN,
    RESERVED_NAMES,
    AssociationPolicy,
    Participant,
    Task,
    format_amount,
    is_reserved,
    parse_amount,
    round_minor,
    to_major,
)
from splitledger.models.snapshot import (
    LedgerSnapshot,
    ParticipantRecord,
    TaskRecord,
)
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
from splitledger.models.report import (
    BalanceLine,
    PaidTaskLine,
    ParticipantReport,
    TaskReport,
    TaskShare,
)
from splitledger.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)

__all__ = [
    # Ledger models
    "ALL_FLAG",
    "ALL_TOKEN",
    "RESERVED_NAMES",
    "AssociationPolicy",
    "Participant",
    "Task",
    "format_amount",
    "is_reserved",
    "parse_amount",
    "round_minor",
    "to_major",
    # Snapshot models
    "LedgerSnapshot",
    "ParticipantRecord",
    "TaskRecord",
    # Command models
    "AddCommand",
    "Command",
    "HelpCommand",
    "LoadCommand",
    "PartCommand",
    "PayCommand",
    "PaymentCommand",
    "PrintCommand",
    "PrintMode",
    "RemoveCommand",
    "RenameCommand",
    "SaveCommand",
    # Report models
    "BalanceLine",
    "PaidTaskLine",
    "ParticipantReport",
    "TaskReport",
    "TaskShare",
    # Activity models
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
]
