"""
Ledger Error Taxonomy

Every failure the ledger can report is a LedgerError subclass.
The core raises them; the session catches them at its seam and turns
them into text for the front end. None of them are fatal.
"""

from typing import Optional, Sequence


class LedgerError(Exception):
    """Base exception for all recoverable ledger failures."""

    error_type = "ledger_error"


class MalformedCommandError(LedgerError):
    """Missing, empty or surplus command arguments."""

    error_type = "malformed_command"


class UnknownCommandError(LedgerError):
    """The first token is not a known verb."""

    error_type = "unknown_command"

    def __init__(self, verb: str):
        self.verb = verb
        super().__init__(f"Unknown command: {verb}")


class NameConflictError(LedgerError):
    """Name already in use, or a reserved token."""

    error_type = "name_conflict"

    def __init__(self, name: str, message: Optional[str] = None):
        self.name = name
        super().__init__(message or f"Name {name!r} is already in use")


class NotFoundError(LedgerError):
    """Name denotes neither a participant nor a task."""

    error_type = "not_found"

    def __init__(self, name: str, message: Optional[str] = None):
        self.name = name
        super().__init__(message or f"Nothing named {name!r} exists")


class UnknownParticipantError(NotFoundError):
    error_type = "unknown_participant"

    def __init__(self, name: str):
        super().__init__(name, f"Participant {name!r} has not been added")


class UnknownTaskError(NotFoundError):
    error_type = "unknown_task"

    def __init__(self, name: str):
        super().__init__(name, f"Task {name!r} has not been added")


class InvalidAmountError(LedgerError):
    """Non-numeric, non-finite or negative amount."""

    error_type = "invalid_amount"

    def __init__(self, text: str, message: Optional[str] = None):
        self.text = text
        super().__init__(
            message or f"Must input a valid non-negative decimal number, got {text!r}"
        )


class OwnerDetachError(LedgerError):
    """The owner of a task cannot stop participating in it."""

    error_type = "owner_detach"

    def __init__(self, participant: str, task: str):
        self.participant = participant
        self.task = task
        super().__init__(
            f"{participant!r} paid for {task!r} and cannot be detached from it"
        )


class AlreadyAssociatedError(LedgerError):
    """Owner association rejected under the 'reject' association policy."""

    error_type = "already_associated"

    def __init__(self, participant: str, task: str):
        self.participant = participant
        self.task = task
        super().__init__(f"{participant!r} already paid for {task!r}")


class CorruptSnapshotError(LedgerError):
    """Snapshot document is malformed or breaks a ledger invariant."""

    error_type = "corrupt_snapshot"

    def __init__(self, problems: Sequence[str]):
        self.problems = list(problems)
        super().__init__("Corrupt snapshot:\n" + "\n".join(self.problems))


class IOFailureError(LedgerError):
    """Could not open, create, read or write a snapshot file."""

    error_type = "io_failure"

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"Could not access {location}: {reason}")


class BatchError(LedgerError):
    """
    Aggregate of the failures of a bulk command.

    The successful items of the batch have already been applied.
    """

    error_type = "batch_error"

    def __init__(self, errors: Sequence[LedgerError], output: str = ""):
        self.errors = list(errors)
        # Text the command produced for the items that succeeded
        self.output = output
        super().__init__("\n".join(str(e) for e in self.errors))

    @classmethod
    def raise_if_any(cls, errors: Sequence[LedgerError]) -> None:
        """Raise the single error as-is, several as a BatchError, none not at all."""
        if len(errors) == 1:
            raise errors[0]
        if errors:
            raise cls(errors)
