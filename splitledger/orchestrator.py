"""
Ledger Session

Ties the parser, the ledger operations and the activity logger into
the one entry point front ends talk to: execute(line).

The session enforces the command boundary:
- one command is fully applied or rejected before the next starts
  (a single lock guards the store, for front ends that call in from
  several threads)
- every LedgerError comes back as a CommandOutcome, never as an
  exception
- every command is logged with its own correlation ID
"""

import threading
from typing import Optional

from pydantic import BaseModel

from splitledger.activity import ActivityLogger, create_correlation_id
from splitledger.commands import CommandParser, tokenize
from splitledger.config import LedgerSettings, get_settings
from splitledger.core.codec import SnapshotCodec
from splitledger.core.operations import LedgerOperations
from splitledger.core.store import EntityStore
from splitledger.errors import BatchError, LedgerError
from splitledger.models.command import Command
from splitledger.queries import LedgerReporter
from splitledger.services.storage import (
    FileSnapshotStorage,
    SnapshotStorageInterface,
)


class CommandOutcome(BaseModel):
    """What a front end needs to show for one command."""

    success: bool
    output: str = ""
    error_type: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def text(self) -> str:
        """Output followed by the error message, whichever are present."""
        return "\n".join(part for part in (self.output, self.error_message) if part)


class LedgerSession:
    """
    A ledger plus everything needed to drive it from command lines.

    Flow per line:
    1. Parse -> Command (MalformedCommand / UnknownCommand / InvalidAmount
       stop here, nothing is mutated)
    2. Execute -> output text, or a LedgerError
    3. Log the outcome
    """

    def __init__(
        self,
        operations: LedgerOperations,
        parser: Optional[CommandParser] = None,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._operations = operations
        self._parser = parser or CommandParser()
        self._activity_logger = activity_logger or ActivityLogger()
        self._lock = threading.Lock()

    @property
    def store(self) -> EntityStore:
        return self._operations.store

    @property
    def reporter(self) -> LedgerReporter:
        return self._operations.reporter

    def execute(self, line: str) -> CommandOutcome:
        """Run one command line and report what happened."""
        correlation_id = create_correlation_id()
        tokens = tokenize(line)
        verb = tokens[0] if tokens else None

        with self._lock:
            try:
                command = self._parser.parse(line)
            except LedgerError as e:
                return self._rejected(verb, e, correlation_id)
            return self._apply(command, len(tokens) - 1, correlation_id)

    def execute_command(self, command: Command) -> CommandOutcome:
        """
        Run an already-built command, bypassing the parser.

        Used where the arguments did not come from a typed line, such as
        a snapshot path given on the command line that contains spaces.
        """
        correlation_id = create_correlation_id()
        argument_count = sum(
            1 for field, value in command if field != "verb" and value is not None
        )
        with self._lock:
            return self._apply(command, argument_count, correlation_id)

    def _apply(self, command: Command, argument_count: int, correlation_id) -> CommandOutcome:
        try:
            output = self._operations.execute(command)
        except LedgerError as e:
            return self._rejected(command.verb, e, correlation_id)
        except Exception as e:
            self._activity_logger.log_error(
                error_type=type(e).__name__,
                error_message=str(e),
                details={"verb": command.verb},
                correlation_id=correlation_id,
            )
            raise

        self._log_applied(command, argument_count, correlation_id)
        return CommandOutcome(success=True, output=output)

    def _rejected(self, verb, error: LedgerError, correlation_id) -> CommandOutcome:
        self._activity_logger.log_command_rejected(
            verb=verb,
            error_type=error.error_type,
            error_message=str(error),
            correlation_id=correlation_id,
        )
        return CommandOutcome(
            success=False,
            # Bulk commands still report what the valid items produced
            output=error.output if isinstance(error, BatchError) else "",
            error_type=error.error_type,
            error_message=str(error),
        )

    def _log_applied(self, command, argument_count: int, correlation_id) -> None:
        self._activity_logger.log_command_applied(
            verb=command.verb,
            argument_count=argument_count,
            correlation_id=correlation_id,
        )
        store = self.store
        if command.verb == "save":
            self._activity_logger.log_snapshot_saved(
                location=command.path,
                participant_count=len(store.participants),
                task_count=len(store.tasks),
                correlation_id=correlation_id,
            )
        elif command.verb == "load":
            self._activity_logger.log_snapshot_loaded(
                location=command.path,
                participant_count=len(store.participants),
                task_count=len(store.tasks),
                correlation_id=correlation_id,
            )

    def run_script(self, lines) -> list[CommandOutcome]:
        """Execute several lines in order, skipping blank ones."""
        return [self.execute(line) for line in lines if line.strip()]


def create_session(
    settings: Optional[LedgerSettings] = None,
    storage: Optional[SnapshotStorageInterface] = None,
    activity_logger: Optional[ActivityLogger] = None,
) -> LedgerSession:
    """
    Factory function to create a ready-to-use session.

    Args:
        settings: Ledger settings; loaded from the environment when None
        storage: Snapshot storage; files on disk when None
        activity_logger: Activity logger; a default one when None

    Returns:
        A session over an empty ledger
    """
    settings = settings or get_settings().ledger
    storage = storage or FileSnapshotStorage(encoding=settings.snapshot_encoding)

    store = EntityStore(association_policy=settings.association_policy)
    codec = SnapshotCodec(
        indent=settings.snapshot_indent,
        association_policy=settings.association_policy,
    )
    operations = LedgerOperations(store=store, storage=storage, codec=codec)

    return LedgerSession(
        operations=operations,
        activity_logger=activity_logger,
    )
