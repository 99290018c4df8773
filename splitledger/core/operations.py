"""
Ledger Operations

One handler per command variant. Handlers either return the text the
front end should show (possibly empty) or raise a LedgerError.

Bulk verbs (`add`, `part`, `print NAME...`) apply every valid item and
then raise a single BatchError describing the invalid ones. Items that
were applied stay applied.
"""

from typing import Optional

from splitledger.commands.parser import USAGE
from splitledger.core.codec import SnapshotCodec
from splitledger.core.store import EntityStore
from splitledger.errors import BatchError, LedgerError, UnknownTaskError
from splitledger.models.command import (
    AddCommand,
    Command,
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
from splitledger.queries.report import LedgerReporter
from splitledger.services.storage import SnapshotStorageInterface


class LedgerOperations:
    """
    Applies commands to an EntityStore.

    The store is replaced wholesale by a successful `load`; read it
    through the `store` property rather than holding on to it.
    """

    def __init__(
        self,
        store: EntityStore,
        storage: SnapshotStorageInterface,
        codec: Optional[SnapshotCodec] = None,
    ):
        self._store = store
        self._storage = storage
        self._codec = codec or SnapshotCodec(
            association_policy=store.association_policy,
        )

    @property
    def store(self) -> EntityStore:
        return self._store

    @property
    def reporter(self) -> LedgerReporter:
        return LedgerReporter(self._store)

    def execute(self, command: Command) -> str:
        """Apply one command and return its console output."""
        verb = command.verb
        if verb == "add":
            return self._add(command)
        elif verb == "pay":
            return self._pay(command)
        elif verb == "part":
            return self._part(command)
        elif verb == "payment":
            return self._payment(command)
        elif verb == "rename":
            return self._rename(command)
        elif verb == "remove":
            return self._remove(command)
        elif verb == "print":
            return self._print(command)
        elif verb == "save":
            return self._save(command)
        elif verb == "load":
            return self._load(command)
        else:
            return USAGE

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def _add(self, command: AddCommand) -> str:
        errors: list[LedgerError] = []
        for name in command.names:
            try:
                self._store.add_participant(name)
            except LedgerError as e:
                errors.append(e)
        BatchError.raise_if_any(errors)
        return ""

    def _pay(self, command: PayCommand) -> str:
        self._store.ensure_task(command.task, command.payer, command.amount)
        return ""

    def _part(self, command: PartCommand) -> str:
        store = self._store
        task_names = list(store.tasks) if command.task is None else [command.task]
        errors: list[LedgerError] = []

        for task_name in task_names:
            if command.participants is None:
                # `all` never means the owner, whatever the association policy
                owner = store.tasks[task_name].owner if store.is_task(task_name) else None
                names = [name for name in store.participants if name != owner]
            else:
                names = command.participants
            try:
                errors.extend(store.associate(task_name, names))
            except UnknownTaskError as e:
                errors.append(e)

        BatchError.raise_if_any(errors)
        return ""

    def _payment(self, command: PaymentCommand) -> str:
        self._store.record_transfer(command.payer, command.payee, command.amount)
        return ""

    def _rename(self, command: RenameCommand) -> str:
        self._store.rename(command.old_name, command.new_name)
        return ""

    def _remove(self, command: RemoveCommand) -> str:
        if command.task is not None:
            self._store.detach(command.name, command.task)
        else:
            self._store.remove(command.name)
        return ""

    # =========================================================================
    # QUERIES
    # =========================================================================

    def _print(self, command: PrintCommand) -> str:
        reporter = self.reporter
        if command.mode == PrintMode.ALL_DETAIL:
            return reporter.render_all_participants()
        if command.mode == PrintMode.TASKS:
            return reporter.render_all_tasks()
        if command.mode == PrintMode.NAMED:
            text, errors = reporter.render_named(command.names)
            if errors:
                raise BatchError(errors, output=text)
            return text
        return reporter.render_summary()

    # =========================================================================
    # SNAPSHOTS
    # =========================================================================

    def _save(self, command: SaveCommand) -> str:
        document = self._codec.dumps(self._store)
        if command.path is None:
            return document
        self._storage.write_document(command.path, document)
        return f"Saved ledger to {command.path}"

    def _load(self, command: LoadCommand) -> str:
        document = self._storage.read_document(command.path)
        # Decoded into a fresh store; the current one is only replaced on success
        self._store = self._codec.loads(document)
        return f"Loaded ledger from {command.path}"
