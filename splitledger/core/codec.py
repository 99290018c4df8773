"""
Snapshot Codec

Converts a live EntityStore to and from the flat LedgerSnapshot
transport form, and that form to and from JSON text.

Decoding never touches an existing store: it builds a brand-new one and
hands it back only after every invariant has been checked. Callers swap
it in on success and keep their old store on any CorruptSnapshotError.
"""

from pydantic import ValidationError

from splitledger.core.store import EntityStore
from splitledger.errors import CorruptSnapshotError
from splitledger.models.ledger import (
    AssociationPolicy,
    Participant,
    Task,
    in_range,
    is_reserved,
)
from splitledger.models.snapshot import (
    LedgerSnapshot,
    ParticipantRecord,
    TaskRecord,
)


class SnapshotCodec:
    """
    Encoder/decoder between EntityStore and LedgerSnapshot.

    Name lists are sorted on the way out so that saving the same ledger
    twice yields the same document.
    """

    def __init__(
        self,
        indent: int = 2,
        association_policy: AssociationPolicy = AssociationPolicy.IGNORE,
    ):
        self._indent = indent
        self._association_policy = association_policy

    # =========================================================================
    # ENCODING
    # =========================================================================

    def to_snapshot(self, store: EntityStore) -> LedgerSnapshot:
        tasks = {
            name: TaskRecord(
                owner=task.owner,
                participants=sorted(task.participants),
                cost=task.cost,
            )
            for name, task in store.tasks.items()
        }
        participants = {
            name: ParticipantRecord(
                tasks=sorted(participant.tasks),
                paid_tasks=sorted(participant.paid_tasks),
                payments=list(participant.payments),
            )
            for name, participant in store.participants.items()
        }
        return LedgerSnapshot(tasks=tasks, participants=participants)

    def dumps(self, store: EntityStore) -> str:
        """Serialize store as a JSON snapshot document."""
        snapshot = self.to_snapshot(store)
        return snapshot.model_dump_json(
            by_alias=True,
            indent=self._indent or None,
        )

    # =========================================================================
    # DECODING
    # =========================================================================

    def loads(self, document: str) -> EntityStore:
        """Parse and validate a JSON snapshot document into a new store."""
        try:
            snapshot = LedgerSnapshot.model_validate_json(document)
        except ValidationError as e:
            problems = [
                f"{'.'.join(str(part) for part in err['loc']) or '<document>'}: {err['msg']}"
                for err in e.errors()
            ]
            raise CorruptSnapshotError(problems) from e
        return self.from_snapshot(snapshot)

    def from_snapshot(self, snapshot: LedgerSnapshot) -> EntityStore:
        """Rebuild a live store from a snapshot, checking every invariant first."""
        problems = self.find_problems(snapshot)
        if problems:
            raise CorruptSnapshotError(problems)

        store = EntityStore(association_policy=self._association_policy)
        for name, record in snapshot.participants.items():
            store.participants[name] = Participant(
                name=name,
                tasks=set(record.tasks),
                paid_tasks=set(record.paid_tasks),
                payments=list(record.payments),
            )
        for name, record in snapshot.tasks.items():
            store.tasks[name] = Task(
                name=name,
                owner=record.owner,
                participants=set(record.participants),
                cost=record.cost,
            )
        return store

    def find_problems(self, snapshot: LedgerSnapshot) -> list[str]:
        """
        Every relational invariant the snapshot breaks, as messages.

        An empty list means the snapshot describes a consistent ledger.
        """
        problems = []
        tasks = snapshot.tasks
        participants = snapshot.participants

        for name in list(tasks) + list(participants):
            if not name:
                problems.append("empty name")
            elif is_reserved(name):
                problems.append(f"{name!r} is a reserved word")

        for name in sorted(set(tasks) & set(participants)):
            problems.append(f"{name!r} is both a task and a participant")

        for task_name, task in tasks.items():
            if not in_range(task.cost):
                problems.append(f"task {task_name!r}: cost {task.cost} is out of range")
            if task.owner not in participants:
                problems.append(f"task {task_name!r}: owner {task.owner!r} does not exist")
                continue
            if task.owner not in task.participants:
                problems.append(f"task {task_name!r}: owner {task.owner!r} is not a participant")
            if task_name not in participants[task.owner].paid_tasks:
                problems.append(
                    f"task {task_name!r}: owner {task.owner!r} does not list it as paid"
                )
            if len(set(task.participants)) != len(task.participants):
                problems.append(f"task {task_name!r}: duplicate participants")
            for member in task.participants:
                if member not in participants:
                    problems.append(f"task {task_name!r}: participant {member!r} does not exist")
                elif task_name not in participants[member].tasks:
                    problems.append(
                        f"task {task_name!r}: participant {member!r} does not list it"
                    )

        for name, record in participants.items():
            for amount in record.payments:
                if not in_range(amount):
                    problems.append(f"participant {name!r}: payment {amount} is out of range")
            for task_name in record.tasks:
                if task_name not in tasks:
                    problems.append(f"participant {name!r}: task {task_name!r} does not exist")
                elif name not in tasks[task_name].participants:
                    problems.append(
                        f"participant {name!r}: not a participant of {task_name!r}"
                    )
            for task_name in record.paid_tasks:
                if task_name not in tasks:
                    problems.append(
                        f"participant {name!r}: paid task {task_name!r} does not exist"
                    )
                elif tasks[task_name].owner != name:
                    problems.append(
                        f"participant {name!r}: paid task {task_name!r} is owned by "
                        f"{tasks[task_name].owner!r}"
                    )

        return problems
