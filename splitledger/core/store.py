"""
Entity Store

The authoritative mapping from name -> Participant and name -> Task.

DESIGN DECISION: The participant/task relation lives in two name-keyed
mappings owned by this one store. Records hold names, never each
other, so there is no reference cycle to manage and nothing to untangle
at the save/load boundary.

Every public mutation either completes or raises a LedgerError before
touching anything. Every mutation invalidates every cached balance,
because a change to one task's cost or membership moves the shares of
all its members.
"""

from decimal import Decimal
from typing import Iterable

from splitledger.core.balance import BalanceCalculator
from splitledger.errors import (
    AlreadyAssociatedError,
    InvalidAmountError,
    LedgerError,
    NameConflictError,
    NotFoundError,
    OwnerDetachError,
    UnknownParticipantError,
    UnknownTaskError,
)
from splitledger.models.ledger import (
    MAX_MINOR,
    AssociationPolicy,
    Participant,
    Task,
    in_range,
    is_reserved,
)


class EntityStore:
    """
    In-memory ledger of participants and tasks.

    Iteration order of participants and tasks is insertion order
    (renamed entities keep their position).
    """

    def __init__(
        self,
        association_policy: AssociationPolicy = AssociationPolicy.IGNORE,
    ):
        self.association_policy = association_policy
        self.participants: dict[str, Participant] = {}
        self.tasks: dict[str, Task] = {}
        self._calculator = BalanceCalculator()

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    def __contains__(self, name: str) -> bool:
        return name in self.participants or name in self.tasks

    def get_participant(self, name: str) -> Participant:
        try:
            return self.participants[name]
        except KeyError:
            raise UnknownParticipantError(name) from None

    def get_task(self, name: str) -> Task:
        try:
            return self.tasks[name]
        except KeyError:
            raise UnknownTaskError(name) from None

    def is_participant(self, name: str) -> bool:
        return name in self.participants

    def is_task(self, name: str) -> bool:
        return name in self.tasks

    # =========================================================================
    # PARTICIPANTS
    # =========================================================================

    def _check_new_name(self, name: str) -> None:
        if not name:
            raise NameConflictError(name, "Names cannot be empty")
        if is_reserved(name):
            raise NameConflictError(name, f"{name!r} is a reserved word")
        if name in self.participants:
            raise NameConflictError(name, f"Participant {name!r} was already added")
        if name in self.tasks:
            raise NameConflictError(name, f"{name!r} is already the name of a task")

    def add_participant(self, name: str) -> Participant:
        """Create an empty participant; the name must be entirely unused."""
        self._check_new_name(name)
        participant = Participant(name=name)
        self.participants[name] = participant
        self.invalidate_balances()
        return participant

    def ensure_participant(self, name: str) -> Participant:
        """
        Upsert: return the participant called name, creating it if needed.

        This is the one place participants are auto-created on reference.
        """
        existing = self.participants.get(name)
        if existing is not None:
            return existing
        return self.add_participant(name)

    # =========================================================================
    # TASKS
    # =========================================================================

    def ensure_task(self, name: str, owner: str, cost: int) -> Task:
        """
        Record that owner paid cost for task name.

        Creates the task (and the owner) when absent. For an existing
        task the cost is replaced, and a different owner takes the task
        over from the previous one.
        """
        if cost < 0:
            raise InvalidAmountError(str(cost), "Task cost cannot be negative")
        if not in_range(cost):
            raise InvalidAmountError(
                str(cost), f"Task cost cannot exceed {MAX_MINOR} minor units"
            )
        if not name or is_reserved(name):
            raise NameConflictError(name, f"{name!r} cannot be used as a task name")
        if name in self.participants:
            raise NameConflictError(name, f"{name!r} is already the name of a participant")
        if owner == name or owner in self.tasks or not owner or is_reserved(owner):
            raise NameConflictError(owner, f"{owner!r} cannot be used as a participant name")

        new_owner = self.ensure_participant(owner)
        task = self.tasks.get(name)

        if task is None:
            task = Task(name=name, owner=owner, participants={owner}, cost=cost)
            self.tasks[name] = task
        else:
            task.cost = cost
            if task.owner != owner:
                previous = self.participants[task.owner]
                previous.paid_tasks.discard(name)
                previous.tasks.discard(name)
                task.participants.discard(previous.name)
                task.owner = owner
                task.participants.add(owner)

        new_owner.paid_tasks.add(name)
        new_owner.tasks.add(name)
        self.invalidate_balances()
        return task

    def associate(
        self,
        task_name: str,
        participant_names: Iterable[str],
    ) -> list[LedgerError]:
        """
        Make each named participant share the cost of task_name.

        Unknown participants are created. Names that cannot become
        participants (task names, reserved words) are skipped and
        returned as errors; the rest are still associated.
        """
        task = self.get_task(task_name)
        skipped: list[LedgerError] = []

        for name in participant_names:
            if name == task.owner:
                if self.association_policy == AssociationPolicy.REJECT:
                    skipped.append(AlreadyAssociatedError(name, task_name))
                continue
            try:
                participant = self.ensure_participant(name)
            except NameConflictError as e:
                skipped.append(e)
                continue
            participant.tasks.add(task_name)
            task.participants.add(name)

        self.invalidate_balances()
        return skipped

    def detach(self, participant_name: str, task_name: str) -> None:
        """Stop a participant sharing a task, keeping both entities."""
        participant = self.get_participant(participant_name)
        task = self.get_task(task_name)

        if task.owner == participant_name:
            raise OwnerDetachError(participant_name, task_name)
        if participant_name not in task.participants:
            raise NotFoundError(
                participant_name,
                f"{participant_name!r} does not participate in {task_name!r}",
            )

        task.participants.discard(participant_name)
        participant.tasks.discard(task_name)
        self.invalidate_balances()

    # =========================================================================
    # TRANSFERS
    # =========================================================================

    def record_transfer(self, payer: str, payee: str, amount: int) -> None:
        """payer handed amount minor units directly to payee."""
        payer_record = self.get_participant(payer)
        payee_record = self.get_participant(payee)
        if amount < 0:
            raise InvalidAmountError(str(amount), "Transfer amount cannot be negative")
        if not in_range(amount):
            raise InvalidAmountError(
                str(amount), f"Transfer amount cannot exceed {MAX_MINOR} minor units"
            )

        payer_record.payments.append(amount)
        payee_record.payments.append(-amount)
        self.invalidate_balances()

    # =========================================================================
    # RENAME / REMOVE
    # =========================================================================

    def rename(self, old_name: str, new_name: str) -> None:
        """Rename a participant or a task, rewriting every reference to it."""
        if old_name not in self:
            raise NotFoundError(old_name)
        self._check_new_name(new_name)

        if old_name in self.participants:
            self._rename_participant(old_name, new_name)
        else:
            self._rename_task(old_name, new_name)
        self.invalidate_balances()

    def _rename_participant(self, old_name: str, new_name: str) -> None:
        participant = self.participants[old_name]
        for task_name in participant.tasks:
            task = self.tasks[task_name]
            task.participants.discard(old_name)
            task.participants.add(new_name)
            if task.owner == old_name:
                task.owner = new_name
        participant.name = new_name
        self.participants = _rekey(self.participants, old_name, new_name)

    def _rename_task(self, old_name: str, new_name: str) -> None:
        task = self.tasks[old_name]
        for name in task.participants:
            participant = self.participants[name]
            participant.tasks.discard(old_name)
            participant.tasks.add(new_name)
            if old_name in participant.paid_tasks:
                participant.paid_tasks.discard(old_name)
                participant.paid_tasks.add(new_name)
        task.name = new_name
        self.tasks = _rekey(self.tasks, old_name, new_name)

    def remove_task(self, name: str) -> Task:
        """Delete a task and every member's reference to it."""
        task = self.tasks.pop(name, None)
        if task is None:
            raise NotFoundError(name)
        for member in task.participants:
            participant = self.participants.get(member)
            if participant is not None:
                participant.tasks.discard(name)
                participant.paid_tasks.discard(name)
        self.invalidate_balances()
        return task

    def remove_participant(self, name: str) -> Participant:
        """
        Delete a participant.

        Tasks they merely shared survive without them; tasks they paid
        for are deleted along with every co-participant's link to them.
        """
        participant = self.participants.get(name)
        if participant is None:
            raise NotFoundError(name)

        for task_name in sorted(participant.paid_tasks):
            self.remove_task(task_name)
        for task_name in sorted(participant.tasks):
            task = self.tasks.get(task_name)
            if task is not None:
                task.participants.discard(name)

        del self.participants[name]
        self.invalidate_balances()
        return participant

    def remove(self, name: str) -> None:
        if name in self.participants:
            self.remove_participant(name)
        elif name in self.tasks:
            self.remove_task(name)
        else:
            raise NotFoundError(name)

    # =========================================================================
    # BALANCES
    # =========================================================================

    def invalidate_balances(self) -> None:
        for participant in self.participants.values():
            participant.invalidate()

    def balance(self, name: str) -> Decimal:
        """Net balance of one participant in major units (read-through cache)."""
        participant = self.get_participant(name)
        if participant.cached_balance is None:
            participant.cached_balance = self._calculator.balance(self, participant)
        return participant.cached_balance

    def balances(self) -> dict[str, Decimal]:
        return {name: self.balance(name) for name in self.participants}

    def task_share(self, name: str) -> Decimal:
        return self._calculator.task_share(self.get_task(name))


def _rekey(mapping: dict, old_key: str, new_key: str) -> dict:
    """Copy of mapping with old_key replaced by new_key in the same position."""
    return {
        (new_key if key == old_key else key): value
        for key, value in mapping.items()
    }
