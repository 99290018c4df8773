"""
Balance Calculator

balance(p) = sum(cost(t) / members(t) for every task p shares)
           - sum(cost(t) for every task p paid for)
           - sum(p's direct transfers)

Shares use the task's live member count, so associating someone new
with a task changes the share of everyone already on it. Arithmetic is
exact Decimal in minor units; the result is rounded once, to the
nearest minor unit, and handed back in major units.

Positive = owes money, negative = is owed money.
"""

from decimal import Decimal
from typing import TYPE_CHECKING

from splitledger.models.ledger import Participant, Task, round_minor, to_major

if TYPE_CHECKING:
    from splitledger.core.store import EntityStore


class BalanceCalculator:
    """Pure, side-effect-free balance computation over an EntityStore."""

    @staticmethod
    def raw_share(task: Task) -> Decimal:
        """Unrounded share of task per member, in minor units."""
        return Decimal(task.cost) / len(task.participants)

    def task_share(self, task: Task) -> Decimal:
        """Per-member share of task in major units."""
        return to_major(round_minor(self.raw_share(task)))

    def raw_balance(self, store: "EntityStore", participant: Participant) -> Decimal:
        total = Decimal(0)
        for task_name in participant.tasks:
            total += self.raw_share(store.tasks[task_name])
        for task_name in participant.paid_tasks:
            total -= store.tasks[task_name].cost
        total -= sum(participant.payments)
        return total

    def balance(self, store: "EntityStore", participant: Participant) -> Decimal:
        return to_major(round_minor(self.raw_balance(store, participant)))

    def balances(self, store: "EntityStore") -> dict[str, Decimal]:
        return {
            name: self.balance(store, participant)
            for name, participant in store.participants.items()
        }
