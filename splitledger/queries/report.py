"""
Ledger Reporter

Read-only views of the ledger. Builds report models from the store and
the balance calculator, then renders them as console text.

Nothing in here mutates the store; cached balances are filled in
through EntityStore.balance(), which is a read-through cache.
"""

from decimal import Decimal

from splitledger.core.store import EntityStore
from splitledger.errors import LedgerError, NotFoundError
from splitledger.models.ledger import format_amount, to_major
from splitledger.models.report import (
    BalanceLine,
    PaidTaskLine,
    ParticipantReport,
    TaskReport,
    TaskShare,
)


class LedgerReporter:
    """
    Builds and renders reports over an EntityStore.

    Participants and tasks are listed in the store's order; names
    inside a report are sorted.
    """

    def __init__(self, store: EntityStore):
        self._store = store

    # =========================================================================
    # REPORT MODELS
    # =========================================================================

    def summary(self) -> list[BalanceLine]:
        return [
            BalanceLine(name=name, balance=balance)
            for name, balance in self._store.balances().items()
        ]

    def participant_report(self, name: str) -> ParticipantReport:
        store = self._store
        participant = store.get_participant(name)

        shares = []
        for task_name in sorted(participant.tasks):
            task = store.tasks[task_name]
            shares.append(TaskShare(
                task=task_name,
                share=store.task_share(task_name),
                participant_count=len(task.participants),
            ))

        paid = [
            PaidTaskLine(task=task_name, cost=to_major(store.tasks[task_name].cost))
            for task_name in sorted(participant.paid_tasks)
        ]

        return ParticipantReport(
            name=name,
            balance=store.balance(name),
            shares=shares,
            paid_tasks=paid,
            payments=[to_major(amount) for amount in participant.payments],
        )

    def task_report(self, name: str) -> TaskReport:
        task = self._store.get_task(name)
        return TaskReport(
            name=name,
            owner=task.owner,
            cost=to_major(task.cost),
            share=self._store.task_share(name),
            participants=sorted(task.participants),
        )

    # =========================================================================
    # TEXT RENDERING
    # =========================================================================

    def render_summary(self) -> str:
        return "\n".join(
            f"{line.name} owes {format_amount(line.balance)}"
            for line in self.summary()
        )

    def render_participant(self, name: str) -> str:
        report = self.participant_report(name)
        lines = [f"{report.name} owes {format_amount(report.balance)}"]

        if report.shares:
            lines.append("  participates in:")
            for share in report.shares:
                lines.append(
                    f"    {share.task}: {format_amount(share.share)} "
                    f"(1/{share.participant_count})"
                )
        if report.paid_tasks:
            lines.append("  paid for:")
            for paid in report.paid_tasks:
                lines.append(f"    {paid.task}: {format_amount(paid.cost)}")
        if report.payments:
            lines.append("  payments:")
            for amount in report.payments:
                lines.append(f"    {_signed(amount)}")

        return "\n".join(lines)

    def render_task(self, name: str) -> str:
        report = self.task_report(name)
        return "\n".join([
            f"{report.name}: {format_amount(report.cost)} paid by {report.owner}",
            f"  share: {format_amount(report.share)}",
            f"  participants: {', '.join(report.participants)}",
        ])

    def render_all_participants(self) -> str:
        return "\n".join(
            self.render_participant(name) for name in self._store.participants
        )

    def render_all_tasks(self) -> str:
        return "\n".join(self.render_task(name) for name in self._store.tasks)

    def render_named(self, names: list[str]) -> tuple[str, list[LedgerError]]:
        """
        Render each name as a participant or task report.

        Returns the rendered text for the names that exist and a
        NotFoundError for each that doesn't.
        """
        blocks = []
        errors: list[LedgerError] = []
        for name in names:
            if self._store.is_participant(name):
                blocks.append(self.render_participant(name))
            elif self._store.is_task(name):
                blocks.append(self.render_task(name))
            else:
                errors.append(NotFoundError(name))
        return "\n".join(blocks), errors


def _signed(amount: Decimal) -> str:
    text = format_amount(amount)
    return text if amount < 0 else f"+{text}"
