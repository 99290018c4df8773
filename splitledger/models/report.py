"""
Report Models

Read-only views produced by the reporter. Amounts are in major units.
"""

from decimal import Decimal

from pydantic import BaseModel, Field


class BalanceLine(BaseModel):
    """One row of the summary report."""

    name: str
    balance: Decimal = Field(
        ...,
        description="Positive = owes money, negative = is owed money"
    )


class TaskShare(BaseModel):
    """A participant's share of one task."""

    task: str
    share: Decimal
    participant_count: int = Field(..., ge=1)


class PaidTaskLine(BaseModel):
    task: str
    cost: Decimal


class ParticipantReport(BaseModel):
    """Full detail for one participant."""

    name: str
    balance: Decimal
    shares: list[TaskShare] = Field(default_factory=list)
    paid_tasks: list[PaidTaskLine] = Field(default_factory=list)
    payments: list[Decimal] = Field(
        default_factory=list,
        description="Direct transfers; positive = paid out"
    )


class TaskReport(BaseModel):
    """Full detail for one task."""

    name: str
    owner: str
    cost: Decimal
    share: Decimal
    participants: list[str] = Field(default_factory=list)
