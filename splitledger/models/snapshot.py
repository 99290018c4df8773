"""
Snapshot Transport Models

The flat, cycle-free form of the ledger used for save/load.
Each task appears once and lists participant NAMES; each participant
appears once and lists task NAMES. Nothing in here points back at a
live record.

Field aliases match the persisted JSON document:

    {
      "tasks": {"Dinner": {"owner": "Alice", "participants": [...], "cost": 3000}},
      "participants": {"Alice": {"tasks": [...], "paidTasks": [...], "paymentsMade": [...]}}
    }
"""

from pydantic import BaseModel, ConfigDict, Field


class TaskRecord(BaseModel):
    """One task in the snapshot."""
    model_config = ConfigDict(extra="forbid", strict=True)

    owner: str = Field(..., min_length=1)
    participants: list[str] = Field(default_factory=list)
    cost: int = Field(..., ge=0, description="Cost in minor units")


class ParticipantRecord(BaseModel):
    """One participant in the snapshot."""
    model_config = ConfigDict(
        extra="forbid",
        strict=True,
        populate_by_name=True,
    )

    tasks: list[str] = Field(default_factory=list)
    paid_tasks: list[str] = Field(default_factory=list, alias="paidTasks")
    payments: list[int] = Field(default_factory=list, alias="paymentsMade")


class LedgerSnapshot(BaseModel):
    """The whole ledger, flattened."""
    model_config = ConfigDict(extra="forbid")

    tasks: dict[str, TaskRecord] = Field(default_factory=dict)
    participants: dict[str, ParticipantRecord] = Field(default_factory=dict)
