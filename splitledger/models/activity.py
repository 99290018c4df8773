"""
Activity Event Models

Structured records of what the session did, written to the local
structured log only. They are never persisted: the ledger keeps its
current state and nothing else.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class ActivityEventType(str, Enum):
    """Types of events the session logs."""
    # Commands
    COMMAND_APPLIED = "command_applied"
    COMMAND_REJECTED = "command_rejected"

    # Snapshots
    SNAPSHOT_SAVED = "snapshot_saved"
    SNAPSHOT_LOADED = "snapshot_loaded"

    # System events
    SYSTEM_ERROR = "system_error"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActivityEvent(BaseModel):
    """A single activity event."""

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(default_factory=_utcnow)

    event_type: ActivityEventType
    severity: ActivitySeverity = ActivitySeverity.INFO

    # Correlates everything one command caused
    correlation_id: Optional[UUID] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)

    error_type: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_type": self.error_type,
            "error_message": self.error_message,
        }


class ActivityEventBuilder:
    """
    Helper class to build activity events with common patterns.

    Usage:
        event = ActivityEventBuilder.command_applied("pay", 3, correlation_id)
        event = ActivityEventBuilder.snapshot_saved("ledger.json", 2, 1, correlation_id)
    """

    @staticmethod
    def command_applied(
        verb: str,
        argument_count: int,
        correlation_id: UUID,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.COMMAND_APPLIED,
            correlation_id=correlation_id,
            description=f"Command applied: {verb}",
            details={
                "verb": verb,
                "argument_count": argument_count,
            },
        )

    @staticmethod
    def command_rejected(
        verb: Optional[str],
        error_type: str,
        error_message: str,
        correlation_id: UUID,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.COMMAND_REJECTED,
            severity=ActivitySeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Command rejected: {verb or '<empty>'}",
            details={"verb": verb},
            error_type=error_type,
            error_message=error_message[:500],
        )

    @staticmethod
    def snapshot_saved(
        location: Optional[str],
        participant_count: int,
        task_count: int,
        correlation_id: UUID,
    ) -> ActivityEvent:
        target = location or "console"
        return ActivityEvent(
            event_type=ActivityEventType.SNAPSHOT_SAVED,
            correlation_id=correlation_id,
            description=f"Snapshot saved to {target}",
            details={
                "location": target,
                "participants": participant_count,
                "tasks": task_count,
            },
        )

    @staticmethod
    def snapshot_loaded(
        location: str,
        participant_count: int,
        task_count: int,
        correlation_id: UUID,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.SNAPSHOT_LOADED,
            correlation_id=correlation_id,
            description=f"Snapshot loaded from {location}",
            details={
                "location": location,
                "participants": participant_count,
                "tasks": task_count,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.SYSTEM_ERROR,
            severity=ActivitySeverity.ERROR,
            correlation_id=correlation_id,
            description=f"System error: {error_type}",
            details=details or {},
            error_type=error_type,
            error_message=error_message[:500],
        )
