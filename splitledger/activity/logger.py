"""
Activity Logger

Every command the session runs is logged locally as a structured event:
applied or rejected, with a correlation ID per command. Snapshot saves
and loads get their own events.

The activity log is diagnostic output only. It is not persisted and is
not a history of the ledger.
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from splitledger.config import LoggingSettings
from splitledger.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivitySeverity,
)


def _configure_structlog(renderer) -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Configure structlog for local logging
_configure_structlog(structlog.processors.JSONRenderer())


def configure_logging(settings: LoggingSettings) -> None:
    """
    Route log output to stderr at the configured level.

    Front ends call this once at startup; library use leaves the host
    application's logging alone.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=settings.level_number,
        force=True,
    )
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    _configure_structlog(renderer)


class ActivityLogger:
    """Central activity logging service."""

    def __init__(self, logger_name: str = "splitledger"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: ActivityEvent) -> None:
        """Log an activity event at the level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity == ActivitySeverity.ERROR:
            self._logger.error("activity_event", **log_dict)
        elif event.severity == ActivitySeverity.WARNING:
            self._logger.warning("activity_event", **log_dict)
        elif event.severity == ActivitySeverity.DEBUG:
            self._logger.debug("activity_event", **log_dict)
        else:
            self._logger.info("activity_event", **log_dict)

    def log_command_applied(
        self,
        verb: str,
        argument_count: int,
        correlation_id: UUID,
    ) -> None:
        """Log a command that completed."""
        event = ActivityEventBuilder.command_applied(
            verb=verb,
            argument_count=argument_count,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_command_rejected(
        self,
        verb: Optional[str],
        error_type: str,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        """Log a command that raised a LedgerError."""
        event = ActivityEventBuilder.command_rejected(
            verb=verb,
            error_type=error_type,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_snapshot_saved(
        self,
        location: Optional[str],
        participant_count: int,
        task_count: int,
        correlation_id: UUID,
    ) -> None:
        event = ActivityEventBuilder.snapshot_saved(
            location=location,
            participant_count=participant_count,
            task_count=task_count,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_snapshot_loaded(
        self,
        location: str,
        participant_count: int,
        task_count: int,
        correlation_id: UUID,
    ) -> None:
        event = ActivityEventBuilder.snapshot_loaded(
            location=location,
            participant_count=participant_count,
            task_count=task_count,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an unexpected error."""
        event = ActivityEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        self.log(event)


def create_correlation_id() -> UUID:
    """Create a new correlation ID; one per command."""
    return uuid4()
