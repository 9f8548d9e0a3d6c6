"""
Audit Logger

DESIGN DECISION: Every lifecycle action and reminder run is logged.
This provides:
1. A record of subscriptions after they have been ended (and deleted)
2. Evidence of which reminders went out
3. Debugging capability when storage or delivery fails

The audit logger:
- Always writes to the structured local log
- Persists to audit storage when one is configured
- Never raises on a storage failure (doesn't crash the app if logging fails)
"""

from typing import Optional
from uuid import UUID

import structlog

from trackie.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from trackie.models.subscription import Subscription
from trackie.services.storage import AuditStorageInterface


# Configure structlog for local logging
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
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage (for persistence), if configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger()

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return await self._storage.append_event(event)
            except Exception as e:
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    async def log_subscription_created(self, sub: Subscription) -> None:
        """Log a newly added subscription."""
        await self.log(AuditEventBuilder.subscription_created(
            subscription_id=sub.id,
            owner_id=sub.owner_id,
            name=sub.name,
            amount=str(sub.amount),
            cycle=sub.cycle.value,
        ))

    async def log_subscription_ended(self, subscription_id: UUID, found: bool) -> None:
        """Log an end request, whether or not a record was removed."""
        if found:
            event = AuditEventBuilder.subscription_ended(subscription_id)
        else:
            event = AuditEventBuilder.subscription_end_missing(subscription_id)
        await self.log(event)

    async def log_reminder_sent(
        self,
        owner_id: str,
        subscription_count: int,
        subject: str,
    ) -> None:
        await self.log(AuditEventBuilder.reminder_sent(
            owner_id=owner_id,
            subscription_count=subscription_count,
            subject=subject,
        ))

    async def log_reminder_skipped(self, owner_id: str, reason: str) -> None:
        await self.log(AuditEventBuilder.reminder_skipped(owner_id, reason))

    async def log_reminder_failed(self, owner_id: str, error_message: str) -> None:
        await self.log(AuditEventBuilder.reminder_send_failed(owner_id, error_message))

    async def log_dispatch_completed(
        self,
        run_id: UUID,
        run_date: str,
        owners_notified: int,
        owners_failed: int,
        owners_skipped: int,
    ) -> None:
        """Log the outcome of one daily reminder run."""
        await self.log(AuditEventBuilder.reminder_dispatch_completed(
            run_id=run_id,
            run_date=run_date,
            owners_notified=owners_notified,
            owners_failed=owners_failed,
            owners_skipped=owners_skipped,
        ))

    async def log_storage_error(
        self,
        operation: str,
        error_message: str,
        owner_id: Optional[str] = None,
    ) -> None:
        await self.log(AuditEventBuilder.storage_error(
            operation=operation,
            error_message=error_message,
            owner_id=owner_id,
        ))
