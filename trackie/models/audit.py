"""
Audit Models for Trackie

Every lifecycle action and every reminder run is logged for audit purposes.
This provides:
1. A history of what was added and ended, and when
2. Evidence of which reminders went out to whom
3. Debugging information when storage or delivery fails

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
That matters more here than usual: ending a subscription deletes its row,
so the audit trail is the only place the record survives.
"""

import json
from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Lifecycle
    SUBSCRIPTION_CREATED = "subscription_created"
    SUBSCRIPTION_ENDED = "subscription_ended"
    SUBSCRIPTION_END_MISSING = "subscription_end_missing"

    # Reminders
    REMINDER_SENT = "reminder_sent"
    REMINDER_SKIPPED = "reminder_skipped"
    REMINDER_SEND_FAILED = "reminder_send_failed"
    REMINDER_DISPATCH_COMPLETED = "reminder_dispatch_completed"

    # System events
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'subscription', 'dispatch')"
    )
    entity_id: Optional[UUID] = None
    owner_id: Optional[str] = Field(
        default=None,
        description="User the event concerns, if any"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "owner_id": self.owner_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }

    def to_sheets_row(self) -> list:
        """
        Convert to a row suitable for Google Sheets storage.

        Returns columns in order:
        [event_id, timestamp, event_type, severity, entity_type, entity_id,
         owner_id, description, details_json, error_message, is_user_action]
        """
        return [
            str(self.event_id),
            self.timestamp.isoformat(),
            self.event_type.value,
            self.severity.value,
            self.entity_type or "",
            str(self.entity_id) if self.entity_id else "",
            self.owner_id or "",
            self.description,
            json.dumps(self.details) if self.details else "",
            self.error_message or "",
            str(self.is_user_action),
        ]


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.subscription_created(sub)
        event = AuditEventBuilder.reminder_sent(owner_id, 2)
    """

    @staticmethod
    def subscription_created(
        subscription_id: UUID,
        owner_id: str,
        name: str,
        amount: str,
        cycle: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_CREATED,
            entity_type="subscription",
            entity_id=subscription_id,
            owner_id=owner_id,
            description=f"Subscription added: {name} - {amount} ({cycle})",
            details={
                "name": name,
                "amount": amount,
                "cycle": cycle,
            },
            is_user_action=True,
        )

    @staticmethod
    def subscription_ended(subscription_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_ENDED,
            entity_type="subscription",
            entity_id=subscription_id,
            description="Subscription ended and removed",
            is_user_action=True,
        )

    @staticmethod
    def subscription_end_missing(subscription_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_END_MISSING,
            severity=AuditSeverity.WARNING,
            entity_type="subscription",
            entity_id=subscription_id,
            description="End requested for a subscription that does not exist",
            is_user_action=True,
        )

    @staticmethod
    def reminder_sent(
        owner_id: str,
        subscription_count: int,
        subject: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMINDER_SENT,
            entity_type="reminder",
            owner_id=owner_id,
            description=f"Reminder sent for {subscription_count} subscriptions",
            details={
                "subscription_count": subscription_count,
                "subject": subject,
            },
        )

    @staticmethod
    def reminder_skipped(owner_id: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMINDER_SKIPPED,
            severity=AuditSeverity.WARNING,
            entity_type="reminder",
            owner_id=owner_id,
            description=f"Reminder skipped: {reason}",
            details={"reason": reason},
        )

    @staticmethod
    def reminder_send_failed(owner_id: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMINDER_SEND_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="reminder",
            owner_id=owner_id,
            description="Reminder delivery failed",
            error_message=error_message,
        )

    @staticmethod
    def reminder_dispatch_completed(
        run_id: UUID,
        run_date: str,
        owners_notified: int,
        owners_failed: int,
        owners_skipped: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMINDER_DISPATCH_COMPLETED,
            entity_type="dispatch",
            entity_id=run_id,
            description=(
                f"Reminder run for {run_date}: {owners_notified} notified, "
                f"{owners_failed} failed, {owners_skipped} skipped"
            ),
            details={
                "run_date": run_date,
                "owners_notified": owners_notified,
                "owners_failed": owners_failed,
                "owners_skipped": owners_skipped,
            },
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
        owner_id: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            owner_id=owner_id,
            description=f"Storage error during {operation}",
            error_message=error_message,
            details={"operation": operation},
        )
