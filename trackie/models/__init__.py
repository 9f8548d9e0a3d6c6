"""
Data Models Package

This package contains all Pydantic models used in Trackie.
All data flowing through the system must conform to these schemas.
"""

from trackie.models.subscription import (
    CUSTOM_PAYMENT_SOURCE,
    PAYMENT_SOURCES,
    BillingCycle,
    NewSubscription,
    Subscription,
    as_calendar_date,
)
from trackie.models.views import (
    CalendarMonth,
    CalendarYear,
    DispatchReport,
    DayCell,
    MonthTile,
    NotificationEntry,
    NotificationFeed,
    ReminderDigest,
    ReminderNotice,
    ReminderSelection,
    SpendSummary,
)
from trackie.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Subscription models
    "CUSTOM_PAYMENT_SOURCE",
    "PAYMENT_SOURCES",
    "BillingCycle",
    "NewSubscription",
    "Subscription",
    "as_calendar_date",
    # Result models
    "CalendarMonth",
    "CalendarYear",
    "DispatchReport",
    "DayCell",
    "MonthTile",
    "NotificationEntry",
    "NotificationFeed",
    "ReminderDigest",
    "ReminderNotice",
    "ReminderSelection",
    "SpendSummary",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
