"""Reminder delivery package."""

from trackie.services.reminders.dispatcher import (
    ReminderDispatcher,
    build_digest,
    group_by_owner,
)
from trackie.services.reminders.sender import (
    LoggingReminderSender,
    ReminderDeliveryError,
    ReminderSender,
)

__all__ = [
    "LoggingReminderSender",
    "ReminderDeliveryError",
    "ReminderDispatcher",
    "ReminderSender",
    "build_digest",
    "group_by_owner",
]
