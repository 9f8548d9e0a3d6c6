"""
Reminder Senders

The dispatcher decides WHAT to send; a sender decides HOW. Real delivery
(email, push) lives outside this package. The logging sender writes the
message to the structured log instead of sending it.
"""

from abc import ABC, abstractmethod

import structlog

from trackie.models.views import ReminderDigest


class ReminderDeliveryError(Exception):
    """A digest could not be delivered."""
    pass


class ReminderSender(ABC):
    """Delivers one digest to one owner."""

    @abstractmethod
    async def send(self, digest: ReminderDigest) -> None:
        """
        Deliver the digest.

        Raises:
            ReminderDeliveryError: If delivery fails
        """
        pass


class LoggingReminderSender(ReminderSender):
    """Logs each digest instead of delivering it."""

    def __init__(self):
        self._logger = structlog.get_logger(__name__)
        self.sent: list[ReminderDigest] = []

    async def send(self, digest: ReminderDigest) -> None:
        self._logger.info(
            "reminder_would_send",
            owner_id=digest.owner_id,
            recipient=digest.recipient,
            subject=digest.subject,
            body=digest.body,
        )
        self.sent.append(digest)
