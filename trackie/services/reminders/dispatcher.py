"""
Daily Reminder Dispatcher

Runs once per day:
1. Load subscriptions due today or tomorrow (by day-of-month) across all owners
2. Group them by owner
3. Classify each owner's list with select_reminders
4. Send one aggregated digest per owner

CRITICAL: Step 3 uses the same selector as the in-app notifier, so an
owner is never emailed about something the app does not show (or the
other way round). Storage is only asked for candidate due days; the
selector has the final say, which is also where canceled subscriptions
drop out.

One owner's failure (address lookup or delivery) does not stop the run. It is recorded in the
report and the audit log and the loop moves on.
"""

from datetime import date
from typing import Awaitable, Callable, Optional

import structlog

from trackie.audit import AuditLogger
from trackie.config import ReminderSettings
from trackie.engine.reminders import reminder_days, select_reminders
from trackie.formatting import format_amount
from trackie.models.subscription import DateLike, Subscription, as_calendar_date
from trackie.models.views import DispatchReport, ReminderDigest, ReminderSelection
from trackie.services.reminders.sender import ReminderSender
from trackie.services.storage import StorageError, SubscriptionStorageInterface


logger = structlog.get_logger(__name__)

RecipientLookup = Callable[[str], Awaitable[Optional[str]]]


def group_by_owner(subs: list[Subscription]) -> dict[str, list[Subscription]]:
    """Group subscriptions by owner, keeping first-seen owner order."""
    grouped: dict[str, list[Subscription]] = {}
    for sub in subs:
        grouped.setdefault(sub.owner_id, []).append(sub)
    return grouped


def build_digest(
    owner_id: str,
    selection: ReminderSelection,
    sender_name: str = "TrackieChan",
    greeting: str = "Hey!",
    symbol: str = "₹",
    recipient: Optional[str] = None,
) -> ReminderDigest:
    """Render one owner's selection into a subject and plain-text body."""
    lines = []
    for when, subs in (("today", selection.due_today), ("tomorrow", selection.due_tomorrow)):
        for sub in subs:
            lines.append(f"• {sub.name} — {format_amount(sub.amount, symbol)} is due {when}")

    count = len(lines)
    subject = f"{sender_name}: {count} subscription{'s' if count > 1 else ''} due"
    body = (
        f"{greeting}\n\n"
        "Here are your upcoming subscription renewals:\n\n"
        + "\n".join(lines)
        + f"\n\n— {sender_name}"
    )

    return ReminderDigest(
        owner_id=owner_id,
        recipient=recipient,
        subject=subject,
        body=body,
        subscription_count=count,
    )


class ReminderDispatcher:
    """
    Sends the daily due-today / due-tomorrow digests.

    Args:
        storage: Where subscriptions are loaded from (all owners)
        sender: How digests are delivered
        audit_logger: Audit trail; local-only if not given
        recipient_lookup: Resolves an owner to an address. Owners it
            returns None for are skipped. If not given, every owner is
            sent to without a resolved address.
        settings: Reminder settings (sender name, greeting, enabled)
        currency_symbol: Prefix for formatted amounts
    """

    def __init__(
        self,
        storage: SubscriptionStorageInterface,
        sender: ReminderSender,
        audit_logger: Optional[AuditLogger] = None,
        recipient_lookup: Optional[RecipientLookup] = None,
        settings: Optional[ReminderSettings] = None,
        currency_symbol: str = "₹",
    ):
        self._storage = storage
        self._sender = sender
        self._audit_logger = audit_logger or AuditLogger()
        self._recipient_lookup = recipient_lookup
        self._settings = settings or ReminderSettings()
        self._symbol = currency_symbol

    async def run(self, today: Optional[DateLike] = None) -> DispatchReport:
        """
        Run one dispatch for `today`.

        Raises:
            StorageError: If the candidate subscriptions cannot be loaded
        """
        today = as_calendar_date(today or date.today())
        report = DispatchReport(run_date=today, today_day=today.day)

        if not self._settings.enabled:
            logger.info("reminder_dispatch_disabled", run_date=today.isoformat())
            return report

        try:
            candidates = await self._storage.list_due_on_days(reminder_days(today))
        except StorageError as e:
            await self._audit_logger.log_storage_error("list_due_on_days", str(e))
            raise

        report.subscriptions_considered = len(candidates)

        for owner_id, owner_subs in group_by_owner(candidates).items():
            selection = select_reminders(owner_subs, today)
            if selection.is_empty:
                continue
            await self._dispatch_owner(owner_id, selection, report)

        await self._audit_logger.log_dispatch_completed(
            run_id=report.run_id,
            run_date=today.isoformat(),
            owners_notified=len(report.notified),
            owners_failed=len(report.failed),
            owners_skipped=len(report.skipped),
        )
        return report

    async def _dispatch_owner(
        self,
        owner_id: str,
        selection: ReminderSelection,
        report: DispatchReport,
    ) -> None:
        recipient = None
        if self._recipient_lookup is not None:
            try:
                recipient = await self._recipient_lookup(owner_id)
            except Exception as e:
                logger.exception("recipient_lookup_failed", owner_id=owner_id)
                report.failed.append(owner_id)
                await self._audit_logger.log_reminder_failed(owner_id, f"recipient lookup failed: {e}")
                return
            if not recipient:
                report.skipped.append(owner_id)
                await self._audit_logger.log_reminder_skipped(owner_id, "no recipient address")
                return

        digest = build_digest(
            owner_id,
            selection,
            sender_name=self._settings.sender_name,
            greeting=self._settings.greeting,
            symbol=self._symbol,
            recipient=recipient,
        )

        try:
            await self._sender.send(digest)
        except Exception as e:
            logger.exception("reminder_send_failed", owner_id=owner_id)
            report.failed.append(owner_id)
            await self._audit_logger.log_reminder_failed(owner_id, str(e))
            return

        report.notified.append(owner_id)
        report.digests.append(digest)
        await self._audit_logger.log_reminder_sent(
            owner_id=owner_id,
            subscription_count=digest.subscription_count,
            subject=digest.subject,
        )
