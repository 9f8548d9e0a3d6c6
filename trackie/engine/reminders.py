"""
Reminder Selector

Partitions currently-active subscriptions by day-of-month:

- due today:    due_day == today.day
- due tomorrow: due_day == today.day + 1

There is no month rollover. On the 31st nothing is "due tomorrow",
and a subscription due on the 1st is never picked up the evening before.
This matches the calendar's due-day arithmetic exactly.

CRITICAL: The in-app notifier and the daily dispatcher both go through
select_reminders. They must classify identically for the same inputs,
so neither gets its own copy of this arithmetic.

The paid/upcoming feed is a separate view of the same field
(due_day <= today is paid, later is upcoming).
"""

from datetime import date
from typing import Iterable, Optional

from trackie.engine.visibility import get_currently_active
from trackie.formatting import format_amount, ordinal
from trackie.models.subscription import DateLike, Subscription, as_calendar_date
from trackie.models.views import (
    NotificationEntry,
    NotificationFeed,
    ReminderNotice,
    ReminderSelection,
)


def reminder_days(today: DateLike) -> tuple[int, int]:
    """The day-of-month values that count as today and tomorrow."""
    today_day = as_calendar_date(today).day
    return today_day, today_day + 1


def select_reminders(
    subs: Iterable[Subscription],
    today: Optional[DateLike] = None,
) -> ReminderSelection:
    """Split the currently-active subscriptions into due today / due tomorrow."""
    today = as_calendar_date(today or date.today())
    today_day, tomorrow_day = reminder_days(today)

    active = get_currently_active(subs, today)
    return ReminderSelection(
        today_day=today_day,
        due_today=[s for s in active if s.due_day == today_day],
        due_tomorrow=[s for s in active if s.due_day == tomorrow_day],
    )


def reminder_notices(
    selection: ReminderSelection,
    symbol: str = "₹",
) -> list[ReminderNotice]:
    """One notice per due subscription, today's first."""
    notices = []
    for when, subs in (("today", selection.due_today), ("tomorrow", selection.due_tomorrow)):
        for sub in subs:
            notices.append(ReminderNotice(
                subscription_id=str(sub.id),
                title=f"{sub.name} is due {when}",
                body=f"{format_amount(sub.amount, symbol)} — {sub.payment_source}",
            ))
    return notices


def notification_feed(
    subs: Iterable[Subscription],
    today: Optional[DateLike] = None,
    symbol: str = "₹",
) -> NotificationFeed:
    """Upcoming and paid entries for this month, by day-of-month."""
    today = as_calendar_date(today or date.today())
    today_day = today.day

    feed = NotificationFeed()
    for sub in get_currently_active(subs, today):
        if sub.due_day > today_day:
            days = sub.due_day - today_day
            feed.upcoming.append(NotificationEntry(
                subscription_id=str(sub.id),
                kind="upcoming",
                title=sub.name,
                message=f"Renews in {days} days",
                time_label=f"{days}d",
            ))
        else:
            days = today_day - sub.due_day
            feed.paid.append(NotificationEntry(
                subscription_id=str(sub.id),
                kind="paid",
                title=sub.name,
                message=f"Paid on {ordinal(sub.due_day)} — {format_amount(sub.amount, symbol)}",
                time_label="Today" if days == 0 else f"{days}d ago",
            ))
    return feed


class SessionReminderNotifier:
    """
    In-app reminder surface that fires once per session.

    The first poll with a non-empty subscription list returns the
    notices; every later poll returns nothing. Polls before the list
    has loaded (empty list) do not use up the one shot.
    """

    def __init__(self, symbol: str = "₹"):
        self._symbol = symbol
        self._fired = False

    @property
    def has_fired(self) -> bool:
        return self._fired

    def poll(
        self,
        subs: list[Subscription],
        today: Optional[DateLike] = None,
    ) -> list[ReminderNotice]:
        if self._fired or not subs:
            return []
        self._fired = True
        return reminder_notices(select_reminders(subs, today), self._symbol)
