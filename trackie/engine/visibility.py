"""
Visibility Engine

Answers two different questions, which must not be merged:

1. "What renders on day D of month M/year Y?"
   is_visible_on_day: the due day matches AND that date is inside the
   subscription's active window. A subscription shows on at most one
   day per month.

2. "What was relevant at any point during month M?"
   get_active_subs_for_month: the active window overlaps the month at
   all, regardless of whether the due day has passed or even exists
   in that month. Drives per-month totals and counts.

A third, today-relative set (get_currently_active) drives the global
stats and reminders. It answers "is this still running?" and has nothing
to do with the month being viewed.

Months are 1-based (January = 1) throughout.

DESIGN DECISION: Due days are matched on day-of-month only. A due day
of 31 never fires in a 30-day month; we do not move it to the 30th.
Reminders use the same arithmetic so the two never disagree.
"""

import calendar
from datetime import date
from typing import Iterable, Optional

from trackie.models.subscription import DateLike, Subscription, as_calendar_date


def date_of(year: int, month: int, day: int) -> Optional[date]:
    """The calendar date, or None if the day does not exist in that month."""
    try:
        return date(year, month, day)
    except ValueError:
        return None


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of the month."""
    _, last_day = calendar.monthrange(year, month)
    return date(year, month, 1), date(year, month, last_day)


def is_visible_on_day(sub: Subscription, year: int, month: int, day: int) -> bool:
    """True if the subscription is due on that day and active on that date."""
    if sub.due_day != day:
        return False
    on = date_of(year, month, day)
    if on is None:
        return False
    return sub.is_active_on(on)


def subs_visible_on_day(
    subs: Iterable[Subscription],
    year: int,
    month: int,
    day: int,
) -> list[Subscription]:
    """All subscriptions rendering in one calendar cell, in input order."""
    return [s for s in subs if is_visible_on_day(s, year, month, day)]


def get_active_subs_for_month(
    subs: Iterable[Subscription],
    year: int,
    month: int,
) -> list[Subscription]:
    """
    Subscriptions whose active window overlaps the month.

    Excluded are only those starting after the month's last day or
    ending before its first day. Partial overlaps count.
    """
    month_start, month_end = month_bounds(year, month)

    active = []
    for sub in subs:
        if sub.start_date and sub.start_date > month_end:
            continue
        if sub.end_date and sub.end_date < month_start:
            continue
        active.append(sub)
    return active


def get_currently_active(
    subs: Iterable[Subscription],
    today: Optional[DateLike] = None,
) -> list[Subscription]:
    """Subscriptions that are not canceled as of today."""
    today = as_calendar_date(today or date.today())
    return [s for s in subs if s.is_currently_active(today)]
