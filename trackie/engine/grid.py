"""
Calendar Views

Builds the month grid and the yearly overview from a subscription list.
Layout is Monday-first. Cells are the per-day answer of is_visible_on_day,
so a cell never shows a subscription outside its active window.

Nothing here renders; the returned models are consumed by the UI.
"""

import calendar
from datetime import date
from typing import Iterable, Optional

from trackie.engine.aggregation import monthly_total_for_month, spend_summary
from trackie.engine.visibility import get_active_subs_for_month, subs_visible_on_day
from trackie.models.subscription import BillingCycle, DateLike, Subscription, as_calendar_date
from trackie.models.views import CalendarMonth, CalendarYear, DayCell, MonthTile


DEFAULT_PREVIEW_LIMIT = 2


def _pad_weeks(year: int, month: int, cells: list[DayCell]) -> list[list[Optional[DayCell]]]:
    leading, _ = calendar.monthrange(year, month)
    slots: list[Optional[DayCell]] = [None] * leading + list(cells)
    while len(slots) % 7:
        slots.append(None)
    return [slots[i:i + 7] for i in range(0, len(slots), 7)]


def build_month_view(
    subs: Iterable[Subscription],
    year: int,
    month: int,
    today: Optional[DateLike] = None,
    preview_limit: int = DEFAULT_PREVIEW_LIMIT,
) -> CalendarMonth:
    """
    Month grid with per-day subscriptions and the month's monthly total.

    Each cell keeps input order; the first `preview_limit` go into the
    preview and the rest are counted as overflow.
    """
    subs = list(subs)
    today = as_calendar_date(today or date.today())
    _, days_in_month = calendar.monthrange(year, month)
    is_current_month = today.year == year and today.month == month

    cells = []
    for day in range(1, days_in_month + 1):
        day_subs = subs_visible_on_day(subs, year, month, day)
        cells.append(DayCell(
            day=day,
            is_today=is_current_month and today.day == day,
            subscriptions=day_subs,
            preview=day_subs[:preview_limit],
            overflow_count=max(len(day_subs) - preview_limit, 0),
        ))

    return CalendarMonth(
        year=year,
        month=month,
        weeks=_pad_weeks(year, month, cells),
        active_subscriptions=get_active_subs_for_month(subs, year, month),
        monthly_total=monthly_total_for_month(subs, year, month),
    )


def build_year_view(
    subs: Iterable[Subscription],
    year: int,
    today: Optional[DateLike] = None,
) -> CalendarYear:
    """
    Twelve month tiles plus the estimated annual spend.

    Tile counts use the month-overlap set; the annual estimate uses the
    currently-active set.
    """
    subs = list(subs)
    today = as_calendar_date(today or date.today())

    tiles = []
    for month in range(1, 13):
        _, days_in_month = calendar.monthrange(year, month)
        marked = {}
        for day in range(1, days_in_month + 1):
            day_subs = subs_visible_on_day(subs, year, month, day)
            if day_subs:
                marked[day] = any(s.cycle == BillingCycle.YEARLY for s in day_subs)

        tiles.append(MonthTile(
            month=month,
            is_current_month=today.year == year and today.month == month,
            active_count=len(get_active_subs_for_month(subs, year, month)),
            marked_days=marked,
        ))

    summary = spend_summary(subs, today)
    return CalendarYear(
        year=year,
        months=tiles,
        monthly_total=summary.monthly_total,
        yearly_direct_total=summary.yearly_direct_total,
        estimated_annual=summary.yearly_projection,
    )
