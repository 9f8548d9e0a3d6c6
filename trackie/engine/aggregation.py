"""
Spend Aggregation

Totals are plain sums of `amount`; there is no proration and no currency
conversion.

Two active sets feed two different totals:
- the calendar grid's per-month total sums monthly-cycle amounts over
  get_active_subs_for_month (the month being viewed)
- the headline stats and the yearly projection sum over
  get_currently_active (today)
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from trackie.engine.visibility import get_active_subs_for_month, get_currently_active
from trackie.models.subscription import (
    BillingCycle,
    DateLike,
    Subscription,
    as_calendar_date,
)
from trackie.models.views import SpendSummary


ZERO = Decimal("0")


def sum_amounts(
    subs: Iterable[Subscription],
    cycle: Optional[BillingCycle] = None,
) -> Decimal:
    """Sum of amounts, optionally restricted to one billing cycle."""
    return sum(
        (s.amount for s in subs if cycle is None or s.cycle == cycle),
        ZERO,
    )


def monthly_total_for_month(
    subs: Iterable[Subscription],
    year: int,
    month: int,
) -> Decimal:
    """Monthly-cycle spend for subscriptions relevant during the month."""
    active = get_active_subs_for_month(subs, year, month)
    return sum_amounts(active, BillingCycle.MONTHLY)


def yearly_projection(
    subs: Iterable[Subscription],
    today: Optional[DateLike] = None,
) -> Decimal:
    """
    Projected annual spend of what is running today.

    monthly amounts * 12 + yearly amounts.
    """
    return spend_summary(subs, today).yearly_projection


def spend_summary(
    subs: Iterable[Subscription],
    today: Optional[DateLike] = None,
) -> SpendSummary:
    """Headline stats: monthly spend, yearly projection, active count."""
    today = as_calendar_date(today or date.today())
    active = get_currently_active(subs, today)

    monthly = sum_amounts(active, BillingCycle.MONTHLY)
    yearly_direct = sum_amounts(active, BillingCycle.YEARLY)

    return SpendSummary(
        as_of=today,
        monthly_total=monthly,
        yearly_direct_total=yearly_direct,
        yearly_projection=monthly * 12 + yearly_direct,
        active_count=len(active),
    )
