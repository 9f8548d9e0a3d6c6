"""
Result Models

Shapes returned by the engine to whoever renders them: spend summaries,
reminder selections, notification feed entries and calendar grids.
They are plain values; nothing here computes anything beyond simple
derived properties.
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from trackie.models.subscription import Subscription


# =============================================================================
# AGGREGATES
# =============================================================================

class SpendSummary(BaseModel):
    """Headline stats over the currently-active subscriptions."""

    as_of: date
    monthly_total: Decimal = Field(
        ...,
        description="Sum of monthly-cycle amounts"
    )
    yearly_direct_total: Decimal = Field(
        ...,
        description="Sum of yearly-cycle amounts"
    )
    yearly_projection: Decimal = Field(
        ...,
        description="monthly_total * 12 + yearly_direct_total"
    )
    active_count: int = Field(ge=0)


# =============================================================================
# REMINDERS
# =============================================================================

class ReminderSelection(BaseModel):
    """Subscriptions due today and tomorrow, by day-of-month."""

    today_day: int
    due_today: list[Subscription] = Field(default_factory=list)
    due_tomorrow: list[Subscription] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.due_today and not self.due_tomorrow

    @property
    def all_due(self) -> list[Subscription]:
        return [*self.due_today, *self.due_tomorrow]


class NotificationEntry(BaseModel):
    """One row in the in-app notification feed."""

    subscription_id: str
    kind: str = Field(..., pattern="^(upcoming|paid)$")
    title: str
    message: str
    time_label: str


class NotificationFeed(BaseModel):
    """The two tabs of the notification dropdown."""

    upcoming: list[NotificationEntry] = Field(default_factory=list)
    paid: list[NotificationEntry] = Field(default_factory=list)


class ReminderNotice(BaseModel):
    """A one-line "X is due today" notice for toasts and push."""

    subscription_id: str
    title: str
    body: str


class ReminderDigest(BaseModel):
    """One aggregated reminder message for a single owner."""

    owner_id: str
    recipient: Optional[str] = Field(
        default=None,
        description="Resolved address, if a lookup was configured"
    )
    subject: str
    body: str
    subscription_count: int = Field(ge=1)


# =============================================================================
# CALENDAR
# =============================================================================

class DayCell(BaseModel):
    """A single day in the month grid."""

    day: int = Field(ge=1, le=31)
    is_today: bool = False
    subscriptions: list[Subscription] = Field(default_factory=list)
    preview: list[Subscription] = Field(
        default_factory=list,
        description="First few subscriptions shown inside the cell"
    )
    overflow_count: int = Field(
        default=0,
        ge=0,
        description="How many more than the preview (the '+N' badge)"
    )

    @property
    def has_subscriptions(self) -> bool:
        return bool(self.subscriptions)


class CalendarMonth(BaseModel):
    """
    Monday-first grid of a month.

    weeks is a list of 7-slot rows; None pads the days before the 1st
    and after the last day.
    """

    year: int
    month: int = Field(ge=1, le=12)
    weeks: list[list[Optional[DayCell]]]
    active_subscriptions: list[Subscription] = Field(default_factory=list)
    monthly_total: Decimal

    @property
    def active_count(self) -> int:
        return len(self.active_subscriptions)

    def cell(self, day: int) -> Optional[DayCell]:
        for week in self.weeks:
            for cell in week:
                if cell is not None and cell.day == day:
                    return cell
        return None


class MonthTile(BaseModel):
    """One month in the yearly overview."""

    month: int = Field(ge=1, le=12)
    is_current_month: bool = False
    active_count: int = Field(ge=0)
    marked_days: dict[int, bool] = Field(
        default_factory=dict,
        description="Day -> True if any yearly subscription falls on it"
    )


class CalendarYear(BaseModel):
    """Twelve month tiles plus the annual estimate."""

    year: int
    months: list[MonthTile]
    monthly_total: Decimal
    yearly_direct_total: Decimal
    estimated_annual: Decimal


# =============================================================================
# DISPATCH
# =============================================================================

class DispatchReport(BaseModel):
    """Outcome of one daily reminder run."""

    run_id: UUID = Field(default_factory=uuid4)
    run_date: date
    today_day: int
    subscriptions_considered: int = Field(default=0, ge=0)
    notified: list[str] = Field(
        default_factory=list,
        description="Owner IDs a digest was delivered to"
    )
    skipped: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)
    digests: list[ReminderDigest] = Field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)
