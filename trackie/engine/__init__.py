"""
Visibility & aggregation engine.

Pure functions over already-loaded subscription lists. Nothing in this
package performs I/O or holds state between calls (apart from the
one-shot SessionReminderNotifier).
"""

from trackie.engine.aggregation import (
    monthly_total_for_month,
    spend_summary,
    sum_amounts,
    yearly_projection,
)
from trackie.engine.grid import build_month_view, build_year_view
from trackie.engine.reminders import (
    SessionReminderNotifier,
    notification_feed,
    reminder_days,
    reminder_notices,
    select_reminders,
)
from trackie.engine.visibility import (
    date_of,
    get_active_subs_for_month,
    get_currently_active,
    is_visible_on_day,
    month_bounds,
    subs_visible_on_day,
)

__all__ = [
    # Visibility
    "date_of",
    "get_active_subs_for_month",
    "get_currently_active",
    "is_visible_on_day",
    "month_bounds",
    "subs_visible_on_day",
    # Aggregation
    "monthly_total_for_month",
    "spend_summary",
    "sum_amounts",
    "yearly_projection",
    # Calendar
    "build_month_view",
    "build_year_view",
    # Reminders
    "SessionReminderNotifier",
    "notification_feed",
    "reminder_days",
    "reminder_notices",
    "select_reminders",
]
