"""
Trackie - Source Package

A personal subscription-tracking calendar. Recurring payments are
projected onto monthly and yearly calendars, summed into spend
statistics, and turned into due-date reminders.

DESIGN PRINCIPLES:
1. The engine is pure: records in, answers out
2. Cancellation is derived from dates, never stored
3. Ending a subscription deletes it
4. Calendar and reminders share one due-day arithmetic
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Trackie Team"
