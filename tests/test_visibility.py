"""Tests for the visibility engine."""

import pytest
from datetime import date

from trackie.engine.visibility import (
    date_of,
    get_active_subs_for_month,
    get_currently_active,
    is_visible_on_day,
    month_bounds,
    subs_visible_on_day,
)


class TestDateHelpers:
    """Tests for date_of and month_bounds."""

    def test_date_of_valid(self):
        assert date_of(2024, 2, 29) == date(2024, 2, 29)

    @pytest.mark.parametrize("year,month,day", [(2023, 2, 29), (2024, 4, 31), (2024, 6, 40)])
    def test_date_of_invalid(self, year, month, day):
        """Test that non-existent dates give None instead of rolling over."""
        assert date_of(year, month, day) is None

    def test_month_bounds(self):
        assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
        assert month_bounds(2023, 12) == (date(2023, 12, 1), date(2023, 12, 31))


class TestIsVisibleOnDay:
    """Tests for the per-cell predicate."""

    def test_scenario_january_visible(self, windowed_sub):
        """Test Jan 15 2024 is inside the window."""
        assert is_visible_on_day(windowed_sub, 2024, 1, 15)

    def test_scenario_july_hidden(self, windowed_sub):
        """Test Jul 15 2024 is after the end date."""
        assert not is_visible_on_day(windowed_sub, 2024, 7, 15)

    def test_due_day_before_start_in_start_month(self, make_sub):
        """Test the start month hides a due day that precedes the start date."""
        sub = make_sub(due_day=5, start_date=date(2024, 1, 10))
        assert not is_visible_on_day(sub, 2024, 1, 5)
        assert is_visible_on_day(sub, 2024, 2, 5)

    def test_only_due_day_is_visible(self, windowed_sub):
        """Test that every other day of the month is false."""
        for day in range(1, 32):
            if day != 15:
                assert not is_visible_on_day(windowed_sub, 2024, 3, day)

    def test_other_days_false_even_without_window(self, make_sub):
        sub = make_sub(due_day=10)
        assert [d for d in range(1, 32) if is_visible_on_day(sub, 2024, 5, d)] == [10]

    def test_due_day_31_skips_short_months(self, make_sub):
        """Test that day 31 never moves to the 30th."""
        sub = make_sub(due_day=31)
        assert not is_visible_on_day(sub, 2024, 4, 30)
        assert not is_visible_on_day(sub, 2024, 4, 31)
        assert is_visible_on_day(sub, 2024, 5, 31)

    def test_out_of_range_due_day_is_never_visible(self, make_sub):
        sub = make_sub(due_day=0)
        assert not any(is_visible_on_day(sub, 2024, 1, d) for d in range(1, 32))

    def test_subs_visible_on_day_keeps_order(self, make_sub):
        a = make_sub(name="A", due_day=3)
        b = make_sub(name="B", due_day=4)
        c = make_sub(name="C", due_day=3)
        assert subs_visible_on_day([a, b, c], 2024, 1, 3) == [a, c]


class TestActiveSubsForMonth:
    """Tests for the month-overlap set."""

    def test_window_inside_month(self, make_sub):
        sub = make_sub(start_date=date(2024, 3, 5), end_date=date(2024, 3, 20))
        assert get_active_subs_for_month([sub], 2024, 3) == [sub]

    def test_ended_before_month(self, make_sub):
        sub = make_sub(end_date=date(2024, 2, 29))
        assert get_active_subs_for_month([sub], 2024, 3) == []

    def test_starts_after_month(self, make_sub):
        sub = make_sub(start_date=date(2024, 4, 1))
        assert get_active_subs_for_month([sub], 2024, 3) == []

    def test_partial_overlap_at_start(self, make_sub):
        sub = make_sub(start_date=date(2024, 2, 15), end_date=date(2024, 3, 1))
        assert get_active_subs_for_month([sub], 2024, 3) == [sub]

    def test_partial_overlap_at_end(self, make_sub):
        sub = make_sub(start_date=date(2024, 3, 31))
        assert get_active_subs_for_month([sub], 2024, 3) == [sub]

    def test_included_even_if_due_day_passed(self, make_sub):
        """Test that overlap, not the due day, decides membership."""
        sub = make_sub(due_day=2, start_date=date(2024, 3, 10))
        assert not is_visible_on_day(sub, 2024, 3, 2)
        assert get_active_subs_for_month([sub], 2024, 3) == [sub]

    def test_no_window(self, make_sub):
        sub = make_sub()
        assert get_active_subs_for_month([sub], 1999, 1) == [sub]


class TestCurrentlyActive:
    """Tests for the today-relative set."""

    def test_filters_canceled(self, make_sub):
        running = make_sub(name="Running")
        last_day = make_sub(name="LastDay", end_date=date(2024, 6, 20))
        ended = make_sub(name="Ended", end_date=date(2024, 6, 19))

        active = get_currently_active([running, last_day, ended], date(2024, 6, 20))
        assert active == [running, last_day]

    def test_independent_of_viewed_month(self, make_sub):
        """Test that an old subscription is inactive today but still in its month."""
        old = make_sub(end_date=date(2023, 1, 31))
        assert get_currently_active([old], date(2024, 6, 1)) == []
        assert get_active_subs_for_month([old], 2023, 1) == [old]

    def test_empty(self):
        assert get_currently_active([], date(2024, 1, 1)) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
