"""Shared fixtures for the Trackie test suite."""

from datetime import date
from decimal import Decimal

import pytest

from trackie.models.subscription import BillingCycle, Subscription


@pytest.fixture
def make_sub():
    """Factory for Subscription records with sensible defaults."""

    def _make(
        due_day: int = 15,
        amount="500",
        cycle: BillingCycle = BillingCycle.MONTHLY,
        owner_id: str = "user-1",
        name: str = "Netflix",
        **overrides,
    ) -> Subscription:
        return Subscription(
            owner_id=owner_id,
            name=name,
            amount=Decimal(str(amount)),
            cycle=cycle,
            due_day=due_day,
            **overrides,
        )

    return _make


@pytest.fixture
def windowed_sub(make_sub):
    """Monthly 500 due on the 15th, active 2024-01-10 through 2024-06-20."""
    return make_sub(
        due_day=15,
        amount=500,
        start_date=date(2024, 1, 10),
        end_date=date(2024, 6, 20),
    )
