"""
Integration tests for the subscription service.

Runs the full add → list → view → end flow against in-memory storage.
"""

import asyncio
import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4

from trackie import run_reminders
from trackie.audit import AuditLogger
from trackie.config import AppSettings
from trackie.models.audit import AuditEventType
from trackie.models.subscription import BillingCycle, NewSubscription
from trackie.orchestrator import SubscriptionService, create_app_components
from trackie.services.reminders import ReminderDispatcher
from trackie.services.storage import (
    InMemoryAuditStorage,
    InMemorySubscriptionStorage,
    StorageError,
)


TODAY = date(2024, 3, 10)


class BrokenStorage(InMemorySubscriptionStorage):
    async def list_subscriptions(self, owner_id):
        raise StorageError("sheet unavailable")

    async def create_subscription(self, subscription):
        raise StorageError("sheet unavailable")


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def service(audit_storage):
    return SubscriptionService(
        storage=InMemorySubscriptionStorage(),
        audit_logger=AuditLogger(audit_storage),
        app_settings=AppSettings(),
    )


def draft(**overrides) -> NewSubscription:
    fields = {"name": "Netflix", "amount": Decimal("649"), "due_day": 15}
    fields.update(overrides)
    return NewSubscription(**fields)


class TestAddSubscription:
    """Tests for creation defaults and auditing."""

    def test_defaults_applied(self, service, audit_storage):
        sub = asyncio.run(service.add_subscription("user-1", draft(), today=TODAY))

        assert sub.owner_id == "user-1"
        assert sub.start_date == TODAY
        assert sub.end_date is None
        assert sub.color == "#E50914"
        assert sub.initial == "N"
        assert audit_storage.events[0].event_type == AuditEventType.SUBSCRIPTION_CREATED

    def test_unknown_brand_and_overrides(self, service):
        plain = asyncio.run(service.add_subscription("user-1", draft(name="gym"), today=TODAY))
        assert plain.color == "#6B7280"
        assert plain.initial == "G"

        custom = asyncio.run(service.add_subscription(
            "user-1",
            draft(name="gym", color="#123456", initial="X", start_date=date(2024, 1, 1)),
            today=TODAY,
        ))
        assert custom.color == "#123456"
        assert custom.initial == "X"
        assert custom.start_date == date(2024, 1, 1)

    def test_currency_defaults_to_configured_code(self, monkeypatch, audit_storage):
        monkeypatch.setenv("CURRENCY_CODE", "USD")
        service = SubscriptionService(
            InMemorySubscriptionStorage(),
            AuditLogger(audit_storage),
            AppSettings(),
        )

        implicit = asyncio.run(service.add_subscription("user-1", draft(), today=TODAY))
        explicit = asyncio.run(service.add_subscription("user-1", draft(currency="eur"), today=TODAY))

        assert implicit.currency == "USD"
        assert explicit.currency == "EUR"

    def test_custom_payment_label_stored(self, service):
        sub = asyncio.run(service.add_subscription(
            "user-1",
            draft(payment_source="Custom", custom_payment_source="HDFC Debit"),
            today=TODAY,
        ))
        assert sub.payment_source == "HDFC Debit"

    def test_write_failure_raises_and_audits(self, audit_storage):
        service = SubscriptionService(BrokenStorage(), AuditLogger(audit_storage))

        with pytest.raises(StorageError):
            asyncio.run(service.add_subscription("user-1", draft(), today=TODAY))
        assert [e.event_type for e in audit_storage.events] == [AuditEventType.STORAGE_ERROR]


class TestEndSubscription:
    """Tests for ending (deleting) subscriptions."""

    def test_end_removes_record(self, service, audit_storage):
        sub = asyncio.run(service.add_subscription("user-1", draft(), today=TODAY))

        assert asyncio.run(service.end_subscription(sub.id)) is True
        assert asyncio.run(service.list_subscriptions("user-1")) == []
        assert audit_storage.events[-1].event_type == AuditEventType.SUBSCRIPTION_ENDED

    def test_end_unknown(self, service, audit_storage):
        assert asyncio.run(service.end_subscription(uuid4())) is False
        assert audit_storage.events[-1].event_type == AuditEventType.SUBSCRIPTION_END_MISSING


class TestReadsAndViews:
    """Tests for listing and the engine-backed views."""

    def test_list_ordered_by_due_day(self, service):
        for name, day in (("A", 20), ("B", 3), ("C", 11)):
            asyncio.run(service.add_subscription("user-1", draft(name=name, due_day=day), today=TODAY))
        asyncio.run(service.add_subscription("user-2", draft(due_day=1), today=TODAY))

        listed = asyncio.run(service.list_subscriptions("user-1"))
        assert [s.name for s in listed] == ["B", "C", "A"]

    def test_load_degrades_to_empty(self, audit_storage):
        service = SubscriptionService(BrokenStorage(), AuditLogger(audit_storage))

        assert asyncio.run(service.load_subscriptions("user-1")) == []
        assert audit_storage.events[0].event_type == AuditEventType.STORAGE_ERROR
        assert audit_storage.events[0].owner_id == "user-1"

        view = asyncio.run(service.month_view("user-1", 2024, 3, today=TODAY))
        assert view.monthly_total == Decimal("0")

    def test_views(self, service):
        asyncio.run(service.add_subscription(
            "user-1",
            draft(name="Spotify", amount=Decimal("119"), due_day=11),
            today=TODAY,
        ))
        asyncio.run(service.add_subscription(
            "user-1",
            draft(name="iCloud+", amount=Decimal("1200"), due_day=5, cycle=BillingCycle.YEARLY),
            today=TODAY,
        ))

        month = asyncio.run(service.month_view("user-1", 2024, 3, today=TODAY))
        assert [s.name for s in month.cell(11).subscriptions] == ["Spotify"]
        assert month.monthly_total == Decimal("119")

        year = asyncio.run(service.year_view("user-1", 2024, today=TODAY))
        assert year.estimated_annual == Decimal("119") * 12 + Decimal("1200")

        summary = asyncio.run(service.summary("user-1", today=TODAY))
        assert summary.active_count == 2

        feed = asyncio.run(service.notifications("user-1", today=TODAY))
        assert [e.title for e in feed.upcoming] == ["Spotify"]
        assert [e.title for e in feed.paid] == ["iCloud+"]


class TestFactory:
    def test_in_memory_components(self):
        service, dispatcher = create_app_components(use_storage=False)
        assert isinstance(service, SubscriptionService)
        assert isinstance(dispatcher, ReminderDispatcher)

    def test_reminder_entrypoint(self):
        """Test the daily run exits cleanly with nothing to send."""
        assert run_reminders.main(["--no-storage", "--date", "2024-03-28"]) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
