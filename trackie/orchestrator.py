"""
Main Orchestrator for Trackie

Ties storage, audit and the pure engine together. Defines the flows for:
1. Lifecycle (add subscription → store → audit; end subscription → delete → audit)
2. Views (load owner's list → run engine → return models)

DESIGN DECISION: The orchestrator enforces the boundaries:
- The engine never sees storage; it only gets loaded lists
- Ending a subscription is a permanent delete, never a status flag
- Every lifecycle step is audited

View flows degrade to an empty list when storage fails, so a storage
outage renders an empty calendar instead of an error page.
"""

from datetime import date
from typing import Optional
from uuid import UUID

import structlog

from trackie.audit import AuditLogger
from trackie.brands import brand_for
from trackie.config import AppSettings, get_settings
from trackie.engine import (
    build_month_view,
    build_year_view,
    notification_feed,
    spend_summary,
)
from trackie.models.subscription import (
    DateLike,
    NewSubscription,
    Subscription,
    as_calendar_date,
)
from trackie.models.views import (
    CalendarMonth,
    CalendarYear,
    NotificationFeed,
    SpendSummary,
)
from trackie.services.reminders import LoggingReminderSender, ReminderDispatcher
from trackie.services.storage import (
    GoogleSheetsAuditStorage,
    GoogleSheetsClient,
    GoogleSheetsSubscriptionStorage,
    InMemorySubscriptionStorage,
    StorageError,
    SubscriptionStorageInterface,
)


logger = structlog.get_logger(__name__)


class SubscriptionService:
    """
    Orchestrates the subscription lifecycle and the owner-facing views.

    Lifecycle:
    1. Add → fill defaults (start date, brand) → store → audit
    2. End → delete permanently → audit

    There is no update. A changed subscription is ended and re-added.
    """

    def __init__(
        self,
        storage: SubscriptionStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        app_settings: Optional[AppSettings] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._settings = app_settings or AppSettings()

    # Lifecycle flows

    def build_subscription(
        self,
        owner_id: str,
        draft: NewSubscription,
        today: Optional[DateLike] = None,
    ) -> Subscription:
        """
        Turn a validated draft into a record, applying creation defaults.

        start_date defaults to today, currency to the configured code;
        color and initial default to the brand table (or the configured
        fallback color).
        """
        today = as_calendar_date(today or date.today())
        brand = brand_for(draft.name, self._settings.default_brand_color)

        return Subscription(
            owner_id=owner_id,
            name=draft.name,
            amount=draft.amount,
            currency=draft.currency or self._settings.currency_code,
            cycle=draft.cycle,
            due_day=draft.due_day,
            color=draft.color or brand.color,
            initial=draft.initial or brand.initial,
            autopay=draft.autopay,
            payment_source=draft.resolved_payment_source,
            start_date=draft.start_date or today,
            end_date=draft.end_date,
        )

    async def add_subscription(
        self,
        owner_id: str,
        draft: NewSubscription,
        today: Optional[DateLike] = None,
    ) -> Subscription:
        """
        Store a new subscription for `owner_id`.

        Raises:
            StorageError: If the write fails (nothing is audited as created)
        """
        sub = self.build_subscription(owner_id, draft, today)
        try:
            await self._storage.create_subscription(sub)
        except StorageError as e:
            await self._audit_logger.log_storage_error("create_subscription", str(e), owner_id)
            raise

        await self._audit_logger.log_subscription_created(sub)
        return sub

    async def end_subscription(self, subscription_id: UUID) -> bool:
        """
        End a subscription. This removes the record permanently.

        Returns:
            True if a record was removed, False if none matched

        Raises:
            StorageError: If the delete fails
        """
        try:
            removed = await self._storage.delete_subscription(subscription_id)
        except StorageError as e:
            await self._audit_logger.log_storage_error("delete_subscription", str(e))
            raise

        await self._audit_logger.log_subscription_ended(subscription_id, found=removed)
        return removed

    # Reads

    async def list_subscriptions(self, owner_id: str) -> list[Subscription]:
        """
        The owner's subscriptions, ordered by due day.

        Raises:
            StorageError: If the read fails
        """
        subs = await self._storage.list_subscriptions(owner_id)
        return sorted(subs, key=lambda s: s.due_day)

    async def load_subscriptions(self, owner_id: str) -> list[Subscription]:
        """Like list_subscriptions, but an empty list when storage fails."""
        try:
            return await self.list_subscriptions(owner_id)
        except StorageError as e:
            await self._audit_logger.log_storage_error("list_subscriptions", str(e), owner_id)
            return []

    # Owner views

    async def month_view(
        self,
        owner_id: str,
        year: int,
        month: int,
        today: Optional[DateLike] = None,
    ) -> CalendarMonth:
        subs = await self.load_subscriptions(owner_id)
        return build_month_view(
            subs,
            year,
            month,
            today=today,
            preview_limit=self._settings.calendar_cell_preview_limit,
        )

    async def year_view(
        self,
        owner_id: str,
        year: int,
        today: Optional[DateLike] = None,
    ) -> CalendarYear:
        subs = await self.load_subscriptions(owner_id)
        return build_year_view(subs, year, today=today)

    async def summary(
        self,
        owner_id: str,
        today: Optional[DateLike] = None,
    ) -> SpendSummary:
        subs = await self.load_subscriptions(owner_id)
        return spend_summary(subs, today)

    async def notifications(
        self,
        owner_id: str,
        today: Optional[DateLike] = None,
    ) -> NotificationFeed:
        subs = await self.load_subscriptions(owner_id)
        return notification_feed(subs, today, symbol=self._settings.currency_symbol)


def create_app_components(
    use_storage: bool = True,
) -> tuple[SubscriptionService, ReminderDispatcher]:
    """
    Factory function to create all application components.

    Args:
        use_storage: Whether to initialize Google Sheets storage.
                    Set to False to run against in-memory storage.

    Returns:
        (subscription_service, reminder_dispatcher)
    """
    settings = get_settings()
    storage: SubscriptionStorageInterface

    if use_storage:
        try:
            sheets_client = GoogleSheetsClient()
            storage = GoogleSheetsSubscriptionStorage(sheets_client)
            audit_logger = AuditLogger(GoogleSheetsAuditStorage(sheets_client))
        except Exception as e:
            # Storage not configured - continue without it
            logger.warning("storage_not_configured", error=str(e))
            storage = InMemorySubscriptionStorage()
            audit_logger = AuditLogger()  # Local-only logging
    else:
        storage = InMemorySubscriptionStorage()
        audit_logger = AuditLogger()

    app_settings = settings.app

    service = SubscriptionService(
        storage=storage,
        audit_logger=audit_logger,
        app_settings=app_settings,
    )
    dispatcher = ReminderDispatcher(
        storage=storage,
        sender=LoggingReminderSender(),
        audit_logger=audit_logger,
        settings=settings.reminders,
        currency_symbol=app_settings.currency_symbol,
    )

    return service, dispatcher
