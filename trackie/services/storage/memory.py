"""
In-Memory Storage

Dict-backed implementations of the storage interfaces. Used by the test
suite and for running the services locally without a spreadsheet.
Nothing is persisted across processes.
"""

from typing import Iterable, Optional
from uuid import UUID

from trackie.models.audit import AuditEvent
from trackie.models.subscription import Subscription
from trackie.services.storage.interface import (
    AuditStorageInterface,
    DuplicateError,
    SubscriptionStorageInterface,
)


class InMemorySubscriptionStorage(SubscriptionStorageInterface):
    """Subscriptions kept in insertion order, keyed by ID."""

    def __init__(self, subscriptions: Optional[Iterable[Subscription]] = None):
        self._rows: dict[UUID, Subscription] = {}
        for sub in subscriptions or ():
            self._rows[sub.id] = sub

    async def create_subscription(self, subscription: Subscription) -> UUID:
        if subscription.id in self._rows:
            raise DuplicateError(f"Subscription already exists: {subscription.id}")
        self._rows[subscription.id] = subscription
        return subscription.id

    async def list_subscriptions(self, owner_id: str) -> list[Subscription]:
        owned = [s for s in self._rows.values() if s.owner_id == owner_id]
        return sorted(owned, key=lambda s: s.due_day)

    async def delete_subscription(self, subscription_id: UUID) -> bool:
        return self._rows.pop(subscription_id, None) is not None

    async def list_due_on_days(self, days: Iterable[int]) -> list[Subscription]:
        wanted = set(days)
        return [s for s in self._rows.values() if s.due_day in wanted]

    def __len__(self) -> int:
        return len(self._rows)


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only list of audit events."""

    def __init__(self):
        self.events: list[AuditEvent] = []

    async def append_event(self, event: AuditEvent) -> bool:
        self.events.append(event)
        return True

    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: UUID,
    ) -> list[AuditEvent]:
        matching = [
            e for e in self.events
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]
        return sorted(matching, key=lambda e: e.timestamp)

    async def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return sorted(self.events, key=lambda e: e.timestamp, reverse=True)[:limit]
