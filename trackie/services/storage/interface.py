"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap Google Sheets for a real database later
2. Use in-memory storage for testing
3. Keep the engine and services decoupled from storage implementation

The interface is intentionally small: subscriptions are created, listed
and deleted. There is no update; ending a subscription is a delete.
"""

from abc import ABC, abstractmethod
from typing import Iterable
from uuid import UUID

from trackie.models.audit import AuditEvent
from trackie.models.subscription import Subscription


class SubscriptionStorageInterface(ABC):
    """
    Abstract interface for subscription storage operations.

    Any storage implementation (Google Sheets, PostgreSQL, etc.)
    must implement these methods.
    """

    @abstractmethod
    async def create_subscription(self, subscription: Subscription) -> UUID:
        """
        Persist a new subscription.

        Args:
            subscription: The record to store

        Returns:
            The stored record's ID

        Raises:
            DuplicateError: If a record with this ID already exists
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def list_subscriptions(self, owner_id: str) -> list[Subscription]:
        """
        List every subscription belonging to one owner.

        Args:
            owner_id: The owning user's ID

        Returns:
            The owner's subscriptions, ordered by due day
        """
        pass

    @abstractmethod
    async def delete_subscription(self, subscription_id: UUID) -> bool:
        """
        Permanently remove a subscription.

        Args:
            subscription_id: The record's ID

        Returns:
            True if a record was deleted, False if none matched
        """
        pass

    @abstractmethod
    async def list_due_on_days(self, days: Iterable[int]) -> list[Subscription]:
        """
        List subscriptions across ALL owners whose due day is in `days`.

        Used only by the reminder dispatcher.

        Args:
            days: Day-of-month values to match

        Returns:
            Matching subscriptions from every owner
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a specific entity, in chronological order.
        """
        pass

    @abstractmethod
    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events (newest first).
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
