"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Google Sheets is the persistent backend; the in-memory backend serves
tests and local runs.
"""

from trackie.services.storage.interface import (
    AuditStorageInterface,
    ConnectionError,
    DuplicateError,
    StorageError,
    SubscriptionStorageInterface,
)
from trackie.services.storage.memory import (
    InMemoryAuditStorage,
    InMemorySubscriptionStorage,
)
from trackie.services.storage.google_sheets import (
    GoogleSheetsAuditStorage,
    GoogleSheetsClient,
    GoogleSheetsSubscriptionStorage,
    row_to_subscription,
    subscription_to_row,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "SubscriptionStorageInterface",
    # Exceptions
    "ConnectionError",
    "DuplicateError",
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemorySubscriptionStorage",
    # Google Sheets implementation
    "GoogleSheetsAuditStorage",
    "GoogleSheetsClient",
    "GoogleSheetsSubscriptionStorage",
    "row_to_subscription",
    "subscription_to_row",
]
