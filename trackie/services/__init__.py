"""Services package."""

from trackie.services.storage import (
    AuditStorageInterface,
    ConnectionError,
    DuplicateError,
    GoogleSheetsAuditStorage,
    GoogleSheetsClient,
    GoogleSheetsSubscriptionStorage,
    InMemoryAuditStorage,
    InMemorySubscriptionStorage,
    StorageError,
    SubscriptionStorageInterface,
)

__all__ = [
    # Storage services
    "AuditStorageInterface",
    "ConnectionError",
    "DuplicateError",
    "GoogleSheetsAuditStorage",
    "GoogleSheetsClient",
    "GoogleSheetsSubscriptionStorage",
    "InMemoryAuditStorage",
    "InMemorySubscriptionStorage",
    "StorageError",
    "SubscriptionStorageInterface",
]
