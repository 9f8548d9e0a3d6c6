"""
Google Sheets Storage Implementation

DESIGN DECISION: Google Sheets is the default storage backend because:
1. Users can look at (and back up) their subscription list directly
2. No database setup required
3. A personal subscription list is tens of rows, not thousands

TRADEOFFS:
- No transactions (a delete is a single row removal, which is enough)
- No server-side filtering (we filter in Python)

The implementation follows the abstract interface, so we can swap
to PostgreSQL/SQLite later without changing the engine or services.
"""

import json
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

import gspread
import structlog
from google.oauth2.service_account import Credentials
from tenacity import (
    retry,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from trackie.config import get_settings
from trackie.models.audit import AuditEvent, AuditEventType, AuditSeverity
from trackie.models.subscription import BillingCycle, Subscription
from trackie.services.storage.interface import (
    AuditStorageInterface,
    ConnectionError,
    DuplicateError,
    StorageError,
    SubscriptionStorageInterface,
)


logger = structlog.get_logger(__name__)


# Column mappings for Subscriptions sheet
SUBSCRIPTION_COLUMNS = [
    "id",
    "owner_id",
    "name",
    "amount",
    "currency",
    "cycle",
    "due_day",
    "color",
    "initial",
    "autopay",
    "payment_source",
    "start_date",
    "end_date",
    "created_at",
]

# Column mappings for Audit sheet
AUDIT_COLUMNS = [
    "event_id",
    "timestamp",
    "event_type",
    "severity",
    "entity_type",
    "entity_id",
    "owner_id",
    "description",
    "details_json",
    "error_message",
    "is_user_action",
]


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and provides retry logic for API calls.
    """

    def __init__(self):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = get_settings().google_sheets

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """Establish connection using service account credentials."""
        if self._client is None:
            try:
                scopes = [
                    "https://www.googleapis.com/auth/spreadsheets",
                    "https://www.googleapis.com/auth/drive",
                ]
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=scopes,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise ConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise ConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise ConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
        return self._spreadsheet

    def _get_or_create_sheet(self, title: str, columns: list[str], rows: int) -> gspread.Worksheet:
        spreadsheet = self.get_spreadsheet()
        try:
            sheet = spreadsheet.worksheet(title)
        except gspread.WorksheetNotFound:
            sheet = spreadsheet.add_worksheet(title=title, rows=rows, cols=len(columns))
            sheet.append_row(columns)
        return sheet

    def get_subscriptions_sheet(self) -> gspread.Worksheet:
        """Get or create the Subscriptions worksheet."""
        return self._get_or_create_sheet(
            self._settings.subscriptions_sheet_name,
            SUBSCRIPTION_COLUMNS,
            rows=1000,
        )

    def get_audit_sheet(self) -> gspread.Worksheet:
        """Get or create the Audit worksheet."""
        return self._get_or_create_sheet(
            self._settings.audit_sheet_name,
            AUDIT_COLUMNS,
            rows=5000,
        )


def _safe_getter(row: list):
    def safe_get(index: int, default: str = "") -> str:
        try:
            return row[index] if row[index] else default
        except IndexError:
            return default
    return safe_get


def subscription_to_row(sub: Subscription) -> list:
    """Convert a Subscription to a spreadsheet row."""
    return [
        str(sub.id),
        sub.owner_id,
        sub.name,
        str(sub.amount),
        sub.currency,
        sub.cycle.value,
        str(sub.due_day),
        sub.color,
        sub.initial,
        str(sub.autopay),
        sub.payment_source,
        sub.start_date.isoformat() if sub.start_date else "",
        sub.end_date.isoformat() if sub.end_date else "",
        sub.created_at.isoformat(),
    ]


def row_to_subscription(row: list) -> Subscription:
    """Convert a spreadsheet row to a Subscription."""
    safe_get = _safe_getter(row)
    return Subscription(
        id=UUID(safe_get(0)),
        owner_id=safe_get(1),
        name=safe_get(2),
        amount=Decimal(safe_get(3, "0")),
        currency=safe_get(4, "INR"),
        cycle=BillingCycle(safe_get(5, "monthly")),
        due_day=int(safe_get(6, "0")),
        color=safe_get(7, "#6B7280"),
        initial=safe_get(8, "?"),
        autopay=safe_get(9).lower() == "true",
        payment_source=safe_get(10),
        start_date=date.fromisoformat(safe_get(11)) if safe_get(11) else None,
        end_date=date.fromisoformat(safe_get(12)) if safe_get(12) else None,
        created_at=datetime.fromisoformat(safe_get(13)) if safe_get(13) else datetime.utcnow(),
    )


class GoogleSheetsSubscriptionStorage(SubscriptionStorageInterface):
    """
    Google Sheets implementation of subscription storage.

    One subscription per row. Rows that fail to parse are skipped and
    logged, so one bad edit in the sheet cannot hide the whole list.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    def _load_all(self) -> list[Subscription]:
        sheet = self._client.get_subscriptions_sheet()
        subs = []
        for row in sheet.get_all_values()[1:]:  # Skip header
            if not row or not row[0]:
                continue
            try:
                subs.append(row_to_subscription(row))
            except Exception as e:
                logger.warning("subscription_row_skipped", row_id=row[0], error=str(e))
        return subs

    @retry(
        retry=retry_if_not_exception_type(DuplicateError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def create_subscription(self, subscription: Subscription) -> UUID:
        try:
            sheet = self._client.get_subscriptions_sheet()
            existing_ids = sheet.col_values(1)[1:]
            if str(subscription.id) in existing_ids:
                raise DuplicateError(f"Subscription already exists: {subscription.id}")
            sheet.append_row(subscription_to_row(subscription), value_input_option="RAW")
            return subscription.id
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to save subscription: {e}")

    async def list_subscriptions(self, owner_id: str) -> list[Subscription]:
        try:
            owned = [s for s in self._load_all() if s.owner_id == owner_id]
        except Exception as e:
            raise StorageError(f"Failed to list subscriptions: {e}")
        return sorted(owned, key=lambda s: s.due_day)

    async def delete_subscription(self, subscription_id: UUID) -> bool:
        try:
            sheet = self._client.get_subscriptions_sheet()
            all_rows = sheet.get_all_values()

            for idx, row in enumerate(all_rows[1:], start=2):  # Row 1 is header
                if row and row[0] == str(subscription_id):
                    sheet.delete_rows(idx)
                    return True

            return False
        except Exception as e:
            raise StorageError(f"Failed to delete subscription: {e}")

    async def list_due_on_days(self, days: Iterable[int]) -> list[Subscription]:
        wanted = set(days)
        try:
            return [s for s in self._load_all() if s.due_day in wanted]
        except Exception as e:
            raise StorageError(f"Failed to list due subscriptions: {e}")


class GoogleSheetsAuditStorage(AuditStorageInterface):
    """
    Google Sheets implementation of audit log storage.

    Audit events are append-only.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    def _row_to_event(self, row: list) -> AuditEvent:
        safe_get = _safe_getter(row)
        return AuditEvent(
            event_id=UUID(safe_get(0)),
            timestamp=datetime.fromisoformat(safe_get(1)),
            event_type=AuditEventType(safe_get(2)),
            severity=AuditSeverity(safe_get(3)),
            entity_type=safe_get(4) or None,
            entity_id=UUID(safe_get(5)) if safe_get(5) else None,
            owner_id=safe_get(6) or None,
            description=safe_get(7),
            details=json.loads(safe_get(8)) if safe_get(8) else {},
            error_message=safe_get(9) or None,
            is_user_action=safe_get(10).lower() == "true",
        )

    def _load_events(self) -> list[AuditEvent]:
        sheet = self._client.get_audit_sheet()
        events = []
        for row in sheet.get_all_values()[1:]:
            if not row or not row[0]:
                continue
            try:
                events.append(self._row_to_event(row))
            except Exception:
                continue
        return events

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def append_event(self, event: AuditEvent) -> bool:
        try:
            sheet = self._client.get_audit_sheet()
            sheet.append_row(event.to_sheets_row(), value_input_option="RAW")
            return True
        except Exception as e:
            # audit logging should not break the main flow
            logger.warning("audit_append_failed", error=str(e), event_id=str(event.event_id))
            return False

    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: UUID,
    ) -> list[AuditEvent]:
        try:
            events = [
                e for e in self._load_events()
                if e.entity_type == entity_type and e.entity_id == entity_id
            ]
        except Exception as e:
            raise StorageError(f"Failed to get audit events: {e}")
        return sorted(events, key=lambda e: e.timestamp)

    async def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        try:
            events = self._load_events()
        except Exception as e:
            raise StorageError(f"Failed to get audit events: {e}")
        events.sort(key=lambda e: e.timestamp, reverse=True)
        return events[:limit]
