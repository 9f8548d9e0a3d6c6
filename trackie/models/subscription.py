"""
Subscription Record Model

The canonical shape of a tracked subscription and the date predicates
every higher-level query is composed from.

DESIGN DECISION: The stored record is deliberately permissive.
Data entry goes through NewSubscription, which enforces the invariants
(due day range, window ordering). A Subscription loaded from storage is
taken as-is so that a bad row degrades to "never visible" instead of
breaking the whole calendar.

All dates are local calendar dates. Datetimes passed to the predicates
are reduced to their date before comparing.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


DateLike = Union[date, datetime]

CUSTOM_PAYMENT_SOURCE = "Custom"

PAYMENT_SOURCES = (
    "Credit Card",
    "UPI",
    "Net Banking",
    "PayPal",
    "Google Pay",
    "Apple Pay",
    CUSTOM_PAYMENT_SOURCE,
)


def as_calendar_date(value: DateLike) -> date:
    """Drop the time-of-day part, if any."""
    if isinstance(value, datetime):
        return value.date()
    return value


# =============================================================================
# ENUMS
# =============================================================================

class BillingCycle(str, Enum):
    """
    How a subscription's due day repeats.

    MONTHLY charges on due_day every month.
    YEARLY charges once a year and aggregates at face value.
    """
    MONTHLY = "monthly"
    YEARLY = "yearly"


# =============================================================================
# STORED RECORD
# =============================================================================

class Subscription(BaseModel):
    """
    A tracked subscription, owned by exactly one user.

    Immutable: the only lifecycle change is ending it, which removes
    the record from storage entirely.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    # Identity
    id: UUID = Field(
        default_factory=uuid4,
        description="Unique subscription ID"
    )
    owner_id: str = Field(
        ...,
        description="ID of the owning user (from the identity provider)"
    )

    # What is being paid
    name: str = Field(
        ...,
        description="Display name, also used for brand lookup"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Charge per cycle"
    )
    currency: str = Field(
        default="INR",
        max_length=3,
        description="ISO currency code (display only, never converted)"
    )
    cycle: BillingCycle = Field(
        default=BillingCycle.MONTHLY,
        description="Billing cycle"
    )
    due_day: int = Field(
        ...,
        description="Day of month the charge recurs on"
    )

    # Presentation
    color: str = Field(
        default="#6B7280",
        description="Brand color (hex)"
    )
    initial: str = Field(
        default="?",
        max_length=1,
        description="Single-character badge"
    )

    # Payment method
    autopay: bool = True
    payment_source: str = "Credit Card"

    # Active window, both bounds inclusive and optional
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the record was created (display only)"
    )

    def is_active_on(self, on: DateLike) -> bool:
        """
        True if `on` falls inside [start_date, end_date].

        A missing start_date means no lower bound, a missing end_date
        means no upper bound.
        """
        on = as_calendar_date(on)
        if self.start_date and on < self.start_date:
            return False
        if self.end_date and on > self.end_date:
            return False
        return True

    def is_canceled(self, today: Optional[DateLike] = None) -> bool:
        """
        True if end_date is set and strictly before today.

        A subscription ending today is still active through its last day.
        """
        if self.end_date is None:
            return False
        today = as_calendar_date(today or date.today())
        return self.end_date < today

    def is_currently_active(self, today: Optional[DateLike] = None) -> bool:
        return not self.is_canceled(today)

    def status_label(self, today: Optional[DateLike] = None) -> str:
        """Label shown next to the subscription in listings."""
        if not self.is_canceled(today):
            return "Active"
        return "Autopay stopped" if self.autopay else "Canceled"


# =============================================================================
# DATA ENTRY
# =============================================================================

class NewSubscription(BaseModel):
    """
    A subscription as entered by the user, before it is stored.

    This is where the record invariants are enforced. Missing start_date
    and presentation fields are filled in by SubscriptionService.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Display name"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        decimal_places=2,
        description="Charge per cycle"
    )
    currency: Optional[str] = Field(
        default=None,
        min_length=3,
        max_length=3,
        description="ISO code; the configured currency when omitted"
    )
    cycle: BillingCycle = BillingCycle.MONTHLY
    due_day: int = Field(
        ...,
        ge=1,
        le=31,
        description="Day of month (1-31)"
    )
    autopay: bool = True
    payment_source: str = Field(
        default="Credit Card",
        description="One of PAYMENT_SOURCES ('Custom' takes a free-text label)"
    )
    custom_payment_source: Optional[str] = Field(
        default=None,
        max_length=50,
        description="Label used when payment_source is 'Custom'"
    )
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    # Optional overrides of the brand lookup
    color: Optional[str] = Field(
        default=None,
        pattern="^#[0-9A-Fa-f]{6}$"
    )
    initial: Optional[str] = Field(default=None, min_length=1, max_length=1)

    @field_validator('currency')
    @classmethod
    def normalize_currency(cls, v: Optional[str]) -> Optional[str]:
        return v.upper() if v else v

    @field_validator('payment_source')
    @classmethod
    def validate_payment_source(cls, v: str) -> str:
        if v not in PAYMENT_SOURCES:
            raise ValueError(f"Unknown payment source: {v}. Pick 'Custom' for anything else")
        return v

    @model_validator(mode='after')
    def validate_window(self) -> 'NewSubscription':
        """Validate the active window and the custom payment label."""
        if self.start_date and self.end_date:
            if self.end_date < self.start_date:
                raise ValueError("End date cannot be before start date")

        if self.payment_source == CUSTOM_PAYMENT_SOURCE:
            if not self.custom_payment_source:
                raise ValueError("Custom payment source needs a label")

        return self

    @property
    def resolved_payment_source(self) -> str:
        """The label actually stored on the record."""
        if self.payment_source == CUSTOM_PAYMENT_SOURCE:
            return self.custom_payment_source
        return self.payment_source
