"""Display helpers shared by the notification feed, reminders and listings."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional


def format_amount(amount: Decimal, symbol: str = "₹") -> str:
    """
    Format an amount with Indian digit grouping.

    1234567 -> "₹12,34,567". Fractions are rounded half up to two places
    and only shown when non-zero.
    """
    amount = Decimal(amount)
    sign = "-" if amount < 0 else ""
    amount = abs(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    whole, _, fraction = f"{amount:f}".partition(".")

    # last three digits, then groups of two
    head, tail = whole[:-3], whole[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    grouped = ",".join(groups + [tail])

    fraction = fraction.rstrip("0")
    if fraction:
        fraction = fraction.ljust(2, "0")
        return f"{sign}{symbol}{grouped}.{fraction}"
    return f"{sign}{symbol}{grouped}"


def ordinal(day: int) -> str:
    """1 -> '1st', 12 -> '12th', 22 -> '22nd'."""
    if 10 <= day % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def tenure(created_at: datetime, now: Optional[datetime] = None) -> str:
    """
    How long a subscription has been tracked, e.g. '12d', '3mo', '1y 2mo'.

    Months are 30 days and years 12 months; this is a label, not billing.
    """
    now = now or datetime.utcnow()
    days = max((now - created_at).days, 0)
    if days < 30:
        return f"{days}d"
    months = days // 30
    if months < 12:
        return f"{months}mo"
    years, rem = divmod(months, 12)
    return f"{years}y {rem}mo" if rem else f"{years}y"
