"""Norwegian currency and date formatting for replies."""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Context, Decimal
from zoneinfo import ZoneInfo

NBSP = "\u00a0"
MINUS_SIGN = "\u2212"
CENT = Decimal("0.01")
# Wide enough to quantize any finite float to cents
_CENTS_CONTEXT = Context(prec=400)


def format_nok(amount: float) -> str:
    """Format an amount in Norwegian kroner, e.g. ``1 234,50 kr``.

    Matches the nb-NO currency style: non-breaking-space digit grouping,
    comma as decimal separator, and a trailing ``kr``.
    """
    # Halves round away from zero, as nb-NO does
    rounded = Decimal(repr(amount)).quantize(
        CENT, rounding=ROUND_HALF_UP, context=_CENTS_CONTEXT
    )
    whole, fraction = f"{rounded.copy_abs():,.2f}".split(".")
    sign = MINUS_SIGN if rounded < 0 else ""
    return f"{sign}{whole.replace(',', NBSP)},{fraction}{NBSP}kr"


def format_timestamp(value: datetime, tz: ZoneInfo) -> str:
    """Format a timestamp as short Norwegian date and time, e.g. ``17.10.2026, 14:05``.

    Naive datetimes are assumed to be UTC (SQLite drops the offset).
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(tz).strftime("%d.%m.%Y, %H:%M")
