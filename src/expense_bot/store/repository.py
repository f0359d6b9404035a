"""The four query shapes the bot needs: insert, month sum, day sum, recent list.

Calendar boundaries are computed in the user's timezone and converted to UTC
before querying, so the same half-open range works on SQLite and PostgreSQL.
"""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from expense_bot.models.expense import ExpenseRecord, NewExpense
from expense_bot.store.tables import Expense, utcnow

RECENT_LIMIT = 10


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def month_bounds(now: datetime, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """Return the UTC [start, end) range of the calendar month containing ``now`` in ``tz``."""
    local = _as_utc(now).astimezone(tz)
    start = local.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def day_bounds(now: datetime, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """Return the UTC [start, end) range of the calendar day containing ``now`` in ``tz``."""
    local = _as_utc(now).astimezone(tz)
    start = local.replace(hour=0, minute=0, second=0, microsecond=0)
    end = start + timedelta(days=1)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def add_expense(
    session: Session, expense: NewExpense, created_at: datetime | None = None
) -> ExpenseRecord:
    """Insert an expense row and return it with its id and timestamp."""
    row = Expense(
        user_id=expense.user_id,
        amount=expense.amount,
        note=expense.note,
        category=expense.category,
        created_at=_as_utc(created_at) if created_at else utcnow(),
    )
    session.add(row)
    session.flush()
    return ExpenseRecord.model_validate(row)


def _sum_between(session: Session, user_id: str, start: datetime, end: datetime) -> float:
    stmt = select(func.coalesce(func.sum(Expense.amount), 0)).where(
        Expense.user_id == user_id,
        Expense.created_at >= start,
        Expense.created_at < end,
    )
    return float(session.scalar(stmt) or 0)


def sum_month(
    session: Session, user_id: str, tz: ZoneInfo, now: datetime | None = None
) -> float:
    """Total spent by ``user_id`` in the current calendar month (0 if nothing)."""
    start, end = month_bounds(now or utcnow(), tz)
    return _sum_between(session, user_id, start, end)


def sum_today(
    session: Session, user_id: str, tz: ZoneInfo, now: datetime | None = None
) -> float:
    """Total spent by ``user_id`` today (0 if nothing)."""
    start, end = day_bounds(now or utcnow(), tz)
    return _sum_between(session, user_id, start, end)


def list_recent(session: Session, user_id: str, limit: int = RECENT_LIMIT) -> list[ExpenseRecord]:
    """Return the user's most recent expenses, newest first."""
    stmt = (
        select(Expense)
        .where(Expense.user_id == user_id)
        .order_by(Expense.created_at.desc(), Expense.id.desc())
        .limit(limit)
    )
    return [ExpenseRecord.model_validate(row) for row in session.scalars(stmt)]
