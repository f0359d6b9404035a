"""Relational expense store (SQLAlchemy)."""

from expense_bot.store.db import (
    StoreNotConfiguredError,
    ensure_schema,
    get_engine,
    reset_engine,
    session_scope,
)
from expense_bot.store.repository import add_expense, list_recent, sum_month, sum_today

__all__ = [
    "StoreNotConfiguredError",
    "add_expense",
    "ensure_schema",
    "get_engine",
    "list_recent",
    "reset_engine",
    "session_scope",
    "sum_month",
    "sum_today",
]
