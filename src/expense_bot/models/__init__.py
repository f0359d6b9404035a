"""Data models for parsed commands and stored expenses."""

from expense_bot.models.command import (
    AddExpense,
    CommandType,
    Help,
    Invalid,
    ListRecent,
    MonthSummary,
    ParsedCommand,
    TodaySummary,
)
from expense_bot.models.expense import ExpenseRecord, NewExpense

__all__ = [
    "AddExpense",
    "CommandType",
    "ExpenseRecord",
    "Help",
    "Invalid",
    "ListRecent",
    "MonthSummary",
    "NewExpense",
    "ParsedCommand",
    "TodaySummary",
]
