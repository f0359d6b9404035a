"""Tests for reply text builders."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from expense_bot.models.command import AddExpense
from expense_bot.models.expense import ExpenseRecord
from expense_bot.slack.replies import (
    HELP_TEXT,
    NO_EXPENSES_TEXT,
    expense_added,
    month_total,
    recent_expenses,
    today_total,
)

OSLO = ZoneInfo("Europe/Oslo")


def _record(**overrides: object) -> ExpenseRecord:
    base = {
        "id": 1,
        "user_id": "U1",
        "amount": 120.0,
        "note": "kaffe",
        "category": "mat",
        "created_at": datetime(2026, 10, 17, 12, 5, tzinfo=timezone.utc),
    }
    base.update(overrides)
    return ExpenseRecord(**base)


def test_help_lists_four_examples():
    lines = HELP_TEXT.split("\n")
    assert lines[0] == "Bruk:"
    assert len(lines) == 5
    assert all(line.startswith("/expense ") for line in lines[1:])


def test_expense_added_with_category():
    command = AddExpense(amount=1234.5, note="sykkel", category="sport")
    assert expense_added(command) == "✅ Registrert: 1\u00a0234,50\u00a0kr – sykkel (#sport)"


def test_expense_added_without_category():
    command = AddExpense(amount=12, note="buss")
    assert expense_added(command) == "✅ Registrert: 12,00\u00a0kr – buss"


def test_month_total():
    assert month_total(0) == "\U0001f4c5 Denne måneden: 0,00\u00a0kr"


def test_today_total():
    assert today_total(219.5) == "\U0001f4cc I dag: 219,50\u00a0kr"


def test_recent_expenses_empty():
    assert recent_expenses([], OSLO) == NO_EXPENSES_TEXT


def test_recent_expenses_lines():
    records = [
        _record(),
        _record(id=2, amount=99.5, note="lunsj", category=None,
                created_at=datetime(2026, 10, 16, 10, 0)),
    ]
    assert recent_expenses(records, OSLO) == (
        "Siste 10:\n"
        "• 120,00\u00a0kr – kaffe #mat (17.10.2026, 14:05)\n"
        "• 99,50\u00a0kr – lunsj (16.10.2026, 12:00)"
    )
