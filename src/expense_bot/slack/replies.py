"""Plain-text reply builders for the /expense slash command."""

from zoneinfo import ZoneInfo

from expense_bot.formatting import format_nok, format_timestamp
from expense_bot.models.command import AddExpense
from expense_bot.models.expense import ExpenseRecord
from expense_bot.store.repository import RECENT_LIMIT

HELP_TEXT = "\n".join(
    [
        "Bruk:",
        "/expense 120 kaffe #mat",
        "/expense måned",
        "/expense idag",
        "/expense liste",
    ]
)
INVALID_FORMAT_TEXT = "Ugyldig format. Prøv: /expense 120 kaffe #mat"
DATABASE_MISSING_TEXT = (
    "DB mangler. Koble til en Postgres-database og redeploy, så kan jeg lagre utgifter."
)
STORE_UNAVAILABLE_TEXT = "Databasen svarer ikke akkurat nå. Prøv igjen om litt."
NO_EXPENSES_TEXT = "Ingen registrerte utgifter ennå."


def expense_added(command: AddExpense) -> str:
    """Confirmation line, e.g. ``✅ Registrert: 120,00 kr – kaffe (#mat)``."""
    category = f" (#{command.category})" if command.category else ""
    return f"✅ Registrert: {format_nok(command.amount)} – {command.note}{category}"


def month_total(total: float) -> str:
    return f"\U0001f4c5 Denne måneden: {format_nok(total)}"


def today_total(total: float) -> str:
    return f"\U0001f4cc I dag: {format_nok(total)}"


def recent_expenses(records: list[ExpenseRecord], tz: ZoneInfo) -> str:
    """List the given expenses one per line, or say there are none."""
    if not records:
        return NO_EXPENSES_TEXT

    lines = []
    for record in records:
        category = f" #{record.category}" if record.category else ""
        when = format_timestamp(record.created_at, tz)
        lines.append(
            f"• {format_nok(record.amount)} – {record.note}{category} ({when})"
        )
    return f"Siste {RECENT_LIMIT}:\n" + "\n".join(lines)
