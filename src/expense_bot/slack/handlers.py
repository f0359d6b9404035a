"""Slash-command dispatch: parsed command in, reply text out."""

import logging
from zoneinfo import ZoneInfo

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from expense_bot.config import Settings
from expense_bot.models.command import CommandType, ParsedCommand
from expense_bot.models.expense import NewExpense
from expense_bot.slack import replies
from expense_bot.store import (
    StoreNotConfiguredError,
    add_expense,
    ensure_schema,
    get_engine,
    list_recent,
    session_scope,
    sum_month,
    sum_today,
)

logger = logging.getLogger(__name__)


def handle_command(command: ParsedCommand, user_id: str, settings: Settings) -> str:
    """Run a parsed command for ``user_id`` and return the reply text.

    Help is answered without touching the store; every other command, invalid
    input included, first needs a configured database. Missing database
    configuration and store failures are answered with an informational reply
    instead of an error status.
    """
    if command.type == CommandType.HELP:
        return replies.HELP_TEXT

    try:
        engine = get_engine(settings.database_url)
    except StoreNotConfiguredError:
        logger.warning("No database configured, cannot run %s command", command.type.value)
        return replies.DATABASE_MISSING_TEXT

    if command.type == CommandType.INVALID:
        return replies.INVALID_FORMAT_TEXT

    tz = ZoneInfo(settings.timezone)
    try:
        ensure_schema(engine)
        with session_scope(engine) as session:
            return _dispatch(session, command, user_id, tz)
    except SQLAlchemyError:
        logger.error(
            "Store operation failed for %s command",
            command.type.value,
            exc_info=True,
            extra={"user_id": user_id},
        )
        return replies.STORE_UNAVAILABLE_TEXT


def _dispatch(session: Session, command: ParsedCommand, user_id: str, tz: ZoneInfo) -> str:
    if command.type == CommandType.ADD_EXPENSE:
        record = add_expense(
            session,
            NewExpense(
                user_id=user_id,
                amount=command.amount,
                note=command.note,
                category=command.category,
            ),
        )
        logger.info(
            "Recorded expense %d",
            record.id,
            extra={"user_id": user_id, "amount": record.amount, "category": record.category},
        )
        return replies.expense_added(command)

    if command.type == CommandType.MONTH_SUMMARY:
        return replies.month_total(sum_month(session, user_id, tz))

    if command.type == CommandType.TODAY_SUMMARY:
        return replies.today_total(sum_today(session, user_id, tz))

    return replies.recent_expenses(list_recent(session, user_id), tz)
