"""Parsed slash-command models, discriminated on ``type``."""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class CommandType(str, Enum):
    """Kinds of command the parser can produce."""

    HELP = "help"
    MONTH_SUMMARY = "month"
    TODAY_SUMMARY = "today"
    LIST_RECENT = "list"
    ADD_EXPENSE = "add"
    INVALID = "invalid"


class Help(BaseModel):
    type: Literal[CommandType.HELP] = CommandType.HELP


class MonthSummary(BaseModel):
    type: Literal[CommandType.MONTH_SUMMARY] = CommandType.MONTH_SUMMARY


class TodaySummary(BaseModel):
    type: Literal[CommandType.TODAY_SUMMARY] = CommandType.TODAY_SUMMARY


class ListRecent(BaseModel):
    type: Literal[CommandType.LIST_RECENT] = CommandType.LIST_RECENT


class Invalid(BaseModel):
    """Text that looked like nothing we understand, or a malformed expense."""

    type: Literal[CommandType.INVALID] = CommandType.INVALID


class AddExpense(BaseModel):
    """A new expense to record: ``/expense 120 kaffe #mat``."""

    type: Literal[CommandType.ADD_EXPENSE] = CommandType.ADD_EXPENSE
    amount: float = Field(gt=0, allow_inf_nan=False)
    note: str = Field(min_length=1)
    category: str | None = None  # Without the leading '#'


ParsedCommand = Annotated[
    Union[Help, MonthSummary, TodaySummary, ListRecent, AddExpense, Invalid],
    Field(discriminator="type"),
]
