"""Expense models exchanged with the store."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class NewExpense(BaseModel):
    """Fields the handler supplies when recording an expense."""

    user_id: str
    amount: float
    note: str
    category: str | None = None


class ExpenseRecord(BaseModel):
    """A persisted expense row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    amount: float
    note: str
    category: str | None = None
    created_at: datetime  # Naive values come back from SQLite and are UTC
