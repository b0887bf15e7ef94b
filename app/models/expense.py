# app/models/expense.py
"""
Expense model. Independent entity, no relationships.
"""
import datetime as dt
from typing import Optional

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from .common import ExpenseFrequency, PaymentStatus, enum_check, utcnow


class Expense(SQLModel, table=True):
    __tablename__ = "expenses"
    __table_args__ = (
        CheckConstraint(enum_check("status", PaymentStatus), name="ck_expenses_status"),
        CheckConstraint(
            f"frequency IS NULL OR {enum_check('frequency', ExpenseFrequency)}",
            name="ck_expenses_frequency",
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    description: str = Field(max_length=255, nullable=False)
    amount: float = Field(nullable=False)
    category: str = Field(nullable=False)
    date: dt.date = Field(nullable=False)
    frequency: Optional[str] = Field(default=None)
    due_date: Optional[dt.date] = Field(default=None)
    status: str = Field(default=PaymentStatus.PENDENTE.value, nullable=False)
    created_at: Optional[dt.datetime] = Field(default_factory=utcnow)
    updated_at: Optional[dt.datetime] = Field(default_factory=utcnow)
