# app/models/payment_history.py
"""
Payment history rows for a client.

Rows are written by the payment registration / confirmation actions only and
disappear with their client (ON DELETE CASCADE).
"""
from datetime import date, datetime
from typing import Optional

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer
from sqlmodel import Field, SQLModel

from .common import PaymentStatus, enum_check, utcnow


class PaymentHistory(SQLModel, table=True):
    __tablename__ = "payment_history"
    __table_args__ = (
        CheckConstraint(enum_check("status", PaymentStatus), name="ck_payment_history_status"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    client_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("clients.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
    amount_received: float = Field(nullable=False)
    payment_date: date = Field(nullable=False)
    observations: Optional[str] = Field(default=None)
    status: str = Field(default=PaymentStatus.PAGO.value, nullable=False)
    created_at: Optional[datetime] = Field(default_factory=utcnow)
