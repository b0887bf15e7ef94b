# app/models/client.py
"""
Client model for recurring billing.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from .common import PaymentStatus, enum_check, utcnow


class Client(SQLModel, table=True):
    """
    A billed customer.

    Fields:
    - id: Auto-increment primary key
    - company_name: Company name (required, unique)
    - monthly_value: Amount billed every month (> 0)
    - due_day: Day of month the invoice is due (1-31)
    - website_link: Customer website
    - payment_status: Pendente | Pago | Atrasado
    - created_at / updated_at: Timestamps
    """

    __tablename__ = "clients"
    __table_args__ = (
        CheckConstraint(enum_check("payment_status", PaymentStatus), name="ck_clients_payment_status"),
        CheckConstraint("due_day BETWEEN 1 AND 31", name="ck_clients_due_day"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    company_name: str = Field(max_length=255, unique=True, nullable=False)
    monthly_value: float = Field(nullable=False)
    due_day: int = Field(nullable=False)
    website_link: Optional[str] = Field(default=None)
    payment_status: str = Field(default=PaymentStatus.PENDENTE.value, nullable=False)
    created_at: Optional[datetime] = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = Field(default_factory=utcnow)
