# app/api/expenses/models.py
import datetime as dt
from typing import ClassVar, Optional

from pydantic import Field, field_validator

from ...models.common import ExpenseFrequency, PaymentStatus
from ...schemas.validation import ApiModel, PartialModel, blank_to_none


class ExpenseCreate(ApiModel):
    description: str = Field(min_length=1, max_length=255)
    amount: float = Field(gt=0, allow_inf_nan=False)
    category: str = Field(min_length=1)
    date: dt.date
    frequency: Optional[ExpenseFrequency] = None
    due_date: Optional[dt.date] = None
    status: PaymentStatus = PaymentStatus.PENDENTE

    check_blank_optional = field_validator("frequency", "due_date", mode="before")(blank_to_none)


class ExpenseUpdate(PartialModel):
    non_nullable: ClassVar[tuple[str, ...]] = ("description", "amount", "category", "date", "status")

    description: Optional[str] = Field(default=None, min_length=1, max_length=255)
    amount: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    category: Optional[str] = Field(default=None, min_length=1)
    date: Optional[dt.date] = None
    frequency: Optional[ExpenseFrequency] = None
    due_date: Optional[dt.date] = None
    status: Optional[PaymentStatus] = None

    check_blank_optional = field_validator("frequency", "due_date", mode="before")(blank_to_none)


class Expense(ApiModel):
    id: int
    description: str
    amount: float
    category: str
    date: dt.date
    frequency: Optional[str] = None
    due_date: Optional[dt.date] = None
    status: str
    created_at: Optional[dt.datetime] = Field(default=None, alias="created_at")
    updated_at: Optional[dt.datetime] = Field(default=None, alias="updated_at")
