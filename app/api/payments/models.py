# app/api/payments/models.py
import datetime as dt
from typing import Optional

from pydantic import Field, field_validator

from ...models.common import PaymentStatus
from ...schemas.validation import ApiModel, blank_to_none
from ..clients.models import Client


class PaymentConfirm(ApiModel):
    amount_received: float = Field(gt=0, allow_inf_nan=False)
    payment_date: dt.date
    observations: Optional[str] = None

    check_observations = field_validator("observations", mode="before")(blank_to_none)


class PaymentHistoryCreate(PaymentConfirm):
    client_id: int = Field(gt=0)
    status: PaymentStatus = PaymentStatus.PAGO


class PaymentHistory(ApiModel):
    id: int
    client_id: int
    amount_received: float
    payment_date: dt.date
    observations: Optional[str] = None
    status: str
    created_at: Optional[dt.datetime] = Field(default=None, alias="created_at")


class PaymentConfirmation(ApiModel):
    client: Client
    payment: PaymentHistory
