# app/api/clients/models.py
from datetime import datetime
from typing import ClassVar, Optional

from pydantic import Field, field_validator

from ...models.common import PaymentStatus
from ...schemas.validation import ApiModel, PartialModel, normalize_url


# --- Modelos Pydantic (Cliente) ---
class ClientCreate(ApiModel):
    company_name: str = Field(min_length=1, max_length=255)
    monthly_value: float = Field(gt=0, allow_inf_nan=False)
    due_day: int = Field(ge=1, le=31)
    website_link: Optional[str] = None
    payment_status: PaymentStatus = PaymentStatus.PENDENTE

    check_website_link = field_validator("website_link", mode="before")(normalize_url)


class ClientUpdate(PartialModel):
    non_nullable: ClassVar[tuple[str, ...]] = ("company_name", "monthly_value", "due_day", "payment_status")

    company_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    monthly_value: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    due_day: Optional[int] = Field(default=None, ge=1, le=31)
    website_link: Optional[str] = None
    payment_status: Optional[PaymentStatus] = None

    check_website_link = field_validator("website_link", mode="before")(normalize_url)


class Client(ApiModel):
    id: int
    company_name: str
    monthly_value: float
    due_day: int
    website_link: Optional[str] = None
    payment_status: str
    created_at: Optional[datetime] = Field(default=None, alias="created_at")
    updated_at: Optional[datetime] = Field(default=None, alias="updated_at")
