# app/api/payments/main.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from ...core.users import require_admin
from ...db.engine_sync import get_sync_session
from ...models.user import User
from ...services.payment_service import PaymentService
from .models import PaymentHistory, PaymentHistoryCreate

router = APIRouter()


def get_payment_service(session: Session = Depends(get_sync_session)) -> PaymentService:
    return PaymentService(session)


@router.post(
    "/payment-history",
    response_model=PaymentHistory,
    status_code=status.HTTP_201_CREATED,
)
def api_register_payment(
    payment: PaymentHistoryCreate,
    service: PaymentService = Depends(get_payment_service),
    current_user: User = Depends(require_admin),
):
    return service.register_payment(payment.to_record())


@router.get("/payment-history/{client_id}", response_model=list[PaymentHistory])
def api_get_payment_history(
    client_id: int,
    service: PaymentService = Depends(get_payment_service),
    current_user: User = Depends(require_admin),
):
    return service.get_payments_for_client(client_id)
