# app/api/clients/main.py
from fastapi import APIRouter, Depends, Request, status
from sqlmodel import Session

from ...core.audit import log_action
from ...core.users import require_admin
from ...db.engine_sync import get_sync_session
from ...models.user import User
from ...services.client_service import ClientService
from ...services.payment_service import PaymentService
from ..payments.models import PaymentConfirm, PaymentConfirmation
from .models import Client, ClientCreate, ClientUpdate

router = APIRouter()


# --- Dependency Injectors ---
def get_client_service(session: Session = Depends(get_sync_session)) -> ClientService:
    return ClientService(session)


def get_payment_service(session: Session = Depends(get_sync_session)) -> PaymentService:
    return PaymentService(session)


# --- Client Endpoints ---


@router.get("/clients", response_model=list[Client])
def api_get_all_clients(
    service: ClientService = Depends(get_client_service),
    current_user: User = Depends(require_admin),
):
    return service.list()


@router.get("/clients/{client_id}", response_model=Client)
def api_get_client(
    client_id: int,
    service: ClientService = Depends(get_client_service),
    current_user: User = Depends(require_admin),
):
    return service.get_by_id(client_id)


@router.post("/clients", response_model=Client, status_code=status.HTTP_201_CREATED)
def api_create_client(
    client: ClientCreate,
    service: ClientService = Depends(get_client_service),
    current_user: User = Depends(require_admin),
):
    return service.create(client.to_record())


@router.put("/clients/{client_id}", response_model=Client)
def api_update_client(
    client_id: int,
    client_update: ClientUpdate,
    service: ClientService = Depends(get_client_service),
    current_user: User = Depends(require_admin),
):
    return service.update(client_id, client_update.to_record(partial=True))


@router.delete("/clients/{client_id}")
def api_delete_client(
    client_id: int,
    request: Request,
    service: ClientService = Depends(get_client_service),
    current_user: User = Depends(require_admin),
):
    service.delete(client_id)
    log_action("DELETE", "client", str(client_id), user=current_user, request=request)
    return {"message": "Cliente deletado com sucesso", "id": client_id}


@router.post(
    "/clients/{client_id}/payments/confirm",
    response_model=PaymentConfirmation,
    status_code=status.HTTP_201_CREATED,
)
def api_confirm_payment(
    client_id: int,
    payment: PaymentConfirm,
    service: PaymentService = Depends(get_payment_service),
    current_user: User = Depends(require_admin),
):
    """
    Confirm a client's payment: the client becomes 'Pago' and a history row
    is recorded, in one transaction.
    """
    return service.confirm_payment(client_id, payment.to_record())
