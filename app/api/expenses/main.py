# app/api/expenses/main.py
from fastapi import APIRouter, Depends, Request, status
from sqlmodel import Session

from ...core.audit import log_action
from ...core.users import require_admin
from ...db.engine_sync import get_sync_session
from ...models.user import User
from ...services.expense_service import ExpenseService
from .models import Expense, ExpenseCreate, ExpenseUpdate

router = APIRouter()


def get_expense_service(session: Session = Depends(get_sync_session)) -> ExpenseService:
    return ExpenseService(session)


@router.get("/expenses", response_model=list[Expense])
def api_get_all_expenses(
    service: ExpenseService = Depends(get_expense_service),
    current_user: User = Depends(require_admin),
):
    return service.list()


@router.get("/expenses/{expense_id}", response_model=Expense)
def api_get_expense(
    expense_id: int,
    service: ExpenseService = Depends(get_expense_service),
    current_user: User = Depends(require_admin),
):
    return service.get_by_id(expense_id)


@router.post("/expenses", response_model=Expense, status_code=status.HTTP_201_CREATED)
def api_create_expense(
    expense: ExpenseCreate,
    service: ExpenseService = Depends(get_expense_service),
    current_user: User = Depends(require_admin),
):
    return service.create(expense.to_record())


@router.put("/expenses/{expense_id}", response_model=Expense)
def api_update_expense(
    expense_id: int,
    expense_update: ExpenseUpdate,
    service: ExpenseService = Depends(get_expense_service),
    current_user: User = Depends(require_admin),
):
    return service.update(expense_id, expense_update.to_record(partial=True))


@router.delete("/expenses/{expense_id}")
def api_delete_expense(
    expense_id: int,
    request: Request,
    service: ExpenseService = Depends(get_expense_service),
    current_user: User = Depends(require_admin),
):
    service.delete(expense_id)
    log_action("DELETE", "expense", str(expense_id), user=current_user, request=request)
    return {"message": "Despesa deletada com sucesso", "id": expense_id}
