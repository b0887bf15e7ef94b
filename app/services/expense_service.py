# app/services/expense_service.py
from sqlmodel import Session

from ..db.field_map import EXPENSE_FIELDS
from ..models import Expense
from .base_service import BaseCRUDService


class ExpenseService(BaseCRUDService[Expense]):
    def __init__(self, session: Session):
        super().__init__(session, Expense, EXPENSE_FIELDS, label="Despesa")
