# app/services/client_service.py
"""
Client repository. Deleting a client also removes its payment history
(ON DELETE CASCADE on payment_history.client_id).
"""
from sqlmodel import Session

from ..db.field_map import CLIENT_FIELDS
from ..models import Client
from .base_service import BaseCRUDService


class ClientService(BaseCRUDService[Client]):
    def __init__(self, session: Session):
        super().__init__(session, Client, CLIENT_FIELDS, label="Cliente")
