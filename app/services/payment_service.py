# app/services/payment_service.py
"""
Payment history for clients.

History rows are append-only through this service: they are created by
`register_payment` or by `confirm_payment`, which also marks the client as
paid in the same transaction.
"""
import logging
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ..core.exceptions import NotFoundError, translate_store_error
from ..db.field_map import CLIENT_FIELDS, PAYMENT_HISTORY_FIELDS
from ..models import Client, PaymentHistory
from ..models.common import PaymentStatus, utcnow

logger = logging.getLogger(__name__)


class PaymentService:
    def __init__(self, session: Session):
        """
        Args:
            session: SQLModel Session instance
        """
        self.session = session
        self.fields = PAYMENT_HISTORY_FIELDS

    def _to_record(self, payment: PaymentHistory) -> Dict[str, Any]:
        row = {name: getattr(payment, name) for name in PaymentHistory.model_fields}
        return self.fields.to_external(row)

    def _get_client(self, client_id: int) -> Client:
        try:
            client = self.session.get(Client, client_id)
        except SQLAlchemyError as e:
            raise translate_store_error(e, "Cliente")
        if client is None:
            raise NotFoundError("Cliente não encontrado")
        return client

    def get_payments_for_client(self, client_id: int) -> List[Dict[str, Any]]:
        """All payments for a client, most recent payment date first."""
        self._get_client(client_id)
        statement = (
            select(PaymentHistory)
            .where(PaymentHistory.client_id == client_id)
            .order_by(
                PaymentHistory.payment_date.desc(),
                PaymentHistory.created_at.desc(),
                PaymentHistory.id.desc(),
            )
        )
        try:
            payments = self.session.exec(statement).all()
        except SQLAlchemyError as e:
            raise translate_store_error(e, "Histórico de pagamento")
        return [self._to_record(p) for p in payments]

    def register_payment(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a history row.

        Args:
            data: validated external record (clientId, amountReceived,
                  paymentDate, observations, status)
        """
        self._get_client(data["clientId"])
        payment = PaymentHistory(**self.fields.to_storage(data))
        try:
            self.session.add(payment)
            self.session.commit()
            self.session.refresh(payment)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise translate_store_error(e, "Histórico de pagamento")
        logger.info(f"Pagamento registrado para cliente {payment.client_id}: {payment.amount_received}")
        return self._to_record(payment)

    def confirm_payment(self, client_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Mark the client as Pago and record the payment, atomically.

        Returns:
            {"client": <client record>, "payment": <history record>}
        """
        client = self._get_client(client_id)
        now = utcnow()
        client.payment_status = PaymentStatus.PAGO.value
        client.updated_at = now

        payload = {**data, "clientId": client_id, "status": PaymentStatus.PAGO.value}
        payment = PaymentHistory(**self.fields.to_storage(payload))
        try:
            self.session.add(client)
            self.session.add(payment)
            self.session.commit()
            self.session.refresh(client)
            self.session.refresh(payment)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise translate_store_error(e, "Pagamento")

        logger.info(f"Pagamento confirmado para cliente {client_id}")
        client_row = {name: getattr(client, name) for name in Client.model_fields}
        return {
            "client": CLIENT_FIELDS.to_external(client_row),
            "payment": self._to_record(payment),
        }
