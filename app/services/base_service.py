# app/services/base_service.py
"""
BaseCRUDService: generic repository for the admin resources.

Speaks the external (camelCase) vocabulary on both sides: callers pass
validated external records in and get external records back. The resource's
FieldMap is the only place where names are translated.

Usage:
    class MyService(BaseCRUDService[MyModel]):
        def __init__(self, session: Session):
            super().__init__(session, MyModel, MY_FIELDS, label="Registro")
"""
import logging
from typing import Any, Dict, Generic, List, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from ..core.exceptions import NotFoundError, ValidationError, translate_store_error
from ..db.field_map import FieldMap
from ..models.common import utcnow

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=SQLModel)

# Server-assigned columns callers may never write.
READ_ONLY_FIELDS = {"id", "created_at", "updated_at"}


class BaseCRUDService(Generic[ModelType]):
    def __init__(self, session: Session, model: Type[ModelType], fields: FieldMap, label: str):
        """
        Args:
            session: SQLModel session, one per request.
            model: The SQLModel table class this service manages.
            fields: External <-> storage name table for the model.
            label: Human readable resource name used in error messages.
        """
        self.session = session
        self.model = model
        self.fields = fields
        self.label = label

    # --- Mapping helpers ---

    def to_record(self, obj: ModelType) -> Dict[str, Any]:
        row = {name: getattr(obj, name) for name in type(obj).model_fields}
        return self.fields.to_external(row)

    def _writable(self, data: Dict[str, Any]) -> Dict[str, Any]:
        clean = {k: v for k, v in data.items() if k not in READ_ONLY_FIELDS}
        return self.fields.to_storage(clean)

    def order_by(self) -> list:
        """Default listing order: newest first, id as tie-break."""
        return [self.model.created_at.desc(), self.model.id.desc()]

    # --- CRUD ---

    def list(self) -> List[Dict[str, Any]]:
        statement = select(self.model).order_by(*self.order_by())
        try:
            rows = self.session.exec(statement).all()
        except SQLAlchemyError as e:
            raise translate_store_error(e, self.label)
        return [self.to_record(row) for row in rows]

    def _get_or_404(self, record_id: int) -> ModelType:
        try:
            obj = self.session.get(self.model, record_id)
        except SQLAlchemyError as e:
            raise translate_store_error(e, self.label)
        if obj is None:
            raise NotFoundError(f"{self.label} não encontrado")
        return obj

    def get_by_id(self, record_id: int) -> Dict[str, Any]:
        return self.to_record(self._get_or_404(record_id))

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a validated external record and return the stored version."""
        new_obj = self.model(**self._writable(data))
        try:
            self.session.add(new_obj)
            self.session.commit()
            self.session.refresh(new_obj)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise translate_store_error(e, self.label)
        logger.info(f"{self.label} criado: id={new_obj.id}")
        return self.to_record(new_obj)

    def update(self, record_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Partial update: only keys present in `data` are written. An empty
        update is a client error, a missing row is NotFoundError.
        """
        changes = self._writable(data)
        if not changes:
            raise ValidationError("Nenhum campo para atualizar fornecido")

        obj = self._get_or_404(record_id)
        for key, value in changes.items():
            setattr(obj, key, value)
        if hasattr(obj, "updated_at"):
            obj.updated_at = utcnow()

        try:
            self.session.add(obj)
            self.session.commit()
            self.session.refresh(obj)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise translate_store_error(e, self.label)
        return self.to_record(obj)

    def delete(self, record_id: int) -> None:
        obj = self._get_or_404(record_id)
        try:
            self.session.delete(obj)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise translate_store_error(e, self.label)
        logger.info(f"{self.label} removido: id={record_id}")
