# app/services/project_service.py
"""
Project repository.

Listing order is `order` ascending with newest first among ties. Reordering
is a bulk re-assignment driven by the admin panel.
"""
import logging
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ..core.exceptions import NotFoundError, ValidationError, translate_store_error
from ..db.field_map import PROJECT_FIELDS
from ..models import Project
from ..models.common import utcnow
from .base_service import BaseCRUDService

logger = logging.getLogger(__name__)


class ProjectService(BaseCRUDService[Project]):
    def __init__(self, session: Session):
        super().__init__(session, Project, PROJECT_FIELDS, label="Projeto")

    def order_by(self) -> List:
        return [Project.order.asc(), Project.created_at.desc(), Project.id.desc()]

    def reorder(self, items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Assign new `order` values to every listed project in one transaction.

        Args:
            items: [{"id": 3, "order": 0}, {"id": 1, "order": 1}, ...]

        Returns:
            The full project listing after the change.
        """
        if not items:
            raise ValidationError("Nenhum projeto para reordenar")

        ids = [item["id"] for item in items]
        if len(set(ids)) != len(ids):
            raise ValidationError("IDs de projeto repetidos na reordenação")

        try:
            found = self.session.exec(select(Project).where(Project.id.in_(ids))).all()
        except SQLAlchemyError as e:
            raise translate_store_error(e, self.label)

        by_id = {project.id: project for project in found}
        missing = [i for i in ids if i not in by_id]
        if missing:
            raise NotFoundError(f"Projeto não encontrado: {', '.join(map(str, missing))}")

        now = utcnow()
        for item in items:
            project = by_id[item["id"]]
            project.order = item["order"]
            project.updated_at = now
            self.session.add(project)

        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise translate_store_error(e, self.label)

        logger.info(f"Projetos reordenados: {len(items)}")
        return self.list()
