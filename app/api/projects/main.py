# app/api/projects/main.py
from fastapi import APIRouter, Depends, Request, status
from sqlmodel import Session

from ...core.audit import log_action
from ...core.users import require_admin
from ...db.engine_sync import get_sync_session
from ...models.user import User
from ...services.project_service import ProjectService
from .models import Project, ProjectCreate, ProjectReorder, ProjectUpdate

router = APIRouter()


def get_project_service(session: Session = Depends(get_sync_session)) -> ProjectService:
    return ProjectService(session)


@router.get("/projects", response_model=list[Project])
def api_get_all_projects(service: ProjectService = Depends(get_project_service)):
    """Public: the landing page reads the portfolio from here."""
    return service.list()


@router.post("/projects", response_model=Project, status_code=status.HTTP_201_CREATED)
def api_create_project(
    project: ProjectCreate,
    service: ProjectService = Depends(get_project_service),
    current_user: User = Depends(require_admin),
):
    return service.create(project.to_record())


# Declared before /projects/{project_id} so "order" is not parsed as an id.
@router.put("/projects/order", response_model=list[Project])
def api_reorder_projects(
    payload: ProjectReorder,
    service: ProjectService = Depends(get_project_service),
    current_user: User = Depends(require_admin),
):
    return service.reorder([item.to_record() for item in payload.projects])


@router.get("/projects/{project_id}", response_model=Project)
def api_get_project(
    project_id: int,
    service: ProjectService = Depends(get_project_service),
    current_user: User = Depends(require_admin),
):
    return service.get_by_id(project_id)


@router.put("/projects/{project_id}", response_model=Project)
def api_update_project(
    project_id: int,
    project_update: ProjectUpdate,
    service: ProjectService = Depends(get_project_service),
    current_user: User = Depends(require_admin),
):
    return service.update(project_id, project_update.to_record(partial=True))


@router.delete("/projects/{project_id}")
def api_delete_project(
    project_id: int,
    request: Request,
    service: ProjectService = Depends(get_project_service),
    current_user: User = Depends(require_admin),
):
    service.delete(project_id)
    log_action("DELETE", "project", str(project_id), user=current_user, request=request)
    return {"message": "Projeto deletado com sucesso", "id": project_id}
