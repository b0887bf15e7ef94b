# app/views.py
"""
Public pages. The landing page lists the same portfolio the admin panel
manages, in display order.
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from sqlmodel import Session

from .core.templates import templates
from .db.engine_sync import get_sync_session
from .services.project_service import ProjectService

router = APIRouter()


@router.get("/", response_class=HTMLResponse, tags=["Pages"])
def read_landing_page(request: Request, session: Session = Depends(get_sync_session)):
    projects = ProjectService(session).list()
    return templates.TemplateResponse(
        request, "landing.html", {"projects": projects, "active_page": "landing"}
    )
