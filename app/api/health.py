from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.exceptions import translate_store_error
from app.db.engine_sync import get_sync_session

router = APIRouter()


@router.get("/health", tags=["System"])
def get_system_health(session: Session = Depends(get_sync_session)):
    """Returns 200 when the relational store answers, 503 otherwise."""
    try:
        session.exec(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise translate_store_error(e)
    return {"status": "ok", "database": "ok"}
