# app/core/bootstrap.py
import logging
from typing import Optional

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlmodel import Session, select

from app.core.config import get_settings
from app.core.users import argon2_context
from app.db.engine_sync import create_sync_db_and_tables, sync_engine
from app.models.user import User

logger = logging.getLogger(__name__)

# Same check the login payload applies (LoginRequest.email)
_login_email = TypeAdapter(EmailStr)


def is_login_email(email: str) -> bool:
    try:
        _login_email.validate_python(email)
    except PydanticValidationError:
        return False
    return True


def bootstrap_system() -> None:
    """
    Idempotent bootstrapping:
    1. Creates the tables.
    2. Creates the admin account from ADMIN_EMAIL / ADMIN_PASSWORD if no user
       exists yet.
    """
    logger.info("🛠️ [Bootstrap] Initializing database schema...")
    create_sync_db_and_tables()

    settings = get_settings()
    with Session(sync_engine) as session:
        existing_user = session.exec(select(User)).first()
        if existing_user:
            logger.info("✅ [Bootstrap] Users found. Skipping admin creation.")
            return

        if settings.admin_email and settings.admin_password:
            seed_admin(session, settings.admin_email, settings.admin_password, settings.admin_name)
        else:
            logger.warning("⚠️ [Bootstrap] ADMIN_EMAIL or ADMIN_PASSWORD not set. Login is disabled.")


def seed_admin(session: Session, email: str, password: str, name: str) -> Optional[User]:
    """Create the admin unless the address could never pass the login check."""
    if not is_login_email(email):
        logger.warning(f"⚠️ [Bootstrap] ADMIN_EMAIL '{email}' is not a valid login address. Admin not created.")
        return None
    return create_admin(session, email, password, name)


def create_admin(session: Session, email: str, password: str, name: str) -> User:
    """Creates the first admin user."""
    try:
        new_user = User(
            email=email,
            name=name,
            hashed_password=argon2_context.hash(password),
            role="admin",
            is_active=True,
            is_superuser=True,
            is_verified=True,
        )
        session.add(new_user)
        session.commit()
        session.refresh(new_user)
        logger.info(f"🚀 [Bootstrap] Created admin user: {email}")
        return new_user
    except Exception as e:
        logger.error(f"❌ [Bootstrap] Failed to create admin user: {e}")
        session.rollback()
        raise
