# app/core/users.py
"""
FastAPI Users configuration and authentication setup.

A single bearer (JWT) backend protects the admin API. The login endpoint in
app/api/auth/main.py issues tokens with the same strategy.
"""
import logging
import uuid
from typing import Optional

from fastapi import Depends, Request
from fastapi_users import BaseUserManager, FastAPIUsers, UUIDIDMixin
from fastapi_users.authentication import (
    AuthenticationBackend,
    BearerTransport,
    JWTStrategy,
)
from fastapi_users.db import SQLAlchemyUserDatabase
from fastapi_users.password import PasswordHelper
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.exceptions import AuthError
from app.db.engine import get_session
from app.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()
SECRET = settings.secret_key
ACCESS_TOKEN_LIFETIME_SECONDS = settings.access_token_lifetime_seconds

# --- Authentication Transport ---
# Bearer Token Transport (Authorization header)
bearer_transport = BearerTransport(tokenUrl="api/auth/login")


# --- JWT Strategy ---
def get_jwt_strategy() -> JWTStrategy:
    """Returns JWT strategy for token generation and validation"""
    return JWTStrategy(secret=SECRET, lifetime_seconds=ACCESS_TOKEN_LIFETIME_SECONDS)


auth_backend_jwt = AuthenticationBackend(
    name="jwt",
    transport=bearer_transport,
    get_strategy=get_jwt_strategy,
)


# --- User Manager ---
class UserManager(UUIDIDMixin, BaseUserManager[User, uuid.UUID]):
    reset_password_token_secret = SECRET
    verification_token_secret = SECRET

    async def on_after_login(
        self, user: User, request: Optional[Request] = None, response=None
    ):
        logger.info(f"🔐 User logged in: {user.email}")


async def get_user_db(session: AsyncSession = Depends(get_session)):
    yield SQLAlchemyUserDatabase(session, User)


# --- Argon2 Password Helper ---
argon2_context = CryptContext(schemes=["argon2"], deprecated="auto")
password_helper = PasswordHelper(argon2_context)


async def get_user_manager(user_db=Depends(get_user_db)):
    """User manager with Argon2 hashing via PasswordHelper."""
    yield UserManager(user_db, password_helper)


# --- FastAPI Users Instance ---
fastapi_users = FastAPIUsers[User, uuid.UUID](get_user_manager, [auth_backend_jwt])

current_active_user = fastapi_users.current_user(active=True)


# --- Role-Based Access Control ---
class RoleChecker:
    """
    Dependency that requires an authenticated user holding one of the allowed
    roles. Missing/invalid tokens are rejected by fastapi-users with 401; a
    valid token with the wrong role gets 403.

    Usage:
        @router.get("/admin-only")
        def admin_endpoint(user: User = Depends(RoleChecker(["admin"]))):
            ...
    """

    def __init__(self, allowed_roles: list[str]):
        self.allowed_roles = allowed_roles

    def __call__(self, user: User = Depends(current_active_user)) -> User:
        if user.role not in self.allowed_roles:
            raise AuthError(
                f"Acesso negado. Papel necessário: {', '.join(self.allowed_roles)}",
                status_code=403,
            )
        return user


require_admin = RoleChecker(["admin"])
