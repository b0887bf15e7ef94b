# app/core/exceptions.py
"""
Error taxonomy shared by the service layer and the API layer.

Services raise these; app/main.py turns them into HTTP responses. Every class
carries its HTTP status and a stable category name so clients can tell
infrastructure problems (store_unavailable) apart from logic bugs
(server_fault).
"""
import logging
from typing import Any

from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    category = "server_fault"

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message, "category": self.category}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(AppError):
    status_code = 400
    category = "validation"


class MalformedRequestError(ValidationError):
    category = "malformed_body"


class NotFoundError(AppError):
    status_code = 404
    category = "not_found"


class ConflictError(AppError):
    status_code = 409
    category = "conflict"


class AuthError(AppError):
    status_code = 401
    category = "auth"

    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message)
        self.status_code = status_code


class StoreUnavailableError(AppError):
    status_code = 503
    category = "store_unavailable"


class UnclassifiedFault(AppError):
    pass


# Substrings that identify a connection-level failure in driver messages.
_CONNECTION_MARKERS = (
    "connection refused",
    "could not connect",
    "can't connect",
    "unable to open database",
    "server closed the connection",
    "connection reset",
    "no route to host",
    "name or service not known",
)


def is_connection_failure(exc: BaseException) -> bool:
    if isinstance(exc, (DisconnectionError, InterfaceError)):
        return True
    if isinstance(exc, ConnectionError):
        return True
    if isinstance(exc, OperationalError):
        if exc.connection_invalidated:
            return True
        text = str(exc.orig if exc.orig is not None else exc).lower()
        return any(marker in text for marker in _CONNECTION_MARKERS)
    return False


def translate_store_error(exc: Exception, resource: str = "registro") -> AppError:
    """Map a low-level store exception onto the error taxonomy."""
    if isinstance(exc, AppError):
        return exc
    if isinstance(exc, IntegrityError):
        return ConflictError(f"{resource} já existe ou viola uma restrição de integridade")
    if is_connection_failure(exc):
        logger.error(f"Store unavailable: {exc}")
        return StoreUnavailableError("Erro de conexão com o banco de dados")
    if isinstance(exc, SQLAlchemyError):
        logger.error(f"Unhandled store error: {exc}")
    return UnclassifiedFault(f"Erro interno do servidor: {exc}")
