# app/main.py
from dotenv import load_dotenv

# Cargar variables de entorno desde .env ANTES de cualquier otra cosa
load_dotenv()

import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.bootstrap import bootstrap_system
from .core.config import get_settings
from .core.exceptions import AppError, MalformedRequestError, ValidationError, translate_store_error
from .core.rate_limit import limiter
from .schemas.validation import field_errors

# Importaciones de API Routers
from .api import health as health_api
from .api.auth import main as auth_main_api
from .api.clients import main as clients_main_api
from .api.expenses import main as expenses_main_api
from .api.payments import main as payments_main_api
from .api.projects import main as projects_main_api
from .api.uploads import main as uploads_main_api
from .views import router as views_router

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(levelname)s - [%(name)s] - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Lumenix Admin", version="1.0.0")


# --- Database Initialization ---
@app.on_event("startup")
def on_startup():
    """Create tables and the first admin account."""
    bootstrap_system()
    logger.info("✅ Database tables initialized")


# --- Configuración de SlowAPI ---
app.state.limiter = limiter


async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        content={
            "error": "Muitas tentativas. Aguarde um minuto e tente novamente.",
            "category": "rate_limited",
        },
        status_code=429,
    )


app.add_exception_handler(RateLimitExceeded, rate_limit_handler)


# ============================================================================
# --- SEGURIDAD: CORS ---
# ============================================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# --- SEGURIDAD: CABECERAS DE SEGURIDAD HTTP ---
# ============================================================================
@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


# --- Uploaded images ---
os.makedirs(settings.project_upload_dir, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")


# ============================================================================
# --- ERROR TRANSLATION ---
# ============================================================================
def error_response(exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        return error_response(MalformedRequestError("JSON inválido no corpo da requisição"))
    return error_response(ValidationError("Dados inválidos", errors=field_errors(errors)))


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    return await app_error_handler(request, translate_store_error(exc))


_HTTP_CATEGORIES = {400: "malformed_body", 401: "auth", 403: "auth", 404: "not_found", 409: "conflict"}


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    category = _HTTP_CATEGORIES.get(exc.status_code, "http_error")
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = "Rota não encontrada"
    else:
        message = exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message, "category": category},
        headers=getattr(exc, "headers", None),
    )


# ============================================================================
# --- ROUTERS INCLUSION ---
# ============================================================================
app.include_router(views_router)

app.include_router(health_api.router, prefix="/api")
app.include_router(auth_main_api.router, prefix="/api", tags=["Auth"])
app.include_router(clients_main_api.router, prefix="/api", tags=["Clients"])
app.include_router(expenses_main_api.router, prefix="/api", tags=["Expenses"])
app.include_router(projects_main_api.router, prefix="/api", tags=["Projects"])
app.include_router(payments_main_api.router, prefix="/api", tags=["Payment History"])
app.include_router(uploads_main_api.router, prefix="/api", tags=["Uploads"])
