# app/core/config.py
"""
Application settings.
Values come from the environment (and .env, loaded by app/main.py before
anything else is imported).
"""
import os
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

# data/ lives next to the app package
DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "..", "data")
DEFAULT_DATABASE_FILE = os.path.normpath(os.path.join(DATA_DIR, "db", "lumenix.sqlite"))


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = f"sqlite:///{DEFAULT_DATABASE_FILE}"

    secret_key: str
    access_token_lifetime_seconds: int = 28800  # 8 hours

    admin_email: str | None = None
    admin_password: str | None = None
    admin_name: str = "Admin Lumenix"

    upload_dir: str = "uploads"
    max_upload_bytes: int = 5 * 1024 * 1024

    allowed_origins: str = "http://localhost:5173,http://localhost:3000"
    api_port: int = 3001
    rate_limit_enabled: bool = True
    login_rate_limit: str = "5/minute"

    log_dir: str = "logs"
    log_level: str = "INFO"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @property
    def project_upload_dir(self) -> str:
        return os.path.join(self.upload_dir, "projects")


@lru_cache
def get_settings() -> Settings:
    return Settings()
