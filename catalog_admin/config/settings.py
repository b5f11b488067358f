from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    # ── Application ──────────────────────────────────────────────
    app_name: str = "Catalog Admin Dashboard"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"
    api_version: str = "v1"
    log_level: str = "INFO"

    # ── Database ─────────────────────────────────────────────────
    mongodb_uri: Optional[str] = None
    database_name: str = "catalog_admin"

    # ── JWT / Security ───────────────────────────────────────────
    secret_key: str = "change-me-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 1440  # 24 hours

    # ── CORS ─────────────────────────────────────────────────────
    cors_allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    cors_allow_credentials: bool = True
    cors_allowed_methods: list[str] = ["*"]
    cors_allowed_headers: list[str] = ["*"]

    # ── SMTP (optional) ─────────────────────────────────────────
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_from_email: Optional[str] = None

    # ── Dashboard client session ────────────────────────────────
    session_file: str = ".session.json"
    session_logout_delay_seconds: float = 3.0
    session_poll_interval_seconds: float = 60.0

    class Config:
        env_file = ".env.local"
        extra = "ignore"


# ── Module-level singleton ──────────────────────────────────────
settings = Settings()
