"""App settings — loaded from environment."""
from __future__ import annotations

import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # API
    API_HOST = os.getenv("API_HOST", "0.0.0.0")
    API_PORT = int(os.getenv("API_PORT", "8000"))
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

    # Database
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///mascotas.db")

    # Auth
    JWT_SECRET = os.getenv("JWT_SECRET", "mascotas-dev-secret-change-in-prod")
    # Comma-separated emails that get the admin role at signup
    ADMIN_EMAILS = [
        e.strip().lower() for e in os.getenv("ADMIN_EMAILS", "").split(",") if e.strip()
    ]

    # Login throttling (failures per window, keyed by IP + email)
    LOGIN_MAX_ATTEMPTS = int(os.getenv("LOGIN_MAX_ATTEMPTS", "5"))
    LOGIN_WINDOW_SECONDS = int(os.getenv("LOGIN_WINDOW_SECONDS", str(15 * 60)))

    # Image storage
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "local")  # "local" or "http"
    STORAGE_DIR = os.getenv("STORAGE_DIR", "static/storage")
    STORAGE_PUBLIC_URL = os.getenv("STORAGE_PUBLIC_URL", "/storage")
    STORAGE_API_URL = os.getenv("STORAGE_API_URL", "")
    STORAGE_API_KEY = os.getenv("STORAGE_API_KEY", "")
    MAX_IMAGE_BYTES = int(os.getenv("MAX_IMAGE_BYTES", str(5 * 1024 * 1024)))

    # Listings
    BASE_CITY = os.getenv("BASE_CITY", "San Justo")

    # Moderation: when true only pending records may be approved/rejected
    STRICT_MODERATION = _flag("STRICT_MODERATION")

    # CORS origins (comma-separated, or * for dev)
    CORS_ORIGINS = [
        o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",")
    ]

    # Observability
    SENTRY_DSN = os.getenv("SENTRY_DSN", "")
    SENTRY_ENVIRONMENT = os.getenv("SENTRY_ENVIRONMENT", "development")
    SENTRY_TRACES_SAMPLE_RATE = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.1"))

    # Logging
    LOG_FORMAT = os.getenv("LOG_FORMAT", "text")  # "text" or "json"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
