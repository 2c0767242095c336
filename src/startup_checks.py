"""Startup validation — catch misconfigurations before the app serves traffic."""
from __future__ import annotations

import logging
import sys

from config.settings import settings

logger = logging.getLogger(__name__)

_DEFAULT_JWT_SECRET = "mascotas-dev-secret-change-in-prod"


def validate_settings() -> list[str]:
    """Validate configuration. Returns list of warnings (empty = all good).

    Raises SystemExit for critical misconfigurations in production.
    """
    warnings: list[str] = []
    is_prod = settings.DATABASE_URL and "sqlite" not in settings.DATABASE_URL

    # Critical: JWT secret must be changed in production
    if is_prod and settings.JWT_SECRET == _DEFAULT_JWT_SECRET:
        logger.critical("JWT_SECRET is still the default! Set a real secret for production.")
        sys.exit(1)

    if is_prod and "*" in settings.CORS_ORIGINS:
        warnings.append("CORS_ORIGINS is set to * — restrict in production")

    if settings.STORAGE_BACKEND not in ("local", "http"):
        logger.critical("Unknown STORAGE_BACKEND %r (expected 'local' or 'http')", settings.STORAGE_BACKEND)
        sys.exit(1)

    if settings.STORAGE_BACKEND == "http" and not (settings.STORAGE_API_URL and settings.STORAGE_API_KEY):
        logger.critical("STORAGE_BACKEND=http requires STORAGE_API_URL and STORAGE_API_KEY")
        sys.exit(1)

    if not settings.ADMIN_EMAILS:
        warnings.append("ADMIN_EMAILS not set — no account will be promoted to admin at signup")

    if settings.STRICT_MODERATION:
        logger.info("Strict moderation enabled: only pending records can be reviewed")

    for w in warnings:
        logger.warning("%s", w)

    if not warnings:
        logger.info("All startup checks passed")

    return warnings
