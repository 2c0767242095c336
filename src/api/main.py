"""Mascotas SJ API — lost pets, adoption listings and donation campaigns with moderation."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from src.logging_config import setup_logging
setup_logging()
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.db.engine import engine, get_session, create_all
from src.errors import ListingError

__version__ = "1.0.0"

logger = logging.getLogger(__name__)

# ── Sentry Error Tracking ────────────────────────
if settings.SENTRY_DSN:
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
    from sentry_sdk.integrations.logging import LoggingIntegration

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        integrations=[
            FastApiIntegration(),
            SqlalchemyIntegration(),
            LoggingIntegration(level=logging.WARNING, event_level=logging.ERROR),
        ],
        # Contact details in listings are personal data
        send_default_pii=False,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Validate settings and create tables on startup; release resources on shutdown."""
    from src.startup_checks import validate_settings
    validate_settings()

    await create_all()
    logger.info("Database tables ready")

    yield

    logger.info("Shutting down — draining connections...")
    from src.services.blob_store import get_blob_store
    await get_blob_store().close()
    await engine.dispose()
    logger.info("Shutdown complete")


app = FastAPI(
    title="Mascotas SJ API",
    version=__version__,
    description="Lost pets, adoption listings and donation campaigns for San Justo, with admin moderation",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

from src.middleware.security_headers import SecurityHeadersMiddleware
app.add_middleware(SecurityHeadersMiddleware)

from src.middleware.request_id import RequestIDMiddleware
app.add_middleware(RequestIDMiddleware)

from src.middleware.rate_limit import RateLimitMiddleware, _get_client_ip
app.add_middleware(RateLimitMiddleware)

# Local Blob Store objects are served by the API itself
if settings.STORAGE_BACKEND == "local" and settings.STORAGE_PUBLIC_URL.startswith("/"):
    app.mount(
        settings.STORAGE_PUBLIC_URL,
        StaticFiles(directory=settings.STORAGE_DIR, check_dir=False),
        name="storage",
    )


# ---- Auth routes ----
from src.auth import (
    SignUpRequest, LoginRequest, RefreshRequest, create_tokens, hash_password, verify_password,
    require_user, role_for_email, _verify,
)
from src.db.user_tables import UserRow
from src.services.login_throttle import login_throttle, throttle_key
from src.services.validation import validate_email, validate_login_form, validate_password


def _field_errors(errors: dict[str, str]) -> RequestValidationError:
    return RequestValidationError([
        {"loc": ("body", field), "msg": message, "type": "value_error"}
        for field, message in errors.items()
    ])


def _user_payload(user: UserRow) -> dict:
    return {"id": user.id, "email": user.email, "display_name": user.display_name, "role": user.role}


@app.post("/api/v1/auth/signup", status_code=201)
async def signup(req: SignUpRequest, session: AsyncSession = Depends(get_session)):
    """Create a new user account."""
    errors = {}
    if err := validate_email(req.email):
        errors["email"] = err
    if err := validate_password(req.password):
        errors["password"] = err
    if errors:
        raise _field_errors(errors)

    email = req.email.strip().lower()
    existing = await session.execute(select(UserRow).where(UserRow.email == email))
    if existing.scalar_one_or_none():
        raise HTTPException(409, "Email already registered")
    user = UserRow(
        email=email,
        password_hash=hash_password(req.password),
        display_name=(req.display_name or "").strip() or None,
        role=role_for_email(email),
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    logger.info("New %s account %s", user.role, user.id)
    return {"user": _user_payload(user), **create_tokens(user.id)}


@app.post("/api/v1/auth/login")
async def login(req: LoginRequest, request: Request, session: AsyncSession = Depends(get_session)):
    """Log in with email + password. Repeated failures lock the account/IP pair for a while."""
    errors = validate_login_form(req.email, req.password)
    if errors:
        raise _field_errors(errors)

    email = req.email.strip().lower()
    key = throttle_key(_get_client_ip(request), email)
    state = login_throttle.get_state(key)
    if state.blocked:
        retry_after = max(1, (state.remaining_ms or 0) // 1000)
        return JSONResponse(
            status_code=429,
            content={
                "error": "login_blocked",
                "message": "Demasiados intentos fallidos. Intenta de nuevo más tarde.",
                "remaining_ms": state.remaining_ms,
            },
            headers={"Retry-After": str(retry_after)},
        )

    result = await session.execute(select(UserRow).where(UserRow.email == email))
    user = result.scalar_one_or_none()
    if not user or not verify_password(req.password, user.password_hash):
        login_throttle.record_failed_attempt(key)
        raise HTTPException(401, "Invalid email or password")

    login_throttle.clear(key)
    user.last_login_at = datetime.now(timezone.utc)
    await session.commit()
    return {"user": _user_payload(user), **create_tokens(user.id)}


@app.post("/api/v1/auth/refresh")
async def refresh_token(req: RefreshRequest, session: AsyncSession = Depends(get_session)):
    """Exchange a valid refresh token for new access + refresh tokens."""
    payload = _verify(req.refresh_token)
    if not payload or payload.get("type") != "refresh":
        raise HTTPException(401, "Invalid or expired refresh token")
    result = await session.execute(select(UserRow).where(UserRow.id == payload.get("sub")))
    user = result.scalar_one_or_none()
    if not user:
        raise HTTPException(401, "User not found")
    return {"user": _user_payload(user), **create_tokens(user.id)}


@app.get("/api/v1/auth/me")
async def whoami(user: UserRow = Depends(require_user)):
    return _user_payload(user)


# ---- Listings + admin ----
from src.api.listings import lost_pets_router, adoption_pets_router, donation_campaigns_router
app.include_router(lost_pets_router)
app.include_router(adoption_pets_router)
app.include_router(donation_campaigns_router)

from src.api.admin import router as admin_router
app.include_router(admin_router)


@app.get("/")
async def root():
    return {"app": "Mascotas SJ", "version": __version__}


@app.get("/health")
async def health(session: AsyncSession = Depends(get_session)):
    try:
        await session.execute(text("SELECT 1"))
        db_status = "connected"
    except Exception:
        logger.exception("Health check: database unreachable")
        db_status = "error"
    status = "ok" if db_status == "connected" else "degraded"
    return {"status": status, "db": db_status, "version": __version__}


@app.get("/ready")
async def readiness(session: AsyncSession = Depends(get_session)):
    """Readiness probe — 503 until the database answers."""
    try:
        await session.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Readiness check: database unreachable")
        return JSONResponse(status_code=503, content={"ready": False, "reason": "database unavailable"})
    return {"ready": True}


# --- Structured Error Responses ---

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Return clean, structured validation errors instead of raw Pydantic output."""
    errors = []
    for err in exc.errors():
        field = " → ".join(str(loc) for loc in err["loc"]) if err.get("loc") else "unknown"
        errors.append({"field": field, "message": err["msg"]})
    return JSONResponse(status_code=422, content={
        "error": "validation_error",
        "message": "Invalid request data",
        "details": errors,
    })


@app.exception_handler(ListingError)
async def listing_error_handler(request: Request, exc: ListingError):
    """Service errors carry their own status; backend messages pass through unchanged."""
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", exc.error, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={
        "error": exc.error,
        "message": exc.message,
    })


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Consistent error envelope for all HTTP errors."""
    return JSONResponse(status_code=exc.status_code, content={
        "error": exc.detail if isinstance(exc.detail, str) else "error",
        "message": exc.detail,
    }, headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Catch-all for unhandled exceptions — never leak stack traces."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={
        "error": "internal_error",
        "message": "Something went wrong. Please try again.",
    })
