"""Login form validation — user-facing (Spanish) error messages."""
from __future__ import annotations

import re

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MAX_EMAIL = 254
MIN_PASSWORD = 8
MAX_PASSWORD = 72  # bcrypt-compatible upper bound kept for existing accounts


def validate_email(value: str | None) -> str | None:
    """Return an error message, or None when the email is acceptable."""
    email = (value or "").strip()
    if not email:
        return "El email es obligatorio."
    if not EMAIL_RE.match(email):
        return "Introduce un email válido."
    if len(email) > MAX_EMAIL:
        return "Email demasiado largo."
    return None


def validate_password(value: str | None) -> str | None:
    if not value:
        return "La contraseña es obligatoria."
    if len(value) < MIN_PASSWORD:
        return f"Mínimo {MIN_PASSWORD} caracteres."
    if len(value) > MAX_PASSWORD:
        return f"Máximo {MAX_PASSWORD} caracteres."
    return None


def validate_login_form(email: str | None, password: str | None) -> dict[str, str]:
    """Field -> message for every invalid field (empty dict = valid)."""
    errors: dict[str, str] = {}
    email_error = validate_email(email)
    password_error = validate_password(password)
    if email_error:
        errors["email"] = email_error
    if password_error:
        errors["password"] = password_error
    return errors
