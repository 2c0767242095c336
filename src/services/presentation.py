"""Display transforms applied to approved listings before they reach the public feed."""
from __future__ import annotations

import re
from datetime import date, datetime, timezone

from config.settings import settings

_WHATSAPP_RE = re.compile(r"whatsapp:\s*([^;|]+)", re.IGNORECASE)
_EMAIL_FIELD_RE = re.compile(r"email:\s*([^;|]+)", re.IGNORECASE)
# Legacy rows stored contact details as free text
_LOOSE_EMAIL_RE = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE)
_LOOSE_PHONE_RE = re.compile(r"(\+?\d[\d\s().-]{7,}\d)")
_LEADING_INT_RE = re.compile(r"^\s*(\d+)")


def _as_utc(moment: date | datetime) -> datetime:
    if not isinstance(moment, datetime):
        moment = datetime(moment.year, moment.month, moment.day)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def time_since_label(moment: date | datetime, now: datetime | None = None) -> str:
    """Spanish relative label: minutes, then hours, days and 30-day months."""
    now = _as_utc(now or datetime.now(timezone.utc))
    seconds = max(0.0, (now - _as_utc(moment)).total_seconds())
    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if minutes < 60:
        return f"hace {minutes} min"
    if hours < 24:
        return f"hace {hours} {'hora' if hours == 1 else 'horas'}"
    if days < 30:
        return f"hace {days} {'día' if days == 1 else 'días'}"
    months = days // 30
    return f"hace {months} {'mes' if months == 1 else 'meses'}"


def full_location(location: str | None, city: str | None = None) -> str:
    city = city or settings.BASE_CITY
    return f"{city} - {location}" if location else city


def format_reward(has_reward: bool, amount: str | None) -> str | None:
    """Format a reward amount: "15000" -> "$15.000" (es-AR thousands separator)."""
    if not has_reward or not amount:
        return None
    match = _LEADING_INT_RE.match(amount)
    if not match:
        return None
    return "$" + f"{int(match.group(1)):,}".replace(",", ".")


def build_contact_info(whatsapp_number: str, contact_email: str) -> str:
    return f"whatsapp:{whatsapp_number.strip()};email:{contact_email.strip()}"


def parse_contact_info(contact_info: str | None) -> dict[str, str | None]:
    """Split stored contact_info into whatsapp_number / contact_email."""
    text = (contact_info or "").strip()
    if not text:
        return {"whatsapp_number": None, "contact_email": None}

    whatsapp = _WHATSAPP_RE.search(text)
    email = _EMAIL_FIELD_RE.search(text)
    if whatsapp or email:
        return {
            "whatsapp_number": (whatsapp.group(1).strip() or None) if whatsapp else None,
            "contact_email": (email.group(1).strip() or None) if email else None,
        }

    loose_email = _LOOSE_EMAIL_RE.search(text)
    loose_phone = _LOOSE_PHONE_RE.search(text)
    return {
        "whatsapp_number": loose_phone.group(0).strip() if loose_phone else None,
        "contact_email": loose_email.group(0).strip() if loose_email else None,
    }
