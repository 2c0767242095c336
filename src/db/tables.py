"""SQLAlchemy declarative base and the moderation columns shared by every listing table."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import DeclarativeBase


def _now():
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


class ModeratedMixin:
    """Lifecycle columns: every submission starts pending and is reviewed by an admin."""

    id = Column(String(36), primary_key=True, default=new_id)
    status = Column(String(20), default="pending", nullable=False, index=True)  # pending, approved, rejected
    user_id = Column(String(36), nullable=True, index=True)  # weak owner reference
    image_url = Column(String(2000), nullable=False)

    submitted_at = Column(DateTime(timezone=True), default=_now, nullable=False, index=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    reviewed_by = Column(String(36), nullable=True)
    rejection_reason = Column(Text, nullable=True)
