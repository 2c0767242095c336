"""User accounts — email + password, with a role gating moderation routes."""
from __future__ import annotations

from sqlalchemy import Column, String, DateTime

from src.db.tables import Base, new_id, _now


class UserRow(Base):
    """Registered user. Role is "user" or "admin"."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(256), nullable=False)  # PBKDF2-SHA256
    display_name = Column(String(100), nullable=True)
    role = Column(String(10), nullable=False, default="user")

    created_at = Column(DateTime(timezone=True), default=_now)
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
