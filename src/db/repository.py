"""Listing repository — Record Store access shared by the three content domains."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import select, func, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.errors import RecordStoreError


def row_to_dict(row: Any) -> dict:
    """Full column snapshot of a row (admin views get every field)."""
    return {col.name: getattr(row, col.name) for col in row.__table__.columns}


class ListingRepository:
    """Async CRUD over one listing table.

    Every SQLAlchemy failure is wrapped in RecordStoreError with the driver
    message passed through unchanged.
    """

    def __init__(self, session: AsyncSession, row_cls: type):
        self.session = session
        self.row_cls = row_cls

    async def insert(self, values: dict) -> Any:
        row = self.row_cls(**values)
        self.session.add(row)
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise RecordStoreError(str(exc)) from exc
        return row

    async def get(self, listing_id: str) -> Optional[Any]:
        try:
            result = await self.session.execute(
                select(self.row_cls).where(self.row_cls.id == listing_id)
            )
        except SQLAlchemyError as exc:
            raise RecordStoreError(str(exc)) from exc
        return result.scalar_one_or_none()

    async def list_by_status(self, status: str, order_by: str = "submitted_at") -> list[Any]:
        """Rows with the given status, newest first on `order_by`."""
        column = getattr(self.row_cls, order_by)
        stmt = (
            select(self.row_cls)
            .where(self.row_cls.status == status)
            .order_by(column.desc(), self.row_cls.submitted_at.desc())
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise RecordStoreError(str(exc)) from exc
        return list(result.scalars().all())

    async def list_by_owner(self, user_id: str) -> list[Any]:
        stmt = (
            select(self.row_cls)
            .where(self.row_cls.user_id == user_id)
            .order_by(self.row_cls.submitted_at.desc())
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise RecordStoreError(str(exc)) from exc
        return list(result.scalars().all())

    async def set_review(
        self, row: Any, status: str, reviewer_id: str, rejection_reason: Optional[str]
    ) -> Any:
        """Apply a moderation decision; the reviewed_* fields always change together."""
        row.status = status
        row.reviewed_at = datetime.now(timezone.utc)
        row.reviewed_by = reviewer_id
        row.rejection_reason = rejection_reason
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise RecordStoreError(str(exc)) from exc
        return row

    async def delete(self, listing_id: str) -> bool:
        try:
            result = await self.session.execute(
                delete(self.row_cls).where(self.row_cls.id == listing_id)
            )
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise RecordStoreError(str(exc)) from exc
        return result.rowcount > 0

    async def count_by_status(self) -> dict[str, int]:
        stmt = select(self.row_cls.status, func.count(self.row_cls.id)).group_by(self.row_cls.status)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise RecordStoreError(str(exc)) from exc
        counts = {"pending": 0, "approved": 0, "rejected": 0}
        for status, count in result.all():
            counts[status] = count
        return counts
