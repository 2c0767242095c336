"""Admin dashboard endpoints — protected by the admin role."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth import require_admin
from src.db.engine import get_session
from src.db.user_tables import UserRow
from src.services.domains import ALL_DOMAINS
from src.services.moderation import listing_stats

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


@router.get("/stats")
async def dashboard_stats(
    admin: UserRow = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    """Listing counts per content domain and moderation status."""
    return await listing_stats(session, ALL_DOMAINS)
