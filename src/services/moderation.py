"""Moderation lifecycle shared by lost pets, adoption listings and donation campaigns.

Flow:
1. submit: image goes to the Blob Store, then a `pending` row is inserted
2. list_pending / list_approved: admin review queues (full rows)
3. approve / reject: record reviewer, timestamp and rejection reason
4. list_public: approved rows only, mapped to the public display shape

Transitions are permissive by default (any status can be approved or rejected
again, nothing goes back to pending). With STRICT_MODERATION only pending rows
may change status; re-applying the current status is always accepted.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.db.repository import ListingRepository, row_to_dict
from src.db.tables import new_id
from src.errors import (
    InvalidTransition, ListingNotFound, RecordStoreError, SubmissionValidationError,
)
from src.models.listing import ModerationStatus, Submission
from src.services.blob_store import BlobStore

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "webp", "gif"}
DEFAULT_IMAGE_EXTENSION = "jpg"
REMOVAL_REASON = "Publicación eliminada por un administrador"

PENDING = ModerationStatus.PENDING.value
APPROVED = ModerationStatus.APPROVED.value
REJECTED = ModerationStatus.REJECTED.value

_STRICT_TRANSITIONS = {
    PENDING: {APPROVED, REJECTED},
    APPROVED: {APPROVED},
    REJECTED: {REJECTED},
}


@dataclass(frozen=True)
class ListingDomain:
    """Everything that differs between the three content domains."""
    name: str  # URL segment, e.g. "lost-pets"
    label: str  # for log lines
    row_cls: type
    bucket: str
    to_display: Callable[[Any], BaseModel]
    approved_order: str = "reviewed_at"


@dataclass
class ImageUpload:
    filename: Optional[str]
    data: bytes
    content_type: Optional[str] = None

    @property
    def extension(self) -> str:
        suffix = Path(self.filename or "").suffix.lstrip(".").lower()
        return suffix or DEFAULT_IMAGE_EXTENSION


def validate_image(image: Optional[ImageUpload]) -> ImageUpload:
    if image is None or not image.data:
        raise SubmissionValidationError("Debes adjuntar una imagen.")
    if image.extension not in ALLOWED_IMAGE_EXTENSIONS:
        raise SubmissionValidationError(
            f"Formato de imagen no permitido. Usa: {', '.join(sorted(ALLOWED_IMAGE_EXTENSIONS))}"
        )
    if len(image.data) > settings.MAX_IMAGE_BYTES:
        raise SubmissionValidationError(
            f"La imagen supera el máximo de {settings.MAX_IMAGE_BYTES / 1024 / 1024:.1f}MB"
        )
    return image


def _clean_reason(reason: Optional[str]) -> Optional[str]:
    return (reason or "").strip() or None


class ListingService:
    """Submission, listing and moderation for one content domain."""

    def __init__(self, session: AsyncSession, domain: ListingDomain, blob_store: BlobStore):
        self.domain = domain
        self.blob_store = blob_store
        self.repo = ListingRepository(session, domain.row_cls)

    # ── Submission ───────────────────────────────────────────────────────

    async def submit(
        self, payload: Submission, image: Optional[ImageUpload], user_id: Optional[str] = None,
    ) -> Any:
        """Upload the image, then insert a pending row.

        Nothing is inserted when the upload fails. If the insert fails the
        uploaded blob is deleted before the error is re-raised.
        """
        image = validate_image(image)
        listing_id = new_id()
        path = f"reports/{listing_id}.{image.extension}"

        await self.blob_store.upload(
            self.domain.bucket, path, image.data, content_type=image.content_type, upsert=False,
        )
        image_url = self.blob_store.get_public_url(self.domain.bucket, path)

        values = payload.to_row_values()
        values.update(id=listing_id, status=PENDING, user_id=user_id, image_url=image_url)
        try:
            row = await self.repo.insert(values)
        except RecordStoreError:
            logger.error("Insert failed for %s %s, removing uploaded image", self.domain.label, listing_id)
            await self._discard_blob(path)
            raise

        logger.info("New %s %s submitted by %s", self.domain.label, listing_id, user_id or "anonymous")
        return row

    async def _discard_blob(self, path: str) -> None:
        try:
            await self.blob_store.delete(self.domain.bucket, path)
        except Exception:
            logger.exception("Could not delete orphan image %s/%s", self.domain.bucket, path)

    # ── Listing ──────────────────────────────────────────────────────────

    async def list_public(self) -> list[BaseModel]:
        rows = await self.repo.list_by_status(APPROVED, order_by="submitted_at")
        return [self.domain.to_display(r) for r in rows]

    async def list_pending(self) -> list[dict]:
        rows = await self.repo.list_by_status(PENDING, order_by="submitted_at")
        return [row_to_dict(r) for r in rows]

    async def list_approved(self) -> list[dict]:
        rows = await self.repo.list_by_status(APPROVED, order_by=self.domain.approved_order)
        return [row_to_dict(r) for r in rows]

    async def list_for_owner(self, user_id: str) -> list[dict]:
        rows = await self.repo.list_by_owner(user_id)
        return [row_to_dict(r) for r in rows]

    # ── Moderation ───────────────────────────────────────────────────────

    async def _get_or_404(self, listing_id: str) -> Any:
        row = await self.repo.get(listing_id)
        if row is None:
            raise ListingNotFound(f"{self.domain.label} {listing_id} not found")
        return row

    def _check_transition(self, current: str, target: str) -> None:
        if not settings.STRICT_MODERATION:
            return
        if target not in _STRICT_TRANSITIONS.get(current, set()):
            raise InvalidTransition(f"Cannot move a {current} {self.domain.label} to {target}")

    async def approve(self, listing_id: str, reviewer_id: str) -> dict:
        row = await self._get_or_404(listing_id)
        self._check_transition(row.status, APPROVED)
        row = await self.repo.set_review(row, APPROVED, reviewer_id, rejection_reason=None)
        logger.info("%s %s approved by %s", self.domain.label, listing_id, reviewer_id)
        return row_to_dict(row)

    async def reject(self, listing_id: str, reviewer_id: str, reason: Optional[str] = None) -> dict:
        row = await self._get_or_404(listing_id)
        self._check_transition(row.status, REJECTED)
        row = await self.repo.set_review(row, REJECTED, reviewer_id, rejection_reason=_clean_reason(reason))
        logger.info("%s %s rejected by %s", self.domain.label, listing_id, reviewer_id)
        return row_to_dict(row)

    async def remove(self, listing_id: str, reviewer_id: str, reason: Optional[str] = None) -> dict:
        """Take a published listing down (approved -> rejected), logged as a removal."""
        row = await self._get_or_404(listing_id)
        if row.status != APPROVED:
            raise InvalidTransition(f"Only approved listings can be removed (status: {row.status})")
        row = await self.repo.set_review(
            row, REJECTED, reviewer_id, rejection_reason=_clean_reason(reason) or REMOVAL_REASON,
        )
        logger.warning("%s %s removed from public feed by %s", self.domain.label, listing_id, reviewer_id)
        return row_to_dict(row)

    # ── Owner actions ────────────────────────────────────────────────────

    async def delete_own(self, listing_id: str, user_id: str) -> None:
        """Hard-delete one of the caller's submissions together with its image."""
        row = await self.repo.get(listing_id)
        if row is None or row.user_id != user_id:
            raise ListingNotFound(f"{self.domain.label} {listing_id} not found")
        image_url = row.image_url
        await self.repo.delete(listing_id)
        marker = f"/{self.domain.bucket}/"
        if marker in image_url:
            await self._discard_blob(image_url.split(marker, 1)[1])
        logger.info("%s %s deleted by its owner %s", self.domain.label, listing_id, user_id)


async def listing_stats(session: AsyncSession, domains: list[ListingDomain]) -> dict:
    """Per-domain status counts for the admin dashboard."""
    by_domain = {}
    for domain in domains:
        by_domain[domain.name] = await ListingRepository(session, domain.row_cls).count_by_status()
    totals = {status: sum(c[status] for c in by_domain.values()) for status in (PENDING, APPROVED, REJECTED)}
    return {"domains": by_domain, "totals": totals, "total": sum(totals.values())}
