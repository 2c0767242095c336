"""Listing API: submissions, public feeds, "my submissions" and the admin moderation queue.

The three content domains expose the same routes under their own segment:
/api/v1/lost-pets, /api/v1/adoption-pets, /api/v1/donation-campaigns.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from config.settings import settings
from src.auth import require_admin, require_user
from src.db.engine import get_session
from src.db.user_tables import UserRow
from src.models.listing import (
    AdoptionPetSubmission, DonationCampaignSubmission, LostPetSubmission, ReviewRequest, Submission,
)
from src.services.blob_store import BlobStore, get_blob_store
from src.services.domains import ADOPTION_PETS, DONATION_CAMPAIGNS, LOST_PETS
from src.services.moderation import ImageUpload, ListingDomain, ListingService

IMAGE_FIELD = "image"


async def read_submission(
    request: Request, model_cls: type[Submission], list_fields: tuple[str, ...] = (),
) -> tuple[Submission, ImageUpload | None]:
    """Parse a multipart submission into (validated payload, image)."""
    form = await request.form()
    data: dict = {}
    for key in form.keys():
        if key == IMAGE_FIELD:
            continue
        data[key] = form.getlist(key) if key in list_fields else form.get(key)

    try:
        payload = model_cls.model_validate(data)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc

    image = None
    upload = form.get(IMAGE_FIELD)
    if isinstance(upload, UploadFile):
        image = await read_image(upload)
    return payload, image


async def read_image(upload: UploadFile) -> ImageUpload:
    # One byte past the limit is enough for validate_image to refuse it
    return ImageUpload(
        filename=upload.filename,
        data=await upload.read(settings.MAX_IMAGE_BYTES + 1),
        content_type=upload.content_type,
    )


def build_listing_router(
    domain: ListingDomain,
    submission_cls: type[Submission],
    list_fields: tuple[str, ...] = (),
) -> APIRouter:
    router = APIRouter(tags=[domain.name])

    def get_service(
        session: AsyncSession = Depends(get_session),
        blob_store: BlobStore = Depends(get_blob_store),
    ) -> ListingService:
        return ListingService(session, domain, blob_store)

    @router.post(f"/api/v1/{domain.name}", status_code=201)
    async def submit(
        request: Request,
        user: UserRow = Depends(require_user),
        service: ListingService = Depends(get_service),
    ):
        """Submit a new listing (multipart form + `image` file). It stays hidden until approved."""
        payload, image = await read_submission(request, submission_cls, list_fields)
        row = await service.submit(payload, image, user_id=user.id)
        return {
            "id": row.id,
            "status": row.status,
            "image_url": row.image_url,
            "message": "Publicación recibida. Será visible cuando un administrador la apruebe.",
        }

    @router.get(f"/api/v1/{domain.name}")
    async def list_public(service: ListingService = Depends(get_service)):
        """Approved listings, newest first."""
        data = await service.list_public()
        return {"data": data, "total": len(data)}

    @router.get(f"/api/v1/me/{domain.name}")
    async def list_mine(
        user: UserRow = Depends(require_user),
        service: ListingService = Depends(get_service),
    ):
        """The caller's own submissions, whatever their status."""
        data = await service.list_for_owner(user.id)
        return {"data": data, "total": len(data)}

    @router.delete(f"/api/v1/me/{domain.name}/{{listing_id}}", status_code=204)
    async def delete_mine(
        listing_id: str,
        user: UserRow = Depends(require_user),
        service: ListingService = Depends(get_service),
    ):
        await service.delete_own(listing_id, user.id)
        return Response(status_code=204)

    # ── Admin ────────────────────────────────────────────────────────────

    @router.get(f"/api/v1/admin/{domain.name}")
    async def admin_list(
        status: str = Query("pending", pattern="^(pending|approved)$"),
        admin: UserRow = Depends(require_admin),
        service: ListingService = Depends(get_service),
    ):
        """Moderation queue (pending) or published listings (approved), full rows."""
        if status == "approved":
            data = await service.list_approved()
        else:
            data = await service.list_pending()
        return {"data": data, "total": len(data)}

    @router.post(f"/api/v1/admin/{domain.name}/{{listing_id}}/approve")
    async def approve(
        listing_id: str,
        admin: UserRow = Depends(require_admin),
        service: ListingService = Depends(get_service),
    ):
        return await service.approve(listing_id, admin.id)

    @router.post(f"/api/v1/admin/{domain.name}/{{listing_id}}/reject")
    async def reject(
        listing_id: str,
        body: ReviewRequest | None = None,
        admin: UserRow = Depends(require_admin),
        service: ListingService = Depends(get_service),
    ):
        return await service.reject(listing_id, admin.id, body.reason if body else None)

    @router.post(f"/api/v1/admin/{domain.name}/{{listing_id}}/remove")
    async def remove(
        listing_id: str,
        body: ReviewRequest | None = None,
        admin: UserRow = Depends(require_admin),
        service: ListingService = Depends(get_service),
    ):
        """Take down a published listing."""
        return await service.remove(listing_id, admin.id, body.reason if body else None)

    return router


lost_pets_router = build_listing_router(LOST_PETS, LostPetSubmission)
adoption_pets_router = build_listing_router(ADOPTION_PETS, AdoptionPetSubmission, list_fields=("med_status",))
donation_campaigns_router = build_listing_router(DONATION_CAMPAIGNS, DonationCampaignSubmission)
