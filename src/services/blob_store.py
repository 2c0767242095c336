"""Blob Store — image storage for listing submissions.

Two backends:
- LocalBlobStore: files under STORAGE_DIR, served by the API at /storage (dev)
- HttpBlobStore: Supabase-storage-compatible REST API (prod)

Objects are never overwritten unless upsert=True, so a path collision surfaces
as an UploadError instead of silently replacing another listing's image.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

import httpx

from config.settings import settings
from src.errors import UploadError

logger = logging.getLogger(__name__)


class BlobStore(ABC):
    """Abstract object storage addressed by (bucket, path)."""

    @abstractmethod
    async def upload(
        self, bucket: str, path: str, data: bytes,
        content_type: str | None = None, upsert: bool = False,
    ) -> None:
        """Store `data` at bucket/path. Raises UploadError on failure."""
        ...

    @abstractmethod
    def get_public_url(self, bucket: str, path: str) -> str:
        """Durable public URL for an uploaded object."""
        ...

    @abstractmethod
    async def delete(self, bucket: str, path: str) -> bool:
        """Remove an object. Returns False if it did not exist."""
        ...

    async def close(self) -> None:
        return None


class LocalBlobStore(BlobStore):
    """Filesystem-backed store (one directory per bucket)."""

    def __init__(self, root: str | Path, public_base_url: str):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.public_base_url = public_base_url.rstrip("/")

    def _resolve(self, bucket: str, path: str) -> Path:
        target = (self.root / bucket / path).resolve()
        if self.root.resolve() not in target.parents:
            raise UploadError(f"Invalid storage path: {bucket}/{path}")
        return target

    async def upload(self, bucket, path, data, content_type=None, upsert=False):
        target = self._resolve(bucket, path)
        target.parent.mkdir(parents=True, exist_ok=True)
        mode = "wb" if upsert else "xb"
        try:
            with open(target, mode) as f:
                f.write(data)
        except FileExistsError as exc:
            raise UploadError("The resource already exists") from exc
        except OSError as exc:
            raise UploadError(f"Could not store image: {exc.strerror or exc}") from exc
        logger.info("Stored %s/%s (%d bytes)", bucket, path, len(data))

    def get_public_url(self, bucket, path):
        return f"{self.public_base_url}/{bucket}/{path}"

    async def delete(self, bucket, path):
        target = self._resolve(bucket, path)
        if not target.exists():
            return False
        target.unlink()
        logger.info("Deleted %s/%s", bucket, path)
        return True


class HttpBlobStore(BlobStore):
    """Client for a hosted storage service (Supabase storage REST API)."""

    def __init__(self, base_url: str, api_key: str, client: httpx.AsyncClient | None = None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.client = client or httpx.AsyncClient(timeout=30)

    @property
    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}", "apikey": self.api_key}

    async def upload(self, bucket, path, data, content_type=None, upsert=False):
        headers = {
            **self._headers,
            "Content-Type": content_type or "application/octet-stream",
            "x-upsert": "true" if upsert else "false",
        }
        try:
            resp = await self.client.post(
                f"{self.base_url}/storage/v1/object/{bucket}/{path}",
                content=data,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            raise UploadError(f"Storage unreachable: {exc}") from exc
        if resp.status_code >= 400:
            raise UploadError(_error_message(resp))
        logger.info("Uploaded %s/%s (%d bytes)", bucket, path, len(data))

    def get_public_url(self, bucket, path):
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{path}"

    async def delete(self, bucket, path):
        try:
            resp = await self.client.request(
                "DELETE",
                f"{self.base_url}/storage/v1/object/{bucket}",
                json={"prefixes": [path]},
                headers=self._headers,
            )
        except httpx.HTTPError as exc:
            raise UploadError(f"Storage unreachable: {exc}") from exc
        if resp.status_code >= 400:
            raise UploadError(_error_message(resp))
        return bool(resp.json())

    async def close(self):
        await self.client.aclose()


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"Storage error ({resp.status_code})"
    return body.get("message") or body.get("error") or f"Storage error ({resp.status_code})"


_store: BlobStore | None = None


def build_blob_store() -> BlobStore:
    if settings.STORAGE_BACKEND == "http":
        return HttpBlobStore(settings.STORAGE_API_URL, settings.STORAGE_API_KEY)
    return LocalBlobStore(settings.STORAGE_DIR, settings.STORAGE_PUBLIC_URL)


def get_blob_store() -> BlobStore:
    """Dependency for FastAPI — process-wide store built from settings."""
    global _store
    if _store is None:
        _store = build_blob_store()
    return _store
