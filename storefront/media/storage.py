"""Image storage delegate forwarding uploads and deletions to Cloudinary."""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Sequence
import io
import logging
from os import PathLike
from typing import Any
from typing import Protocol

import cloudinary.api
import cloudinary.exceptions
import cloudinary.uploader
from fastapi import Request
from fastapi import status
from starlette.concurrency import run_in_threadpool

from storefront.core.config import CloudinarySettings
from storefront.core.config import DEFAULT_UPLOAD_FOLDER
from storefront.core.errors import APIError

logger = logging.getLogger(__name__)

UploadResult = dict[str, Any]

UPLOAD_TRANSFORMATION: tuple[dict[str, Any], ...] = (
    {"width": 1200, "height": 1200, "crop": "limit"},
    {"quality": "auto"},
    {"fetch_format": "auto"},
)


class ImageServiceError(APIError):
    """Raised when the hosted image service rejects or fails a request."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        data: Any = None,
    ) -> None:
        super().__init__(message, status_code=status_code, data=data)


class ImageNotFoundError(ImageServiceError):
    """Raised when the service reports an identifier it does not hold."""

    def __init__(self, message: str, *, data: Any = None) -> None:
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND, data=data)


class ImageStorage(Protocol):
    """Capability the API needs from an image host."""

    async def upload(self, path: str | PathLike[str], folder: str = DEFAULT_UPLOAD_FOLDER) -> UploadResult: ...

    async def upload_buffer(self, buffer: bytes, folder: str = DEFAULT_UPLOAD_FOLDER) -> UploadResult: ...

    async def delete(self, public_id: str) -> dict[str, Any]: ...

    async def delete_many(self, public_ids: Sequence[str]) -> dict[str, Any]: ...


class CloudinaryImageStorage:
    """Forward image operations to Cloudinary without retries or fallbacks.

    SDK failures are not passed through as raw ``cloudinary.exceptions.Error``:
    they are re-raised as ``ImageServiceError`` (``ImageNotFoundError`` for
    unknown assets) chained to the SDK error, so the message is kept and the
    failure carries an HTTP status. Other exceptions propagate unchanged.
    """

    def __init__(self, settings: CloudinarySettings) -> None:
        self._credentials = {
            "cloud_name": settings.cloud_name,
            "api_key": settings.api_key,
            "api_secret": settings.api_secret,
            "secure": True,
        }

    async def upload(self, path: str | PathLike[str], folder: str = DEFAULT_UPLOAD_FOLDER) -> UploadResult:
        """Upload a file on disk into ``folder``."""
        logger.info("Uploading %s to folder=%s", path, folder)
        return await self._call(cloudinary.uploader.upload, str(path), **self._upload_options(folder))

    async def upload_buffer(self, buffer: bytes, folder: str = DEFAULT_UPLOAD_FOLDER) -> UploadResult:
        """Upload in-memory image bytes into ``folder``."""
        logger.info("Uploading %d bytes to folder=%s", len(buffer), folder)
        return await self._call(cloudinary.uploader.upload, io.BytesIO(buffer), **self._upload_options(folder))

    async def delete(self, public_id: str) -> dict[str, Any]:
        """Remove one asset; a "not found" answer is raised, not ignored."""
        logger.info("Deleting image public_id=%s", public_id)
        result = await self._call(cloudinary.uploader.destroy, public_id)
        if result.get("result") == "not found":
            raise ImageNotFoundError(f"Image not found: {public_id}", data={"publicIds": [public_id]})
        return result

    async def delete_many(self, public_ids: Sequence[str]) -> dict[str, Any]:
        """Remove several assets in one call and return the per-identifier acknowledgment."""
        ids = list(public_ids)
        logger.info("Deleting %d images", len(ids))
        result = await self._call(cloudinary.api.delete_resources, ids)
        missing = [public_id for public_id, outcome in result.get("deleted", {}).items() if outcome == "not_found"]
        if missing:
            raise ImageNotFoundError(f"Images not found: {', '.join(missing)}", data={"publicIds": missing})
        return result

    @staticmethod
    def _upload_options(folder: str) -> dict[str, Any]:
        return {
            "folder": folder,
            "resource_type": "auto",
            "transformation": [dict(step) for step in UPLOAD_TRANSFORMATION],
        }

    async def _call(self, operation: Callable[..., Any], *args: Any, **options: Any) -> dict[str, Any]:
        try:
            return await run_in_threadpool(operation, *args, **options, **self._credentials)
        except cloudinary.exceptions.NotFound as exc:
            raise ImageNotFoundError(str(exc)) from exc
        except cloudinary.exceptions.Error as exc:
            raise ImageServiceError(str(exc)) from exc


def get_image_storage(request: Request) -> ImageStorage:
    """Return the image storage configured on the running app."""
    return request.app.state.image_storage
