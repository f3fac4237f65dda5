"""Multipart image intake: type filter and size/count limits."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
import re

from fastapi import Request
from starlette.datastructures import UploadFile

from storefront.core.errors import UploadRejectedError

ALLOWED_IMAGE_TYPES = re.compile(r"jpeg|jpg|png|gif|webp")

INVALID_TYPE_MESSAGE = "Error: Only image files are allowed (jpeg, jpg, png, gif, webp)!"
UNEXPECTED_FIELD_MESSAGE = "Unexpected file field. Please check your form fields."


@dataclass(frozen=True)
class ImageUpload:
    """An accepted image file read into memory."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


def is_allowed_image(filename: str, content_type: str) -> bool:
    """Both the extension and the declared MIME type must name an image format."""
    extension = PurePath(filename).suffix.lower()
    return bool(ALLOWED_IMAGE_TYPES.search(extension)) and bool(ALLOWED_IMAGE_TYPES.search(content_type or ""))


async def collect_images(
    request: Request,
    field: str,
    *,
    max_count: int,
    max_bytes: int,
) -> list[ImageUpload]:
    """Read every file part of ``field`` from a multipart request.

    Non-multipart requests and forms without files yield an empty list.
    """
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith("multipart/form-data"):
        return []

    form = await request.form()
    files: list[UploadFile] = []
    for key, value in form.multi_items():
        if not isinstance(value, UploadFile):
            continue
        if key != field:
            raise UploadRejectedError(UNEXPECTED_FIELD_MESSAGE)
        if value.filename:
            files.append(value)

    if len(files) > max_count:
        raise UploadRejectedError(f"Too many files. Maximum {max_count} files allowed.")

    accepted: list[ImageUpload] = []
    for upload in files:
        if not is_allowed_image(upload.filename or "", upload.content_type or ""):
            raise UploadRejectedError(INVALID_TYPE_MESSAGE)
        content = await upload.read()
        if len(content) > max_bytes:
            raise UploadRejectedError(f"File size too large. Maximum size is {max_bytes // (1024 * 1024)}MB.")
        accepted.append(
            ImageUpload(
                filename=upload.filename or "",
                content_type=upload.content_type or "",
                content=content,
            )
        )
    return accepted
