"""Photo ingestion for product records.

Reading the bytes of an upload is delegated to a ``PhotoReader`` supplied by
the caller, so the service never touches a filesystem or upload storage
itself.  Readers may be plain or ``async`` callables.
"""

from __future__ import annotations

import inspect
from pathlib import Path
from typing import TYPE_CHECKING, Any, Awaitable, Mapping, Optional, Protocol, Union

import structlog

if TYPE_CHECKING:
    from django.core.files.uploadedfile import UploadedFile

    from modules.products.dtos import PhotoUpload

logger = structlog.get_logger(__name__)


class PhotoReader(Protocol):
    """Capability that returns the bytes stored at ``path``."""

    def __call__(self, path: str) -> Union[bytes, Awaitable[bytes]]: ...


class FileSystemPhotoReader:
    """Reads photos from local files, e.g. a temporary upload directory."""

    def __call__(self, path: str) -> bytes:
        return Path(path).read_bytes()


class UploadedPhotoReader:
    """Reads Django ``UploadedFile`` objects keyed by their descriptor path.

    Works for in-memory and temporary-file uploads alike because it reads
    through ``chunks()`` instead of reopening a path on disk.
    """

    def __init__(self, uploads: Mapping[str, UploadedFile]) -> None:
        self._uploads = uploads

    def __call__(self, path: str) -> bytes:
        try:
            upload = self._uploads[path]
        except KeyError:
            raise FileNotFoundError(path) from None
        upload.seek(0)
        return b"".join(upload.chunks())


async def attach_photo_if_present(
    product: Any,
    photo: Optional[PhotoUpload],
    read_bytes: PhotoReader,
) -> None:
    """Copy the uploaded photo onto ``product``; do nothing without one.

    When ``photo`` is ``None`` the reader is not called and the product's
    ``photo`` / ``photo_content_type`` keep whatever they held before.
    """
    if photo is None:
        return

    data = read_bytes(photo.path)
    if inspect.isawaitable(data):
        data = await data

    product.photo = data
    product.photo_content_type = photo.content_type
    logger.debug(
        "product.photo_attached",
        content_type=photo.content_type,
        size=len(data),
    )
