"""On-disk storage for wine photos."""

import logging
import re
import uuid
from pathlib import Path

import aiofiles
from fastapi import UploadFile

from winejournal.config import settings

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}

# (magic bytes, offset, extension); WebP also needs "WEBP" at offset 8
IMAGE_MAGIC_SIGNATURES = [
    (b"\xff\xd8\xff", 0, ".jpg"),
    (b"\x89PNG\r\n\x1a\n", 0, ".png"),
    (b"GIF87a", 0, ".gif"),
    (b"GIF89a", 0, ".gif"),
    (b"RIFF", 0, ".webp"),
]

_STORED_NAME = re.compile(r"^[0-9a-f]{32}\.(jpg|png|gif|webp)$")


def detect_image_type(content: bytes) -> str | None:
    """Return the image extension implied by the content's magic bytes."""
    if len(content) < 12:
        return None

    for magic, offset, ext in IMAGE_MAGIC_SIGNATURES:
        if content[offset:offset + len(magic)] == magic:
            if ext == ".webp" and content[8:12] != b"WEBP":
                continue
            return ext
    return None


class ImageStorageError(Exception):
    """Base class for rejected uploads. ``status_code`` is the HTTP status to report."""

    status_code = 400


class InvalidFileTypeError(ImageStorageError):
    pass


class InvalidImageContentError(ImageStorageError):
    pass


class FileSizeExceededError(ImageStorageError):
    status_code = 413


class ImageStorageService:
    """Validates uploads and stores them under the configured images directory."""

    def __init__(
        self,
        storage_path: Path | None = None,
        max_size_bytes: int | None = None,
    ) -> None:
        self.storage_path = storage_path or settings.image_storage_path
        self.storage_path.mkdir(parents=True, exist_ok=True)
        self.max_size_bytes = max_size_bytes or settings.max_upload_size_bytes

    def _check_extension(self, filename: str | None) -> None:
        if not filename:
            return
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise InvalidFileTypeError(
                f"Invalid file type. Allowed types: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
            )

    async def save_image(self, upload_file: UploadFile) -> str:
        """Validate and store an uploaded image.

        The stored name is random and carries the extension detected from the
        content, never the one supplied by the client.

        Returns:
            The stored filename.

        Raises:
            InvalidFileTypeError: The filename has a disallowed extension.
            FileSizeExceededError: The upload is larger than the limit.
            InvalidImageContentError: The content is not a recognised image.
        """
        self._check_extension(upload_file.filename)

        content = await upload_file.read(self.max_size_bytes + 1)
        if len(content) > self.max_size_bytes:
            max_mb = self.max_size_bytes / (1024 * 1024)
            raise FileSizeExceededError(f"File size exceeds maximum allowed size of {max_mb:.1f} MB")

        ext = detect_image_type(content)
        if ext is None:
            raise InvalidImageContentError(
                "Invalid file content. File does not appear to be a valid image."
            )

        filename = f"{uuid.uuid4().hex}{ext}"
        async with aiofiles.open(self.storage_path / filename, "wb") as f:
            await f.write(content)

        logger.info("Stored image %s (%d bytes)", filename, len(content))
        return filename

    def get_image_path(self, filename: str) -> Path | None:
        """Full path of a stored image, or None for unknown or malformed names."""
        if not _STORED_NAME.match(filename):
            return None
        file_path = self.storage_path / filename
        return file_path if file_path.exists() else None

    async def delete_image(self, filename: str) -> bool:
        file_path = self.get_image_path(filename)
        if file_path is None:
            return False
        file_path.unlink()
        return True

    @staticmethod
    def filename_from_url(url: str | None) -> str | None:
        if not url or not url.startswith("/api/images/"):
            return None
        return url.rsplit("/", 1)[-1]

    @staticmethod
    def get_image_url(filename: str) -> str:
        return f"/api/images/{filename}"
