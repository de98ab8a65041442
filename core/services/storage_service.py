# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Handles image uploads for avatars and the mood board.
# Images are stored under a per-owner folder with a random file name and
# referenced from table rows by public URL.
# =============================================================================

import logging
import mimetypes
from pathlib import PurePosixPath
from uuid import UUID, uuid4

from lib.supabase_client import SupabaseClient, SupabaseClientError
from app.config import settings
from app.exceptions import FileTooLargeError, InvalidFileTypeError, StorageUploadError

logger = logging.getLogger(__name__)

# Storage bucket names
AVATAR_BUCKET = "avatars"
MOODBOARD_BUCKET = "moodboard"


class StorageService:
    """
    Service for Supabase Storage operations.

    Validates and uploads images, returning their public URL.
    """

    @staticmethod
    def validate_image(filename: str, size_bytes: int) -> str:
        """
        Check extension and size of an uploaded image.

        Args:
            filename: Original filename from the client
            size_bytes: Size of the upload

        Returns:
            Lower-cased extension including the dot (e.g. ".jpg")

        Raises:
            InvalidFileTypeError: If the extension isn't allowed
            FileTooLargeError: If the image exceeds MAX_UPLOAD_SIZE_MB
        """
        allowed = settings.allowed_image_extensions_list
        extension = PurePosixPath(filename or "").suffix.lower()

        if extension not in allowed:
            raise InvalidFileTypeError(filename or "<unnamed>", allowed)

        if size_bytes > settings.max_upload_size_bytes:
            raise FileTooLargeError(size_bytes / (1024 * 1024), settings.MAX_UPLOAD_SIZE_MB)

        return extension

    @staticmethod
    def upload_image(
        bucket: str,
        owner_id: UUID | str,
        filename: str,
        content: bytes,
        content_type: str | None = None,
    ) -> str:
        """
        Upload an image to {bucket}/{owner_id}/{random}.{ext}.

        Args:
            bucket: AVATAR_BUCKET or MOODBOARD_BUCKET
            owner_id: User id (avatars) or wedding id (mood board)
            filename: Original filename, used for the extension only
            content: Image bytes
            content_type: MIME type sent by the client

        Returns:
            Public URL of the uploaded image

        Raises:
            InvalidFileTypeError / FileTooLargeError: If validation fails
            StorageUploadError: If the upload fails
        """
        extension = StorageService.validate_image(filename, len(content))
        path = f"{owner_id}/{uuid4().hex}{extension}"
        mime = content_type or mimetypes.guess_type(filename)[0] or "application/octet-stream"

        try:
            url = SupabaseClient.upload_object(bucket, path, content, mime)
        except SupabaseClientError as e:
            logger.error(f"Storage upload failed: {e}")
            raise StorageUploadError(str(e))

        logger.info(f"Uploaded image to storage: {bucket}/{path}")
        return url
