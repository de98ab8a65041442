# =============================================================================
# core/services/inspiration_service.py - Mood Board Repository
# =============================================================================
# Each inspiration is an image in the moodboard bucket, stored under the
# wedding's folder, plus a row pointing at its public URL.
# =============================================================================

from __future__ import annotations

import logging
from uuid import UUID

from core.models.common import OrderBy
from core.models.inspiration import (
    Inspiration,
    InspirationCategory,
    InspirationCreate,
    InspirationUpdate,
)
from core.services.scoped_repository import ScopedRepository
from core.services.storage_service import MOODBOARD_BUCKET, StorageService

logger = logging.getLogger(__name__)


class InspirationService(ScopedRepository[Inspiration]):
    """Repository for the inspirations table, newest first."""

    table = "inspirations"
    resource_name = "Inspiration"
    record_model = Inspiration
    create_model = InspirationCreate
    update_model = InspirationUpdate
    attribution_field = "saved_by"
    default_order = (OrderBy("created_at", descending=True),)
    sortable_columns = frozenset({"category", "created_at", "updated_at"})

    @classmethod
    def upload(
        cls,
        wedding_id: UUID | str,
        user_id: UUID | str,
        filename: str,
        content: bytes,
        category: InspirationCategory | str = InspirationCategory.GENERAL,
        note: str | None = None,
        content_type: str | None = None,
    ) -> Inspiration:
        """
        Upload an image to the mood board and save it.

        The category and note are validated before the upload so a bad
        caption never leaves an orphaned file in the bucket.

        Returns:
            The new Inspiration row

        Raises:
            InvalidInputError: Unknown category or note too long
            InvalidFileTypeError / FileTooLargeError: Image rejected
            StorageUploadError: Bucket upload failed
        """
        caption = cls._validate(
            InspirationUpdate,
            {"category": category, "note": note},
        )

        image_url = StorageService.upload_image(
            MOODBOARD_BUCKET, wedding_id, filename, content, content_type
        )

        logger.info(f"Saving mood board image for wedding {wedding_id}")
        return cls.create(
            wedding_id,
            user_id,
            InspirationCreate(
                image_url=image_url,
                category=caption.category or InspirationCategory.GENERAL,
                note=caption.note,
            ),
        )
