# =============================================================================
# app/routers/inspirations.py - Mood Board Endpoints
# =============================================================================
# Images are uploaded as multipart form data; the row stores the public URL.
# Captions (category, note) can be edited afterwards via PATCH.
# =============================================================================

from typing import Annotated

from fastapi import File, Form, UploadFile, status

from app.dependencies import CurrentUserDep, CurrentWeddingDep
from app.routers.scoped import scoped_crud_router
from core.models.inspiration import Inspiration, InspirationCategory
from core.services.inspiration_service import InspirationService

router = scoped_crud_router(InspirationService, include_create=False)


@router.post("", response_model=Inspiration, status_code=status.HTTP_201_CREATED)
async def upload_inspiration(
    wedding: CurrentWeddingDep,
    user: CurrentUserDep,
    file: Annotated[UploadFile, File(description="Image file (jpg, png, webp, gif)")],
    category: Annotated[InspirationCategory, Form()] = InspirationCategory.GENERAL,
    note: Annotated[str | None, Form(max_length=1000)] = None,
):
    """
    Add an image to the mood board.

    Example:
        curl -X POST /api/v1/inspirations \\
          -H "Authorization: Bearer $TOKEN" \\
          -F "file=@dress.jpg" -F "category=Attire" -F "note=Love the sleeves"
    """
    content = await file.read()

    return InspirationService.upload(
        wedding.id,
        user.id,
        filename=file.filename or "",
        content=content,
        category=category,
        note=note,
        content_type=file.content_type,
    )
