"""
Upload endpoints:
  POST /admin/uploads/logo – Store a venue logo image and return its public URL
"""
from fastapi import APIRouter, Depends, File, UploadFile, status
from pydantic import BaseModel
import logging

from venue_menu.core.dependencies import media_storage_dependency, require_admin
from venue_menu.models.user import User
from venue_menu.services.storage_service import MediaStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/uploads", tags=["Admin: Uploads"])


class UploadResponse(BaseModel):
    path: str
    url: str
    size: int
    content_type: str

    model_config = {"from_attributes": True}


@router.post(
    "/logo",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a venue logo",
)
async def upload_logo(
    file: UploadFile = File(...),
    storage: MediaStorage = Depends(media_storage_dependency),
    _: User = Depends(require_admin),
):
    """
    Accepts image files up to the configured size limit. Save the returned
    `url` as the venue's `logo_url`, or pass `path` as `logo_path` to the QR
    export.
    """
    logger.info("Logo upload received filename=%s", file.filename)
    content = await file.read()
    stored = storage.save(content, file.filename, file.content_type, folder="logos")
    return UploadResponse.model_validate(stored)
