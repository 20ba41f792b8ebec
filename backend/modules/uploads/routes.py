"""
Media upload endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from api.dependencies import get_upload_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .interfaces import IUploadService
from .models import AudioUploadResponse, ImageUploadResponse

router = APIRouter()


@router.post("/image", response_model=ImageUploadResponse)
async def upload_image(
    image: UploadFile = File(...),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUploadService = Depends(get_upload_service),
) -> ImageUploadResponse:
    """Upload an image (max 5 MB) and return its URL."""
    data = await image.read()
    return await service.upload_image(image.filename or "image", image.content_type, data)


@router.post("/audio", response_model=AudioUploadResponse)
async def upload_audio(
    audio: UploadFile = File(...),
    otp_id: Optional[str] = Form(None),
    duration: int = Form(0),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUploadService = Depends(get_upload_service),
) -> AudioUploadResponse:
    """
    Upload audio (max 100 MB).

    Requires the ``otp_id`` of a verified audio-upload code and is only
    accepted inside the daily audio-upload window.
    """
    data = await audio.read()
    return await service.upload_audio(
        user.id,
        otp_id,
        audio.filename or "audio",
        audio.content_type,
        data,
        duration,
    )
