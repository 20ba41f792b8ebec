"""
Upload service.

Validates files and forwards them to the media hosts. Audio uploads are
authorized by a verified audio-upload code and limited to a daily window.
"""

import logging
from typing import Optional

from modules.otp.interfaces import IOTPService
from shared.config import Settings
from shared.schedule import Clock, ScheduledWindow, utc_now

from .exceptions import (
    AudioUploadRestrictedError,
    FileTooLargeError,
    InvalidFileTypeError,
    MissingFileError,
)
from .interfaces import IAudioHost, IImageHost, IUploadService
from .models import MAX_AUDIO_BYTES, MAX_IMAGE_BYTES, AudioUploadResponse, ImageUploadResponse

logger = logging.getLogger(__name__)


def check_file(kind: str, content_type: Optional[str], data: bytes, max_bytes: int) -> None:
    """
    Raises:
        MissingFileError: If ``data`` is empty
        InvalidFileTypeError: If the MIME type is not ``{kind}/*``
        FileTooLargeError: If ``data`` exceeds ``max_bytes``
    """
    if not data:
        raise MissingFileError(kind)
    if not (content_type or "").startswith(f"{kind}/"):
        raise InvalidFileTypeError(kind, content_type or "")
    if len(data) > max_bytes:
        raise FileTooLargeError(kind, max_bytes)


class UploadService(IUploadService):
    def __init__(
        self,
        image_host: IImageHost,
        audio_host: IAudioHost,
        otp: IOTPService,
        settings: Settings,
        clock: Clock = utc_now,
    ):
        self._image_host = image_host
        self._audio_host = audio_host
        self._otp = otp
        self._clock = clock
        self._audio_window = ScheduledWindow(
            settings.audio_upload_start_hour,
            settings.audio_upload_end_hour,
            settings.policy_timezone,
        )

    async def upload_image(
        self,
        filename: str,
        content_type: Optional[str],
        data: bytes,
    ) -> ImageUploadResponse:
        check_file("image", content_type, data, MAX_IMAGE_BYTES)
        url = await self._image_host.upload(data, filename)
        return ImageUploadResponse(url=url)

    async def upload_audio(
        self,
        user_id: str,
        otp_id: Optional[str],
        filename: str,
        content_type: Optional[str],
        data: bytes,
        duration: int = 0,
    ) -> AudioUploadResponse:
        record = await self._otp.require_verified(user_id, otp_id)

        if not self._audio_window.is_open(self._clock()):
            raise AudioUploadRestrictedError(self._audio_window.describe())

        check_file("audio", content_type, data, MAX_AUDIO_BYTES)
        url = await self._audio_host.upload(data, filename)

        await self._otp.consume(record.id)
        logger.info(f"Audio uploaded by {user_id} ({len(data)} bytes)")
        return AudioUploadResponse(url=url, size=len(data), duration=max(duration, 0))
