"""
Upload module interfaces.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import AudioUploadResponse, ImageUploadResponse


@runtime_checkable
class IImageHost(Protocol):
    async def upload(self, data: bytes, filename: str) -> str:
        """
        Store an image and return its public URL.

        Raises:
            UploadFailedError: If the host rejects or cannot be reached
        """
        ...


@runtime_checkable
class IAudioHost(Protocol):
    async def upload(self, data: bytes, filename: str) -> str:
        """
        Store an audio file and return its public URL.

        Raises:
            UploadFailedError: If the host rejects or cannot be reached
        """
        ...


@runtime_checkable
class IUploadService(Protocol):
    async def upload_image(
        self,
        filename: str,
        content_type: Optional[str],
        data: bytes,
    ) -> ImageUploadResponse:
        """
        Raises:
            InvalidFileTypeError: If not an image
            FileTooLargeError: If larger than 5 MB
        """
        ...

    async def upload_audio(
        self,
        user_id: str,
        otp_id: Optional[str],
        filename: str,
        content_type: Optional[str],
        data: bytes,
        duration: int = 0,
    ) -> AudioUploadResponse:
        """
        Upload audio authorized by a verified code, which is then spent.

        Raises:
            OTPRequiredError: Without a verified, unexpired code of the user
            AudioUploadRestrictedError: Outside the audio-upload window
            InvalidFileTypeError: If not audio
            FileTooLargeError: If larger than 100 MB
        """
        ...
