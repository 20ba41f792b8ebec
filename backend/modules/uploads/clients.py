"""
Media host clients.

Images go to ImgBB, audio to Cloudinary (as the ``video`` resource type,
which Cloudinary uses for audio). Both are called over httpx.
"""

import base64
import hashlib
import logging

import httpx

from shared.schedule import utc_now

from .exceptions import UploadFailedError
from .interfaces import IAudioHost, IImageHost

logger = logging.getLogger(__name__)


class ImgBBClient(IImageHost):
    UPLOAD_URL = "https://api.imgbb.com/1/upload"

    def __init__(self, api_key: str):
        self._api_key = api_key

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def upload(self, data: bytes, filename: str) -> str:
        if not self.is_configured:
            raise UploadFailedError("imgbb", "API key not configured")

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.UPLOAD_URL,
                    params={"key": self._api_key},
                    data={"image": base64.b64encode(data).decode(), "name": filename},
                    timeout=60.0,
                )
                response.raise_for_status()
                return response.json()["data"]["url"]
        except Exception as e:
            logger.error(f"ImgBB upload failed: {e}")
            raise UploadFailedError("imgbb", "Image upload failed")


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """Cloudinary request signature: sha1 of the sorted params plus the secret."""
    payload = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1(f"{payload}{api_secret}".encode()).hexdigest()


class CloudinaryClient(IAudioHost):
    FOLDER = "chirp/audio"

    def __init__(self, cloud_name: str, api_key: str, api_secret: str):
        self._cloud_name = cloud_name
        self._api_key = api_key
        self._api_secret = api_secret

    @property
    def is_configured(self) -> bool:
        return bool(self._cloud_name and self._api_key and self._api_secret)

    @property
    def upload_url(self) -> str:
        return f"https://api.cloudinary.com/v1_1/{self._cloud_name}/video/upload"

    async def upload(self, data: bytes, filename: str) -> str:
        if not self.is_configured:
            raise UploadFailedError("cloudinary", "Cloudinary credentials not configured")

        now = utc_now()
        params = {
            "folder": self.FOLDER,
            "public_id": f"audio_{int(now.timestamp() * 1000)}",
            "timestamp": str(int(now.timestamp())),
        }
        form = {**params, "api_key": self._api_key, "signature": sign_params(params, self._api_secret)}

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.upload_url,
                    data=form,
                    files={"file": (filename, data)},
                    timeout=120.0,
                )
                response.raise_for_status()
                return response.json()["secure_url"]
        except Exception as e:
            logger.error(f"Cloudinary upload failed: {e}")
            raise UploadFailedError("cloudinary", "Audio upload failed")
