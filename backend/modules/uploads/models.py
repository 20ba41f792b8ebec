"""
Upload module models.
"""

from pydantic import BaseModel

MAX_IMAGE_BYTES = 5 * 1024 * 1024
MAX_AUDIO_BYTES = 100 * 1024 * 1024


class ImageUploadResponse(BaseModel):
    url: str


class AudioUploadResponse(BaseModel):
    url: str
    size: int
    duration: int = 0
