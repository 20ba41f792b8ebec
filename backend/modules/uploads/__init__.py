"""
Uploads module.

Image uploads to ImgBB and OTP-gated, time-windowed audio uploads to
Cloudinary.

Public API:
- IUploadService: Interface for uploads
- IImageHost, IAudioHost: Media host interfaces
- ImgBBClient, CloudinaryClient: Media host clients
"""

from .clients import CloudinaryClient, ImgBBClient
from .exceptions import (
    AudioUploadRestrictedError,
    FileTooLargeError,
    InvalidFileTypeError,
    MissingFileError,
    UploadFailedError,
)
from .interfaces import IAudioHost, IImageHost, IUploadService

__all__ = [
    "IAudioHost",
    "IImageHost",
    "IUploadService",
    "CloudinaryClient",
    "ImgBBClient",
    "AudioUploadRestrictedError",
    "FileTooLargeError",
    "InvalidFileTypeError",
    "MissingFileError",
    "UploadFailedError",
]
