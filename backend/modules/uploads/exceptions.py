"""
Upload module exceptions.
"""

from shared.exceptions import ExternalServiceError, PolicyDeniedError, ValidationError


class MissingFileError(ValidationError):
    def __init__(self, kind: str):
        super().__init__(f"No {kind} file provided", code="NO_FILE")


class InvalidFileTypeError(ValidationError):
    def __init__(self, kind: str, content_type: str):
        super().__init__(
            f"Only {kind} files are allowed",
            code="INVALID_FILE_TYPE",
            details={"content_type": content_type},
        )


class FileTooLargeError(ValidationError):
    def __init__(self, kind: str, max_bytes: int):
        super().__init__(
            f"{kind.capitalize()} file size exceeds {max_bytes // (1024 * 1024)} MB limit",
            code="FILE_TOO_LARGE",
            details={"max_bytes": max_bytes},
        )


class AudioUploadRestrictedError(PolicyDeniedError):
    """Raised outside the daily audio-upload window."""

    def __init__(self, window: str):
        super().__init__(
            f"Audio uploads are only allowed between {window}",
            code="AUDIO_UPLOAD_RESTRICTED",
            details={"window": window},
        )


class UploadFailedError(ExternalServiceError):
    def __init__(self, service: str, message: str):
        super().__init__(
            f"Upload failed: {message}",
            service=service,
            code="UPLOAD_FAILED",
        )
