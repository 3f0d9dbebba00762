"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_IMAGE_UPLOAD = "INVALID_IMAGE_UPLOAD"

    # Conflict errors (409)
    DUPLICATE_PROFILE = "DUPLICATE_PROFILE"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, username: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found: {username}",
            status_code=404,
            details={"username": username},
        )


class DuplicateProfileError(AppException):
    """A profile with this username already exists in the store."""

    def __init__(self, username: str) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_PROFILE,
            message=f"Profile already exists: {username}",
            status_code=409,
            details={"username": username},
        )


class InvalidImageUploadError(AppException):
    """Uploaded image was empty or not a JPG file."""

    def __init__(self, message: str, filename: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_IMAGE_UPLOAD,
            message=message,
            status_code=400,
            details={"filename": filename},
        )


class ImageStorageError(AppException):
    """Reading or writing an image file failed.

    The underlying OS error is logged but never sent to the client.
    """

    def __init__(self, operation: str) -> None:
        super().__init__(
            error_code=ErrorCode.STORAGE_ERROR,
            message="Image storage failure",
            status_code=500,
        )
        self.operation = operation


class PersistenceError(AppException):
    """Saving to or committing the profile store failed."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            error_code=ErrorCode.DATABASE_ERROR,
            message="Profile store failure",
            status_code=500,
        )
        self.operation = operation
