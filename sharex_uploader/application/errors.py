from __future__ import annotations

from typing import Any


class AppError(Exception):
    code = "app_error"
    status_code = 400

    def __init__(self, message: str, *, details: Any | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NoFileProvided(AppError):
    code = "no_file_provided"
    status_code = 400

    def __init__(self, message: str = "No file provided", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class AuthenticationFailed(AppError):
    code = "authentication_failed"
    status_code = 401

    def __init__(self, message: str = "Invalid upload secret", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class DisallowedFileType(AppError):
    code = "disallowed_file_type"
    status_code = 400


class FileTooLarge(AppError):
    code = "file_too_large"
    status_code = 400


class StorageUploadFailed(AppError):
    code = "storage_upload_failed"
    status_code = 500

    def __init__(self, message: str = "Upload failed", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class UnexpectedInternalError(AppError):
    code = "internal_error"
    status_code = 500

    def __init__(self, message: str = "Internal server error", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
