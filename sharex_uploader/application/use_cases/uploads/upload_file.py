from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sharex_uploader.application.errors import (
    AppError,
    AuthenticationFailed,
    DisallowedFileType,
    NoFileProvided,
    StorageUploadFailed,
)
from sharex_uploader.application.uploads.validation import (
    ByteSource,
    is_allowed_extension,
    normalized_extension,
    read_capped,
)
from sharex_uploader.config.settings import Settings
from sharex_uploader.domain.models.stored_object import (
    DEFAULT_CONTENT_TYPE,
    StoredObject,
    UploadResult,
)
from sharex_uploader.domain.value_objects.object_key import generate_object_key
from sharex_uploader.infrastructure.auth.upload_secret import authenticate
from sharex_uploader.infrastructure.storage.ports import ObjectStorage

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UploadFileInput:
    filename: str | None
    content_type: str | None
    source: ByteSource | None
    secret: str | None = None


def ensure_authenticated(supplied: str | None, settings: Settings) -> None:
    if not authenticate(supplied, settings.upload_secret_value):
        raise AuthenticationFailed()


def ensure_allowed_type(filename: str, settings: Settings) -> None:
    allowed = settings.allowed_extensions_list
    if not is_allowed_extension(filename, allowed):
        ext = normalized_extension(filename)
        raise DisallowedFileType(
            f"File type .{ext} not allowed. Allowed types: {', '.join(allowed)}"
        )


async def execute(
    storage: ObjectStorage,
    settings: Settings,
    payload: UploadFileInput,
) -> UploadResult:
    ensure_authenticated(payload.secret, settings)
    if payload.source is None:
        raise NoFileProvided()

    filename = payload.filename or ""
    ensure_allowed_type(filename, settings)
    data = await read_capped(payload.source, settings.max_file_size_bytes)

    obj = StoredObject(
        bucket=settings.s3_bucket,
        key=generate_object_key(filename, prefix=settings.s3_key_prefix),
        content_type=payload.content_type or DEFAULT_CONTENT_TYPE,
    )
    logger.info("Uploading file: %s (%d bytes)", obj.key, len(data))
    try:
        await storage.put_object(obj, data)
    except AppError:
        raise
    except Exception as exc:
        logger.exception("Storage client failed for %s", obj.key)
        raise StorageUploadFailed(details=str(exc)) from exc

    url = obj.public_url(settings.cloudfront_domain)
    logger.info("Upload successful: %s", url)
    return UploadResult(
        url=url,
        filename=obj.filename,
        size=len(data),
        uploaded_at=datetime.now(timezone.utc),
    )
