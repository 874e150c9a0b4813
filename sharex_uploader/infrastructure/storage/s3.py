from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import run_in_threadpool

from sharex_uploader.application.errors import StorageUploadFailed
from sharex_uploader.domain.models.stored_object import StoredObject
from sharex_uploader.infrastructure.storage.ports import ObjectStorage

logger = logging.getLogger(__name__)


def _describe_error(exc: Exception) -> str:
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {}) or {}
        code = error.get("Code", "")
        message = error.get("Message", "") or str(exc)
        return f"{code}: {message}" if code else message
    return str(exc)


@dataclass(slots=True)
class S3StorageService(ObjectStorage):
    region: str
    client: Any = None

    def __post_init__(self) -> None:
        if self.client is None:
            self.client = boto3.client("s3", region_name=self.region)

    async def put_object(self, obj: StoredObject, data: bytes) -> None:
        try:
            await run_in_threadpool(
                self.client.put_object,
                Bucket=obj.bucket,
                Key=obj.key,
                Body=data,
                ContentType=obj.content_type,
                CacheControl=obj.cache_control,
                ServerSideEncryption=obj.server_side_encryption,
            )
        except (ClientError, BotoCoreError) as exc:
            logger.warning("S3 put_object failed for s3://%s/%s", obj.bucket, obj.key)
            raise StorageUploadFailed(details=_describe_error(exc)) from exc
