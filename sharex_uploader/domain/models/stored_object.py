from __future__ import annotations

import posixpath
from dataclasses import dataclass
from datetime import datetime

ONE_YEAR_CACHE_CONTROL = "max-age=31536000"
SSE_AES256 = "AES256"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True, slots=True)
class StoredObject:
    bucket: str
    key: str
    content_type: str = DEFAULT_CONTENT_TYPE
    server_side_encryption: str = SSE_AES256
    cache_control: str = ONE_YEAR_CACHE_CONTROL

    @property
    def filename(self) -> str:
        return posixpath.basename(self.key)

    def public_url(self, delivery_domain: str) -> str:
        return f"https://{delivery_domain}/{self.key}"


@dataclass(slots=True)
class UploadResult:
    url: str
    filename: str
    size: int
    uploaded_at: datetime
