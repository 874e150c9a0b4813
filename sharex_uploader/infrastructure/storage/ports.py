from __future__ import annotations

from typing import Protocol

from sharex_uploader.domain.models.stored_object import StoredObject


class ObjectStorage(Protocol):
    async def put_object(self, obj: StoredObject, data: bytes) -> None: ...
