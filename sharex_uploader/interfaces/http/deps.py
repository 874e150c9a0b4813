from __future__ import annotations

from fastapi import Request

from sharex_uploader.config.settings import Settings
from sharex_uploader.infrastructure.storage.ports import ObjectStorage


def get_app_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise RuntimeError("Settings not configured")
    return settings


def get_storage_service(request: Request) -> ObjectStorage:
    storage = getattr(request.app.state, "storage_service", None)
    if storage is None:
        raise RuntimeError("Storage service not configured")
    return storage
