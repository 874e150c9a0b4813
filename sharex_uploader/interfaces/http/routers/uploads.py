# No `from __future__ import annotations` here: slowapi wraps the endpoint, and
# FastAPI resolves string annotations against the wrapper's module globals.
from fastapi import APIRouter, Depends, File, Form, Header, Query, Request, UploadFile
from slowapi import Limiter

from sharex_uploader.application.use_cases.uploads import upload_file
from sharex_uploader.config.settings import Settings
from sharex_uploader.infrastructure.auth.upload_secret import (
    UPLOAD_SECRET_HEADER,
    resolve_supplied_secret,
)
from sharex_uploader.infrastructure.storage.ports import ObjectStorage
from sharex_uploader.interfaces.http.deps import get_app_settings, get_storage_service
from sharex_uploader.interfaces.http.schemas.uploads import ErrorResponse, UploadResponse

UPLOAD_PATH = "/upload"


async def upload(
    request: Request,
    file: UploadFile | None = File(None),
    secret: str | None = Form(None),
    secret_query: str | None = Query(None, alias="secret"),
    x_upload_secret: str | None = Header(None, alias=UPLOAD_SECRET_HEADER),
    settings: Settings = Depends(get_app_settings),
    storage: ObjectStorage = Depends(get_storage_service),
) -> UploadResponse:
    """Store a screenshot and return its public CDN URL (ShareX custom uploader target)."""
    payload = upload_file.UploadFileInput(
        filename=file.filename if file else None,
        content_type=file.content_type if file else None,
        source=file,
        secret=resolve_supplied_secret(secret, secret_query, x_upload_secret),
    )
    try:
        result = await upload_file.execute(storage, settings, payload)
    finally:
        if file is not None:
            await file.close()
    return UploadResponse(
        url=result.url,
        filename=result.filename,
        size=result.size,
        uploaded_at=result.uploaded_at,
    )


def build_router(limiter: Limiter, rate_limit: str) -> APIRouter:
    """Router for ``POST /upload`` with ``rate_limit`` enforced per client address."""
    router = APIRouter(tags=["uploads"])
    router.add_api_route(
        UPLOAD_PATH,
        limiter.limit(rate_limit)(upload),
        methods=["POST"],
        response_model=UploadResponse,
        responses={
            400: {"model": ErrorResponse},
            401: {"model": ErrorResponse},
            429: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
    )
    return router
