from __future__ import annotations

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from sharex_uploader.application.uploads.validation import format_file_size
from sharex_uploader.config.settings import Settings
from sharex_uploader.interfaces.http.deps import get_app_settings
from sharex_uploader.interfaces.http.schemas.service import (
    HealthResponse,
    ServiceConfiguration,
    ServiceInfoResponse,
)

SERVICE_NAME = "ShareX Uploader (w/ AWS)"
SERVICE_VERSION = "1.0.0"
SERVICE_DESCRIPTION = (
    "Upload screenshots to S3 and share them through CloudFront. Handy for AI tools, "
    "forums and places where image hosting is blocked."
)
USE_CASES = [
    "Share screenshots with AI coding assistants",
    "Host images for forums without restrictions",
    "Bypass image hosting blockers",
    "Fast global delivery via CloudFront",
]

router = APIRouter(tags=["service"])


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    started_at = getattr(request.app.state, "started_at", None)
    uptime = time.monotonic() - started_at if started_at is not None else 0.0
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        uptime=max(uptime, 0.0),
    )


@router.get("/", response_model=ServiceInfoResponse)
async def info(settings: Settings = Depends(get_app_settings)) -> ServiceInfoResponse:
    return ServiceInfoResponse(
        name=SERVICE_NAME,
        version=SERVICE_VERSION,
        description=SERVICE_DESCRIPTION,
        endpoints={"upload": "POST /upload", "health": "GET /health"},
        use_cases=USE_CASES,
        configuration=ServiceConfiguration(
            max_file_size=format_file_size(settings.max_file_size_bytes),
            allowed_extensions=settings.allowed_extensions_list,
            bucket=settings.s3_bucket,
            domain=settings.cloudfront_domain,
            upload_secret_configured=settings.upload_secret_value is not None,
        ),
    )
