from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sharex_uploader.application.uploads.validation import format_file_size
from sharex_uploader.config.settings import Settings, get_settings
from sharex_uploader.infrastructure.storage.ports import ObjectStorage
from sharex_uploader.interfaces.http.routers import service as service_router
from sharex_uploader.interfaces.http.routers import uploads as uploads_router
from sharex_uploader.interfaces.middleware.body_limit import UploadBodyLimitMiddleware
from sharex_uploader.interfaces.middleware.error_handler import register_error_handlers
from sharex_uploader.interfaces.middleware.rate_limit import build_limiter

logger = logging.getLogger(__name__)


def _log_configuration(settings: Settings) -> None:
    logger.info("Configuration:")
    logger.info("  - S3 Bucket: %s", settings.s3_bucket)
    logger.info("  - CloudFront Domain: %s", settings.cloudfront_domain)
    logger.info("  - Max File Size: %s", format_file_size(settings.max_file_size_bytes))
    logger.info("  - Allowed Extensions: %s", ", ".join(settings.allowed_extensions_list))
    if settings.upload_secret_value:
        logger.info("  - Upload Secret: Configured")
    else:
        logger.warning("  - Upload Secret: Not configured (open access)")
    logger.info("  - Rate Limit: %s", settings.rate_limit)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info("%s started (environment: %s)", service_router.SERVICE_NAME, settings.environment)
    _log_configuration(settings)
    yield


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    # Avoid adding duplicate handlers on reload
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "slowapi"):
        logging.getLogger(name).setLevel(level)
    # botocore is chatty at DEBUG and may echo request headers
    logging.getLogger("botocore").setLevel(max(level, logging.INFO))


def _create_storage_service(settings: Settings) -> ObjectStorage:
    from sharex_uploader.infrastructure.storage.s3 import S3StorageService

    return S3StorageService(region=settings.aws_region)


def create_app(
    *,
    settings: Settings | None = None,
    storage_service: ObjectStorage | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)

    errors = settings.config_errors()
    if errors:
        logger.error("Configuration errors: %s", "; ".join(errors))
        if not settings.is_test:
            raise RuntimeError(f"Invalid configuration: {'; '.join(errors)}")

    app = FastAPI(
        title=service_router.SERVICE_NAME,
        version=service_router.SERVICE_VERSION,
        description=service_router.SERVICE_DESCRIPTION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.started_at = time.monotonic()
    app.state.storage_service = storage_service or _create_storage_service(settings)
    register_error_handlers(app)

    # Only the upload route is rate limited; health and metadata stay unthrottled
    limiter = build_limiter(settings)
    app.state.limiter = limiter

    app.include_router(service_router.router)
    app.include_router(uploads_router.build_router(limiter, settings.rate_limit))

    app.add_middleware(
        UploadBodyLimitMiddleware,
        max_file_bytes=settings.max_file_size_bytes,
        paths=(uploads_router.UPLOAD_PATH,),
    )
    # CORS last so it runs outermost and can answer preflight requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
