from __future__ import annotations

import base64
import os
import sys
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from sharex_uploader.config.settings import Settings
from sharex_uploader.domain.models.stored_object import StoredObject
from sharex_uploader.interfaces.http.main import create_app

TEST_SECRET = "test-secret-123"
TEST_DOMAIN = "test.cloudfront.net"

# 1x1 PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChAI9jU8FQQAAAABJRU5ErkJggg=="
)


class SpyStorage:
    """Records every put_object call instead of talking to S3."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[tuple[StoredObject, bytes]] = []
        self.error = error

    async def put_object(self, obj: StoredObject, data: bytes) -> None:
        self.calls.append((obj, data))
        if self.error is not None:
            raise self.error


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "environment": "test",
        "log_level": "INFO",
        "s3_bucket": "test-bucket",
        "s3_key_prefix": "sharex",
        "aws_region": "us-east-1",
        "cloudfront_domain": TEST_DOMAIN,
        "upload_secret": TEST_SECRET,
        "max_file_size_mb": 1,
    }
    values.update(overrides)
    return Settings.model_validate(values)


@pytest.fixture()
def test_settings() -> Settings:
    return make_settings()


@pytest.fixture()
def storage() -> SpyStorage:
    return SpyStorage()


@pytest.fixture()
def app(test_settings: Settings, storage: SpyStorage):
    return create_app(settings=test_settings, storage_service=storage)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture()
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture()
def settings_factory():
    return make_settings


@pytest.fixture()
def failing_storage() -> SpyStorage:
    return SpyStorage(error=RuntimeError("S3 upload failed"))


@pytest.fixture()
async def make_client() -> AsyncIterator[Any]:
    """Build clients around apps with custom settings and storage."""
    clients: list[AsyncClient] = []

    def factory(*, storage: Any = None, **overrides: Any) -> AsyncClient:
        app = create_app(
            settings=make_settings(**overrides), storage_service=storage or SpyStorage()
        )
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")
        clients.append(client)
        return client

    yield factory
    for client in clients:
        await client.aclose()
