from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ALLOWED_EXTENSIONS = "png,jpg,jpeg,gif,webp,bmp,svg"


class Settings(BaseSettings):
    log_level: str = "INFO"
    environment: str = "dev"  # dev | test | prod
    port: int = 3000
    # S3 storage
    s3_bucket: str = "sharex-uploads"
    s3_key_prefix: str = "sharex"
    aws_region: str = "ca-central-1"
    # Public delivery (CloudFront distribution mapped to the bucket)
    cloudfront_domain: str = "cdn.sharex-uploads.local"
    # Uploads
    upload_secret: SecretStr | None = None  # unset means open access
    max_file_size_mb: int = 10
    allowed_extensions: str = DEFAULT_ALLOWED_EXTENSIONS
    # Rate limiting (applies to POST /upload only)
    rate_limit_window_ms: int = 15 * 60 * 1000
    rate_limit_max_requests: int = 100
    rate_limit_enabled: bool = True
    # CORS
    cors_allow_origins: str = "*"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", frozen=True
    )

    @field_validator("cloudfront_domain")
    @classmethod
    def strip_scheme(cls, value: str) -> str:
        value = value.strip()
        for scheme in ("https://", "http://"):
            if value.startswith(scheme):
                value = value[len(scheme) :]
        return value.rstrip("/")

    @property
    def is_test(self) -> bool:
        return self.environment.lower() == "test"

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    @property
    def allowed_extensions_list(self) -> list[str]:
        """Lowercased extensions without the leading dot, in configured order."""
        items: list[str] = []
        for raw in self.allowed_extensions.split(","):
            ext = raw.strip().lstrip(".").lower()
            if ext and ext not in items:
                items.append(ext)
        return items

    @property
    def cors_allow_origins_list(self) -> list[str]:
        return [v.strip() for v in self.cors_allow_origins.split(",") if v.strip()]

    @property
    def upload_secret_value(self) -> str | None:
        if self.upload_secret is None:
            return None
        return self.upload_secret.get_secret_value() or None

    @property
    def rate_limit(self) -> str:
        """Limit string in the format understood by slowapi/limits."""
        window_seconds = max(1, self.rate_limit_window_ms // 1000)
        return f"{self.rate_limit_max_requests} per {window_seconds} second"

    def config_errors(self) -> list[str]:
        errors: list[str] = []
        if not self.s3_bucket.strip():
            errors.append("S3_BUCKET is required")
        if not self.cloudfront_domain:
            errors.append("CLOUDFRONT_DOMAIN is required")
        if not self.allowed_extensions_list:
            errors.append("ALLOWED_EXTENSIONS must be specified")
        if self.max_file_size_mb <= 0:
            errors.append("MAX_FILE_SIZE_MB must be greater than 0")
        if self.rate_limit_max_requests <= 0:
            errors.append("RATE_LIMIT_MAX_REQUESTS must be greater than 0")
        return errors


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
