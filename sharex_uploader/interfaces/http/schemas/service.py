from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class HealthResponse(BaseModel):
    status: str = "healthy"
    timestamp: datetime
    uptime: float


class ServiceConfiguration(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    max_file_size: str
    allowed_extensions: list[str]
    bucket: str
    domain: str
    upload_secret_configured: bool


class ServiceInfoResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    version: str
    description: str
    endpoints: dict[str, str]
    use_cases: list[str]
    configuration: ServiceConfiguration
