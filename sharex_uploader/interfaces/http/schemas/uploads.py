from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UploadResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    url: str = Field(examples=["https://cdn.example.com/sharex/screenshots/2024/05/uuid.png"])
    filename: str
    size: int
    uploaded_at: datetime


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: Any | None = None
