from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from sharex_uploader.config.settings import Settings


def build_limiter(settings: Settings) -> Limiter:
    """Per-client-address limiter; routes opt in with ``limiter.limit(...)``.

    Counters live in process memory, one store per app instance.
    """
    return Limiter(
        key_func=get_remote_address,
        enabled=settings.rate_limit_enabled,
        storage_uri="memory://",
    )
