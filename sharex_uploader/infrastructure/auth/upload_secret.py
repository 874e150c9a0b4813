from __future__ import annotations

import hmac

UPLOAD_SECRET_HEADER = "x-upload-secret"


def resolve_supplied_secret(*candidates: str | None) -> str | None:
    """Return the first non-empty candidate.

    Callers pass them in precedence order: form field, query parameter, header.
    """
    for value in candidates:
        if value:
            return value
    return None


def authenticate(supplied: str | None, configured: str | None) -> bool:
    # No configured secret means the endpoint is open to anyone.
    if not configured:
        return True
    if supplied is None:
        return False
    return hmac.compare_digest(supplied.encode("utf-8"), configured.encode("utf-8"))
