from __future__ import annotations

import logging
from typing import Iterable

from fastapi import HTTPException
from starlette import status
from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from sharex_uploader.application.uploads.validation import too_large_message
from sharex_uploader.interfaces.middleware.error_handler import error_payload

logger = logging.getLogger(__name__)

# Room for multipart boundaries, part headers and the small form fields
MULTIPART_OVERHEAD_BYTES = 64 * 1024


class UploadBodyLimitMiddleware:
    """Stop reading an upload body once it cannot fit under the file ceiling.

    A declared ``Content-Length`` over the limit is answered before the app
    runs. Otherwise bytes are counted as they arrive and the request fails
    with a 400 while the form is still being parsed. The exact per-file check
    happens later in ``read_capped``.
    """

    def __init__(self, app: ASGIApp, *, max_file_bytes: int, paths: Iterable[str]) -> None:
        self.app = app
        self.max_file_bytes = max_file_bytes
        self.max_body_bytes = max_file_bytes + MULTIPART_OVERHEAD_BYTES
        self.paths = frozenset(paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["path"] not in self.paths:
            await self.app(scope, receive, send)
            return

        message = too_large_message(self.max_file_bytes)
        declared = Headers(scope=scope).get("content-length")
        if declared is not None and declared.isdigit() and int(declared) > self.max_body_bytes:
            logger.info("Rejected upload with declared size %s bytes", declared)
            response = JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST, content=error_payload(message)
            )
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            incoming = await receive()
            if incoming["type"] == "http.request":
                received += len(incoming.get("body", b""))
                if received > self.max_body_bytes:
                    logger.info("Aborted upload after %d bytes", received)
                    # HTTPException passes through FastAPI's form parsing unchanged
                    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
            return incoming

        await self.app(scope, limited_receive, send)
