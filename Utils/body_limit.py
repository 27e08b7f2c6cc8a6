"""
Body size limit - rejects request bodies larger than the configured ceiling
before they reach a route handler.
"""
import logging
from typing import List

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


def payload_too_large_response(limit: int) -> JSONResponse:
    return JSONResponse(
        status_code=413,
        content={
            "error": "Payload too large",
            "details": f"Request body exceeds {limit} bytes",
        },
    )


class BodySizeLimitMiddleware:
    """
    Pure ASGI middleware. A declared Content-Length over the limit is answered
    immediately; otherwise the body messages are counted as they arrive and
    replayed downstream once the whole body is known to fit.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def _reject(self, scope: Scope, receive: Receive, send: Send, reason: str) -> None:
        logger.warning(f"Rejected {scope['method']} {scope['path']}: {reason}")
        await payload_too_large_response(self.max_body_bytes)(scope, receive, send)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_body_bytes:
            await self._reject(
                scope, receive, send,
                f"Content-Length {content_length} > {self.max_body_bytes}",
            )
            return

        buffered: List[Message] = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            buffered.append(message)
            if message["type"] != "http.request":
                break
            received += len(message.get("body", b""))
            if received > self.max_body_bytes:
                await self._reject(
                    scope, receive, send,
                    f"streamed body > {self.max_body_bytes} bytes",
                )
                return
            more_body = message.get("more_body", False)

        async def replay_receive() -> Message:
            if buffered:
                return buffered.pop(0)
            return await receive()

        await self.app(scope, replay_receive, send)
