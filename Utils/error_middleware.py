"""
Last-resort error responder. Installed inside the CORS middleware so generic
500 responses still carry the cross-origin headers browsers need to read them.
"""
import logging

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class UnhandledErrorMiddleware:
    def __init__(self, app: ASGIApp, expose_details: bool):
        self.app = app
        self.expose_details = expose_details

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def tracking_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, tracking_send)
        except Exception as exc:
            logger.error(f"Server error on {scope['method']} {scope['path']}: {exc}", exc_info=exc)
            if response_started:
                raise
            response = JSONResponse(
                status_code=500,
                content={
                    "error": "Internal server error",
                    "message": str(exc) if self.expose_details else "Something went wrong",
                },
            )
            await response(scope, receive, send)
