import logging
import time

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


def _status_category(status_code: int) -> str:
    if 200 <= status_code < 300:
        return "SUCCESS"
    if 300 <= status_code < 400:
        return "REDIRECT"
    if 400 <= status_code < 500:
        return "CLIENT_ERROR"
    return "SERVER_ERROR"


class RequestLoggingMiddleware:
    """Middleware to log HTTP requests and responses with status codes."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method, path = scope["method"], scope["path"]
        origin = Headers(scope=scope).get("origin", "-")
        start_time = time.time()
        status_code = 500

        logger.info(f"→ {method} {path} | Origin: {origin}")

        async def send_with_status(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_with_status)
        except Exception as e:
            duration = time.time() - start_time
            logger.error(
                f"{method} {path} | "
                f"Status: 500 (SERVER_ERROR) | "
                f"Error: {str(e)} | "
                f"Duration: {duration:.3f}s | "
                f"Origin: {origin}"
            )
            raise

        duration = time.time() - start_time
        logger.info(
            f"{method} {path} | "
            f"Status: {status_code} ({_status_category(status_code)}) | "
            f"Duration: {duration:.3f}s | "
            f"Origin: {origin}"
        )
