"""JSON:API error handling middleware."""

import logging
from typing import Any

from jsonapi_doc.responses import error_response
from jsonapi_doc.schemas.http_status import HttpStatus

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware:
    """Convert unhandled exceptions into JSON:API error documents."""

    def __init__(self, app: Any, debug: bool = False) -> None:
        """Store the ASGI app for middleware chaining."""
        self.app = app
        self.debug = debug

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        """Handle exceptions and serialize JSON:API error documents."""
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        started = False

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            logger.exception("unhandled error in %s %s", scope.get("method"), scope.get("path"))
            if started:
                raise
            response = error_response(
                HttpStatus.INTERNAL_SERVER_ERROR,
                detail=str(exc) if self.debug else None,
            )
            await response(scope, receive, send)
