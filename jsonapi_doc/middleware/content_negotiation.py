"""JSON:API content negotiation middleware."""

import logging
from typing import Any

from starlette.datastructures import Headers

from jsonapi_doc.config import get_settings
from jsonapi_doc.responses import error_response
from jsonapi_doc.schemas.http_status import HttpStatus
from jsonapi_doc.utils.content_negotiation import accepts_jsonapi, parse_jsonapi_media_type

logger = logging.getLogger(__name__)

BODY_METHODS = {"POST", "PATCH"}


class ContentNegotiationMiddleware:
    """Ensure JSON:API media type for requests and responses."""

    def __init__(self, app: Any, media_type: str = "") -> None:
        """Store the ASGI app for middleware chaining."""
        self.app = app
        self.media_type = media_type or get_settings().media_type

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        """Validate JSON:API headers before passing to downstream app."""
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        method = scope.get("method", "").upper()

        if method in BODY_METHODS:
            parsed = parse_jsonapi_media_type(headers.get("content-type"))
            if not parsed.is_jsonapi(self.media_type):
                logger.warning("rejecting %s with content type %r", method, headers.get("content-type"))
                response = error_response(
                    HttpStatus.UNSUPPORTED_MEDIA_TYPE,
                    detail=f"Content-Type must be {self.media_type}",
                )
                await response(scope, receive, send)
                return

        if not accepts_jsonapi(headers.get("accept"), self.media_type):
            logger.warning("rejecting request with accept %r", headers.get("accept"))
            response = error_response(
                HttpStatus.NOT_ACCEPTABLE,
                detail=f"Accept must allow {self.media_type}",
            )
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)
