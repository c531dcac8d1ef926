"""ASGI middleware for JSON:API services."""

from .content_negotiation import ContentNegotiationMiddleware
from .error_handler import ErrorHandlerMiddleware

__all__ = ["ContentNegotiationMiddleware", "ErrorHandlerMiddleware"]
