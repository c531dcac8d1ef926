"""Utility helpers for JSON:API."""

from .content_negotiation import MediaType, accepts_jsonapi, parse_jsonapi_media_type

__all__ = ["MediaType", "accepts_jsonapi", "parse_jsonapi_media_type"]
