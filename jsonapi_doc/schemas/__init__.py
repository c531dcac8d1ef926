"""Pydantic schemas for JSON:API document entities."""

from .document import Document, JsonApi
from .errors import ErrorObject, ErrorSource
from .http_status import HttpStatus, StatusCode, format_status, parse_status
from .links import RESERVED_LINKS, Link, LinkObject, Links
from .meta import MetaOrAttrs
from .resource import Data, Relationship, Relationships, Resource
from .version import Version

__all__ = [
    "Data",
    "Document",
    "ErrorObject",
    "ErrorSource",
    "HttpStatus",
    "JsonApi",
    "Link",
    "LinkObject",
    "Links",
    "MetaOrAttrs",
    "RESERVED_LINKS",
    "Relationship",
    "Relationships",
    "Resource",
    "StatusCode",
    "Version",
    "format_status",
    "parse_status",
]
