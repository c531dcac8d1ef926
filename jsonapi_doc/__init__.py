"""JSON:API v1.1 documents: entities, builders, codec and HTTP helpers."""

from .codec import decode, decode_document, encode, encode_document
from .core import (
    DataBuilder,
    DocumentBuilder,
    ErrorBuilder,
    ErrorSourceBuilder,
    JsonApiBuilder,
    LinkBuilder,
    LinksBuilder,
    MetaBuilder,
    RelationshipBuilder,
    RelationshipsBuilder,
    ResourceBuilder,
)
from .exceptions import (
    BuildError,
    DecodeError,
    DepthExceeded,
    InvalidStatus,
    InvalidVersion,
    JSONAPIError,
    MalformedJSON,
    MissingField,
    UnexpectedShape,
)
from .schemas import (
    Document,
    ErrorObject,
    ErrorSource,
    HttpStatus,
    JsonApi,
    LinkObject,
    Links,
    Relationship,
    Resource,
    Version,
    format_status,
    parse_status,
)

__all__ = [
    "BuildError",
    "DataBuilder",
    "DecodeError",
    "DepthExceeded",
    "Document",
    "DocumentBuilder",
    "ErrorBuilder",
    "ErrorObject",
    "ErrorSource",
    "ErrorSourceBuilder",
    "HttpStatus",
    "InvalidStatus",
    "InvalidVersion",
    "JSONAPIError",
    "JsonApi",
    "JsonApiBuilder",
    "LinkBuilder",
    "LinkObject",
    "Links",
    "LinksBuilder",
    "MalformedJSON",
    "MetaBuilder",
    "MissingField",
    "Relationship",
    "RelationshipBuilder",
    "RelationshipsBuilder",
    "Resource",
    "ResourceBuilder",
    "UnexpectedShape",
    "Version",
    "decode",
    "decode_document",
    "encode",
    "encode_document",
    "format_status",
    "parse_status",
]
