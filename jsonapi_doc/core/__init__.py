"""Core JSON:API document builders."""

from .base import Builder
from .document import DocumentBuilder, JsonApiBuilder
from .errors import ErrorBuilder, ErrorSourceBuilder
from .links import LinkBuilder, LinksBuilder
from .meta import MetaBuilder
from .resource import (
    DataBuilder,
    MultipleDataBuilder,
    RelationshipBuilder,
    RelationshipsBuilder,
    ResourceBuilder,
    SingleDataBuilder,
)

__all__ = [
    "Builder",
    "DataBuilder",
    "DocumentBuilder",
    "ErrorBuilder",
    "ErrorSourceBuilder",
    "JsonApiBuilder",
    "LinkBuilder",
    "LinksBuilder",
    "MetaBuilder",
    "MultipleDataBuilder",
    "RelationshipBuilder",
    "RelationshipsBuilder",
    "ResourceBuilder",
    "SingleDataBuilder",
]
