"""JSON:API document construction."""

from __future__ import annotations

from typing import Any, Iterable, Optional, Tuple

from jsonapi_doc.schemas.document import Document, JsonApi
from jsonapi_doc.schemas.version import Version

from .base import Builder, build_child, index_path, member_path
from .errors import ErrorBuilder
from .links import LinksBuilder
from .meta import MetaBuilder
from .resource import DataBuilder


class JsonApiBuilder(Builder):
    """Build the ``jsonapi`` member."""

    version: Optional[Version] = None
    meta: Optional[MetaBuilder] = None

    def with_version(self, version: Version) -> JsonApiBuilder:
        if not isinstance(version, Version):
            raise TypeError(f"version must be a Version, got {type(version).__name__}")
        return self._with(version=version)

    def with_meta(self, meta: Any) -> JsonApiBuilder:
        return self._with(meta=MetaBuilder.merge(self.meta, meta))

    def meta_item(self, name: str, value: Any) -> JsonApiBuilder:
        return self._with(meta=(self.meta or MetaBuilder()).item(name, value))

    def _assemble(self, path: str, depth: int) -> JsonApi:
        return JsonApi(
            version=self.version,
            meta=build_child(self.meta, member_path(path, "meta"), depth),
        )

    @classmethod
    def from_entity(cls, jsonapi: JsonApi) -> JsonApiBuilder:
        return cls(
            version=jsonapi.version,
            meta=None if jsonapi.meta is None else MetaBuilder.from_entity(jsonapi.meta),
        )

    @classmethod
    def coerce(cls, value: Any) -> JsonApiBuilder:
        """Accept a builder, a :class:`JsonApi`, or a bare :class:`Version`."""
        if isinstance(value, JsonApiBuilder):
            return value
        if isinstance(value, JsonApi):
            return cls.from_entity(value)
        if isinstance(value, Version):
            return cls(version=value)
        raise TypeError(f"cannot build a jsonapi member from {type(value).__name__}")


class DocumentBuilder(Builder):
    """Build JSON:API documents.

    Every setter returns a new builder; call :meth:`finish` to get the
    :class:`~jsonapi_doc.schemas.document.Document`.
    """

    jsonapi: Optional[JsonApiBuilder] = None
    meta: Optional[MetaBuilder] = None
    links: Optional[LinksBuilder] = None
    data: Optional[DataBuilder] = None
    errors: Optional[Tuple[ErrorBuilder, ...]] = None

    @classmethod
    def for_resource(
        cls,
        resource: Any,
        *,
        links: Any = None,
        meta: Any = None,
    ) -> DocumentBuilder:
        """Return a builder for a document with one primary resource."""
        return cls._primary(DataBuilder.single(resource), links=links, meta=meta)

    @classmethod
    def for_collection(
        cls,
        resources: Iterable[Any],
        *,
        links: Any = None,
        meta: Any = None,
    ) -> DocumentBuilder:
        """Return a builder for a document with a collection of resources."""
        return cls._primary(DataBuilder.multiple(resources), links=links, meta=meta)

    @classmethod
    def for_errors(cls, errors: Iterable[Any]) -> DocumentBuilder:
        """Return a builder for an error document."""
        return cls().with_errors(errors)

    @classmethod
    def _primary(cls, data: DataBuilder, *, links: Any, meta: Any) -> DocumentBuilder:
        builder = cls(data=data)
        if links is not None:
            builder = builder.with_links(links)
        if meta is not None:
            builder = builder.with_meta(meta)
        return builder

    def with_jsonapi(self, jsonapi: Any) -> DocumentBuilder:
        return self._with(jsonapi=JsonApiBuilder.coerce(jsonapi))

    def with_meta(self, meta: Any) -> DocumentBuilder:
        return self._with(meta=MetaBuilder.merge(self.meta, meta))

    def with_links(self, links: Any) -> DocumentBuilder:
        return self._with(links=LinksBuilder.merge(self.links, links))

    def with_data(self, data: Any) -> DocumentBuilder:
        return self._with(data=DataBuilder.coerce(data))

    def with_errors(self, errors: Iterable[Any]) -> DocumentBuilder:
        return self._with(errors=tuple(ErrorBuilder.coerce(error) for error in errors))

    def meta_item(self, name: str, value: Any) -> DocumentBuilder:
        return self._with(meta=(self.meta or MetaBuilder()).item(name, value))

    def link(self, name: str, link: Any) -> DocumentBuilder:
        return self._with(links=(self.links or LinksBuilder()).link(name, link))

    def error(self, error: Any) -> DocumentBuilder:
        """Return a copy with one more error appended."""
        return self._with(errors=(*(self.errors or ()), ErrorBuilder.coerce(error)))

    def _assemble(self, path: str, depth: int) -> Document:
        errors = None
        if self.errors is not None:
            errors_path = member_path(path, "errors")
            errors = [
                error._build(index_path(errors_path, index), depth + 1)
                for index, error in enumerate(self.errors)
            ]
        return Document(
            jsonapi=build_child(self.jsonapi, member_path(path, "jsonapi"), depth),
            meta=build_child(self.meta, member_path(path, "meta"), depth),
            links=build_child(self.links, member_path(path, "links"), depth),
            data=build_child(self.data, member_path(path, "data"), depth),
            errors=errors,
        )

    @classmethod
    def from_entity(cls, document: Document) -> DocumentBuilder:
        return cls(
            jsonapi=None if document.jsonapi is None else JsonApiBuilder.from_entity(document.jsonapi),
            meta=None if document.meta is None else MetaBuilder.from_entity(document.meta),
            links=None if document.links is None else LinksBuilder.from_entity(document.links),
            data=None if document.data is None else DataBuilder.from_entity(document.data),
            errors=(
                None
                if document.errors is None
                else tuple(ErrorBuilder.from_entity(error) for error in document.errors)
            ),
        )

    @classmethod
    def coerce(cls, value: Any) -> DocumentBuilder:
        if isinstance(value, DocumentBuilder):
            return value
        if isinstance(value, Document):
            return cls.from_entity(value)
        raise TypeError(f"cannot build a document from {type(value).__name__}")
