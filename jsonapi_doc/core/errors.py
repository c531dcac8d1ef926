"""JSON:API error object builders."""

from __future__ import annotations

from typing import Any, Optional

from jsonapi_doc.schemas.errors import ErrorObject, ErrorSource
from jsonapi_doc.schemas.http_status import HttpStatus

from .base import Builder, build_child, member_path
from .links import LinksBuilder
from .meta import MetaBuilder


class ErrorSourceBuilder(Builder):
    """Build the ``source`` member of an error object."""

    pointer: Optional[str] = None
    parameter: Optional[str] = None

    def with_pointer(self, pointer: Any) -> ErrorSourceBuilder:
        return self._with(pointer=str(pointer))

    def with_parameter(self, parameter: Any) -> ErrorSourceBuilder:
        return self._with(parameter=str(parameter))

    def _assemble(self, path: str, depth: int) -> ErrorSource:
        return ErrorSource(pointer=self.pointer, parameter=self.parameter)

    @classmethod
    def from_entity(cls, source: ErrorSource) -> ErrorSourceBuilder:
        return cls(pointer=source.pointer, parameter=source.parameter)

    @classmethod
    def coerce(cls, value: Any) -> ErrorSourceBuilder:
        if isinstance(value, ErrorSourceBuilder):
            return value
        if isinstance(value, ErrorSource):
            return cls.from_entity(value)
        raise TypeError(f"cannot build an error source from {type(value).__name__}")


class ErrorBuilder(Builder):
    """Build JSON:API error objects.

    ``ErrorBuilder().with_status(404).with_title("Not Found").pointer("/data/id")``
    """

    id: Optional[str] = None
    links: Optional[LinksBuilder] = None
    status: Optional[HttpStatus] = None
    code: Optional[str] = None
    title: Optional[str] = None
    detail: Optional[str] = None
    source: Optional[ErrorSourceBuilder] = None
    meta: Optional[MetaBuilder] = None

    def with_id(self, id: Any) -> ErrorBuilder:
        return self._with(id=str(id))

    def with_links(self, links: Any) -> ErrorBuilder:
        return self._with(links=LinksBuilder.merge(self.links, links))

    def with_status(self, status: Any) -> ErrorBuilder:
        """Set the status from an :class:`HttpStatus` or a registered integer code."""
        return self._with(status=HttpStatus(status))

    def with_code(self, code: Any) -> ErrorBuilder:
        return self._with(code=str(code))

    def with_title(self, title: Any) -> ErrorBuilder:
        return self._with(title=str(title))

    def with_detail(self, detail: Any) -> ErrorBuilder:
        return self._with(detail=str(detail))

    def with_source(self, source: Any) -> ErrorBuilder:
        return self._with(source=ErrorSourceBuilder.coerce(source))

    def with_meta(self, meta: Any) -> ErrorBuilder:
        return self._with(meta=MetaBuilder.merge(self.meta, meta))

    def link(self, name: str, link: Any) -> ErrorBuilder:
        return self._with(links=(self.links or LinksBuilder()).link(name, link))

    def pointer(self, pointer: Any) -> ErrorBuilder:
        return self._with(source=(self.source or ErrorSourceBuilder()).with_pointer(pointer))

    def parameter(self, parameter: Any) -> ErrorBuilder:
        return self._with(source=(self.source or ErrorSourceBuilder()).with_parameter(parameter))

    def meta_item(self, name: str, value: Any) -> ErrorBuilder:
        return self._with(meta=(self.meta or MetaBuilder()).item(name, value))

    def _assemble(self, path: str, depth: int) -> ErrorObject:
        return ErrorObject(
            id=self.id,
            links=build_child(self.links, member_path(path, "links"), depth),
            status=self.status,
            code=self.code,
            title=self.title,
            detail=self.detail,
            source=build_child(self.source, member_path(path, "source"), depth),
            meta=build_child(self.meta, member_path(path, "meta"), depth),
        )

    @classmethod
    def from_entity(cls, error: ErrorObject) -> ErrorBuilder:
        return cls(
            id=error.id,
            links=None if error.links is None else LinksBuilder.from_entity(error.links),
            status=error.status,
            code=error.code,
            title=error.title,
            detail=error.detail,
            source=None if error.source is None else ErrorSourceBuilder.from_entity(error.source),
            meta=None if error.meta is None else MetaBuilder.from_entity(error.meta),
        )

    @classmethod
    def coerce(cls, value: Any) -> ErrorBuilder:
        if isinstance(value, ErrorBuilder):
            return value
        if isinstance(value, ErrorObject):
            return cls.from_entity(value)
        raise TypeError(f"cannot build an error from {type(value).__name__}")
