"""Builders for single links and links objects."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Optional, Union

from pydantic import Field, field_validator

from jsonapi_doc.schemas.links import (
    LINK_SLOTS,
    RESERVED_LINKS,
    WIRE_SLOTS,
    LinkObject,
    Links,
)

from .base import Builder, build_child, member_path
from .meta import MetaBuilder, is_pair


class LinkBuilder(Builder):
    """Link builder. Finishes as a bare string unless meta was set or the
    builder came from a link object."""

    href: str
    meta: Optional[MetaBuilder] = None
    as_object: bool = False

    def __init__(self, href: str, **data: Any) -> None:
        super().__init__(href=href, **data)

    def with_meta(self, meta: Any) -> LinkBuilder:
        return self._with(meta=MetaBuilder.merge(self.meta, meta))

    def meta_item(self, name: str, value: Any) -> LinkBuilder:
        return self._with(meta=(self.meta or MetaBuilder()).item(name, value))

    def _assemble(self, path: str, depth: int) -> Union[str, LinkObject]:
        if self.meta is None and not self.as_object:
            return self.href
        return LinkObject(
            href=self.href, meta=build_child(self.meta, member_path(path, "meta"), depth)
        )

    @classmethod
    def from_entity(cls, link: Union[str, LinkObject]) -> LinkBuilder:
        if isinstance(link, str):
            return cls(link)
        meta = None if link.meta is None else MetaBuilder.from_entity(link.meta)
        return cls(link.href, meta=meta, as_object=True)

    @classmethod
    def coerce(cls, value: Any) -> LinkBuilder:
        """Accept a builder, a URL string, or a :class:`LinkObject`."""
        if isinstance(value, LinkBuilder):
            return value
        if isinstance(value, (str, LinkObject)):
            return cls.from_entity(value)
        raise TypeError(f"cannot build a link from {type(value).__name__}")


class LinksBuilder(Builder):
    """Links object builder. Reserved relation names always land in their slot."""

    self_: Optional[LinkBuilder] = None
    related: Optional[LinkBuilder] = None
    first: Optional[LinkBuilder] = None
    last: Optional[LinkBuilder] = None
    prev: Optional[LinkBuilder] = None
    next: Optional[LinkBuilder] = None
    about: Optional[LinkBuilder] = None
    other: Dict[str, LinkBuilder] = Field(default_factory=dict)

    @field_validator("other")
    @classmethod
    def _reject_reserved_names(cls, other: Dict[str, LinkBuilder]) -> Dict[str, LinkBuilder]:
        reserved = sorted(set(other) & set(RESERVED_LINKS))
        if reserved:
            raise ValueError(f"reserved link names cannot be extra links: {reserved}")
        return other

    def link(self, name: str, link: Any) -> LinksBuilder:
        """Return a copy with the link for ``name`` set."""
        name = str(name)
        builder = LinkBuilder.coerce(link)
        slot = LINK_SLOTS.get(name)
        if slot is not None:
            return self._with(**{slot: builder})
        return self._with(other={**self.other, name: builder})

    def with_self(self, link: Any) -> LinksBuilder:
        return self.link("self", link)

    def with_related(self, link: Any) -> LinksBuilder:
        return self.link("related", link)

    def with_first(self, link: Any) -> LinksBuilder:
        return self.link("first", link)

    def with_last(self, link: Any) -> LinksBuilder:
        return self.link("last", link)

    def with_prev(self, link: Any) -> LinksBuilder:
        return self.link("prev", link)

    def with_next(self, link: Any) -> LinksBuilder:
        return self.link("next", link)

    def with_about(self, link: Any) -> LinksBuilder:
        return self.link("about", link)

    def _assemble(self, path: str, depth: int) -> Links:
        payload: dict[str, Any] = {}
        for name in RESERVED_LINKS:
            child = getattr(self, WIRE_SLOTS[name])
            payload[name] = build_child(child, member_path(path, name), depth)
        for name, child in self.other.items():
            payload[name] = build_child(child, member_path(path, name), depth)
        return Links.model_validate(payload, by_alias=True, by_name=False)

    @classmethod
    def from_entity(cls, links: Links) -> LinksBuilder:
        slots = {
            WIRE_SLOTS[name]: LinkBuilder.from_entity(link)
            for name in RESERVED_LINKS
            if (link := links.get(name)) is not None
        }
        other = {name: LinkBuilder.from_entity(link) for name, link in links.other.items()}
        return cls(**slots, other=other)

    @classmethod
    def coerce(cls, value: Any) -> LinksBuilder:
        """Accept a builder, a :class:`Links`, or a ``{name: link}`` mapping."""
        if isinstance(value, LinksBuilder):
            return value
        if isinstance(value, Links):
            return cls.from_entity(value)
        if is_pair(value):
            return cls().link(*value)
        if isinstance(value, Mapping):
            builder = cls()
            for name, link in value.items():
                builder = builder.link(name, link)
            return builder
        raise TypeError(f"cannot build links from {type(value).__name__}")

    @classmethod
    def merge(cls, current: Optional[LinksBuilder], value: Any) -> LinksBuilder:
        """Setter semantics: a ``(name, link)`` pair is added to ``current``."""
        if is_pair(value):
            return (current or cls()).link(*value)
        return cls.coerce(value)
