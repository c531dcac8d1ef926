"""Builders for resources, relationships and primary data.

These reference each other (resource -> relationships -> relationship -> data
-> resource), so they live in one module.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import Field

from jsonapi_doc.schemas.resource import Relationship, Resource

from .base import Builder, build_child, index_path, key_path, member_path
from .links import LinksBuilder
from .meta import MetaBuilder


class ResourceBuilder(Builder):
    """Resource object builder.

    ``ResourceBuilder("posts", "1").attr("title", "Hello").rel("author", user)``
    """

    type_: str
    id: Optional[str] = None
    meta: Optional[MetaBuilder] = None
    links: Optional[LinksBuilder] = None
    attributes: Optional[MetaBuilder] = None
    relationships: Optional[RelationshipsBuilder] = None

    def __init__(self, type_: str, id: Any = None, **data: Any) -> None:
        super().__init__(type_=type_, id=None if id is None else str(id), **data)

    def with_id(self, id: Any) -> ResourceBuilder:
        return self._with(id=str(id))

    def with_meta(self, meta: Any) -> ResourceBuilder:
        return self._with(meta=MetaBuilder.merge(self.meta, meta))

    def with_links(self, links: Any) -> ResourceBuilder:
        return self._with(links=LinksBuilder.merge(self.links, links))

    def with_attributes(self, attributes: Any) -> ResourceBuilder:
        return self._with(attributes=MetaBuilder.merge(self.attributes, attributes))

    def with_relationships(self, relationships: Any) -> ResourceBuilder:
        return self._with(relationships=RelationshipsBuilder.coerce(relationships))

    def meta_item(self, name: str, value: Any) -> ResourceBuilder:
        return self._with(meta=(self.meta or MetaBuilder()).item(name, value))

    def link(self, name: str, link: Any) -> ResourceBuilder:
        return self._with(links=(self.links or LinksBuilder()).link(name, link))

    def attr(self, name: str, value: Any) -> ResourceBuilder:
        return self._with(attributes=(self.attributes or MetaBuilder()).item(name, value))

    def rel(self, name: str, relationship: Any) -> ResourceBuilder:
        relationships = self.relationships or RelationshipsBuilder()
        return self._with(relationships=relationships.rel(name, relationship))

    def _assemble(self, path: str, depth: int) -> Resource:
        return Resource.model_validate(
            {
                "type": self.type_,
                "id": self.id,
                "meta": build_child(self.meta, member_path(path, "meta"), depth),
                "links": build_child(self.links, member_path(path, "links"), depth),
                "attributes": build_child(
                    self.attributes, member_path(path, "attributes"), depth
                ),
                "relationships": build_child(
                    self.relationships, member_path(path, "relationships"), depth
                ),
            }
        )

    @classmethod
    def from_entity(cls, resource: Resource) -> ResourceBuilder:
        return cls(
            resource.type_,
            resource.id,
            meta=None if resource.meta is None else MetaBuilder.from_entity(resource.meta),
            links=None if resource.links is None else LinksBuilder.from_entity(resource.links),
            attributes=(
                None
                if resource.attributes is None
                else MetaBuilder.from_entity(resource.attributes)
            ),
            relationships=(
                None
                if resource.relationships is None
                else RelationshipsBuilder.from_entity(resource.relationships)
            ),
        )

    @classmethod
    def coerce(cls, value: Any) -> ResourceBuilder:
        if isinstance(value, ResourceBuilder):
            return value
        if isinstance(value, Resource):
            return cls.from_entity(value)
        raise TypeError(f"cannot build a resource from {type(value).__name__}")


class DataBuilder(Builder):
    """Primary data builder; see :class:`SingleDataBuilder` and :class:`MultipleDataBuilder`."""

    @staticmethod
    def single(resource: Any) -> SingleDataBuilder:
        return SingleDataBuilder(resource=ResourceBuilder.coerce(resource))

    @staticmethod
    def multiple(resources: Any = ()) -> MultipleDataBuilder:
        return MultipleDataBuilder(
            resources=tuple(ResourceBuilder.coerce(resource) for resource in resources)
        )

    @classmethod
    def from_entity(cls, data: Union[Resource, List[Resource]]) -> DataBuilder:
        if isinstance(data, Resource):
            return SingleDataBuilder(resource=ResourceBuilder.from_entity(data))
        return MultipleDataBuilder(
            resources=tuple(ResourceBuilder.from_entity(resource) for resource in data)
        )

    @classmethod
    def coerce(cls, value: Any) -> DataBuilder:
        """Accept a data builder, one resource (or its builder), or a list of them."""
        if isinstance(value, DataBuilder):
            return value
        if isinstance(value, (Resource, ResourceBuilder)):
            return cls.single(value)
        if isinstance(value, (list, tuple)):
            return cls.multiple(value)
        raise TypeError(f"cannot build data from {type(value).__name__}")


class SingleDataBuilder(DataBuilder):
    resource: ResourceBuilder

    def _assemble(self, path: str, depth: int) -> Resource:
        return self.resource._build(path, depth + 1)


class MultipleDataBuilder(DataBuilder):
    resources: Tuple[ResourceBuilder, ...] = ()

    def resource(self, resource: Any) -> MultipleDataBuilder:
        """Return a copy with one more resource appended."""
        return self._with(resources=(*self.resources, ResourceBuilder.coerce(resource)))

    def _assemble(self, path: str, depth: int) -> List[Resource]:
        return [
            resource._build(index_path(path, index), depth + 1)
            for index, resource in enumerate(self.resources)
        ]


class RelationshipBuilder(Builder):
    """Relationship object builder."""

    meta: Optional[MetaBuilder] = None
    links: Optional[LinksBuilder] = None
    data: Optional[DataBuilder] = None

    def with_meta(self, meta: Any) -> RelationshipBuilder:
        return self._with(meta=MetaBuilder.merge(self.meta, meta))

    def with_links(self, links: Any) -> RelationshipBuilder:
        return self._with(links=LinksBuilder.merge(self.links, links))

    def with_data(self, data: Any) -> RelationshipBuilder:
        return self._with(data=DataBuilder.coerce(data))

    def meta_item(self, name: str, value: Any) -> RelationshipBuilder:
        return self._with(meta=(self.meta or MetaBuilder()).item(name, value))

    def link(self, name: str, link: Any) -> RelationshipBuilder:
        return self._with(links=(self.links or LinksBuilder()).link(name, link))

    def _assemble(self, path: str, depth: int) -> Relationship:
        return Relationship(
            meta=build_child(self.meta, member_path(path, "meta"), depth),
            links=build_child(self.links, member_path(path, "links"), depth),
            data=build_child(self.data, member_path(path, "data"), depth),
        )

    @classmethod
    def from_entity(cls, relationship: Relationship) -> RelationshipBuilder:
        return cls(
            meta=(
                None if relationship.meta is None else MetaBuilder.from_entity(relationship.meta)
            ),
            links=(
                None
                if relationship.links is None
                else LinksBuilder.from_entity(relationship.links)
            ),
            data=None if relationship.data is None else DataBuilder.from_entity(relationship.data),
        )

    @classmethod
    def coerce(cls, value: Any) -> RelationshipBuilder:
        """Accept a builder, a :class:`Relationship`, or anything usable as its data."""
        if isinstance(value, RelationshipBuilder):
            return value
        if isinstance(value, Relationship):
            return cls.from_entity(value)
        return cls(data=DataBuilder.coerce(value))


class RelationshipsBuilder(Builder):
    """Map of relation name to relationship builder."""

    relationships: Dict[str, RelationshipBuilder] = Field(default_factory=dict)

    def rel(self, name: str, relationship: Any) -> RelationshipsBuilder:
        return self._with(
            relationships={
                **self.relationships,
                str(name): RelationshipBuilder.coerce(relationship),
            }
        )

    def _assemble(self, path: str, depth: int) -> Dict[str, Relationship]:
        return {
            name: relationship._build(key_path(path, name), depth + 1)
            for name, relationship in self.relationships.items()
        }

    @classmethod
    def from_entity(cls, relationships: Mapping[str, Relationship]) -> RelationshipsBuilder:
        return cls(
            relationships={
                name: RelationshipBuilder.from_entity(relationship)
                for name, relationship in relationships.items()
            }
        )

    @classmethod
    def coerce(cls, value: Any) -> RelationshipsBuilder:
        if isinstance(value, RelationshipsBuilder):
            return value
        if isinstance(value, Mapping):
            builder = cls()
            for name, relationship in value.items():
                builder = builder.rel(name, relationship)
            return builder
        raise TypeError(f"cannot build relationships from {type(value).__name__}")


ResourceBuilder.model_rebuild()
SingleDataBuilder.model_rebuild()
MultipleDataBuilder.model_rebuild()
RelationshipBuilder.model_rebuild()
