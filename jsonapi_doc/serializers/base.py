"""Base serializer turning SQLAlchemy models into resource builders."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.inspection import inspect
from sqlalchemy.orm import Mapper, RelationshipProperty
from sqlalchemy.orm.attributes import NO_VALUE

from jsonapi_doc.core.links import LinksBuilder
from jsonapi_doc.core.resource import DataBuilder, RelationshipBuilder, ResourceBuilder


class JSONAPISerializer:
    """Serialize SQLAlchemy models into JSON:API resource builders."""

    class Meta:
        """Serializer metadata (type, model, fields)."""

        type_: str = ""
        model: Any = None
        fields: list[str] = []

    def to_resource(
        self,
        instance: Any,
        *,
        base_url: str | None = None,
        fields: list[str] | None = None,
    ) -> ResourceBuilder:
        """Serialize a model instance into a resource builder."""
        normalized_fields = fields or None
        resource_id = self.get_id(instance)
        resource = ResourceBuilder(self.Meta.type_, resource_id)
        attributes = self.get_attributes(instance, fields=normalized_fields)
        if attributes:
            resource = resource.with_attributes(attributes)
        relationships = self.get_relationships(
            instance, base_url=base_url, fields=normalized_fields
        )
        if relationships:
            resource = resource.with_relationships(relationships)
        if base_url and resource_id is not None:
            resource = resource.link("self", self._resource_url(base_url, resource_id))
        return resource

    def to_many(
        self,
        instances: Iterable[Any],
        *,
        base_url: str | None = None,
        fields: list[str] | None = None,
    ) -> list[ResourceBuilder]:
        """Serialize a collection of instances."""
        normalized_fields = fields or None
        return [
            self.to_resource(instance, base_url=base_url, fields=normalized_fields)
            for instance in instances
        ]

    def get_id(self, instance: Any) -> Optional[str]:
        """Return the resource id as a string, or ``None`` for an unsaved instance."""
        value = getattr(instance, "id", None)
        return None if value is None else str(value)

    def get_attributes(
        self, instance: Any, *, fields: list[str] | None = None
    ) -> dict[str, Any]:
        """Return attributes from ``Meta.fields`` or the mapped columns."""
        allowed_fields = set(fields) if fields else None
        declared = getattr(self.Meta, "fields", None)
        if declared:
            names = [field for field in declared if field != "id"]
        else:
            mapper = _mapper(instance)
            if mapper is None:
                return {}
            names = [attr.key for attr in mapper.column_attrs if attr.key != "id"]
            # foreign keys are exposed through relationships
            foreign = {
                column.key
                for column in mapper.columns
                if column.foreign_keys and column.key is not None
            }
            names = [name for name in names if name not in foreign]
        if allowed_fields is not None:
            names = [name for name in names if name in allowed_fields]
        return {name: getattr(instance, name) for name in names}

    def get_relationships(
        self,
        instance: Any,
        *,
        base_url: str | None = None,
        fields: list[str] | None = None,
    ) -> dict[str, RelationshipBuilder]:
        """Return a relationship builder per mapped relationship.

        With sparse fieldsets only the listed relationships are included.
        Unloaded relationships carry links only.
        """
        mapper = _mapper(instance)
        if mapper is None:
            return {}
        allowed_fields = set(fields) if fields else None

        relationships: dict[str, RelationshipBuilder] = {}
        for relationship in mapper.relationships:
            if allowed_fields is not None and relationship.key not in allowed_fields:
                continue
            builder = self.relationship_object(
                instance, relationship.key, base_url=base_url
            )
            if builder is not None:
                relationships[relationship.key] = builder
        return relationships

    def relationship_object(
        self, instance: Any, relationship_name: str, *, base_url: str | None = None
    ) -> Optional[RelationshipBuilder]:
        """Build a relationship builder for a single relationship."""
        mapper = _mapper(instance)
        if mapper is None:
            return None
        rel = mapper.relationships.get(relationship_name)
        if rel is None:
            return None
        builder = RelationshipBuilder()
        resource_id = self.get_id(instance)
        if base_url and resource_id is not None:
            builder = builder.with_links(
                self._relationship_links(base_url, resource_id, relationship_name)
            )
        data = self._relationship_data(instance, rel)
        if data is not None:
            builder = builder.with_data(data)
        if builder.links is None and builder.data is None:
            return None
        return builder

    def _resource_url(self, base_url: str, resource_id: str) -> str:
        base = base_url.rstrip("/")
        return f"{base}/{self.Meta.type_}/{resource_id}"

    def _relationship_links(
        self, base_url: str, resource_id: str, relationship: str
    ) -> LinksBuilder:
        resource_path = self._resource_url(base_url, resource_id)
        return (
            LinksBuilder()
            .with_self(f"{resource_path}/relationships/{relationship}")
            .with_related(f"{resource_path}/{relationship}")
        )

    def _relationship_data(
        self, instance: Any, relationship: RelationshipProperty
    ) -> Optional[DataBuilder]:
        """Linkage for a loaded relationship; ``None`` when unloaded or empty to-one."""
        attr_state = inspect(instance).attrs[relationship.key]
        if attr_state.loaded_value is NO_VALUE:
            return None
        related = attr_state.loaded_value
        if relationship.uselist:
            return DataBuilder.multiple(self._identifier(item) for item in related or ())
        if related is None:
            return None
        return DataBuilder.single(self._identifier(related))

    def _identifier(self, related: Any) -> ResourceBuilder:
        type_name = getattr(related, "__tablename__", related.__class__.__name__.lower())
        return ResourceBuilder(type_name, self.get_id(related))


def _mapper(instance: Any) -> Optional[Mapper]:
    try:
        return inspect(instance.__class__)
    except NoInspectionAvailable:
        return None
