"""Resource, relationship and primary-data schemas.

``Data`` is either one :class:`Resource` (a JSON object) or a list of them (a
JSON array, possibly empty). The JSON kind alone decides which.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

from .links import Links
from .meta import MetaOrAttrs


def _data_shape(value: Any) -> str | None:
    if isinstance(value, (Mapping, Resource)):
        return "single"
    if isinstance(value, (list, tuple)):
        return "multiple"
    return None


class Resource(BaseModel):
    """Resource object. ``type`` is the discriminant for ``attributes``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type_: str = Field(alias="type", min_length=1)
    id: Optional[str] = None
    meta: Optional[MetaOrAttrs] = None
    links: Optional[Links] = None
    attributes: Optional[MetaOrAttrs] = None
    relationships: Optional[Dict[str, Relationship]] = None


Data = Annotated[
    Union[
        Annotated[Resource, Tag("single")],
        Annotated[List[Resource], Tag("multiple")],
    ],
    Discriminator(
        _data_shape,
        custom_error_type="unexpected_shape",
        custom_error_message="data must be an object or an array",
    ),
]


class Relationship(BaseModel):
    """Relationship object; ``data`` holds copies of the related resources."""

    model_config = ConfigDict(frozen=True)

    meta: Optional[MetaOrAttrs] = None
    links: Optional[Links] = None
    data: Optional[Data] = None


Relationships = Dict[str, Relationship]

Resource.model_rebuild()
Relationship.model_rebuild()
