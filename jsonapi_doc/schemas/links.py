"""Link and links-object schemas.

A link is either a bare URL string or a ``{"href", "meta"}`` object; the JSON
kind picks the variant. A links object is one flat JSON object where the
reserved relations (``self``, ``related``, ``first``, ``last``, ``prev``,
``next``, ``about``) sit next to any number of extra relation names.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, model_validator
from pydantic_core import PydanticCustomError

from .meta import MetaOrAttrs

RESERVED_LINKS = ("self", "related", "first", "last", "prev", "next", "about")

# wire name -> field name
WIRE_SLOTS: dict[str, str] = {name: name for name in RESERVED_LINKS}
WIRE_SLOTS["self"] = "self_"
# python-side construction also accepts the field name of ``self``
LINK_SLOTS: dict[str, str] = {**WIRE_SLOTS, "self_": "self_"}


class LinkObject(BaseModel):
    """Link object: ``href`` plus optional ``meta``."""

    model_config = ConfigDict(frozen=True)

    href: str
    meta: Optional[MetaOrAttrs] = None


def _link_shape(value: Any) -> str | None:
    if isinstance(value, str):
        return "string"
    if isinstance(value, (Mapping, LinkObject)):
        return "object"
    return None


Link = Annotated[
    Union[Annotated[str, Tag("string")], Annotated[LinkObject, Tag("object")]],
    Discriminator(
        _link_shape,
        custom_error_type="unexpected_shape",
        custom_error_message="link must be a string or an object",
    ),
]


class Links(BaseModel):
    """Reserved link slots plus an open map of extra relations.

    Extra relations are stored as pydantic extra fields, so encoding emits them
    flat next to the reserved keys. Use :attr:`other` to read them.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    __pydantic_extra__: Dict[str, Link] = Field(init=False)

    self_: Optional[Link] = Field(default=None, alias="self")
    related: Optional[Link] = None
    first: Optional[Link] = None
    last: Optional[Link] = None
    prev: Optional[Link] = None
    next: Optional[Link] = None
    about: Optional[Link] = None

    @model_validator(mode="before")
    @classmethod
    def _split_reserved(cls, value: Any) -> Any:
        if isinstance(value, Links):
            return value
        if not isinstance(value, Mapping):
            raise PydanticCustomError(
                "unexpected_shape",
                "links must be an object, got {kind}",
                {"kind": type(value).__name__},
            )
        # null under an extra relation name means "no link": drop it
        return {
            key: link
            for key, link in value.items()
            if key in WIRE_SLOTS or link is not None
        }

    @classmethod
    def of(cls, links: Mapping[str, Any]) -> Links:
        """Build from a ``{relation name: link}`` mapping.

        ``self_`` is accepted in place of ``self``; every other name that is not
        reserved becomes an extra link.
        """
        payload = dict(links)
        if "self_" in payload:
            if "self" in payload:
                raise ValueError("links mapping sets 'self' twice")
            payload["self"] = payload.pop("self_")
        return cls.model_validate(payload, by_alias=True, by_name=False)

    @property
    def other(self) -> dict[str, Union[str, LinkObject]]:
        """Links under non-reserved relation names."""
        return dict(self.__pydantic_extra__ or {})

    def get(self, name: str) -> Union[str, LinkObject, None]:
        """Return the link for ``name``, reserved or not."""
        slot = WIRE_SLOTS.get(name)
        if slot is not None:
            return getattr(self, slot)
        return self.other.get(name)
