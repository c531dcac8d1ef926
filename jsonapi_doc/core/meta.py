"""Builder for ``meta`` and ``attributes`` maps."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Dict, Optional

from pydantic import Field

from jsonapi_doc.schemas.meta import MetaOrAttrs

from .base import Builder


class MetaBuilder(Builder):
    """Collect key/value pairs one at a time."""

    items: Dict[str, Any] = Field(default_factory=dict)

    def item(self, name: str, value: Any) -> MetaBuilder:
        """Return a copy with ``name`` set to ``value``."""
        return self._with(items={**self.items, str(name): value})

    def _assemble(self, path: str, depth: int) -> MetaOrAttrs:
        return copy.deepcopy(self.items)

    @classmethod
    def from_entity(cls, meta: Mapping[str, Any]) -> MetaBuilder:
        return cls(items=copy.deepcopy(dict(meta)))

    @classmethod
    def coerce(cls, value: Any) -> MetaBuilder:
        """Accept a builder, a mapping, or a single ``(name, value)`` pair."""
        if isinstance(value, MetaBuilder):
            return value
        if isinstance(value, Mapping):
            return cls.from_entity(value)
        if is_pair(value):
            return cls().item(*value)
        raise TypeError(f"cannot build meta from {type(value).__name__}")

    @classmethod
    def merge(cls, current: Optional[MetaBuilder], value: Any) -> MetaBuilder:
        """Setter semantics: a pair is inserted into ``current``, anything else replaces it."""
        if is_pair(value):
            return (current or cls()).item(*value)
        return cls.coerce(value)


def is_pair(value: Any) -> bool:
    return isinstance(value, tuple) and len(value) == 2 and isinstance(value[0], str)
