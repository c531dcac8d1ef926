"""Shared builder contract.

Builders are frozen pydantic models. Every setter returns a new builder, so a
builder can be reused as the starting point of several chains. ``finish``
walks the tree depth-first and raises :class:`BuildError` for the first child
that fails; nothing partial is ever returned.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from jsonapi_doc.codec import format_path
from jsonapi_doc.config import get_settings
from jsonapi_doc.exceptions import BuildError

logger = logging.getLogger(__name__)


def member_path(path: str, member: str) -> str:
    return f"{path}.{member}" if path else member


def key_path(path: str, key: str) -> str:
    return f'{path}["{key}"]'


def index_path(path: str, index: int) -> str:
    return f"{path}[{index}]"


class Builder(BaseModel):
    """Base class for entity builders."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def finish(self) -> Any:
        """Assemble the entity tree."""
        entity = self._build("", 0)
        logger.debug("Built %s", type(entity).__name__)
        return entity

    def _build(self, path: str, depth: int) -> Any:
        max_depth = get_settings().max_depth
        if depth > max_depth:
            raise BuildError(f"nesting exceeds {max_depth} levels", path=path)
        try:
            return self._assemble(path, depth)
        except ValidationError as exc:
            error = exc.errors(include_url=False)[0]
            raise BuildError(
                error["msg"], path=_join(path, format_path(error["loc"]))
            ) from exc

    def _assemble(self, path: str, depth: int) -> Any:
        raise NotImplementedError

    def _with(self, **changes: Any) -> Any:
        return self.model_copy(update=changes)


def build_child(child: Optional[Builder], path: str, depth: int) -> Any:
    """Finish an optional child; ``None`` stays ``None``."""
    if child is None:
        return None
    return child._build(path, depth + 1)


def _join(path: str, suffix: str) -> str:
    if not suffix:
        return path
    if not path or suffix.startswith("["):
        return path + suffix
    return f"{path}.{suffix}"
