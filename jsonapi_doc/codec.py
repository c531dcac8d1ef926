"""Encode entities to JSON and decode JSON payloads into entities."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any, Iterable, Optional, Union

from pydantic import TypeAdapter, ValidationError
from pydantic_core import to_json, to_jsonable_python

from jsonapi_doc.config import get_settings
from jsonapi_doc.exceptions import (
    DecodeError,
    DepthExceeded,
    InvalidStatus,
    InvalidVersion,
    MalformedJSON,
    MissingField,
    UnexpectedShape,
)
from jsonapi_doc.schemas.document import Document

logger = logging.getLogger(__name__)

ERROR_TYPES: dict[str, type[DecodeError]] = {
    "unexpected_shape": UnexpectedShape,
    "invalid_version": InvalidVersion,
    "invalid_status": InvalidStatus,
    "missing": MissingField,
    "model_type": UnexpectedShape,
    "model_attributes_type": UnexpectedShape,
    "dict_type": UnexpectedShape,
    "list_type": UnexpectedShape,
    "string_type": UnexpectedShape,
}

# union tags added to error locations by the Link and Data discriminators
_UNION_TAGS = frozenset({"string", "object", "single", "multiple"})
# members whose children are arbitrary keys
_KEYED_MEMBERS = frozenset({"relationships", "meta", "attributes"})


@lru_cache(maxsize=None)
def _adapter(model: Any) -> TypeAdapter:
    return TypeAdapter(model)


def format_path(loc: Iterable[Union[int, str]]) -> str:
    """Render a pydantic error location as ``data[1].relationships["author"].data``."""
    path = ""
    previous: Union[int, str, None] = None
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        elif part in _UNION_TAGS and previous not in _KEYED_MEMBERS | {"links"}:
            continue
        elif previous in _KEYED_MEMBERS:
            path += f'["{part}"]'
        else:
            path += f".{part}" if path else part
        previous = part
    return path


def translate_validation_error(exc: ValidationError) -> DecodeError:
    """Map the first pydantic error onto the matching :class:`DecodeError`."""
    error = exc.errors(include_url=False)[0]
    error_class = ERROR_TYPES.get(error["type"], DecodeError)
    return error_class(error["msg"], path=format_path(error["loc"]))


def check_depth(payload: Any, max_depth: int) -> None:
    """Raise :class:`DepthExceeded` if containers nest deeper than ``max_depth``."""
    stack = [(payload, 1)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, dict):
            children: Iterable[Any] = node.values()
        elif isinstance(node, list):
            children = node
        else:
            continue
        if depth > max_depth:
            raise DepthExceeded(f"nesting exceeds {max_depth} levels")
        stack.extend((child, depth + 1) for child in children)


def validate(model: Any, payload: Any) -> Any:
    """Validate an already-parsed JSON value against ``model``."""
    try:
        return _adapter(model).validate_python(payload, by_alias=True, by_name=False)
    except ValidationError as exc:
        raise translate_validation_error(exc) from exc


def decode(model: Any, raw: Union[bytes, str], *, max_depth: Optional[int] = None) -> Any:
    """Decode a UTF-8 JSON payload into ``model`` (an entity class or type)."""
    limit = get_settings().max_depth if max_depth is None else max_depth
    try:
        payload = json.loads(raw)
    except RecursionError as exc:
        raise DepthExceeded(f"nesting exceeds {limit} levels") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedJSON(str(exc)) from exc
    check_depth(payload, limit)
    return validate(model, payload)


def decode_document(raw: Union[bytes, str], *, max_depth: Optional[int] = None) -> Document:
    """Decode one JSON:API document."""
    document = decode(Document, raw, max_depth=max_depth)
    logger.debug("Decoded JSON:API document (%d bytes)", len(raw))
    return document


def to_payload(value: Any, model: Any = None) -> Any:
    """Return the JSON-compatible Python form of an entity."""
    if model is not None:
        return _adapter(model).dump_python(value, mode="json", by_alias=True)
    return to_jsonable_python(value, by_alias=True)


def encode(value: Any, model: Any = None) -> bytes:
    """Encode an entity to UTF-8 JSON.

    ``model`` is needed only for values that are not pydantic models, such as a
    bare :class:`~jsonapi_doc.schemas.version.Version`.
    """
    if model is not None:
        return _adapter(model).dump_json(value, by_alias=True)
    return to_json(value, by_alias=True)


def encode_document(document: Document) -> bytes:
    """Encode one JSON:API document."""
    raw = encode(document)
    logger.debug("Encoded JSON:API document (%d bytes)", len(raw))
    return raw
