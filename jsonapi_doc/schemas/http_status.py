"""HTTP status codes carried by error objects.

The registry of named constants is the standard library's :class:`http.HTTPStatus`
(``HttpStatus.NOT_FOUND``, ``HttpStatus(404)``). On the wire a status is always the
decimal code as a JSON string, e.g. ``"404"``.
"""

from __future__ import annotations

from http import HTTPStatus as HttpStatus
from typing import Annotated, Any

from pydantic import PlainSerializer, PlainValidator
from pydantic_core import PydanticCustomError

from jsonapi_doc.exceptions import InvalidStatus


def parse_status(value: str) -> HttpStatus:
    """Parse a decimal status string into a registered :class:`HttpStatus`."""
    if not isinstance(value, str) or not (value.isascii() and value.isdigit()):
        raise InvalidStatus(f"invalid HTTP status code {value!r}")
    try:
        return HttpStatus(int(value))
    except ValueError as exc:
        raise InvalidStatus(f"invalid HTTP status code {value!r}") from exc


def format_status(status: HttpStatus) -> str:
    """Return the wire form of a status: its code as a string."""
    return str(int(status))


def _validate_status(value: Any) -> HttpStatus:
    # bare ints are rejected; only HttpStatus members or decimal strings pass
    if isinstance(value, HttpStatus):
        return value
    if not isinstance(value, str):
        raise PydanticCustomError(
            "unexpected_shape",
            "HTTP status must be a string, got {kind}",
            {"kind": type(value).__name__},
        )
    try:
        return parse_status(value)
    except InvalidStatus as exc:
        raise PydanticCustomError(
            "invalid_status",
            "invalid HTTP status code '{value}'",
            {"value": value},
        ) from exc


StatusCode = Annotated[
    HttpStatus,
    PlainValidator(_validate_status),
    PlainSerializer(format_status, return_type=str),
]
