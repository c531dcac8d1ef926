"""JSON:API version value (``"1.<minor>"`` on the wire)."""

from __future__ import annotations

import re
from functools import total_ordering
from typing import Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import PydanticCustomError, core_schema

from jsonapi_doc.exceptions import InvalidVersion

VERSION_PATTERN = re.compile(r"^1\.(\d+)$")


@total_ordering
class Version:
    """Major version is always 1; ordering and equality use the minor number."""

    __slots__ = ("_minor",)

    def __init__(self, minor: int = 0) -> None:
        if isinstance(minor, bool) or not isinstance(minor, int) or minor < 0:
            raise ValueError("Version minor must be a non-negative integer.")
        self._minor = minor

    @property
    def minor(self) -> int:
        return self._minor

    @classmethod
    def default(cls) -> Version:
        """Return version 1.0."""
        return cls(0)

    @classmethod
    def parse(cls, value: str) -> Version:
        """Parse ``"1.<digits>"``, raising :class:`InvalidVersion` otherwise."""
        match = VERSION_PATTERN.match(value) if isinstance(value, str) else None
        if match is None:
            raise InvalidVersion(f"invalid JSON:API version {value!r}")
        return cls(int(match.group(1)))

    def format(self) -> str:
        return f"1.{self._minor}"

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Version({self.format()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._minor == other._minor

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._minor < other._minor

    def __hash__(self) -> int:
        return hash(self._minor)

    @classmethod
    def _validate(cls, value: Any) -> Version:
        if isinstance(value, Version):
            return value
        if not isinstance(value, str):
            raise PydanticCustomError(
                "unexpected_shape",
                "JSON:API version must be a string, got {kind}",
                {"kind": type(value).__name__},
            )
        try:
            return cls.parse(value)
        except InvalidVersion as exc:
            raise PydanticCustomError(
                "invalid_version",
                "invalid JSON:API version '{value}'",
                {"value": value},
            ) from exc

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, when_used="always"
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {"type": "string", "pattern": VERSION_PATTERN.pattern}
