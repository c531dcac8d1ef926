"""Helpers for JSON:API media type headers."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from jsonapi_doc.config import get_settings


class MediaType(BaseModel):
    """A parsed ``Content-Type``/``Accept`` entry."""

    model_config = ConfigDict(frozen=True)

    media_type: str
    ext: List[str] = Field(default_factory=list)
    profile: List[str] = Field(default_factory=list)
    other_params: Dict[str, str] = Field(default_factory=dict)

    def is_jsonapi(self, expected: Optional[str] = None) -> bool:
        """True for the JSON:API media type with no parameters besides ext/profile."""
        expected = expected or get_settings().media_type
        return self.media_type == expected and not self.other_params


def _split_parameters(value: str) -> list[str]:
    return [part.strip() for part in value.split(";") if part.strip()]


def _parse_param_value(value: str) -> list[str]:
    if value.startswith('"') and value.endswith('"'):
        value = value[1:-1]
    return [item for item in value.split(" ") if item]


def parse_jsonapi_media_type(content_type: Optional[str]) -> MediaType:
    """Parse a media type and its JSON:API ``ext``/``profile`` parameters."""
    parts = _split_parameters(content_type or "")
    params: dict[str, list[str]] = {"ext": [], "profile": []}
    other: dict[str, str] = {}

    for param in parts[1:]:
        if "=" not in param:
            continue
        name, raw_value = param.split("=", 1)
        name = name.strip().lower()
        raw_value = raw_value.strip()
        if name in params:
            params[name] = _parse_param_value(raw_value)
        else:
            other[name] = raw_value
    return MediaType(
        media_type=parts[0].lower() if parts else "",
        ext=params["ext"],
        profile=params["profile"],
        other_params=other,
    )


def _media_range(entry: str) -> str:
    # parameters from ``q`` on are accept-params, not media type parameters
    parts = _split_parameters(entry)
    for index, param in enumerate(parts[1:], start=1):
        if param.split("=", 1)[0].strip().lower() == "q":
            return ";".join(parts[:index])
    return ";".join(parts)


def accepts_jsonapi(accept: Optional[str], expected: Optional[str] = None) -> bool:
    """True if an ``Accept`` header allows the JSON:API media type (or has none).

    A JSON:API entry only counts when it carries no parameters besides
    ``ext`` and ``profile``.
    """
    if not accept:
        return True
    expected = expected or get_settings().media_type
    for entry in accept.split(","):
        parsed = parse_jsonapi_media_type(_media_range(entry))
        if parsed.media_type in ("*/*", "application/*") or parsed.is_jsonapi(expected):
            return True
    return False
