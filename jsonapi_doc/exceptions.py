"""Exceptions raised while decoding, building and exchanging JSON:API documents."""

from __future__ import annotations


class JSONAPIError(Exception):
    """Base class for every error raised by this package."""


class DecodeError(JSONAPIError):
    """Raised when a payload cannot be decoded into a document entity.

    ``path`` points at the offending node, e.g. ``data[0].links.self``.
    """

    def __init__(self, message: str, *, path: str = "") -> None:
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class UnexpectedShape(DecodeError):
    """JSON value kind did not match what the target type allows."""


class InvalidVersion(DecodeError):
    """Version string does not match ``1.<digits>``."""


class InvalidStatus(DecodeError):
    """Status string is not a recognized HTTP status code."""


class MissingField(DecodeError):
    """A required member (such as a resource ``type``) is absent."""


class MalformedJSON(DecodeError):
    """Payload is not valid UTF-8 JSON."""


class DepthExceeded(DecodeError):
    """Payload nesting is deeper than the configured ceiling."""


class BuildError(JSONAPIError):
    """Raised by ``finish`` when a builder cannot be turned into an entity."""

    def __init__(self, message: str, *, path: str = "") -> None:
        self.message = message
        self.path = path
        location = path or "<root>"
        super().__init__(f"{location}: {message}")
