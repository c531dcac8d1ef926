"""Top-level JSON:API document schemas."""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict

from .errors import ErrorObject
from .links import Links
from .meta import MetaOrAttrs
from .resource import Data
from .version import Version


class JsonApi(BaseModel):
    """The ``jsonapi`` member: implemented version and meta."""

    model_config = ConfigDict(frozen=True)

    version: Optional[Version] = None
    meta: Optional[MetaOrAttrs] = None


class Document(BaseModel):
    """Top-level JSON:API document."""

    model_config = ConfigDict(frozen=True)

    jsonapi: Optional[JsonApi] = None
    meta: Optional[MetaOrAttrs] = None
    links: Optional[Links] = None
    data: Optional[Data] = None
    errors: Optional[List[ErrorObject]] = None

    @classmethod
    def from_json(cls, raw: Union[bytes, str]) -> Document:
        """Decode a payload; see :func:`jsonapi_doc.codec.decode_document`."""
        from jsonapi_doc.codec import decode_document

        return decode_document(raw)

    def to_json(self) -> bytes:
        """Encode to UTF-8 JSON; see :func:`jsonapi_doc.codec.encode`."""
        from jsonapi_doc.codec import encode

        return encode(self)
