"""Error object schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .http_status import StatusCode
from .links import Links
from .meta import MetaOrAttrs


class ErrorSource(BaseModel):
    """Where the error originated: a JSON pointer or a query parameter."""

    model_config = ConfigDict(frozen=True)

    pointer: Optional[str] = None
    parameter: Optional[str] = None


class ErrorObject(BaseModel):
    """Error object carried in a document's ``errors`` array."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    links: Optional[Links] = None
    status: Optional[StatusCode] = None
    code: Optional[str] = None
    title: Optional[str] = None
    detail: Optional[str] = None
    source: Optional[ErrorSource] = None
    meta: Optional[MetaOrAttrs] = None
