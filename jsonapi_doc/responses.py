"""Starlette responses and FastAPI handlers speaking JSON:API."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Union

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException
from starlette.responses import Response

from jsonapi_doc.codec import encode, encode_document
from jsonapi_doc.config import get_settings
from jsonapi_doc.core.document import DocumentBuilder
from jsonapi_doc.core.errors import ErrorBuilder
from jsonapi_doc.exceptions import BuildError, DecodeError
from jsonapi_doc.schemas.document import Document
from jsonapi_doc.schemas.http_status import HttpStatus

logger = logging.getLogger(__name__)


class JSONAPIResponse(Response):
    """Response whose body is an encoded JSON:API document.

    Accepts a finished :class:`Document`, a :class:`DocumentBuilder`, or a
    plain mapping already in wire form.
    """

    def __init__(
        self,
        content: Union[Document, DocumentBuilder, Mapping[str, Any], None] = None,
        status_code: int = 200,
        headers: Optional[Mapping[str, str]] = None,
        background: Any = None,
    ) -> None:
        super().__init__(
            content,
            status_code=status_code,
            headers=headers,
            media_type=get_settings().media_type,
            background=background,
        )

    def render(self, content: Any) -> bytes:
        if content is None:
            return b""
        if isinstance(content, DocumentBuilder):
            content = content.finish()
        if isinstance(content, Document):
            return encode_document(content)
        return encode(content)


def error_response(
    status: Union[HttpStatus, int],
    *,
    detail: Optional[str] = None,
    errors: Iterable[ErrorBuilder] = (),
    headers: Optional[Mapping[str, str]] = None,
) -> JSONAPIResponse:
    """Return an error document response for ``status``."""
    status = HttpStatus(status)
    errors = list(errors)
    if not errors:
        error = ErrorBuilder().with_status(status).with_title(status.phrase)
        if detail:
            error = error.with_detail(detail)
        errors = [error]
    return JSONAPIResponse(
        DocumentBuilder.for_errors(errors), status_code=int(status), headers=headers
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONAPIResponse:
    detail = exc.detail if exc.detail != HttpStatus(exc.status_code).phrase else None
    return error_response(exc.status_code, detail=detail, headers=exc.headers)


async def decode_error_handler(request: Request, exc: DecodeError) -> JSONAPIResponse:
    logger.info("rejecting request document: %s", exc)
    error = (
        ErrorBuilder()
        .with_status(HttpStatus.BAD_REQUEST)
        .with_code(type(exc).__name__)
        .with_title(HttpStatus.BAD_REQUEST.phrase)
        .with_detail(exc.message)
    )
    if exc.path:
        error = error.meta_item("path", exc.path)
    return error_response(HttpStatus.BAD_REQUEST, errors=[error])


async def build_error_handler(request: Request, exc: BuildError) -> JSONAPIResponse:
    logger.error("failed to build response document: %s", exc)
    return error_response(HttpStatus.INTERNAL_SERVER_ERROR)


def install_exception_handlers(app: FastAPI) -> None:
    """Register handlers rendering library and HTTP errors as error documents."""
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(DecodeError, decode_error_handler)
    app.add_exception_handler(BuildError, build_error_handler)
