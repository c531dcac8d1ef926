"""Synchronous HTTP client exchanging JSON:API documents.

Each call is one blocking request. The outcome is classified by status:

- the expected success status returns a :class:`Response`;
- any other 2xx raises :class:`UnexpectedStatus`;
- anything else raises :class:`ErrorResponse` carrying the decoded document.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

import httpx
from pydantic import BaseModel, ConfigDict

from jsonapi_doc.codec import decode_document, encode_document
from jsonapi_doc.config import Settings, get_settings
from jsonapi_doc.core.document import DocumentBuilder
from jsonapi_doc.exceptions import DecodeError, JSONAPIError
from jsonapi_doc.schemas.document import Document
from jsonapi_doc.schemas.http_status import HttpStatus
from jsonapi_doc.utils.content_negotiation import parse_jsonapi_media_type

logger = logging.getLogger(__name__)

QueryParams = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


class Response(BaseModel):
    """A decoded JSON:API response."""

    model_config = ConfigDict(frozen=True)

    status: int
    document: Optional[Document] = None
    location: Optional[str] = None


class ClientError(JSONAPIError):
    """Base class for client failures."""


class URLError(ClientError):
    """The request URL could not be built."""


class TransportError(ClientError):
    """The request could not be sent or no response arrived."""


class BodyReadError(ClientError):
    """The response body could not be read."""


class ContentTypeError(ClientError):
    """The response is missing the JSON:API content type."""

    def __init__(self, content_type: Optional[str]) -> None:
        self.content_type = content_type
        super().__init__(f"unexpected content type {content_type!r}")


class DocumentDecodeError(ClientError):
    """The response body is not a valid JSON:API document."""

    def __init__(self, error: DecodeError) -> None:
        self.error = error
        super().__init__(str(error))


class UnexpectedStatus(ClientError):
    """A success status other than the expected one."""

    def __init__(self, response: Response, expected: int) -> None:
        self.response = response
        self.expected = expected
        super().__init__(f"expected status {expected}, got {response.status}")


class ErrorResponse(ClientError):
    """A non-success status; ``response.document`` usually holds ``errors``."""

    def __init__(self, response: Response) -> None:
        self.response = response
        super().__init__(f"request failed with status {response.status}")


class Client:
    """JSON:API client bound to a base URL."""

    def __init__(
        self,
        base_url: str,
        *,
        http: Optional[httpx.Client] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.base_url = base_url
        self.settings = settings or get_settings()
        self._owns_http = http is None
        self._http = http or httpx.Client(timeout=self.settings.client_timeout)

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def url(self, path: str, params: QueryParams = ()) -> httpx.URL:
        """Join base URL, path and query parameters."""
        raw = f"{self.base_url}{path}{self.settings.client_path_suffix}"
        try:
            url = httpx.URL(raw, params=list(_items(params)))
        except httpx.InvalidURL as exc:
            raise URLError(f"invalid URL {raw!r}: {exc}") from exc
        if not url.scheme or not url.host:
            raise URLError(f"URL {raw!r} is not absolute")
        return url

    def get(
        self,
        path: str,
        params: QueryParams = (),
        *,
        expected: int = HttpStatus.OK,
    ) -> Response:
        """Fetch a document."""
        return self._send("GET", self.url(path, params), None, expected)

    def post(
        self,
        path: str,
        document: Union[Document, DocumentBuilder],
        *,
        expected: int = HttpStatus.CREATED,
    ) -> Response:
        """Submit a document; the ``Location`` header is kept when present."""
        if isinstance(document, DocumentBuilder):
            document = document.finish()
        return self._send("POST", self.url(path), encode_document(document), expected)

    def _send(
        self,
        method: str,
        url: httpx.URL,
        content: Optional[bytes],
        expected: int,
    ) -> Response:
        media_type = self.settings.media_type
        headers = {"Accept": media_type, "Content-Type": media_type}
        try:
            with self._http.stream(method, url, headers=headers, content=content) as raw:
                try:
                    body = raw.read()
                except httpx.HTTPError as exc:
                    raise BodyReadError(f"failed to read {method} {url} body: {exc}") from exc
                status = raw.status_code
                response_headers = raw.headers
        except httpx.TransportError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        document = None
        if body:
            content_type = response_headers.get("content-type")
            if not parse_jsonapi_media_type(content_type).is_jsonapi(media_type):
                raise ContentTypeError(content_type)
            try:
                document = decode_document(body)
            except DecodeError as exc:
                raise DocumentDecodeError(exc) from exc

        response = Response(
            status=status, document=document, location=response_headers.get("location")
        )
        if status == expected:
            return response
        if 200 <= status < 300:
            logger.warning("%s %s returned %s, expected %s", method, url, status, int(expected))
            raise UnexpectedStatus(response, int(expected))
        logger.warning("%s %s failed with status %s", method, url, status)
        raise ErrorResponse(response)


def _items(params: QueryParams) -> Iterable[Tuple[str, Any]]:
    if isinstance(params, Mapping):
        return params.items()
    return params
