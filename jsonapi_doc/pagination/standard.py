"""Offset/limit pagination producing JSON:API links and meta builders."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode, urlsplit, urlunsplit

from jsonapi_doc.core.links import LinksBuilder
from jsonapi_doc.core.meta import MetaBuilder

from .base import PaginationBase


class StandardPagination(PaginationBase):
    """``page[offset]``/``page[limit]`` pagination.

    ``params`` carries ``base_url`` and a ``page`` mapping parsed from the query.
    """

    default_limit = 10

    def _window(self, params: dict[str, Any]) -> tuple[dict[str, Any], int, int]:
        page = params.get("page", {})
        offset = int(page.get("offset", 0))
        limit = int(page.get("limit", self.default_limit))
        return page, offset, limit

    def paginate_queryset(self, items: list[Any], params: dict[str, Any]) -> list[Any]:
        """Paginate based on page[offset] and page[limit]."""
        _, offset, limit = self._window(params)
        if offset < 0 or limit < 1:
            return items
        return items[offset : offset + limit]

    def get_links(self, *, total: int, params: dict[str, Any]) -> LinksBuilder:
        """Build self/first/last and, where they exist, prev/next links."""
        base_url = params.get("base_url")
        page, offset, limit = self._window(params)
        links = LinksBuilder()
        if not base_url or limit < 1:
            return links

        def build_url(page_offset: int) -> str:
            split = urlsplit(base_url)
            query_params = dict(page)
            query_params["offset"] = page_offset
            query_params["limit"] = limit
            query = urlencode({f"page[{k}]": v for k, v in query_params.items()})
            return urlunsplit((split.scheme, split.netloc, split.path, query, split.fragment))

        last_offset = max(0, (max(total - 1, 0) // limit) * limit)
        links = (
            links.with_self(build_url(offset))
            .with_first(build_url(0))
            .with_last(build_url(last_offset))
        )
        prev_offset = offset - limit
        if prev_offset >= 0:
            links = links.with_prev(build_url(prev_offset))
        next_offset = offset + limit
        if next_offset <= last_offset:
            links = links.with_next(build_url(next_offset))
        return links

    def get_meta(self, *, total: int, params: dict[str, Any]) -> MetaBuilder:
        """Build pagination metadata with total, limit, and offset."""
        _, offset, limit = self._window(params)
        return MetaBuilder().item("total", total).item("limit", limit).item("offset", offset)
