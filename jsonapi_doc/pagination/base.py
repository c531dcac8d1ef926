"""Pagination base class for JSON:API links and meta."""

from typing import Any

from jsonapi_doc.core.links import LinksBuilder
from jsonapi_doc.core.meta import MetaBuilder


class PaginationBase:
    """Define pagination API for JSON:API collection documents."""

    def paginate_queryset(
        self, items: list[Any], params: dict[str, Any]
    ) -> list[Any]:
        """Return a paginated slice of items."""
        raise NotImplementedError

    def get_links(self, *, total: int, params: dict[str, Any]) -> LinksBuilder:
        """Return a links builder with the pagination links filled in."""
        raise NotImplementedError

    def get_meta(self, *, total: int, params: dict[str, Any]) -> MetaBuilder:
        """Return a meta builder with pagination metadata (total, limit, offset)."""
        raise NotImplementedError
