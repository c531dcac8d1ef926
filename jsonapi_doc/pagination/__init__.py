"""Pagination strategies that fill in collection links and meta builders."""

from .base import PaginationBase
from .standard import StandardPagination

__all__ = ["PaginationBase", "StandardPagination"]
