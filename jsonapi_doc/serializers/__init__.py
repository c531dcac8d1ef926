"""Model serializers producing JSON:API resource builders."""

from .base import JSONAPISerializer

__all__ = ["JSONAPISerializer"]
