"""Free-form ``meta`` and ``attributes`` members."""

from typing import Any, Dict

# Keys are unique; order is kept for encoding but ignored by equality.
MetaOrAttrs = Dict[str, Any]
