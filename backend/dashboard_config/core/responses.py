"""Response envelopes.

Catalog list endpoints return ``{"items": [...], "total": <int>}``; single
objects are returned bare.
"""

from typing import Optional


def list_response(items: list, total: Optional[int] = None) -> dict:
    """Wrap ``items``; ``total`` defaults to ``len(items)``."""
    return {
        "items": items,
        "total": len(items) if total is None else total,
    }
