"""Feature code <-> URL slug codec.

    SERIALIZED_STOCK  <->  serialized-stock

The mapping is part of every saved bookmark and external link, so it must
never change. Codes are not checked against the registry here.
"""

from typing import Optional


def to_slug(code: Optional[str]) -> str:
    """Upper snake case code -> lower kebab case URL segment."""
    if not code:
        return ""
    return code.strip().lower().replace("_", "-")


def to_code(slug: Optional[str]) -> str:
    """Exact inverse of to_slug(). Unknown slugs decode to unknown codes."""
    if not slug:
        return ""
    return slug.strip().upper().replace("-", "_")
