"""Feature catalog routes."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request, status

from dashboard_config.core.feature_registry import (
    FEATURE_CATEGORIES,
    category_counts,
    feature_to_dict,
    list_features,
    lookup,
)
from dashboard_config.core.rate_limit import limiter
from dashboard_config.core.responses import list_response
from dashboard_config.core.slugs import to_code, to_slug

router = APIRouter()


def _with_slug(feature) -> dict:
    data = feature_to_dict(feature)
    data["slug"] = to_slug(feature.code)
    return data


@router.get("/")
@limiter.limit("120/minute")
def list_catalog(
    request: Request,
    category: Optional[str] = Query(None, description="analytics, sales, inventory, team or custom"),
    source: Optional[str] = Query(None, description="avoqado_core or module_specific"),
):
    """List publishable features, optionally filtered."""
    return list_response([_with_slug(f) for f in list_features(category, source)])


@router.get("/categories")
@limiter.limit("120/minute")
def list_categories(request: Request):
    """Feature categories with UI metadata and feature counts."""
    counts = category_counts()
    items = [
        {"category": category.value, "count": counts[category.value], **meta}
        for category, meta in FEATURE_CATEGORIES.items()
    ]
    return list_response(items)


@router.get("/{slug}")
@limiter.limit("120/minute")
def get_feature(request: Request, slug: str):
    """Get one feature by URL slug."""
    feature = lookup(to_code(slug))
    if feature is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Feature '{slug}' not found",
        )
    return _with_slug(feature)
