"""Sector terminology and dashboard layout routes.

Both lookups are total: unknown categories get the FOOD_SERVICE tables.
"""

from typing import Optional

from fastapi import APIRouter, Request

from dashboard_config.core.config import settings
from dashboard_config.core.rate_limit import limiter
from dashboard_config.core.sector_dashboard import resolve_dashboard_config
from dashboard_config.core.sector_terminology import normalize_category, normalize_locale, resolve_terms

router = APIRouter()


@router.get("/{category}/terms")
@limiter.limit("120/minute")
def get_sector_terms(request: Request, category: str, locale: Optional[str] = None):
    locale = locale or request.headers.get("accept-language") or settings.default_locale
    return {
        "category": normalize_category(category),
        "locale": normalize_locale(locale),
        "terms": resolve_terms(category, locale),
    }


@router.get("/{category}/dashboard")
@limiter.limit("120/minute")
def get_sector_dashboard(request: Request, category: str):
    return {
        "category": normalize_category(category),
        **resolve_dashboard_config(category).to_dict(),
    }
