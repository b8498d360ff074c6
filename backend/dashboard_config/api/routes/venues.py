"""Per-venue white-label routes."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request, status

from dashboard_config.core.cache import cache
from dashboard_config.core.config import settings
from dashboard_config.core.feature_registry import lookup
from dashboard_config.core.rate_limit import limiter
from dashboard_config.core.slugs import to_code, to_slug
from dashboard_config.db.session import DbSession
from dashboard_config.schemas.white_label import (
    DispatchedFeature,
    FeatureOverrideResponse,
    FeatureOverrideUpdate,
    ResolvedWhiteLabelConfig,
    VenueRecord,
    ViewMode,
)
from dashboard_config.services.feature_dispatcher import feature_dispatcher
from dashboard_config.services.venue_repository import VenueRepository
from dashboard_config.services.view_mode_service import ViewModeService
from dashboard_config.services.white_label_service import WhiteLabelService

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_venue_or_404(db, slug: str) -> VenueRecord:
    venue = VenueRepository.load_venue(db, slug)
    if venue is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Venue '{slug}' not found",
        )
    return venue


def _request_locale(request: Request, locale: Optional[str]) -> str:
    if locale:
        return locale
    header = request.headers.get("accept-language", "")
    # "en-US,en;q=0.9" -> "en-US"
    first = header.split(",", 1)[0].split(";", 1)[0].strip()
    return first or settings.default_locale


def _resolve(db, venue: VenueRecord, locale: str, path: Optional[str]) -> ResolvedWhiteLabelConfig:
    overrides = VenueRepository.load_overrides(db, venue.id)
    module = VenueRepository.load_white_label_module(db, venue.id)

    key = WhiteLabelService.resolution_cache_key(venue, locale, overrides, module, path)
    cached = cache.get(key)
    if cached is not None:
        return cached

    config = WhiteLabelService.aggregate(
        venue, locale, overrides=overrides, module=module, request_path=path
    )
    cache.set(key, config, ttl_seconds=settings.resolution_cache_ttl_seconds)
    return config


@router.get("/{slug}/white-label", response_model=ResolvedWhiteLabelConfig)
@limiter.limit("120/minute")
def get_white_label_config(
    request: Request,
    db: DbSession,
    slug: str,
    path: Optional[str] = Query(None, description="Current dashboard path"),
    locale: Optional[str] = Query(None, description="Locale tag, e.g. en-US"),
):
    """Resolved dashboard configuration for a venue."""
    venue = _get_venue_or_404(db, slug)
    return _resolve(db, venue, _request_locale(request, locale), path)


@router.get("/{slug}/white-label/features/{feature_slug}", response_model=DispatchedFeature)
@limiter.limit("120/minute")
def dispatch_feature(
    request: Request,
    db: DbSession,
    slug: str,
    feature_slug: str,
    locale: Optional[str] = None,
):
    """Page to mount for a feature slug under the venue's white-label dashboard."""
    venue = _get_venue_or_404(db, slug)
    _, full_base = ViewModeService.base_paths(ViewMode.WHITELABEL, venue.slug)
    config = _resolve(db, venue, _request_locale(request, locale), f"{full_base}/{feature_slug}")

    dispatched = feature_dispatcher.dispatch(config, feature_slug)
    if dispatched is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Feature '{feature_slug}' is not enabled for venue '{slug}'",
        )
    return dispatched


@router.get("/{slug}/view-mode")
@limiter.limit("120/minute")
def get_view_mode(
    request: Request,
    db: DbSession,
    slug: str,
    path: str = Query(..., description="Current dashboard path"),
    target: Optional[ViewMode] = None,
):
    """Current namespace for ``path`` and, with ``target``, where switching leads."""
    venue = _get_venue_or_404(db, slug)
    result = {"context": ViewModeService.context(path, venue.slug)}
    if target is not None:
        result["switch"] = ViewModeService.switch_mode(path, venue.slug, target)
    return result


@router.put("/{slug}/features/{feature_slug}", response_model=FeatureOverrideResponse)
@limiter.limit("30/minute")
def upsert_feature_override(
    request: Request,
    db: DbSession,
    slug: str,
    feature_slug: str,
    data: FeatureOverrideUpdate,
):
    """Enable or disable a feature for one venue, overriding its preset."""
    venue = _get_venue_or_404(db, slug)
    code = to_code(feature_slug)
    if lookup(code) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Feature '{feature_slug}' not found",
        )

    row = VenueRepository.upsert_override(
        db,
        venue.id,
        code,
        enabled=data.enabled,
        source=data.source.value if data.source is not None else None,
        config_override=data.config_override,
    )
    cache.clear_prefix(WhiteLabelService.cache_prefix(venue.id))

    return FeatureOverrideResponse(
        venue_id=venue.id,
        feature_code=row.feature_code,
        slug=to_slug(row.feature_code),
        enabled=row.enabled,
        source=row.source,
        config_override=row.config_override,
    )
