"""
White-Label Configuration Service

Single entry point the dashboard shell calls per venue and request:
terminology, dashboard layout, feature set, theme, navigation and view mode
in one ResolvedWhiteLabelConfig.

Resolution is pure; identical inputs give identical output, so callers may
memoize on resolution_cache_key().
"""
import copy
import logging
from typing import Any, Dict, Iterable, List, Optional, Set

from dashboard_config.core.cache import make_cache_key
from dashboard_config.core.feature_registry import lookup
from dashboard_config.core.presets import get_preset
from dashboard_config.core.sector_dashboard import resolve_dashboard_config
from dashboard_config.core.sector_terminology import normalize_category, normalize_locale, resolve_terms
from dashboard_config.core.slugs import to_code, to_slug
from dashboard_config.schemas.white_label import (
    FeatureEnablementRecord,
    NavigationConfig,
    NavigationItemConfig,
    NavigationItemType,
    NavItem,
    ResolvedFeature,
    ResolvedWhiteLabelConfig,
    SectorDashboard,
    VenueRecord,
    ViewMode,
    WhiteLabelModuleRecord,
)
from dashboard_config.services.feature_resolution_service import FeatureResolutionService
from dashboard_config.services.theme_service import ThemeService
from dashboard_config.services.view_mode_service import ViewModeService

logger = logging.getLogger(__name__)


class WhiteLabelService:
    """Aggregate every per-venue resolution into one object."""

    @staticmethod
    def aggregate(
        venue: VenueRecord,
        request_locale: Optional[str],
        overrides: Iterable[FeatureEnablementRecord] = (),
        module: Optional[WhiteLabelModuleRecord] = None,
        request_path: Optional[str] = None,
    ) -> ResolvedWhiteLabelConfig:
        """
        Resolve the dashboard configuration for one venue and one request.

        Terms, dashboard layout and view mode are always resolved. When the
        white-label module is missing or disabled, is_enabled is False and
        theme, features, configs and navigation stay empty.

        Args:
            venue: Venue identity
            request_locale: Locale tag, e.g. "en-US"
            overrides: Venue override records
            module: The venue's white-label module row (None = not purchased)
            request_path: Current path, used to detect the namespace

        Returns:
            ResolvedWhiteLabelConfig
        """
        terms = resolve_terms(venue.business_category, request_locale)
        layout = resolve_dashboard_config(venue.business_category).to_dict()
        dashboard = SectorDashboard(**layout)
        view_mode = ViewModeService.context(request_path, venue.slug)

        if module is None or not module.enabled:
            return ResolvedWhiteLabelConfig(
                is_enabled=False,
                terms=terms,
                dashboard=dashboard,
                view_mode=view_mode,
            )

        preset = get_preset(venue.assigned_preset_name)
        features = FeatureResolutionService.resolve(venue, overrides=overrides)
        theme = ThemeService.compile(ThemeService.merge_theme(module.theme, preset))
        stored_navigation = module.navigation or NavigationConfig()
        navigation = WhiteLabelService.build_navigation(features, venue.slug, stored_navigation)

        return ResolvedWhiteLabelConfig(
            is_enabled=True,
            preset=preset.name if preset is not None else None,
            theme=theme,
            enabled_features=features,
            feature_configs=FeatureResolutionService.resolve_feature_configs(features),
            navigation=navigation,
            navigation_layout=stored_navigation.layout,
            home_path=WhiteLabelService.first_feature_path(navigation),
            terms=terms,
            dashboard=dashboard,
            view_mode=view_mode,
        )

    @staticmethod
    def build_navigation(
        features: Iterable[ResolvedFeature],
        venue_slug: str,
        stored: Optional[NavigationConfig] = None,
    ) -> List[NavItem]:
        """
        Navigation entries for the resolved feature set.

        Stored items come first, sorted by their ``order``. A stored feature
        item only shows when its feature resolved as enabled and may carry a
        custom label or icon; links without a url and groups left without
        children are dropped. Enabled features with no stored item are
        appended in resolution order.

        Feature pages only exist in the white-label namespace, so paths always
        point there regardless of the namespace of the current request.
        """
        _, full_base = ViewModeService.base_paths(ViewMode.WHITELABEL, venue_slug)
        enabled = [feature.code for feature in features]
        placed: Set[str] = set()

        navigation = WhiteLabelService._build_stored_items(
            stored.items if stored is not None else [], set(enabled), placed, full_base
        )
        for code in enabled:
            if code in placed:
                continue
            item = WhiteLabelService._feature_item(code, f"nav-{code}", None, None, len(navigation), full_base)
            if item is not None:
                placed.add(code)
                navigation.append(item)
        return navigation

    @staticmethod
    def _feature_item(
        code: Optional[str],
        item_id: str,
        label: Optional[str],
        icon: Optional[str],
        order: int,
        full_base: str,
    ) -> Optional[NavItem]:
        definition = lookup(code)
        if definition is None:
            return None
        slug = to_slug(code)
        return NavItem(
            id=item_id,
            type=NavigationItemType.FEATURE,
            feature_code=code,
            slug=slug,
            label=label or definition.default_navigation.label,
            icon=icon or definition.default_navigation.icon,
            order=order,
            path=f"{full_base}/{slug}",
        )

    @staticmethod
    def _build_stored_items(
        items: Iterable[NavigationItemConfig],
        enabled: Set[str],
        placed: Set[str],
        full_base: str,
    ) -> List[NavItem]:
        result: List[NavItem] = []
        for item in sorted(items, key=lambda i: i.order):
            order = len(result)
            if item.type == NavigationItemType.FEATURE:
                if item.feature_code not in enabled or item.feature_code in placed:
                    logger.debug("Dropping nav item %s for feature %r", item.id, item.feature_code)
                    continue
                nav = WhiteLabelService._feature_item(
                    item.feature_code, item.id, item.label, item.icon, order, full_base
                )
                if nav is None:
                    continue
                placed.add(item.feature_code)
            elif item.type == NavigationItemType.LINK:
                if not item.url:
                    logger.debug("Dropping link %s without url", item.id)
                    continue
                nav = NavItem(
                    id=item.id, type=item.type, label=item.label, icon=item.icon, order=order, url=item.url
                )
            elif item.type == NavigationItemType.GROUP:
                children = WhiteLabelService._build_stored_items(item.children, enabled, placed, full_base)
                if not children:
                    continue
                nav = NavItem(
                    id=item.id, type=item.type, label=item.label, icon=item.icon, order=order, children=children
                )
            else:
                nav = NavItem(id=item.id, type=item.type, order=order)
            result.append(nav)
        return result

    @staticmethod
    def first_feature_path(navigation: Iterable[NavItem]) -> Optional[str]:
        """Path of the first feature entry, searching groups depth-first."""
        for item in navigation:
            if item.type == NavigationItemType.FEATURE:
                return item.path
            path = WhiteLabelService.first_feature_path(item.children)
            if path:
                return path
        return None

    @staticmethod
    def is_feature_enabled(config: ResolvedWhiteLabelConfig, code: str) -> bool:
        if not config.is_enabled:
            return False
        return any(f.code == code for f in config.enabled_features)

    @staticmethod
    def get_feature_config(config: ResolvedWhiteLabelConfig, code: str) -> Optional[Dict[str, Any]]:
        """Copy of the feature's payload, or None when it is not enabled."""
        if not WhiteLabelService.is_feature_enabled(config, code):
            return None
        return copy.deepcopy(config.feature_configs.get(code, {}))

    @staticmethod
    def find_feature_by_slug(config: ResolvedWhiteLabelConfig, slug: str) -> Optional[ResolvedFeature]:
        """Enabled feature addressed by a URL slug, or None."""
        if not config.is_enabled:
            return None
        code = to_code(slug)
        for feature in config.enabled_features:
            if feature.code == code:
                return feature
        return None

    @staticmethod
    def cache_prefix(venue_id: int) -> str:
        return f"wl:{venue_id}:"

    @staticmethod
    def resolution_cache_key(
        venue: VenueRecord,
        request_locale: Optional[str],
        overrides: Iterable[FeatureEnablementRecord] = (),
        module: Optional[WhiteLabelModuleRecord] = None,
        request_path: Optional[str] = None,
    ) -> str:
        """Key over every input of aggregate(), prefixed by venue id."""
        digest = make_cache_key(
            venue.slug,
            normalize_category(venue.business_category),
            venue.assigned_preset_name,
            [record.model_dump(mode="json") for record in overrides],
            normalize_locale(request_locale),
            module.model_dump(mode="json") if module is not None else None,
            ViewModeService.detect_mode(request_path).value,
        )
        return WhiteLabelService.cache_prefix(venue.id) + digest
