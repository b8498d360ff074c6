"""Tests for the per-venue configuration aggregate."""

from dashboard_config.core.feature_registry import FeatureSource
from dashboard_config.core.sector_terminology import resolve_terms
from dashboard_config.schemas.white_label import (
    FeatureEnablementRecord,
    NavigationConfig,
    NavigationItemConfig,
    NavigationItemType,
    NavigationLayout,
    ResolvedFeature,
    VenueRecord,
    ViewMode,
    WhiteLabelModuleRecord,
)
from dashboard_config.services.theme_service import DEFAULT_BRAND_NAME
from dashboard_config.services.white_label_service import WhiteLabelService


class TestAggregate:

    def test_telecom_retail_english_scenario(self, telecom_venue, enabled_module, commissions_off):
        config = WhiteLabelService.aggregate(
            telecom_venue, "en-US", overrides=commissions_off, module=enabled_module
        )
        codes = [f.code for f in config.enabled_features]

        assert config.is_enabled is True
        assert config.preset == "telecom"
        assert "AVOQADO_COMMISSIONS" not in codes
        assert "SERIALIZED_STOCK" in codes
        assert config.feature_configs["SERIALIZED_STOCK"]["config"]["showIMEI"] is True
        assert config.terms["item"] == "Product"
        assert "kitchen-performance" not in config.dashboard.visible_sections
        assert "tips-over-time" not in config.dashboard.visible_sections

    def test_module_theme_compiled(self, telecom_venue, enabled_module):
        config = WhiteLabelService.aggregate(telecom_venue, "es-MX", module=enabled_module)
        assert config.theme["--wl-primary"] == "#ff5500"
        assert config.theme["--wl-brand-name"] == "PlayTelecom"
        assert config.theme["--wl-logo"].startswith('url("https://')

    def test_preset_theme_defaults_when_module_has_no_theme(self, telecom_venue):
        config = WhiteLabelService.aggregate(telecom_venue, "es", module=WhiteLabelModuleRecord(enabled=True))
        assert config.theme["--wl-primary"] == "#0055ff"
        assert config.theme["--wl-brand-name"] == "Telecom Dashboard"

    def test_navigation_follows_resolution_order(self, telecom_venue, enabled_module):
        config = WhiteLabelService.aggregate(telecom_venue, "es", module=enabled_module)
        assert [n.feature_code for n in config.navigation] == [f.code for f in config.enabled_features]
        first = config.navigation[0]
        assert first.id == "nav-COMMAND_CENTER"
        assert first.type == "feature"
        assert first.slug == "command-center"
        assert first.label == "Centro de Comando"
        assert first.icon == "LayoutDashboard"
        assert first.order == 0
        assert first.path == "/wl/venues/playtelecom-centro/command-center"
        assert [n.order for n in config.navigation] == list(range(len(config.navigation)))
        assert config.home_path == first.path

    def test_navigation_points_at_white_label_namespace(self, telecom_venue, enabled_module):
        config = WhiteLabelService.aggregate(
            telecom_venue, "es", module=enabled_module, request_path="/venues/playtelecom-centro/home"
        )
        assert config.view_mode.mode == ViewMode.TRADITIONAL
        assert all(n.path.startswith("/wl/venues/playtelecom-centro/") for n in config.navigation)

    def test_view_mode_from_request_path(self, telecom_venue, enabled_module):
        config = WhiteLabelService.aggregate(
            telecom_venue, "es", module=enabled_module, request_path="/wl/venues/playtelecom-centro/stores"
        )
        assert config.view_mode.mode == ViewMode.WHITELABEL
        assert config.view_mode.full_base_path == "/wl/venues/playtelecom-centro"


class TestModuleDisabled:

    def test_missing_module(self, telecom_venue):
        config = WhiteLabelService.aggregate(telecom_venue, "en-US")
        assert config.is_enabled is False
        assert config.enabled_features == []
        assert config.feature_configs == {}
        assert config.navigation == []
        assert config.theme == {}
        assert config.preset is None
        assert config.home_path is None
        # Sector data is still resolved
        assert config.terms == resolve_terms("RETAIL", "en")
        assert config.dashboard.kpi_cards == ["total-sales", "total-orders", "average-ticket"]

    def test_disabled_module_with_theme(self, telecom_venue, enabled_module):
        module = enabled_module.model_copy(update={"enabled": False})
        config = WhiteLabelService.aggregate(telecom_venue, "es", module=module)
        assert config.is_enabled is False
        assert config.theme == {}

    def test_no_preset_no_overrides_still_enabled(self, bare_venue, enabled_module):
        """is_enabled reflects the module flag, not the feature count."""
        config = WhiteLabelService.aggregate(bare_venue, "es", module=enabled_module)
        assert config.is_enabled is True
        assert config.enabled_features == []
        assert config.navigation == []
        assert config.home_path is None

    def test_bare_venue_gets_food_service_tables(self, bare_venue):
        config = WhiteLabelService.aggregate(bare_venue, None)
        assert config.terms["item"] == "Platillo"
        assert "kitchen-performance" in config.dashboard.visible_sections


class TestHelpers:

    def test_is_feature_enabled(self, telecom_venue, enabled_module, commissions_off):
        config = WhiteLabelService.aggregate(telecom_venue, "es", overrides=commissions_off, module=enabled_module)
        assert WhiteLabelService.is_feature_enabled(config, "SALES_REPORT") is True
        assert WhiteLabelService.is_feature_enabled(config, "AVOQADO_COMMISSIONS") is False
        assert WhiteLabelService.is_feature_enabled(config, "NOPE") is False

    def test_is_feature_enabled_false_when_module_off(self, telecom_venue):
        config = WhiteLabelService.aggregate(telecom_venue, "es")
        assert WhiteLabelService.is_feature_enabled(config, "SALES_REPORT") is False

    def test_get_feature_config_returns_copy(self, telecom_venue, enabled_module):
        config = WhiteLabelService.aggregate(telecom_venue, "es", module=enabled_module)
        payload = WhiteLabelService.get_feature_config(config, "SERIALIZED_STOCK")
        payload["config"]["showIMEI"] = False
        assert config.feature_configs["SERIALIZED_STOCK"]["config"]["showIMEI"] is True
        assert WhiteLabelService.get_feature_config(config, "APPRAISALS") is None

    def test_find_feature_by_slug(self, telecom_venue, enabled_module):
        config = WhiteLabelService.aggregate(telecom_venue, "es", module=enabled_module)
        feature = WhiteLabelService.find_feature_by_slug(config, "promoters-audit")
        assert feature is not None
        assert feature.code == "PROMOTERS_AUDIT"
        assert WhiteLabelService.find_feature_by_slug(config, "appraisals") is None


class TestCacheKey:

    def test_identical_inputs_identical_key(self, telecom_venue, enabled_module, commissions_off):
        a = WhiteLabelService.resolution_cache_key(telecom_venue, "en-US", commissions_off, enabled_module)
        b = WhiteLabelService.resolution_cache_key(telecom_venue, "en-GB", commissions_off, enabled_module)
        assert a == b
        assert a.startswith("wl:1:")

    def test_any_input_change_changes_key(self, telecom_venue, enabled_module, commissions_off):
        base = WhiteLabelService.resolution_cache_key(telecom_venue, "en", commissions_off, enabled_module)
        assert base != WhiteLabelService.resolution_cache_key(telecom_venue, "es", commissions_off, enabled_module)
        assert base != WhiteLabelService.resolution_cache_key(telecom_venue, "en", [], enabled_module)
        assert base != WhiteLabelService.resolution_cache_key(telecom_venue, "en", commissions_off, None)
        assert base != WhiteLabelService.resolution_cache_key(
            telecom_venue, "en", commissions_off, enabled_module, request_path="/wl/venues/playtelecom-centro"
        )
        other = telecom_venue.model_copy(update={"assigned_preset_name": "jewelry"})
        assert base != WhiteLabelService.resolution_cache_key(other, "en", commissions_off, enabled_module)

    def test_aggregate_is_deterministic(self, telecom_venue, enabled_module, commissions_off):
        first = WhiteLabelService.aggregate(telecom_venue, "en-US", commissions_off, enabled_module)
        second = WhiteLabelService.aggregate(telecom_venue, "en-US", commissions_off, enabled_module)
        assert first.model_dump_json() == second.model_dump_json()


def test_override_only_venue_navigation():
    venue = VenueRecord(id=3, slug="joyeria-sol", business_category="RETAIL")
    overrides = [
        FeatureEnablementRecord(feature_code="APPRAISALS", enabled=True),
        FeatureEnablementRecord(feature_code="GHOST_FEATURE", enabled=True),
    ]
    config = WhiteLabelService.aggregate(venue, "es", overrides, WhiteLabelModuleRecord(enabled=True))
    assert [n.id for n in config.navigation] == ["nav-APPRAISALS"]
    assert config.theme["--wl-brand-name"] == DEFAULT_BRAND_NAME


class TestStoredNavigation:
    """Custom navigation items stored on the white-label module."""

    SLUG = "playtelecom-centro"

    @staticmethod
    def _features(*codes):
        return [ResolvedFeature(code=code, source=FeatureSource.AVOQADO_CORE) for code in codes]

    def test_no_stored_items_lists_features(self):
        nav = WhiteLabelService.build_navigation(self._features("AVOQADO_MENU", "AVOQADO_TEAM"), self.SLUG)
        assert [n.id for n in nav] == ["nav-AVOQADO_MENU", "nav-AVOQADO_TEAM"]
        assert all(n.type == NavigationItemType.FEATURE for n in nav)

    def test_stored_items_first_then_remaining_features(self):
        stored = NavigationConfig(items=[
            NavigationItemConfig(id="help", type="link", label="Help", url="https://help.example.com", order=2),
            NavigationItemConfig(id="team", feature_code="AVOQADO_TEAM", label="Crew", order=0),
            NavigationItemConfig(id="sep", type="divider", order=1),
        ])
        nav = WhiteLabelService.build_navigation(
            self._features("AVOQADO_MENU", "AVOQADO_TEAM"), self.SLUG, stored
        )
        assert [n.id for n in nav] == ["team", "sep", "help", "nav-AVOQADO_MENU"]
        assert [n.order for n in nav] == [0, 1, 2, 3]
        assert nav[0].label == "Crew"
        assert nav[0].path == f"/wl/venues/{self.SLUG}/avoqado-team"
        assert nav[2].url == "https://help.example.com"
        assert nav[2].path is None

    def test_stored_item_for_disabled_feature_dropped(self):
        stored = NavigationConfig(items=[
            NavigationItemConfig(id="stock", feature_code="SERIALIZED_STOCK", order=0),
            NavigationItemConfig(id="ghost", feature_code="GHOST_FEATURE", order=1),
            NavigationItemConfig(id="broken", type="link", order=2),
        ])
        nav = WhiteLabelService.build_navigation(self._features("AVOQADO_MENU"), self.SLUG, stored)
        assert [n.id for n in nav] == ["nav-AVOQADO_MENU"]

    def test_group_children(self):
        stored = NavigationConfig(items=[
            NavigationItemConfig(
                id="ops",
                type="group",
                label="Operations",
                children=[
                    NavigationItemConfig(id="team", feature_code="AVOQADO_TEAM", order=1),
                    NavigationItemConfig(id="menu", feature_code="AVOQADO_MENU", order=0),
                    NavigationItemConfig(id="stock", feature_code="SERIALIZED_STOCK", order=2),
                ],
            ),
            NavigationItemConfig(id="empty", type="group", children=[
                NavigationItemConfig(id="stock2", feature_code="SERIALIZED_STOCK"),
            ]),
        ])
        nav = WhiteLabelService.build_navigation(
            self._features("AVOQADO_MENU", "AVOQADO_TEAM", "AVOQADO_REVIEWS"), self.SLUG, stored
        )
        assert [n.id for n in nav] == ["ops", "nav-AVOQADO_REVIEWS"]
        assert [c.id for c in nav[0].children] == ["menu", "team"]
        assert WhiteLabelService.first_feature_path(nav) == f"/wl/venues/{self.SLUG}/avoqado-menu"

    def test_feature_listed_once(self):
        stored = NavigationConfig(items=[
            NavigationItemConfig(id="a", feature_code="AVOQADO_MENU", order=0),
            NavigationItemConfig(id="b", feature_code="AVOQADO_MENU", order=1),
        ])
        nav = WhiteLabelService.build_navigation(self._features("AVOQADO_MENU"), self.SLUG, stored)
        assert [n.id for n in nav] == ["a"]

    def test_aggregate_uses_module_navigation(self, telecom_venue, enabled_module):
        enabled_module.navigation = NavigationConfig(
            layout="topnav",
            items=[NavigationItemConfig(id="sep", type="divider", order=0)],
        )
        config = WhiteLabelService.aggregate(telecom_venue, "es", module=enabled_module)
        assert config.navigation_layout == NavigationLayout.TOPNAV
        assert config.navigation[0].type == NavigationItemType.DIVIDER
        assert config.home_path == config.navigation[1].path

    def test_layout_defaults_to_sidebar(self, telecom_venue, enabled_module):
        config = WhiteLabelService.aggregate(telecom_venue, "es", module=enabled_module)
        assert config.navigation_layout == NavigationLayout.SIDEBAR
