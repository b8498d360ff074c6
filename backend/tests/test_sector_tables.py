"""Tests for sector terminology and sector dashboard tables."""

import copy

import pytest

from dashboard_config.core.sector_dashboard import (
    ALL_KPI_CARDS,
    ALL_SECTIONS,
    SECTOR_DASHBOARD,
    SectorDashboardConfig,
    is_kpi_visible,
    is_section_visible,
    resolve_dashboard_config,
    validate_dashboard_table,
)
from dashboard_config.core.sector_terminology import (
    BusinessCategory,
    SECTOR_TERMINOLOGY,
    SUPPORTED_LOCALES,
    TERM_KEYS,
    TermKey,
    normalize_locale,
    resolve_terms,
    validate_terminology,
)

CATEGORIES = [c.value for c in BusinessCategory]


# ==================== TERMINOLOGY ====================

class TestLocaleNormalization:

    @pytest.mark.parametrize("tag", ["en", "en-US", "EN-gb", "english"])
    def test_english_family(self, tag):
        assert normalize_locale(tag) == "en"

    @pytest.mark.parametrize("tag", ["es", "es-MX", "fr-FR", "", None, "  "])
    def test_everything_else_is_spanish(self, tag):
        assert normalize_locale(tag) == "es"


class TestResolveTerms:

    @pytest.mark.parametrize("category", CATEGORIES)
    @pytest.mark.parametrize("locale", ["es-MX", "en-US"])
    def test_every_term_present(self, category, locale):
        terms = resolve_terms(category, locale)
        assert set(terms) == set(TERM_KEYS)
        assert all(value.strip() for value in terms.values())

    def test_retail_english_item(self):
        assert resolve_terms("RETAIL", "en-US")["item"] == "Product"
        assert resolve_terms("RETAIL", "es-MX")[TermKey.ITEM.value] == "Producto"

    def test_unknown_category_falls_back_to_food_service(self):
        assert resolve_terms("SPACESHIP", "en") == resolve_terms("FOOD_SERVICE", "en")
        assert resolve_terms(None, None) == resolve_terms("FOOD_SERVICE", "es")

    def test_unsupported_locale_uses_spanish(self):
        assert resolve_terms("HOSPITALITY", "pt-BR") == SECTOR_TERMINOLOGY["HOSPITALITY"]["es"]

    def test_returns_fresh_dict(self):
        terms = resolve_terms("RETAIL", "en")
        terms["item"] = "Widget"
        assert resolve_terms("RETAIL", "en")["item"] == "Product"

    def test_venue_overrides(self):
        terms = resolve_terms(
            "RETAIL",
            "en",
            overrides={"item": " Gadget ", "table": "", "unknownKey": "x", "order": 5},
        )
        assert terms["item"] == "Gadget"
        assert terms["table"] == "Register"
        assert terms["order"] == "Sale"
        assert "unknownKey" not in terms


class TestValidateTerminology:

    def test_shipped_table_valid(self):
        validate_terminology()

    def test_missing_locale_rejected(self):
        table = copy.deepcopy(SECTOR_TERMINOLOGY)
        del table["RETAIL"]["en"]
        with pytest.raises(ValueError):
            validate_terminology(table)

    def test_missing_term_rejected(self):
        table = copy.deepcopy(SECTOR_TERMINOLOGY)
        del table["OTHER"]["es"]["hostPlural"]
        with pytest.raises(ValueError):
            validate_terminology(table)

    def test_blank_term_rejected(self):
        table = copy.deepcopy(SECTOR_TERMINOLOGY)
        table["SERVICES"]["en"]["menu"] = "  "
        with pytest.raises(ValueError):
            validate_terminology(table)

    def test_every_category_and_locale_present(self):
        for category in CATEGORIES:
            assert set(SECTOR_TERMINOLOGY[category]) == set(SUPPORTED_LOCALES)


# ==================== DASHBOARD ====================

class TestResolveDashboardConfig:

    def test_food_service_sees_everything(self):
        config = resolve_dashboard_config("FOOD_SERVICE")
        assert config.kpi_cards == ALL_KPI_CARDS
        assert config.visible_sections == frozenset(ALL_SECTIONS)

    def test_unknown_category_matches_food_service(self):
        assert resolve_dashboard_config("UNKNOWN_CATEGORY") == resolve_dashboard_config("FOOD_SERVICE")
        assert resolve_dashboard_config(None) == resolve_dashboard_config("FOOD_SERVICE")

    def test_retail_omits_kitchen_and_tips(self):
        config = resolve_dashboard_config("RETAIL")
        assert "kitchen-performance" not in config.visible_sections
        assert "tips-over-time" not in config.visible_sections
        assert "product-profitability" in config.visible_sections
        assert "total-tips" not in config.kpi_cards

    @pytest.mark.parametrize("category", CATEGORIES)
    def test_subset_of_food_service(self, category):
        config = resolve_dashboard_config(category)
        assert set(config.kpi_cards) <= set(ALL_KPI_CARDS)
        assert config.visible_sections <= frozenset(ALL_SECTIONS)

    def test_visibility_helpers(self):
        assert is_section_visible("HOSPITALITY", "customer-reviews") is True
        assert is_section_visible("HOSPITALITY", "best-selling-items") is False
        assert is_kpi_visible("ENTERTAINMENT", "table-turnover") is False
        assert is_section_visible("NOPE", "kitchen-performance") is True

    def test_to_dict_orders_sections(self):
        data = resolve_dashboard_config("OTHER").to_dict()
        assert data == {
            "kpi_cards": ["total-sales", "total-orders", "average-ticket"],
            "visible_sections": ["sales-over-time", "payment-methods", "best-selling-items", "peak-hours"],
        }


class TestValidateDashboardTable:

    def test_shipped_table_valid(self):
        validate_dashboard_table()

    def test_unknown_section_rejected(self):
        table = dict(SECTOR_DASHBOARD)
        table["OTHER"] = SectorDashboardConfig(kpi_cards=("total-sales",), visible_sections=frozenset({"weather"}))
        with pytest.raises(ValueError):
            validate_dashboard_table(table)

    def test_food_service_must_be_superset(self):
        table = dict(SECTOR_DASHBOARD)
        table["FOOD_SERVICE"] = SECTOR_DASHBOARD["RETAIL"]
        with pytest.raises(ValueError):
            validate_dashboard_table(table)

    def test_missing_category_rejected(self):
        table = dict(SECTOR_DASHBOARD)
        del table["SERVICES"]
        with pytest.raises(ValueError):
            validate_dashboard_table(table)
