"""Tests for slug -> feature page dispatch."""

import pytest

from dashboard_config.core.feature_registry import list_features, lookup
from dashboard_config.services.feature_dispatcher import (
    FeatureDispatcher,
    build_default_dispatcher,
    feature_dispatcher,
)
from dashboard_config.services.white_label_service import WhiteLabelService


@pytest.fixture
def telecom_config(telecom_venue, enabled_module, commissions_off):
    return WhiteLabelService.aggregate(telecom_venue, "es", overrides=commissions_off, module=enabled_module)


class TestDefaultDispatcher:

    def test_handler_for_every_published_feature(self):
        dispatcher = build_default_dispatcher()
        assert len(dispatcher) == len(list_features())
        assert all(dispatcher.has_handler(f.code) for f in list_features())
        assert not dispatcher.has_handler("AVOQADO_TIPS")

    def test_dispatch_enabled_feature(self, telecom_config):
        page = feature_dispatcher.dispatch(telecom_config, "serialized-stock")
        assert page is not None
        assert page.feature == "SERIALIZED_STOCK"
        assert page.slug == "serialized-stock"
        assert page.component == lookup("SERIALIZED_STOCK").component
        assert page.placeholder is False
        assert page.config["config"]["showIMEI"] is True

    def test_disabled_feature_is_a_miss(self, telecom_config):
        assert feature_dispatcher.dispatch(telecom_config, "avoqado-commissions") is None

    def test_not_in_preset_is_a_miss(self, telecom_config):
        assert feature_dispatcher.dispatch(telecom_config, "appraisals") is None

    def test_unknown_slug_is_a_miss(self, telecom_config):
        assert feature_dispatcher.dispatch(telecom_config, "warp-drive") is None

    def test_module_disabled_is_a_miss(self, telecom_venue):
        config = WhiteLabelService.aggregate(telecom_venue, "es")
        assert feature_dispatcher.dispatch(config, "serialized-stock") is None


class TestRegistration:

    def test_placeholder_for_enabled_feature_without_handler(self, telecom_config):
        page = FeatureDispatcher().dispatch(telecom_config, "stores-analysis")
        assert page is not None
        assert page.placeholder is True
        assert page.component is None

    def test_custom_handler(self, telecom_config):
        dispatcher = FeatureDispatcher()
        calls = []

        def handler(definition, payload):
            calls.append((definition.code, payload))
            return {"component": "pages/custom/Stock", "config": {"wrapped": payload}}

        dispatcher.register("SERIALIZED_STOCK", handler)
        page = dispatcher.dispatch(telecom_config, "serialized-stock")
        assert page.component == "pages/custom/Stock"
        assert calls[0][0] == "SERIALIZED_STOCK"
        assert page.config["wrapped"]["enabled"] is True

    def test_register_unpublished_code_rejected(self):
        with pytest.raises(ValueError):
            FeatureDispatcher().register("AVOQADO_TIPS", lambda d, p: {})
