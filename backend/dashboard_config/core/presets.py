"""
White-label presets.

A preset bundles enabled features, per-feature configuration and theme
defaults for a business archetype. ``custom`` is the "start from scratch"
sentinel and is always empty. Presets are read-only; creating or editing
them belongs to the provisioning workflow, not to this package.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from dashboard_config.core.feature_registry import FEATURE_CATALOG, FeatureSource


CUSTOM_PRESET = "custom"


@dataclass(frozen=True)
class EnabledFeature:
    code: str
    source: FeatureSource


@dataclass(frozen=True)
class ThemeDefaults:
    primary_color: Optional[str] = None
    brand_name: Optional[str] = None


@dataclass(frozen=True)
class Preset:
    name: str
    display_name: str
    description: str
    theme_defaults: ThemeDefaults
    enabled_features: Tuple[EnabledFeature, ...] = ()
    feature_configs: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @property
    def feature_codes(self) -> List[str]:
        return [ef.code for ef in self.enabled_features]


def _core(code: str) -> EnabledFeature:
    return EnabledFeature(code, FeatureSource.AVOQADO_CORE)


def _module(code: str) -> EnabledFeature:
    return EnabledFeature(code, FeatureSource.MODULE_SPECIFIC)


PRESETS: Dict[str, Preset] = {
    "telecom": Preset(
        name="telecom",
        display_name="Telecom",
        description="Venta de equipos y líneas con promotores de campo e inventario serializado",
        theme_defaults=ThemeDefaults(primary_color="#0055FF", brand_name="Telecom Dashboard"),
        enabled_features=(
            _module("COMMAND_CENTER"),
            _module("SERIALIZED_STOCK"),
            _module("PROMOTERS_AUDIT"),
            _module("STORES_ANALYSIS"),
            _module("MANAGERS_DASHBOARD"),
            _module("SALES_REPORT"),
            _core("AVOQADO_TEAM"),
            _core("AVOQADO_COMMISSIONS"),
            _core("AVOQADO_REPORTS"),
        ),
        feature_configs={
            "COMMAND_CENTER": {
                "enabled": True,
                "config": {"refreshInterval": 30, "showRealtimeMetrics": True, "showMap": True},
            },
            "SERIALIZED_STOCK": {
                "enabled": True,
                "config": {
                    "showIMEI": True,
                    "lowStockThreshold": 5,
                    "requireSerialOnSale": True,
                    "trackWarranty": True,
                },
            },
            "PROMOTERS_AUDIT": {
                "enabled": True,
                "config": {"trackLocation": True, "requireDailyCheckIn": True, "photoRequired": True},
            },
            "AVOQADO_COMMISSIONS": {
                "enabled": True,
                "config": {"payoutFrequency": "biweekly", "requireApproval": True},
            },
        },
    ),
    "jewelry": Preset(
        name="jewelry",
        display_name="Joyería",
        description="Avalúos, consignación e inventario para joyerías",
        theme_defaults=ThemeDefaults(primary_color="#B8860B", brand_name="Joyería"),
        enabled_features=(
            _core("AVOQADO_DASHBOARD"),
            _module("APPRAISALS"),
            _module("CONSIGNMENT"),
            _core("AVOQADO_INVENTORY"),
            _core("AVOQADO_CUSTOMERS"),
            _core("AVOQADO_TEAM"),
            _core("AVOQADO_COMMISSIONS"),
            _core("AVOQADO_REPORTS"),
        ),
        feature_configs={
            "APPRAISALS": {
                "enabled": True,
                "config": {"requireCertificate": True, "defaultCurrency": "MXN", "trackGoldPrice": True},
            },
            "CONSIGNMENT": {
                "enabled": True,
                "config": {"defaultCommissionRate": 25, "autoRenewDays": 60},
            },
            "AVOQADO_COMMISSIONS": {
                "enabled": True,
                "config": {"payoutFrequency": "monthly", "requireApproval": True},
            },
        },
    ),
    "retail": Preset(
        name="retail",
        display_name="Retail",
        description="Tiendas con catálogo de productos, clientes frecuentes y promociones",
        theme_defaults=ThemeDefaults(primary_color="#16A34A", brand_name="Retail"),
        enabled_features=(
            _core("AVOQADO_DASHBOARD"),
            _core("AVOQADO_ORDERS"),
            _core("AVOQADO_PAYMENTS"),
            _core("AVOQADO_INVENTORY"),
            _core("AVOQADO_CUSTOMERS"),
            _core("AVOQADO_PROMOTIONS"),
            _core("AVOQADO_LOYALTY"),
            _core("AVOQADO_REPORTS"),
        ),
        feature_configs={
            "AVOQADO_INVENTORY": {
                "enabled": True,
                "config": {"lowStockAlerts": True, "trackWaste": False},
            },
            "AVOQADO_LOYALTY": {
                "enabled": True,
                "config": {"pointsPerDollar": 1, "redemptionRate": 100, "enableExpiration": True},
            },
        },
    ),
    CUSTOM_PRESET: Preset(
        name=CUSTOM_PRESET,
        display_name="Personalizado",
        description="Empieza desde cero y elige cada feature manualmente",
        theme_defaults=ThemeDefaults(),
    ),
}


def validate_presets(presets: Dict[str, Preset] = None) -> None:
    """Assert preset integrity. Raises ValueError on a malformed preset."""
    presets = PRESETS if presets is None else presets
    for key, preset in presets.items():
        if key != preset.name:
            raise ValueError(f"Preset key {key!r} does not match name {preset.name!r}")
        codes = preset.feature_codes
        if len(codes) != len(set(codes)):
            raise ValueError(f"Preset {preset.name} lists a feature twice")
        for code in codes:
            if code not in FEATURE_CATALOG:
                raise ValueError(f"Preset {preset.name} enables unknown feature {code}")
        for code in preset.feature_configs:
            if code not in codes:
                raise ValueError(f"Preset {preset.name} configures {code} without enabling it")
    custom = presets.get(CUSTOM_PRESET)
    if custom is not None and (custom.enabled_features or custom.feature_configs):
        raise ValueError("The custom preset must stay empty")


validate_presets()


def get_preset(name: Optional[str]) -> Optional[Preset]:
    """Preset by name, or None for unknown names."""
    if not name:
        return None
    return PRESETS.get(name)


def list_presets() -> List[Preset]:
    return list(PRESETS.values())


def list_business_presets() -> List[Preset]:
    """All presets except the empty ``custom`` sentinel."""
    return [p for p in PRESETS.values() if p.name != CUSTOM_PRESET]


def preset_to_dict(preset: Preset) -> Dict[str, Any]:
    return {
        "name": preset.name,
        "display_name": preset.display_name,
        "description": preset.description,
        "theme_defaults": {
            "primary_color": preset.theme_defaults.primary_color,
            "brand_name": preset.theme_defaults.brand_name,
        },
        "enabled_features": [
            {"code": ef.code, "source": ef.source.value} for ef in preset.enabled_features
        ],
        "feature_configs": preset.feature_configs,
    }
