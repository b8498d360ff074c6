"""
Feature Registry - central catalog of every feature a white-label dashboard
can publish.

Features are tagged by source:
- avoqado_core: reusable platform features (Commissions, Reports, ...)
- module_specific: features sold with a specific module (telecom, jewelry)

Codes are stable forever. A feature that is withdrawn is marked ``retired``
instead of being deleted, because historical enablement records still
reference it. Retired codes are invisible to ``lookup``.

Usage:
    from dashboard_config.core.feature_registry import lookup

    feature = lookup("SERIALIZED_STOCK")
    if feature is None:
        # unknown or retired code: drop it
        ...
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple


class FeatureCategory(str, Enum):
    """Grouping tag used to organize features in the UI."""
    ANALYTICS = "analytics"
    SALES = "sales"
    INVENTORY = "inventory"
    TEAM = "team"
    CUSTOM = "custom"


class FeatureSource(str, Enum):
    """Where a feature comes from."""
    AVOQADO_CORE = "avoqado_core"
    MODULE_SPECIFIC = "module_specific"


@dataclass(frozen=True)
class NavigationDefaults:
    """Default sidebar entry for a feature."""
    label: str
    icon: str           # lucide icon identifier
    route: str = ""     # default route fragment ("" = index)


@dataclass(frozen=True)
class FeatureDefinition:
    """Immutable catalog entry."""
    code: str
    name: str
    description: str
    category: FeatureCategory
    source: FeatureSource
    component: str                              # page import path for the dispatcher
    default_navigation: NavigationDefaults
    routes: Tuple[str, ...] = ()
    config_schema: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    dependencies: Tuple[str, ...] = ()
    retired: bool = False


def _bool(default: bool) -> Dict[str, Any]:
    return {"type": "boolean", "default": default}


def _number(default: float, minimum: float = None, maximum: float = None) -> Dict[str, Any]:
    prop: Dict[str, Any] = {"type": "number", "default": default}
    if minimum is not None:
        prop["minimum"] = minimum
    if maximum is not None:
        prop["maximum"] = maximum
    return prop


def _choice(default: str, options: List[str]) -> Dict[str, Any]:
    return {"type": "string", "enum": list(options), "default": default}


def _array(default: List[str]) -> Dict[str, Any]:
    return {"type": "array", "default": list(default)}


# =============================================================================
# AVOQADO CORE FEATURES
# =============================================================================

def _build_core_features() -> List[FeatureDefinition]:
    """Reusable features available to every white-label dashboard."""
    core = FeatureSource.AVOQADO_CORE
    return [
        FeatureDefinition(
            code="AVOQADO_DASHBOARD",
            name="Dashboard",
            description="Panel principal con métricas de ventas, órdenes y rendimiento del día",
            category=FeatureCategory.ANALYTICS,
            source=core,
            component="pages/Home",
            routes=("",),
            config_schema={
                "showQuickActions": _bool(True),
                "showRecentOrders": _bool(True),
            },
            default_navigation=NavigationDefaults("Dashboard", "LayoutDashboard"),
        ),
        FeatureDefinition(
            code="AVOQADO_ORDERS",
            name="Órdenes",
            description="Gestión de órdenes, historial y detalles de transacciones",
            category=FeatureCategory.SALES,
            source=core,
            component="pages/Order/Orders",
            routes=("orders", "orders/:orderId"),
            config_schema={
                "showCancelled": _bool(True),
                "defaultDateRange": _choice("today", ["today", "week", "month"]),
            },
            default_navigation=NavigationDefaults("Órdenes", "ClipboardList", "orders"),
        ),
        FeatureDefinition(
            code="AVOQADO_PAYMENTS",
            name="Pagos",
            description="Historial de pagos, métodos de pago y detalles de transacciones",
            category=FeatureCategory.SALES,
            source=core,
            component="pages/Payment/Payments",
            routes=("payments", "payments/:paymentId"),
            config_schema={
                "showRefunds": _bool(True),
                "groupByMethod": _bool(False),
            },
            default_navigation=NavigationDefaults("Pagos", "CreditCard", "payments"),
        ),
        FeatureDefinition(
            code="AVOQADO_MENU",
            name="Menú",
            description="Gestión de productos, categorías, modificadores y precios",
            category=FeatureCategory.INVENTORY,
            source=core,
            component="pages/Menu/Menu",
            routes=("menu", "menu/products", "menu/categories", "menu/modifiers"),
            config_schema={
                "showPrices": _bool(True),
                "allowModifiers": _bool(True),
            },
            default_navigation=NavigationDefaults("Menú", "UtensilsCrossed", "menu"),
        ),
        FeatureDefinition(
            code="AVOQADO_INVENTORY",
            name="Inventario",
            description="Control de stock, ingredientes, recetas y alertas de inventario",
            category=FeatureCategory.INVENTORY,
            source=core,
            component="pages/Inventory/Inventory",
            routes=("inventory", "inventory/ingredients", "inventory/recipes"),
            config_schema={
                "lowStockAlerts": _bool(True),
                "trackWaste": _bool(False),
            },
            default_navigation=NavigationDefaults("Inventario", "Warehouse", "inventory"),
        ),
        FeatureDefinition(
            code="AVOQADO_TEAM",
            name="Equipo",
            description="Gestión del personal, roles, permisos y horarios",
            category=FeatureCategory.TEAM,
            source=core,
            component="pages/Team/Teams",
            routes=("team", "team/:memberId"),
            config_schema={
                "showSchedules": _bool(True),
                "allowRoleEdit": _bool(False),
            },
            default_navigation=NavigationDefaults("Equipo", "Users", "team"),
        ),
        FeatureDefinition(
            code="AVOQADO_CUSTOMERS",
            name="Clientes",
            description="Base de datos de clientes, historial de compras y contacto",
            category=FeatureCategory.SALES,
            source=core,
            component="pages/Customers/Customers",
            routes=("customers", "customers/:customerId"),
            config_schema={
                "showPurchaseHistory": _bool(True),
                "enableLoyalty": _bool(False),
            },
            default_navigation=NavigationDefaults("Clientes", "UserCircle", "customers"),
        ),
        FeatureDefinition(
            code="AVOQADO_TPVS",
            name="Terminales",
            description="Gestión de terminales de punto de venta y dispositivos",
            category=FeatureCategory.ANALYTICS,
            source=core,
            component="pages/Tpv/Tpvs",
            routes=("tpvs", "tpvs/:tpvId"),
            config_schema={
                "showStatus": _bool(True),
                "allowRemoteCommands": _bool(True),
            },
            default_navigation=NavigationDefaults("Terminales", "Smartphone", "tpvs"),
        ),
        FeatureDefinition(
            code="AVOQADO_BALANCE",
            name="Balance",
            description="Balance disponible, historial de depósitos y retiros",
            category=FeatureCategory.ANALYTICS,
            source=core,
            component="pages/AvailableBalance/AvailableBalance",
            routes=("balance",),
            config_schema={
                "showPendingPayouts": _bool(True),
                "showTransactionHistory": _bool(True),
            },
            default_navigation=NavigationDefaults("Balance", "Wallet", "balance"),
        ),
        FeatureDefinition(
            code="AVOQADO_PROMOTIONS",
            name="Promociones",
            description="Descuentos, cupones, promociones especiales y ofertas",
            category=FeatureCategory.SALES,
            source=core,
            component="pages/Promotions/Promotions",
            routes=("promotions", "promotions/discounts", "promotions/coupons"),
            config_schema={
                "enableCoupons": _bool(True),
                "enableAutoPromos": _bool(False),
            },
            default_navigation=NavigationDefaults("Promociones", "Tag", "promotions"),
        ),
        FeatureDefinition(
            code="AVOQADO_ANALYTICS",
            name="Analítica",
            description="Análisis avanzado de ventas, tendencias y métricas del negocio",
            category=FeatureCategory.ANALYTICS,
            source=core,
            component="pages/Analytics/Analytics",
            routes=("analytics",),
            config_schema={
                "showTrends": _bool(True),
                "enableExport": _bool(True),
            },
            default_navigation=NavigationDefaults("Analítica", "TrendingUp", "analytics"),
        ),
        FeatureDefinition(
            code="AVOQADO_SHIFTS",
            name="Turnos",
            description="Control de turnos, apertura y cierre de caja",
            category=FeatureCategory.TEAM,
            source=core,
            component="pages/Shift/Shifts",
            routes=("shifts", "shifts/:shiftId"),
            config_schema={
                "requireCashCount": _bool(True),
                "autoCloseShifts": _bool(False),
            },
            default_navigation=NavigationDefaults("Turnos", "Clock", "shifts"),
        ),
        FeatureDefinition(
            code="AVOQADO_COMMISSIONS",
            name="Comisiones",
            description="Sistema de comisiones para staff con configuración, aprobaciones y pagos",
            category=FeatureCategory.TEAM,
            source=core,
            component="pages/Commissions/CommissionsPage",
            routes=("commissions", "commissions/config/:configId"),
            config_schema={
                "payoutFrequency": _choice("weekly", ["weekly", "biweekly", "monthly"]),
                "requireApproval": _bool(True),
                "autoCalculate": _bool(True),
            },
            default_navigation=NavigationDefaults("Comisiones", "DollarSign", "commissions"),
            dependencies=("AVOQADO_TEAM",),
        ),
        # The tips page was never shipped; kept for historical records.
        FeatureDefinition(
            code="AVOQADO_TIPS",
            name="Propinas",
            description="Gestión de propinas del equipo con distribución configurable",
            category=FeatureCategory.TEAM,
            source=core,
            component="pages/Tips/TipsPage",
            routes=("tips",),
            config_schema={
                "distributionMethod": _choice(
                    "equal", ["equal", "hours_worked", "role_based", "custom"]
                ),
                "includeKitchen": _bool(False),
            },
            default_navigation=NavigationDefaults("Propinas", "HandCoins", "tips"),
            retired=True,
        ),
        FeatureDefinition(
            code="AVOQADO_LOYALTY",
            name="Programa de Lealtad",
            description="Sistema de puntos y recompensas para clientes frecuentes",
            category=FeatureCategory.SALES,
            source=core,
            component="pages/Loyalty/LoyaltySettings",
            routes=("loyalty",),
            config_schema={
                "pointsPerDollar": _number(1),
                "redemptionRate": _number(100),
                "enableExpiration": _bool(False),
            },
            default_navigation=NavigationDefaults("Lealtad", "Award", "loyalty"),
            dependencies=("AVOQADO_CUSTOMERS",),
        ),
        FeatureDefinition(
            code="AVOQADO_REVIEWS",
            name="Reseñas",
            description="Gestión de reseñas de clientes y Google Reviews",
            category=FeatureCategory.SALES,
            source=core,
            component="pages/Review/Reviews",
            routes=("reviews",),
            config_schema={
                "autoRespond": _bool(False),
                "notifyBadReviews": _bool(True),
                "minimumRatingAlert": _number(3, 1, 5),
            },
            default_navigation=NavigationDefaults("Reseñas", "Star", "reviews"),
        ),
        FeatureDefinition(
            code="AVOQADO_REPORTS",
            name="Reportes",
            description="Reportes de ventas, ingresos y análisis del negocio",
            category=FeatureCategory.ANALYTICS,
            source=core,
            component="pages/Reports/SalesSummary",
            routes=("reports", "reports/payments"),
            config_schema={
                "defaultDateRange": _choice("week", ["today", "week", "month", "quarter"]),
                "showComparisons": _bool(True),
            },
            default_navigation=NavigationDefaults("Reportes", "BarChart3", "reports"),
        ),
    ]


# =============================================================================
# MODULE SPECIFIC: TELECOM
# =============================================================================

def _build_telecom_features() -> List[FeatureDefinition]:
    """Field-sales features sold with the telecom module."""
    module = FeatureSource.MODULE_SPECIFIC
    return [
        FeatureDefinition(
            code="COMMAND_CENTER",
            name="Centro de Comando",
            description="Dashboard principal con métricas en tiempo real para operaciones telecom",
            category=FeatureCategory.ANALYTICS,
            source=module,
            component="pages/playtelecom/CommandCenter/CommandCenter",
            routes=("",),
            config_schema={
                "refreshInterval": _number(30, 10, 300),
                "showRealtimeMetrics": _bool(True),
                "showMap": _bool(True),
            },
            default_navigation=NavigationDefaults("Centro de Comando", "LayoutDashboard"),
        ),
        FeatureDefinition(
            code="SERIALIZED_STOCK",
            name="Inventario Serializado",
            description="Control de inventario con números de serie (IMEI, SKU único)",
            category=FeatureCategory.INVENTORY,
            source=module,
            component="pages/playtelecom/Stock/StockControl",
            routes=("stock", "stock/transfers", "stock/adjustments"),
            config_schema={
                "showIMEI": _bool(True),
                "lowStockThreshold": _number(10, 1, 100),
                "requireSerialOnSale": _bool(True),
                "trackWarranty": _bool(True),
            },
            default_navigation=NavigationDefaults("Inventario", "Package", "stock"),
        ),
        FeatureDefinition(
            code="PROMOTERS_AUDIT",
            name="Auditoría de Promotores",
            description="Seguimiento y auditoría de promotores de campo",
            category=FeatureCategory.TEAM,
            source=module,
            component="pages/playtelecom/Promoters/PromotersAudit",
            routes=("promoters", "promoters/:promoterId"),
            config_schema={
                "trackLocation": _bool(True),
                "requireDailyCheckIn": _bool(False),
                "photoRequired": _bool(True),
                "maxVisitsPerDay": _number(10, 1, 50),
            },
            default_navigation=NavigationDefaults("Promotores", "Users", "promoters"),
        ),
        FeatureDefinition(
            code="STORES_ANALYSIS",
            name="Análisis de Tiendas",
            description="Comparativas y métricas de rendimiento por tienda",
            category=FeatureCategory.ANALYTICS,
            source=module,
            component="pages/playtelecom/Stores/StoresAnalysis",
            routes=("stores", "stores/:storeId"),
            config_schema={
                "showRanking": _bool(True),
                "compareMetrics": _array(["revenue", "units", "tickets"]),
                "enableGoals": _bool(True),
            },
            default_navigation=NavigationDefaults("Tiendas", "Store", "stores"),
        ),
        FeatureDefinition(
            code="MANAGERS_DASHBOARD",
            name="Gerentes",
            description="Dashboard de gerentes con métricas de desempeño, metas y equipos supervisados",
            category=FeatureCategory.TEAM,
            source=module,
            component="pages/playtelecom/Managers/ManagersDashboard",
            routes=("managers",),
            config_schema={
                "showGoalProgress": _bool(True),
                "showTeamHealth": _bool(True),
                "enableGoalSetting": _bool(True),
            },
            default_navigation=NavigationDefaults("Gerentes", "UserCog", "managers"),
        ),
        FeatureDefinition(
            code="SALES_REPORT",
            name="Reporte de Ventas",
            description="Reporte de ventas con evidencias de registro y validación de transacciones",
            category=FeatureCategory.ANALYTICS,
            source=module,
            component="pages/playtelecom/Sales/SalesReport",
            routes=("sales",),
            config_schema={
                "requireProofOfSale": _bool(True),
                "autoReconcile": _bool(False),
                "showRevenueCharts": _bool(True),
                "exportFormats": _array(["csv", "xlsx"]),
            },
            default_navigation=NavigationDefaults("Reporte de Ventas", "Receipt", "sales"),
        ),
    ]


# =============================================================================
# MODULE SPECIFIC: JEWELRY
# =============================================================================

def _build_jewelry_features() -> List[FeatureDefinition]:
    module = FeatureSource.MODULE_SPECIFIC
    return [
        FeatureDefinition(
            code="APPRAISALS",
            name="Avalúos",
            description="Sistema de avalúos y valuación de joyería",
            category=FeatureCategory.SALES,
            source=module,
            component="pages/jewelry/Appraisals/AppraisalsPage",
            routes=("appraisals", "appraisals/new", "appraisals/:appraisalId"),
            config_schema={
                "requireCertificate": _bool(True),
                "defaultCurrency": _choice("MXN", ["MXN", "USD"]),
                "trackGoldPrice": _bool(True),
            },
            default_navigation=NavigationDefaults("Avalúos", "Gem", "appraisals"),
        ),
        FeatureDefinition(
            code="CONSIGNMENT",
            name="Consignación",
            description="Gestión de productos en consignación",
            category=FeatureCategory.INVENTORY,
            source=module,
            component="pages/jewelry/Consignment/ConsignmentPage",
            routes=("consignment", "consignment/:itemId"),
            config_schema={
                "defaultCommissionRate": _number(20, 0, 100),
                "autoRenewDays": _number(90),
            },
            default_navigation=NavigationDefaults("Consignación", "Handshake", "consignment"),
        ),
    ]


# =============================================================================
# CATALOG
# =============================================================================

FEATURE_CATALOG: Dict[str, FeatureDefinition] = {
    feature.code: feature
    for feature in (
        _build_core_features()
        + _build_telecom_features()
        + _build_jewelry_features()
    )
}


FEATURE_CATEGORIES: Dict[FeatureCategory, Dict[str, str]] = {
    FeatureCategory.ANALYTICS: {
        "label": "Analítica",
        "icon": "BarChart3",
        "description": "Reportes, dashboards y métricas",
    },
    FeatureCategory.SALES: {
        "label": "Ventas",
        "icon": "ShoppingCart",
        "description": "Gestión de ventas y transacciones",
    },
    FeatureCategory.INVENTORY: {
        "label": "Inventario",
        "icon": "Package",
        "description": "Control de stock y productos",
    },
    FeatureCategory.TEAM: {
        "label": "Equipo",
        "icon": "Users",
        "description": "Gestión de personal y comisiones",
    },
    FeatureCategory.CUSTOM: {
        "label": "Personalizado",
        "icon": "Puzzle",
        "description": "Features personalizados",
    },
}


def validate_catalog(catalog: Dict[str, FeatureDefinition] = None) -> None:
    """Assert catalog integrity. Raises ValueError on a malformed catalog."""
    catalog = FEATURE_CATALOG if catalog is None else catalog
    for key, feature in catalog.items():
        if key != feature.code:
            raise ValueError(f"Catalog key {key!r} does not match code {feature.code!r}")
        if not feature.code or feature.code != feature.code.upper() or "-" in feature.code:
            raise ValueError(f"Feature code {feature.code!r} is not upper snake case")
        for dep in feature.dependencies:
            if dep not in catalog:
                raise ValueError(f"{feature.code} depends on unknown feature {dep}")


validate_catalog()


# =============================================================================
# LOOKUPS
# =============================================================================

def lookup(code: Optional[str]) -> Optional[FeatureDefinition]:
    """Return the publishable definition for ``code``, or None.

    None is the NotFound signal: unknown and retired codes both miss.
    """
    if not code:
        return None
    feature = FEATURE_CATALOG.get(code)
    if feature is None or feature.retired:
        return None
    return feature


def lookup_any(code: Optional[str]) -> Optional[FeatureDefinition]:
    """Like lookup() but also returns retired definitions."""
    if not code:
        return None
    return FEATURE_CATALOG.get(code)


def is_known(code: Optional[str]) -> bool:
    return lookup(code) is not None


def list_features(
    category: Optional[str] = None,
    source: Optional[str] = None,
) -> List[FeatureDefinition]:
    """Publishable features in catalog order, optionally filtered."""
    if category:
        results = features_by_category(category)
    else:
        results = [f for f in FEATURE_CATALOG.values() if not f.retired]
    if source:
        results = [f for f in results if f.source.value == source]
    return results


def features_by_category(category: str) -> List[FeatureDefinition]:
    return [
        f for f in FEATURE_CATALOG.values()
        if not f.retired and f.category.value == category
    ]


def features_by_source(source: str) -> List[FeatureDefinition]:
    return list_features(source=source)


def core_features() -> List[FeatureDefinition]:
    return features_by_source(FeatureSource.AVOQADO_CORE.value)


def module_specific_features() -> List[FeatureDefinition]:
    return features_by_source(FeatureSource.MODULE_SPECIFIC.value)


def category_counts() -> Dict[str, int]:
    """Number of publishable features per category (every category present)."""
    counts = {category.value: 0 for category in FeatureCategory}
    for feature in list_features():
        counts[feature.category.value] += 1
    return counts


def validate_dependencies(codes: Iterable[str]) -> Tuple[bool, List[str]]:
    """Check that every dependency of ``codes`` is itself in ``codes``.

    Returns (valid, missing) with missing codes in first-seen order.
    """
    selected = list(codes)
    missing: List[str] = []
    for code in selected:
        feature = lookup(code)
        if feature is None:
            continue
        for dep in feature.dependencies:
            if dep not in selected and dep not in missing:
                missing.append(dep)
    return len(missing) == 0, missing


def schema_defaults(code: str) -> Dict[str, Any]:
    """Defaults declared in a feature's config schema ({} for unknown codes)."""
    feature = lookup(code)
    if feature is None:
        return {}
    return {
        key: (list(prop["default"]) if isinstance(prop.get("default"), list) else prop["default"])
        for key, prop in feature.config_schema.items()
        if "default" in prop
    }


def feature_to_dict(feature: FeatureDefinition) -> Dict[str, Any]:
    """Convert a definition to a dict for JSON serialization."""
    return {
        "code": feature.code,
        "name": feature.name,
        "description": feature.description,
        "category": feature.category.value,
        "source": feature.source.value,
        "component": feature.component,
        "routes": list(feature.routes),
        "config_schema": feature.config_schema,
        "default_navigation": {
            "label": feature.default_navigation.label,
            "icon": feature.default_navigation.icon,
            "route": feature.default_navigation.route,
        },
        "dependencies": list(feature.dependencies),
        "retired": feature.retired,
    }
