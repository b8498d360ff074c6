"""
Sector-aware home dashboard layout.

Each business category lists the KPI cards and chart sections its home page
renders. Sections are hidden by absence only: retail has no kitchen and no
tips, so those ids are simply not in its set. FOOD_SERVICE is the only
sector wired to see everything, and unknown categories fall back to it.
"""

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Tuple

from dashboard_config.core.sector_terminology import BusinessCategory, DEFAULT_CATEGORY

logger = logging.getLogger(__name__)

ALL_KPI_CARDS: Tuple[str, ...] = (
    "total-sales",
    "total-orders",
    "average-ticket",
    "total-tips",
    "avg-rating",
    "table-turnover",
)

ALL_SECTIONS: Tuple[str, ...] = (
    "sales-over-time",
    "payment-methods",
    "best-selling-items",
    "tips-over-time",
    "kitchen-performance",
    "table-performance",
    "staff-performance",
    "peak-hours",
    "customer-reviews",
    "product-profitability",
)


@dataclass(frozen=True)
class SectorDashboardConfig:
    kpi_cards: Tuple[str, ...]
    visible_sections: FrozenSet[str]

    def to_dict(self) -> Dict[str, List[str]]:
        # Sections in canonical display order, not set order
        return {
            "kpi_cards": list(self.kpi_cards),
            "visible_sections": [s for s in ALL_SECTIONS if s in self.visible_sections],
        }


def _sections(*ids: str) -> FrozenSet[str]:
    return frozenset(ids)


SECTOR_DASHBOARD: Dict[str, SectorDashboardConfig] = {
    BusinessCategory.FOOD_SERVICE.value: SectorDashboardConfig(
        kpi_cards=ALL_KPI_CARDS,
        visible_sections=frozenset(ALL_SECTIONS),
    ),
    BusinessCategory.RETAIL.value: SectorDashboardConfig(
        kpi_cards=("total-sales", "total-orders", "average-ticket"),
        visible_sections=_sections(
            "sales-over-time",
            "payment-methods",
            "best-selling-items",
            "staff-performance",
            "peak-hours",
            "product-profitability",
        ),
    ),
    BusinessCategory.SERVICES.value: SectorDashboardConfig(
        kpi_cards=("total-sales", "total-orders", "average-ticket", "total-tips", "avg-rating"),
        visible_sections=_sections(
            "sales-over-time",
            "payment-methods",
            "best-selling-items",
            "tips-over-time",
            "staff-performance",
            "peak-hours",
            "customer-reviews",
        ),
    ),
    BusinessCategory.HOSPITALITY.value: SectorDashboardConfig(
        kpi_cards=("total-sales", "total-orders", "average-ticket", "total-tips", "avg-rating"),
        visible_sections=_sections(
            "sales-over-time",
            "payment-methods",
            "tips-over-time",
            "staff-performance",
            "peak-hours",
            "customer-reviews",
        ),
    ),
    BusinessCategory.ENTERTAINMENT.value: SectorDashboardConfig(
        kpi_cards=("total-sales", "total-orders", "average-ticket"),
        visible_sections=_sections(
            "sales-over-time",
            "payment-methods",
            "best-selling-items",
            "peak-hours",
            "customer-reviews",
        ),
    ),
    BusinessCategory.OTHER.value: SectorDashboardConfig(
        kpi_cards=("total-sales", "total-orders", "average-ticket"),
        visible_sections=_sections(
            "sales-over-time",
            "payment-methods",
            "best-selling-items",
            "peak-hours",
        ),
    ),
}


def validate_dashboard_table(table: Dict[str, SectorDashboardConfig] = None) -> None:
    """Assert table integrity. Raises ValueError on a malformed table.

    Every category present, only known ids, no repeated KPI, and
    FOOD_SERVICE sees every KPI and every section.
    """
    table = SECTOR_DASHBOARD if table is None else table
    for category in BusinessCategory:
        config = table.get(category.value)
        if config is None:
            raise ValueError(f"Dashboard table missing category {category.value}")
        if len(config.kpi_cards) != len(set(config.kpi_cards)):
            raise ValueError(f"Dashboard {category.value} repeats a KPI card")
        unknown = [k for k in config.kpi_cards if k not in ALL_KPI_CARDS]
        unknown += sorted(s for s in config.visible_sections if s not in ALL_SECTIONS)
        if unknown:
            raise ValueError(f"Dashboard {category.value} has unknown ids {unknown}")

    superset = table[DEFAULT_CATEGORY]
    if set(superset.kpi_cards) != set(ALL_KPI_CARDS) or superset.visible_sections != frozenset(ALL_SECTIONS):
        raise ValueError(f"{DEFAULT_CATEGORY} must see every KPI card and every section")


validate_dashboard_table()


def resolve_dashboard_config(category: Optional[str]) -> SectorDashboardConfig:
    """Dashboard layout for ``category``. Never raises; unknown -> FOOD_SERVICE."""
    if isinstance(category, str) and category in SECTOR_DASHBOARD:
        return SECTOR_DASHBOARD[category]
    logger.debug("Unknown business category %r, using %s dashboard", category, DEFAULT_CATEGORY)
    return SECTOR_DASHBOARD[DEFAULT_CATEGORY]


def is_section_visible(category: Optional[str], section_id: str) -> bool:
    return section_id in resolve_dashboard_config(category).visible_sections


def is_kpi_visible(category: Optional[str], kpi_id: str) -> bool:
    return kpi_id in resolve_dashboard_config(category).kpi_cards
