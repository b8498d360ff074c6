"""White-label configuration schemas.

Inputs supplied by the data-access layer (venue, module and override
records) and the resolved per-venue output consumed by the dashboard shell.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from dashboard_config.core.feature_registry import FeatureSource


class ViewMode(str, Enum):
    TRADITIONAL = "traditional"
    WHITELABEL = "whitelabel"


class NavigationLayout(str, Enum):
    SIDEBAR = "sidebar"
    TOPNAV = "topnav"


class NavigationItemType(str, Enum):
    FEATURE = "feature"
    LINK = "link"
    DIVIDER = "divider"
    GROUP = "group"


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

class VenueRecord(BaseModel):
    """Venue identity as loaded by the caller."""

    id: int
    slug: str
    name: Optional[str] = None
    business_category: Optional[str] = None
    assigned_preset_name: Optional[str] = None
    timezone: str = "America/Mexico_City"

    model_config = ConfigDict(from_attributes=True)


class FeatureEnablementRecord(BaseModel):
    """Per-venue, per-feature override. Beats whatever the preset says."""

    feature_code: str
    enabled: bool
    source: Optional[FeatureSource] = None
    config_override: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(from_attributes=True)


class ThemeConfig(BaseModel):
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    brand_name: Optional[str] = None
    logo: Optional[str] = None
    favicon: Optional[str] = None


class NavigationItemConfig(BaseModel):
    """A navigation entry as stored in the module config.

    ``feature`` entries only show when the feature resolves as enabled;
    ``link`` entries need a ``url``; ``group`` entries nest ``children``.
    """

    id: str
    type: NavigationItemType = NavigationItemType.FEATURE
    feature_code: Optional[str] = None
    label: Optional[str] = None
    icon: Optional[str] = None
    order: int = 0
    children: List[NavigationItemConfig] = Field(default_factory=list)
    url: Optional[str] = None


class NavigationConfig(BaseModel):
    layout: NavigationLayout = NavigationLayout.SIDEBAR
    items: List[NavigationItemConfig] = Field(default_factory=list)


class WhiteLabelModuleRecord(BaseModel):
    """The venue's WHITE_LABEL_DASHBOARD module row."""

    enabled: bool = False
    theme: Optional[ThemeConfig] = None
    navigation: Optional[NavigationConfig] = None


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------

class ResolvedFeature(BaseModel):
    code: str
    source: FeatureSource
    config: Dict[str, Any] = Field(default_factory=dict)


class NavItem(BaseModel):
    id: str
    type: NavigationItemType = NavigationItemType.FEATURE
    feature_code: Optional[str] = None
    slug: Optional[str] = None
    label: Optional[str] = None
    icon: Optional[str] = None
    order: int
    path: Optional[str] = None
    url: Optional[str] = None
    children: List[NavItem] = Field(default_factory=list)


class ViewModeContext(BaseModel):
    mode: ViewMode
    venue_base_path: str
    full_base_path: str


class ModeSwitch(BaseModel):
    """Result of asking the router to move to another namespace."""

    from_mode: ViewMode
    to_mode: ViewMode
    path: str
    redirected_home: bool = False


class SectorDashboard(BaseModel):
    kpi_cards: List[str]
    visible_sections: List[str]


class ResolvedWhiteLabelConfig(BaseModel):
    """Everything the dashboard shell needs for one venue and one request.

    Check ``is_enabled`` before trusting the white-label fields; terms,
    dashboard and view mode are always resolved.
    """

    is_enabled: bool
    preset: Optional[str] = None
    theme: Dict[str, str] = Field(default_factory=dict)
    enabled_features: List[ResolvedFeature] = Field(default_factory=list)
    feature_configs: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    navigation: List[NavItem] = Field(default_factory=list)
    navigation_layout: NavigationLayout = NavigationLayout.SIDEBAR
    home_path: Optional[str] = None
    terms: Dict[str, str] = Field(default_factory=dict)
    dashboard: SectorDashboard
    view_mode: ViewModeContext


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class FeatureOverrideUpdate(BaseModel):
    """Body for upserting a venue's override of one feature."""

    enabled: bool
    source: Optional[FeatureSource] = None
    config_override: Optional[Dict[str, Any]] = Field(
        None, description="Replaces the preset payload for this feature wholesale"
    )


class FeatureOverrideResponse(BaseModel):
    venue_id: int
    feature_code: str
    slug: str
    enabled: bool
    source: Optional[str] = None
    config_override: Optional[Dict[str, Any]] = None


class DispatchedFeature(BaseModel):
    """A feature page as mounted by the dispatcher."""

    feature: str
    slug: str
    component: Optional[str] = None
    placeholder: bool = False
    config: Dict[str, Any] = Field(default_factory=dict)


NavigationItemConfig.model_rebuild()
NavItem.model_rebuild()
