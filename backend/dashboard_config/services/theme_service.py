"""
Theme Service
Compiles a white-label theme into the flat set of CSS variables the dashboard
shell applies on mount and removes on teardown.
"""
import logging
import re
from typing import Dict, Optional

from dashboard_config.core.presets import Preset
from dashboard_config.schemas.white_label import ThemeConfig

logger = logging.getLogger(__name__)

DEFAULT_PRIMARY_COLOR = "#000000"
DEFAULT_BRAND_NAME = "Dashboard"

THEME_VARIABLES = (
    "--wl-primary",
    "--wl-primary-foreground",
    "--wl-primary-soft",
    "--wl-secondary",
    "--wl-brand-name",
    "--wl-logo",
    "--wl-favicon",
)

_HEX_COLOR = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
# 8-bit alpha suffix for the tinted background variant (~12%)
_SOFT_ALPHA = "20"


class ThemeService:
    """Theme merging and compilation. Compilation never fails."""

    @staticmethod
    def normalize_color(value: Optional[str]) -> Optional[str]:
        """``#abc`` / ``#AABBCC`` -> ``#aabbcc``; None for anything else."""
        if not isinstance(value, str):
            return None
        value = value.strip()
        if not _HEX_COLOR.match(value):
            return None
        digits = value[1:].lower()
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        return f"#{digits}"

    @staticmethod
    def foreground_for(color: str) -> str:
        """Black or white text, whichever reads better on ``color``."""
        r, g, b = (int(color[i:i + 2], 16) for i in (1, 3, 5))
        brightness = (r * 299 + g * 587 + b * 114) / 1000
        return "#000000" if brightness >= 128 else "#ffffff"

    @staticmethod
    def css_url(value: Optional[str]) -> str:
        """``url("...")`` for an asset link, ``none`` when empty."""
        value = (value or "").strip()
        if not value:
            return "none"
        return 'url("{}")'.format(value.replace('"', "%22"))

    @staticmethod
    def merge_theme(module_theme: Optional[ThemeConfig], preset: Optional[Preset]) -> ThemeConfig:
        """Module theme > preset theme defaults. Platform defaults apply at compile time."""
        merged = module_theme.model_dump() if module_theme is not None else {}
        if preset is not None:
            defaults = {
                "primary_color": preset.theme_defaults.primary_color,
                "brand_name": preset.theme_defaults.brand_name,
            }
            for key, value in defaults.items():
                if not merged.get(key) and value:
                    merged[key] = value
        return ThemeConfig(**merged)

    @staticmethod
    def compile(theme: Optional[ThemeConfig]) -> Dict[str, str]:
        """ThemeConfig -> {variable name: value} over THEME_VARIABLES."""
        theme = theme or ThemeConfig()

        primary = ThemeService.normalize_color(theme.primary_color)
        if primary is None:
            if theme.primary_color:
                logger.debug("Ignoring malformed primary color %r", theme.primary_color)
            primary = DEFAULT_PRIMARY_COLOR
        secondary = ThemeService.normalize_color(theme.secondary_color) or primary

        brand_name = (theme.brand_name or "").strip() or DEFAULT_BRAND_NAME

        return {
            "--wl-primary": primary,
            "--wl-primary-foreground": ThemeService.foreground_for(primary),
            "--wl-primary-soft": primary + _SOFT_ALPHA,
            "--wl-secondary": secondary,
            "--wl-brand-name": brand_name,
            "--wl-logo": ThemeService.css_url(theme.logo),
            "--wl-favicon": ThemeService.css_url(theme.favicon),
        }
