"""
View Mode Service

The same venue is reachable under two URL namespaces:

    /venues/<slug>/...       traditional dashboard
    /wl/venues/<slug>/...    white-label dashboard

The mode is derived from the path prefix alone. Every traditional page has a
white-label twin; the reverse is not true for the pages listed in
WHITE_LABEL_ONLY_PAGES.
"""
import logging
from typing import Optional, Tuple
from urllib.parse import urlsplit

from dashboard_config.schemas.white_label import ModeSwitch, ViewMode, ViewModeContext

logger = logging.getLogger(__name__)

WHITE_LABEL_PREFIX = "/wl"
TRADITIONAL_VENUE_BASE = "/venues"
WHITE_LABEL_VENUE_BASE = WHITE_LABEL_PREFIX + TRADITIONAL_VENUE_BASE
HOME_PAGE = "home"

WHITE_LABEL_ONLY_PAGES = frozenset({
    "supervisor",
    "command-center",
    "promoters",
    "stores",
    "managers",
    "sales",
    "reporte",
    "tpv-config",
})


class ViewModeService:
    """Pure path arithmetic over the two namespaces."""

    @staticmethod
    def split_path(path: Optional[str]) -> Tuple[str, str]:
        """(path, suffix) where suffix is the ``?query`` / ``#fragment`` tail, if any."""
        path = path or ""
        parts = urlsplit(path)
        suffix = path[len(parts.path):] if path.startswith(parts.path) else ""
        return parts.path, suffix

    @staticmethod
    def detect_mode(path: Optional[str]) -> ViewMode:
        path, _ = ViewModeService.split_path(path)
        if path == WHITE_LABEL_PREFIX or path.startswith(WHITE_LABEL_PREFIX + "/"):
            return ViewMode.WHITELABEL
        return ViewMode.TRADITIONAL

    @staticmethod
    def base_paths(mode: ViewMode, venue_slug: str) -> Tuple[str, str]:
        """(venue_base_path, full_base_path) for ``mode``."""
        venue_base = WHITE_LABEL_VENUE_BASE if mode == ViewMode.WHITELABEL else TRADITIONAL_VENUE_BASE
        return venue_base, f"{venue_base}/{venue_slug}"

    @staticmethod
    def context(path: Optional[str], venue_slug: str) -> ViewModeContext:
        mode = ViewModeService.detect_mode(path)
        venue_base, full_base = ViewModeService.base_paths(mode, venue_slug)
        return ViewModeContext(mode=mode, venue_base_path=venue_base, full_base_path=full_base)

    @staticmethod
    def page_id(path: Optional[str], venue_slug: str) -> str:
        """First path segment after the venue's full base path ("" when none)."""
        ctx = ViewModeService.context(path, venue_slug)
        path, _ = ViewModeService.split_path(path)
        if path != ctx.full_base_path and not path.startswith(ctx.full_base_path + "/"):
            return ""
        rest = path[len(ctx.full_base_path):].strip("/")
        return rest.split("/", 1)[0] if rest else ""

    @staticmethod
    def home_path(mode: ViewMode, venue_slug: str) -> str:
        return f"{ViewModeService.base_paths(mode, venue_slug)[1]}/{HOME_PAGE}"

    @staticmethod
    def switch_mode(path: Optional[str], venue_slug: str, target: ViewMode) -> ModeSwitch:
        """
        Path to navigate to when moving the current page to ``target``.

        - Already in ``target``: the path is returned untouched.
        - traditional -> whitelabel: prefix rewrite.
        - whitelabel -> traditional: prefix rewrite, except on white-label-only
          pages, which redirect to the traditional home page.
        Paths outside the venue's namespace land on the target home page.
        Query string and fragment are kept on rewrites and dropped on redirects.
        """
        raw = path or ""
        current = ViewModeService.context(raw, venue_slug)
        if current.mode == target:
            return ModeSwitch(from_mode=current.mode, to_mode=target, path=raw)

        _, target_full = ViewModeService.base_paths(target, venue_slug)
        path, suffix = ViewModeService.split_path(raw)
        page = ViewModeService.page_id(path, venue_slug)
        in_venue = path == current.full_base_path or path.startswith(current.full_base_path + "/")

        if not in_venue or (target == ViewMode.TRADITIONAL and page in WHITE_LABEL_ONLY_PAGES):
            logger.debug("No %s twin for %r, redirecting home", target.value, raw)
            return ModeSwitch(
                from_mode=current.mode,
                to_mode=target,
                path=ViewModeService.home_path(target, venue_slug),
                redirected_home=True,
            )

        return ModeSwitch(
            from_mode=current.mode,
            to_mode=target,
            path=target_full + path[len(current.full_base_path):] + suffix,
        )

    @staticmethod
    def build_action_url(action_url: Optional[str], full_base_path: str) -> Optional[str]:
        """Notification action link in the current namespace.

        Absolute URLs and root-relative paths are kept; relative ones are
        resolved against ``full_base_path``.
        """
        if not action_url:
            return None
        if action_url.startswith(("http://", "https://", "/")):
            return action_url
        return f"{full_base_path}/{action_url}"

    @staticmethod
    def build_notifications_url(full_base_path: Optional[str]) -> str:
        return f"{full_base_path}/notifications" if full_base_path else "/notifications"
