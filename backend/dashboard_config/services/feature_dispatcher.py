"""
Feature Dispatcher

Maps a feature slug in a white-label URL to the page that renders it.
Handlers are registered per feature code at startup; there is no runtime
reflection, so an unknown code is just a lookup miss.
"""
import logging
from typing import Any, Callable, Dict, Optional

from dashboard_config.core.feature_registry import FeatureDefinition, list_features, lookup
from dashboard_config.core.slugs import to_code, to_slug
from dashboard_config.schemas.white_label import DispatchedFeature, ResolvedWhiteLabelConfig

logger = logging.getLogger(__name__)

FeatureHandler = Callable[[FeatureDefinition, Dict[str, Any]], Dict[str, Any]]


def component_handler(definition: FeatureDefinition, payload: Dict[str, Any]) -> Dict[str, Any]:
    """Mount the feature's registered page component."""
    return {"component": definition.component, "config": payload}


def placeholder_handler(definition: FeatureDefinition, payload: Dict[str, Any]) -> Dict[str, Any]:
    """Enabled feature with no page yet."""
    return {"component": None, "placeholder": True, "config": payload}


class FeatureDispatcher:
    """Registration table: feature code -> handler."""

    def __init__(self):
        self._handlers: Dict[str, FeatureHandler] = {}

    def register(self, code: str, handler: FeatureHandler) -> None:
        if lookup(code) is None:
            raise ValueError(f"Cannot register handler for unpublished feature {code}")
        self._handlers[code] = handler

    def has_handler(self, code: str) -> bool:
        return code in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def dispatch(self, config: ResolvedWhiteLabelConfig, slug: str) -> Optional[DispatchedFeature]:
        """
        Page for ``slug`` under a venue's resolved config.

        Returns None when the slug decodes to a feature the venue does not
        have enabled (or that the registry does not publish).
        """
        code = to_code(slug)
        definition = lookup(code)
        if definition is None or not config.is_enabled:
            return None
        if not any(f.code == code for f in config.enabled_features):
            logger.debug("Feature %s not enabled for this venue", code)
            return None

        payload = dict(config.feature_configs.get(code, {}))
        handler = self._handlers.get(code, placeholder_handler)
        result = handler(definition, payload)
        return DispatchedFeature(feature=code, slug=to_slug(code), **result)


def build_default_dispatcher() -> FeatureDispatcher:
    """Dispatcher with a component handler for every published feature."""
    dispatcher = FeatureDispatcher()
    for definition in list_features():
        if definition.component:
            dispatcher.register(definition.code, component_handler)
    logger.info("Feature dispatcher ready with %d handlers", len(dispatcher))
    return dispatcher


feature_dispatcher = build_default_dispatcher()
