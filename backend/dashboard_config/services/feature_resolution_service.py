"""
Feature Enablement Resolution
Merges a venue's override records with its preset into one ordered,
effective feature set.
"""
import copy
import logging
from typing import Any, Dict, Iterable, List, Optional

from dashboard_config.core.feature_registry import lookup
from dashboard_config.core.presets import get_preset
from dashboard_config.schemas.white_label import (
    FeatureEnablementRecord,
    ResolvedFeature,
    VenueRecord,
)

logger = logging.getLogger(__name__)

DEFAULT_FEATURE_PAYLOAD: Dict[str, Any] = {"enabled": True}


class FeatureResolutionService:
    """Resolve which features a venue actually gets."""

    @staticmethod
    def resolve(
        venue: VenueRecord,
        preset_name: Optional[str] = None,
        overrides: Iterable[FeatureEnablementRecord] = (),
    ) -> List[ResolvedFeature]:
        """
        Effective feature set for a venue.

        1. Start from the preset's features (none for no/unknown/custom preset).
        2. Patch with override records keyed by code; the last record for a
           code wins. enabled=False removes, enabled=True adds or keeps and
           takes the record's source.
        3. Drop codes the registry does not publish.
        4. Payload: preset payload with the override payload shallow-merged
           on top; {"enabled": True} when neither exists.
        5. Preset order first, override-only additions after, in the order
           their codes were first seen.

        Never raises. Returned payloads are copies.

        Args:
            venue: Venue identity
            preset_name: Preset to apply; defaults to venue.assigned_preset_name
            overrides: Venue override records

        Returns:
            Ordered list of resolved features
        """
        name = preset_name if preset_name is not None else venue.assigned_preset_name
        preset = get_preset(name)
        if name and preset is None:
            logger.debug("Venue %s references unknown preset %r", venue.id, name)

        latest: Dict[str, FeatureEnablementRecord] = {}
        for record in overrides:
            latest[record.feature_code] = record

        candidates = []
        preset_codes = set()
        if preset is not None:
            for item in preset.enabled_features:
                preset_codes.add(item.code)
                record = latest.get(item.code)
                if record is not None and not record.enabled:
                    continue
                source = record.source if record is not None and record.source else item.source
                candidates.append((item.code, source, record))

        for code, record in latest.items():
            if code in preset_codes or not record.enabled:
                continue
            candidates.append((code, record.source, record))

        preset_configs = preset.feature_configs if preset is not None else {}
        resolved: List[ResolvedFeature] = []
        for code, source, record in candidates:
            definition = lookup(code)
            if definition is None:
                logger.debug("Dropping unpublished feature %r for venue %s", code, venue.id)
                continue

            preset_payload = preset_configs.get(code)
            if preset_payload is None and (record is None or record.config_override is None):
                payload = dict(DEFAULT_FEATURE_PAYLOAD)
            else:
                payload = copy.deepcopy(preset_payload) if preset_payload is not None else {}
                if record is not None and record.config_override is not None:
                    payload.update(copy.deepcopy(record.config_override))

            resolved.append(
                ResolvedFeature(code=code, source=source or definition.source, config=payload)
            )

        return resolved

    @staticmethod
    def resolve_feature_configs(resolved: Iterable[ResolvedFeature]) -> Dict[str, Dict[str, Any]]:
        """code -> payload map for an already-resolved feature list."""
        return {feature.code: copy.deepcopy(feature.config) for feature in resolved}
