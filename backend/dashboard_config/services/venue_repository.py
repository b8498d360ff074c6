"""
Venue Repository
Loads venue, module and override rows and converts them into the records the
resolution services consume. The services themselves never touch the database.
"""
import logging
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from dashboard_config.core.config import settings
from dashboard_config.models.venue import Venue, VenueFeature, VenueModule
from dashboard_config.schemas.white_label import (
    FeatureEnablementRecord,
    NavigationConfig,
    ThemeConfig,
    VenueRecord,
    WhiteLabelModuleRecord,
)

logger = logging.getLogger(__name__)


class VenueRepository:
    """Read/write access to venue configuration rows."""

    @staticmethod
    def get_venue(db: Session, slug: str) -> Optional[Venue]:
        return db.execute(select(Venue).where(Venue.slug == slug)).scalar_one_or_none()

    @staticmethod
    def load_venue(db: Session, slug: str) -> Optional[VenueRecord]:
        venue = VenueRepository.get_venue(db, slug)
        if venue is None:
            return None
        return VenueRecord.model_validate(venue)

    @staticmethod
    def load_overrides(db: Session, venue_id: int) -> List[FeatureEnablementRecord]:
        """Override records in insertion order."""
        rows = db.execute(
            select(VenueFeature)
            .where(VenueFeature.venue_id == venue_id)
            .order_by(VenueFeature.id)
        ).scalars().all()
        records = []
        for row in rows:
            try:
                records.append(FeatureEnablementRecord.model_validate(row))
            except ValueError as e:
                # Bad source tag or non-dict payload written by hand; skip the row
                logger.warning(f"Skipping malformed override {row.id} for venue {venue_id}: {e}")
        return records

    @staticmethod
    def load_white_label_module(db: Session, venue_id: int) -> Optional[WhiteLabelModuleRecord]:
        """The venue's white-label module, or None if it was never purchased."""
        row = db.execute(
            select(VenueModule).where(
                VenueModule.venue_id == venue_id,
                VenueModule.module_code == settings.white_label_module_code,
            )
        ).scalar_one_or_none()
        if row is None:
            return None
        config = row.config if isinstance(row.config, dict) else {}
        if row.config is not None and not isinstance(row.config, dict):
            logger.warning(
                f"Ignoring non-object config on module {row.id} for venue {venue_id}: "
                f"{type(row.config).__name__}"
            )
        return WhiteLabelModuleRecord(
            enabled=row.enabled,
            theme=VenueRepository._parse_section(row, config, "theme", ThemeConfig),
            navigation=VenueRepository._parse_section(row, config, "navigation", NavigationConfig),
        )

    @staticmethod
    def _parse_section(row: VenueModule, config: dict, key: str, schema):
        """Validate one section of the module config; None (platform defaults) when malformed."""
        data = config.get(key)
        if data is None:
            return None
        try:
            return schema.model_validate(data)
        except ValidationError as e:
            # Preset and platform defaults apply instead
            logger.warning(f"Ignoring malformed {key} on module {row.id} for venue {row.venue_id}: {e}")
            return None

    @staticmethod
    def upsert_override(
        db: Session,
        venue_id: int,
        feature_code: str,
        enabled: bool,
        source: Optional[str] = None,
        config_override: Optional[dict] = None,
    ) -> VenueFeature:
        row = db.execute(
            select(VenueFeature).where(
                VenueFeature.venue_id == venue_id,
                VenueFeature.feature_code == feature_code,
            )
        ).scalar_one_or_none()
        if row is None:
            row = VenueFeature(venue_id=venue_id, feature_code=feature_code)
            db.add(row)
        row.enabled = enabled
        row.source = source
        row.config_override = config_override
        db.commit()
        db.refresh(row)
        logger.info(
            f"Venue {venue_id} override {feature_code} -> enabled={enabled}"
        )
        return row
