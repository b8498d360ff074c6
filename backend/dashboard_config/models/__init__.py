"""SQLAlchemy models."""

from dashboard_config.models.venue import Venue, VenueFeature, VenueModule

__all__ = ["Venue", "VenueFeature", "VenueModule"]
