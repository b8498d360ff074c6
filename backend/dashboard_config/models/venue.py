"""Venue, module enablement and feature override models."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dashboard_config.db.base import Base, TimestampMixin


class Venue(Base, TimestampMixin):
    """A tenant business location."""

    __tablename__ = "venues"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(120), nullable=False, unique=True, index=True)
    business_category: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    assigned_preset_name: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    timezone: Mapped[str] = mapped_column(String(50), default="America/Mexico_City", nullable=False)

    modules: Mapped[List["VenueModule"]] = relationship(
        "VenueModule", back_populates="venue", cascade="all, delete-orphan"
    )
    features: Mapped[List["VenueFeature"]] = relationship(
        "VenueFeature",
        back_populates="venue",
        cascade="all, delete-orphan",
        order_by="VenueFeature.id",
    )


class VenueModule(Base, TimestampMixin):
    """A purchasable module switched on for a venue.

    For the white-label dashboard, ``config`` holds ``{"theme": {...}}``.
    """

    __tablename__ = "venue_modules"
    __table_args__ = (UniqueConstraint("venue_id", "module_code", name="uq_venue_module"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    venue_id: Mapped[int] = mapped_column(Integer, ForeignKey("venues.id", ondelete="CASCADE"), nullable=False)
    module_code: Mapped[str] = mapped_column(String(50), nullable=False)
    enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    config: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)

    venue: Mapped["Venue"] = relationship("Venue", back_populates="modules")


class VenueFeature(Base, TimestampMixin):
    """Per-venue override of one feature. Takes precedence over the preset."""

    __tablename__ = "venue_features"
    __table_args__ = (UniqueConstraint("venue_id", "feature_code", name="uq_venue_feature"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    venue_id: Mapped[int] = mapped_column(Integer, ForeignKey("venues.id", ondelete="CASCADE"), nullable=False)
    feature_code: Mapped[str] = mapped_column(String(80), nullable=False)
    enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    source: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    config_override: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)

    venue: Mapped["Venue"] = relationship("Venue", back_populates="features")
