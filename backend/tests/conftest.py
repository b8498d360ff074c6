"""Pytest configuration and fixtures."""

import os

# Must be set before dashboard_config.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from typing import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from dashboard_config.core.cache import cache
from dashboard_config.core.config import settings
from dashboard_config.db.base import Base
from dashboard_config.db.session import get_db
from dashboard_config.main import app
from dashboard_config.models import Venue, VenueFeature, VenueModule
from dashboard_config.schemas.white_label import (
    FeatureEnablementRecord,
    ThemeConfig,
    VenueRecord,
    WhiteLabelModuleRecord,
)

TEST_DATABASE_URL = "sqlite:///:memory:"
API = "/api/v1"


@pytest.fixture(scope="function")
def db_engine():
    """Create a test database engine."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Create a test database session."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    # Disable rate limiting during tests to avoid flaky failures
    from dashboard_config.core.rate_limit import limiter
    limiter.enabled = False
    cache.clear()
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    limiter.enabled = True
    cache.clear()
    app.dependency_overrides.clear()


# ==================== RECORD FIXTURES ====================

@pytest.fixture
def telecom_venue() -> VenueRecord:
    """Retail-category venue sold the telecom preset."""
    return VenueRecord(
        id=1,
        slug="playtelecom-centro",
        name="PlayTelecom Centro",
        business_category="RETAIL",
        assigned_preset_name="telecom",
    )


@pytest.fixture
def bare_venue() -> VenueRecord:
    """Venue with no category and no preset."""
    return VenueRecord(id=2, slug="bare-venue")


@pytest.fixture
def enabled_module() -> WhiteLabelModuleRecord:
    return WhiteLabelModuleRecord(
        enabled=True,
        theme=ThemeConfig(primary_color="#FF5500", brand_name="PlayTelecom", logo="https://cdn.example.com/logo.png"),
    )


@pytest.fixture
def commissions_off() -> list:
    return [FeatureEnablementRecord(feature_code="AVOQADO_COMMISSIONS", enabled=False)]


# ==================== DATABASE FIXTURES ====================

@pytest.fixture
def db_venue(db_session: Session) -> Venue:
    """Telecom venue with the white-label module switched on."""
    venue = Venue(
        name="PlayTelecom Centro",
        slug="playtelecom-centro",
        business_category="RETAIL",
        assigned_preset_name="telecom",
    )
    db_session.add(venue)
    db_session.commit()
    db_session.refresh(venue)

    db_session.add(VenueModule(
        venue_id=venue.id,
        module_code=settings.white_label_module_code,
        enabled=True,
        config={"theme": {"primary_color": "#0055FF", "brand_name": "PlayTelecom"}},
    ))
    db_session.commit()
    return venue


@pytest.fixture
def db_restaurant(db_session: Session) -> Venue:
    """Restaurant with no preset and no white-label module."""
    venue = Venue(name="Taqueria Lupita", slug="taqueria-lupita", business_category="FOOD_SERVICE")
    db_session.add(venue)
    db_session.commit()
    db_session.refresh(venue)
    return venue


@pytest.fixture
def db_override(db_session: Session, db_venue: Venue) -> VenueFeature:
    """Turns commissions off for the telecom venue."""
    row = VenueFeature(venue_id=db_venue.id, feature_code="AVOQADO_COMMISSIONS", enabled=False)
    db_session.add(row)
    db_session.commit()
    db_session.refresh(row)
    return row
