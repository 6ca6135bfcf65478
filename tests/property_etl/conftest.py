"""
Shared fixtures for property ETL tests.
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.property_etl.db.base import Base
from src.property_etl.db.session import session_scope_factory
from src.property_etl.etl.loaders import PropertyLoader
from src.property_etl.models.property import RawPropertyData
from src.property_etl.models.source import DataSourceName, PropertyDataSource


@pytest.fixture(scope="function")
def test_engine():
    """In-memory SQLite engine shared across threads for the test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(bind=test_engine, expire_on_commit=False)


@pytest.fixture
def session_scope(session_factory):
    """get_db_session-style context manager bound to the test engine."""
    return session_scope_factory(session_factory)


@pytest.fixture
def test_db(session_factory):
    """Plain session for repository-level tests."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def loader(session_scope):
    return PropertyLoader(session_scope=session_scope)


@pytest.fixture
def make_raw():
    """Factory for complete, valid raw records."""

    def _make(**overrides):
        values = {
            "address": "1234 Main Street",
            "city": "Philadelphia",
            "state": "PA",
            "zip": "19102",
            "latitude": 39.9526,
            "longitude": -75.1652,
            "owner_name": "John Smith",
            "owner_type": "individual",
            "property_type": "Single Family",
            "bedrooms": 3,
            "bathrooms": 2,
            "square_feet": 1800,
            "lot_size": 5000,
            "year_built": 1985,
            "assessed_value": 250000,
            "estimated_value": 275000,
            "equity_percent": 65,
            "tags": [],
            "source": "mock",
        }
        values.update(overrides)
        return RawPropertyData(**values)

    return _make


@pytest.fixture
def make_source():
    """Factory for source descriptors."""

    def _make(name=DataSourceName.MOCK, **overrides):
        values = {"name": name, "priority": 1, "coverage": []}
        values.update(overrides)
        return PropertyDataSource(**values)

    return _make
