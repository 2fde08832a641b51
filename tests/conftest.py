"""Pytest configuration and fixtures."""

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from coffee_shop import crud
from coffee_shop.config import Settings
from coffee_shop.database import create_db_engine, init_db
from coffee_shop.gateway import ApprovingGateway
from coffee_shop.main import create_app

ACCESS_KEY = "test-key"


@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory database engine with every table."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    with Session(db_engine) as session:
        yield session


@pytest.fixture
def seeded_session(db_session: Session) -> Session:
    crud.ensure_sample_data(db_session)
    return db_session


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        access_key=ACCESS_KEY,
        seed_sample_data=True,
        _env_file=None,
    )


@pytest.fixture
def gateway():
    return ApprovingGateway()


@pytest.fixture
def app(settings: Settings, gateway):
    return create_app(settings, gateway=gateway)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client; entering it runs the startup hook."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers() -> dict:
    return {"X-Access-Key": ACCESS_KEY}
