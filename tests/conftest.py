import pytest
from fastapi.testclient import TestClient

from catalog.config import Settings
from catalog.database import Base, build_engine, build_session_factory
from catalog.main import create_app
from catalog.scripts.initialize_db import seed_movies


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def db(session_factory):
    with session_factory() as session:
        seed_movies(session)
        yield session


@pytest.fixture
def settings():
    return Settings(database_url="sqlite://", log_level="WARNING", popular_max_limit=50)


@pytest.fixture
def client(engine, db, settings):
    app = create_app(settings, engine=engine)
    with TestClient(app) as client:
        yield client
