import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import classboard.main as main_module
import classboard.models  # noqa: F401
from classboard.api.deps import get_db
from classboard.core.config import get_settings
from classboard.db.base import Base
from classboard.main import app
from classboard.services.rate_limit import clear_rate_limiter


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory, monkeypatch):
    clear_rate_limiter()
    # Tables live in the in-memory engine; skip the bootstrap against the configured database.
    monkeypatch.setattr(main_module, "ensure_runtime_schema", lambda: None)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    clear_rate_limiter()


@pytest.fixture()
def admin_headers():
    settings = get_settings()
    return {settings.admin_pin_header: settings.admin_pin}
