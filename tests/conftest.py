import os
import tempfile
from typing import Iterator

import pytest

# Configure before any api module reads the environment
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("DB_DIR", tempfile.mkdtemp(prefix="quiz-db-"))
os.environ.setdefault("SECRET_KEY", "test-secret")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session as DbSession  # noqa: E402

import api.models.db  # noqa: E402,F401
from api.app import app  # noqa: E402
from api.database import Base, SessionLocal, engine, get_db  # noqa: E402
from api.services.auth_service import create_admin_token  # noqa: E402


@pytest.fixture
def db() -> Iterator[DbSession]:
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: DbSession) -> Iterator[TestClient]:
    def override_get_db() -> Iterator[DbSession]:
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_admin_token()}"}
