import os

# Must be set before success_tracker.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ.pop("JWT_AUDIENCE", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import success_tracker.models  # noqa: F401
from success_tracker.database import Base, build_engine, get_db
from success_tracker.main import create_app
from success_tracker.models.user import User
from success_tracker.services.rate_limiter import RateLimiter


@pytest.fixture
def engine():
    eng = build_engine("sqlite://")
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


def _make_user(db, external_id):
    user = User(external_id=external_id, email=f"{external_id}@example.com")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def user(db):
    return _make_user(db, "user_alice")


@pytest.fixture
def other_user(db):
    return _make_user(db, "user_bob")


@pytest.fixture
def limits():
    """Limits high enough that only the rate-limit tests ever hit them."""
    return {"read": 1000, "mutation": 1000}


@pytest.fixture
def app(session_factory, limits):
    application = create_app(
        read_limiter=RateLimiter(60, limits["read"]),
        mutation_limiter=RateLimiter(60, limits["mutation"]),
    )

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
def client(app):
    return TestClient(app)
