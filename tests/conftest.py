import os

# Configure before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_FILE"] = ""
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["GRADING_MODE"] = "lenient"
for name in ("SENTRY_DSN", "FIRST_ADMIN_USERNAME", "FIRST_ADMIN_EMAIL", "FIRST_ADMIN_PASSWORD"):
    os.environ.pop(name, None)

import pytest
from fastapi.testclient import TestClient

from quizrank.core.database import Base, SessionLocal, engine
from quizrank.models import UserRole
from tests.helpers import auth_headers, make_user


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    from quizrank.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def student(db):
    return make_user(db, "student")


@pytest.fixture
def admin(db):
    return make_user(db, "admin", role=UserRole.ADMIN)


@pytest.fixture
def student_headers(student):
    return auth_headers(student)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)
