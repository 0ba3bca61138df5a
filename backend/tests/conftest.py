import os

# Keep the module-level app in tennis_coach.main off the real database
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient

from tennis_coach.config import Settings
from tennis_coach.feature_flags import TRAINING_SESSION_MANAGEMENT
from tennis_coach.main import create_app
from tennis_coach.security import CoachPrincipal

TEST_PASSWORD = "CorrectHorse42"


@pytest.fixture
def settings():
    return Settings(
        environment="testing",
        database_url="sqlite://",
        jwt_secret="test-secret-key-with-enough-length-0123456789",
        log_level="WARNING",
        create_tables=True,
        feature_flags={TRAINING_SESSION_MANAGEMENT: "true"},
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def token_issuer(app):
    return app.state.token_issuer


def register(client, email="coach@example.com", password=TEST_PASSWORD, name="Coach Carter"):
    return client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "name": name},
    )


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def coach_headers(client):
    response = register(client)
    assert response.status_code == 200
    return auth_headers(response.json()["data"]["token"])


@pytest.fixture
def other_coach_headers(client):
    response = register(client, email="rival@example.com", name="Rival Coach")
    assert response.status_code == 200
    return auth_headers(response.json()["data"]["token"])


@pytest.fixture
def principal(db):
    from tennis_coach.crud import coach as crud_coach

    coach = crud_coach.create_coach(db, "service@example.com", TEST_PASSWORD, "Service Coach")
    return CoachPrincipal(coach_id=coach.id, email=coach.email, name=coach.name)
