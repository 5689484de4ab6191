# tests/conftest.py

import os

# Cheap hashing and no real database for the test run; must happen before todoapp is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import create_app
from todoapp.config import Settings
from todoapp.database import Base, build_engine, get_db


@pytest.fixture()
def engine():
    # One shared in-memory connection so every session sees the same data
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    """Settings with rate limiting off and no front-end bundle"""
    app_settings = Settings()
    app_settings.ENVIRONMENT = "production"
    app_settings.RATE_LIMITS = {**app_settings.RATE_LIMITS, "enabled": False}
    app_settings.STATIC = {**app_settings.STATIC, "directory": str(tmp_path / "no-frontend")}
    return app_settings


def build_test_app(app_settings: Settings, session_factory):
    app = create_app(app_settings, initialize_database=False)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture()
def app(test_settings, session_factory):
    return build_test_app(test_settings, session_factory)


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_user(client):
    def _make_user(username: str = "alice", password: str = "secret123", **overrides) -> dict:
        payload = {
            "firstName": "Alice",
            "lastName": "Smith",
            "username": username,
            "password": password,
            "createdBy": 0,
        }
        payload.update(overrides)
        response = client.post("/api/users", json=payload)
        assert response.status_code == 200, response.text
        return response.json()

    return _make_user


@pytest.fixture()
def make_task(client):
    def _make_task(user_id: int, name: str = "Task", description: str = "") -> dict:
        response = client.post(
            "/api/tasks",
            json={"userId": user_id, "taskName": name, "description": description, "createdBy": user_id},
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _make_task


@pytest.fixture()
def make_subtask(client):
    def _make_subtask(task_id: int, description: str = "Step") -> dict:
        response = client.post(
            "/api/tasks/subtask",
            json={"taskId": task_id, "description": description, "createdBy": 0},
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _make_subtask
