"""
API test fixtures.

Provides: TestClient over a fresh app, mocked services, and token helpers
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from lockedin.api.deps.dependencies import get_settings_dependency
from lockedin.api.main import create_app
from lockedin.configs.auth import AuthSettings
from lockedin.configs.settings import Settings

TEST_SECRET = "test-secret"


@pytest.fixture
def client():
    app = create_app()
    app.dependency_overrides[get_settings_dependency] = lambda: Settings(
        auth=AuthSettings(jwt_secret=TEST_SECRET, jwt_audience="authenticated")
    )
    return TestClient(app)


@pytest.fixture
def mock_service():
    return AsyncMock()


@pytest.fixture
def principal_id() -> uuid.UUID:
    return uuid.uuid4()


def make_token(subject, secret: str = TEST_SECRET, audience: str = "authenticated") -> str:
    return jwt.encode({"sub": str(subject), "aud": audience}, secret, algorithm="HS256")


@pytest.fixture
def auth_headers(principal_id) -> dict:
    return {"Authorization": f"Bearer {make_token(principal_id)}"}


def session_payload(**overrides) -> dict:
    now = datetime(2025, 1, 1, 10, 0, tzinfo=timezone.utc)
    data = {
        "id": uuid.uuid4(),
        "user_id": uuid.uuid4(),
        "session_type": "pomodoro",
        "start_time": now,
        "end_time": None,
        "duration_minutes": None,
        "target_duration_minutes": 25,
        "session_notes": None,
        "mood_rating": None,
        "productivity_rating": None,
        "ai_feedback": None,
        "ai_feedback_generated_at": None,
        "google_calendar_event_id": None,
        "is_active": True,
        "version": 1,
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    return data


def task_payload(**overrides) -> dict:
    now = datetime(2025, 1, 1, 10, 0, tzinfo=timezone.utc)
    data = {
        "id": uuid.uuid4(),
        "user_id": uuid.uuid4(),
        "session_id": None,
        "title": "Essay",
        "description": None,
        "is_completed": False,
        "completed_at": None,
        "priority": 0,
        "due_date": None,
        "order_index": 0,
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    return data


@pytest.fixture
def token_factory():
    """Build signed tokens: token_factory(subject, secret=..., audience=...)."""
    return make_token


@pytest.fixture
def session_factory():
    """Build service-shaped session dicts with overrides."""
    return session_payload


@pytest.fixture
def task_factory():
    """Build service-shaped task dicts with overrides."""
    return task_payload
