"""Shared fixtures.

Each test gets an app bound to its own SQLite file and an HS256 secret so
that identity-provider tokens can be minted locally.
"""

import time
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import jwt
import pytest
from fastapi.testclient import TestClient

from tutorcenter.config.app_config import AppConfig, AuthConfig, DatabaseConfig
from tutorcenter.web.api import create_app

JWT_SECRET = "test-secret-key-with-enough-length-for-hs256"
TEST_USER_ID = "user_2abcTEST"


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    """Config pointing at a throwaway database."""
    return AppConfig(
        database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'test.db'}"),
        auth=AuthConfig(jwt_secret=JWT_SECRET),
    )


@pytest.fixture
def client(app_config):
    """Test client with startup (schema creation) run."""
    app = create_app(app_config)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Mint a provider-style session token."""

    def _make(
        user_id: str = TEST_USER_ID,
        secret: str = JWT_SECRET,
        expires_in: int = 3600,
        **claims: Any,
    ) -> str:
        now = int(time.time())
        payload = {"sub": user_id, "sid": "sess_123", "iat": now, "exp": now + expires_in}
        payload.update(claims)
        return jwt.encode(payload, secret, algorithm="HS256")

    return _make


@pytest.fixture
def auth_headers(make_token) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def make_student(client) -> Callable[..., dict]:
    """Create a student (and its user) through the API."""
    counter = {"n": 0}

    def _make(
        first_name: str | None = "Emma",
        last_name: str | None = "Wilson",
        grade: str | None = "10th Grade",
        attendance: float | None = 95,
        email: str | None = None,
    ) -> dict:
        counter["n"] += 1
        user = {
            "email": email or f"student{counter['n']}@example.com",
            "first_name": first_name,
            "last_name": last_name,
        }
        response = client.post(
            "/students",
            json={"user": user, "grade": grade, "attendance": attendance},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_tutor(client) -> Callable[..., dict]:
    counter = {"n": 0}

    def _make(first_name: str = "Bob", last_name: str = "Tutor", earnings: float = 1500) -> dict:
        counter["n"] += 1
        response = client.post(
            "/tutors",
            json={
                "user": {
                    "email": f"tutor{counter['n']}@example.com",
                    "first_name": first_name,
                    "last_name": last_name,
                },
                "earnings": earnings,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_session(client) -> Callable[..., dict]:
    """Schedule a one-hour session starting ``days_from_now`` days from now."""

    def _make(
        student_id: str,
        tutor_id: str,
        days_from_now: float = 7,
        title: str = "Math Tutoring",
        canceled: bool = False,
    ) -> dict:
        start = datetime.now(timezone.utc) + timedelta(days=days_from_now)
        response = client.post(
            "/sessions",
            json={
                "title": title,
                "description": "Algebra review",
                "start_time": start.isoformat(),
                "end_time": (start + timedelta(hours=1)).isoformat(),
                "student_id": student_id,
                "tutor_id": tutor_id,
                "canceled": canceled,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make
