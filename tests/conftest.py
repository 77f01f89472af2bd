import os
import sys
from datetime import date, time
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure predictable environment variables for tests before importing the app.
BASE_DIR = Path(__file__).resolve().parents[1]
TEST_DB_PATH = BASE_DIR / "test.db"

if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("ADMIN_KEY", "test-admin-key")
os.environ.setdefault("MAIL_PROVIDER", "console")

import app.main as main  # noqa: E402  (import after env vars are set)
from app.auth import decode_access_token  # noqa: E402
from app.database import Base, SessionLocal, engine  # noqa: E402
from app.models import Event  # noqa: E402

ADMIN_KEY = os.environ["ADMIN_KEY"]

EVENTS = [
    Event(id=event_id, name=f"Event {event_id}", date=date(2026, 3, 14), time=time(10, 0), venue="Main Hall")
    for event_id in range(1, 11)
]


def _reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        for event in EVENTS:
            session.merge(event)
        session.commit()
    finally:
        session.close()
    engine.dispose()


@pytest.fixture()
def client():
    """Provide a TestClient over a freshly created and seeded database."""
    _reset_database()
    with TestClient(main.app) as test_client:
        yield test_client


@pytest.fixture()
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_user(client):
    """Sign up a user through the API; returns id, token and auth headers."""
    counter = {"n": 0}

    def _make_user(**overrides):
        counter["n"] += 1
        n = counter["n"]
        payload = {
            "name": f"Participant {n}",
            "college": "City Engineering College",
            "department": "CSE",
            "reg_no": f"21CS{n:03d}",
            "year": "3",
            "phone": "9876543210",
            "email": f"user{n}@example.com",
            "password": "SecurePass123",
            "accommodation": "no",
            "transaction_id": "123456789012",
            "pass_type": "multi",
        }
        payload.update(overrides)
        response = client.post("/auth/register", json=payload)
        assert response.status_code == 201, response.text
        body = response.json()
        user_id = decode_access_token(body["token"])["user_id"]
        return {
            "id": user_id,
            "token": body["token"],
            "qr_code_id": body["qr_code_id"],
            "email": payload["email"],
            "headers": {"Authorization": f"Bearer {body['token']}"},
        }

    return _make_user


@pytest.fixture()
def make_admin(make_user):
    def _make_admin(**overrides):
        return make_user(role="admin", admin_key=ADMIN_KEY, **overrides)

    return _make_admin
