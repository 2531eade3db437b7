"""Shared fixtures. The environment is pinned before anything imports the app."""
import os
from datetime import datetime, timedelta, timezone

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["APP_ENV"] = "test"
os.environ["OTP_DEBUG"] = "true"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["OTP_EMAIL_SENDER"] = ""
os.environ["SMTP_HOST"] = ""
os.environ["TWILIO_ACCOUNT_SID"] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.database import Base, engine, init_db  # noqa: E402
from app.main import app  # noqa: E402
from app.repositories.accounts import AccountRepository  # noqa: E402
from app.repositories.otp import OtpRepository  # noqa: E402
from app.services.auth import Authenticator  # noqa: E402


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime.now(timezone.utc)

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


class FixedCodes:
    def __init__(self, *codes: str) -> None:
        self._codes = list(codes)
        self._index = 0

    def generate(self) -> str:
        code = self._codes[self._index % len(self._codes)]
        self._index += 1
        return code


class RecordingNotifier:
    def __init__(self) -> None:
        self.sent = []

    def deliver(self, contact, code: str) -> bool:
        self.sent.append((contact, code))
        return True


@pytest.fixture(autouse=True)
def setup_db():
    """Create a fresh database for each test."""
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def otp_repository():
    return OtpRepository()


@pytest.fixture
def account_repository():
    return AccountRepository()


@pytest.fixture
def authenticator(otp_repository, account_repository, notifier, clock):
    return Authenticator(
        otp_repository,
        account_repository,
        notifier=notifier,
        clock=clock,
        code_generator=FixedCodes("123456", "234567", "345678", "456789", "567890"),
    )


@pytest.fixture
def client():
    return TestClient(app)


def login(client, email: str) -> dict:
    requested = client.post("/api/auth/request-otp", json={"email": email})
    assert requested.status_code == 200, requested.text
    code = requested.json()["dev_code"]
    verified = client.post("/api/auth/verify-otp", json={"email": email, "code": code})
    assert verified.status_code == 200, verified.text
    return verified.json()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
