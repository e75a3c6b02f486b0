"""Shared fixtures for the test modules: settings, a controllable clock and a fake bucket."""
import unittest
from datetime import datetime, timedelta, timezone

from config import Settings
from database import build_engine, build_session_factory, init_db


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite+aiosqlite://",
        "jwt_secret": "test-secret",
        "default_otp": "123456",
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeClock:
    """Starts at the real current time so issued tokens are not already expired."""

    def __init__(self, start: datetime = None):
        self.now = start or datetime.now(timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeStorage:
    def __init__(self):
        self.uploads = []

    async def upload(self, content: bytes, filename: str) -> str:
        self.uploads.append((filename, content))
        return f"https://storage.test/public/trade-licenses/{len(self.uploads)}_{filename}"


class DatabaseTestCase(unittest.IsolatedAsyncioTestCase):
    """Fresh in-memory SQLite database and session per test."""

    async def asyncSetUp(self):
        self.clock = FakeClock()
        self.engine = build_engine(make_settings())
        await init_db(self.engine)
        self.session = build_session_factory(self.engine)()

    async def asyncTearDown(self):
        await self.session.close()
        await self.engine.dispose()
