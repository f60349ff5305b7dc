from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from storefront.core.config import Settings
from storefront.main import create_app


class FakeClock:
    """Manually advanced UTC clock for TTL and timestamp assertions."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        exchange_rate_provider="static",
        upload_dir=tmp_path / "uploads",
    )


@pytest.fixture
def app(settings):
    return create_app(settings_override=settings)


@pytest.fixture
def client(app):
    return TestClient(app)
