from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from tasktracker.main import create_app
from tasktracker.services.clock import FixedClock
from tasktracker.services.container import build_services
from tasktracker.services.settings import Settings


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(database_url=f"sqlite:///{tmp_path / 'tasks.db'}", timezone="UTC")


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 3, 14, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def services(settings: Settings, clock: FixedClock):
    svc = build_services(settings, clock=clock)
    svc.db.create_tables()
    yield svc
    svc.db.dispose()


@pytest.fixture
def app(services):
    return create_app(services.settings, services=services)


@pytest.fixture
def client(app) -> TestClient:
    with TestClient(app) as c:
        yield c
    app.dependency_overrides = {}
