from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from substation_backend.dependencies import DashboardSession
from substation_backend.main import create_app
from substation_backend.seed_data import demo_alerts


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 12, 28, 14, 15, 0))


@pytest.fixture
def alerts():
    return demo_alerts()


@pytest.fixture
def a205(alerts):
    return alerts[0]


@pytest.fixture
def db_path(tmp_path, monkeypatch) -> str:
    path = str(tmp_path / "maintenance.db")
    monkeypatch.setenv("MAINTENANCE_DB_PATH", path)
    monkeypatch.delenv("ALERT_STORE_URL", raising=False)
    return path


@pytest.fixture
def session(clock) -> DashboardSession:
    return DashboardSession(clock=clock, alert_loader=demo_alerts)


@pytest.fixture
def client(session, monkeypatch) -> TestClient:
    monkeypatch.setenv("ALERT_REFRESH_DELAY_S", "0")
    monkeypatch.setenv("CHAT_MODE", "llm")
    monkeypatch.delenv("DEEPSEEK_API_KEY", raising=False)
    return TestClient(create_app(session=session))
