from __future__ import annotations

import logging
from pathlib import Path

import pytest

from scout_dashboard.config import get_settings

_VARS = (
    "MONGO_URI", "MONGO_DB", "MONGO_TLS", "MONGO_TIMEOUT_MS",
    "CONTRACT_HORIZON_MONTHS", "EXPIRING_LIMIT", "TOP_N",
    "DASHBOARD_SCHEDULER", "LOG_LEVEL", "LOG_PATH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = get_settings()
    assert s.mongo_db == "scouting"
    assert s.mongo_tls is False
    assert s.contract_horizon_months == 12
    assert s.expiring_limit == 20
    assert s.top_n == 10
    assert s.scheduler == "threads"
    assert s.log_level == logging.INFO
    assert s.log_path is None


def test_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MONGO_TLS", "true")
    monkeypatch.setenv("CONTRACT_HORIZON_MONTHS", "6")
    monkeypatch.setenv("DASHBOARD_SCHEDULER", "sync")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_PATH", "logs/dashboard.log")
    s = get_settings()
    assert s.mongo_tls is True
    assert s.contract_horizon_months == 6
    assert s.scheduler == "sync"
    assert s.log_level == logging.DEBUG
    assert s.log_path == Path("logs/dashboard.log")


@pytest.mark.parametrize(
    "name, value",
    [("TOP_N", "ten"), ("TOP_N", "0"), ("MONGO_TIMEOUT_MS", "-5"), ("LOG_LEVEL", "LOUD")],
)
def test_invalid_values_raise(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(RuntimeError, match=name):
        get_settings()
