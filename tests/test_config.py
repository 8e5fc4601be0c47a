from __future__ import annotations

from pathlib import Path

import pytest

from resale_dashboard.config import get_settings


def test_get_settings_requires_mongo_uri(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MONGO_URI", raising=False)
    with pytest.raises(RuntimeError, match="MONGO_URI"):
        get_settings()


def test_get_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MONGO_URI", "mongodb://localhost:27017")
    for var in ("MONGO_DB", "RECENT_EVENTS_LIMIT", "DASHBOARD_CURRENCY", "LOG_PATH"):
        monkeypatch.delenv(var, raising=False)

    s = get_settings()
    assert s.mongo_uri == "mongodb://localhost:27017"
    assert s.mongo_db == "resale"
    assert s.recent_events_limit == 10
    assert s.currency == "EUR"
    assert s.log_path == Path("logs/dashboard.log")


def test_get_settings_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MONGO_URI", "mongodb://db:27017")
    monkeypatch.setenv("MONGO_DB", "shop")
    monkeypatch.setenv("RECENT_EVENTS_LIMIT", "5")
    monkeypatch.setenv("DASHBOARD_CURRENCY", "usd")

    s = get_settings()
    assert s.mongo_db == "shop"
    assert s.recent_events_limit == 5
    assert s.currency == "USD"
