"""Tests for settings helpers."""

import pytest

from opportunity_api.core.settings import Settings, _coerce_async_url


@pytest.mark.parametrize(
    "url,expected",
    [
        ("postgres://u:p@h/db", "postgresql+asyncpg://u:p@h/db"),
        ("postgresql://u:p@h/db", "postgresql+asyncpg://u:p@h/db"),
        ("sqlite:///./local.db", "sqlite+aiosqlite:///./local.db"),
        ("sqlite+aiosqlite:///./local.db", "sqlite+aiosqlite:///./local.db"),
        ("", ""),
    ],
)
def test_coerce_async_url(url: str, expected: str) -> None:
    assert _coerce_async_url(url) == expected


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("WORKSPACE_ID", "ws-42")
    monkeypatch.setenv("csv_quote_values", "true")
    s = Settings()
    assert s.WORKSPACE_ID == "ws-42"
    assert s.CSV_QUOTE_VALUES is True
