"""Tests for Settings defaults, environment overrides, and the get_settings cache."""

from __future__ import annotations

from pathlib import Path

import pytest

from auction.config import Settings, get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    """Clear get_settings lru_cache before each test."""
    get_settings.cache_clear()


class TestSettings:
    def test_defaults(self) -> None:
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.production is False
        assert s.db_path == Path("data/auction.db")
        assert s.auction_id == "default"
        assert s.transfer_attempts == 3

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("AUCTION_PRODUCTION", "true")
        monkeypatch.setenv("AUCTION_DB_PATH", str(tmp_path / "a.db"))
        monkeypatch.setenv("AUCTION_AUCTION_ID", "lot-7")
        monkeypatch.setenv("AUCTION_TRANSFER_ATTEMPTS", "5")

        s = Settings(_env_file=None)  # type: ignore[call-arg]

        assert s.production is True
        assert s.db_path == tmp_path / "a.db"
        assert s.auction_id == "lot-7"
        assert s.transfer_attempts == 5


class TestGetSettings:
    def test_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_invalid_settings_exit(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AUCTION_TRANSFER_ATTEMPTS", "0")
        with pytest.raises(SystemExit) as exc_info:
            get_settings()
        assert exc_info.value.code == 1
