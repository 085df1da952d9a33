import logging
from pathlib import Path

from solarclock.config import Settings


def test_defaults(monkeypatch):
    for var in ("SOLARCLOCK_LOCATIONS", "SOLARCLOCK_REFRESH_SECONDS", "SOLARCLOCK_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    settings = Settings.from_env()
    assert settings.locations_path == Path("solarclock.cnf")
    assert settings.refresh_seconds == 5.0
    assert settings.log_level == "WARNING"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("SOLARCLOCK_LOCATIONS", str(tmp_path / "places.cnf"))
    monkeypatch.setenv("SOLARCLOCK_REFRESH_SECONDS", "2.5")
    monkeypatch.setenv("SOLARCLOCK_LOG_LEVEL", "debug")
    settings = Settings.from_env()
    assert settings.locations_path == tmp_path / "places.cnf"
    assert settings.refresh_seconds == 2.5
    assert settings.log_level == "DEBUG"


def test_non_numeric_refresh_falls_back_to_default(monkeypatch, caplog):
    monkeypatch.setenv("SOLARCLOCK_REFRESH_SECONDS", "soon")
    with caplog.at_level(logging.WARNING, logger="solarclock.config"):
        settings = Settings.from_env()
    assert settings.refresh_seconds == 5.0
    assert "SOLARCLOCK_REFRESH_SECONDS" in caplog.text
