"""Tests for environment configuration."""
import pytest

from habitquest.config import load_settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("MONGODB_URL", "DATABASE_URL", "PROFILE_DB_NAME", "GOALS_DB_NAME", "PORT", "LOG_LEVEL"):
        # set-then-delete so teardown also removes values loaded from .env
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


def test_missing_mongodb_url_is_fatal(clean_env, tmp_path):
    with pytest.raises(RuntimeError):
        load_settings(str(tmp_path / "missing.env"))


def test_goal_store_defaults_to_profile_store(clean_env, tmp_path):
    clean_env.setenv("MONGODB_URL", "mongodb://profiles:27017")
    settings = load_settings(str(tmp_path / "missing.env"))
    assert settings.database_url == "mongodb://profiles:27017"
    assert settings.port == 5002


def test_reads_env_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "MONGODB_URL=mongodb://profiles:27017\n"
        "DATABASE_URL=mongodb://goals:27017\n"
        "PORT=8080\n"
        "LOG_LEVEL=debug\n"
    )
    settings = load_settings(str(env_file))
    assert settings.database_url == "mongodb://goals:27017"
    assert settings.port == 8080
    assert settings.log_level == "DEBUG"
