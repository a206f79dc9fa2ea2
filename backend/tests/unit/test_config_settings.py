"""Unit tests for application settings configuration."""

from pathlib import Path

from portfolio_cms.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_rate_limit_defaults():
    settings = Settings(_env_file=None)
    assert (settings.rate_limit_create, settings.rate_limit_update) == (5, 10)
    assert (settings.rate_limit_delete, settings.rate_limit_read) == (5, 30)
    assert settings.rate_limit_window_seconds == 60.0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("RECORD_STORE_BACKEND", "http")
    monkeypatch.setenv("RATE_LIMIT_READ", "3")
    settings = Settings(_env_file=None)
    assert settings.record_store_backend == "http"
    assert settings.rate_limit_read == 3


def test_credly_proxies_are_url_templates():
    settings = Settings(_env_file=None)
    assert all("{url}" in proxy for proxy in settings.credly_proxies)
