import json
import logging
from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_config_logger = logging.getLogger(__name__)

_SETTINGS_FILE = Path("data/settings.json")
_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)
_PROVIDER_KEYS = frozenset({
    "medium_username",
    "credly_username",
})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Portfolio CMS API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///data/portfolio.db"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Record store: "database" uses the local database, "http" a remote deployment
    record_store_backend: str = "database"
    remote_api_url: str = "http://localhost:8030/api/v1"
    remote_api_key: str = ""
    remote_timeout_seconds: float = 10.0

    # Local persistence store (JSON key-value file)
    local_store_path: str = "data/local_store.json"

    # File upload & storage
    upload_dir: str = "uploads"
    public_upload_url: str = "/uploads"
    max_upload_size_mb: int = 10

    # Rate limits: attempts per window, keyed by operation
    rate_limit_window_seconds: float = 60.0
    rate_limit_create: int = 5
    rate_limit_update: int = 10
    rate_limit_delete: int = 5
    rate_limit_read: int = 30
    rate_limit_sweep_seconds: float = 3600.0

    # Owner authentication
    admin_email: str = "admin@portfolio.local"
    admin_password: str = ""
    session_ttl_seconds: int = 8 * 3600

    # Third-party feeds
    medium_username: str = ""
    credly_username: str = ""
    provider_timeout_seconds: float = 15.0
    medium_feed_api: str = "https://api.rss2json.com/v1/api.json"
    credly_base_url: str = "https://www.credly.com"
    credly_proxies: list[str] = [
        "https://corsproxy.io/?{url}",
        "https://api.allorigins.win/raw?url={url}",
        "https://api.codetabs.com/v1/proxy?quest={url}",
    ]

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine: SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore: outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_migration: str = "INFO"        # MigrationRunner pipeline
    log_level_providers: str = "INFO"        # Medium / Credly providers

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Merge runtime overrides from data/settings.json into provider settings."""
        if _SETTINGS_FILE.exists():
            try:
                overrides = json.loads(_SETTINGS_FILE.read_text("utf-8"))
                for key in _PROVIDER_KEYS:
                    if key in overrides and isinstance(overrides[key], str):
                        object.__setattr__(self, key, overrides[key])
            except Exception as exc:
                _config_logger.warning("Could not load settings overrides: %s", exc)


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
