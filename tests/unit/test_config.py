"""Tests for environment-driven configuration."""

from ridebook.config import Config


class TestConfig:
    """Tests for Config defaults and overrides."""

    def test_allocation_defaults(self, monkeypatch):
        monkeypatch.setenv("RIDEBOOK_DATABASE_URL", "memory://")

        config = Config(_env_file=None)

        assert config.database_url == "memory://"
        assert config.allocation_max_attempts == 5
        assert config.allocation_base_delay == 0.01
        assert config.allocation_max_delay == 0.5
        assert config.debug is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("RIDEBOOK_DATABASE_URL", "mongodb://localhost:27017/ridebook")
        monkeypatch.setenv("RIDEBOOK_ALLOCATION_MAX_ATTEMPTS", "8")
        monkeypatch.setenv("RIDEBOOK_CORS_ORIGINS", '["http://localhost:3000"]')

        config = Config(_env_file=None)

        assert config.database_url == "mongodb://localhost:27017/ridebook"
        assert config.allocation_max_attempts == 8
        assert config.cors_origins == ["http://localhost:3000"]
