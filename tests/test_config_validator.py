"""
Tests for startup configuration validation.
"""

import logging

import pytest


def _config(**kwargs):
    from app.settings import StoreConfig

    values = dict(
        master_host=None, master_port=None, master_password=None, alternate_port=None
    )
    values.update(kwargs)
    return StoreConfig(**values)


@pytest.mark.unit
class TestValidateConfig:
    """validate_config only logs; it never exits."""

    def test_explicit_target(self, caplog):
        from app.config_validator import validate_config

        with caplog.at_level(logging.INFO, logger="app.config_validator"):
            validate_config(_config(master_host="db", master_port="6379", master_password="pw"))

        assert "explicit primary target" in caplog.text

    def test_no_configuration(self, caplog):
        from app.config_validator import validate_config

        with caplog.at_level(logging.INFO, logger="app.config_validator"):
            validate_config(_config())

        assert "in-memory storage" in caplog.text
        assert "Partial" not in caplog.text

    def test_partial_configuration_warns(self, caplog):
        from app.config_validator import validate_config

        with caplog.at_level(logging.INFO, logger="app.config_validator"):
            validate_config(_config(master_host="db"))

        assert "REDIS_MASTER_SERVICE_PORT" in caplog.text
        assert "REDIS_MASTER_SERVICE_PASSWORD" in caplog.text
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_alternate_port(self, caplog):
        from app.config_validator import validate_config

        with caplog.at_level(logging.INFO, logger="app.config_validator"):
            validate_config(_config(alternate_port="6379"))

        assert "redis-master" in caplog.text

    def test_missing_target_vars(self):
        from app.config_validator import missing_target_vars

        assert missing_target_vars(_config(master_port="1")) == [
            "REDIS_MASTER_SERVICE_HOST",
            "REDIS_MASTER_SERVICE_PASSWORD",
        ]


@pytest.mark.unit
class TestStoreConfigFromEnvironment:
    """StoreConfig reads the documented variables."""

    def test_reads_environment(self, monkeypatch):
        from app.settings import StoreConfig

        monkeypatch.setenv("REDIS_MASTER_SERVICE_HOST", "db")
        monkeypatch.setenv("REDIS_MASTER_SERVICE_PORT", "6380")
        monkeypatch.setenv("REDIS_MASTER_SERVICE_PASSWORD", "pw")
        monkeypatch.setenv("REDIS_MASTER_PORT", "")

        config = StoreConfig()

        assert config.master_host == "db"
        assert config.master_port == "6380"
        assert config.master_password == "pw"
        assert config.alternate_port is None

    def test_store_config_is_immutable(self):
        from pydantic import ValidationError

        config = _config()

        with pytest.raises(ValidationError):
            config.master_host = "db"
