"""Tests for configuration loading and logging setup."""

import json
import logging

import pytest
from pydantic import ValidationError

from adminapi.core.config import ClientConfig, Settings
from adminapi.core.logging import JSONFormatter, setup_logging


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # Keep a developer's .env out of the way
    monkeypatch.chdir(tmp_path)
    for name in ("API_BASE_URL", "API_TIMEOUT_MS", "API_MAX_RETRIES", "API_RETRY_DELAY_MS", "LOG_LEVEL", "LOG_JSON"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSettings:
    def test_defaults(self, clean_env):
        config = ClientConfig.from_settings(Settings())
        assert config.base_url == "http://localhost:3000"
        assert config.timeout_ms == 60_000
        assert config.max_retries == 2
        assert config.retry_delay_ms == 1000

    def test_environment_overrides(self, clean_env, monkeypatch):
        monkeypatch.setenv("API_BASE_URL", "https://admin.example.com")
        monkeypatch.setenv("API_TIMEOUT_MS", "15000")
        monkeypatch.setenv("API_MAX_RETRIES", "5")
        monkeypatch.setenv("API_RETRY_DELAY_MS", "0")

        config = ClientConfig.from_settings()
        assert config.base_url == "https://admin.example.com"
        assert config.timeout_seconds == 15.0
        assert config.max_retries == 5
        assert config.retry_delay_ms == 0

    def test_dotenv_file(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text("API_BASE_URL=http://10.0.0.5:3000\nAPI_MAX_RETRIES=1\n")
        config = ClientConfig.from_settings()
        assert config.base_url == "http://10.0.0.5:3000"
        assert config.max_retries == 1


class TestClientConfig:
    def test_negative_retries_rejected(self):
        with pytest.raises(ValidationError):
            ClientConfig(max_retries=-1)

    def test_negative_delay_rejected(self):
        with pytest.raises(ValidationError):
            ClientConfig(retry_delay_ms=-5)

    def test_zero_timeout_rejected(self):
        with pytest.raises(ValidationError):
            ClientConfig(timeout_ms=0)

    def test_frozen(self):
        config = ClientConfig()
        with pytest.raises(ValidationError):
            config.max_retries = 10

    def test_default_headers(self):
        assert ClientConfig().headers == {"Accept": "application/json"}


class TestLogging:
    def test_json_formatter_includes_transport_fields(self):
        record = logging.LogRecord(
            name="adminapi.transport.client",
            level=logging.WARNING,
            pathname=__file__,
            lineno=1,
            msg="[api retry] retry %d/%d",
            args=(1, 2),
            exc_info=None,
        )
        record.method = "POST"
        record.path = "/email/addEmail"
        record.attempt = 1
        record.error_code = "ETIMEDOUT"

        data = json.loads(JSONFormatter().format(record))
        assert data["level"] == "WARNING"
        assert data["logger"] == "adminapi.transport.client"
        assert data["message"] == "[api retry] retry 1/2"
        assert data["method"] == "POST"
        assert data["path"] == "/email/addEmail"
        assert data["attempt"] == 1
        assert data["error_code"] == "ETIMEDOUT"
        assert "status" not in data

    def test_json_formatter_keeps_non_ascii(self):
        record = logging.LogRecord("adminapi", logging.INFO, __file__, 1, "subject=%s", ("验证码",), None)
        assert "验证码" in JSONFormatter().format(record)

    def test_setup_logging_json(self, restore_root_logger):
        setup_logging(Settings(log_level="debug", log_json=True))

        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_setup_logging_text(self, restore_root_logger):
        setup_logging(Settings(log_level="warning", log_json=False))

        root = restore_root_logger
        assert root.level == logging.WARNING
        assert not isinstance(root.handlers[0].formatter, JSONFormatter)
