"""
Unit tests for the shared/ utility modules.

Covers:
- shared.validators  (require, ensure_valid_url)
- shared.logging     (redact_sensitive_fields, configure_structlog, setup_logging)
"""

from __future__ import annotations

import pytest
import structlog

from config import AppSettings, LoggingSettings
from errors import InvalidArgumentError
from shared.logging import (
    configure_structlog,
    redact_sensitive_fields,
    setup_logging,
)
from shared.validators import ensure_valid_url, require


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()


# ---------------------------------------------------------------------------
# shared.validators — require
# ---------------------------------------------------------------------------


class TestRequire:
    @pytest.mark.parametrize(
        "value",
        ["x", 0, "", False, []],
        ids=["str", "zero", "empty_str", "false", "empty_list"],
    )
    def test_returns_value_unless_none(self, value):
        assert require(value, "should not raise") is value

    def test_none_raises_with_message_and_field(self):
        with pytest.raises(InvalidArgumentError) as exc:
            require(None, "units cannot be None.", field="units")
        assert exc.value.message == "units cannot be None."
        assert exc.value.field == "units"


# ---------------------------------------------------------------------------
# shared.validators — ensure_valid_url
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "url",
    [
        "https://api.darksky.net/forecast/abc123/52.52,13.405?lang=de&units=si",
        "https://api.darksky.net/forecast/abc123/-33.8688,151.2093?lang=en&units=us&exclude=hourly,daily&extend=hourly",
        "http://forecast.example.com/v2/abc123/0.0,0.0?lang=de&units=ca",
    ],
    ids=["default", "all_params", "override_host"],
)
def test_ensure_valid_url_accepts(url):
    assert ensure_valid_url(url) == url


@pytest.mark.parametrize(
    "url",
    [
        "not a url?lang=de&units=si",
        "api.darksky.net/forecast/abc/1.0,2.0?lang=de&units=si",
        "https://api dark sky.net/forecast?lang=de",
    ],
    ids=["plain_text", "missing_scheme", "space_in_host"],
)
def test_ensure_valid_url_rejects(url):
    with pytest.raises(InvalidArgumentError) as exc:
        ensure_valid_url(url)
    assert exc.value.field == "url"
    assert exc.value.details == url
    assert exc.value.__cause__ is not None


# ---------------------------------------------------------------------------
# shared.logging
# ---------------------------------------------------------------------------


class TestRedactSensitiveFields:
    def test_redacts_credentials(self):
        event = {
            "event": "forecast_request_built",
            "api_key": "abc123",
            "secret_value": "s",
            "url": "https://api.darksky.net/forecast/abc123/1.0,2.0",
        }
        out = redact_sensitive_fields(None, "info", event)
        assert out["api_key"] == "***REDACTED***"
        assert out["secret_value"] == "***REDACTED***"
        assert out["url"] == "***REDACTED***"

    def test_keeps_reserved_and_plain_fields(self):
        event = {"event": "forecast_request_built", "level": "info", "units": "si"}
        out = redact_sensitive_fields(None, "info", dict(event))
        assert out == event


class TestConfigureStructlog:
    @pytest.mark.parametrize(
        "log_format, renderer",
        [
            ("json", structlog.processors.JSONRenderer),
            ("console", structlog.dev.ConsoleRenderer),
        ],
        ids=["json", "console"],
    )
    def test_renderer_selected(self, reset_structlog, log_format, renderer):
        configure_structlog(log_format)
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], renderer)
        assert redact_sensitive_fields in processors


class TestSetupLogging:
    @pytest.mark.parametrize(
        "env, log_format, renderer",
        [
            ("production", None, structlog.processors.JSONRenderer),
            ("development", None, structlog.dev.ConsoleRenderer),
            ("development", "json", structlog.processors.JSONRenderer),
            ("production", "console", structlog.dev.ConsoleRenderer),
        ],
        ids=["prod_default", "dev_default", "explicit_json", "explicit_console"],
    )
    def test_renderer_follows_environment(
        self, reset_structlog, env, log_format, renderer
    ):
        settings = AppSettings(
            env=env, logging=LoggingSettings(log_level="DEBUG", log_format=log_format)
        )
        setup_logging(settings)
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], renderer)

    def test_defaults_from_env(self, reset_structlog, monkeypatch):
        monkeypatch.setenv("ENV", "production")
        monkeypatch.delenv("LOG_FORMAT", raising=False)
        setup_logging()
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
