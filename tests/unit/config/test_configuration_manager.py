"""Tests for configuration loading, interpolation and validation."""
import json
import os
from unittest.mock import patch

import pytest

from natgateway.config import AppConfig, ConfigurationManager, LogDestination, LogLevel
from natgateway.config.defaults import deep_update, interpolate_values
from natgateway.domain.core.exceptions import ConfigurationError


class TestInterpolation:
    """Test ${VAR:default} expansion."""

    def test_uses_environment_value(self):
        with patch.dict(os.environ, {"TEST_VAR": "/test/path"}):
            assert interpolate_values("${TEST_VAR:/default}/sub") == "/test/path/sub"

    def test_uses_default_when_unset(self):
        with patch.dict(os.environ, {}, clear=True):
            assert interpolate_values("${TEST_VAR:/default}") == "/default"
            assert interpolate_values("${TEST_VAR:}") == ""

    def test_unset_without_default_is_kept(self):
        with patch.dict(os.environ, {}, clear=True):
            assert interpolate_values("${TEST_VAR}") == "${TEST_VAR}"

    def test_nested_values(self):
        with patch.dict(os.environ, {"TEST_VAR": "x"}):
            config = {"a": ["${TEST_VAR}", 1], "b": {"c": "${TEST_VAR:y}"}, "d": None}
            assert interpolate_values(config) == {"a": ["x", 1], "b": {"c": "x"}, "d": None}

    def test_deep_update(self):
        target = {"a": {"b": 1, "c": 2}, "d": 3}
        deep_update(target, {"a": {"b": 10}, "e": 5})
        assert target == {"a": {"b": 10, "c": 2}, "d": 3, "e": 5}


class TestConfigurationManager:

    def test_defaults(self):
        app_config = ConfigurationManager().get_app_config()

        assert app_config.aws.region == "us-east-1"
        assert app_config.aws.endpoint_url is None
        assert app_config.handler.callback_delay_seconds == 15
        assert app_config.handler.stabilization_timeout_seconds == 1800
        assert app_config.handler.list_page_size is None
        assert app_config.handler.reserved_tag_prefix == "aws:"
        assert app_config.logging.level == LogLevel.INFO
        assert app_config.logging.destination == LogDestination.STDOUT

    def test_config_file(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({
            "AWS_REGION": "eu-west-1",
            "HANDLER_CONFIG": {"callback_delay_seconds": 5, "list_page_size": 20},
            "LOGGING_CONFIG": {"level": "debug"},
        }))

        app_config = ConfigurationManager(str(config_file)).get_app_config()

        assert app_config.aws.region == "eu-west-1"
        assert app_config.handler.callback_delay_seconds == 5
        assert app_config.handler.list_page_size == 20
        assert app_config.handler.stabilization_timeout_seconds == 1800
        assert app_config.logging.level == LogLevel.DEBUG

    def test_config_file_from_environment(self, tmp_path, monkeypatch):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"AWS_REGION": "ap-south-1"}))
        monkeypatch.setenv("NATGW_CONFIG_FILE", str(config_file))

        assert ConfigurationManager().get_config()["AWS_REGION"] == "ap-south-1"

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"AWS_REGION": "eu-west-1"}))
        monkeypatch.setenv("AWS_REGION", "us-west-2")

        assert ConfigurationManager(str(config_file)).get_config()["AWS_REGION"] == "us-west-2"

    def test_log_settings_from_environment(self, monkeypatch):
        monkeypatch.setenv("NATGW_LOG_LEVEL", "warning")
        monkeypatch.setenv("NATGW_LOGDIR", "/var/log/natgw")

        logging_config = ConfigurationManager().get_app_config().logging

        assert logging_config.level == LogLevel.WARNING
        assert logging_config.file.path == "/var/log/natgw/natgateway.log"

    def test_handler_settings_from_environment(self, tmp_path, monkeypatch):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"HANDLER_CONFIG": {"callback_delay_seconds": 5}}))
        monkeypatch.setenv("NATGW_CALLBACK_DELAY_SECONDS", "30")
        monkeypatch.setenv("NATGW_STABILIZATION_TIMEOUT_SECONDS", "600")
        monkeypatch.setenv("NATGW_LIST_PAGE_SIZE", "50")
        monkeypatch.setenv("NATGW_RESERVED_TAG_PREFIX", "sys:")

        handler_config = ConfigurationManager(str(config_file)).get_app_config().handler

        assert handler_config.callback_delay_seconds == 30
        assert handler_config.stabilization_timeout_seconds == 600
        assert handler_config.list_page_size == 50
        assert handler_config.reserved_tag_prefix == "sys:"

    def test_invalid_handler_setting_from_environment_raises(self, monkeypatch):
        monkeypatch.setenv("NATGW_LIST_PAGE_SIZE", "2")
        with pytest.raises(ConfigurationError):
            ConfigurationManager().get_app_config()

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigurationManager(str(tmp_path / "missing.json"))

    def test_non_object_file_raises(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text("[1, 2]")
        with pytest.raises(ConfigurationError):
            ConfigurationManager(str(config_file))

    def test_invalid_values_raise(self):
        manager = ConfigurationManager()
        with pytest.raises(ConfigurationError) as exc_info:
            manager.update_config({"AWS_REQUEST_RETRY_ATTEMPTS": 50, "LOGGING_CONFIG": {"level": "LOUD"}})
        assert "AWS_REQUEST_RETRY_ATTEMPTS must be at most 10" in str(exc_info.value)
        assert "Invalid log level: LOUD" in str(exc_info.value)

    def test_missing_region_raises(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigurationManager().update_config({"AWS_REGION": ""})
        assert exc_info.value.missing_fields == ["AWS_REGION"]

    def test_invalid_handler_settings_raise(self):
        manager = ConfigurationManager()
        manager.update_config({"HANDLER_CONFIG": {"list_page_size": 2}})
        with pytest.raises(ConfigurationError):
            manager.get_app_config()


class TestAppConfig:

    def test_client_config(self):
        app_config = AppConfig.from_dict({
            "AWS_REGION": "us-east-2",
            "AWS_ENDPOINT_URL": "http://localhost:4566",
            "AWS_CONNECTION_TIMEOUT_MS": "2000",
            "AWS_REQUEST_RETRY_ATTEMPTS": 5,
        })
        assert app_config.aws.to_client_config() == {
            "AWS_ENDPOINT_URL": "http://localhost:4566",
            "AWS_CONNECTION_TIMEOUT_MS": 2000,
            "AWS_REQUEST_RETRY_ATTEMPTS": 5,
        }
