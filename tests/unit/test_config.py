"""
Unit tests for configuration: environment settings and the JSON run
configuration document.
"""

import json
import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from browserkit.config.json_config import JsonConfigSource
from browserkit.config.settings import (
    BrowserSettings,
    Settings,
    WaitSettings,
    get_settings,
    reload_settings,
)
from browserkit.core.exceptions import ConfigurationException, ErrorCategory


class TestJsonConfigSource:
    """Test reading the JSON run configuration."""

    def test_reads_values_as_strings(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"url": "https://example.test", "driver": "CHROME", "retries": 3}))

        config = JsonConfigSource(path)

        assert config.get("url") == "https://example.test"
        assert config.get("driver") == "CHROME"
        assert config.get("retries") == "3"

    def test_missing_file_is_fatal(self, tmp_path):
        with pytest.raises(ConfigurationException) as exc_info:
            JsonConfigSource(tmp_path / "missing.json")

        assert exc_info.value.category == ErrorCategory.CONFIGURATION
        assert "missing.json" in exc_info.value.source

    def test_invalid_json_is_fatal(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationException) as exc_info:
            JsonConfigSource(path)

        assert isinstance(exc_info.value.original_exception, json.JSONDecodeError)

    def test_root_must_be_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(["CHROME"]))

        with pytest.raises(ConfigurationException, match="JSON object"):
            JsonConfigSource(path)

    def test_missing_and_null_keys(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"url": None}))
        config = JsonConfigSource(path)

        assert not config.contains("url")
        assert not config.contains("driver")

        with pytest.raises(ConfigurationException) as exc_info:
            config.get("url")
        assert exc_info.value.key == "url"

    def test_get_any_returns_first_present_key(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"driver": "EDGE"}))
        config = JsonConfigSource(path)

        assert config.get_any("browser", "driver") == "EDGE"

        with pytest.raises(ConfigurationException):
            config.get_any("browser", "engine")

    def test_as_dict_is_a_copy(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"url": "https://example.test"}))
        config = JsonConfigSource(path)

        data = config.as_dict()
        data["url"] = "changed"

        assert config.get("url") == "https://example.test"

    def test_document_is_read_once(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"url": "https://first.test"}))
        config = JsonConfigSource(path)

        path.write_text(json.dumps({"url": "https://second.test"}))

        assert config.get("url") == "https://first.test"


class TestSettings:
    """Test settings defaults, validation and environment overrides."""

    def setup_method(self):
        """Reset cached settings before each test."""
        get_settings.cache_clear()

    def teardown_method(self):
        get_settings.cache_clear()

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.browser.name == "chrome"
        assert settings.browser.chrome_channel == "chromium"
        assert settings.browser.edge_channel == "msedge"
        assert settings.waits.poll_interval == 0.25
        assert settings.reporting.screenshot_on_failure is True

    def test_environment_overrides_nested_values(self):
        env = {
            "BROWSER__NAME": "FireFox",
            "BROWSER__HEADLESS": "false",
            "WAITS__POLL_INTERVAL": "0.1",
            "LOGGING__LEVEL": "debug",
        }
        with patch.dict(os.environ, env):
            settings = Settings(_env_file=None)

        assert settings.browser.name == "firefox"
        assert settings.browser.headless is False
        assert settings.waits.poll_interval == 0.1
        assert settings.logging.level == "DEBUG"

    def test_env_file_is_loaded(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("BROWSER__NAME=safari\nWAITS__EXPLICIT_TIMEOUT=3\n")

        settings = Settings(_env_file=env_file)

        assert settings.browser.name == "safari"
        assert settings.waits.explicit_timeout == 3.0

    def test_unsupported_browser_name_is_rejected(self):
        with pytest.raises(ValidationError):
            BrowserSettings(name="opera")

    def test_invalid_wait_values_are_rejected(self):
        with pytest.raises(ValidationError):
            WaitSettings(poll_interval=0)
        with pytest.raises(ValidationError):
            WaitSettings(implicit_timeout=-1)

    @pytest.mark.parametrize("field, value", [
        ("chrome_channel", ""),
        ("chrome_channel", "msedge"),
        ("chrome_channel", "opera"),
        ("edge_channel", "  "),
        ("edge_channel", "chrome-beta"),
    ])
    def test_channel_must_belong_to_its_family(self, field, value):
        with pytest.raises(ValidationError):
            BrowserSettings(**{field: value})

    def test_channel_assignment_is_validated(self):
        browser = BrowserSettings()

        with pytest.raises(ValidationError):
            browser.chrome_channel = ""

        browser.edge_channel = "msedge-dev"
        assert browser.edge_channel == "msedge-dev"

    def test_args_parsed_from_string(self):
        assert BrowserSettings(args="--disable-gpu, --no-sandbox").args == ["--disable-gpu", "--no-sandbox"]

    def test_launch_options(self):
        settings = Settings(_env_file=None, browser=BrowserSettings(headless=False, slow_mo=50))

        options = settings.get_browser_launch_options(channel="msedge")

        assert options["headless"] is False
        assert options["slow_mo"] == 50
        assert options["channel"] == "msedge"
        assert "channel" not in settings.get_browser_launch_options()

    def test_context_options(self):
        settings = Settings(_env_file=None, browser=BrowserSettings(viewport_width=1280, viewport_height=720))

        options = settings.get_context_options()

        assert options["viewport"] == {"width": 1280, "height": 720}
        assert options["locale"] == "en-US"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_reload_settings_returns_new_instance(self):
        first = get_settings()

        assert reload_settings() is not first
