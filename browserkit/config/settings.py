# browserkit/config/settings.py
"""
Typed runtime settings for browserkit, loaded with pydantic-settings.

Values come from, highest precedence first: process environment,
``.env.local``, ``.env``, then the defaults declared below. Nested
sections are addressed with a double underscore::

    BROWSER__NAME=firefox
    BROWSER__HEADLESS=false
    WAITS__POLL_INTERVAL=0.1
    LOGGING__JSON_FORMAT=true

The handle factory reads launch and context options from here, the wait
engine its default timeouts, and the pytest plugin its reporting options.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from browserkit.core.browser_constants import BrowserDefaults, BrowserType, family_for_channel

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class BrowserSettings(BaseModel):
    """Default browser family and the options it is launched with."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    name: str = Field(
        default="chrome",
        description="Family used by SettingsBrowserProvider: chrome, firefox, edge or safari"
    )
    headless: bool = Field(default=True)
    slow_mo: int = Field(default=0, ge=0, le=5000, description="Delay in ms inserted before each engine call")

    viewport_width: int = Field(default=BrowserDefaults.DEFAULT_VIEWPORT_WIDTH, ge=320, le=3840)
    viewport_height: int = Field(default=BrowserDefaults.DEFAULT_VIEWPORT_HEIGHT, ge=240, le=2160)
    locale: str = Field(default=BrowserDefaults.DEFAULT_LOCALE)
    timezone_id: str = Field(default=BrowserDefaults.DEFAULT_TIMEZONE)

    timeout: int = Field(
        default=BrowserDefaults.LAUNCH_TIMEOUT,
        ge=1000,
        le=300000,
        description="Milliseconds allowed for the browser process to start"
    )
    navigation_timeout: int = Field(
        default=BrowserDefaults.NAVIGATION_TIMEOUT,
        ge=1000,
        le=300000,
        description="Milliseconds allowed for navigate_to"
    )

    chrome_channel: str = Field(
        default=BrowserDefaults.CHROME_CHANNEL,
        description="Chromium build for CHROME, e.g. chromium, chrome or chrome-beta"
    )
    edge_channel: str = Field(
        default=BrowserDefaults.EDGE_CHANNEL,
        description="Chromium build for EDGE, e.g. msedge or msedge-beta"
    )

    args: List[str] = Field(
        default_factory=list,
        description="Extra command line switches; a comma separated string is accepted"
    )

    @field_validator("name")
    @classmethod
    def check_family(cls, value: str) -> str:
        family = value.strip().lower()
        known = sorted(member.value.lower() for member in BrowserType)
        if family not in known:
            raise ValueError(f"Unsupported browser: {value}. Choose from {known}")
        return family

    @field_validator("chrome_channel", "edge_channel")
    @classmethod
    def check_channel(cls, value: str, info: ValidationInfo) -> str:
        channel = value.strip()
        expected = BrowserType.CHROME if info.field_name == "chrome_channel" else BrowserType.EDGE
        actual = family_for_channel(channel)
        if actual is not expected:
            found = actual.value if actual else "no family"
            raise ValueError(f"{info.field_name}={value!r} selects {found}, expected a {expected.value} channel")
        return channel

    @field_validator("args", mode="before")
    @classmethod
    def split_args(cls, value) -> List[str]:
        if isinstance(value, str):
            value = value.split(",")
        return [item.strip() for item in value or [] if item.strip()]


class WaitSettings(BaseModel):
    """Wait engine defaults, in seconds."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    implicit_timeout: float = Field(default=10.0, ge=0, le=300)
    explicit_timeout: float = Field(default=10.0, gt=0, le=300)
    poll_interval: float = Field(default=0.25, gt=0, le=5)


class LoggingSettings(BaseModel):
    """Options passed to ``setup_logging`` on first logger use."""
    model_config = ConfigDict(extra="forbid")

    level: str = Field(default="INFO")
    json_format: bool = Field(default=False, description="One JSON object per line instead of console text")
    console_enabled: bool = Field(default=True)
    file_enabled: bool = Field(default=False)
    file_path: Path = Field(default=Path("logs/browserkit.log"))
    max_file_size_mb: int = Field(default=100, ge=1, le=1000)
    backup_count: int = Field(default=5, ge=1, le=30)
    correlation_id_enabled: bool = Field(default=True)

    @field_validator("level")
    @classmethod
    def check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {value}. Choose from {list(LOG_LEVELS)}")
        return level


class ReportingSettings(BaseModel):
    """What the pytest plugin does around a test run."""
    model_config = ConfigDict(extra="forbid")

    screenshot_on_failure: bool = Field(default=True)
    screenshot_dir: Path = Field(default=Path("screenshots"))
    config_file: Path = Field(
        default=Path("config.json"),
        description="JSON run configuration holding 'url' and 'driver' or 'browser'"
    )


class Settings(BaseSettings):
    """Root settings object; see the module docstring for sources."""

    model_config = SettingsConfigDict(
        env_file=[".env", ".env.local"],
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    waits: WaitSettings = Field(default_factory=WaitSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    reporting: ReportingSettings = Field(default_factory=ReportingSettings)

    def get_browser_launch_options(self, channel: Optional[str] = None) -> Dict[str, Any]:
        """Keyword arguments for ``BrowserType.launch``."""
        browser = self.browser
        options: Dict[str, Any] = dict(
            headless=browser.headless,
            slow_mo=browser.slow_mo,
            timeout=browser.timeout,
            args=list(browser.args),
        )
        if channel:
            options["channel"] = channel
        return options

    def get_context_options(self) -> Dict[str, Any]:
        """Keyword arguments for ``Browser.new_context``."""
        browser = self.browser
        return dict(
            viewport={"width": browser.viewport_width, "height": browser.viewport_height},
            locale=browser.locale,
            timezone_id=browser.timezone_id,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Process-wide settings, built once.

    Example:
        >>> get_settings().waits.poll_interval
        0.25
    """
    return Settings()


def reload_settings() -> Settings:
    """Drop the cached instance and read every source again."""
    get_settings.cache_clear()
    return get_settings()
