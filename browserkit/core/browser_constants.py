# browserkit/core/browser_constants.py
"""
Browser Management Constants

This module defines the closed set of supported browser families and
how each one maps onto a Playwright engine and channel. The factory and
the window manager both read ENGINE_SPECS.
"""

from enum import Enum
from typing import Dict, NamedTuple, Optional, Tuple

from browserkit.core.exceptions import BrowserException, UnsupportedBrowserException


class BrowserType(str, Enum):
    """Supported browser families."""

    CHROME = "CHROME"
    FIREFOX = "FIREFOX"
    EDGE = "EDGE"
    SAFARI = "SAFARI"
    IE = "IE"

    @classmethod
    def from_string(cls, value: str) -> "BrowserType":
        """
        Map an identifier onto the enumeration, case-insensitively.

        Raises:
            UnsupportedBrowserException: If the value names no known family
        """
        if isinstance(value, cls):
            return value

        normalized = value.strip().upper() if isinstance(value, str) else None
        if normalized:
            for member in cls:
                if member.value == normalized:
                    return member

        raise UnsupportedBrowserException(
            f"Unsupported browser: {value!r}",
            requested=str(value),
            supported=[member.value for member in cls],
        )

    @property
    def registry_prefix(self) -> str:
        """Lowercase name used when publishing handles of this family."""
        return self.value.lower()


class EngineSpec(NamedTuple):
    """Playwright engine name and the setting that selects its channel."""

    engine: str
    channel_setting: Optional[str] = None


class PlaywrightEngines:
    """Names of the Playwright browser types."""

    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"


ENGINE_SPECS: Dict[BrowserType, EngineSpec] = {
    BrowserType.CHROME: EngineSpec(PlaywrightEngines.CHROMIUM, "chrome_channel"),
    BrowserType.EDGE: EngineSpec(PlaywrightEngines.CHROMIUM, "edge_channel"),
    BrowserType.FIREFOX: EngineSpec(PlaywrightEngines.FIREFOX),
    BrowserType.SAFARI: EngineSpec(PlaywrightEngines.WEBKIT),
}

# channel prefixes of the chromium engine, longest first
_CHROMIUM_CHANNEL_PREFIXES: Tuple[Tuple[str, BrowserType], ...] = (
    ("msedge", BrowserType.EDGE),
    ("chromium", BrowserType.CHROME),
    ("chrome", BrowserType.CHROME),
)


def family_for_channel(channel: Optional[str]) -> Optional[BrowserType]:
    """Family a chromium launch channel belongs to, or None if it names none."""
    if not channel:
        return None
    for prefix, browser_type in _CHROMIUM_CHANNEL_PREFIXES:
        if channel.lower().startswith(prefix):
            return browser_type
    return None


def browser_type_from_engine(engine: str, channel: Optional[str]) -> BrowserType:
    """
    Recover the browser family from a live engine name and launch channel.

    Raises:
        BrowserException: If the combination does not identify exactly one family
    """
    if engine == PlaywrightEngines.FIREFOX and not channel:
        return BrowserType.FIREFOX
    if engine == PlaywrightEngines.WEBKIT and not channel:
        return BrowserType.SAFARI
    if engine == PlaywrightEngines.CHROMIUM:
        family = family_for_channel(channel)
        if family is not None:
            return family

    raise BrowserException(
        f"Cannot determine browser family from engine={engine!r} channel={channel!r}"
    ).add_context("engine", engine).add_context("channel", channel)


class BrowserDefaults:
    """Default values for browser configuration."""

    DEFAULT_VIEWPORT_WIDTH = 1920
    DEFAULT_VIEWPORT_HEIGHT = 1080

    # milliseconds
    LAUNCH_TIMEOUT = 30000
    NAVIGATION_TIMEOUT = 30000

    CHROME_CHANNEL = "chromium"
    EDGE_CHANNEL = "msedge"

    DEFAULT_LOCALE = "en-US"
    DEFAULT_TIMEZONE = "UTC"


class CdpWindowState(str, Enum):
    """Window states accepted by the CDP Browser.setWindowBounds command."""

    NORMAL = "normal"
    MINIMIZED = "minimized"
    MAXIMIZED = "maximized"
    FULLSCREEN = "fullscreen"
