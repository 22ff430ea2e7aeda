"""
browserkit: browser session lifecycle and synchronization for Playwright
based test automation.
"""

from browserkit.core.browser_constants import BrowserType
from browserkit.core.factory import BrowserFactory
from browserkit.core.handle import BrowserHandle
from browserkit.core.manager import BrowserManager, browser_session
from browserkit.core.page import PageManager
from browserkit.core.providers import (
    BrowserProvider,
    EnumBrowserProvider,
    JsonBrowserProvider,
    NameBrowserProvider,
    SettingsBrowserProvider,
)
from browserkit.core.registry import SessionRegistry, get_session_registry
from browserkit.core.session import BrowserSessionManager
from browserkit.core.waits import ExplicitWaitManager, ImplicitWaitManager, WaitSpec
from browserkit.core.window import WindowManager

__version__ = "1.0.0"

__all__ = [
    "BrowserFactory",
    "BrowserHandle",
    "BrowserManager",
    "BrowserProvider",
    "BrowserSessionManager",
    "BrowserType",
    "EnumBrowserProvider",
    "ExplicitWaitManager",
    "ImplicitWaitManager",
    "JsonBrowserProvider",
    "NameBrowserProvider",
    "PageManager",
    "SessionRegistry",
    "SettingsBrowserProvider",
    "WaitSpec",
    "WindowManager",
    "browser_session",
    "get_session_registry",
]
