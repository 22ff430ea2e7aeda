# browserkit/core/manager.py
"""
Browser Manager facade.

Composes the session, window and page managers and the wait engine
behind one surface, which is what tests and fixtures normally use.

Key Design Patterns:
- Facade Pattern: one object for session, window, page and wait operations
- Context Manager: the session is closed on every exit path
"""

from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from browserkit.core.browser_constants import BrowserType
from browserkit.core.factory import BrowserFactory
from browserkit.core.handle import BrowserHandle
from browserkit.core.logger import get_logger
from browserkit.core.page import PageManager
from browserkit.core.providers import BrowserProvider
from browserkit.core.registry import SessionRegistry
from browserkit.core.session import BrowserSessionManager
from browserkit.core.waits import ExplicitWaitManager, ImplicitWaitManager, Target
from browserkit.core.window import WindowManager


class BrowserManager:
    """
    High-level browser management for one logical session.

    Example:
        >>> with BrowserManager() as manager:
        ...     manager.create(BrowserType.CHROME)
        ...     manager.maximize_window()
        ...     manager.navigate_to("https://example.com")
        ...     manager.wait_for_page_load()
    """

    def __init__(
            self,
            factory: Optional[BrowserFactory] = None,
            registry: Optional[SessionRegistry] = None,
            session: Optional[BrowserSessionManager] = None
    ):
        self.session = session or BrowserSessionManager(factory, registry)
        self.window = WindowManager(self.session)
        self.page = PageManager(self.session)
        self.implicit_waits = ImplicitWaitManager()
        self.explicit_waits = ExplicitWaitManager()
        self.logger = get_logger("browser_manager")

    def __enter__(self) -> "BrowserManager":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # Session

    def create(self, browser_type: BrowserType) -> BrowserHandle:
        handle = self.session.create(browser_type)
        self.implicit_waits.apply(handle, self.session.factory.settings.waits.implicit_timeout)
        return handle

    def create_from(self, provider: BrowserProvider) -> BrowserHandle:
        return self.create(provider.resolve())

    def get_handle(self) -> BrowserHandle:
        return self.session.get_handle()

    def find_handle(self) -> Optional[BrowserHandle]:
        return self.session.find_handle()

    def close(self) -> None:
        self.session.close()

    def restart(self) -> BrowserHandle:
        handle = self.session.restart()
        self.implicit_waits.apply(handle, self.session.factory.settings.waits.implicit_timeout)
        return handle

    def is_active(self) -> bool:
        return self.session.is_active()

    def navigate_to(self, url: str) -> None:
        self.session.navigate_to(url)

    def get_current_browser_name(self) -> str:
        return self.session.get_current_browser_name()

    def get_current_url(self) -> str:
        return self.session.get_current_url()

    # Window and page

    def maximize_window(self) -> None:
        self.window.maximize()

    def minimize_window(self) -> None:
        self.window.minimize()

    def set_window_size(self, width: int, height: int) -> None:
        self.window.resize(width, height)

    def get_window_size(self) -> Dict[str, int]:
        return self.window.get_size()

    def refresh_page(self) -> None:
        self.page.refresh()

    def get_title(self) -> str:
        return self.page.get_title()

    # Waits

    def set_implicit_wait(self, timeout: float) -> None:
        self.implicit_waits.apply(self.get_handle(), timeout)

    def wait_for_visibility(self, target: Target, timeout: Optional[float] = None) -> None:
        self.explicit_waits.wait_for_visibility(self.get_handle(), target, timeout)

    def wait_for_clickability(self, target: Target, timeout: Optional[float] = None) -> None:
        self.explicit_waits.wait_for_clickability(self.get_handle(), target, timeout)

    def wait_for_presence(self, locator: Target, timeout: Optional[float] = None) -> None:
        self.explicit_waits.wait_for_presence(self.get_handle(), locator, timeout)

    def wait_for_page_load(self, timeout: Optional[float] = None) -> None:
        self.explicit_waits.wait_for_page_load(self.get_handle(), timeout)


@contextmanager
def browser_session(
        provider: BrowserProvider,
        url: Optional[str] = None,
        factory: Optional[BrowserFactory] = None,
        registry: Optional[SessionRegistry] = None,
        maximize: bool = False
) -> Iterator[BrowserManager]:
    """
    Scoped browser session: create, optionally maximize and navigate,
    yield the manager, and always close.

    The factory's Playwright driver is stopped on exit when this function
    created the factory itself.

    Example:
        >>> with browser_session(JsonBrowserProvider("config.json"), url="https://example.test") as manager:
        ...     manager.wait_for_visibility("h1")
    """
    owns_factory = factory is None
    factory = factory or BrowserFactory()
    manager = BrowserManager(factory=factory, registry=registry)
    try:
        manager.create_from(provider)
        if maximize:
            manager.maximize_window()
        if url:
            manager.navigate_to(url)
        yield manager
    finally:
        try:
            manager.close()
        finally:
            if owns_factory:
                factory.stop()
