# browserkit/core/session.py
"""
Browser session lifecycle management.

BrowserSessionManager owns at most one BrowserHandle at a time and is
the only component that closes it. Life cycle:

    UNINITIALIZED --create--> ACTIVE --close--> UNINITIALIZED
    ACTIVE --restart--> ACTIVE  (new handle, same browser family)

Every operation except create(), close(), is_active() and find_handle()
requires an owned handle and raises NotInitializedException without one.
create() on an active manager raises SessionAlreadyActiveException; the
existing handle is never replaced implicitly.
"""

from typing import Optional

from playwright.sync_api import Error as PlaywrightError

from browserkit.core.browser_constants import BrowserType
from browserkit.core.exceptions import (
    BrowserNavigationException,
    NotInitializedException,
    SessionAlreadyActiveException,
)
from browserkit.core.factory import BrowserFactory
from browserkit.core.handle import BrowserHandle
from browserkit.core.logger import get_logger, get_performance_timer
from browserkit.core.providers import BrowserProvider
from browserkit.core.registry import SessionRegistry, get_session_registry


class BrowserSessionManager:
    """
    Owns one browser handle and publishes it to the session registry.

    A manager is meant to be driven from a single thread; only the
    registry it publishes to is shared.

    Example:
        >>> session = BrowserSessionManager(BrowserFactory())
        >>> session.create(BrowserType.CHROME)
        >>> session.navigate_to("https://example.com")
        >>> session.get_current_url()
        'https://example.com/'
        >>> session.close()
    """

    def __init__(
            self,
            factory: Optional[BrowserFactory] = None,
            registry: Optional[SessionRegistry] = None
    ):
        self.factory = factory or BrowserFactory()
        self.registry = registry if registry is not None else get_session_registry()
        self.logger = get_logger("session_manager")
        self._handle: Optional[BrowserHandle] = None

    def _require_handle(self, operation: str) -> BrowserHandle:
        if self._handle is None:
            raise NotInitializedException(operation=operation)
        return self._handle

    def create(self, browser_type: BrowserType) -> BrowserHandle:
        """
        Launch a browser and take ownership of its handle.

        The handle is published to the registry under its session id and
        becomes the registry's current handle.

        Raises:
            SessionAlreadyActiveException: If a handle is already owned
            UnsupportedBrowserException: If the family cannot be launched
            BrowserLaunchException: If the engine fails to launch
        """
        if self._handle is not None:
            raise SessionAlreadyActiveException(
                browser_name=self._handle.browser_type.value,
                session_id=self._handle.session_id
            )

        handle = self.factory.create(BrowserType.from_string(browser_type))
        self._handle = handle
        self.registry.put(handle.registry_key, handle)
        self.registry.set_current(handle)

        self.logger.info(
            "Browser session created",
            browser_name=handle.browser_type.value,
            session_id=handle.session_id
        )
        return handle

    def create_from(self, provider: BrowserProvider) -> BrowserHandle:
        """Resolve the browser family with ``provider`` and create a session."""
        return self.create(provider.resolve())

    def get_handle(self) -> BrowserHandle:
        """
        Raises:
            NotInitializedException: If no handle is owned
        """
        return self._require_handle("get handle")

    def find_handle(self) -> Optional[BrowserHandle]:
        """The owned handle, or None when the session is not initialized."""
        return self._handle

    def is_active(self) -> bool:
        """True iff a handle is owned. The browser itself is not pinged."""
        return self._handle is not None

    def navigate_to(self, url: str) -> None:
        """
        Load ``url`` in the session's page. Failures are not retried.

        Raises:
            NotInitializedException: If no handle is owned
            BrowserNavigationException: If the engine reports a failure
        """
        handle = self._require_handle("navigate")
        page = handle.page
        current_url = page.url
        nav_timeout = self.factory.settings.browser.navigation_timeout

        with get_performance_timer("navigate") as timer:
            try:
                page.goto(url, timeout=nav_timeout)
            except PlaywrightError as e:
                raise BrowserNavigationException(
                    f"{url}: {e}",
                    target_url=url,
                    current_url=current_url,
                    browser_name=handle.browser_type.value,
                    session_id=handle.session_id,
                    original_exception=e
                ) from e
            timer.add_metric("target_url", url)

        self.logger.info("Navigation successful", session_id=handle.session_id, target_url=url)

    def close(self) -> None:
        """
        Unpublish and close the owned handle. No-op when nothing is owned.
        """
        handle = self._handle
        if handle is None:
            return

        self._handle = None
        self.registry.release(handle)
        handle.close()
        self.logger.info("Browser session closed", session_id=handle.session_id)

    def restart(self) -> BrowserHandle:
        """
        Replace the owned handle with a fresh one of the same browser family.

        Raises:
            NotInitializedException: If no handle is owned
            BrowserException: If the family cannot be recovered from the live
                browser; the current handle is left untouched in that case
        """
        handle = self._require_handle("restart")
        browser_type = handle.detect_browser_type()

        self.logger.info(
            "Restarting browser session",
            browser_name=browser_type.value,
            session_id=handle.session_id
        )
        self.close()
        return self.create(browser_type)

    def get_current_browser_name(self) -> str:
        """
        Browser family of the live handle, e.g. ``"CHROME"``.

        Raises:
            NotInitializedException: If no handle is owned
        """
        return self._require_handle("read browser name").detect_browser_type().value

    def get_current_url(self) -> str:
        """
        Raises:
            NotInitializedException: If no handle is owned
        """
        return self._require_handle("read current url").page.url
