# browserkit/core/handle.py
"""
Browser handle: one live Playwright browser with its context and page.

A handle is created only by the BrowserFactory and closed only by its
owner (normally a BrowserSessionManager). Everything else borrows it.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional
from uuid import uuid4

from playwright.sync_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
)

from browserkit.core.browser_constants import BrowserType, browser_type_from_engine
from browserkit.core.exceptions import BrowserClosedException, BrowserException
from browserkit.core.logger import get_logger


@dataclass(eq=False)
class BrowserHandle:
    """
    Ownership-bearing wrapper around a launched browser.

    Accessing ``context`` or ``page`` after ``close()`` raises
    BrowserClosedException.
    """

    browser_type: BrowserType
    browser: Browser
    _context: BrowserContext
    _page: Page
    channel: Optional[str] = None
    session_id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=datetime.now)
    _closed: bool = field(default=False, init=False)

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def context(self) -> BrowserContext:
        self._ensure_open()
        return self._context

    @property
    def page(self) -> Page:
        self._ensure_open()
        return self._page

    @property
    def age(self) -> timedelta:
        return datetime.now() - self.created_at

    @property
    def registry_key(self) -> str:
        """Key under which the session manager publishes this handle."""
        return self.session_id

    def _ensure_open(self) -> None:
        if self._closed:
            raise BrowserClosedException(
                browser_name=self.browser_type.value,
                session_id=self.session_id
            )

    def detect_browser_type(self) -> BrowserType:
        """
        Recover the browser family from the live engine.

        Raises:
            BrowserClosedException: If the handle is closed
            BrowserException: If the engine and channel do not identify the
                family this handle was created for
        """
        self._ensure_open()
        engine = self.browser.browser_type.name
        detected = browser_type_from_engine(engine, self.channel)
        if detected is not self.browser_type:
            raise BrowserException(
                f"Live browser reports {detected.value} but handle was created as {self.browser_type.value}",
                browser_name=self.browser_type.value,
                session_id=self.session_id
            ).add_context("engine", engine)
        return detected

    def close(self) -> None:
        """Close context and browser. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True

        logger = get_logger("handle")
        try:
            self._context.close()
        except PlaywrightError as e:
            logger.warning("Error closing browser context", session_id=self.session_id, error=str(e))

        try:
            self.browser.close()
        except PlaywrightError as e:
            logger.warning("Error closing browser", session_id=self.session_id, error=str(e))

        logger.info(
            "Browser handle closed",
            session_id=self.session_id,
            browser_name=self.browser_type.value,
            session_age=round(self.age.total_seconds(), 3)
        )

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"BrowserHandle({self.browser_type.value}, session_id='{self.session_id}', {state})"
