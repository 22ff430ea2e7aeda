# browserkit/core/exceptions/browser.py
"""
Errors raised while resolving, launching, navigating and owning browser
handles.

Keyword arguments given to a subclass are kept as attributes and, when
not None, copied into the error context.
"""

from typing import Iterable, Optional

from .base import AutomationException
from .enums import ErrorCategory, ErrorSeverity


class BrowserException(AutomationException):
    """
    Any failure tied to a browser family or a live handle.

    Args:
        message: What went wrong
        browser_name: Family identifier (CHROME, FIREFOX, ...); also adds a
            ``browser_<name>`` tag
        session_id: Id of the handle involved
        **kwargs: Passed to AutomationException
    """

    def __init__(
            self,
            message: str,
            browser_name: Optional[str] = None,
            session_id: Optional[str] = None,
            **kwargs
    ):
        kwargs.setdefault("category", ErrorCategory.BROWSER)
        kwargs.setdefault("severity", ErrorSeverity.HIGH)
        super().__init__(message, **kwargs)

        self._record(browser_name=browser_name, session_id=session_id)
        if browser_name:
            self.add_tag(f"browser_{browser_name.lower()}")

    def _record(self, **fields) -> None:
        for key, value in fields.items():
            setattr(self, key, value)
            if value is not None:
                self.add_context(key, value)


class UnsupportedBrowserException(BrowserException):
    """
    A family identifier is outside the supported set, or no launcher is
    registered for it.
    """

    def __init__(
            self,
            message: str,
            requested: Optional[str] = None,
            supported: Optional[Iterable[str]] = None,
            **kwargs
    ):
        kwargs.setdefault("severity", ErrorSeverity.CRITICAL)
        super().__init__(message, **kwargs)

        choices = sorted(supported or ())
        self._record(requested=requested)
        self.supported = choices
        if choices:
            self.add_context("supported", choices)
            self.add_recovery_suggestion(f"Choose one of: {', '.join(choices)}")


class BrowserLaunchException(BrowserException):
    """The engine could not start the browser process."""

    def __init__(
            self,
            message: str,
            browser_name: Optional[str] = None,
            channel: Optional[str] = None,
            **kwargs
    ):
        kwargs.setdefault("severity", ErrorSeverity.CRITICAL)
        super().__init__(f"Failed to launch browser: {message}", browser_name=browser_name, **kwargs)

        self._record(channel=channel)
        self.add_recovery_suggestion("Run 'playwright install' for the required browser")
        self.add_recovery_suggestion("Verify the configured channel is installed on this machine")


class BrowserNavigationException(BrowserException):
    """Loading or reloading a URL failed. The framework never retries it."""

    def __init__(
            self,
            message: str,
            target_url: Optional[str] = None,
            current_url: Optional[str] = None,
            **kwargs
    ):
        kwargs.setdefault("severity", ErrorSeverity.MEDIUM)
        super().__init__(f"Navigation failed: {message}", **kwargs)

        self._record(target_url=target_url, current_url=current_url)
        self.add_recovery_suggestion("Check that the URL is reachable from the test host")


class BrowserClosedException(BrowserException):
    """A handle was used after close()."""

    def __init__(self, message: str = "Browser handle has already been closed", **kwargs):
        kwargs.setdefault("category", ErrorCategory.SESSION)
        super().__init__(message, **kwargs)
        self.add_recovery_suggestion("Create a new session instead of reusing a closed handle")


class NotInitializedException(BrowserException):
    """An operation needs a live handle and the session owns none."""

    def __init__(
            self,
            message: str = "Browser session is not initialized",
            operation: Optional[str] = None,
            **kwargs
    ):
        kwargs.setdefault("category", ErrorCategory.SESSION)
        if operation:
            message = f"{message}: cannot {operation}"
        super().__init__(message, **kwargs)

        self._record(operation=operation)
        self.add_recovery_suggestion("Call create() before using the session")


class SessionAlreadyActiveException(BrowserException):
    """create() was called while the session manager already owns a handle."""

    def __init__(self, message: str = "Browser session is already active", **kwargs):
        kwargs.setdefault("category", ErrorCategory.SESSION)
        kwargs.setdefault("severity", ErrorSeverity.MEDIUM)
        super().__init__(message, **kwargs)
        self.add_recovery_suggestion("Call close() or restart() instead of creating a second handle")
