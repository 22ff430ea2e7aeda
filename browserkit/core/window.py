# browserkit/core/window.py
"""
Window operations against the session's live handle.

The handle is borrowed from the session manager for the duration of each
call; the window manager never creates or closes one.
"""

from typing import Dict

from playwright.sync_api import Error as PlaywrightError, Page

from browserkit.core.browser_constants import ENGINE_SPECS, CdpWindowState, PlaywrightEngines
from browserkit.core.exceptions import BrowserException, UnsupportedBrowserException
from browserkit.core.handle import BrowserHandle
from browserkit.core.logger import get_logger
from browserkit.core.session import BrowserSessionManager

SCREEN_SIZE_SCRIPT = "() => ({width: window.screen.availWidth, height: window.screen.availHeight})"


class WindowManager:
    """Maximize, minimize and resize the session's browser window."""

    def __init__(self, session: BrowserSessionManager):
        self.session = session
        self.logger = get_logger("window_manager")

    @staticmethod
    def _is_chromium(handle: BrowserHandle) -> bool:
        spec = ENGINE_SPECS.get(handle.browser_type)
        return spec is not None and spec.engine == PlaywrightEngines.CHROMIUM

    def _set_window_state(self, handle: BrowserHandle, state: CdpWindowState) -> None:
        page = handle.page
        cdp = handle.context.new_cdp_session(page)
        try:
            window = cdp.send("Browser.getWindowForTarget")
            cdp.send(
                "Browser.setWindowBounds",
                {"windowId": window["windowId"], "bounds": {"windowState": state.value}},
            )
        finally:
            cdp.detach()

    def maximize(self) -> None:
        """
        Maximize the window and size the viewport to the available screen.

        Raises:
            NotInitializedException: If the session has no handle
        """
        handle = self.session.get_handle()

        if self._is_chromium(handle):
            try:
                self._set_window_state(handle, CdpWindowState.MAXIMIZED)
            except PlaywrightError as e:
                self.logger.warning(
                    "CDP maximize failed, sizing viewport only",
                    session_id=handle.session_id,
                    error=str(e)
                )

        page = handle.page
        size = page.evaluate(SCREEN_SIZE_SCRIPT)
        page.set_viewport_size({"width": int(size["width"]), "height": int(size["height"])})
        self.logger.debug("Window maximized", session_id=handle.session_id, **size)

    def minimize(self) -> None:
        """
        Minimize the window. Only chromium-based browsers expose this.

        Raises:
            NotInitializedException: If the session has no handle
            UnsupportedBrowserException: For non-chromium browsers
        """
        handle = self.session.get_handle()

        if not self._is_chromium(handle):
            raise UnsupportedBrowserException(
                f"Window minimize is not supported for {handle.browser_type.value}",
                requested=handle.browser_type.value,
                browser_name=handle.browser_type.value,
                session_id=handle.session_id
            )

        try:
            self._set_window_state(handle, CdpWindowState.MINIMIZED)
        except PlaywrightError as e:
            raise BrowserException(
                f"Failed to minimize window: {e}",
                browser_name=handle.browser_type.value,
                session_id=handle.session_id,
                original_exception=e
            ) from e
        self.logger.debug("Window minimized", session_id=handle.session_id)

    def resize(self, width: int, height: int) -> None:
        """
        Set the viewport to ``width`` x ``height`` pixels.

        Raises:
            ValueError: If either dimension is not a positive integer
            NotInitializedException: If the session has no handle
        """
        if not isinstance(width, int) or not isinstance(height, int) or width <= 0 or height <= 0:
            raise ValueError(f"Window size must be positive integers, got {width}x{height}")

        handle = self.session.get_handle()
        handle.page.set_viewport_size({"width": width, "height": height})
        self.logger.debug("Window resized", session_id=handle.session_id, width=width, height=height)

    def get_size(self) -> Dict[str, int]:
        """Current viewport size as ``{"width": ..., "height": ...}``."""
        page: Page = self.session.get_handle().page
        size = page.viewport_size
        if size is None:
            size = page.evaluate("() => ({width: window.innerWidth, height: window.innerHeight})")
        return {"width": int(size["width"]), "height": int(size["height"])}
