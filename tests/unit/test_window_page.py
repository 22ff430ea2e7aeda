"""
Unit tests for the window and page managers.
"""

import pytest
from playwright.sync_api import Error as PlaywrightError

from browserkit.core.browser_constants import BrowserType
from browserkit.core.exceptions import (
    BrowserException,
    BrowserNavigationException,
    NotInitializedException,
    UnsupportedBrowserException,
)
from browserkit.core.page import PageManager
from browserkit.core.window import WindowManager

SCREEN_SIZE = {"width": 2560, "height": 1440}


@pytest.fixture
def window(session):
    return WindowManager(session)


@pytest.fixture
def page_manager(session):
    return PageManager(session)


class TestWindowManager:
    """Test window sizing against the session's handle."""

    @pytest.mark.parametrize("operation, args", [
        ("maximize", ()),
        ("minimize", ()),
        ("resize", (800, 600)),
        ("get_size", ()),
    ])
    def test_operations_require_session(self, window, operation, args):
        with pytest.raises(NotInitializedException):
            getattr(window, operation)(*args)

    def test_maximize_chromium_uses_cdp(self, session, window):
        handle = session.create(BrowserType.CHROME)
        cdp = handle.context.new_cdp_session.return_value

        window.maximize()

        cdp.send.assert_any_call(
            "Browser.setWindowBounds",
            {"windowId": 7, "bounds": {"windowState": "maximized"}}
        )
        cdp.detach.assert_called_once()
        assert window.get_size() == SCREEN_SIZE

    def test_maximize_firefox_sizes_viewport(self, session, window):
        handle = session.create(BrowserType.FIREFOX)

        window.maximize()

        handle.context.new_cdp_session.assert_not_called()
        assert window.get_size() == SCREEN_SIZE

    def test_maximize_survives_cdp_failure(self, session, window):
        handle = session.create(BrowserType.EDGE)
        handle.context.new_cdp_session.side_effect = PlaywrightError("CDP session is not supported")

        window.maximize()

        assert window.get_size() == SCREEN_SIZE

    def test_minimize_chromium(self, session, window):
        handle = session.create(BrowserType.CHROME)
        cdp = handle.context.new_cdp_session.return_value

        window.minimize()

        cdp.send.assert_any_call(
            "Browser.setWindowBounds",
            {"windowId": 7, "bounds": {"windowState": "minimized"}}
        )

    @pytest.mark.parametrize("browser_type", [BrowserType.FIREFOX, BrowserType.SAFARI])
    def test_minimize_unsupported_outside_chromium(self, session, window, browser_type):
        session.create(browser_type)

        with pytest.raises(UnsupportedBrowserException):
            window.minimize()

    def test_minimize_cdp_failure_raises(self, session, window):
        handle = session.create(BrowserType.CHROME)
        handle.context.new_cdp_session.return_value.send.side_effect = PlaywrightError("Target closed")

        with pytest.raises(BrowserException, match="Failed to minimize window"):
            window.minimize()

    def test_resize(self, session, window):
        handle = session.create(BrowserType.CHROME)

        window.resize(1024, 768)

        handle.page.set_viewport_size.assert_called_with({"width": 1024, "height": 768})
        assert window.get_size() == {"width": 1024, "height": 768}

    @pytest.mark.parametrize("width, height", [(0, 600), (800, -1), (800.5, 600), ("800", 600)])
    def test_resize_rejects_invalid_sizes(self, session, window, width, height):
        session.create(BrowserType.CHROME)

        with pytest.raises(ValueError):
            window.resize(width, height)

    def test_get_size_falls_back_to_script(self, session, window):
        handle = session.create(BrowserType.SAFARI)
        handle.page.viewport_size = None
        handle.page.evaluate.side_effect = lambda script: {"width": 1280, "height": 800}

        assert window.get_size() == {"width": 1280, "height": 800}


class TestPageManager:
    """Test page refresh and read-outs."""

    def test_operations_require_session(self, page_manager):
        with pytest.raises(NotInitializedException):
            page_manager.refresh()
        with pytest.raises(NotInitializedException):
            page_manager.get_title()

    def test_refresh(self, session, page_manager):
        handle = session.create(BrowserType.CHROME)

        page_manager.refresh()

        handle.page.reload.assert_called_once()

    def test_refresh_failure(self, session, page_manager):
        handle = session.create(BrowserType.CHROME)
        handle.page.reload.side_effect = PlaywrightError("net::ERR_CONNECTION_RESET")

        with pytest.raises(BrowserNavigationException):
            page_manager.refresh()

    def test_title_and_url(self, session, page_manager):
        session.create(BrowserType.FIREFOX)
        session.navigate_to("https://example.test/")

        assert page_manager.get_title() == "Example Domain"
        assert page_manager.get_url() == "https://example.test/"
