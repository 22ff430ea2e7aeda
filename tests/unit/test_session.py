"""
Unit tests for the session manager life cycle.
"""

import pytest
from playwright.sync_api import Error as PlaywrightError

from browserkit.core.browser_constants import BrowserType
from browserkit.core.exceptions import (
    BrowserNavigationException,
    NotInitializedException,
    SessionAlreadyActiveException,
    UnsupportedBrowserException,
)
from browserkit.core.providers import NameBrowserProvider
from browserkit.core.session import BrowserSessionManager


class TestUninitializedSession:
    """Every operation needing a handle fails before create()."""

    def test_initial_state(self, session, registry):
        assert not session.is_active()
        assert session.find_handle() is None
        assert registry.get_current() is None

    @pytest.mark.parametrize("operation, args", [
        ("get_handle", ()),
        ("navigate_to", ("https://example.test",)),
        ("get_current_url", ()),
        ("get_current_browser_name", ()),
        ("restart", ()),
    ])
    def test_operations_require_handle(self, session, operation, args):
        with pytest.raises(NotInitializedException):
            getattr(session, operation)(*args)

        assert not session.is_active()

    def test_close_is_noop(self, session):
        session.close()

        assert not session.is_active()


class TestSessionLifecycle:
    """Test create, navigate, close and restart."""

    def test_create_publishes_handle(self, session, registry):
        handle = session.create(BrowserType.CHROME)

        assert session.is_active()
        assert session.get_handle() is handle
        assert session.find_handle() is handle
        assert registry.get(handle.session_id) is handle
        assert registry.get_current() is handle

    def test_create_accepts_identifier(self, session):
        handle = session.create("firefox")

        assert handle.browser_type is BrowserType.FIREFOX

    def test_create_from_provider(self, session):
        handle = session.create_from(NameBrowserProvider("Safari"))

        assert session.get_current_browser_name() == "SAFARI"
        assert handle.browser_type is BrowserType.SAFARI

    def test_create_while_active_fails(self, session, fake_playwright):
        handle = session.create(BrowserType.CHROME)

        with pytest.raises(SessionAlreadyActiveException):
            session.create(BrowserType.FIREFOX)

        assert session.get_handle() is handle
        fake_playwright.firefox.launch.assert_not_called()

    def test_unsupported_create_leaves_session_inactive(self, session, registry):
        with pytest.raises(UnsupportedBrowserException):
            session.create(BrowserType.IE)

        assert not session.is_active()
        assert registry.count() == 0
        assert registry.get_current() is None

    def test_navigate_and_read_url(self, session, settings):
        handle = session.create(BrowserType.CHROME)

        session.navigate_to("https://example.test/")

        handle.page.goto.assert_called_once_with(
            "https://example.test/",
            timeout=settings.browser.navigation_timeout
        )
        assert session.get_current_url() == "https://example.test/"

    def test_navigation_failure_is_not_retried(self, session):
        handle = session.create(BrowserType.CHROME)
        handle.page.goto.side_effect = PlaywrightError("net::ERR_NAME_NOT_RESOLVED")

        with pytest.raises(BrowserNavigationException) as exc_info:
            session.navigate_to("https://unreachable.test")

        assert exc_info.value.target_url == "https://unreachable.test"
        assert exc_info.value.current_url == "about:blank"
        assert handle.page.goto.call_count == 1
        assert session.is_active()

    def test_close_releases_and_closes(self, session, registry):
        handle = session.create(BrowserType.CHROME)

        session.close()

        assert not session.is_active()
        assert handle.is_closed
        assert registry.get(handle.session_id) is None
        assert registry.get_current() is None
        handle.browser.close.assert_called_once()

    def test_close_twice(self, session):
        handle = session.create(BrowserType.EDGE)

        session.close()
        session.close()

        handle.browser.close.assert_called_once()

    def test_create_after_close(self, session, registry):
        first = session.create(BrowserType.CHROME)
        session.close()

        second = session.create(BrowserType.FIREFOX)

        assert second is not first
        assert registry.get_current() is second

    def test_close_keeps_other_sessions_current(self, session, registry, factory):
        other = BrowserSessionManager(factory, registry)
        session.create(BrowserType.CHROME)
        other_handle = other.create(BrowserType.FIREFOX)

        session.close()

        assert registry.get_current() is other_handle
        other.close()


class TestRestart:
    """Restart replaces the handle with one of the same family."""

    @pytest.mark.parametrize("browser_type", [
        BrowserType.CHROME, BrowserType.EDGE, BrowserType.FIREFOX, BrowserType.SAFARI
    ])
    def test_restart_keeps_family(self, session, registry, browser_type):
        old = session.create(browser_type)

        new = session.restart()

        assert new is not old
        assert old.is_closed
        assert new.browser_type is browser_type
        assert session.get_current_browser_name() == browser_type.value
        assert registry.get_current() is new
        assert registry.get(old.session_id) is None

    def test_restart_uses_fresh_page(self, session):
        session.create(BrowserType.CHROME)
        session.navigate_to("https://example.test/")

        session.restart()

        assert session.get_current_url() == "about:blank"
