"""
Shared fixtures.

Playwright is replaced by MagicMock fakes that behave like the sync API
closely enough for lifecycle, window and wait logic: launched browsers
report their engine name, pages remember the URL they were sent to and
their viewport size.
"""

from unittest.mock import MagicMock

import pytest

from browserkit.config.settings import BrowserSettings, Settings, WaitSettings
from browserkit.core.browser_constants import BrowserType
from browserkit.core.factory import BrowserFactory
from browserkit.core.handle import BrowserHandle
from browserkit.core.registry import SessionRegistry
from browserkit.core.session import BrowserSessionManager

pytest_plugins = ["pytester"]

SCREEN_SIZE = {"width": 2560, "height": 1440}


def make_fake_page():
    page = MagicMock(name="page")
    page.url = "about:blank"
    page.viewport_size = {"width": 1920, "height": 1080}
    page.title.return_value = "Example Domain"

    def goto(url, **kwargs):
        page.url = url

    def set_viewport_size(size):
        page.viewport_size = dict(size)

    def evaluate(script, *args):
        if "readyState" in script:
            return "complete"
        if "availWidth" in script:
            return dict(SCREEN_SIZE)
        return dict(page.viewport_size)

    page.goto.side_effect = goto
    page.set_viewport_size.side_effect = set_viewport_size
    page.evaluate.side_effect = evaluate
    return page


def make_fake_context():
    context = MagicMock(name="context")
    context.new_page.side_effect = lambda: make_fake_page()

    cdp = MagicMock(name="cdp_session")
    cdp.send.side_effect = lambda method, params=None: {"windowId": 7} if method == "Browser.getWindowForTarget" else {}
    context.new_cdp_session.return_value = cdp
    return context


def make_fake_browser(engine, launch_options=None):
    browser = MagicMock(name=f"{engine}_browser")
    browser.browser_type.name = engine
    browser.launch_options = dict(launch_options or {})
    browser.new_context.side_effect = lambda **options: make_fake_context()
    return browser


def make_fake_playwright():
    playwright = MagicMock(name="playwright")

    def launcher(engine):
        def launch(**options):
            return make_fake_browser(engine, options)
        return launch

    for engine in ("chromium", "firefox", "webkit"):
        browser_type = getattr(playwright, engine)
        browser_type.name = engine
        browser_type.launch.side_effect = launcher(engine)
    return playwright


@pytest.fixture
def settings():
    """Settings isolated from .env files."""
    return Settings(
        _env_file=None,
        browser=BrowserSettings(),
        waits=WaitSettings(implicit_timeout=5.0, explicit_timeout=2.0, poll_interval=0.05)
    )


@pytest.fixture
def fake_playwright():
    return make_fake_playwright()


@pytest.fixture
def factory(settings, fake_playwright):
    return BrowserFactory(settings=settings, playwright_starter=lambda: fake_playwright)


@pytest.fixture
def registry():
    """A private registry so tests never touch the process-wide one."""
    return SessionRegistry()


@pytest.fixture
def session(factory, registry):
    manager = BrowserSessionManager(factory, registry)
    yield manager
    manager.close()


@pytest.fixture
def handle():
    """A chrome handle built directly from fakes, outside any session."""
    context = make_fake_context()
    return BrowserHandle(
        BrowserType.CHROME,
        make_fake_browser("chromium"),
        context,
        context.new_page(),
        channel="chromium"
    )


@pytest.fixture
def fake_browser():
    """Builder for standalone fake browsers: ``fake_browser("firefox")``."""
    return make_fake_browser
