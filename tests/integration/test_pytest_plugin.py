"""
Integration tests for the pytest plugin, run through pytester.

The inner runs replace the ``browser_factory`` fixture with one backed
by a mocked Playwright so no real browser is launched.
"""

import json

import pytest

pytestmark = pytest.mark.integration

FAKE_FACTORY_CONFTEST = """
from unittest.mock import MagicMock

import pytest

from browserkit.core.factory import BrowserFactory


def launch(**options):
    browser = MagicMock(name="browser")
    browser.browser_type.name = "chromium"
    page = browser.new_context.return_value.new_page.return_value
    page.url = "about:blank"
    page.evaluate.return_value = {"width": 1280, "height": 720}

    def goto(url, **kwargs):
        page.url = url

    page.goto.side_effect = goto
    return browser


@pytest.fixture(scope="session")
def browser_factory():
    playwright = MagicMock(name="playwright")
    playwright.chromium.launch.side_effect = launch
    return BrowserFactory(playwright_starter=lambda: playwright)
"""


@pytest.fixture
def project(pytester):
    pytester.makeconftest(FAKE_FACTORY_CONFTEST)
    config = pytester.path / "config.json"
    config.write_text(json.dumps({"driver": "CHROME", "url": "https://example.test/"}), encoding="utf-8")
    return pytester


class TestPytestPlugin:
    """Test fixtures and failure hooks provided to test suites."""

    def test_browser_manager_fixture_opens_configured_url(self, project):
        project.makepyfile(
            """
            def test_opened(browser_manager, session_registry):
                assert browser_manager.get_current_url() == "https://example.test/"
                assert browser_manager.get_current_browser_name() == "CHROME"
                assert session_registry.get_current() is browser_manager.get_handle()
            """
        )

        result = project.runpytest("--browserkit-config", "config.json")

        result.assert_outcomes(passed=1)

    def test_browser_option_overrides_config(self, project):
        project.makepyfile(
            """
            from browserkit.core.browser_constants import BrowserType


            def test_provider(browser_provider):
                assert browser_provider.resolve() is BrowserType.FIREFOX
            """
        )

        result = project.runpytest("--browserkit-config", "config.json", "--browserkit-browser", "firefox")

        result.assert_outcomes(passed=1)

    def test_missing_config_errors_the_test(self, project):
        project.makepyfile(
            """
            def test_needs_config(run_config):
                pass
            """
        )

        result = project.runpytest("--browserkit-config", "absent.json")

        result.assert_outcomes(errors=1)

    def test_failure_captures_screenshot(self, project):
        project.makepyfile(
            """
            def test_broken(browser_manager):
                assert browser_manager.get_title() == "never"
            """
        )

        result = project.runpytest("--browserkit-config", "config.json")

        result.assert_outcomes(failed=1)
        shots = project.path / "screenshots"
        assert shots.is_dir()
