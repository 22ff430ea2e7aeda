# browserkit/pytest_plugin.py
"""
pytest integration.

Registered through the ``pytest11`` entry point once browserkit is
installed. Provides:

- lifecycle logging: every test runs inside a LoggingContext bound to its
  node id, and failures are logged with the failing phase;
- failure screenshots: on a failed test call the registry's current handle
  is captured into ``Settings.reporting.screenshot_dir``;
- fixtures: ``run_config``, ``browser_provider``, ``browser_factory``,
  ``session_registry`` and ``browser_manager``, the last of which creates
  a session, maximizes it and opens the configured ``url``.
"""

from pathlib import Path
from typing import Iterator

import pytest

from browserkit.config.json_config import JsonConfigSource
from browserkit.config.settings import get_settings
from browserkit.core.exceptions import AutomationException
from browserkit.core.factory import BrowserFactory
from browserkit.core.logger import LoggingContext, get_logger
from browserkit.core.manager import BrowserManager
from browserkit.core.providers import BrowserProvider, JsonBrowserProvider, NameBrowserProvider
from browserkit.core.registry import SessionRegistry, get_session_registry
from browserkit.core.screenshots import capture_failure_screenshot


def pytest_addoption(parser):
    group = parser.getgroup("browserkit")
    group.addoption(
        "--browserkit-config",
        action="store",
        default=None,
        help="JSON run configuration with 'url' and 'driver'/'browser' (default: Settings.reporting.config_file)",
    )
    group.addoption(
        "--browserkit-browser",
        action="store",
        default=None,
        help="Browser family overriding the configuration file (chrome, firefox, edge, safari)",
    )


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_protocol(item, nextitem):
    logger = get_logger("test_lifecycle")
    with LoggingContext(test_id=item.nodeid):
        logger.info("Test started", test_name=item.name)
        yield
        logger.debug("Test finished", test_name=item.name)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()

    if not report.failed or report.when != "call":
        return

    logger = get_logger("test_lifecycle")
    error = call.excinfo.value if call.excinfo else None
    if isinstance(error, AutomationException):
        error.log_to(logger.bind(test_name=item.name, phase=report.when), event="Test failed")
    else:
        logger.error("Test failed", test_name=item.name, phase=report.when, error=str(error) if error else None)

    reporting = get_settings().reporting
    if reporting.screenshot_on_failure:
        registry = getattr(item, "funcargs", {}).get("session_registry")
        if registry is None:
            registry = get_session_registry()
        capture_failure_screenshot(registry, item.name, reporting.screenshot_dir)


@pytest.fixture(scope="session")
def session_registry() -> Iterator[SessionRegistry]:
    """The process-wide registry, cleared when the test session ends."""
    registry = get_session_registry()
    yield registry
    registry.clear()


@pytest.fixture(scope="session")
def browser_factory() -> Iterator[BrowserFactory]:
    factory = BrowserFactory()
    yield factory
    factory.stop()


@pytest.fixture(scope="session")
def run_config(request) -> JsonConfigSource:
    path = request.config.getoption("--browserkit-config") or get_settings().reporting.config_file
    return JsonConfigSource(Path(path))


@pytest.fixture(scope="session")
def browser_provider(request) -> BrowserProvider:
    name = request.config.getoption("--browserkit-browser")
    if name:
        return NameBrowserProvider(name)
    return JsonBrowserProvider(request.getfixturevalue("run_config"))


@pytest.fixture
def browser_manager(
        browser_factory: BrowserFactory,
        session_registry: SessionRegistry,
        browser_provider: BrowserProvider,
        run_config: JsonConfigSource
) -> Iterator[BrowserManager]:
    """A live session maximized and pointed at the configured ``url``."""
    manager = BrowserManager(factory=browser_factory, registry=session_registry)
    try:
        manager.create_from(browser_provider)
        manager.maximize_window()
        manager.navigate_to(run_config.get("url"))
        yield manager
    finally:
        manager.close()
