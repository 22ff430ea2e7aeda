# browserkit/core/factory.py
"""
Browser handle factory.

Creation is dispatched through a registration table mapping each
BrowserType to a launcher function, so new browser families can be added
with ``register()`` instead of editing the dispatch site. The factory is
the only place a BrowserHandle is instantiated.
"""

from typing import Any, Callable, Dict, Optional

from playwright.sync_api import (
    Browser,
    Error as PlaywrightError,
    Playwright,
    sync_playwright,
)

from browserkit.config.settings import Settings, get_settings
from browserkit.core.browser_constants import ENGINE_SPECS, BrowserType, family_for_channel
from browserkit.core.exceptions import BrowserLaunchException, ConfigurationException, UnsupportedBrowserException
from browserkit.core.handle import BrowserHandle
from browserkit.core.logger import get_logger, get_performance_timer

# (playwright, launch options) -> launched browser
Launcher = Callable[[Playwright, Dict[str, Any]], Browser]


def _engine_launcher(engine: str) -> Launcher:
    def launch(playwright: Playwright, options: Dict[str, Any]) -> Browser:
        return getattr(playwright, engine).launch(**options)

    launch.__name__ = f"launch_{engine}"
    return launch


def _start_playwright() -> Playwright:
    return sync_playwright().start()


class BrowserFactory:
    """
    Factory for browser handles using configuration settings.

    The Playwright driver is started on first use and shared by every
    handle this factory creates; ``stop()`` shuts it down.

    Example:
        >>> factory = BrowserFactory()
        >>> handle = factory.create(BrowserType.FIREFOX)
        >>> handle.page.goto("https://example.com")
        >>> handle.close()
        >>> factory.stop()
    """

    def __init__(
            self,
            settings: Optional[Settings] = None,
            playwright_starter: Callable[[], Playwright] = _start_playwright
    ):
        """
        Initialize browser factory with settings.

        Args:
            settings: Application settings (loads from environment if None)
            playwright_starter: Callable returning a started Playwright instance
        """
        self.settings = settings or get_settings()
        self.logger = get_logger("browser_factory")
        self._playwright_starter = playwright_starter
        self._playwright: Optional[Playwright] = None
        self._launchers: Dict[BrowserType, Launcher] = {
            browser_type: _engine_launcher(spec.engine)
            for browser_type, spec in ENGINE_SPECS.items()
        }

    def register(self, browser_type: BrowserType, launcher: Launcher) -> None:
        """Add or replace the launcher used for a browser family."""
        self._launchers[browser_type] = launcher
        self.logger.debug("Launcher registered", browser_name=browser_type.value, launcher=launcher.__name__)

    def supported_types(self):
        return sorted(self._launchers, key=lambda browser_type: browser_type.value)

    def is_supported(self, browser_type: BrowserType) -> bool:
        return browser_type in self._launchers

    def channel_for(self, browser_type: BrowserType) -> Optional[str]:
        """Playwright channel configured for a browser family, if any."""
        spec = ENGINE_SPECS.get(browser_type)
        if spec is None or spec.channel_setting is None:
            return None
        return getattr(self.settings.browser, spec.channel_setting)

    def create_launch_options(self, browser_type: BrowserType, **overrides) -> Dict[str, Any]:
        """Launch options for a browser family, from settings plus overrides."""
        options = self.settings.get_browser_launch_options(channel=self.channel_for(browser_type))
        options.update(overrides)
        return options

    def create_context_options(self, **overrides) -> Dict[str, Any]:
        options = self.settings.get_context_options()
        options.update(overrides)
        return options

    def check_channel(self, browser_type: BrowserType, channel: Optional[str]) -> None:
        """
        Refuse a channel that would launch a browser reporting another family.

        Raises:
            ConfigurationException: If chromium families get a foreign or empty
                channel, or other engines get any channel
        """
        spec = ENGINE_SPECS.get(browser_type)
        if spec is None:
            return
        if spec.channel_setting is not None:
            valid = family_for_channel(channel) is browser_type
        else:
            valid = not channel
        if not valid:
            raise ConfigurationException(
                f"Channel {channel!r} does not launch a {browser_type.value} browser",
                key=spec.channel_setting
            ).add_context("browser_name", browser_type.value).add_context("channel", channel)

    @property
    def playwright(self) -> Playwright:
        if self._playwright is None:
            self._playwright = self._playwright_starter()
            self.logger.debug("Playwright driver started")
        return self._playwright

    def create(self, browser_type: BrowserType, **launch_overrides) -> BrowserHandle:
        """
        Launch a new browser and wrap it in a handle.

        Raises:
            UnsupportedBrowserException: If no launcher is registered for the type
            ConfigurationException: If the channel does not match the family
            BrowserLaunchException: If the engine fails to start the browser
        """
        launcher = self._launchers.get(browser_type) if isinstance(browser_type, BrowserType) else None
        if launcher is None:
            raise UnsupportedBrowserException(
                f"No launcher registered for browser: {getattr(browser_type, 'value', browser_type)}",
                requested=str(getattr(browser_type, 'value', browser_type)),
                supported=[supported.value for supported in self._launchers]
            )

        options = self.create_launch_options(browser_type, **launch_overrides)
        channel = options.get("channel")
        self.check_channel(browser_type, channel)

        with get_performance_timer(f"launch_{browser_type.value.lower()}") as timer:
            try:
                browser = launcher(self.playwright, options)
            except PlaywrightError as e:
                self.logger.error(
                    "Failed to launch browser",
                    browser_name=browser_type.value,
                    channel=channel,
                    error=str(e)
                )
                raise BrowserLaunchException(
                    str(e),
                    browser_name=browser_type.value,
                    channel=channel,
                    original_exception=e
                ) from e

            try:
                context = browser.new_context(**self.create_context_options())
                page = context.new_page()
            except PlaywrightError as e:
                browser.close()
                raise BrowserLaunchException(
                    f"could not open a page: {e}",
                    browser_name=browser_type.value,
                    channel=channel,
                    original_exception=e
                ) from e

            handle = BrowserHandle(browser_type, browser, context, page, channel=channel)
            timer.add_metric("session_id", handle.session_id)

        self.logger.info(
            "Browser launched",
            browser_name=browser_type.value,
            session_id=handle.session_id,
            channel=channel,
            headless=options.get("headless", True)
        )
        return handle

    def stop(self) -> None:
        """Stop the shared Playwright driver if it was started."""
        if self._playwright is None:
            return
        try:
            self._playwright.stop()
        finally:
            self._playwright = None
            self.logger.debug("Playwright driver stopped")
