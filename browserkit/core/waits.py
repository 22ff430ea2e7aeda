# browserkit/core/waits.py
"""
Wait Engine: implicit and explicit synchronization.

Implicit waits set the handle-wide default timeout that Playwright applies
to every element lookup made through the handle. Explicit waits poll one
condition at a fixed interval until it holds or the deadline passes, and
then raise WaitTimeoutException naming the condition; they never return
silently on timeout.

Polling sleeps in the calling thread only, so independent waits running
on other threads are never blocked by each other.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from playwright.sync_api import Error as PlaywrightError, Locator

from browserkit.config.settings import get_settings
from browserkit.core.handle import BrowserHandle
from browserkit.core.exceptions import WaitTimeoutException
from browserkit.core.logger import get_logger, get_performance_timer

Target = Union[str, Locator]
Predicate = Callable[[BrowserHandle, Any], bool]

# Playwright treats timeout=0 as "no limit", so state checks get a small bound
STATE_CHECK_TIMEOUT_MS = 50


@dataclass(frozen=True)
class WaitSpec:
    """One explicit wait: what to check, for how long and how often (seconds)."""

    name: str
    predicate: Predicate
    timeout: float
    poll_interval: float

    def __post_init__(self):
        if self.timeout < 0:
            raise ValueError(f"timeout must be >= 0, got {self.timeout}")
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be > 0, got {self.poll_interval}")


def resolve_locator(handle: BrowserHandle, target: Target) -> Locator:
    """Turn a selector string into a locator on the handle's page."""
    if isinstance(target, str):
        return handle.page.locator(target)
    return target


def describe_target(target: Optional[Target]) -> Optional[str]:
    if target is None or isinstance(target, str):
        return target
    return repr(target)


def is_visible(handle: BrowserHandle, target: Target) -> bool:
    return resolve_locator(handle, target).first.is_visible()


def is_clickable(handle: BrowserHandle, target: Target) -> bool:
    locator = resolve_locator(handle, target).first
    return locator.is_visible() and locator.is_enabled(timeout=STATE_CHECK_TIMEOUT_MS)


def is_present(handle: BrowserHandle, target: Target) -> bool:
    return resolve_locator(handle, target).count() > 0


def is_page_loaded(handle: BrowserHandle, target: Any = None) -> bool:
    return handle.page.evaluate("() => document.readyState") == "complete"


class ImplicitWaitManager:
    """Applies the handle-wide default lookup timeout."""

    def __init__(self):
        self.logger = get_logger("implicit_wait")

    def apply(self, handle: BrowserHandle, timeout: float) -> None:
        """
        Make every later lookup through ``handle`` wait up to ``timeout`` seconds.

        Raises:
            ValueError: If timeout is negative
        """
        if timeout < 0:
            raise ValueError(f"Implicit wait timeout must be >= 0, got {timeout}")

        timeout_ms = timeout * 1000
        handle.context.set_default_timeout(timeout_ms)
        handle.page.set_default_timeout(timeout_ms)
        self.logger.debug("Implicit wait applied", session_id=handle.session_id, timeout=timeout)


class ExplicitWaitManager:
    """
    Condition-polling waits with a per-call timeout.

    Example:
        >>> waits = ExplicitWaitManager()
        >>> waits.wait_for_visibility(handle, "#login", timeout=5)
        >>> waits.wait_for_page_load(handle)
    """

    def __init__(self, poll_interval: Optional[float] = None, default_timeout: Optional[float] = None):
        settings = get_settings()
        self.poll_interval = poll_interval if poll_interval is not None else settings.waits.poll_interval
        self.default_timeout = default_timeout if default_timeout is not None else settings.waits.explicit_timeout
        self.logger = get_logger("explicit_wait")

    def _spec(self, name: str, predicate: Predicate, timeout: Optional[float]) -> WaitSpec:
        return WaitSpec(
            name=name,
            predicate=predicate,
            timeout=self.default_timeout if timeout is None else timeout,
            poll_interval=self.poll_interval
        )

    def wait_until(self, handle: BrowserHandle, spec: WaitSpec, target: Optional[Target] = None) -> None:
        """
        Poll ``spec.predicate(handle, target)`` until it is true.

        Engine errors raised by the predicate count as "not yet". Any other
        exception, including BrowserClosedException, propagates at once.

        Raises:
            WaitTimeoutException: If the condition does not hold in time
        """
        start = time.monotonic()
        deadline = start + spec.timeout

        with get_performance_timer(f"wait_for_{spec.name}") as timer:
            while True:
                try:
                    if spec.predicate(handle, target):
                        timer.add_metric("wait_time", round(time.monotonic() - start, 3))
                        return
                except PlaywrightError as e:
                    self.logger.debug("Condition check failed", condition=spec.name, error=str(e))

                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                time.sleep(min(spec.poll_interval, remaining))

            elapsed = time.monotonic() - start
            timer.add_metric("condition_met", False)

        target_text = describe_target(target)
        subject = f"{spec.name} of {target_text}" if target_text else spec.name
        raise WaitTimeoutException(
            f"Timed out waiting for {subject} after {elapsed:.2f}s (timeout {spec.timeout}s)",
            condition=spec.name,
            timeout_duration=spec.timeout,
            elapsed=elapsed,
            target=target_text
        )

    def wait_for_visibility(self, handle: BrowserHandle, target: Target, timeout: Optional[float] = None) -> None:
        self.wait_until(handle, self._spec("visibility", is_visible, timeout), target)

    def wait_for_clickability(self, handle: BrowserHandle, target: Target, timeout: Optional[float] = None) -> None:
        """Wait until the target is visible and enabled."""
        self.wait_until(handle, self._spec("clickability", is_clickable, timeout), target)

    def wait_for_presence(self, handle: BrowserHandle, locator: Target, timeout: Optional[float] = None) -> None:
        """Wait until at least one element matching ``locator`` is in the DOM."""
        self.wait_until(handle, self._spec("presence", is_present, timeout), locator)

    def wait_for_page_load(self, handle: BrowserHandle, timeout: Optional[float] = None) -> None:
        """Wait until ``document.readyState`` reports ``complete``."""
        self.wait_until(handle, self._spec("page_load", is_page_loaded, timeout))
