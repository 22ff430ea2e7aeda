# browserkit/core/exceptions/timeout.py
"""
Timeout Exception Classes
"""

from typing import Optional

from .base import AutomationException
from .enums import ErrorCategory, ErrorSeverity


class WaitTimeoutException(AutomationException):
    """
    Raised when an explicit wait condition is not met before its deadline.

    Carries the condition name, the configured timeout and the time
    actually spent waiting, all in seconds.
    """

    def __init__(
            self,
            message: str,
            condition: Optional[str] = None,
            timeout_duration: Optional[float] = None,
            elapsed: Optional[float] = None,
            target: Optional[str] = None,
            **kwargs
    ):
        kwargs.setdefault('category', ErrorCategory.TIMEOUT)
        kwargs.setdefault('severity', ErrorSeverity.MEDIUM)
        super().__init__(message=message, **kwargs)

        self.condition = condition
        self.timeout_duration = timeout_duration
        self.elapsed = elapsed
        self.target = target

        if condition:
            self.add_context("condition", condition)
        if timeout_duration is not None:
            self.add_context("timeout_duration", timeout_duration)
        if elapsed is not None:
            self.add_context("elapsed", round(elapsed, 3))
        if target:
            self.add_context("target", target)

        for suggestion in (
            "Increase timeout duration",
            "Check if page/element loads slowly",
            "Verify the locator matches the intended element",
        ):
            self.add_recovery_suggestion(suggestion)
