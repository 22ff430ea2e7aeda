# browserkit/core/exceptions/__init__.py
"""
Exception hierarchy for the browser session framework.

All exceptions derive from AutomationException and carry structured
context that can be logged with ``exception.to_dict()``.
"""

from .base import AutomationException, ErrorContext
from .browser import (
    BrowserClosedException,
    BrowserException,
    BrowserLaunchException,
    BrowserNavigationException,
    NotInitializedException,
    SessionAlreadyActiveException,
    UnsupportedBrowserException,
)
from .configuration import ConfigurationException, RegistryKeyException
from .enums import ErrorCategory, ErrorSeverity
from .timeout import WaitTimeoutException

__all__ = [
    "AutomationException",
    "BrowserClosedException",
    "BrowserException",
    "BrowserLaunchException",
    "BrowserNavigationException",
    "ConfigurationException",
    "ErrorCategory",
    "ErrorContext",
    "ErrorSeverity",
    "NotInitializedException",
    "RegistryKeyException",
    "SessionAlreadyActiveException",
    "UnsupportedBrowserException",
    "WaitTimeoutException",
]
