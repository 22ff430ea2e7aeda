# browserkit/core/exceptions/configuration.py
"""
Configuration and Registry Exception Classes
"""

from pathlib import Path
from typing import Optional, Union

from .base import AutomationException
from .enums import ErrorCategory, ErrorSeverity


class ConfigurationException(AutomationException):
    """
    Raised when an external configuration source is missing, unreadable
    or lacks a required key. Never retried.
    """

    def __init__(
            self,
            message: str,
            source: Optional[Union[str, Path]] = None,
            key: Optional[str] = None,
            **kwargs
    ):
        kwargs.setdefault('category', ErrorCategory.CONFIGURATION)
        kwargs.setdefault('severity', ErrorSeverity.CRITICAL)
        super().__init__(message=message, **kwargs)

        self.source = str(source) if source is not None else None
        self.key = key

        if self.source:
            self.add_context("source", self.source)
        if key:
            self.add_context("key", key)
            self.add_recovery_suggestion(f"Add '{key}' to the configuration source")


class RegistryKeyException(AutomationException):
    """Raised when an empty or non-string key is passed to the session registry."""

    def __init__(self, message: str = "Registry key must be a non-empty string", key=None, **kwargs):
        kwargs.setdefault('category', ErrorCategory.REGISTRY)
        kwargs.setdefault('severity', ErrorSeverity.MEDIUM)
        super().__init__(message=message, **kwargs)
        self.key = key
        self.add_context("key", repr(key))
