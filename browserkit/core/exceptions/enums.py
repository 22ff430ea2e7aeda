# browserkit/core/exceptions/enums.py
"""
Error Classification Enums

Severity and category enums shared by every exception in the framework.
They drive log levels for failures and give monitoring a stable set of
tags to group errors by.
"""

from enum import Enum
from typing import Dict, Set


class ErrorSeverity(str, Enum):
    """
    Error severity levels for exception prioritization.

    Usage:
        >>> error = SomeException("boom", severity=ErrorSeverity.HIGH)
        >>> if error.severity.should_alert():
        ...     notify(error)
    """

    LOW = "low"
    """Cosmetic or informational failures; execution continues."""

    MEDIUM = "medium"
    """Failures of a single call, e.g. a wait that ran out of time."""

    HIGH = "high"
    """Failures that leave the current test unable to continue."""

    CRITICAL = "critical"
    """Failures that leave the whole run unable to continue (launch, config)."""

    def should_alert(self) -> bool:
        """Determine if this severity level requires alerting."""
        return self in [ErrorSeverity.HIGH, ErrorSeverity.CRITICAL]

    def to_log_method(self) -> str:
        """Name of the logger method used to report an error of this severity."""
        mapping: Dict[ErrorSeverity, str] = {
            ErrorSeverity.LOW: "info",
            ErrorSeverity.MEDIUM: "warning",
            ErrorSeverity.HIGH: "error",
            ErrorSeverity.CRITICAL: "critical",
        }
        return mapping[self]


class ErrorCategory(str, Enum):
    """
    Error categories for organizing exception types by functional area.

    Usage:
        >>> if error.category == ErrorCategory.SESSION:
        ...     manager.create(BrowserType.CHROME)
    """

    BROWSER = "browser"
    """Browser launch, crash, navigation or unsupported browser family."""

    SESSION = "session"
    """Session lifecycle misuse: no handle, handle already owned, handle closed."""

    CONFIGURATION = "configuration"
    """Missing or invalid configuration source or key."""

    TIMEOUT = "timeout"
    """Explicit wait conditions not met in time."""

    REGISTRY = "registry"
    """Invalid use of the shared session registry."""

    def get_monitoring_tags(self) -> Set[str]:
        """Get monitoring tags for this error category."""
        base_tags = {f"category:{self.value}"}

        category_tags: Dict[ErrorCategory, Set[str]] = {
            ErrorCategory.BROWSER: {"infrastructure", "browser"},
            ErrorCategory.SESSION: {"lifecycle"},
            ErrorCategory.CONFIGURATION: {"setup", "environment"},
            ErrorCategory.TIMEOUT: {"synchronization", "flaky"},
            ErrorCategory.REGISTRY: {"lifecycle", "concurrency"},
        }

        return base_tags | category_tags.get(self, set())
