# browserkit/core/exceptions/base.py
"""
Root of the browserkit exception hierarchy.

Every framework error carries a category, a severity and a bag of
key/value context (browser family, session id, URL, wait condition...)
so that a failure can be written to the structured log as one event and
inspected by callers without parsing the message.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Set
from uuid import uuid4

from .enums import ErrorCategory, ErrorSeverity


@dataclass
class ErrorContext:
    """Key/value details and monitoring tags attached to one error."""

    data: Dict[str, Any] = field(default_factory=dict)
    tags: Set[str] = field(default_factory=set)

    def add(self, key: str, value: Any) -> "ErrorContext":
        self.data[key] = value
        return self

    def add_tag(self, tag: str) -> "ErrorContext":
        self.tags.add(tag)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {"data": dict(self.data), "tags": sorted(self.tags)}


class AutomationException(Exception):
    """
    Base class for all browserkit errors.

    ``add_context``, ``add_tag`` and ``add_recovery_suggestion`` return the
    exception itself, so details can be chained onto a raise:

        >>> raise BrowserException("crashed").add_context("url", page.url)

    Attributes:
        message: Human-readable description, also the ``str()`` of the error
        error_code: ``<CLASS>_<timestamp>`` identifier unless one is given
        correlation_id: Id shared by related errors, generated if not given
        category: Functional area (browser, session, configuration, ...)
        severity: How far the failure reaches (single call, test, whole run)
        recovery_suggestions: Hints for the person reading the failure
        original_exception: Engine or OS error this one wraps, if any
    """

    def __init__(
            self,
            message: str,
            error_code: Optional[str] = None,
            correlation_id: Optional[str] = None,
            category: ErrorCategory = ErrorCategory.BROWSER,
            severity: ErrorSeverity = ErrorSeverity.MEDIUM,
            context: Optional[Dict[str, Any]] = None,
            recovery_suggestions: Optional[Iterable[str]] = None,
            original_exception: Optional[BaseException] = None
    ):
        super().__init__(message)

        self.message = message
        self.category = category
        self.severity = severity
        self.timestamp = datetime.now(timezone.utc)
        self.error_code = error_code or self._default_error_code()
        self.correlation_id = correlation_id or str(uuid4())
        self.original_exception = original_exception

        self.error_context = ErrorContext(data=dict(context or {}), tags=set(category.get_monitoring_tags()))
        self.recovery_suggestions: List[str] = []
        for suggestion in recovery_suggestions or ():
            self.add_recovery_suggestion(suggestion)

        if original_exception is not None:
            self.error_context.add("original_type", type(original_exception).__name__)
            self.error_context.add("original_message", str(original_exception))

    def _default_error_code(self) -> str:
        prefix = self.__class__.__name__.replace("Exception", "").upper()
        return f"{prefix}_{self.timestamp:%Y%m%d_%H%M%S}"

    @property
    def context(self) -> Dict[str, Any]:
        """Context data as a plain dictionary."""
        return self.error_context.data

    def add_context(self, key: str, value: Any) -> "AutomationException":
        self.error_context.add(key, value)
        return self

    def add_tag(self, tag: str) -> "AutomationException":
        self.error_context.add_tag(tag)
        return self

    def add_recovery_suggestion(self, suggestion: str) -> "AutomationException":
        """Append a hint; empty and repeated hints are ignored."""
        if suggestion and suggestion not in self.recovery_suggestions:
            self.recovery_suggestions.append(suggestion)
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Event payload for structured logging."""
        original = None
        if self.original_exception is not None:
            original = {
                "type": type(self.original_exception).__name__,
                "message": str(self.original_exception),
            }

        return {
            "error_type": type(self).__name__,
            "error_code": self.error_code,
            "correlation_id": self.correlation_id,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "context": self.error_context.to_dict(),
            "recovery_suggestions": list(self.recovery_suggestions),
            "timestamp": self.timestamp.isoformat(),
            "original_exception": original,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, default=str)

    def log_to(self, logger, event: str = "Automation error") -> None:
        """Write this error to a structlog logger at its severity's level."""
        payload = self.to_dict()
        payload.pop("message")
        getattr(logger, self.severity.to_log_method())(event, error=self.message, **payload)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.message[:50]!r}, "
            f"category={self.category.value}, severity={self.severity.value}, "
            f"error_code={self.error_code!r})"
        )
