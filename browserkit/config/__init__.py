"""Configuration: environment settings and the JSON run configuration."""

from .settings import (
    BrowserSettings,
    LoggingSettings,
    ReportingSettings,
    Settings,
    WaitSettings,
    get_settings,
    reload_settings,
)

__all__ = [
    "BrowserSettings",
    "LoggingSettings",
    "ReportingSettings",
    "Settings",
    "WaitSettings",
    "get_settings",
    "reload_settings",
]
