# browserkit/core/providers.py
"""
Browser resolution strategies.

A provider answers one question: which browser family should the next
handle be? Strategies are interchangeable wherever a BrowserProvider is
accepted.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence, Union

from browserkit.config.json_config import JsonConfigSource
from browserkit.config.settings import Settings, get_settings
from browserkit.core.browser_constants import BrowserType


class BrowserProvider(ABC):
    """Resolves the browser family to launch."""

    @abstractmethod
    def resolve(self) -> BrowserType:
        """
        Raises:
            ConfigurationException: If the backing source cannot supply a value
            UnsupportedBrowserException: If the value names no known family
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class EnumBrowserProvider(BrowserProvider):
    """Returns a pre-selected browser family."""

    def __init__(self, browser_type: BrowserType):
        self.browser_type = BrowserType.from_string(browser_type)

    def resolve(self) -> BrowserType:
        return self.browser_type

    def __repr__(self) -> str:
        return f"EnumBrowserProvider({self.browser_type.value})"


class NameBrowserProvider(BrowserProvider):
    """Maps an externally supplied identifier such as ``"firefox"``."""

    def __init__(self, name: str):
        self.name = name

    def resolve(self) -> BrowserType:
        return BrowserType.from_string(self.name)

    def __repr__(self) -> str:
        return f"NameBrowserProvider({self.name!r})"


class JsonBrowserProvider(BrowserProvider):
    """
    Reads the browser family from a JSON configuration document.

    The first key present wins; by default ``browser`` then ``driver``.

    Example:
        >>> JsonBrowserProvider("config.json").resolve()
        <BrowserType.CHROME: 'CHROME'>
    """

    DEFAULT_KEYS = ("browser", "driver")

    def __init__(
            self,
            source: Union[str, Path, JsonConfigSource],
            keys: Optional[Sequence[str]] = None
    ):
        self.source = source
        self.keys = tuple(keys or self.DEFAULT_KEYS)

    def _config(self) -> JsonConfigSource:
        if isinstance(self.source, JsonConfigSource):
            return self.source
        return JsonConfigSource(self.source)

    def resolve(self) -> BrowserType:
        return BrowserType.from_string(self._config().get_any(*self.keys))

    def __repr__(self) -> str:
        path = self.source.path if isinstance(self.source, JsonConfigSource) else self.source
        return f"JsonBrowserProvider({str(path)!r}, keys={list(self.keys)})"


class SettingsBrowserProvider(BrowserProvider):
    """Uses ``settings.browser.name`` (``BROWSER__NAME`` in the environment)."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings

    def resolve(self) -> BrowserType:
        settings = self.settings or get_settings()
        return BrowserType.from_string(settings.browser.name)
