# browserkit/config/json_config.py
"""
JSON configuration document reader.

The test run is pointed at a single JSON document supplying at least the
navigation target (``url``) and the browser selector (``driver`` or
``browser``). The document is read once, when the source is constructed;
missing files and missing keys are fatal rather than defaulted.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

from browserkit.core.exceptions import ConfigurationException
from browserkit.core.logger import get_logger


class JsonConfigSource:
    """
    Read-only key/value view of a JSON configuration document.

    Example:
        >>> config = JsonConfigSource("config.json")
        >>> config.get("url")
        'https://example.test'
        >>> config.get_any("driver", "browser")
        'CHROME'
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.logger = get_logger("json_config")
        self._data = self._load()

    def _load(self) -> Dict[str, Any]:
        if not self.path.is_file():
            raise ConfigurationException(
                f"Configuration file not found: {self.path}",
                source=self.path
            )

        try:
            with self.path.open(encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationException(
                f"Failed to read configuration file {self.path}: {e}",
                source=self.path,
                original_exception=e
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationException(
                f"Configuration root must be a JSON object, got {type(data).__name__}",
                source=self.path
            )

        self.logger.debug("Configuration loaded", path=str(self.path), keys=sorted(data))
        return data

    def get(self, key: str) -> str:
        """
        Return the value of ``key`` as a string.

        Raises:
            ConfigurationException: If the key is absent or null
        """
        value = self._data.get(key)
        if value is None:
            raise ConfigurationException(
                f"Key '{key}' not found in configuration file {self.path}",
                source=self.path,
                key=key
            )
        return str(value)

    def get_any(self, *keys: str) -> str:
        """Return the value of the first key present, in the order given."""
        for key in keys:
            if self._data.get(key) is not None:
                return str(self._data[key])
        raise ConfigurationException(
            f"None of the keys {list(keys)} found in configuration file {self.path}",
            source=self.path,
            key=keys[0] if keys else None
        )

    def contains(self, key: str) -> bool:
        return self._data.get(key) is not None

    def as_dict(self) -> Dict[str, Any]:
        """Copy of the whole document."""
        return dict(self._data)
