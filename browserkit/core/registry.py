# browserkit/core/registry.py
"""
Process-wide session registry.

Session creators publish handles here; failure hooks and screenshot
capture read the current handle without being wired into the creation
path. Every operation takes the same lock, and readers on other threads
only ever observe whole entries.
"""

import threading
from typing import Dict, Optional

from browserkit.core.exceptions import RegistryKeyException
from browserkit.core.handle import BrowserHandle
from browserkit.core.logger import get_logger


class SessionRegistry:
    """
    Thread-safe map of string keys to browser handles plus a single
    "current handle" slot.

    The registry holds shared references only; it never closes a handle.

    Example:
        >>> registry = SessionRegistry()
        >>> registry.put(handle.session_id, handle)
        >>> registry.set_current(handle)
        >>> registry.get_current() is handle
        True
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._entries: Dict[str, BrowserHandle] = {}
        self._current: Optional[BrowserHandle] = None
        self.logger = get_logger("session_registry")

    @staticmethod
    def _validate_key(key) -> str:
        if not isinstance(key, str) or not key.strip():
            raise RegistryKeyException(key=key)
        return key

    def put(self, key: str, handle: BrowserHandle) -> None:
        """Store a handle under ``key``, replacing any existing entry."""
        key = self._validate_key(key)
        with self._lock:
            replaced = key in self._entries
            self._entries[key] = handle
        self.logger.debug("Handle registered", key=key, replaced=replaced)

    def get(self, key: str) -> Optional[BrowserHandle]:
        """Handle stored under ``key``, or None; malformed keys are simply absent."""
        with self._lock:
            return self._entries.get(key) if isinstance(key, str) else None

    def remove(self, key: str) -> Optional[BrowserHandle]:
        """Remove an entry; returns the removed handle or None."""
        key = self._validate_key(key)
        with self._lock:
            handle = self._entries.pop(key, None)
        if handle is not None:
            self.logger.debug("Handle unregistered", key=key)
        return handle

    def contains(self, key: str) -> bool:
        return self.get(key) is not None

    def clear(self) -> None:
        """Remove every entry and empty the current slot."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._current = None
        self.logger.debug("Registry cleared", removed=count)

    def count(self) -> int:
        with self._lock:
            return len(self._entries)

    def all_entries(self) -> Dict[str, BrowserHandle]:
        """Snapshot copy of all entries."""
        with self._lock:
            return dict(self._entries)

    def set_current(self, handle: Optional[BrowserHandle]) -> None:
        with self._lock:
            self._current = handle

    def get_current(self) -> Optional[BrowserHandle]:
        with self._lock:
            return self._current

    def clear_current(self) -> None:
        with self._lock:
            self._current = None

    def release(self, handle: BrowserHandle) -> None:
        """
        Drop every reference to ``handle``: its keyed entries and, if it is
        the current handle, the current slot.
        """
        with self._lock:
            for key in [key for key, value in self._entries.items() if value is handle]:
                del self._entries[key]
            if self._current is handle:
                self._current = None

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, key) -> bool:
        return self.contains(key)


_session_registry: Optional[SessionRegistry] = None
_session_registry_lock = threading.Lock()


def get_session_registry() -> SessionRegistry:
    """
    Get the process-wide default registry.

    Components accept an explicit registry and fall back to this one.
    """
    global _session_registry

    if _session_registry is None:
        with _session_registry_lock:
            if _session_registry is None:
                _session_registry = SessionRegistry()

    return _session_registry
