# browserkit/core/screenshots.py
"""
Failure screenshot capture.

The capture reads the registry's current handle. It runs from test-runner
hooks after a test has already failed; a missing or closed handle skips
the capture with a warning.
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from playwright.sync_api import Error as PlaywrightError

from browserkit.core.logger import get_logger
from browserkit.core.registry import SessionRegistry

_UNSAFE_CHARS = re.compile(r"[^\w.-]+")


def screenshot_path(directory: Union[str, Path], test_name: str, when: Optional[datetime] = None) -> Path:
    """``<directory>/<test_name>_<YYYY-mm-dd_HH-MM-SS>.png`` with unsafe characters replaced."""
    stamp = (when or datetime.now()).strftime("%Y-%m-%d_%H-%M-%S")
    safe_name = _UNSAFE_CHARS.sub("_", test_name).strip("_") or "test"
    return Path(directory) / f"{safe_name}_{stamp}.png"


def capture_failure_screenshot(
        registry: SessionRegistry,
        test_name: str,
        directory: Union[str, Path] = "screenshots"
) -> Optional[Path]:
    """
    Save a screenshot of the current handle's page.

    Returns:
        The written path, or None when nothing was captured. Capture
        errors are logged, never raised.
    """
    logger = get_logger("screenshots")
    handle = registry.get_current()

    if handle is None:
        logger.warning("No current browser handle, screenshot skipped", test_name=test_name)
        return None
    if handle.is_closed:
        logger.warning("Current browser handle is closed, screenshot skipped", test_name=test_name)
        return None

    path = screenshot_path(directory, test_name)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handle.page.screenshot(path=str(path), full_page=True)
    except (PlaywrightError, OSError) as e:
        logger.error("Error capturing screenshot", test_name=test_name, error=str(e))
        return None

    logger.info("Failure screenshot saved", test_name=test_name, path=str(path), session_id=handle.session_id)
    return path
