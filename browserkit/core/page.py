# browserkit/core/page.py
"""Page-level operations against the session's live handle."""

from playwright.sync_api import Error as PlaywrightError

from browserkit.core.exceptions import BrowserNavigationException
from browserkit.core.logger import get_logger
from browserkit.core.session import BrowserSessionManager


class PageManager:
    """Refresh and read-outs for the session's current page."""

    def __init__(self, session: BrowserSessionManager):
        self.session = session
        self.logger = get_logger("page_manager")

    def refresh(self) -> None:
        """
        Reload the current page.

        Raises:
            NotInitializedException: If the session has no handle
            BrowserNavigationException: If the reload fails
        """
        handle = self.session.get_handle()
        page = handle.page
        try:
            page.reload()
        except PlaywrightError as e:
            raise BrowserNavigationException(
                f"reload of {page.url} failed: {e}",
                current_url=page.url,
                session_id=handle.session_id,
                original_exception=e
            ) from e
        self.logger.debug("Page refreshed", session_id=handle.session_id, url=page.url)

    def get_title(self) -> str:
        return self.session.get_handle().page.title()

    def get_url(self) -> str:
        return self.session.get_handle().page.url
