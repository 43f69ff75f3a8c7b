"""
Headless-browser page extractor using Playwright.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Dict

from playwright.async_api import (
    Browser,
    Page,
    Playwright,
    async_playwright,
    TimeoutError as PlaywrightTimeoutError,
)

from core.config import BROWSER_USER_AGENT, BROWSER_VIEWPORT, NAVIGATION_TIMEOUT_MS, Placeholders
from models.extraction_models import PageData
from services.extraction.heuristics import extract_page_data

logger = logging.getLogger(__name__)

CHROMIUM_ARGS = ["--no-sandbox", "--disable-dev-shm-usage", "--disable-gpu"]


class BrowserSession:
    """A private Playwright driver and the headless Chromium it started."""

    def __init__(self, playwright: Playwright, browser: Browser):
        self.playwright = playwright
        self.browser = browser

    async def new_page(self, user_agent: str, viewport: Dict[str, int]) -> Page:
        context = await self.browser.new_context(user_agent=user_agent, viewport=viewport)
        return await context.new_page()

    async def close(self) -> None:
        try:
            await self.browser.close()
        finally:
            await self.playwright.stop()


async def launch_chromium() -> BrowserSession:
    """Start a fresh driver and browser; nothing is shared between requests."""
    playwright = await async_playwright().start()
    # Also stop the driver when cancelled mid-launch
    try:
        browser = await playwright.chromium.launch(headless=True, args=CHROMIUM_ARGS)
    except BaseException:
        await playwright.stop()
        raise
    return BrowserSession(playwright, browser)


class PageExtractor:
    """Renders a post page and runs the DOM heuristics over it."""

    def __init__(
        self,
        launcher: Callable[[], Awaitable[BrowserSession]] = launch_chromium,
        navigation_timeout_ms: int = NAVIGATION_TIMEOUT_MS,
        user_agent: str = BROWSER_USER_AGENT,
        viewport: Dict[str, int] = None,
    ):
        self.launcher = launcher
        self.navigation_timeout_ms = navigation_timeout_ms
        self.user_agent = user_agent
        self.viewport = viewport or dict(BROWSER_VIEWPORT)

    async def extract(self, url: str) -> PageData:
        """
        Load `url` in a new headless browser and extract post data.

        The browser is closed before this returns or raises, including when
        the calling task is cancelled. A slow navigation is not an error:
        whatever had rendered when the navigation timeout hit is used.

        Raises:
            Whatever the launcher raises when the browser cannot start.
        """
        logger.info(f"Extracting page data from {url}")
        session = await self.launcher()
        try:
            page = await session.new_page(self.user_agent, self.viewport)
            await self._navigate(page, url)
            html = await page.content()
            # about:blank when the navigation never committed
            base_url = page.url if page.url.startswith("http") else url
        finally:
            await self._close(session)

        # Blocking parse runs off the event loop
        data = await asyncio.to_thread(extract_page_data, html, base_url)
        logger.info(
            f"Extracted caption={'no' if data.caption == Placeholders.CAPTION_NOT_FOUND else 'yes'} "
            f"video={'yes' if data.video_url else 'no'} from {url}"
        )
        return data

    @staticmethod
    async def _close(session: BrowserSession) -> None:
        try:
            await session.close()
        except Exception as e:
            logger.warning(f"Could not close browser cleanly: {e}")
            return
        logger.debug("Browser closed")

    async def _navigate(self, page: Page, url: str) -> None:
        try:
            await page.goto(url, wait_until="networkidle", timeout=self.navigation_timeout_ms)
        except PlaywrightTimeoutError:
            logger.warning(
                f"Navigation to {url} timed out after {self.navigation_timeout_ms}ms; "
                "continuing with partially loaded page"
            )
