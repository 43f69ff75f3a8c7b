"""
Unit tests for the headless-browser page extractor.
"""
import asyncio
import time
from unittest.mock import AsyncMock, Mock, patch

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from core.config import Placeholders
from core.deadline import TimedOut, race_deadline
from models.extraction_models import PageData
from services.ingestion.page_extractor import BrowserSession, PageExtractor, launch_chromium

POST_URL = "https://www.instagram.com/reel/abc123/"


class TestExtraction:
    """Test navigation and snapshot extraction."""

    def test_extracts_caption_and_video(self, make_launcher):
        """Test that the snapshot yields caption and resolved video URL."""
        launcher = make_launcher(
            '<h1>Hello world</h1><video><source src="/v/clip.mp4"></video>'
        )
        extractor = PageExtractor(launcher=launcher, navigation_timeout_ms=1234)

        data = asyncio.run(extractor.extract(POST_URL))

        assert data.caption == "Hello world"
        assert data.video_url == "https://www.instagram.com/v/clip.mp4"
        page = launcher.session.page
        assert page.goto_calls == [{"url": POST_URL, "wait_until": "networkidle", "timeout": 1234}]

    def test_navigation_timeout_uses_partial_page(self, make_launcher):
        """Test that a navigation timeout is soft and the partial page is used."""
        launcher = make_launcher(
            "<h1>Partially loaded</h1>",
            goto_error=PlaywrightTimeoutError("Timeout 1234ms exceeded."),
        )
        extractor = PageExtractor(launcher=launcher)

        data = asyncio.run(extractor.extract(POST_URL))

        assert data.caption == "Partially loaded"
        assert launcher.session.close_calls == 1

    def test_empty_page_gives_placeholders(self, make_launcher):
        """Test that an empty page degrades to placeholders."""
        extractor = PageExtractor(launcher=make_launcher("<html></html>"))

        data = asyncio.run(extractor.extract(POST_URL))

        assert data.caption == Placeholders.CAPTION_NOT_FOUND
        assert data.video_url is None

    def test_launch_failure_propagates(self, failing_launcher):
        """Test that a browser that cannot start fails the extraction."""
        extractor = PageExtractor(launcher=failing_launcher)

        with pytest.raises(RuntimeError, match="Executable doesn't exist"):
            asyncio.run(extractor.extract(POST_URL))

    def test_slow_parse_does_not_hold_up_deadline(self, make_launcher):
        """Test that DOM parsing runs off the event loop so a deadline still fires."""
        def slow_parse(html, base_url):
            time.sleep(0.5)
            return PageData(caption="late")

        async def scenario():
            loop = asyncio.get_running_loop()
            start = loop.time()
            extractor = PageExtractor(launcher=make_launcher("<h1>big page</h1>"))
            outcome = await race_deadline(extractor.extract(POST_URL), timeout=0.05, fallback=None)
            return outcome, loop.time() - start

        with patch("services.ingestion.page_extractor.extract_page_data", side_effect=slow_parse):
            outcome, elapsed = asyncio.run(scenario())

        assert isinstance(outcome, TimedOut)
        assert elapsed < 0.4


class TestBrowserCleanup:
    """The browser is closed exactly once on every exit path."""

    def test_closed_once_on_success(self, make_launcher):
        """Test that a successful extraction closes the browser once."""
        launcher = make_launcher("<h1>ok</h1>")

        asyncio.run(PageExtractor(launcher=launcher).extract(POST_URL))

        assert launcher.session.close_calls == 1

    def test_closed_once_on_error(self, make_launcher):
        """Test that a failure opening the page still closes the browser."""
        launcher = make_launcher(new_page_error=RuntimeError("Target closed"))

        with pytest.raises(RuntimeError):
            asyncio.run(PageExtractor(launcher=launcher).extract(POST_URL))

        assert launcher.session.close_calls == 1

    def test_non_timeout_navigation_error_closes_and_raises(self, make_launcher):
        """Test that a hard navigation error closes the browser and propagates."""
        launcher = make_launcher(goto_error=ValueError("net::ERR_NAME_NOT_RESOLVED"))

        with pytest.raises(ValueError):
            asyncio.run(PageExtractor(launcher=launcher).extract(POST_URL))

        assert launcher.session.close_calls == 1

    def test_closed_once_when_deadline_wins(self, make_launcher):
        """Test that cancellation by the deadline closes the browser."""
        launcher = make_launcher(hang=True)
        extractor = PageExtractor(launcher=launcher)

        outcome = asyncio.run(race_deadline(extractor.extract(POST_URL), timeout=0.05, fallback=None))

        assert isinstance(outcome, TimedOut)
        assert launcher.session.close_calls == 1

    def test_close_failure_keeps_extracted_data(self, make_launcher):
        """Test that an error while closing is logged and the snapshot is still returned."""
        launcher = make_launcher("<h1>Hello world</h1>", close_error=RuntimeError("Browser has been closed"))

        data = asyncio.run(PageExtractor(launcher=launcher).extract(POST_URL))

        assert data.caption == "Hello world"
        assert launcher.session.close_calls == 1


class TestLaunchChromium:
    """Test the driver lifecycle around browser launch."""

    def test_successful_launch_keeps_driver_running(self, fake_playwright):
        """Test that a launched browser is wrapped in a session and the driver stays up."""
        browser = Mock()
        fake_playwright.chromium.launch = AsyncMock(return_value=browser)

        session = asyncio.run(launch_chromium())

        assert isinstance(session, BrowserSession)
        assert session.browser is browser
        assert fake_playwright.chromium.launch.call_args.kwargs["headless"] is True
        fake_playwright.stop.assert_not_called()

    def test_launch_failure_stops_driver(self, fake_playwright):
        """Test that the driver is stopped when Chromium fails to start."""
        fake_playwright.chromium.launch = AsyncMock(side_effect=RuntimeError("Executable doesn't exist"))

        with pytest.raises(RuntimeError):
            asyncio.run(launch_chromium())

        fake_playwright.stop.assert_awaited_once()

    def test_cancelled_launch_stops_driver(self, fake_playwright):
        """Test that a deadline firing mid-launch still stops the driver exactly once."""
        outcome = asyncio.run(race_deadline(PageExtractor().extract(POST_URL), timeout=0.05, fallback=None))

        assert isinstance(outcome, TimedOut)
        fake_playwright.stop.assert_awaited_once()

    def test_session_close_stops_driver_after_browser_error(self):
        """Test that the driver is stopped even if closing the browser fails."""
        browser = Mock()
        browser.close = AsyncMock(side_effect=RuntimeError("Target closed"))
        driver = Mock()
        driver.stop = AsyncMock()

        with pytest.raises(RuntimeError):
            asyncio.run(BrowserSession(driver, browser).close())

        driver.stop.assert_awaited_once()
