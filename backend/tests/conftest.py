"""
Shared fakes for tests that would otherwise need a real browser.
"""
import asyncio
from unittest.mock import AsyncMock, Mock, patch

import pytest


async def never_settles(*args, **kwargs):
    await asyncio.Event().wait()


class FakePage:
    """Stands in for a Playwright page serving fixed HTML."""

    def __init__(self, html: str, goto_error: Exception = None, hang: bool = False):
        self.html = html
        self.goto_error = goto_error
        self.hang = hang
        self.url = "about:blank"
        self.goto_calls = []

    async def goto(self, url, wait_until=None, timeout=None):
        self.goto_calls.append({"url": url, "wait_until": wait_until, "timeout": timeout})
        if self.hang:
            await never_settles()
        self.url = url
        if self.goto_error is not None:
            raise self.goto_error

    async def content(self):
        return self.html


class FakeSession:
    """Stands in for BrowserSession; counts close() calls."""

    def __init__(self, page: FakePage, new_page_error: Exception = None, close_error: Exception = None):
        self.page = page
        self.new_page_error = new_page_error
        self.close_error = close_error
        self.close_calls = 0

    async def new_page(self, user_agent, viewport):
        if self.new_page_error is not None:
            raise self.new_page_error
        return self.page

    async def close(self):
        self.close_calls += 1
        if self.close_error is not None:
            raise self.close_error


class FakeLauncher:
    """Async callable returning a FakeSession, or raising like a failed launch."""

    def __init__(self, session: FakeSession = None, error: Exception = None):
        self.session = session
        self.error = error
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.session


@pytest.fixture
def make_launcher():
    """Build a FakeLauncher serving `html`; extra kwargs go to FakePage."""
    def _make(
        html: str = "<html><body></body></html>",
        new_page_error: Exception = None,
        close_error: Exception = None,
        **page_kwargs,
    ):
        page = FakePage(html, **page_kwargs)
        return FakeLauncher(FakeSession(page, new_page_error=new_page_error, close_error=close_error))
    return _make


@pytest.fixture
def failing_launcher():
    return FakeLauncher(error=RuntimeError("Executable doesn't exist at /ms-playwright/chromium"))


@pytest.fixture
def fake_playwright():
    """
    Patch the Playwright entry point with a driver whose Chromium launch
    never settles. Configure `driver.chromium.launch` to change that.
    """
    driver = Mock()
    driver.chromium.launch = AsyncMock(side_effect=never_settles)
    driver.stop = AsyncMock()
    entry = Mock()
    entry.return_value.start = AsyncMock(return_value=driver)
    with patch("services.ingestion.page_extractor.async_playwright", entry):
        yield driver
