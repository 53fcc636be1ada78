# news_scout/fetcher/browser.py
"""
Browser fetcher: renders results pages in headless Chromium via Playwright.

One browser per batch, one tab per attempt. ``load`` waits for the network to
go idle before handing the page to the indicators and always closes the tab.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from playwright.async_api import Browser, BrowserContext, ElementHandle, Page, Playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from news_scout.config import CheckerConfig
from news_scout.errors import FetchError
from news_scout.logger import logger

LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


class BrowserPage:
    """RenderedPage over a live Playwright tab."""

    def __init__(self, page: Page) -> None:
        self._page = page

    @property
    def url(self) -> str:
        return self._page.url

    async def find_element(self, locator: str) -> Optional[ElementHandle]:
        return await self._page.query_selector(locator)

    async def text_content(self, element: ElementHandle) -> str:
        return (await element.text_content()) or ""


class BrowserPageFetcher:
    """PageFetcher backed by Chromium."""

    def __init__(self, config: CheckerConfig) -> None:
        self.config = config
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None

    async def __aenter__(self) -> BrowserPageFetcher:
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(
                headless=self.config.headless, args=LAUNCH_ARGS
            )
            self._context = await self._browser.new_context(user_agent=self.config.user_agent)
        except PlaywrightError:
            await self._playwright.stop()
            raise
        logger.debug("Chromium started (headless=%s)", self.config.headless)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            if self._context:
                await self._context.close()
            if self._browser:
                await self._browser.close()
        finally:
            if self._playwright:
                await self._playwright.stop()
            self._context = self._browser = self._playwright = None

    @asynccontextmanager
    async def load(self, url: str, timeout: float) -> AsyncIterator[BrowserPage]:
        if self._context is None:
            raise RuntimeError("Browser not started")
        try:
            page = await self._context.new_page()
        except PlaywrightError as exc:
            raise FetchError(url, f"cannot open tab: {exc.message}") from exc
        try:
            try:
                await page.goto(url, wait_until="networkidle", timeout=timeout * 1000)
            except PlaywrightTimeoutError as exc:
                raise FetchError(url, f"timed out after {timeout:g}s") from exc
            except PlaywrightError as exc:
                raise FetchError(url, exc.message) from exc
            yield BrowserPage(page)
        finally:
            try:
                await page.close()
            except PlaywrightError as exc:
                # the browser may already be gone; the attempt's own error wins
                logger.debug("Closing tab for %s failed: %s", url, exc.message)
