# File: news_scout/page.py
"""
Rendered-page abstraction used by the evidence extractor.

Indicators only need three things from a loaded results page: its current URL,
lookup of one element by CSS locator, and the text content of that element.
Fetchers (browser or plain HTTP) and test fixtures provide the same surface.
"""
from __future__ import annotations

from typing import Any, AsyncContextManager, Optional, Protocol, runtime_checkable

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__ = ("RenderedPage", "PageFetcher", "HtmlPage")


@runtime_checkable
class RenderedPage(Protocol):
    """A loaded page that has reached a settled state."""

    @property
    def url(self) -> str: ...

    async def find_element(self, locator: str) -> Optional[Any]:
        """Return a handle for the first element matching *locator*, or None."""
        ...

    async def text_content(self, element: Any) -> str: ...


class PageFetcher(Protocol):
    """Loads pages; ``load`` is a scoped acquisition of one page (browser tab).

    Implementations raise :class:`news_scout.errors.FetchError` on failure or
    timeout and release the page on every exit path.
    """

    def load(self, url: str, timeout: float) -> AsyncContextManager[RenderedPage]: ...


class HtmlPage:
    """RenderedPage over static HTML, parsed with BeautifulSoup."""

    def __init__(self, url: str, html: str) -> None:
        self._url = url
        self.soup = BeautifulSoup(html, "html.parser")

    @property
    def url(self) -> str:
        return self._url

    async def find_element(self, locator: str) -> Optional[Tag]:
        return self.soup.select_one(locator)

    async def text_content(self, element: Tag) -> str:
        return element.get_text()

    def __repr__(self) -> str:
        return f"HtmlPage(url={self._url!r})"
