# File: tests/conftest.py
from contextlib import asynccontextmanager
from typing import Callable, Dict, List, Union

import pytest

from news_scout.config import REGIONS, CheckerConfig
from news_scout.errors import FetchError
from news_scout.logger import configure
from news_scout.page import HtmlPage

SENTINEL = "There are no items to show."


def results_page(banner: Union[str, None] = None, source: Union[str, None] = None) -> str:
    """
    Build a results page in the aggregator's markup.

    banner=None → no "no items" banner at all; source → name of the top result's source.
    """
    if banner is None:
        return "<html><body><div id='yDmH0d'><c-wiz><div><main></main></div></c-wiz></div></body></html>"
    article = ""
    if source is not None:
        article = (
            "<article><div class='m5k28'><div class='B6pJDd'><div class='oovtQ'>"
            f"<div><div>{source}</div></div>"
            "</div></div></div></article>"
        )
    return (
        "<html><body><div id='yDmH0d'><c-wiz><div><main>"
        f"<div class='UW0SDc'>{banner}{article}</div>"
        "</main></div></c-wiz></div></body></html>"
    )


Handler = Union[str, Exception, Callable[[str], Union[str, Exception]]]


class StubFetcher:
    """
    PageFetcher stub: every URL gets the same handler, or a handler per substring.
    A handler is HTML, an exception to raise, or a callable url -> HTML/exception.
    """

    def __init__(
        self,
        default: Handler = "",
        routes: Union[Dict[str, Handler], None] = None,
        landing_url: Union[str, None] = None,
    ) -> None:
        self.default = default
        self.routes = routes or {}
        self.landing_url = landing_url
        self.loaded: List[str] = []
        self.open_pages = 0
        self.closed_pages = 0

    def _handler(self, url: str) -> Handler:
        for key, handler in self.routes.items():
            if key in url:
                return handler
        return self.default

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return None

    @asynccontextmanager
    async def load(self, url: str, timeout: float):
        self.loaded.append(url)
        handler = self._handler(url)
        if callable(handler) and not isinstance(handler, BaseException):
            handler = handler(url)
        if isinstance(handler, BaseException):
            raise handler
        self.open_pages += 1
        try:
            yield HtmlPage(self.landing_url or url, handler)
        finally:
            self.closed_pages += 1


@pytest.fixture()
def config() -> CheckerConfig:
    """Single region, single strategy, short timeout."""
    return CheckerConfig(page_timeout=1.0)


@pytest.fixture()
def all_regions_config() -> CheckerConfig:
    return CheckerConfig(regions=tuple(REGIONS.values()), page_timeout=1.0)


@pytest.fixture()
def no_banner_html() -> str:
    return results_page()


@pytest.fixture()
def no_items_html() -> str:
    return results_page(SENTINEL)


@pytest.fixture()
def fetch_error() -> FetchError:
    return FetchError("https://news.google.com/search", "timed out after 1s")


@pytest.fixture(autouse=True)
def _logging():
    """Fresh handlers per test: CliRunner swaps sys.stderr under the logger."""
    configure(level="DEBUG")
    yield
    configure(level="WARNING")
