"""news_scout.fetcher: загрузчики страниц результатов (браузер или HTTP)."""

from __future__ import annotations

from news_scout.config import CheckerConfig
from news_scout.fetcher.http import HttpPageFetcher


def create_fetcher(config: CheckerConfig):
    """Возвращает загрузчик по ``config.engine``; Playwright импортируется только для браузера."""
    if config.engine == "http":
        return HttpPageFetcher(config)
    from news_scout.fetcher.browser import BrowserPageFetcher

    return BrowserPageFetcher(config)


__all__ = ["create_fetcher", "HttpPageFetcher"]
