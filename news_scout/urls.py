# File: news_scout/urls.py
"""news_scout.urls: URL страницы поиска и страницы издания в агрегаторе."""

from __future__ import annotations

from typing import Sequence

from news_scout.config import Region

__all__: Sequence[str] = ("DEFAULT_BASE_URL", "build_search_url", "build_publication_url")

DEFAULT_BASE_URL = "https://news.google.com"


def _locale_params(region: Region) -> str:
    return f"hl={region.code}&gl={region.gl}&ceid={region.ceid}"


def build_search_url(region: Region, query: str, base_url: str = DEFAULT_BASE_URL) -> str:
    """Search results URL; *query* must already be percent-encoded."""
    return f"{base_url.rstrip('/')}/search?q={query}&{_locale_params(region)}"


def build_publication_url(domain: str, region: Region, base_url: str = DEFAULT_BASE_URL) -> str:
    """Best-effort guess at the publication page; the real one needs a publication id.

    Never used to decide a verdict.
    """
    return f"{base_url.rstrip('/')}/publications/{domain}?{_locale_params(region)}"
