# news_scout/fetcher/http.py
"""
HTTP fetcher: loads server-rendered results pages with aiohttp.

No retries: a timeout, a non-2xx status or an undecodable body becomes a FetchError and the
attempt is recorded as non-matching.
"""
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from news_scout.config import CheckerConfig
from news_scout.errors import FetchError
from news_scout.logger import logger
from news_scout.page import HtmlPage


class HttpPageFetcher:
    """PageFetcher over a single aiohttp session shared by the whole batch."""

    def __init__(self, config: CheckerConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> HttpPageFetcher:
        if self.session is None:
            self.session = ClientSession(
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    @asynccontextmanager
    async def load(self, url: str, timeout: float) -> AsyncIterator[HtmlPage]:
        """
        Fetch *url* and yield it as an HtmlPage.

        Raises FetchError on timeout, connection error, non-2xx status or
        a body that does not decode in its declared charset.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(url, timeout=ClientTimeout(total=timeout)) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchError(url, f"HTTP {resp.status}")
                text = await resp.text()
                final_url = str(resp.url)
        except asyncio.TimeoutError as exc:
            raise FetchError(url, f"timed out after {timeout:g}s") from exc
        except UnicodeDecodeError as exc:
            raise FetchError(url, f"body is not valid {exc.encoding}: {exc.reason}") from exc
        except ClientError as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc
        logger.debug("Loaded %s (%d bytes)", final_url, len(text))
        yield HtmlPage(final_url, text)
