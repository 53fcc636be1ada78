# File: news_scout/engine.py
"""news_scout.engine: прогон проверки по всему списку доменов."""

from __future__ import annotations

import asyncio
import time
from typing import Any, Callable, List, Optional, Sequence

from news_scout.aggregator import BatchReport, aggregate_results
from news_scout.config import CheckerConfig
from news_scout.errors import NewsScoutError
from news_scout.evidence import Indicator, select_indicators
from news_scout.fetcher import create_fetcher
from news_scout.logger import logger
from news_scout.page import PageFetcher
from news_scout.strategies import SearchStrategy, select_strategies
from news_scout.validator import DomainResult, validate_domain

__all__ = ["BatchRunner", "ProgressCallback", "run_all"]

ProgressCallback = Callable[[DomainResult, int, int], None]


class BatchRunner:
    """Drives validate_domain over a domain list.

    Domains run one at a time unless ``config.concurrency`` > 1; results are
    stored by input index so the report keeps the input order either way.
    """

    def __init__(
        self,
        config: CheckerConfig,
        fetcher: PageFetcher,
        *,
        strategies: Optional[Sequence[SearchStrategy]] = None,
        indicators: Optional[Sequence[Indicator]] = None,
    ) -> None:
        self.config = config
        self.fetcher = fetcher
        self.strategies = list(strategies) if strategies is not None else select_strategies(config.strategies)
        self.indicators = list(indicators) if indicators is not None else select_indicators(config.indicators)
        self._slots: List[Optional[DomainResult]] = []
        self._done = 0
        self._start_lock = asyncio.Lock()
        self._last_start = 0.0

    async def run(
        self, domains: Sequence[str], on_progress: Optional[ProgressCallback] = None
    ) -> BatchReport:
        """Проверяет все домены и возвращает отчёт в порядке входного списка."""
        self._slots = [None] * len(domains)
        self._done = 0
        logger.info("Checking %d domains against %s", len(domains), self.config.base_url)
        started = time.monotonic()

        semaphore = asyncio.Semaphore(self.config.concurrency)

        async def _worker(index: int, domain: str) -> None:
            async with semaphore:
                await self._wait_for_delay()
                result = await self._check(domain)
            self._slots[index] = result
            self._done += 1
            if on_progress is not None:
                on_progress(result, self._done, len(domains))

        if self.config.concurrency == 1:
            for index, domain in enumerate(domains):
                await _worker(index, domain)
        else:
            await asyncio.gather(*(_worker(i, d) for i, d in enumerate(domains)))

        report = self.partial_report()
        logger.info(
            "Done: %d/%d valid sources in %.2f s",
            report.valid_count, report.total, time.monotonic() - started,
        )
        return report

    def partial_report(self) -> BatchReport:
        """Отчёт по уже завершённым доменам (для сохранения при прерывании)."""
        return aggregate_results([r for r in self._slots if r is not None])

    async def _check(self, domain: str) -> DomainResult:
        try:
            return await validate_domain(
                domain,
                self.config,
                self.fetcher,
                strategies=self.strategies,
                indicators=self.indicators,
            )
        except (NewsScoutError, ValueError) as exc:
            logger.error("Error checking %s: %s", domain, exc)
            return DomainResult(domain=domain)
        except Exception as exc:
            # CancelledError is a BaseException and still stops the batch
            logger.exception("Unexpected error checking %s: %s", domain, exc)
            return DomainResult(domain=domain)

    async def _wait_for_delay(self) -> None:
        if not self.config.delay:
            return
        async with self._start_lock:
            wait = self.config.delay - (time.monotonic() - self._last_start)
            if self._last_start and wait > 0:
                await asyncio.sleep(wait)
            self._last_start = time.monotonic()


async def run_all(
    domains: Sequence[str],
    config: CheckerConfig,
    fetcher_factory: Callable[[CheckerConfig], Any] = create_fetcher,
    on_progress: Optional[ProgressCallback] = None,
) -> BatchReport:
    """Opens a fetcher from *fetcher_factory* for the whole batch and runs it."""
    async with fetcher_factory(config) as fetcher:
        runner = BatchRunner(config, fetcher)
        return await runner.run(domains, on_progress)
