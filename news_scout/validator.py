# File: news_scout/validator.py
"""news_scout.validator: проверка одного домена по всем регионам и стратегиям.

Per-domain state machine::

    PENDING → SEARCHING(region_idx, strategy_idx) → FOUND | EXHAUSTED

Pairs are tried region-major in configured order; the first MATCH moves the
machine to FOUND and no further pair is attempted.
"""

from __future__ import annotations

import asyncio
import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from news_scout.config import CheckerConfig, Region
from news_scout.errors import ExtractionError, FetchError
from news_scout.evidence import Evidence, Indicator, extract_evidence, select_indicators
from news_scout.logger import logger
from news_scout.page import PageFetcher
from news_scout.strategies import SearchStrategy, generate_query, select_strategies
from news_scout.urls import build_publication_url, build_search_url

__all__: Sequence[str] = ("Attempt", "DomainResult", "ValidationState", "DomainValidation", "validate_domain")


@dataclass(frozen=True, slots=True)
class Attempt:
    """One (region, strategy) trial against one domain."""

    strategy: str
    region: str
    query: str
    url: str
    success: bool
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "strategy": self.strategy,
            "region": self.region,
            "query": self.query,
            "url": self.url,
            "success": self.success,
        }
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass(slots=True)
class DomainResult:
    """Вердикт по домену и журнал попыток."""

    domain: str
    is_valid_source: bool = False
    validation_url: Optional[str] = None
    attempts: List[Attempt] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "domain": self.domain,
            "isValidSource": self.is_valid_source,
            "validationUrl": self.validation_url,
            "searchResults": [a.to_dict() for a in self.attempts],
        }


class ValidationState(enum.Enum):
    PENDING = "pending"
    SEARCHING = "searching"
    FOUND = "found"
    EXHAUSTED = "exhausted"


class DomainValidation:
    """State machine driving the attempts for one domain."""

    def __init__(
        self,
        domain: str,
        regions: Sequence[Region],
        strategies: Sequence[SearchStrategy],
    ) -> None:
        self.result = DomainResult(domain=domain)
        self.state = ValidationState.PENDING
        self.position: Optional[Tuple[int, int]] = None
        self._pairs = [(r, s) for r in range(len(regions)) for s in range(len(strategies))]
        self._next = 0

    @property
    def done(self) -> bool:
        return self.state in (ValidationState.FOUND, ValidationState.EXHAUSTED)

    def advance(self) -> Optional[Tuple[int, int]]:
        """Moves to the next (region_idx, strategy_idx) or to a terminal state."""
        if self.done:
            return None
        if self._next >= len(self._pairs):
            self.state = ValidationState.EXHAUSTED
            self.position = None
            return None
        self.state = ValidationState.SEARCHING
        self.position = self._pairs[self._next]
        self._next += 1
        return self.position

    def record(self, attempt: Attempt, evidence: Optional[Evidence] = None) -> None:
        if self.state is not ValidationState.SEARCHING:
            raise RuntimeError(f"cannot record an attempt in state {self.state.name}")
        self.result.attempts.append(attempt)
        if attempt.success:
            self.result.is_valid_source = True
            if evidence is not None and evidence.validation_url:
                self.result.validation_url = evidence.validation_url
            self.state = ValidationState.FOUND

    def pairs(self) -> Iterator[Tuple[int, int]]:
        while True:
            position = self.advance()
            if position is None:
                return
            yield position


async def validate_domain(
    domain: str,
    config: CheckerConfig,
    fetcher: PageFetcher,
    *,
    strategies: Optional[Sequence[SearchStrategy]] = None,
    indicators: Optional[Sequence[Indicator]] = None,
) -> DomainResult:
    """
    Проверяет домен: перебирает регионы × стратегии до первого совпадения.

    Любая ошибка загрузки или извлечения фиксируется как неуспешная попытка
    и не прерывает перебор; отмена (CancelledError) пробрасывается дальше.
    """
    regions = list(config.regions)
    strategies = list(strategies) if strategies is not None else select_strategies(config.strategies)
    indicators = list(indicators) if indicators is not None else select_indicators(config.indicators)

    machine = DomainValidation(domain, regions, strategies)
    for region_idx, strategy_idx in machine.pairs():
        region, strategy = regions[region_idx], strategies[strategy_idx]
        query = strategy.query(domain)
        url = build_search_url(region, generate_query(strategy, domain), config.base_url)
        logger.debug("[SEARCH URL] %s", url)
        logger.debug("  Strategy: %s, Region: %s", strategy.name, region.code)

        evidence: Optional[Evidence] = None
        error: Optional[str] = None
        try:
            async with fetcher.load(url, timeout=config.page_timeout) as page:
                evidence = await extract_evidence(page, domain, indicators)
        except (FetchError, ExtractionError, asyncio.TimeoutError) as exc:
            error = str(exc) or type(exc).__name__
            logger.warning(
                "Error checking %s with strategy %s in region %s: %s",
                domain, strategy.name, region.code, error,
            )
        except Exception as exc:
            # неожиданный сбой загрузчика: попытка неуспешна, перебор продолжается
            error = f"{type(exc).__name__}: {exc}"
            logger.error(
                "Unexpected failure checking %s with strategy %s in region %s: %s",
                domain, strategy.name, region.code, error,
            )
        else:
            logger.debug("  %s -> %s (%s)", evidence.indicator, evidence.verdict.value, evidence.detail)

        machine.record(
            Attempt(
                strategy=strategy.name,
                region=region.code,
                query=query,
                url=url,
                success=bool(evidence and evidence.matched),
                error=error,
            ),
            evidence,
        )

    if machine.result.is_valid_source:
        logger.debug(
            "Publication page guess for %s: %s",
            domain,
            build_publication_url(domain, regions[machine.position[0]], config.base_url),
        )
    return machine.result
