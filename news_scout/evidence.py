# File: news_scout/evidence.py
"""news_scout.evidence: решение по загруженной странице результатов.

Indicators are evaluated in a fixed order and the first definitive verdict
(MATCH or NO_MATCH) wins; later indicators are not evaluated. Order matters
because indicators read the page and may have side effects.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Sequence

from news_scout.errors import ExtractionError
from news_scout.logger import logger
from news_scout.page import RenderedPage

__all__: Sequence[str] = (
    "Verdict",
    "Evidence",
    "Indicator",
    "NoResultsBannerIndicator",
    "PublicationUrlIndicator",
    "INDICATORS",
    "NO_RESULTS_LOCATOR",
    "TOP_RESULT_SOURCE_LOCATOR",
    "NO_ITEMS_SENTINEL",
    "select_indicators",
    "extract_evidence",
)

NO_RESULTS_LOCATOR = "#yDmH0d > c-wiz > div > main > div.UW0SDc"
TOP_RESULT_SOURCE_LOCATOR = "div.UW0SDc article div.m5k28 div.B6pJDd div.oovtQ > div > div"
NO_ITEMS_SENTINEL = "There are no items to show."


class Verdict(str, enum.Enum):
    MATCH = "match"
    NO_MATCH = "no_match"
    INCONCLUSIVE = "inconclusive"

    @property
    def definitive(self) -> bool:
        return self is not Verdict.INCONCLUSIVE


@dataclass(frozen=True, slots=True)
class Evidence:
    """Outcome of an indicator: verdict, who decided and what was seen."""

    verdict: Verdict
    indicator: Optional[str] = None
    detail: str = ""
    validation_url: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.verdict is Verdict.MATCH


class Indicator(Protocol):
    name: str

    async def evaluate(self, page: RenderedPage, domain: str) -> Evidence: ...


class NoResultsBannerIndicator:
    """Reads the "no items" banner of the results page.

    * banner absent → MATCH (the banner is the only reliable negative signal);
    * banner text starts with the sentinel → NO_MATCH;
    * otherwise the source name of the top result must equal the domain,
      case-insensitively; a missing source element is NO_MATCH.
    """

    name = "no-results-banner"

    def __init__(
        self,
        banner_locator: str = NO_RESULTS_LOCATOR,
        source_locator: str = TOP_RESULT_SOURCE_LOCATOR,
        sentinel: str = NO_ITEMS_SENTINEL,
    ) -> None:
        self.banner_locator = banner_locator
        self.source_locator = source_locator
        self.sentinel = sentinel

    async def evaluate(self, page: RenderedPage, domain: str) -> Evidence:
        banner = await page.find_element(self.banner_locator)
        if banner is None:
            logger.debug("[ELEMENT NOT FOUND] no results banner on %s", page.url)
            return Evidence(Verdict.MATCH, self.name, "no results banner")

        text = await page.text_content(banner)
        logger.debug("[TEXT CONTENT] %s", text)
        if text.strip().startswith(self.sentinel):
            return Evidence(Verdict.NO_MATCH, self.name, self.sentinel)

        source = await page.find_element(self.source_locator)
        if source is None:
            return Evidence(Verdict.NO_MATCH, self.name, "top result source not found")

        source_name = (await page.text_content(source)).strip()
        if source_name.lower() == domain.strip().lower():
            return Evidence(Verdict.MATCH, self.name, f"top result source: {source_name}")
        return Evidence(Verdict.NO_MATCH, self.name, f"top result source: {source_name}")


class PublicationUrlIndicator:
    """MATCH when the page already sits on a publication page of the aggregator."""

    name = "publication-url"

    async def evaluate(self, page: RenderedPage, domain: str) -> Evidence:
        url = page.url
        if "/publications/" in url:
            return Evidence(Verdict.MATCH, self.name, "publication page", validation_url=url)
        return Evidence(Verdict.INCONCLUSIVE, self.name)


INDICATORS: tuple[Indicator, ...] = (NoResultsBannerIndicator(), PublicationUrlIndicator())


def select_indicators(
    names: Iterable[str], catalog: Sequence[Indicator] = INDICATORS
) -> List[Indicator]:
    """Indicators by name, in the order the names are given."""
    by_name = {ind.name: ind for ind in catalog}
    selected: List[Indicator] = []
    for name in names:
        if name not in by_name:
            raise ValueError(f"Unknown indicator: {name}")
        selected.append(by_name[name])
    return selected


async def extract_evidence(
    page: RenderedPage, domain: str, indicators: Iterable[Indicator]
) -> Evidence:
    """Runs *indicators* in order and returns the first definitive evidence.

    All inconclusive → NO_MATCH without a deciding indicator. An indicator
    that raises is reported as :class:`ExtractionError`.
    """
    for indicator in indicators:
        try:
            evidence = await indicator.evaluate(page, domain)
        except Exception as exc:
            raise ExtractionError(indicator.name, exc) from exc
        if evidence.verdict.definitive:
            return evidence
    return Evidence(Verdict.NO_MATCH, None, "no indicator was conclusive")
