# File: news_scout/strategies.py
"""news_scout.strategies: способы превратить домен в поисковый запрос.

The catalog is an ordered, appendable sequence; a run uses the strategies named
in :attr:`CheckerConfig.strategies` in catalog order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence
from urllib.parse import quote

__all__: Sequence[str] = (
    "SearchStrategy",
    "STRATEGIES",
    "SITE_QUERY",
    "encode_query",
    "generate_query",
    "enabled_strategies",
    "select_strategies",
)


@dataclass(frozen=True, slots=True)
class SearchStrategy:
    """Named query builder: ``build_query(domain) -> raw query``."""

    name: str
    build_query: Callable[[str], str]
    enabled: bool = False

    def query(self, domain: str) -> str:
        domain = domain.strip()
        if not domain:
            raise ValueError("domain must be a non-empty string")
        return self.build_query(domain)


SITE_QUERY = "Site query"

STRATEGIES: tuple[SearchStrategy, ...] = (
    SearchStrategy("Domain with extension", lambda domain: domain),
    SearchStrategy("Domain without extension", lambda domain: domain.split(".")[0]),
    SearchStrategy(SITE_QUERY, lambda domain: f"site:{domain}", enabled=True),
    SearchStrategy("InURL query", lambda domain: f"inurl:{domain}*"),
)


def encode_query(query: str) -> str:
    """Percent-encode *query* for a URL query component (space, ``:`` and ``/`` included)."""
    return quote(query, safe="")


def generate_query(strategy: SearchStrategy, domain: str) -> str:
    """Строит запрос стратегией и возвращает его в URL-кодировке."""
    return encode_query(strategy.query(domain))


def enabled_strategies(catalog: Iterable[SearchStrategy] = STRATEGIES) -> List[SearchStrategy]:
    return [s for s in catalog if s.enabled]


def select_strategies(
    names: Optional[Iterable[str]] = None,
    catalog: Sequence[SearchStrategy] = STRATEGIES,
) -> List[SearchStrategy]:
    """Returns the named strategies in catalog order; ``None`` → enabled ones.

    Raises :class:`ValueError` for a name missing from the catalog.
    """
    if names is None:
        return enabled_strategies(catalog)
    wanted = list(names)
    known = {s.name for s in catalog}
    unknown = [n for n in wanted if n not in known]
    if unknown:
        raise ValueError(f"Unknown search strategy: {', '.join(unknown)}")
    return [s for s in catalog if s.name in wanted]
