# File: news_scout/aggregator.py
"""news_scout.aggregator: сводный отчёт по всем проверенным доменам."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List

from news_scout.validator import DomainResult


def percentage(part: int, total: int) -> int:
    """Процент, округлённый half-up; для пустой выборки 0."""
    if total <= 0:
        return 0
    return int(math.floor(100 * part / total + 0.5))


@dataclass(slots=True)
class BatchReport:
    """Результаты проверки в порядке входного списка доменов."""

    results: List[DomainResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def valid_count(self) -> int:
        return sum(1 for r in self.results if r.is_valid_source)

    @property
    def percentage(self) -> int:
        return percentage(self.valid_count, self.total)

    @property
    def valid(self) -> List[DomainResult]:
        return [r for r in self.results if r.is_valid_source]

    @property
    def invalid(self) -> List[DomainResult]:
        return [r for r in self.results if not r.is_valid_source]

    def to_list(self) -> List[Dict[str, Any]]:
        return [r.to_dict() for r in self.results]

    def json(self, *, pretty: bool = False) -> str:
        """JSON-представление: список DomainResult, как в файле отчёта."""
        return json.dumps(self.to_list(), ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(results: List[DomainResult]) -> BatchReport:
    """Собирает BatchReport из готовых результатов, не изменяя их."""
    return BatchReport(results=list(results))
