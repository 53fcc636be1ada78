# File: news_scout/errors.py
"""news_scout.errors: исключения проекта NewsScout.

Only :class:`InputError` is fatal for a run; fetch and extraction failures are
contained at attempt level, output failures are reported after the summary.
"""
from __future__ import annotations

__all__ = ["NewsScoutError", "InputError", "FetchError", "ExtractionError", "OutputError"]


class NewsScoutError(Exception):
    """Base class for all NewsScout errors."""


class InputError(NewsScoutError):
    """Domain list or configuration could not be loaded."""


class FetchError(NewsScoutError):
    """A results page failed to load or timed out."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class ExtractionError(NewsScoutError):
    """An indicator check failed on an unexpected page structure."""

    def __init__(self, indicator: str, cause: BaseException) -> None:
        super().__init__(f"indicator {indicator!r} failed: {cause}")
        self.indicator = indicator
        self.cause = cause


class OutputError(NewsScoutError):
    """The report file could not be written."""
