# File: tests/test_engine.py
import asyncio

import pytest

from conftest import SENTINEL, StubFetcher, results_page
from news_scout.aggregator import BatchReport, aggregate_results, percentage
from news_scout.config import CheckerConfig
from news_scout.engine import BatchRunner, run_all
from news_scout.strategies import SearchStrategy
from news_scout.validator import DomainResult

DOMAINS = ["valid.com", "invalid.com", "also-valid.org", "nope.net"]


def stub_for(valid):
    """Pages with no banner for the *valid* domains, the sentinel for the rest."""

    def handler(url):
        if any(f"site%3A{d}&" in url for d in valid):
            return results_page()
        return results_page(SENTINEL)

    return StubFetcher(handler)


@pytest.mark.asyncio()
async def test_run_keeps_input_order_and_counts(config):
    runner = BatchRunner(config, stub_for({"valid.com", "also-valid.org"}))
    progress = []
    report = await runner.run(DOMAINS, lambda r, done, total: progress.append((r.domain, done, total)))

    assert [r.domain for r in report.results] == DOMAINS
    assert report.total == 4
    assert report.valid_count == 2
    assert report.percentage == 50
    assert [r.domain for r in report.valid] == ["valid.com", "also-valid.org"]
    assert [r.domain for r in report.invalid] == ["invalid.com", "nope.net"]
    assert progress == [(d, i + 1, 4) for i, d in enumerate(DOMAINS)]


@pytest.mark.asyncio()
async def test_end_to_end_single_domain(config, no_banner_html):
    report = await BatchRunner(config, StubFetcher(no_banner_html)).run(["example.com"])
    (result,) = report.results
    assert result.domain == "example.com"
    assert result.is_valid_source is True
    assert len(result.attempts) == 1


@pytest.mark.asyncio()
async def test_end_to_end_no_items(config, no_items_html):
    report = await BatchRunner(config, StubFetcher(no_items_html)).run(["example.com"])
    assert report.results[0].is_valid_source is False
    assert report.valid_count == 0


@pytest.mark.asyncio()
async def test_concurrent_run_preserves_order(no_banner_html):
    cfg = CheckerConfig(concurrency=3, page_timeout=1.0)
    delays = {"a.com": 0.05, "b.com": 0.0, "c.com": 0.02, "d.com": 0.0}

    class SlowFetcher(StubFetcher):
        def load(self, url, timeout):
            domain = next(d for d in delays if f"site%3A{d}&" in url)
            inner = super().load(url, timeout)

            class _Ctx:
                async def __aenter__(self_inner):
                    await asyncio.sleep(delays[domain])
                    return await inner.__aenter__()

                async def __aexit__(self_inner, *exc):
                    return await inner.__aexit__(*exc)

            return _Ctx()

    finished = []
    report = await BatchRunner(cfg, SlowFetcher(no_banner_html)).run(
        list(delays), lambda r, done, total: finished.append(r.domain)
    )
    assert [r.domain for r in report.results] == list(delays)
    assert finished != list(delays)
    assert report.valid_count == 4


@pytest.mark.asyncio()
async def test_blank_domain_does_not_abort_batch(config, no_banner_html):
    report = await BatchRunner(config, StubFetcher(no_banner_html)).run(["ok.com", " ", "fine.com"])
    assert [r.is_valid_source for r in report.results] == [True, False, True]
    assert report.results[1].attempts == []


@pytest.mark.asyncio()
async def test_partial_report_after_cancel(config, no_banner_html):
    gate = asyncio.Event()

    def handler(url):
        return results_page()

    class BlockingFetcher(StubFetcher):
        def load(self, url, timeout):
            inner = super().load(url, timeout)
            blocked = "second.com" in url

            class _Ctx:
                async def __aenter__(self_inner):
                    if blocked:
                        await gate.wait()
                    return await inner.__aenter__()

                async def __aexit__(self_inner, *exc):
                    return await inner.__aexit__(*exc)

            return _Ctx()

    runner = BatchRunner(config, BlockingFetcher(handler))
    task = asyncio.create_task(runner.run(["first.com", "second.com", "third.com"]))
    await asyncio.sleep(0.05)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    partial = runner.partial_report()
    assert [r.domain for r in partial.results] == ["first.com"]


@pytest.mark.asyncio()
async def test_run_all_uses_factory(config, no_banner_html):
    fetcher = StubFetcher(no_banner_html)
    report = await run_all(["example.com"], config, fetcher_factory=lambda cfg: fetcher)
    assert report.valid_count == 1
    assert fetcher.loaded


@pytest.mark.parametrize(
    "valid,total,expected",
    [(0, 0, 0), (1, 3, 33), (2, 3, 67), (1, 2, 50), (1, 8, 13), (5, 5, 100)],
)
def test_percentage(valid, total, expected):
    assert percentage(valid, total) == expected


def test_empty_report():
    report = BatchReport()
    assert report.total == 0
    assert report.valid_count == 0
    assert report.percentage == 0
    assert report.json() == "[]"


def test_aggregate_results_copies_list():
    results = [DomainResult("a.com", True), DomainResult("b.com")]
    report = aggregate_results(results)
    results.append(DomainResult("c.com", True))
    assert report.total == 2
    assert (report.valid_count, report.total, report.percentage) == (1, 2, 50)


class TargetClosed(Exception):
    pass


@pytest.mark.asyncio()
async def test_unexpected_fetch_failure_does_not_abort_batch(config, no_banner_html):
    fetcher = StubFetcher(
        no_banner_html,
        routes={"site%3Ab.com&": TargetClosed("Target page, context or browser has been closed")},
    )
    report = await BatchRunner(config, fetcher).run(["a.com", "b.com", "c.com"])

    assert [r.domain for r in report.results] == ["a.com", "b.com", "c.com"]
    assert [r.is_valid_source for r in report.results] == [True, False, True]
    assert report.results[1].attempts[0].error.startswith("TargetClosed")


@pytest.mark.asyncio()
async def test_unexpected_domain_failure_is_contained(config, no_banner_html):
    def explode(domain):
        if domain == "b.com":
            raise RuntimeError("query builder broke")
        return f"site:{domain}"

    fetcher = StubFetcher(no_banner_html)
    runner = BatchRunner(config, fetcher, strategies=[SearchStrategy("Custom", explode, enabled=True)])
    report = await runner.run(["a.com", "b.com", "c.com"])

    assert [r.domain for r in report.results] == ["a.com", "b.com", "c.com"]
    assert report.results[1].attempts == []
    assert report.valid_count == 2
