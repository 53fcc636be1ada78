# File: tests/test_report.py
import json

import pytest

from news_scout.aggregator import BatchReport
from news_scout.errors import OutputError
from news_scout.report import load_csv, write_report
from news_scout.validator import Attempt, DomainResult

PUB = "https://news.google.com/publications/CAAqBwgKMKHL9QowkqbaAg"


@pytest.fixture()
def report() -> BatchReport:
    attempt = Attempt(
        "Site query",
        "en-US",
        "site:valid.com",
        "https://news.google.com/search?q=site%3Avalid.com&hl=en-US&gl=US&ceid=US:en",
        True,
    )
    return BatchReport(
        results=[
            DomainResult("valid.com", True, None, [attempt]),
            DomainResult("published.org", True, PUB, []),
            DomainResult("invalid.net", False, None, []),
        ]
    )


def test_json_report(tmp_path, report):
    out = write_report(report, tmp_path / "nested" / "results.json")
    text = out.read_text(encoding="utf-8")
    data = json.loads(text)

    assert text.startswith('[\n  {\n    "domain"')
    assert [d["domain"] for d in data] == ["valid.com", "published.org", "invalid.net"]
    assert data[0]["isValidSource"] is True
    assert data[0]["validationUrl"] is None
    assert data[0]["searchResults"][0]["query"] == "site:valid.com"
    assert data[1]["validationUrl"] == PUB


def test_unknown_suffix_is_json(tmp_path, report):
    out = write_report(report, tmp_path / "results.txt")
    assert json.loads(out.read_text(encoding="utf-8"))[2]["isValidSource"] is False


def test_csv_report(tmp_path, report):
    out = write_report(report, tmp_path / "results.CSV")
    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines == [
        "Domain,IsValidSource,ValidationUrl",
        "valid.com,true,",
        f"published.org,true,{PUB}",
        "invalid.net,false,",
    ]


def test_csv_round_trip(tmp_path, report):
    out = write_report(report, tmp_path / "results.csv")
    assert load_csv(out) == [
        (r.domain, r.is_valid_source, r.validation_url) for r in report.results
    ]


def test_html_report(tmp_path, report):
    out = write_report(report, tmp_path / "report.html")
    html = out.read_text(encoding="utf-8")
    assert "Valid Sources: 2/3 (67%)" in html
    assert "invalid.net" in html
    assert f'href="{PUB}"' in html


def test_write_failure_is_output_error(tmp_path, report):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(OutputError):
        write_report(report, blocker / "results.json")
