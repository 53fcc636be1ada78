# File: news_scout/report/__init__.py
"""news_scout.report: сохранение отчёта в JSON, CSV или HTML по расширению файла."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from news_scout.aggregator import BatchReport
from news_scout.errors import OutputError
from news_scout.report.csv_report import load_csv, render_csv
from news_scout.report.html_report import render_html
from news_scout.report.json_report import render_json


def write_report(report: BatchReport, path: Union[str, Path]) -> Path:
    """Пишет отчёт: ``.csv`` → CSV, ``.html``/``.htm`` → HTML, иначе JSON.

    Любая ошибка записи оборачивается в OutputError.
    """
    p = Path(path)
    suffix = p.suffix.lower()
    try:
        if suffix == ".csv":
            return render_csv(report, p)
        if suffix in (".html", ".htm"):
            return render_html(report, p)
        return render_json(report, p)
    except OSError as exc:
        raise OutputError(f"Error saving results to {p}: {exc}") from exc


__all__ = ["write_report", "render_json", "render_csv", "render_html", "load_csv"]
