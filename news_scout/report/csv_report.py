# news_scout/report/csv_report.py
"""
CSV report: one row per domain, ``Domain,IsValidSource,ValidationUrl``.

Booleans are written as ``true``/``false``, a missing URL as an empty cell.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import List, Optional, Tuple, Union

from news_scout.aggregator import BatchReport

CSV_HEADER = ("Domain", "IsValidSource", "ValidationUrl")


def render_csv(report: BatchReport, output_path: Union[Path, str]) -> Path:
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for r in report.results:
            writer.writerow([r.domain, "true" if r.is_valid_source else "false", r.validation_url or ""])

    return output


def load_csv(path: Union[Path, str]) -> List[Tuple[str, bool, Optional[str]]]:
    """Reads a CSV report back into ``(domain, is_valid_source, validation_url)`` triples."""
    rows: List[Tuple[str, bool, Optional[str]]] = []
    with Path(path).open(encoding="utf-8", newline="") as f:
        for row in csv.DictReader(f):
            url = (row["ValidationUrl"] or "").strip()
            rows.append(
                (
                    row["Domain"].strip(),
                    row["IsValidSource"].strip().lower() == "true",
                    url or None,
                )
            )
    return rows
