"""Formatting and CSV export for benchmark reports."""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Dict, List, Sequence

from exprbench.bench.harness import BenchmarkReport
from exprbench.config import PREVIEW_WIDTH
from exprbench.core.compiler import CompiledExpression

__all__ = ["format_duration", "preview", "report_rows", "write_summary_csv"]

_UNITS = ((1.0, "s"), (1e-3, "ms"), (1e-6, "µs"))


def format_duration(seconds: float) -> str:
    """Render ``seconds`` with the largest unit that keeps it above one."""

    magnitude = abs(seconds)
    for scale, unit in _UNITS:
        if magnitude >= scale:
            return f"{seconds / scale:.3f}{unit}"
    return f"{seconds / 1e-9:.1f}ns"


def preview(source: str, width: int = PREVIEW_WIDTH) -> str:
    """Return the content line shown for an expression in the report."""

    return source[:width] + "..."


def report_rows(report: BenchmarkReport, compiled: Sequence[CompiledExpression]) -> List[Dict[str, Any]]:
    """Flatten ``report`` into one row per program."""

    rows: List[Dict[str, Any]] = []
    for position, (stat, entry) in enumerate(zip(report.stats, compiled)):
        rows.append(
            {
                "position": position + 1,
                "ordinal": entry.expression.ordinal,
                "expression": entry.expression.source,
                "evaluations": stat.evaluations,
                "duration_s": stat.duration,
                "average_s": stat.average,
                "evaluations_per_second": report.rate(position),
            }
        )
    return rows


def write_summary_csv(rows: List[Dict[str, Any]], path: str | Path) -> Path:
    """Write ``rows`` to ``path`` as CSV and return the path."""

    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    if not rows:
        file_path.write_text("", encoding="utf-8")
        return file_path
    fieldnames = list(rows[0].keys())
    with file_path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)
    return file_path
