# ABOUTME: Flattens grade records into per-record statistics tables.
# ABOUTME: Produces the parquet/CSV exports consumed by dashboards and spot checks.

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from .classifier import classify_scores
from .config import DEFAULT_THRESHOLD
from .schemas import GradeRecord
from .weighting import WeightedAverageCalculator, entry_mean


def build_record_report(
    records: Iterable[GradeRecord],
    calculator: Optional[WeightedAverageCalculator] = None,
    threshold: float = DEFAULT_THRESHOLD,
) -> pd.DataFrame:
    """
    One row per record with category counts, the weighted average, and the flat entry mean.

    Category count columns follow the calculator's categories.
    """

    calculator = calculator or WeightedAverageCalculator()
    count_columns = [f"{category}_count" for category in calculator.categories]

    rows = []
    for record in records:
        classified = classify_scores(record.scores, calculator.categories)
        weighted = calculator.combine(classified)
        row = {
            "learner_id": record.learner_id,
            "class_id": str(record.class_id),
        }
        for category, column in zip(calculator.categories, count_columns):
            row[column] = len(classified[category])
        row["weighted_average"] = weighted
        row["entry_mean"] = entry_mean(record.scores)
        row["above_threshold"] = weighted > threshold
        rows.append(row)

    columns = ["learner_id", "class_id", *count_columns, "weighted_average", "entry_mean", "above_threshold"]
    if not rows:
        return pd.DataFrame(columns=columns)

    report = pd.DataFrame(rows, columns=columns)
    report["entry_mean"] = pd.to_numeric(report["entry_mean"], errors="coerce")
    return report


def write_report(report: pd.DataFrame, output: Path) -> Path:
    """Write a report to parquet, or CSV when the suffix asks for it."""

    output = Path(output)
    output.parent.mkdir(parents=True, exist_ok=True)
    if output.suffix.lower() == ".csv":
        report.to_csv(output, index=False)
    else:
        report.to_parquet(output, index=False)
    return output
