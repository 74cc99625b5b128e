# ABOUTME: Computes pass-rate counts, per-class averages, and class summaries from grade records.
# ABOUTME: Every view is a pure function of the record snapshot handed in by the caller.

from __future__ import annotations

from typing import Callable, Dict, Hashable, Iterable, List, Optional, Sequence

from .config import DEFAULT_THRESHOLD
from .schemas import (
    ClassAverage,
    ClassEntryAverage,
    ClassSummary,
    GradeRecord,
    LearnerAverage,
    PassRateCount,
    ScoreEntry,
)
from .weighting import WeightedAverageCalculator, entry_mean


def pass_rate_above(
    records: Iterable[GradeRecord],
    threshold: float = DEFAULT_THRESHOLD,
    calculator: Optional[WeightedAverageCalculator] = None,
) -> PassRateCount:
    """
    Count records whose category-weighted average is strictly above ``threshold``.
    """

    calculator = calculator or WeightedAverageCalculator()
    above = sum(1 for record in records if calculator.average_scores(record.scores) > threshold)
    return PassRateCount(learners_above_threshold=above)


def per_class_averages_for_learner(
    records: Iterable[GradeRecord],
    calculator: Optional[WeightedAverageCalculator] = None,
) -> List[ClassAverage]:
    """
    Weighted average per class for records already filtered to one learner.

    Records sharing a class_id are pooled so each class appears once.
    An empty list means the learner was not found.
    """

    calculator = calculator or WeightedAverageCalculator()
    grouped = _pool_scores(records, key=lambda record: record.class_id)
    return [
        ClassAverage(class_id=class_id, average=calculator.average_scores(scores))
        for class_id, scores in grouped.items()
    ]


def class_summary(
    records: Sequence[GradeRecord],
    threshold: float = DEFAULT_THRESHOLD,
) -> Optional[ClassSummary]:
    """
    Pass statistics for records already filtered to one class.

    Each record is scored by the flat mean of all its entries, not the
    category-weighted average. Returns None when there are no records.
    """

    total = len(records)
    if total == 0:
        return None

    above = 0
    for record in records:
        mean = entry_mean(record.scores)
        # A record without entries still counts as an enrolled learner.
        if mean is not None and mean > threshold:
            above += 1

    return ClassSummary(
        class_id=records[0].class_id,
        total_learners=total,
        above_threshold_count=above,
        above_threshold_percentage=100.0 * above / total,
    )


def learner_averages(
    records: Iterable[GradeRecord],
    calculator: Optional[WeightedAverageCalculator] = None,
) -> List[LearnerAverage]:
    """
    Overall weighted average per learner, pooling scores from all of their classes.
    """

    calculator = calculator or WeightedAverageCalculator()
    grouped = _pool_scores(records, key=lambda record: record.learner_id)
    return [
        LearnerAverage(learner_id=learner_id, average=calculator.average_scores(scores))
        for learner_id, scores in grouped.items()
    ]


def class_entry_average(records: Sequence[GradeRecord]) -> Optional[ClassEntryAverage]:
    """
    Mean of every score entry in a class, rounded to two decimals.

    Returns None when the class has no records or no entries.
    """

    if not records:
        return None
    entries = [entry for record in records for entry in record.scores]
    mean = entry_mean(entries)
    if mean is None:
        return None
    return ClassEntryAverage(class_id=records[0].class_id, average=round(mean, 2), total_entries=len(entries))


def _pool_scores(
    records: Iterable[GradeRecord], key: Callable[[GradeRecord], Hashable]
) -> Dict[Hashable, List[ScoreEntry]]:
    pooled: Dict[Hashable, List[ScoreEntry]] = {}
    for record in records:
        pooled.setdefault(key(record), []).extend(record.scores)
    return pooled
