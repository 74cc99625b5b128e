# ABOUTME: Makes the grade statistics package importable from scripts and tests.
# ABOUTME: Re-exports record schemas, the weighted calculator, and the aggregation views.

from .aggregation import (
    class_entry_average,
    class_summary,
    learner_averages,
    pass_rate_above,
    per_class_averages_for_learner,
)
from .classifier import classify_scores
from .config import AggregationConfig, CategoryWeights, load_config
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

__all__ = [
    "AggregationConfig",
    "CategoryWeights",
    "ClassAverage",
    "ClassEntryAverage",
    "ClassSummary",
    "GradeRecord",
    "LearnerAverage",
    "PassRateCount",
    "ScoreEntry",
    "WeightedAverageCalculator",
    "class_entry_average",
    "class_summary",
    "classify_scores",
    "entry_mean",
    "learner_averages",
    "load_config",
    "pass_rate_above",
    "per_class_averages_for_learner",
]
