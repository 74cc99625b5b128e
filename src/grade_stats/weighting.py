# ABOUTME: Combines per-category score lists into a single weighted average.
# ABOUTME: Also provides the flat per-entry mean used by class-wide summaries.

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Sequence

import numpy as np

from .classifier import classify_scores
from .config import (
    MISSING_RENORMALIZE,
    MISSING_ZERO,
    AggregationConfig,
    CategoryWeights,
    check_missing_category,
)
from .schemas import ScoreEntry


class WeightedAverageCalculator:
    """
    Category-weighted average over classified scores.

    ``missing_category`` decides what an empty category does:

    - ``"zero"``: the category contributes nothing, lowering the combined score.
    - ``"renormalize"``: the sum is rescaled by the weight of the categories present.
    """

    def __init__(self, weights: Optional[CategoryWeights] = None, missing_category: str = MISSING_ZERO) -> None:
        self.weights = weights or CategoryWeights()
        self.missing_category = check_missing_category(missing_category)

    @classmethod
    def from_config(cls, config: AggregationConfig) -> "WeightedAverageCalculator":
        return cls(weights=config.weights, missing_category=config.missing_category)

    @property
    def categories(self) -> Sequence[str]:
        return self.weights.categories

    def combine(self, classified: Mapping[str, Sequence[float]]) -> float:
        total = 0.0
        present_weight = 0.0
        for category in self.categories:
            values = classified.get(category) or []
            if not values:
                continue
            weight = self.weights.weight(category)
            total += weight * float(np.mean(values))
            present_weight += weight

        if self.missing_category == MISSING_RENORMALIZE:
            if present_weight == 0:
                return 0.0
            return total / present_weight
        return total

    def average_scores(self, scores: Iterable[ScoreEntry]) -> float:
        return self.combine(classify_scores(scores, self.categories))


def entry_mean(scores: Iterable[ScoreEntry]) -> Optional[float]:
    """Unweighted mean of every entry's score regardless of type; None when empty."""

    values: List[float] = [entry.score for entry in scores]
    if not values:
        return None
    return float(np.mean(values))
