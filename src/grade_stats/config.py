# ABOUTME: Holds the category weight table and aggregation settings.
# ABOUTME: Loads overrides from YAML so alternate weighting schemes need no code edits.

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

import yaml

DEFAULT_CATEGORY_WEIGHTS = {"exam": 0.5, "quiz": 0.3, "homework": 0.2}
DEFAULT_THRESHOLD = 70.0
MISSING_ZERO = "zero"
MISSING_RENORMALIZE = "renormalize"
MISSING_CATEGORY_POLICIES = (MISSING_ZERO, MISSING_RENORMALIZE)


def check_missing_category(policy: str) -> str:
    if policy not in MISSING_CATEGORY_POLICIES:
        raise ValueError(
            f"Unsupported missing_category '{policy}'. "
            f"Expected one of: {', '.join(MISSING_CATEGORY_POLICIES)}."
        )
    return policy


@dataclass(frozen=True)
class CategoryWeights:
    """Read-only mapping of score category to its share of the combined score."""

    weights: Mapping[str, float] = field(default_factory=lambda: dict(DEFAULT_CATEGORY_WEIGHTS))

    def __post_init__(self) -> None:
        normalized = {str(name).strip().lower(): float(value) for name, value in self.weights.items()}
        if not normalized:
            raise ValueError("At least one score category weight is required.")
        negative = sorted(name for name, value in normalized.items() if value < 0)
        if negative:
            raise ValueError(f"Category weights must be non-negative; got negative weights for {negative}.")
        total = sum(normalized.values())
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Category weights must sum to 1.0, got {total:.6f}.")
        object.__setattr__(self, "weights", MappingProxyType(normalized))

    @property
    def categories(self) -> Tuple[str, ...]:
        return tuple(self.weights)

    def weight(self, category: str) -> float:
        return self.weights[category]


@dataclass(frozen=True)
class AggregationConfig:
    """Settings shared by the aggregation views."""

    weights: CategoryWeights = field(default_factory=CategoryWeights)
    threshold: float = DEFAULT_THRESHOLD
    missing_category: str = MISSING_ZERO

    def __post_init__(self) -> None:
        check_missing_category(self.missing_category)


def load_config(path: Optional[Union[str, Path]] = None) -> AggregationConfig:
    """
    Build an AggregationConfig from a YAML file, or return defaults when no path is given.

    Expected layout::

        weights: {exam: 0.5, quiz: 0.3, homework: 0.2}
        threshold: 70
        missing_category: zero
    """

    if path is None:
        return AggregationConfig()

    with open(path) as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Config {path} must contain a mapping at the top level.")

    unknown = set(cfg) - {"weights", "threshold", "missing_category"}
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {sorted(unknown)}")

    weights = CategoryWeights(cfg["weights"]) if cfg.get("weights") else CategoryWeights()
    return AggregationConfig(
        weights=weights,
        threshold=float(cfg.get("threshold", DEFAULT_THRESHOLD)),
        missing_category=str(cfg.get("missing_category", MISSING_ZERO)).strip().lower(),
    )
