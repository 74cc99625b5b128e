# ABOUTME: Partitions a record's score entries into per-category score lists.
# ABOUTME: Unrecognized entry types are dropped instead of raising.

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from .config import DEFAULT_CATEGORY_WEIGHTS
from .schemas import ScoreEntry

DEFAULT_CATEGORIES = tuple(DEFAULT_CATEGORY_WEIGHTS)


def classify_scores(
    scores: Iterable[ScoreEntry], categories: Sequence[str] = DEFAULT_CATEGORIES
) -> Dict[str, List[float]]:
    """
    Group score values by entry type.

    Every requested category is present in the result, possibly as an empty
    list. Multiplicity and input order are preserved.
    """

    classified: Dict[str, List[float]] = {category: [] for category in categories}
    for entry in scores:
        bucket = classified.get(entry.type)
        if bucket is not None:
            bucket.append(entry.score)
    return classified
