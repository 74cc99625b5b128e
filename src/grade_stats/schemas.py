# ABOUTME: Defines the grade record structures consumed by the aggregation views.
# ABOUTME: Centralizes score entries, enrollment records, and aggregation results.

from dataclasses import asdict, dataclass, field
from typing import Dict, Tuple, Union

ClassId = Union[int, str]


@dataclass(frozen=True)
class ScoreEntry:
    """One graded event (exam, quiz, homework, ...)."""

    type: str
    score: float


@dataclass(frozen=True)
class GradeRecord:
    """One learner's enrollment in one class with every graded event."""

    learner_id: int
    class_id: ClassId
    scores: Tuple[ScoreEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class LearnerAverage:
    learner_id: int
    average: float

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class ClassAverage:
    class_id: ClassId
    average: float

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class PassRateCount:
    """Number of learner-class records whose weighted average is above the threshold.

    A learner passing in two classes is counted twice.
    """

    learners_above_threshold: int

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class ClassSummary:
    """Class-wide pass statistics based on each record's flat entry mean."""

    class_id: ClassId
    total_learners: int
    above_threshold_count: int
    above_threshold_percentage: float

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class ClassEntryAverage:
    """Mean of every score entry in a class, rounded to two decimals."""

    class_id: ClassId
    average: float
    total_entries: int

    def to_dict(self) -> Dict:
        return asdict(self)
