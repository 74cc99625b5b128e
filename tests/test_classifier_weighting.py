# ABOUTME: Tests score classification and the category-weighted average.
# ABOUTME: Covers missing categories under both zero and renormalize policies.

import pytest

from src.grade_stats.classifier import classify_scores
from src.grade_stats.config import CategoryWeights
from src.grade_stats.schemas import ScoreEntry
from src.grade_stats.weighting import WeightedAverageCalculator, entry_mean


def _scores(**by_type):
    return [ScoreEntry(type=kind, score=value) for kind, values in by_type.items() for value in values]


def test_classify_scores_groups_by_type_and_keeps_duplicates():
    scores = [
        ScoreEntry("quiz", 60.0),
        ScoreEntry("exam", 80.0),
        ScoreEntry("quiz", 70.0),
        ScoreEntry("homework", 95.0),
    ]

    classified = classify_scores(scores)

    assert classified == {"exam": [80.0], "quiz": [60.0, 70.0], "homework": [95.0]}


def test_classify_scores_drops_unknown_types_and_handles_empty():
    classified = classify_scores([ScoreEntry("project", 100.0), ScoreEntry("exam", 50.0)])
    assert classified == {"exam": [50.0], "quiz": [], "homework": []}

    assert classify_scores([]) == {"exam": [], "quiz": [], "homework": []}


def test_weighted_average_matches_reference_example():
    calculator = WeightedAverageCalculator()
    scores = _scores(exam=[80, 90], quiz=[70], homework=[100])

    assert calculator.average_scores(scores) == pytest.approx(83.5)


def test_missing_categories_contribute_zero_by_default():
    calculator = WeightedAverageCalculator()
    scores = _scores(exam=[60, 90])

    assert calculator.average_scores(scores) == 0.5 * 75.0


def test_renormalize_policy_rescales_by_present_weight():
    calculator = WeightedAverageCalculator(missing_category="renormalize")

    assert calculator.average_scores(_scores(exam=[60, 90])) == pytest.approx(75.0)
    # exam 0.5 and homework 0.2 present: (0.5*80 + 0.2*50) / 0.7
    assert calculator.average_scores(_scores(exam=[80], homework=[50])) == pytest.approx(50.0 / 0.7)


def test_no_recognized_scores_combine_to_zero_under_both_policies():
    scores = [ScoreEntry("attendance", 100.0)]
    assert WeightedAverageCalculator().average_scores(scores) == 0.0
    assert WeightedAverageCalculator(missing_category="renormalize").average_scores(scores) == 0.0


def test_combined_score_stays_in_range_for_in_range_inputs():
    calculator = WeightedAverageCalculator()
    for scores in (
        _scores(exam=[0], quiz=[0], homework=[0]),
        _scores(exam=[100, 100], quiz=[100], homework=[100, 100, 100]),
        _scores(exam=[33.3], quiz=[99.9, 0.1]),
    ):
        assert 0.0 <= calculator.average_scores(scores) <= 100.0


def test_out_of_range_scores_pass_through_unclamped():
    calculator = WeightedAverageCalculator()
    scores = _scores(exam=[150], quiz=[150], homework=[150])

    assert calculator.average_scores(scores) == pytest.approx(150.0)


def test_custom_weights_change_the_combination():
    weights = CategoryWeights({"exam": 0.6, "quiz": 0.2, "homework": 0.2})
    calculator = WeightedAverageCalculator(weights=weights)
    scores = _scores(exam=[100], quiz=[50], homework=[0])

    assert calculator.average_scores(scores) == pytest.approx(70.0)


def test_extra_category_is_a_data_change():
    weights = CategoryWeights({"exam": 0.4, "quiz": 0.2, "homework": 0.2, "project": 0.2})
    calculator = WeightedAverageCalculator(weights=weights)
    scores = _scores(exam=[100], quiz=[100], homework=[100], project=[50])

    assert calculator.average_scores(scores) == pytest.approx(90.0)


def test_unknown_missing_category_policy_is_rejected():
    with pytest.raises(ValueError):
        WeightedAverageCalculator(missing_category="ignore")


def test_entry_mean_ignores_categories():
    scores = _scores(exam=[90], quiz=[60], project=[30])

    assert entry_mean(scores) == pytest.approx(60.0)
    assert entry_mean([]) is None
