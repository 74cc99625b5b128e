# ABOUTME: Validates category weight rules and YAML config loading.
# ABOUTME: Ensures bad weight tables and unknown settings are rejected early.

import tempfile
import unittest
from pathlib import Path

from src.grade_stats.config import (
    DEFAULT_CATEGORY_WEIGHTS,
    AggregationConfig,
    CategoryWeights,
    check_missing_category,
    load_config,
)
from src.grade_stats.weighting import WeightedAverageCalculator


class CategoryWeightsTest(unittest.TestCase):
    def test_defaults_sum_to_one(self) -> None:
        weights = CategoryWeights()
        self.assertEqual(("exam", "quiz", "homework"), weights.categories)
        self.assertAlmostEqual(1.0, sum(weights.weights.values()))
        self.assertEqual(0.5, weights.weight("exam"))

    def test_rejects_weights_not_summing_to_one(self) -> None:
        with self.assertRaises(ValueError):
            CategoryWeights({"exam": 0.5, "quiz": 0.3})

    def test_rejects_negative_and_empty_weights(self) -> None:
        with self.assertRaises(ValueError):
            CategoryWeights({"exam": 1.2, "quiz": -0.2})
        with self.assertRaises(ValueError):
            CategoryWeights({})

    def test_weights_are_read_only_and_detached_from_input(self) -> None:
        source = dict(DEFAULT_CATEGORY_WEIGHTS)
        weights = CategoryWeights(source)
        source["exam"] = 0.9
        self.assertEqual(0.5, weights.weight("exam"))
        with self.assertRaises(TypeError):
            weights.weights["exam"] = 0.1

    def test_rejects_unknown_missing_category_policy(self) -> None:
        with self.assertRaises(ValueError):
            AggregationConfig(missing_category="skip")

    def test_calculator_and_config_share_policy_check(self) -> None:
        self.assertEqual("renormalize", check_missing_category("renormalize"))
        for build in (AggregationConfig, WeightedAverageCalculator):
            with self.assertRaisesRegex(ValueError, "Unsupported missing_category 'skip'"):
                build(missing_category="skip")


class LoadConfigTest(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.root = Path(self.tmpdir.name)

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def _write(self, text: str) -> Path:
        path = self.root / "grade_stats.yaml"
        path.write_text(text.strip() + "\n", encoding="utf-8")
        return path

    def test_defaults_without_path(self) -> None:
        config = load_config()
        self.assertEqual(70.0, config.threshold)
        self.assertEqual("zero", config.missing_category)
        self.assertEqual(dict(DEFAULT_CATEGORY_WEIGHTS), dict(config.weights.weights))

    def test_loads_weights_threshold_and_policy(self) -> None:
        path = self._write(
            """
weights:
  exam: 0.6
  quiz: 0.25
  homework: 0.15
threshold: 65
missing_category: renormalize
"""
        )
        config = load_config(path)
        self.assertEqual(65.0, config.threshold)
        self.assertEqual("renormalize", config.missing_category)
        self.assertEqual(0.6, config.weights.weight("exam"))

        calculator = WeightedAverageCalculator.from_config(config)
        self.assertEqual("renormalize", calculator.missing_category)
        self.assertEqual(config.weights, calculator.weights)

    def test_partial_file_keeps_defaults(self) -> None:
        config = load_config(self._write("threshold: 80"))
        self.assertEqual(80.0, config.threshold)
        self.assertEqual(0.3, config.weights.weight("quiz"))

    def test_unknown_keys_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            load_config(self._write("weighting: {exam: 1.0}"))

    def test_repository_config_matches_defaults(self) -> None:
        repo_config = Path(__file__).resolve().parents[1] / "configs" / "grade_stats.yaml"
        config = load_config(repo_config)
        self.assertEqual(AggregationConfig(), config)


if __name__ == "__main__":
    unittest.main()
