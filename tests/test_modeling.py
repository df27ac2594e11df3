import math

import pytest

from tabscope.data.dataset import SplitDataset
from tabscope.modeling.base import ModelEstimator
from tabscope.modeling.classification import (
    GaussianNaiveBayesApplier,
    GaussianNaiveBayesCalculator,
    gaussian_density,
)
from tabscope.modeling.metrics import auc_proxy, r2_score
from tabscope.modeling.problem_type import detect_problem_type
from tabscope.modeling.regression import KNNRegressorApplier, KNNRegressorCalculator
from tabscope.profiling.schemas import ProblemType


def _fit_nb(rows, features, config=None):
    return GaussianNaiveBayesCalculator().fit(rows, "y", features, config or {})


class TestNaiveBayes:
    def test_priors_and_gaussian_params(self):
        rows = [
            {"f": 1.0, "y": "A"},
            {"f": 3.0, "y": "A"},
            {"f": 5.0, "y": "A"},
            {"f": 10.0, "y": "B"},
        ]
        artifact = _fit_nb(rows, ["f"])

        assert artifact["classes"] == ["A", "B"]
        assert artifact["model"]["A"]["prior"] == pytest.approx(0.75)
        assert artifact["model"]["B"]["prior"] == pytest.approx(0.25)
        stats = artifact["model"]["A"]["stats"]["f"]
        assert stats["mean"] == pytest.approx(3.0)
        # Population variance (8/3)
        assert stats["std"] == pytest.approx(math.sqrt(8 / 3))

    def test_constant_feature_uses_variance_floor(self):
        rows = [{"f": 5.0, "y": "A"}, {"f": 5.0, "y": "A"}]
        artifact = _fit_nb(rows, ["f"])

        assert artifact["model"]["A"]["stats"]["f"]["std"] == pytest.approx(0.01)

    def test_predicts_nearest_class(self):
        rows = [{"f": float(v), "y": "low"} for v in (1, 2, 3)] + [
            {"f": float(v), "y": "high"} for v in (10, 11, 12)
        ]
        artifact = _fit_nb(rows, ["f"])
        predictions = GaussianNaiveBayesApplier().predict([{"f": 2.0}, {"f": 11.5}], ["f"], artifact)

        assert predictions == ["low", "high"]

    def test_ties_resolve_to_first_seen_class(self):
        rows = [{"f": 1.0, "y": "A"}, {"f": 1.0, "y": "B"}]
        artifact = _fit_nb(rows, ["f"])
        assert GaussianNaiveBayesApplier().predict([{"f": 1.0}], ["f"], artifact) == ["A"]

        artifact = _fit_nb(list(reversed(rows)), ["f"])
        assert GaussianNaiveBayesApplier().predict([{"f": 1.0}], ["f"], artifact) == ["B"]

    def test_density_floor_bounds_far_values(self):
        rows = [{"f": 0.0, "y": "A"}, {"f": 1.0, "y": "A"}, {"f": 2.0, "y": "B"}, {"f": 3.0, "y": "B"}]
        artifact = _fit_nb(rows, ["f"])
        scores = GaussianNaiveBayesApplier().joint_log_likelihood({"f": 1e6}, ["f"], artifact)

        expected = math.log(0.5) + math.log(1e-5)
        assert scores["A"] == pytest.approx(expected)
        assert scores["B"] == pytest.approx(expected)

    def test_categorical_feature_uses_laplace_smoothing(self):
        rows = [
            {"color": "red", "y": "A"},
            {"color": "red", "y": "A"},
            {"color": "blue", "y": "A"},
            {"color": "blue", "y": "B"},
        ]
        artifact = _fit_nb(rows, ["color"])
        assert artifact["model"]["A"]["stats"]["color"] == {
            "type": "categorical",
            "counts": {"red": 2, "blue": 1},
            "total": 3,
        }

        applier = GaussianNaiveBayesApplier()
        scores = applier.joint_log_likelihood({"color": "green"}, ["color"], artifact)
        assert scores["A"] == pytest.approx(math.log(0.75) + math.log(1 / 5))
        assert scores["B"] == pytest.approx(math.log(0.25) + math.log(1 / 2))
        assert applier.predict([{"color": "red"}, {"color": "green"}], ["color"], artifact) == ["A", "A"]

    def test_empty_training_set(self):
        with pytest.raises(ValueError):
            _fit_nb([], ["f"])

    def test_gaussian_density(self):
        assert gaussian_density(0.0, 0.0, 1.0) == pytest.approx(1 / math.sqrt(2 * math.pi))


class TestKNNRegressor:
    def _train(self):
        return [{"x": float(i), "y": float(10 * i)} for i in range(10)]

    def test_train_normalization_recovers_neighbors(self):
        artifact = KNNRegressorCalculator().fit(self._train(), "y", ["x"], {"k": 1, "normalization": "train"})
        predictions = KNNRegressorApplier().predict([{"x": 3.0}, {"x": 8.0}], ["x"], artifact)

        assert predictions == [pytest.approx(30.0), pytest.approx(80.0)]

    def test_independent_normalization_rescales_test_rows(self):
        artifact = KNNRegressorCalculator().fit(self._train(), "y", ["x"], {"k": 1})
        # Test rows are scaled on their own range: 100 -> 0.0, 200 -> 1.0
        predictions = KNNRegressorApplier().predict([{"x": 100.0}, {"x": 200.0}], ["x"], artifact)

        assert predictions == [pytest.approx(0.0), pytest.approx(90.0)]

    def test_prediction_is_mean_of_k_nearest(self):
        artifact = KNNRegressorCalculator().fit(self._train(), "y", ["x"], {"k": 3, "normalization": "train"})
        predictions = KNNRegressorApplier().predict([{"x": 0.0}], ["x"], artifact)

        # Nearest are x=0,1,2
        assert predictions == [pytest.approx(10.0)]

    def test_k_is_capped_at_training_size(self):
        rows = [{"x": 0.0, "y": 1.0}, {"x": 1.0, "y": 2.0}, {"x": 2.0, "y": 6.0}]
        artifact = KNNRegressorCalculator().fit(rows, "y", ["x"], {"k": 5, "normalization": "train"})

        assert KNNRegressorApplier().predict([{"x": 0.0}], ["x"], artifact) == [pytest.approx(3.0)]

    def test_unknown_normalization(self):
        with pytest.raises(ValueError):
            KNNRegressorCalculator().fit(self._train(), "y", ["x"], {"normalization": "zscore"})

    def test_no_rows_to_predict(self):
        artifact = KNNRegressorCalculator().fit(self._train(), "y", ["x"], {})
        assert KNNRegressorApplier().predict([], ["x"], artifact) == []


class TestModelEstimator:
    def test_negative_r2_is_reported_as_zero(self):
        dataset = SplitDataset(
            train=[{"x": float(x), "y": y} for x, y in zip([1, 2, 3, 4, 5, 100], [0.0, 0.0, 0.0, 0.0, 0.0, 60.0])],
            test=[{"x": 1.0, "y": 9.0}, {"x": 2.0, "y": 11.0}],
        )
        estimator = ModelEstimator(KNNRegressorCalculator(), KNNRegressorApplier())
        result = estimator.evaluate(dataset, "y", ["x"], {"k": 5, "normalization": "train"})

        assert result.type == ProblemType.REGRESSION
        assert result.is_regression
        assert result.accuracy == 0.0
        assert result.auc_estimate == 0.0
        assert result.model_name == "KNN Regression (R²)"
        assert (result.train_rows, result.test_rows) == (6, 2)

    def test_classification_result_carries_auc_proxy(self):
        dataset = SplitDataset(
            train=[{"f": float(v), "y": "low"} for v in (1, 2, 3)] + [{"f": float(v), "y": "high"} for v in (10, 11, 12)],
            test=[{"f": 2.0, "y": "low"}, {"f": 11.0, "y": "high"}],
        )
        estimator = ModelEstimator(GaussianNaiveBayesCalculator(), GaussianNaiveBayesApplier())
        result = estimator.evaluate(dataset, "y", ["f"])

        assert result.type == ProblemType.CLASSIFICATION
        assert result.accuracy == 1.0
        assert result.auc_estimate == pytest.approx(0.99)
        assert result.model_name == "Naive Bayes (live analysis)"
        assert estimator.model_artifact is not None

    def test_numeric_class_labels_compare_as_strings(self):
        dataset = SplitDataset(
            train=[{"f": 0.0, "y": 0.0}, {"f": 0.2, "y": 0.0}, {"f": 5.0, "y": 1.0}, {"f": 5.2, "y": 1.0}],
            test=[{"f": 0.1, "y": 0.0}, {"f": 5.1, "y": 1.0}],
        )
        result = ModelEstimator(GaussianNaiveBayesCalculator(), GaussianNaiveBayesApplier()).evaluate(
            dataset, "y", ["f"]
        )
        assert result.accuracy == 1.0

    def test_empty_split_gives_sentinel(self):
        estimator = ModelEstimator(GaussianNaiveBayesCalculator(), GaussianNaiveBayesApplier())
        result = estimator.evaluate(SplitDataset(train=[{"f": 1.0, "y": "A"}], test=[]), "y", ["f"])

        assert result.model_name == "Insufficient data"
        assert result.accuracy == 0.0


class TestMetrics:
    def test_auc_proxy(self):
        assert auc_proxy(0.5) == pytest.approx(0.55)
        assert auc_proxy(0.97) == pytest.approx(0.99)
        assert auc_proxy(0.5, offset=0.1, cap=0.9) == pytest.approx(0.6)

    def test_r2_perfect_and_baseline(self):
        assert r2_score([1.0, 2.0, 3.0], [1.0, 2.0, 3.0], reference_mean=2.0) == pytest.approx(1.0)
        assert r2_score([1.0, 2.0, 3.0], [2.0, 2.0, 2.0], reference_mean=2.0) == pytest.approx(0.0)

    def test_r2_uses_reference_mean(self):
        # Around the training mean 0: SStot = 1 + 9 = 10, SSres = 1 + 1 = 2
        assert r2_score([1.0, 3.0], [2.0, 2.0], reference_mean=0.0) == pytest.approx(0.8)

    def test_r2_can_be_negative_and_zero_sstot_gives_zero(self):
        assert r2_score([1.0, 3.0], [10.0, 10.0], reference_mean=2.0) < 0
        assert r2_score([2.0, 2.0], [5.0, 7.0], reference_mean=2.0) == 0.0


class TestProblemType:
    def test_many_distinct_numbers_is_regression(self):
        rows = [{"t": float(i)} for i in range(11)]
        assert detect_problem_type(rows, "t") == ProblemType.REGRESSION

    def test_few_distinct_numbers_is_classification(self):
        rows = [{"t": float(i % 10)} for i in range(50)]
        assert detect_problem_type(rows, "t") == ProblemType.CLASSIFICATION

    def test_any_text_value_is_classification(self):
        rows = [{"t": float(i)} for i in range(20)] + [{"t": "unknown"}]
        assert detect_problem_type(rows, "t") == ProblemType.CLASSIFICATION

    def test_empty_rows(self):
        assert detect_problem_type([], "t") == ProblemType.CLASSIFICATION


def test_partial_accuracy_on_held_out_rows():
    dataset = SplitDataset(
        train=[{"f": float(v), "y": "low"} for v in (1, 2, 3)] + [{"f": float(v), "y": "high"} for v in (10, 11, 12)],
        # The last row is labelled "low" but sits in the "high" cluster
        test=[{"f": 2.0, "y": "low"}, {"f": 1.5, "y": "low"}, {"f": 11.0, "y": "high"}, {"f": 12.0, "y": "low"}],
    )
    result = ModelEstimator(GaussianNaiveBayesCalculator(), GaussianNaiveBayesApplier()).evaluate(dataset, "y", ["f"])

    assert result.accuracy == pytest.approx(0.75)
    assert result.auc_estimate == pytest.approx(0.8)
    assert isinstance(result.accuracy, float)
