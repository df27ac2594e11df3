import logging
import math
from typing import Any, Dict, List

import numpy as np

from ..config import NAIVE_BAYES_MODEL_NAME, NB_DENSITY_FLOOR, NB_VARIANCE_FLOOR
from ..profiling.schemas import ProblemType
from ..utils import Row, is_number, stringify, to_number
from .base import BaseModelApplier, BaseModelCalculator

logger = logging.getLogger(__name__)

_SQRT_2PI = math.sqrt(2 * math.pi)


def gaussian_density(x: float, mean: float, std: float) -> float:
    """Normal probability density at x."""
    return (1 / (std * _SQRT_2PI)) * math.exp(-0.5 * ((x - mean) / std) ** 2)


# --- Gaussian Naive Bayes ---
class GaussianNaiveBayesCalculator(BaseModelCalculator):
    """
    Per-class priors plus per-feature likelihood parameters.

    Numeric features get a Gaussian (mean, std) with the variance floored so a
    constant feature cannot collapse the density; any other feature gets a
    frequency table used with Laplace smoothing at prediction time.
    """

    @property
    def problem_type(self) -> ProblemType:
        return ProblemType.CLASSIFICATION

    @property
    def model_name(self) -> str:
        return NAIVE_BAYES_MODEL_NAME

    def fit(
        self,
        rows: List[Row],
        target: str,
        features: List[str],
        config: Dict[str, Any],
    ) -> Dict[str, Any]:
        if not rows:
            raise ValueError("Cannot fit Naive Bayes on an empty training set")

        variance_floor = config.get("variance_floor", NB_VARIANCE_FLOOR)

        # Classes keep first-encountered order; prediction ties resolve to the earlier class.
        groups: Dict[str, List[Row]] = {}
        for row in rows:
            groups.setdefault(stringify(row.get(target)), []).append(row)

        model: Dict[str, Any] = {}
        for label, subset in groups.items():
            stats: Dict[str, Any] = {}
            for feature in features:
                values = [row.get(feature) for row in subset]
                if all(is_number(v) for v in values):
                    arr = np.asarray(values, dtype=float)
                    variance = max(float(arr.var()), variance_floor)
                    stats[feature] = {
                        "type": "numeric",
                        "mean": float(arr.mean()),
                        "std": math.sqrt(variance),
                    }
                else:
                    counts: Dict[str, int] = {}
                    for value in values:
                        key = stringify(value)
                        counts[key] = counts.get(key, 0) + 1
                    stats[feature] = {"type": "categorical", "counts": counts, "total": len(values)}

            model[label] = {"prior": len(subset) / len(rows), "stats": stats}

        logger.debug(f"Naive Bayes fitted: {len(groups)} classes, {len(features)} features, {len(rows)} rows")
        return {
            "type": "gaussian_naive_bayes",
            "classes": list(groups.keys()),
            "model": model,
            "density_floor": config.get("density_floor", NB_DENSITY_FLOOR),
        }


class GaussianNaiveBayesApplier(BaseModelApplier):
    def joint_log_likelihood(self, row: Row, features: List[str], model_artifact: Dict[str, Any]) -> Dict[str, float]:
        """log(prior) + sum of per-feature log-likelihoods, per class."""
        density_floor = model_artifact.get("density_floor", NB_DENSITY_FLOOR)
        scores: Dict[str, float] = {}

        for label in model_artifact["classes"]:
            class_model = model_artifact["model"][label]
            log_prob = math.log(class_model["prior"])

            for feature in features:
                stat = class_model["stats"][feature]
                value = row.get(feature)
                if stat["type"] == "numeric":
                    x = to_number(value)
                    density = 0.0 if x is None else gaussian_density(x, stat["mean"], stat["std"])
                    log_prob += math.log(max(density, density_floor))
                else:
                    count = stat["counts"].get(stringify(value), 0)
                    # Laplace smoothing
                    log_prob += math.log((count + 1) / (stat["total"] + len(stat["counts"])))

            scores[label] = log_prob
        return scores

    def predict(self, rows: List[Row], features: List[str], model_artifact: Dict[str, Any]) -> List[str]:
        classes = model_artifact["classes"]
        predictions: List[str] = []

        for row in rows:
            scores = self.joint_log_likelihood(row, features, model_artifact)
            best_label = classes[0]
            best_score = -math.inf
            for label in classes:
                if scores[label] > best_score:
                    best_score = scores[label]
                    best_label = label
            predictions.append(best_label)

        return predictions
