import logging
from typing import Any, Dict, List

import numpy as np

from ..config import KNN_MODEL_NAME, KNN_NEIGHBORS, KNN_NORMALIZATION
from ..preprocessing.scaling import MinMaxScalerApplier, MinMaxScalerCalculator
from ..profiling.schemas import ProblemType
from ..utils import Row, to_number
from .base import BaseModelApplier, BaseModelCalculator

logger = logging.getLogger(__name__)

NORMALIZATION_MODES = ("independent", "train")


def _feature_matrix(rows: List[Row], features: List[str]) -> np.ndarray:
    matrix = np.zeros((len(rows), len(features)), dtype=float)
    for i, row in enumerate(rows):
        for j, feature in enumerate(features):
            value = to_number(row.get(feature))
            matrix[i, j] = 0.0 if value is None else value
    return matrix


# --- K-Nearest Neighbors Regressor ---
class KNNRegressorCalculator(BaseModelCalculator):
    """
    Lazy learner: "fitting" only stores the min-max normalized training rows,
    their targets and the training normalization bounds.
    """

    @property
    def problem_type(self) -> ProblemType:
        return ProblemType.REGRESSION

    @property
    def model_name(self) -> str:
        return KNN_MODEL_NAME

    def fit(
        self,
        rows: List[Row],
        target: str,
        features: List[str],
        config: Dict[str, Any],
    ) -> Dict[str, Any]:
        if not rows:
            raise ValueError("Cannot fit KNN on an empty training set")

        normalization = str(config.get("normalization", KNN_NORMALIZATION)).lower()
        if normalization not in NORMALIZATION_MODES:
            raise ValueError(f"Unknown normalization mode: {normalization}")

        scaler_params = MinMaxScalerCalculator().fit(rows, {"columns": features})
        normalized = MinMaxScalerApplier().apply(rows, scaler_params)

        return {
            "type": "knn_regressor",
            "k": int(config.get("k", KNN_NEIGHBORS)),
            "normalization": normalization,
            "scaler": scaler_params,
            "X": _feature_matrix(normalized, features),
            "y": np.asarray([float(row[target]) for row in rows], dtype=float),
        }


class KNNRegressorApplier(BaseModelApplier):
    def predict(self, rows: List[Row], features: List[str], model_artifact: Dict[str, Any]) -> List[float]:
        if not rows:
            return []

        scaler = MinMaxScalerApplier()
        if model_artifact["normalization"] == "train":
            scaled = scaler.apply(rows, model_artifact["scaler"])
        else:
            # Test rows are scaled with bounds computed from the test rows themselves.
            scaled = scaler.apply(rows, MinMaxScalerCalculator().fit(rows, {"columns": features}))

        X_train = model_artifact["X"]
        y_train = model_artifact["y"]
        X_test = _feature_matrix(scaled, features)
        k = max(1, min(model_artifact["k"], len(y_train)))

        # Pairwise Euclidean distances, shape (n_test, n_train)
        diffs = X_test[:, np.newaxis, :] - X_train[np.newaxis, :, :]
        distances = np.sqrt(np.sum(diffs ** 2, axis=2))

        predictions: List[float] = []
        for row_distances in distances:
            nearest = np.argsort(row_distances, kind="stable")[:k]
            predictions.append(float(y_train[nearest].mean()))

        logger.debug(f"KNN predicted {len(predictions)} rows with k={k} ({model_artifact['normalization']} scaling)")
        return predictions
