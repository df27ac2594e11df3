"""Scoring helpers for the quick train/test estimate."""

from typing import Sequence

import numpy as np

from ..config import AUC_PROXY_CAP, AUC_PROXY_OFFSET


def auc_proxy(accuracy: float, offset: float = AUC_PROXY_OFFSET, cap: float = AUC_PROXY_CAP) -> float:
    """
    Heuristic stand-in for AUC: min(cap, accuracy + offset).

    This is not derived from a ROC curve and must not be presented as one.
    """
    return min(cap, accuracy + offset)


def r2_score(actual: Sequence[float], predicted: Sequence[float], reference_mean: float) -> float:
    """
    Coefficient of determination, 1 - SSres / SStot.

    SStot is measured around `reference_mean` (the training-target mean), not
    the test mean, so `sklearn.metrics.r2_score` does not apply here. A zero
    SStot gives 0. The raw value may be negative.
    """
    y_true = np.asarray(actual, dtype=float)
    y_pred = np.asarray(predicted, dtype=float)
    if y_true.shape != y_pred.shape:
        raise ValueError(f"Shape mismatch: {y_true.shape} actual vs {y_pred.shape} predicted")

    ss_res = float(np.sum((y_true - y_pred) ** 2))
    ss_tot = float(np.sum((y_true - reference_mean) ** 2))
    if ss_tot == 0:
        return 0.0
    return 1 - ss_res / ss_tot
