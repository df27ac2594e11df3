from .base import BaseModelApplier, BaseModelCalculator, ModelEstimator
from .classification import GaussianNaiveBayesApplier, GaussianNaiveBayesCalculator
from .metrics import auc_proxy, r2_score
from .problem_type import detect_problem_type
from .regression import KNNRegressorApplier, KNNRegressorCalculator

__all__ = [
    "BaseModelApplier",
    "BaseModelCalculator",
    "ModelEstimator",
    "GaussianNaiveBayesApplier",
    "GaussianNaiveBayesCalculator",
    "auc_proxy",
    "r2_score",
    "detect_problem_type",
    "KNNRegressorApplier",
    "KNNRegressorCalculator",
]
