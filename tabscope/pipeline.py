"""Model analysis orchestration: clean → detect problem type → split → train/evaluate."""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type

from .config import Settings, get_settings
from .data.dataset import train_test_split
from .modeling.base import BaseModelApplier, BaseModelCalculator, ModelEstimator
from .modeling.classification import GaussianNaiveBayesApplier, GaussianNaiveBayesCalculator
from .modeling.problem_type import detect_problem_type
from .modeling.regression import KNNRegressorApplier, KNNRegressorCalculator
from .preprocessing.cleaning import clean_rows
from .profiling.schemas import PredictionResult, ProblemType
from .utils import Row

logger = logging.getLogger(__name__)

MODEL_REGISTRY: Dict[ProblemType, Tuple[Type[BaseModelCalculator], Type[BaseModelApplier]]] = {
    ProblemType.CLASSIFICATION: (GaussianNaiveBayesCalculator, GaussianNaiveBayesApplier),
    ProblemType.REGRESSION: (KNNRegressorCalculator, KNNRegressorApplier),
}


class AnalysisPipeline:
    """
    Quick predictive-performance estimate for one (target, features) selection.

    Nothing is cached between runs: each call to `run` re-cleans, re-splits
    and retrains from scratch.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def _model_config(self, problem_type: ProblemType) -> Dict[str, Any]:
        s = self.settings
        if problem_type == ProblemType.REGRESSION:
            return {"k": s.KNN_NEIGHBORS, "normalization": s.KNN_NORMALIZATION}
        return {
            "variance_floor": s.NB_VARIANCE_FLOOR,
            "density_floor": s.NB_DENSITY_FLOOR,
            "auc_proxy_offset": s.AUC_PROXY_OFFSET,
            "auc_proxy_cap": s.AUC_PROXY_CAP,
        }

    def _build_estimator(self, problem_type: ProblemType) -> ModelEstimator:
        calculator_cls, applier_cls = MODEL_REGISTRY[problem_type]
        return ModelEstimator(
            calculator=calculator_cls(),
            applier=applier_cls(),
            node_id=f"{problem_type.value}_model",
        )

    def run(
        self,
        rows: List[Row],
        target: str,
        features: List[str],
        random_state: Optional[int] = None,
        permutation: Optional[Sequence[int]] = None,
    ) -> PredictionResult:
        """
        Args:
            rows: Parsed dataset rows.
            target: Target column name.
            features: Feature column names (the target should not be among them).
            random_state: Optional seed for the train/test shuffle.
            permutation: Optional explicit row order (indices into the cleaned rows)
                that replaces the shuffle.

        Returns:
            A fresh PredictionResult; the insufficient-data sentinel when fewer
            than MIN_CLEAN_ROWS clean rows remain or a split comes out empty.
        """
        cleaned = clean_rows(rows, target, features)
        if len(cleaned) < self.settings.MIN_CLEAN_ROWS:
            logger.info(
                f"Only {len(cleaned)} clean row(s) for target '{target}' "
                f"(need {self.settings.MIN_CLEAN_ROWS}); insufficient data"
            )
            return PredictionResult.insufficient_data()

        problem_type = detect_problem_type(
            cleaned, target, unique_threshold=self.settings.REGRESSION_UNIQUE_THRESHOLD
        )

        dataset = train_test_split(
            cleaned,
            train_fraction=self.settings.TRAIN_FRACTION,
            random_state=random_state,
            permutation=permutation,
        )
        if dataset.is_empty:
            logger.info("Train or test split is empty; insufficient data")
            return PredictionResult.insufficient_data()

        estimator = self._build_estimator(problem_type)
        result = estimator.evaluate(dataset, target, features, self._model_config(problem_type))
        logger.info(
            f"Analysis of '{target}' on {len(features)} feature(s): {result.type.value}, "
            f"score={result.accuracy:.4f}"
        )
        return result


def run_model_analysis(
    rows: List[Row],
    target: str,
    features: List[str],
    random_state: Optional[int] = None,
    permutation: Optional[Sequence[int]] = None,
    settings: Optional[Settings] = None,
) -> PredictionResult:
    """Functional entry point for `AnalysisPipeline.run`."""
    return AnalysisPipeline(settings).run(
        rows, target, features, random_state=random_state, permutation=permutation
    )
