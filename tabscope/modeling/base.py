from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
import logging

from sklearn.metrics import accuracy_score

from ..config import AUC_PROXY_CAP, AUC_PROXY_OFFSET
from ..data.dataset import SplitDataset
from ..profiling.schemas import PredictionResult, ProblemType
from ..utils import Row, stringify
from .metrics import auc_proxy, r2_score

logger = logging.getLogger(__name__)


class BaseModelCalculator(ABC):
    @property
    @abstractmethod
    def problem_type(self) -> ProblemType:
        """Returns ProblemType.CLASSIFICATION or ProblemType.REGRESSION."""
        pass

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Human-readable name shown on the performance card."""
        pass

    @abstractmethod
    def fit(
        self,
        rows: List[Row],
        target: str,
        features: List[str],
        config: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Trains the model. Returns the model artifact (a plain dict).
        """
        pass


class BaseModelApplier(ABC):
    @abstractmethod
    def predict(self, rows: List[Row], features: List[str], model_artifact: Dict[str, Any]) -> List[Any]:
        """
        Generates one prediction per row.
        """
        pass


class ModelEstimator:
    """
    Runs one train/evaluate cycle for a calculator/applier pair.

    The model artifact only lives for the duration of a single fit; every
    call to `fit_predict` or `evaluate` retrains from scratch.
    """

    def __init__(self, calculator: BaseModelCalculator, applier: BaseModelApplier, node_id: str = "model"):
        self.calculator = calculator
        self.applier = applier
        self.node_id = node_id
        self.model_artifact: Optional[Dict[str, Any]] = None

    @property
    def problem_type(self) -> ProblemType:
        return self.calculator.problem_type

    def fit_predict(
        self,
        dataset: SplitDataset,
        target: str,
        features: List[str],
        config: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, List[Any]]:
        """
        Fits the model on the training split and returns predictions for the test split.
        """
        config = config or {}
        self.model_artifact = self.calculator.fit(dataset.train, target, features, config)
        predictions = self.applier.predict(dataset.test, features, self.model_artifact)
        return {"test": predictions}

    def evaluate(
        self,
        dataset: SplitDataset,
        target: str,
        features: List[str],
        config: Optional[Dict[str, Any]] = None,
    ) -> PredictionResult:
        """
        Trains on `dataset.train`, scores on `dataset.test` and builds the PredictionResult.
        An empty split yields the insufficient-data sentinel.
        """
        config = config or {}
        if dataset.is_empty:
            logger.info(f"[{self.node_id}] Empty train or test split; returning insufficient-data result")
            return PredictionResult.insufficient_data()

        predictions = self.fit_predict(dataset, target, features, config)["test"]

        if self.problem_type == ProblemType.REGRESSION:
            actual = [float(row[target]) for row in dataset.test]
            train_mean = sum(float(row[target]) for row in dataset.train) / len(dataset.train)
            raw_r2 = r2_score(actual, predictions, reference_mean=train_mean)
            logger.info(f"[{self.node_id}] {self.calculator.model_name}: raw R²={raw_r2:.4f}")
            return PredictionResult(
                accuracy=max(0.0, raw_r2),
                auc_estimate=0.0,
                model_name=self.calculator.model_name,
                type=ProblemType.REGRESSION,
                train_rows=len(dataset.train),
                test_rows=len(dataset.test),
            )

        actual_labels = [stringify(row.get(target)) for row in dataset.test]
        accuracy = float(accuracy_score(actual_labels, [stringify(p) for p in predictions]))
        auc_estimate = auc_proxy(
            accuracy,
            offset=config.get("auc_proxy_offset", AUC_PROXY_OFFSET),
            cap=config.get("auc_proxy_cap", AUC_PROXY_CAP),
        )
        logger.info(f"[{self.node_id}] {self.calculator.model_name}: accuracy={accuracy:.4f}")
        return PredictionResult(
            accuracy=accuracy,
            auc_estimate=auc_estimate,
            model_name=self.calculator.model_name,
            type=ProblemType.CLASSIFICATION,
            train_rows=len(dataset.train),
            test_rows=len(dataset.test),
        )
