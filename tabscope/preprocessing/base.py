from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..utils import Row


class BaseCalculator(ABC):
    @abstractmethod
    def fit(self, rows: List[Row], config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Calculates parameters from the given rows.
        Returns a dictionary of fitted parameters (serializable).
        """
        pass


class BaseApplier(ABC):
    @abstractmethod
    def apply(self, rows: List[Row], params: Dict[str, Any]) -> List[Row]:
        """
        Applies the transformation using fitted parameters.
        Input rows are never mutated; new row dicts are returned.
        """
        pass


class StatelessTransformer:
    """Fits and applies on the same rows in one call; keeps no params between calls."""

    def __init__(self, calculator: BaseCalculator, applier: BaseApplier):
        self.calculator = calculator
        self.applier = applier

    def fit_transform(self, rows: List[Row], config: Dict[str, Any]) -> List[Row]:
        params = self.calculator.fit(rows, config)
        return self.applier.apply(rows, params)
