from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..config import INSUFFICIENT_DATA_MODEL_NAME

RawValue = Optional[Union[float, str]]


class TabscopeModel(BaseModel):
    """Base schema: snake_case in Python, camelCase aliases for the presentation layer."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ColumnType(str, Enum):
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


class ProblemType(str, Enum):
    CLASSIFICATION = "classification"
    REGRESSION = "regression"


class ColumnStats(TabscopeModel):
    name: str
    type: ColumnType
    missing_count: int
    unique_count: int
    samples: List[RawValue] = Field(default_factory=list)

    # Numeric columns only
    mean: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None


class DatasetMeta(TabscopeModel):
    file_name: str
    row_count: int
    columns: List[str] = Field(default_factory=list)
    stats: Dict[str, ColumnStats] = Field(default_factory=dict)

    @property
    def numeric_columns(self) -> List[str]:
        return [c for c in self.columns if self.stats[c].type == ColumnType.NUMERIC]

    @property
    def categorical_columns(self) -> List[str]:
        return [c for c in self.columns if self.stats[c].type == ColumnType.CATEGORICAL]

    def missing_percentage(self, column: str) -> float:
        """Share of missing cells in a column, in percent."""
        if self.row_count == 0:
            return 0.0
        return self.stats[column].missing_count / self.row_count * 100

    def candidate_features(self, target: Optional[str]) -> List[str]:
        """All columns except the target, in column order."""
        return [c for c in self.columns if c != target]


class HistogramBin(TabscopeModel):
    label: str
    count: int
    start: float
    end: float


class ScatterPoint(TabscopeModel):
    x: RawValue = None
    y: RawValue = None


class PredictionResult(TabscopeModel):
    """
    Performance summary for one (target, features) selection.

    `accuracy` holds the primary score: classification accuracy, or the
    zero-clamped R² for regression. `auc_estimate` is a heuristic proxy
    (accuracy + offset, capped), NOT a ROC-AUC; it is 0 for regression.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    accuracy: float = Field(..., ge=0, le=1)
    auc_estimate: float = Field(0.0, ge=0, le=1, alias="auc")
    model_name: str
    type: ProblemType = ProblemType.CLASSIFICATION
    train_rows: int = 0
    test_rows: int = 0

    @property
    def is_regression(self) -> bool:
        return self.type == ProblemType.REGRESSION

    @classmethod
    def insufficient_data(cls) -> "PredictionResult":
        return cls(
            accuracy=0.0,
            auc_estimate=0.0,
            model_name=INSUFFICIENT_DATA_MODEL_NAME,
            type=ProblemType.CLASSIFICATION,
        )
