import logging
from typing import List, Optional

import numpy as np

from ..config import NUMERIC_TYPE_THRESHOLD, SAMPLE_SIZE
from ..utils import Row, is_defined, is_number, stringify
from .schemas import ColumnStats, ColumnType, DatasetMeta

logger = logging.getLogger(__name__)


class DatasetAnalyzer:
    """
    Profiles a parsed dataset: infers each column's type and computes the
    descriptive statistics shown during variable selection.
    """

    def __init__(
        self,
        rows: List[Row],
        file_name: str = "dataset",
        numeric_threshold: float = NUMERIC_TYPE_THRESHOLD,
        sample_size: int = SAMPLE_SIZE,
    ):
        self.rows = rows
        self.file_name = file_name
        self.numeric_threshold = numeric_threshold
        self.sample_size = sample_size
        self.row_count = len(rows)
        # Every row carries the same keys; the first row fixes the column order.
        self.columns = list(rows[0].keys()) if rows else []

    def analyze(self) -> DatasetMeta:
        """
        Main entry point to generate the dataset profile.
        """
        if self.row_count == 0:
            logger.info(f"Dataset '{self.file_name}' has no rows; returning empty profile")
            return DatasetMeta(file_name=self.file_name, row_count=0, columns=[], stats={})

        stats = {col: self._analyze_column(col) for col in self.columns}

        numeric_count = sum(1 for s in stats.values() if s.type == ColumnType.NUMERIC)
        logger.info(
            f"Profiled '{self.file_name}': {self.row_count} rows, {len(self.columns)} columns "
            f"({numeric_count} numeric, {len(self.columns) - numeric_count} categorical)"
        )

        return DatasetMeta(
            file_name=self.file_name,
            row_count=self.row_count,
            columns=list(self.columns),
            stats=stats,
        )

    def _analyze_column(self, col: str) -> ColumnStats:
        values = [row.get(col) for row in self.rows]
        defined = [v for v in values if is_defined(v)]
        numbers = [float(v) for v in defined if is_number(v)]

        # A few dirty placeholders ("n/a", "?") must not flip a numeric column.
        is_numeric = bool(numbers) and len(numbers) >= len(defined) * self.numeric_threshold
        unique_values = {stringify(v) for v in defined}

        stats = ColumnStats(
            name=col,
            type=ColumnType.NUMERIC if is_numeric else ColumnType.CATEGORICAL,
            missing_count=self.row_count - len(defined),
            unique_count=len(unique_values),
            samples=[self._sample_value(v) for v in values[: self.sample_size]],
        )

        if is_numeric and numbers:
            arr = np.asarray(numbers, dtype=float)
            stats.mean = float(arr.mean())
            stats.min = float(arr.min())
            stats.max = float(arr.max())

        logger.debug(
            f"Column '{col}': type={stats.type.value}, missing={stats.missing_count}, "
            f"unique={stats.unique_count}"
        )
        return stats

    @staticmethod
    def _sample_value(value) -> Optional[object]:
        if is_number(value):
            return float(value)
        if value is None or (isinstance(value, float) and value != value):
            return None
        return str(value)


def analyze_dataset(
    rows: List[Row],
    file_name: str = "dataset",
    numeric_threshold: float = NUMERIC_TYPE_THRESHOLD,
) -> DatasetMeta:
    """Profile `rows` and return the DatasetMeta for the upload."""
    return DatasetAnalyzer(rows, file_name, numeric_threshold=numeric_threshold).analyze()
