"""
Analysis session: the state behind one uploaded dataset.

Holds the parsed rows and their profile, validates variable selections and
recomputes the performance estimate from scratch on every selection change.
"""

import logging
from typing import List, Optional, Sequence, Union

from .config import Settings, get_settings
from .data.demo import DEMO_CSV, DEMO_FILE_NAME
from .data.parser import process_file_content
from .exceptions import SelectionError, UnparsableDatasetError
from .explain.context import build_stats_context
from .explain.service import ExplanationService
from .pipeline import AnalysisPipeline
from .profiling.analyzer import DatasetAnalyzer
from .profiling.distributions import calculate_histogram
from .profiling.relationships import build_relationship_sample
from .profiling.schemas import DatasetMeta, HistogramBin, PredictionResult, ScatterPoint
from .utils import Row

logger = logging.getLogger(__name__)


class AnalysisSession:
    def __init__(
        self,
        rows: List[Row],
        meta: DatasetMeta,
        settings: Optional[Settings] = None,
        explanation_service: Optional[ExplanationService] = None,
    ):
        self.rows = rows
        self.meta = meta
        self.settings = settings or get_settings()
        self.explanation_service = explanation_service or ExplanationService.from_settings(self.settings)
        self.pipeline = AnalysisPipeline(self.settings)

        self.target: Optional[str] = None
        self.features: List[str] = []
        self.prediction: Optional[PredictionResult] = None

    @classmethod
    def from_rows(
        cls,
        rows: List[Row],
        file_name: str = "dataset",
        settings: Optional[Settings] = None,
        explanation_service: Optional[ExplanationService] = None,
    ) -> "AnalysisSession":
        if not rows:
            raise UnparsableDatasetError(file_name)
        settings = settings or get_settings()
        meta = DatasetAnalyzer(
            rows,
            file_name,
            numeric_threshold=settings.NUMERIC_TYPE_THRESHOLD,
            sample_size=settings.SAMPLE_SIZE,
        ).analyze()
        return cls(rows, meta, settings=settings, explanation_service=explanation_service)

    @classmethod
    def from_upload(
        cls,
        content: Union[str, bytes],
        file_name: str,
        settings: Optional[Settings] = None,
        explanation_service: Optional[ExplanationService] = None,
    ) -> "AnalysisSession":
        """Parse and profile an uploaded file; zero parsed rows is fatal for the upload."""
        rows = process_file_content(content, file_name)
        return cls.from_rows(rows, file_name, settings=settings, explanation_service=explanation_service)

    @classmethod
    def from_demo(cls, settings: Optional[Settings] = None) -> "AnalysisSession":
        return cls.from_upload(DEMO_CSV, DEMO_FILE_NAME, settings=settings)

    def _require_column(self, column: str) -> None:
        if column not in self.meta.stats:
            raise SelectionError(
                f"Unknown column '{column}'",
                details={"column": column, "columns": self.meta.columns},
            )

    def select(
        self,
        target: str,
        features: Sequence[str],
        random_state: Optional[int] = None,
        permutation: Optional[Sequence[int]] = None,
    ) -> PredictionResult:
        """
        Set the target and model features, then recompute the estimate.
        The target is never used as a feature; at least one feature is required.
        """
        self._require_column(target)
        chosen = [f for f in dict.fromkeys(features) if f != target]
        for feature in chosen:
            self._require_column(feature)
        if not chosen:
            raise SelectionError(
                "Select at least one feature besides the target",
                details={"target": target},
            )

        self.target = target
        self.features = chosen
        self.prediction = self.pipeline.run(
            self.rows, target, chosen, random_state=random_state, permutation=permutation
        )
        return self.prediction

    def default_display_feature(self) -> Optional[str]:
        """First model feature, or the first non-target column when none is selected."""
        if self.features:
            return self.features[0]
        candidates = self.meta.candidate_features(self.target)
        return candidates[0] if candidates else None

    def histogram(self, column: str, bins: Optional[int] = None) -> List[HistogramBin]:
        self._require_column(column)
        return calculate_histogram(
            self.rows, column, bins if bins is not None else self.settings.HISTOGRAM_BINS
        )

    def relationship(self, feature: str) -> List[ScatterPoint]:
        if self.target is None:
            raise SelectionError("Select a target before requesting a relationship chart")
        self._require_column(feature)
        return build_relationship_sample(
            self.rows,
            self.target,
            feature,
            self.meta.stats[self.target].type,
            limit=self.settings.RELATIONSHIP_SAMPLE_LIMIT,
        )

    def stats_context(self, feature: str) -> str:
        if self.target is None:
            raise SelectionError("Select a target before requesting an explanation")
        self._require_column(feature)
        return build_stats_context(self.meta, self.target, feature)

    async def explain(self, feature: str) -> str:
        """Best-effort explanation text; never affects the prediction."""
        stats = self.stats_context(feature)
        return await self.explanation_service.explain(self.target, feature, stats)
