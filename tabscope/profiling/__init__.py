from .analyzer import DatasetAnalyzer, analyze_dataset
from .distributions import calculate_histogram
from .relationships import build_relationship_sample
from .schemas import ColumnStats, ColumnType, DatasetMeta, HistogramBin, PredictionResult, ProblemType, ScatterPoint

__all__ = [
    "DatasetAnalyzer",
    "analyze_dataset",
    "calculate_histogram",
    "build_relationship_sample",
    "ColumnStats",
    "ColumnType",
    "DatasetMeta",
    "HistogramBin",
    "PredictionResult",
    "ProblemType",
    "ScatterPoint",
]
