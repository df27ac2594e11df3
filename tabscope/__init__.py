"""tabscope: dataset profiling and quick predictive-performance estimates."""

from .data.parser import parse_csv, parse_excel, process_file_content
from .pipeline import AnalysisPipeline, run_model_analysis
from .profiling.analyzer import DatasetAnalyzer, analyze_dataset
from .profiling.distributions import calculate_histogram
from .profiling.schemas import ColumnStats, ColumnType, DatasetMeta, HistogramBin, PredictionResult, ProblemType
from .session import AnalysisSession

__version__ = "0.1.0"

__all__ = [
    "parse_csv",
    "parse_excel",
    "process_file_content",
    "AnalysisPipeline",
    "run_model_analysis",
    "DatasetAnalyzer",
    "analyze_dataset",
    "calculate_histogram",
    "ColumnStats",
    "ColumnType",
    "DatasetMeta",
    "HistogramBin",
    "PredictionResult",
    "ProblemType",
    "AnalysisSession",
]
