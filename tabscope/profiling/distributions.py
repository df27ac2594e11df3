import logging
from typing import List

import numpy as np

from ..config import HISTOGRAM_BINS
from ..utils import Row, numeric_values, stringify
from .schemas import HistogramBin

logger = logging.getLogger(__name__)


def calculate_histogram(rows: List[Row], column: str, bins: int = HISTOGRAM_BINS) -> List[HistogramBin]:
    """
    Bin the numeric values of `column` into `bins` equal-width buckets.

    Non-numeric and missing cells are skipped. A constant column yields a
    single bucket labelled with its value. The last bucket is closed on both
    ends so the maximum is always counted.
    """
    if bins < 1:
        raise ValueError(f"bins must be a positive integer, got {bins}")

    values = numeric_values(rows, column)
    if not values:
        logger.debug(f"No numeric values in '{column}'; histogram is empty")
        return []

    arr = np.asarray(values, dtype=float)
    lo = float(arr.min())
    hi = float(arr.max())

    if lo == hi:
        return [HistogramBin(label=stringify(lo), count=len(values), start=lo, end=hi)]

    width = (hi - lo) / bins
    indices = np.minimum(np.floor((arr - lo) / width).astype(int), bins - 1)
    counts = np.bincount(indices, minlength=bins)

    histogram = []
    for i, count in enumerate(counts.tolist()):
        start = lo + i * width
        end = lo + (i + 1) * width
        histogram.append(
            HistogramBin(label=f"{start:.1f} - {end:.1f}", count=int(count), start=start, end=end)
        )
    return histogram
