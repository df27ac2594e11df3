from typing import List

from ..config import RELATIONSHIP_SAMPLE_LIMIT
from ..utils import Row
from .schemas import ColumnType, RawValue, ScatterPoint


def _raw(value) -> RawValue:
    if value is None or isinstance(value, (int, float, str)):
        return value
    return str(value)


def build_relationship_sample(
    rows: List[Row],
    target: str,
    feature: str,
    target_type: ColumnType,
    limit: int = RELATIONSHIP_SAMPLE_LIMIT,
) -> List[ScatterPoint]:
    """
    Points for the target-vs-feature relationship chart.

    A categorical target goes on the x axis (one strip per class); otherwise
    the feature is x and the target is y. Only the first `limit` rows are used.
    """
    points = []
    for row in rows[:limit]:
        target_value = _raw(row.get(target))
        feature_value = _raw(row.get(feature))
        if target_type == ColumnType.CATEGORICAL:
            points.append(ScatterPoint(x=target_value, y=feature_value))
        else:
            points.append(ScatterPoint(x=feature_value, y=target_value))
    return points
