import logging
from typing import List

from ..config import REGRESSION_UNIQUE_THRESHOLD
from ..profiling.schemas import ProblemType
from ..utils import Row, is_number, stringify

logger = logging.getLogger(__name__)


def detect_problem_type(
    rows: List[Row],
    target: str,
    unique_threshold: int = REGRESSION_UNIQUE_THRESHOLD,
) -> ProblemType:
    """
    Decide between classification and regression for a target.

    Regression is chosen only when every target value is a number and the
    target has more than `unique_threshold` distinct values; coded categories
    (0/1 flags, 1..5 ratings) stay classification.
    """
    values = [row.get(target) for row in rows]
    if not values:
        return ProblemType.CLASSIFICATION

    all_numeric = all(is_number(v) for v in values)
    distinct = len({stringify(v) for v in values})

    problem_type = (
        ProblemType.REGRESSION
        if all_numeric and distinct > unique_threshold
        else ProblemType.CLASSIFICATION
    )
    logger.debug(
        f"Target '{target}': numeric={all_numeric}, distinct={distinct} -> {problem_type.value}"
    )
    return problem_type
