import logging
from typing import Any, Dict, List

from ..utils import Row, is_defined, to_number
from .base import BaseApplier, BaseCalculator, StatelessTransformer

logger = logging.getLogger(__name__)


# --- Complete-case filter ---
class CompleteCaseCalculator(BaseCalculator):
    def fit(self, rows: List[Row], config: Dict[str, Any]) -> Dict[str, Any]:
        # Config: {'target_column': 'y', 'columns': [...features]}
        # Nothing is learned from the data.
        return {
            "type": "complete_case_filter",
            "target_column": config.get("target_column"),
            "columns": list(config.get("columns") or []),
        }


class CompleteCaseApplier(BaseApplier):
    def apply(self, rows: List[Row], params: Dict[str, Any]) -> List[Row]:
        target = params.get("target_column")
        features = params.get("columns", [])

        cleaned: List[Row] = []
        for row in rows:
            if target is not None and not is_defined(row.get(target)):
                continue

            coerced = {}
            for feature in features:
                value = row.get(feature)
                number = to_number(value) if is_defined(value) else None
                if number is None:
                    break
                coerced[feature] = number
            else:
                cleaned.append({**row, **coerced})

        dropped = len(rows) - len(cleaned)
        if dropped:
            logger.debug(f"Dropped {dropped} of {len(rows)} rows with a missing target or non-numeric feature")
        return cleaned


def clean_rows(rows: List[Row], target: str, features: List[str]) -> List[Row]:
    """
    Keep rows with a defined target and a defined, numeric value for every feature.

    Feature values are coerced to float in the returned rows; the target is
    left as-is. Categorical features therefore exclude their rows.
    """
    transformer = StatelessTransformer(CompleteCaseCalculator(), CompleteCaseApplier())
    return transformer.fit_transform(rows, {"target_column": target, "columns": features})
