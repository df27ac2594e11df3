from typing import Any, Dict, List
import logging

import numpy as np
import pandas as pd
from sklearn.preprocessing import MinMaxScaler

from ..utils import Row, resolve_columns, to_number
from .base import BaseApplier, BaseCalculator, StatelessTransformer

logger = logging.getLogger(__name__)


def _numeric_frame(rows: List[Row], cols: List[str]) -> pd.DataFrame:
    """Numeric view of `cols`; text and missing cells become NaN."""
    data = {col: [to_number(row.get(col)) for row in rows] for col in cols}
    return pd.DataFrame(data, columns=cols, dtype=float)


# --- MinMax Scaler ---
class MinMaxScalerCalculator(BaseCalculator):
    def fit(self, rows: List[Row], config: Dict[str, Any]) -> Dict[str, Any]:
        # Config: {'columns': [...]}
        cols = resolve_columns(rows, config)

        if not cols:
            return {}

        frame = _numeric_frame(rows, cols)
        # Columns without a single number have no bounds to learn
        cols = [c for c in cols if frame[c].notna().any()]
        if not cols:
            return {}

        # NaNs are ignored when fitting
        scaler = MinMaxScaler()
        scaler.fit(frame[cols])

        logger.debug(f"Fitted min-max bounds for {len(cols)} column(s) on {len(rows)} rows")
        return {
            "type": "minmax_scaler",
            "min": scaler.min_.tolist(),
            "scale": scaler.scale_.tolist(),
            "data_min": scaler.data_min_.tolist(),
            "data_max": scaler.data_max_.tolist(),
            "columns": cols,
        }


class MinMaxScalerApplier(BaseApplier):
    def apply(self, rows: List[Row], params: Dict[str, Any]) -> List[Row]:
        cols = params.get("columns", [])
        min_val = params.get("min")
        scale = params.get("scale")

        if not cols or min_val is None or scale is None:
            return [dict(row) for row in rows]

        X = _numeric_frame(rows, cols).to_numpy()
        X_scaled = X * np.array(scale) + np.array(min_val)
        # Constant feature: every value maps to 0
        constant = np.array(params["data_max"]) == np.array(params["data_min"])
        X_scaled[:, constant] = 0.0

        scaled_rows: List[Row] = []
        for i, row in enumerate(rows):
            scaled = dict(row)
            for j, col in enumerate(cols):
                if not np.isnan(X[i, j]):
                    scaled[col] = float(X_scaled[i, j])
            scaled_rows.append(scaled)
        return scaled_rows


def normalize_rows(rows: List[Row], features: List[str]) -> List[Row]:
    """Min-max scale `features` into [0, 1] using bounds computed from these same rows."""
    transformer = StatelessTransformer(MinMaxScalerCalculator(), MinMaxScalerApplier())
    return transformer.fit_transform(rows, {"columns": features})
