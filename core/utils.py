from __future__ import annotations

import math
from typing import Iterable, Sequence

import pandas as pd


def require_columns(df: pd.DataFrame, cols: Iterable[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


def annual_pct_to_monthly(annual_pct: float) -> float:
    """Convert an annual percentage (e.g. 6.0) to a simple monthly rate (0.005)."""
    return annual_pct / 100.0 / 12.0


def horizon_months(current_age: float, end_age: float) -> int:
    """Whole months between two ages, truncated. Never negative."""
    return max(0, int(math.floor((end_age - current_age) * 12)))


def clamp_number(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def lower_rank_percentile(sorted_values: Sequence[float], q: float) -> float:
    """
    Lower-nearest-rank order statistic: sorted_values[floor(n * q)].

    No interpolation. An empty sequence or an index past the end yields 0.
    sorted_values must already be ascending.
    """
    n = len(sorted_values)
    idx = int(math.floor(n * q))
    if n == 0 or idx < 0 or idx >= n:
        return 0.0
    return float(sorted_values[idx])
