"""
Turn a SimulationResult into display-ready tables.

The engine reports one percentile row per month. Charts want that as a frame;
the summary table wants one row per year of age, with the year after the
portfolio first reaches the 4%-rule balance marked for highlighting.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import pandas as pd

from core.config import PERCENTILE_LEVELS, SAFE_WITHDRAWAL_MULTIPLE
from core.schema import SimulationResult
from core.utils import require_columns

BAND_COLUMNS = [label for label, _ in PERCENTILE_LEVELS]


def percentile_bands_frame(result: SimulationResult) -> pd.DataFrame:
    """Monthly percentile bands: month, age, p5..p95, sample_count."""
    return result.to_dataframe()


def safe_withdrawal_threshold(retirement_spending: float) -> float:
    """Balance at which the 4% rule says annual spending is sustainable."""
    return SAFE_WITHDRAWAL_MULTIPLE * retirement_spending


def highlight_age(result: SimulationResult, retirement_spending: float) -> Optional[int]:
    """
    Integer age of the year right after any band first reaches the 4%-rule balance.

    Returns None when no band ever gets there.
    """
    threshold = safe_withdrawal_threshold(retirement_spending)
    for row in result.monthly_percentiles:
        if any(getattr(row, label) >= threshold for label in BAND_COLUMNS):
            return int(np.floor(row.age)) + 1
    return None


def yearly_percentile_table(
    result: SimulationResult,
    *,
    retirement_spending: Optional[float] = None,
) -> pd.DataFrame:
    """
    One row per integer age, taken from the first month seen at that age.

    With retirement_spending given, a boolean `highlight` column marks the row
    returned by highlight_age().
    """
    bands = percentile_bands_frame(result)
    require_columns(bands, ["month", "age"] + BAND_COLUMNS)

    if len(bands) == 0:
        cols = ["year_age", "month"] + BAND_COLUMNS
        if retirement_spending is not None:
            cols.append("highlight")
        return pd.DataFrame(columns=cols)

    bands["year_age"] = np.floor(bands["age"]).astype(int)
    table = (
        bands.sort_values("month")
        .drop_duplicates(subset="year_age", keep="first")
        [["year_age", "month"] + BAND_COLUMNS]
        .reset_index(drop=True)
    )

    if retirement_spending is not None:
        target = highlight_age(result, retirement_spending)
        table["highlight"] = table["year_age"] == target if target is not None else False

    return table
