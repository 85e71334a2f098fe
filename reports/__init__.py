"""
Reports — tables, 4%-rule highlighting, and the plan summary.
"""

from .aggregator import (
    highlight_age,
    percentile_bands_frame,
    safe_withdrawal_threshold,
    yearly_percentile_table,
)
from .decisions import PlanReport, generate_plan_report, success_band

__all__ = [
    "highlight_age",
    "percentile_bands_frame",
    "safe_withdrawal_threshold",
    "yearly_percentile_table",
    "PlanReport",
    "generate_plan_report",
    "success_band",
]
