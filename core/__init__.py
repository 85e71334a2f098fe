"""
Core package — value types, configuration, and shared numeric helpers.
No business logic lives here.
"""

from .schema import (
    INPUT_FIELDS,
    MonthlyPercentiles,
    MonthlyProjection,
    RetirementInputs,
    RetirementProjection,
    SimulationResult,
)
from .config import SimulationConfig
from .utils import annual_pct_to_monthly, horizon_months, lower_rank_percentile

__all__ = [
    "INPUT_FIELDS",
    "MonthlyPercentiles",
    "MonthlyProjection",
    "RetirementInputs",
    "RetirementProjection",
    "SimulationResult",
    "SimulationConfig",
    "annual_pct_to_monthly",
    "horizon_months",
    "lower_rank_percentile",
]
