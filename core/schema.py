"""
Value types passed between the form layer, the engine and the reports.
All of them are frozen: the engine builds them once per call and never mutates.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional, Tuple

import pandas as pd

# Field order used by profile files and the form layer.
INPUT_FIELDS: Tuple[str, ...] = (
    "current_age",
    "retirement_age",
    "lifespan",
    "current_savings",
    "annual_contributions",
    "annual_return",
    "annual_inflation",
    "retirement_spending",
    "flexible_spending",
)

PROJECTION_COLUMNS: Tuple[str, ...] = (
    "month",
    "age",
    "balance",
    "withdrawal",
    "is_retirement",
)

PERCENTILE_COLUMNS: Tuple[str, ...] = (
    "month",
    "age",
    "p5",
    "p10",
    "p50",
    "p90",
    "p95",
    "sample_count",
)


@dataclass(frozen=True)
class RetirementInputs:
    """
    One set of planning assumptions.

    Ages are in years. annual_return and annual_inflation are percentages
    (10.4 means 10.4%/yr). retirement_spending is per year in today's dollars.
    The caller guarantees current_age < retirement_age < lifespan.
    """

    current_age: float
    retirement_age: float
    lifespan: float
    current_savings: float
    annual_contributions: float
    annual_return: float
    annual_inflation: float
    retirement_spending: float
    flexible_spending: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class MonthlyProjection:
    month: int
    age: float
    balance: float
    is_retirement: bool
    withdrawal: float = 0.0


@dataclass(frozen=True)
class RetirementProjection:
    nest_egg: float
    monthly_withdrawal: float
    monthly_projections: Tuple[MonthlyProjection, ...]

    @property
    def retirement_index(self) -> Optional[int]:
        """Index of the first retirement-phase month, or None."""
        for p in self.monthly_projections:
            if p.is_retirement:
                return p.month
        return None

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [
                {
                    "month": p.month,
                    "age": p.age,
                    "balance": p.balance,
                    "withdrawal": p.withdrawal,
                    "is_retirement": p.is_retirement,
                }
                for p in self.monthly_projections
            ],
            columns=list(PROJECTION_COLUMNS),
        )


@dataclass(frozen=True)
class MonthlyPercentiles:
    month: int
    age: float
    p5: float
    p10: float
    p50: float
    p90: float
    p95: float
    sample_count: int = 0


@dataclass(frozen=True)
class SimulationResult:
    """
    Aggregated Monte Carlo output.

    success_rate is a percentage in [0, 100]. monthly_percentiles has one entry
    per month of the unperturbed horizon; later months may rest on fewer
    samples when perturbed lifespans were shorter (see sample_count).
    """

    success_rate: float
    monthly_percentiles: Tuple[MonthlyPercentiles, ...]
    trial_count: int = 0

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [asdict(m) for m in self.monthly_percentiles],
            columns=list(PERCENTILE_COLUMNS),
        )
