"""
Closed-form savings and withdrawal math used around the engine.

Unlike the month loop in projector.py, these formulas divide by the monthly
rate, so each one checks for a zero rate first.
"""

from __future__ import annotations

import math
from typing import Tuple

from core.utils import annual_pct_to_monthly


def future_value(
    current_savings: float,
    monthly_contribution: float,
    annual_return_pct: float,
    years: float,
) -> float:
    """Lump sum plus end-of-month contributions compounded monthly for `years`."""
    months = max(0, int(math.floor(years * 12)))
    monthly_rate = annual_pct_to_monthly(annual_return_pct)

    if months == 0:
        return current_savings

    if monthly_rate == 0:
        return current_savings + monthly_contribution * months

    growth = (1 + monthly_rate) ** months
    lump = current_savings * growth
    contributions = monthly_contribution * ((growth - 1) / monthly_rate)
    return lump + contributions


def annuity_withdrawal(
    nest_egg: float,
    annual_return_pct: float,
    years: float,
) -> Tuple[float, float]:
    """
    Level payment that draws nest_egg to zero over `years` (at least one month).

    Returns (monthly, annual).
    """
    months = max(1, int(math.floor(years * 12)))
    monthly_rate = annual_pct_to_monthly(annual_return_pct)

    if nest_egg <= 0:
        return 0.0, 0.0

    if monthly_rate == 0:
        monthly = nest_egg / months
        return monthly, monthly * 12

    denominator = 1 - (1 + monthly_rate) ** (-months)
    monthly = 0.0 if denominator == 0 else nest_egg * monthly_rate / denominator
    return monthly, monthly * 12


def adjust_to_today(nominal: float, annual_inflation_pct: float, years: float) -> float:
    """Deflate a future nominal amount into today's dollars."""
    factor = (1 + annual_inflation_pct / 100) ** max(0.0, years)
    if factor == 0:
        return nominal
    return nominal / factor
