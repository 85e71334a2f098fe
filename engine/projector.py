"""
Deterministic monthly balance projection for one fixed set of assumptions.

Month loop, starting from current_savings:
  - accumulation month: grow by the monthly return, then add the contribution
  - retirement month:   grow by the monthly return, then subtract the
                        inflation-adjusted withdrawal
  - balance is floored at 0 and the floored value is carried into next month,
    so a depleted trajectory stays at 0 and never recovers.

balance_paths() runs the loop over numpy arrays, one row per return/inflation
pair, so the simulator can advance every trial in one pass. project() is the
single-path view that wraps the arrays into MonthlyProjection rows.
"""

from __future__ import annotations

import logging
from typing import Tuple

import numpy as np

from core.config import FLEXIBLE_SPENDING_FACTOR
from core.schema import MonthlyProjection, RetirementInputs, RetirementProjection
from core.utils import annual_pct_to_monthly, horizon_months


def _withdrawal_for_month(
    retirement_spending: float,
    monthly_inflation: np.ndarray,
    monthly_return: np.ndarray,
    month: int,
    flexible_spending: bool,
) -> np.ndarray:
    # Inflation compounds from month 0 (today), not from the retirement date.
    spend = retirement_spending * (1.0 + monthly_inflation) ** month
    withdrawal = spend / 12.0
    if flexible_spending:
        withdrawal = np.where(monthly_return < 0, withdrawal * FLEXIBLE_SPENDING_FACTOR, withdrawal)
    return withdrawal


def balance_paths(
    inputs: RetirementInputs,
    annual_returns,
    annual_inflations,
    n_months: int,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Run the month recurrence for many (return, inflation) pairs at once.

    Every other field comes from `inputs`; the phase of a month depends only on
    the ages, so it is shared by all rows.

    Returns
    -------
    (balances, withdrawals), each shaped (n_paths, n_months).
    """
    monthly_return = annual_pct_to_monthly(np.asarray(annual_returns, dtype=float))
    monthly_inflation = annual_pct_to_monthly(np.asarray(annual_inflations, dtype=float))
    monthly_contribution = inputs.annual_contributions / 12.0
    n_months = max(0, int(n_months))

    balances = np.zeros((len(monthly_return), n_months))
    withdrawals = np.zeros((len(monthly_return), n_months))
    balance = np.full(len(monthly_return), float(inputs.current_savings))

    for month in range(n_months):
        if inputs.current_age + month / 12.0 >= inputs.retirement_age:
            withdrawal = _withdrawal_for_month(
                inputs.retirement_spending,
                monthly_inflation,
                monthly_return,
                month,
                inputs.flexible_spending,
            )
            balance = balance * (1.0 + monthly_return) - withdrawal
            withdrawals[:, month] = withdrawal
        else:
            balance = balance * (1.0 + monthly_return) + monthly_contribution

        balance = np.maximum(balance, 0.0)
        balances[:, month] = balance

    return balances, withdrawals


def balance_path(inputs: RetirementInputs) -> Tuple[np.ndarray, np.ndarray]:
    """Balances and withdrawals of one projection, as flat arrays."""
    balances, withdrawals = balance_paths(
        inputs,
        [inputs.annual_return],
        [inputs.annual_inflation],
        horizon_months(inputs.current_age, inputs.lifespan),
    )
    return balances[0], withdrawals[0]


def project(inputs: RetirementInputs) -> RetirementProjection:
    """
    Project the balance month by month from current_age to lifespan.

    Total over any input: a non-positive horizon gives an empty sequence and a
    nest egg of 0. Inputs are not validated here.
    """
    balances, withdrawals = balance_path(inputs)

    nest_egg = None
    rows = []
    for month, (balance, withdrawal) in enumerate(zip(balances, withdrawals)):
        age = inputs.current_age + month / 12.0
        is_retirement = age >= inputs.retirement_age

        if is_retirement and nest_egg is None:
            nest_egg = float(balance)

        rows.append(
            MonthlyProjection(
                month=month,
                age=age,
                balance=float(balance),
                is_retirement=is_retirement,
                withdrawal=float(withdrawal),
            )
        )

    logging.debug(
        f"Projected {len(rows)} months: nest egg {nest_egg or 0.0:,.0f}, "
        f"final balance {rows[-1].balance if rows else 0.0:,.0f}"
    )

    return RetirementProjection(
        nest_egg=nest_egg if nest_egg is not None else 0.0,
        monthly_withdrawal=inputs.retirement_spending / 12.0,
        monthly_projections=tuple(rows),
    )
