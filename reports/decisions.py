"""
Plan report — the handful of numbers a saver actually reads.

Answers:
  Q1: "How likely is the money to last?"       → success rate + band
  Q2: "What do I retire with?"                 → nest egg, accumulation-only estimate
  Q3: "What can I spend?"                      → first withdrawal, level annuity payout
  Q4: "When does the typical path run out?"    → median depletion age
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from core.config import SUCCESS_BORDERLINE, SUCCESS_ON_TRACK
from core.schema import RetirementInputs, RetirementProjection, SimulationResult
from core.utils import annual_pct_to_monthly
from engine.annuity import annuity_withdrawal, future_value

from .aggregator import highlight_age, safe_withdrawal_threshold


def success_band(success_rate: float) -> str:
    """Traffic-light bucket for the success indicator."""
    if success_rate >= SUCCESS_ON_TRACK:
        return "on_track"
    if success_rate >= SUCCESS_BORDERLINE:
        return "borderline"
    return "at_risk"


@dataclass
class PlanReport:
    """Structured plan summary."""
    success_rate: float
    success_band: str

    nest_egg: float
    accumulation_estimate: float  # closed-form FV, ignores the first retirement month

    monthly_withdrawal: float             # retirement_spending / 12, nominal
    first_withdrawal_nominal: float       # inflated amount at the first retirement month
    sustainable_monthly_withdrawal: float  # level payout that spends the nest egg by lifespan

    retirement_years: float
    safe_withdrawal_balance: float
    highlight_age: Optional[int]

    median_final_balance: float
    median_depletion_age: Optional[float]

    flags: List[str] = field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a display-friendly table."""
        rows = [
            {"Metric": "Success Probability", "Value": f"{self.success_rate:.1f}%", "Unit": ""},
            {"Metric": "Outlook", "Value": self.success_band.replace("_", " "), "Unit": ""},
            {"Metric": "Nest Egg at Retirement", "Value": f"{self.nest_egg:,.0f}", "Unit": "$"},
            {"Metric": "Accumulation Estimate", "Value": f"{self.accumulation_estimate:,.0f}", "Unit": "$"},
            {"Metric": "Monthly Withdrawal (nominal)",
             "Value": f"{self.monthly_withdrawal:,.0f}", "Unit": "$"},
            {"Metric": "First Withdrawal (nominal)",
             "Value": f"{self.first_withdrawal_nominal:,.0f}", "Unit": "$"},
            {"Metric": "Sustainable Monthly Withdrawal",
             "Value": f"{self.sustainable_monthly_withdrawal:,.0f}", "Unit": "$"},
            {"Metric": "Years of Retirement", "Value": f"{self.retirement_years:g}", "Unit": "years"},
            {"Metric": "4% Rule Balance", "Value": f"{self.safe_withdrawal_balance:,.0f}", "Unit": "$"},
            {"Metric": "Median Final Balance", "Value": f"{self.median_final_balance:,.0f}", "Unit": "$"},
            {"Metric": "Median Depletion Age",
             "Value": f"{self.median_depletion_age:.1f}" if self.median_depletion_age is not None else "N/A",
             "Unit": "years"},
        ]
        if self.flags:
            rows.append({"Metric": "FLAGS", "Value": " | ".join(self.flags), "Unit": ""})
        return pd.DataFrame(rows)


def generate_plan_report(
    inputs: RetirementInputs,
    projection: RetirementProjection,
    result: SimulationResult,
) -> PlanReport:
    """
    Build a PlanReport from one deterministic projection and one simulation.

    Both must come from the same inputs.
    """
    years_to_retirement = inputs.retirement_age - inputs.current_age
    retirement_years = inputs.lifespan - inputs.retirement_age

    accumulation_estimate = future_value(
        inputs.current_savings,
        inputs.annual_contributions / 12.0,
        inputs.annual_return,
        years_to_retirement,
    )
    sustainable_monthly, _ = annuity_withdrawal(
        projection.nest_egg, inputs.annual_return, retirement_years
    )

    idx = projection.retirement_index
    first_withdrawal = (
        projection.monthly_projections[idx].withdrawal if idx is not None else 0.0
    )

    bands = result.monthly_percentiles
    median_final = bands[-1].p50 if bands else 0.0
    median_depletion_age = next((b.age for b in bands if b.p50 <= 0), None)

    threshold = safe_withdrawal_threshold(inputs.retirement_spending)
    band = success_band(result.success_rate)

    flags = []
    if band == "at_risk":
        flags.append(f"LOW_SUCCESS: only {result.success_rate:.0f}% of trials last to lifespan")
    if median_depletion_age is not None:
        flags.append(f"MEDIAN_DEPLETES: median path runs out at age {median_depletion_age:.1f}")
    if projection.nest_egg < threshold:
        flags.append("BELOW_4PCT_RULE: nest egg is under 25x annual spending")
    if first_withdrawal > 0 and sustainable_monthly < first_withdrawal:
        flags.append("SPENDING_EXCEEDS_ANNUITY: first withdrawal exceeds level payout")

    return PlanReport(
        success_rate=result.success_rate,
        success_band=band,
        nest_egg=projection.nest_egg,
        accumulation_estimate=accumulation_estimate,
        monthly_withdrawal=projection.monthly_withdrawal,
        first_withdrawal_nominal=first_withdrawal,
        sustainable_monthly_withdrawal=sustainable_monthly,
        retirement_years=retirement_years,
        safe_withdrawal_balance=threshold,
        highlight_age=highlight_age(result, inputs.retirement_spending),
        median_final_balance=median_final,
        median_depletion_age=median_depletion_age,
        flags=flags,
    )


def first_withdrawal_in_todays_dollars(inputs: RetirementInputs, projection: RetirementProjection) -> float:
    """
    Deflate the first retirement withdrawal back to today's purchasing power.

    Uses the projector's own rule: monthly inflation compounded over the
    retirement month index. 0 when the projection never reaches retirement.
    """
    idx = projection.retirement_index
    if idx is None:
        return 0.0
    monthly_inflation = annual_pct_to_monthly(inputs.annual_inflation)
    return projection.monthly_projections[idx].withdrawal / (1.0 + monthly_inflation) ** idx
