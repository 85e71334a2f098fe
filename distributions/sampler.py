"""
Assumption sampler — draws one perturbed (return, inflation, lifespan) set per trial.

Input:  the user's RetirementInputs + a random source
Output: (N × 3) table of perturbed assumptions, one row per trial

Each row is one plausible future around the user's point estimate:
  Trial 1: return=9.1%,  inflation=2.8%, lifespan=87.4  (slightly worse)
  Trial 2: return=13.9%, inflation=1.7%, lifespan=93.2  (good markets, long life)
  Trial 3: return=0.0%,  inflation=3.3%, lifespan=88.0  (return floored at zero)

Method:
  Independent uniform noise centred on the input value, fixed half-widths
  (core.config). No correlation between the three variables.
  - Return:    max(0, r + U(-5, +5))
  - Inflation: max(0, i + U(-1, +1))
  - Lifespan:  max(retirement_age + 10, L + U(-5, +5))

The random source only needs numpy's Generator.uniform(low, high, size)
signature, so tests can pass a stub that returns fixed noise.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

import numpy as np
import pandas as pd

from core.config import (
    INFLATION_SPREAD_PCT,
    LIFESPAN_SPREAD_YEARS,
    MIN_RETIREMENT_YEARS,
    RETURN_SPREAD_PCT,
)
from core.schema import RetirementInputs


@dataclass
class SampledTrials:
    """
    Output of sampling: N trials of (annual_return, annual_inflation, lifespan).

    This is the table the simulator walks, one projection per row.
    """
    annual_return: np.ndarray     # shape (n_trials,), percent
    annual_inflation: np.ndarray  # shape (n_trials,), percent
    lifespan: np.ndarray          # shape (n_trials,), years

    @property
    def n_trials(self) -> int:
        return len(self.annual_return)

    def get_trial(self, trial_idx: int) -> dict:
        """Return assumptions for a single trial as a dict."""
        return {
            "annual_return": float(self.annual_return[trial_idx]),
            "annual_inflation": float(self.annual_inflation[trial_idx]),
            "lifespan": float(self.lifespan[trial_idx]),
        }

    def apply(self, inputs: RetirementInputs, trial_idx: int) -> RetirementInputs:
        """Copy of inputs with this trial's perturbed fields; everything else unchanged."""
        return replace(inputs, **self.get_trial(trial_idx))

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame({
            "trial_id": np.arange(self.n_trials),
            "annual_return": self.annual_return,
            "annual_inflation": self.annual_inflation,
            "lifespan": self.lifespan,
        })

    def summary(self) -> pd.DataFrame:
        """Percentile summary of sampled trials."""
        pcts = [0.05, 0.25, 0.50, 0.75, 0.95]
        rows = []
        for name, arr in [("Annual Return (%)", self.annual_return),
                          ("Annual Inflation (%)", self.annual_inflation),
                          ("Lifespan (years)", self.lifespan)]:
            row = {"Variable": name, "Mean": np.mean(arr), "Std": np.std(arr),
                   "Min": np.min(arr), "Max": np.max(arr)}
            for p in pcts:
                row[f"P{int(p*100):02d}"] = np.percentile(arr, p * 100)
            rows.append(row)
        return pd.DataFrame(rows)


class AssumptionSampler:
    """
    Generates N perturbed assumption sets around one RetirementInputs.

    Usage:
        sampler = AssumptionSampler(inputs, n_trials=1000)
        trials = sampler.sample()
        # trials.annual_return → array of 1000 perturbed returns
        # trials.apply(inputs, 0) → inputs for trial 0

    With rng=None an unseeded numpy Generator is used, so two samplers over the
    same inputs give different draws.
    """

    def __init__(
        self,
        inputs: RetirementInputs,
        n_trials: int,
        rng: Optional[np.random.Generator] = None,
    ):
        self.inputs = inputs
        self.n_trials = n_trials
        self.rng = rng if rng is not None else np.random.default_rng()

    def sample(self) -> SampledTrials:
        x = self.inputs
        n = self.n_trials

        # Draw order is fixed (return, inflation, lifespan) so a seeded
        # generator reproduces the same trials.
        return_noise = np.asarray(
            self.rng.uniform(-RETURN_SPREAD_PCT, RETURN_SPREAD_PCT, size=n), dtype=float
        )
        inflation_noise = np.asarray(
            self.rng.uniform(-INFLATION_SPREAD_PCT, INFLATION_SPREAD_PCT, size=n), dtype=float
        )
        lifespan_noise = np.asarray(
            self.rng.uniform(-LIFESPAN_SPREAD_YEARS, LIFESPAN_SPREAD_YEARS, size=n), dtype=float
        )

        annual_return = np.maximum(0.0, x.annual_return + return_noise)
        annual_inflation = np.maximum(0.0, x.annual_inflation + inflation_noise)
        lifespan = np.maximum(x.retirement_age + MIN_RETIREMENT_YEARS, x.lifespan + lifespan_noise)

        return SampledTrials(
            annual_return=annual_return,
            annual_inflation=annual_inflation,
            lifespan=lifespan,
        )
