"""
Monte Carlo simulator — perturbs assumptions, re-projects, aggregates.

Two stages:
  1. Map:    run_trials() projects every sampled trial and keeps its balances
             inside the original (unperturbed) horizon.
  2. Reduce: aggregate_trials() collects samples per month, sorts them, picks
             lower-rank percentiles and tallies successes.

The map advances whole blocks of trials together through the projector's
array recurrence. Only the horizon differs between trials, so each block is
projected over the original horizon and every trial is then cut to its own
length. With SimulationConfig.workers > 1 the blocks go to a process pool.
All random draws happen before the map, in the calling process, so the worker
count never changes the result for a given random stream.

Without a seed or an injected rng the results are not reproducible between
calls. That is expected behaviour.
"""

from __future__ import annotations

import logging
import multiprocessing as mp
from typing import List, Optional, Sequence, Tuple

import numpy as np

from core.config import PERCENTILE_LEVELS, SimulationConfig
from core.schema import MonthlyPercentiles, RetirementInputs, SimulationResult
from core.utils import horizon_months, lower_rank_percentile
from distributions.sampler import AssumptionSampler, SampledTrials

from .projector import balance_paths


def _block_balances(args: Tuple[RetirementInputs, np.ndarray, np.ndarray, int]) -> np.ndarray:
    """Balances of one block of trials over the original horizon."""
    inputs, annual_returns, annual_inflations, horizon = args
    balances, _ = balance_paths(inputs, annual_returns, annual_inflations, horizon)
    return balances


def run_trials(
    inputs: RetirementInputs,
    trials: SampledTrials,
    *,
    workers: int = 1,
) -> List[np.ndarray]:
    """
    Project every sampled trial.

    Returns one array per trial. An array is shorter than the original horizon
    when that trial's perturbed lifespan was shorter; it is never longer.
    """
    horizon = horizon_months(inputs.current_age, inputs.lifespan)
    lengths = [min(horizon, horizon_months(inputs.current_age, life)) for life in trials.lifespan]

    blocks = [idx for idx in np.array_split(np.arange(trials.n_trials), max(1, workers)) if len(idx)]
    jobs = [
        (inputs, trials.annual_return[idx], trials.annual_inflation[idx], horizon)
        for idx in blocks
    ]

    if workers > 1 and len(jobs) > 1:
        logging.debug(f"Mapping {trials.n_trials} trials over {workers} workers")
        with mp.Pool(workers) as pool:
            parts = pool.map(_block_balances, jobs)
    else:
        parts = [_block_balances(job) for job in jobs]

    balances = np.vstack(parts) if parts else np.zeros((0, horizon))
    return [balances[i, :n] for i, n in enumerate(lengths)]


def aggregate_trials(
    inputs: RetirementInputs,
    trajectories: Sequence[np.ndarray],
) -> SimulationResult:
    """
    Reduce per-trial trajectories into percentile bands and a success rate.

    A trial succeeds when its last recorded balance is strictly positive.
    Months past a trial's own length simply get one fewer sample.
    """
    n_trials = len(trajectories)
    if n_trials < 1:
        raise ValueError("Need at least one trial to aggregate.")

    horizon = horizon_months(inputs.current_age, inputs.lifespan)

    # Trials laid out as rows; a row is only filled up to that trial's length,
    # so sample counts differ between months.
    lengths = np.array([min(len(traj), horizon) for traj in trajectories], dtype=int)
    grid = np.zeros((n_trials, horizon))
    successes = 0

    for i, traj in enumerate(trajectories):
        recorded = np.asarray(traj[: lengths[i]], dtype=float)
        grid[i, : lengths[i]] = recorded
        if len(recorded) > 0 and recorded[-1] > 0:
            successes += 1

    bands = []
    for month in range(horizon):
        ordered = np.sort(grid[lengths > month, month])
        picks = {label: lower_rank_percentile(ordered, q) for label, q in PERCENTILE_LEVELS}
        bands.append(
            MonthlyPercentiles(
                month=month,
                age=inputs.current_age + month / 12.0,
                sample_count=len(ordered),
                **picks,
            )
        )

    return SimulationResult(
        success_rate=100.0 * successes / n_trials,
        monthly_percentiles=tuple(bands),
        trial_count=n_trials,
    )


def simulate(
    inputs: RetirementInputs,
    trial_count: Optional[int] = None,
    *,
    rng: Optional[np.random.Generator] = None,
    config: Optional[SimulationConfig] = None,
) -> SimulationResult:
    """
    Run the Monte Carlo simulation.

    Parameters
    ----------
    inputs : RetirementInputs
        Unperturbed assumptions; the caller has already validated them.
    trial_count : int, optional
        Number of trials. Defaults to config.trial_count.
    rng : numpy Generator-like, optional
        Random source. Anything with Generator.uniform(low, high, size) works.
        Takes precedence over config.seed.
    config : SimulationConfig, optional
        Seed and worker settings.

    Returns
    -------
    SimulationResult with one MonthlyPercentiles per month of the original horizon.
    """
    cfg = config or SimulationConfig()
    n_trials = cfg.trial_count if trial_count is None else int(trial_count)
    if n_trials < 1:
        raise ValueError(f"trial_count must be a positive integer, got {trial_count}.")

    if rng is None:
        rng = np.random.default_rng(cfg.seed)

    trials = AssumptionSampler(inputs, n_trials, rng=rng).sample()
    trajectories = run_trials(inputs, trials, workers=cfg.workers)
    result = aggregate_trials(inputs, trajectories)

    logging.info(
        f"Simulated {n_trials} trials over {len(result.monthly_percentiles)} months: "
        f"success rate {result.success_rate:.1f}%"
    )
    return result
