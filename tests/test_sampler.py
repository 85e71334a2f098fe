"""Tests for the per-trial assumption sampler."""

from dataclasses import replace

import numpy as np
import pytest

from distributions.sampler import AssumptionSampler


def test_perturbations_stay_within_half_widths(growth_inputs):
    trials = AssumptionSampler(growth_inputs, 2000, rng=np.random.default_rng(1)).sample()

    assert trials.n_trials == 2000
    assert np.all(trials.annual_return >= 2.0) and np.all(trials.annual_return <= 12.0)
    assert np.all(trials.annual_inflation >= 1.5) and np.all(trials.annual_inflation <= 3.5)
    assert np.all(trials.lifespan >= 85.0) and np.all(trials.lifespan <= 95.0)


def test_negative_draws_are_floored_at_zero(growth_inputs, fixed_noise):
    inputs = replace(growth_inputs, annual_return=2.0, annual_inflation=0.5)
    rng = fixed_noise([-5.0, 1.0], [-1.0, 0.25], [0.0, 0.0])

    trials = AssumptionSampler(inputs, 2, rng=rng).sample()

    assert list(trials.annual_return) == [0.0, 3.0]
    assert list(trials.annual_inflation) == [0.0, 0.75]


def test_lifespan_never_below_retirement_plus_ten(growth_inputs):
    inputs = replace(growth_inputs, lifespan=76)
    trials = AssumptionSampler(inputs, 500, rng=np.random.default_rng(2)).sample()
    assert trials.lifespan.min() >= 75.0


def test_apply_only_touches_perturbed_fields(growth_inputs, fixed_noise):
    rng = fixed_noise([1.5], [-0.5], [3.0])
    trials = AssumptionSampler(growth_inputs, 1, rng=rng).sample()

    perturbed = trials.apply(growth_inputs, 0)

    assert perturbed.annual_return == pytest.approx(8.5)
    assert perturbed.annual_inflation == pytest.approx(2.0)
    assert perturbed.lifespan == pytest.approx(93.0)
    assert perturbed.current_savings == growth_inputs.current_savings
    assert perturbed.retirement_age == growth_inputs.retirement_age
    assert perturbed.flexible_spending == growth_inputs.flexible_spending


def test_unseeded_samplers_differ(growth_inputs):
    a = AssumptionSampler(growth_inputs, 100).sample()
    b = AssumptionSampler(growth_inputs, 100).sample()
    assert not np.array_equal(a.annual_return, b.annual_return)


def test_tables(growth_inputs):
    trials = AssumptionSampler(growth_inputs, 10, rng=np.random.default_rng(0)).sample()

    df = trials.to_dataframe()
    assert list(df.columns) == ["trial_id", "annual_return", "annual_inflation", "lifespan"]
    assert len(df) == 10

    summary = trials.summary()
    assert list(summary["Variable"]) == ["Annual Return (%)", "Annual Inflation (%)", "Lifespan (years)"]
    assert {"Mean", "Std", "P05", "P50", "P95"} <= set(summary.columns)
