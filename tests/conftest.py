"""Pytest configuration and shared fixtures for the engine test suite."""

import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.schema import RetirementInputs


class FixedNoise:
    """Stands in for numpy's Generator: returns queued noise arrays in call order.

    Once the queue is empty every draw is zero noise.
    """

    def __init__(self, *draws):
        self.draws = list(draws)
        self.calls = []

    def uniform(self, low, high, size=None):
        self.calls.append((low, high, size))
        if self.draws:
            return np.asarray(self.draws.pop(0), dtype=float)
        return np.zeros(size)


@pytest.fixture
def scenario_inputs():
    """No growth, no inflation: 42 → 65 → 90, spending 150k/yr."""
    return RetirementInputs(
        current_age=42,
        retirement_age=65,
        lifespan=90,
        current_savings=300000,
        annual_contributions=12000,
        annual_return=0,
        annual_inflation=0,
        retirement_spending=150000,
        flexible_spending=False,
    )


@pytest.fixture
def growth_inputs():
    """Comfortable plan that survives to lifespan under the point estimate."""
    return RetirementInputs(
        current_age=40,
        retirement_age=65,
        lifespan=90,
        current_savings=500000,
        annual_contributions=20000,
        annual_return=7.0,
        annual_inflation=2.5,
        retirement_spending=60000,
        flexible_spending=False,
    )


@pytest.fixture
def zero_noise():
    return FixedNoise()


@pytest.fixture
def fixed_noise():
    """Factory for FixedNoise with queued draws (return, inflation, lifespan)."""
    return FixedNoise
