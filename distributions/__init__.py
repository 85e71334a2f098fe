"""
Distributions package — per-trial perturbation of planning assumptions.
"""

from .sampler import AssumptionSampler, SampledTrials

__all__ = [
    "AssumptionSampler",
    "SampledTrials",
]
