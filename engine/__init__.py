"""
Projection engine — deterministic monthly balance model + Monte Carlo simulator.
"""

from .projector import project, balance_path, balance_paths
from .simulator import simulate, run_trials, aggregate_trials

__all__ = ["project", "balance_path", "balance_paths", "simulate", "run_trials", "aggregate_trials"]
