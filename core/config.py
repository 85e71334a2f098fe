"""
Simulation configuration and fixed policy constants.

The perturbation half-widths are policy, not user settings: they live here as
module constants rather than on SimulationConfig.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_TRIAL_COUNT = 1000

# Uniform noise half-widths applied per trial
RETURN_SPREAD_PCT = 5.0       # annual return, percentage points
INFLATION_SPREAD_PCT = 1.0    # annual inflation, percentage points
LIFESPAN_SPREAD_YEARS = 5.0
MIN_RETIREMENT_YEARS = 10.0   # perturbed lifespan never cuts retirement below this

# Withdrawal multiplier in negative-return months when flexible spending is on
FLEXIBLE_SPENDING_FACTOR = 0.75

PERCENTILE_LEVELS: Tuple[Tuple[str, float], ...] = (
    ("p5", 0.05),
    ("p10", 0.10),
    ("p50", 0.50),
    ("p90", 0.90),
    ("p95", 0.95),
)

# 4% rule: a balance of 25x annual spending is treated as "safe"
SAFE_WITHDRAWAL_MULTIPLE = 25.0

# Success indicator cut-offs (percent)
SUCCESS_ON_TRACK = 80.0
SUCCESS_BORDERLINE = 60.0


@dataclass(frozen=True)
class SimulationConfig:
    trial_count: int = DEFAULT_TRIAL_COUNT

    # None keeps the ambient unseeded behaviour; any int makes runs repeatable
    seed: Optional[int] = None

    # >1 maps trials over a process pool; draws still happen in the caller
    workers: int = 1
