"""
Selfish Mining Simulation Package
=================================

Monte Carlo estimate of the revenue share captured by a selfish mining pool
(Eyal & Sirer block withholding) as a function of its hash power share.

Modules:
- config: Sweep parameters, ranges and the random generator factory
- sampler: Seedable uniform draws on [0, 1)
- race: Race state machine and single-cell simulator
- theory: Closed-form revenue for comparison
- sweep: Alpha/gamma sweep and command line entry point
- output: Data file and plots
"""

from .config import (
    RANDOM_SEED,
    DEFAULT_SAMPLE_COUNT,
    DEFAULT_EVENTS_PER_CELL,
    SCAN_GAMMAS,
    ConfigurationRangeError,
    SweepConfig,
    get_rng,
)
from .sampler import UniformSampler
from .race import CellResult, CellSimulator, DegenerateCellError, RaceState, simulate_cell
from .sweep import AllocationFailure, SelfishMiningSweep, SweepResult, alpha_grid, run_sweep

__version__ = "1.0.0"
