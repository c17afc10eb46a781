"""
Selfish Mining Simulation Configuration
=======================================

Central configuration for the Monte Carlo selfish-mining sweep.

The alpha axis is sampled on [0, 0.5): selfish mining is only analysed for a
minority pool. Gamma is the share of honest miners that build on the pool's
block during a tie.

Reference: Eyal & Sirer, "Majority is not Enough: Bitcoin Mining is
Vulnerable" (2014), Section 4
"""

from dataclasses import dataclass
from numbers import Integral
from typing import Optional, Tuple
import numpy as np


# =============================================================================
# REPRODUCIBILITY
# =============================================================================

RANDOM_SEED = 42  # Seed used by tests and `--seed` examples


# =============================================================================
# SWEEP PARAMETERS
# =============================================================================

DEFAULT_SAMPLE_COUNT = 1_000        # Points on the alpha axis
MAX_SAMPLE_COUNT = 10_000           # Upper bound on the alpha grid resolution
DEFAULT_EVENTS_PER_CELL = 1_000_000  # Block discoveries per (alpha, gamma)

ALPHA_CEILING = 0.5                 # Alpha grid covers [0, ALPHA_CEILING)
SCAN_GAMMAS: Tuple[float, ...] = (0.0, 0.5, 1.0)

SCAN_MODE = "scan"
SINGLE_MODE = "single"


class ConfigurationRangeError(ValueError):
    """A configuration value lies outside its documented range."""


def describe_ranges() -> str:
    """Human readable list of the accepted parameter ranges."""
    return (
        "Parameter ranges:\n"
        "  gamma:           0 <= gamma <= 1\n"
        f"  sample count:    1 <= n <= {MAX_SAMPLE_COUNT:,}\n"
        "  events per cell: events >= 0"
    )


@dataclass(frozen=True)
class SweepConfig:
    """Parameters for one sweep over the alpha grid."""

    sample_count: int = DEFAULT_SAMPLE_COUNT
    gamma_values: Tuple[float, ...] = SCAN_GAMMAS
    events_per_cell: int = DEFAULT_EVENTS_PER_CELL
    seed: Optional[int] = None

    @classmethod
    def scan(
        cls,
        sample_count: int = DEFAULT_SAMPLE_COUNT,
        events_per_cell: int = DEFAULT_EVENTS_PER_CELL,
        seed: Optional[int] = None,
    ) -> "SweepConfig":
        """Scan mode: the reference gamma triple {0, 0.5, 1}."""
        return cls(sample_count, SCAN_GAMMAS, events_per_cell, seed)

    @classmethod
    def single(
        cls,
        gamma: float,
        sample_count: int = DEFAULT_SAMPLE_COUNT,
        events_per_cell: int = DEFAULT_EVENTS_PER_CELL,
        seed: Optional[int] = None,
    ) -> "SweepConfig":
        """Single-run mode: one externally supplied gamma."""
        return cls(sample_count, (gamma,), events_per_cell, seed)

    @property
    def mode(self) -> str:
        return SCAN_MODE if tuple(self.gamma_values) == SCAN_GAMMAS else SINGLE_MODE

    @property
    def column_count(self) -> int:
        """alpha, honest reference, then one column per gamma."""
        return 2 + len(self.gamma_values)

    def validate(self) -> "SweepConfig":
        """
        Check every field against its range.

        Raises:
            ConfigurationRangeError: listing each offending field
        """
        problems = []
        if isinstance(self.sample_count, bool) or not isinstance(self.sample_count, Integral):
            problems.append(f"sample count must be an integer, got {self.sample_count!r}")
        elif not 1 <= self.sample_count <= MAX_SAMPLE_COUNT:
            problems.append(
                f"sample count {self.sample_count} outside [1, {MAX_SAMPLE_COUNT}]"
            )

        if not self.gamma_values:
            problems.append("at least one gamma value is required")
        for gamma in self.gamma_values:
            if not 0.0 <= gamma <= 1.0:
                problems.append(f"gamma {gamma} outside [0, 1]")

        if isinstance(self.events_per_cell, bool) or not isinstance(self.events_per_cell, Integral):
            problems.append(f"events per cell must be an integer, got {self.events_per_cell!r}")
        elif self.events_per_cell < 0:
            problems.append(f"events per cell {self.events_per_cell} is negative")

        if problems:
            raise ConfigurationRangeError("; ".join(problems))
        return self


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def get_rng(seed: Optional[int] = RANDOM_SEED) -> np.random.Generator:
    """Get a random number generator; `seed=None` draws fresh OS entropy."""
    return np.random.default_rng(seed)


def validate_all_params() -> bool:
    """Validate the default configurations."""
    SweepConfig.scan().validate()
    SweepConfig.single(0.5).validate()
    assert DEFAULT_SAMPLE_COUNT <= MAX_SAMPLE_COUNT, "Default grid exceeds maximum"
    assert all(0.0 <= g <= 1.0 for g in SCAN_GAMMAS), "Scan gamma out of range"
    return True


if __name__ == "__main__":
    validate_all_params()
    print("✓ All parameters validated successfully")
    print(f"  - Alpha grid: {DEFAULT_SAMPLE_COUNT:,} points on [0, {ALPHA_CEILING})")
    print(f"  - Scan gammas: {', '.join(str(g) for g in SCAN_GAMMAS)}")
    print(f"  - Events per cell: {DEFAULT_EVENTS_PER_CELL:,}")
