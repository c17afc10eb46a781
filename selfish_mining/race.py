"""
Selfish Mining Race Simulation
==============================

Monte Carlo model of the block race between a selfish pool and the honest
miners, following the Eyal-Sirer state machine.

Each simulated event is one block discovery: with probability alpha the
pool finds it and keeps it private, otherwise the honest miners find it and
publish. Revenue is only credited once a block is settled on the main chain.

Reference: Eyal & Sirer (2014), Algorithm 1 and Figure 1
"""

import argparse
from dataclasses import dataclass
from typing import List, Optional

from .config import ConfigurationRangeError
from .sampler import UniformSampler


class DegenerateCellError(ArithmeticError):
    """No revenue was credited in a cell, so the ratio is undefined."""

    def __init__(self, alpha: float, gamma: float, events: int):
        self.alpha = alpha
        self.gamma = gamma
        self.events = events
        super().__init__(
            f"no blocks credited after {events} events "
            f"(alpha={alpha:.6f}, gamma={gamma:.3f}); relative revenue undefined"
        )


class RaceState:
    """
    Mutable state of one simulated race.

    lead:        private chain length minus public chain length
    fork_length: private blocks since the chains were last level; only
                 meaningful while lead == 0
    """

    __slots__ = ("lead", "fork_length", "pool_revenue", "others_revenue")

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.lead = 0
        self.fork_length = 0
        self.pool_revenue = 0
        self.others_revenue = 0

    @property
    def credited(self) -> int:
        return self.pool_revenue + self.others_revenue

    def strategic_block_found(self) -> None:
        """The selfish pool finds a block and withholds it."""
        self.fork_length += 1
        # Checked before the lead increment: a tie the pool was holding
        # one block into is won outright.
        if self.lead == 0 and self.fork_length == 2:
            self.pool_revenue += 2
            self.fork_length = 0
        else:
            self.lead += 1

    def others_block_found(self, gamma: float, sampler: UniformSampler) -> None:
        """The honest miners find and publish a block."""
        lead = self.lead
        if lead == 0:
            if self.fork_length == 0:
                self.others_revenue += 1
            else:
                self.resolve_tie(gamma, sampler)
                self.fork_length = 0
        elif lead == 1:
            # Chains level; the tie is settled by the next block.
            self.lead = 0
        elif lead == 2:
            # Pool publishes everything and overrides the public chain.
            self.pool_revenue += 2
            self.lead = 0
            self.fork_length = 0
        else:
            # Pool publishes one block and stays at least two ahead.
            self.pool_revenue += 1
            self.lead = lead - 1

    def resolve_tie(self, gamma: float, sampler: UniformSampler) -> None:
        """
        Settle a tie that the honest miners just broke.

        With probability gamma their block extends the pool's branch, so the
        pool keeps its block; otherwise the pool's block is orphaned.
        """
        if sampler.next() < gamma:
            self.others_revenue += 1
            self.pool_revenue += 1
        else:
            self.others_revenue += 2


@dataclass
class CellResult:
    """Final counters of one (alpha, gamma) cell."""

    alpha: float
    gamma: float
    events: int
    pool_revenue: int
    others_revenue: int

    @property
    def credited(self) -> int:
        return self.pool_revenue + self.others_revenue

    @property
    def relative_revenue(self) -> float:
        """Pool share of all credited blocks."""
        if self.credited == 0:
            raise DegenerateCellError(self.alpha, self.gamma, self.events)
        return self.pool_revenue / self.credited


class CellSimulator:
    """
    Drives a RaceState for a fixed number of block discoveries.

    The sampler is shared by every cell the simulator runs; only the race
    state is reset between cells.
    """

    def __init__(self, sampler: UniformSampler):
        self.sampler = sampler
        self.state = RaceState()

    def simulate(self, alpha: float, gamma: float, events: int) -> CellResult:
        """
        Run `events` Bernoulli(alpha) discoveries at a fixed (alpha, gamma).

        Raises:
            ConfigurationRangeError: alpha, gamma or events out of range
        """
        if not 0.0 <= alpha < 1.0:
            raise ConfigurationRangeError(f"alpha {alpha} outside [0, 1)")
        if not 0.0 <= gamma <= 1.0:
            raise ConfigurationRangeError(f"gamma {gamma} outside [0, 1]")
        if events < 0:
            raise ConfigurationRangeError(f"events per cell {events} is negative")

        state = self.state
        state.reset()
        draw = self.sampler.next
        pool_found = state.strategic_block_found
        others_found = state.others_block_found
        sampler = self.sampler

        for _ in range(events):
            if draw() < alpha:
                pool_found()
            else:
                others_found(gamma, sampler)

        return CellResult(
            alpha=alpha,
            gamma=gamma,
            events=events,
            pool_revenue=state.pool_revenue,
            others_revenue=state.others_revenue,
        )


def simulate_cell(
    alpha: float,
    gamma: float,
    events: int,
    sampler: UniformSampler,
) -> float:
    """Relative pool revenue for one cell; raises DegenerateCellError."""
    return CellSimulator(sampler).simulate(alpha, gamma, events).relative_revenue


def main(argv: Optional[List[str]] = None):
    """Simulate one (alpha, gamma) cell and print its counters."""
    parser = argparse.ArgumentParser(
        description="Selfish mining race for a single (alpha, gamma) cell"
    )
    parser.add_argument("alpha", type=float, help="Pool share of hash power, 0 <= alpha < 1")
    parser.add_argument("gamma", type=float, help="Tie propagation advantage, 0 <= gamma <= 1")
    parser.add_argument(
        "--events", "-e",
        type=int,
        default=1_000_000,
        help="Block discoveries to simulate (default: 1,000,000)"
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducibility (default: unseeded)"
    )

    args = parser.parse_args(argv)

    sim = CellSimulator(UniformSampler(seed=args.seed))
    try:
        result = sim.simulate(args.alpha, args.gamma, args.events)
        ratio = result.relative_revenue
    except (ConfigurationRangeError, DegenerateCellError) as exc:
        parser.exit(2 if isinstance(exc, ConfigurationRangeError) else 1, f"Error: {exc}\n")

    print(f"alpha={result.alpha} gamma={result.gamma} events={result.events:,}")
    print(f"  Pool revenue:     {result.pool_revenue:,}")
    print(f"  Others revenue:   {result.others_revenue:,}")
    print(f"  Relative revenue: {ratio:.6f}")


if __name__ == "__main__":
    main()
