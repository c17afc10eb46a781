"""
Selfish Mining Revenue Sweep
============================

Monte Carlo sweep of the selfish pool's relative revenue over its share of
hash power (alpha) for one or more tie propagation advantages (gamma).

The result matrix has one row per alpha point and columns
    alpha | honest mining (= alpha) | one column per gamma

Modes:
- scan:   gamma in {0, 0.5, 1}, the curves of Eyal & Sirer Figure 2
- single: one gamma supplied on the command line

Reference: Eyal & Sirer (2014), Section 4, Figure 2
"""

import argparse
import sys
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import numpy as np
from tabulate import tabulate

from .config import (
    ALPHA_CEILING,
    DEFAULT_EVENTS_PER_CELL,
    DEFAULT_SAMPLE_COUNT,
    ConfigurationRangeError,
    SweepConfig,
    describe_ranges,
)
from .output import PlottingError, plot_gnuplot, plot_matplotlib, write_data_file
from .race import CellSimulator, DegenerateCellError
from .sampler import UniformSampler
from .theory import expected_matrix, expected_relative_revenue, profitability_threshold


ON_DEGENERATE_RAISE = "raise"
ON_DEGENERATE_NAN = "nan"


class AllocationFailure(MemoryError):
    """The result matrix could not be allocated."""


def alpha_grid(sample_count: int) -> np.ndarray:
    """Alpha points i * (0.5 / n) for i in 0..n-1."""
    step = ALPHA_CEILING / sample_count
    return np.arange(sample_count) * step


def gamma_label(gamma: float) -> str:
    return f"gamma={gamma:.1f}" if round(gamma, 1) == gamma else f"gamma={gamma:g}"


@dataclass
class SweepResult:
    """Populated result matrix of a sweep."""

    config: SweepConfig
    matrix: np.ndarray
    degenerate_cells: List[Tuple[float, float]] = field(default_factory=list)

    @property
    def alphas(self) -> np.ndarray:
        return self.matrix[:, 0]

    @property
    def labels(self) -> List[str]:
        """Legend entries for columns 1..n."""
        return ["Honest mining"] + [gamma_label(g) for g in self.config.gamma_values]

    def column(self, gamma: float) -> np.ndarray:
        """Simulated relative revenue for `gamma`."""
        idx = list(self.config.gamma_values).index(gamma)
        return self.matrix[:, 2 + idx]


class SelfishMiningSweep:
    """
    Runs the single-cell simulator over the alpha grid for each gamma.

    One sampler stream is shared by the whole sweep and is never reseeded
    between cells; a seeded config therefore reproduces the matrix exactly.
    """

    def __init__(
        self,
        config: SweepConfig,
        sampler: Optional[UniformSampler] = None,
        on_degenerate: str = ON_DEGENERATE_RAISE,
        progress: bool = False,
    ):
        if on_degenerate not in (ON_DEGENERATE_RAISE, ON_DEGENERATE_NAN):
            raise ValueError(f"unknown degenerate-cell policy {on_degenerate!r}")
        self.config = config.validate()
        self.sampler = sampler if sampler is not None else UniformSampler(seed=config.seed)
        self.on_degenerate = on_degenerate
        self.progress = progress

    def _allocate(self) -> np.ndarray:
        try:
            return np.empty((self.config.sample_count, self.config.column_count))
        except MemoryError as exc:
            raise AllocationFailure(
                f"cannot allocate {self.config.sample_count} x "
                f"{self.config.column_count} result matrix"
            ) from exc

    def run(self) -> SweepResult:
        """
        Populate every cell of the result matrix.

        Raises:
            DegenerateCellError: a cell credited no revenue and the policy
                is "raise"
            AllocationFailure: the matrix could not be allocated
        """
        config = self.config
        matrix = self._allocate()
        alphas = alpha_grid(config.sample_count)
        matrix[:, 0] = alphas
        matrix[:, 1] = alphas  # honest mining

        result = SweepResult(config=config, matrix=matrix)
        simulator = CellSimulator(self.sampler)

        for idx, gamma in enumerate(config.gamma_values):
            col = 2 + idx
            if self.progress:
                print(f"Running {gamma_label(gamma)} sweep "
                      f"({config.sample_count:,} cells x {config.events_per_cell:,} events)...")
            report_every = max(1, config.sample_count // 10)
            for row, alpha in enumerate(alphas):
                if self.progress and row and row % report_every == 0:
                    print(f"  {row:,}/{config.sample_count:,} alpha points "
                          f"({100 * row // config.sample_count}%)")
                cell = simulator.simulate(float(alpha), gamma, config.events_per_cell)
                try:
                    matrix[row, col] = cell.relative_revenue
                except DegenerateCellError:
                    if self.on_degenerate == ON_DEGENERATE_RAISE:
                        raise
                    matrix[row, col] = np.nan
                    result.degenerate_cells.append((float(alpha), gamma))

        return result


def run_sweep(
    config: SweepConfig,
    sampler: Optional[UniformSampler] = None,
    on_degenerate: str = ON_DEGENERATE_RAISE,
) -> SweepResult:
    """Convenience wrapper around SelfishMiningSweep.run()."""
    return SelfishMiningSweep(config, sampler, on_degenerate).run()


def generate_comparison_table(result: SweepResult, rows: int = 11) -> str:
    """Simulated vs closed-form revenue at evenly spaced alpha points."""
    gammas = result.config.gamma_values
    headers = ["Alpha", "Honest"]
    for g in gammas:
        headers += [f"Sim {gamma_label(g)}", "Theory"]

    picks = np.unique(np.linspace(0, len(result.alphas) - 1, min(rows, len(result.alphas))).astype(int))
    table = []
    for row in picks:
        alpha = result.alphas[row]
        line = [f"{alpha:.3f}", f"{result.matrix[row, 1]:.3f}"]
        for idx, g in enumerate(gammas):
            line += [
                f"{result.matrix[row, 2 + idx]:.4f}",
                f"{expected_relative_revenue(alpha, g):.4f}",
            ]
        table.append(line)

    return tabulate(table, headers=headers, tablefmt="simple")


def _parse_positional(parser: argparse.ArgumentParser, params: List[str]) -> Tuple[float, int, int]:
    try:
        return float(params[0]), int(params[1]), int(params[2])
    except ValueError:
        parser.error(f"cannot parse gamma/sample_count/events from {params}")


def build_config(args: argparse.Namespace, parser: argparse.ArgumentParser) -> SweepConfig:
    """Map the parsed command line to a SweepConfig (not yet validated)."""
    if len(args.params) == 0:
        return SweepConfig.scan(
            DEFAULT_SAMPLE_COUNT if args.samples is None else args.samples,
            DEFAULT_EVENTS_PER_CELL if args.events is None else args.events,
            args.seed,
        )
    if len(args.params) == 3:
        if args.samples is not None or args.events is not None:
            parser.error("--samples/--events only apply to scan mode; "
                         "single mode takes them as positional arguments")
        gamma, sample_count, events = _parse_positional(parser, args.params)
        return SweepConfig.single(gamma, sample_count, events, args.seed)
    parser.error("expected either no positional arguments or exactly three: "
                 "gamma sample_count events_per_cell")


def main(argv: Optional[List[str]] = None) -> int:
    """Run the sweep, write the data file and plot."""
    parser = argparse.ArgumentParser(
        description="Selfish mining relative revenue, Monte Carlo sweep",
        usage="%(prog)s [options] [gamma sample_count events_per_cell]",
    )
    parser.add_argument(
        "params",
        nargs="*",
        help="None for scan mode (gamma = 0, 0.5, 1), or gamma sample_count events_per_cell"
    )
    parser.add_argument(
        "--samples", "-n",
        type=int,
        default=None,
        help=f"Alpha grid points in scan mode (default: {DEFAULT_SAMPLE_COUNT:,})"
    )
    parser.add_argument(
        "--events", "-e",
        type=int,
        default=None,
        help=f"Block discoveries per cell in scan mode (default: {DEFAULT_EVENTS_PER_CELL:,})"
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducibility (default: unseeded)"
    )
    parser.add_argument(
        "--output", "-o",
        default="data.txt",
        help="Data file path (default: data.txt)"
    )
    parser.add_argument(
        "--plot",
        choices=["matplotlib", "gnuplot", "none"],
        default="matplotlib",
        help="Plot backend (default: matplotlib)"
    )
    parser.add_argument(
        "--plot-file",
        default="plot.png",
        help="Plot image path (default: plot.png)"
    )
    parser.add_argument(
        "--allow-degenerate",
        action="store_true",
        help="Record cells with no credited blocks as nan instead of aborting"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print simulated vs closed-form revenue table"
    )

    args = parser.parse_args(argv)
    config = build_config(args, parser)

    try:
        config.validate()
    except ConfigurationRangeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print(describe_ranges(), file=sys.stderr)
        return 2

    print("Selfish Mining Monte Carlo")
    print("==========================")
    print(f"Mode: {config.mode}")
    print(f"Alpha points: {config.sample_count:,} on [0, {ALPHA_CEILING})")
    print(f"Gamma: {', '.join(str(g) for g in config.gamma_values)}")
    print(f"Events per cell: {config.events_per_cell:,}")
    print(f"Seed: {config.seed if config.seed is not None else 'unseeded'}")
    print()

    on_degenerate = ON_DEGENERATE_NAN if args.allow_degenerate else ON_DEGENERATE_RAISE
    try:
        result = SelfishMiningSweep(config, on_degenerate=on_degenerate, progress=True).run()
    except DegenerateCellError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print("Increase events per cell or pass --allow-degenerate.", file=sys.stderr)
        return 1
    except AllocationFailure as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        write_data_file(result.matrix, args.output)
    except OSError as exc:
        print(f"Error: cannot write data file {args.output}: {exc}", file=sys.stderr)
        return 1
    print(f"Wrote {args.output}")

    try:
        if args.plot == "matplotlib":
            plot_matplotlib(result.matrix, result.labels, args.plot_file)
            print(f"Wrote {args.plot_file}")
        elif args.plot == "gnuplot":
            plot_gnuplot(args.output, result.labels, args.plot_file)
            print(f"Wrote {args.plot_file}")
    except PlottingError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print()

    if result.degenerate_cells:
        print(f"⚠ {len(result.degenerate_cells)} degenerate cell(s) recorded as nan")
        print()

    tolerance = 0.02

    theory = expected_matrix(result.alphas, config.gamma_values)

    print("Verification against closed form:")
    for idx, gamma in enumerate(config.gamma_values):
        simulated = result.matrix[:, 2 + idx]
        expected = theory[:, 2 + idx]
        finite = np.isfinite(simulated)
        if not finite.any():
            print(f"  ⚠ {gamma_label(gamma)}: no finite cells")
            continue
        max_diff = float(np.max(np.abs(simulated[finite] - expected[finite])))
        status = "✓" if max_diff < tolerance else "⚠"
        print(f"  {status} {gamma_label(gamma)}: max |sim - theory| = {max_diff:.4f}, "
              f"profitable above alpha = {profitability_threshold(gamma):.3f}")

    if args.verbose:
        print()
        print("Relative pool revenue: simulation vs closed form")
        print("=" * 70)
        print(generate_comparison_table(result))

    return 0


if __name__ == "__main__":
    sys.exit(main())
