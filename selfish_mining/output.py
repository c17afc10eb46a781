"""
Result sink: data file and plots for a finished sweep.

The data file is whitespace delimited, one row per alpha point, columns in
matrix order. Both plotters read the same columns.
"""

import shutil
import subprocess
from typing import Sequence

import numpy as np


CURVE_COLORS = ["grey", "red", "green", "blue", "orange", "purple"]


class PlottingError(RuntimeError):
    """The plotting backend could not produce an image."""


def write_data_file(matrix: np.ndarray, path: str = "data.txt") -> str:
    """Write the result matrix as space separated `%f` columns."""
    np.savetxt(path, np.asarray(matrix, dtype=float), fmt="%f", delimiter=" ")
    return path


def read_data_file(path: str) -> np.ndarray:
    """Load a data file back as a 2-D matrix."""
    return np.loadtxt(path, ndmin=2)


def plot_matplotlib(
    matrix: np.ndarray,
    labels: Sequence[str],
    path: str = "plot.png",
) -> str:
    """
    Render curves 1..n against column 0 to a PNG.

    Args:
        matrix: Result matrix, column 0 is alpha
        labels: One legend entry per curve column
        path: Output image
    """
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    matrix = np.asarray(matrix, dtype=float)
    fig, ax = plt.subplots(figsize=(8, 6))
    for col, label in enumerate(labels, start=1):
        ax.plot(
            matrix[:, 0], matrix[:, col],
            linewidth=2,
            color=CURVE_COLORS[(col - 1) % len(CURVE_COLORS)],
            label=label,
        )
    ax.set_xlabel("Pool size", fontsize=14)
    ax.set_ylabel("Relative pool revenue", fontsize=14)
    ax.set_xticks(np.arange(0.0, 0.51, 0.1))
    ax.set_yticks(np.arange(0.0, 1.01, 0.2))
    ax.grid(True, linewidth=1.5, alpha=0.4)
    ax.legend(loc="upper left")
    fig.tight_layout()
    try:
        fig.savefig(path)
    except OSError as exc:
        raise PlottingError(f"cannot write plot {path}: {exc}") from exc
    finally:
        plt.close(fig)
    return path


def gnuplot_script(data_path: str, labels: Sequence[str], path: str = "plot.png") -> str:
    """gnuplot commands drawing every curve column of `data_path`."""
    curves = ", ".join(
        f"'{data_path}' u 1:{col + 1} with lines lw 2 "
        f"lc rgb '{CURVE_COLORS[(col - 1) % len(CURVE_COLORS)]}' title '{label}'"
        for col, label in enumerate(labels, start=1)
    )
    return "\n".join([
        "set term pngcairo enhanced font 'Arial,14'",
        f"set output '{path}'",
        "set size 1,1",
        "set xlabel 'Pool size'",
        "set ylabel 'Relative pool revenue'",
        "set xtics 0.1",
        "set ytics 0.2",
        "set grid lw 1.5",
        "set key left top",
        f"plot {curves}",
        "",
    ])


def plot_gnuplot(data_path: str, labels: Sequence[str], path: str = "plot.png") -> str:
    """Pipe the plot script into a `gnuplot` process."""
    executable = shutil.which("gnuplot")
    if executable is None:
        raise PlottingError("gnuplot executable not found on PATH")
    proc = subprocess.run(
        [executable],
        input=gnuplot_script(data_path, labels, path),
        text=True,
        capture_output=True,
    )
    if proc.returncode != 0:
        raise PlottingError(f"gnuplot exited with {proc.returncode}: {proc.stderr.strip()}")
    return path
