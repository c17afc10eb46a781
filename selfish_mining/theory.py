"""
Closed-form selfish mining revenue from the Eyal-Sirer Markov analysis.

Used as the reference the Monte Carlo curves are checked against.
"""

from typing import Sequence
import numpy as np


def expected_relative_revenue(alpha: float, gamma: float) -> float:
    """
    Stationary relative revenue of a selfish pool.

        R = (a(1-a)^2 (4a + g(1-2a)) - a^3) / (1 - a(1 + (2-a)a))
    """
    numerator = alpha * (1 - alpha) ** 2 * (4 * alpha + gamma * (1 - 2 * alpha)) - alpha ** 3
    denominator = 1 - alpha * (1 + (2 - alpha) * alpha)
    return numerator / denominator


def profitability_threshold(gamma: float) -> float:
    """Smallest alpha for which selfish mining beats honest mining."""
    return (1 - gamma) / (3 - 2 * gamma)


def expected_matrix(alphas: Sequence[float], gammas: Sequence[float]) -> np.ndarray:
    """Analytic counterpart of a sweep's result matrix."""
    alphas = np.asarray(alphas, dtype=float)
    matrix = np.empty((len(alphas), 2 + len(gammas)))
    matrix[:, 0] = alphas
    matrix[:, 1] = alphas
    for col, gamma in enumerate(gammas, start=2):
        matrix[:, col] = [expected_relative_revenue(a, gamma) for a in alphas]
    return matrix
