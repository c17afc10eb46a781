"""
Tests for theory.py closed forms.
"""

import numpy as np
import pytest

from selfish_mining.theory import (
    expected_matrix, expected_relative_revenue, profitability_threshold,
)


class TestExpectedRelativeRevenue:

    def test_zero_pool_earns_nothing(self):
        for gamma in (0.0, 0.5, 1.0):
            assert expected_relative_revenue(0.0, gamma) == 0.0

    def test_known_value(self):
        assert expected_relative_revenue(0.4, 0.5) == pytest.approx(0.1808 / 0.344)

    def test_increases_with_gamma(self):
        assert (expected_relative_revenue(0.3, 0.0)
                < expected_relative_revenue(0.3, 0.5)
                < expected_relative_revenue(0.3, 1.0))

    @pytest.mark.parametrize("gamma", [0.0, 0.25, 0.5, 0.75])
    def test_threshold_is_break_even(self, gamma):
        alpha = profitability_threshold(gamma)
        assert expected_relative_revenue(alpha, gamma) == pytest.approx(alpha)


class TestProfitabilityThreshold:

    def test_reference_values(self):
        assert profitability_threshold(0.0) == pytest.approx(1 / 3)
        assert profitability_threshold(0.5) == pytest.approx(0.25)
        assert profitability_threshold(1.0) == 0.0


class TestExpectedMatrix:

    def test_shape_and_reference_columns(self):
        alphas = [0.0, 0.1, 0.2]
        matrix = expected_matrix(alphas, [0.0, 1.0])
        assert matrix.shape == (3, 4)
        assert np.array_equal(matrix[:, 0], alphas)
        assert np.array_equal(matrix[:, 1], alphas)
        assert matrix[2, 3] == pytest.approx(expected_relative_revenue(0.2, 1.0))
