"""
Tests for config.py.
"""

import numpy as np
import pytest

from selfish_mining.config import (
    MAX_SAMPLE_COUNT, SCAN_GAMMAS, SCAN_MODE, SINGLE_MODE,
    ConfigurationRangeError, SweepConfig, describe_ranges, validate_all_params,
)


class TestSweepConfig:

    def test_scan_defaults(self):
        config = SweepConfig.scan()
        assert config.gamma_values == SCAN_GAMMAS
        assert config.mode == SCAN_MODE
        assert config.column_count == 5

    def test_single_mode(self):
        config = SweepConfig.single(0.3, sample_count=10, events_per_cell=100, seed=1)
        assert config.gamma_values == (0.3,)
        assert config.mode == SINGLE_MODE
        assert config.column_count == 3
        assert config.seed == 1

    def test_validate_returns_config(self):
        config = SweepConfig.single(0.5, 1, 0)
        assert config.validate() is config

    @pytest.mark.parametrize("config", [
        SweepConfig.single(-0.1, 10, 10),
        SweepConfig.single(1.01, 10, 10),
        SweepConfig.single(0.5, 0, 10),
        SweepConfig.single(0.5, MAX_SAMPLE_COUNT + 1, 10),
        SweepConfig.single(0.5, 10, -1),
        SweepConfig.single(0.5, True, 10),
        SweepConfig(10, (), 10),
    ])
    def test_rejects_out_of_range(self, config):
        with pytest.raises(ConfigurationRangeError):
            config.validate()

    def test_reports_every_problem(self):
        with pytest.raises(ConfigurationRangeError) as exc_info:
            SweepConfig.single(2.0, 0, -5).validate()
        message = str(exc_info.value)
        assert "gamma" in message
        assert "sample count" in message
        assert "events per cell" in message

    def test_upper_bound_accepted(self):
        SweepConfig.scan(MAX_SAMPLE_COUNT, 0).validate()


def test_describe_ranges_lists_bounds():
    text = describe_ranges()
    assert "0 <= gamma <= 1" in text
    assert f"{MAX_SAMPLE_COUNT:,}" in text


def test_default_params_valid():
    assert validate_all_params()


def test_numpy_integers_accepted():
    config = SweepConfig.scan(np.int64(5), np.int32(10))
    assert config.validate() is config
