"""
Tests for output.py: data file format and plot drivers.
"""

import numpy as np
import pytest

from selfish_mining import output
from selfish_mining.output import (
    PlottingError, gnuplot_script, plot_gnuplot, plot_matplotlib,
    read_data_file, write_data_file,
)


@pytest.fixture
def matrix():
    return np.array([
        [0.0, 0.0, 0.0],
        [0.25, 0.25, 0.2123456789],
    ])


class TestDataFile:

    def test_format(self, matrix, tmp_path):
        path = write_data_file(matrix, str(tmp_path / "data.txt"))
        lines = open(path).read().splitlines()
        assert lines == [
            "0.000000 0.000000 0.000000",
            "0.250000 0.250000 0.212346",
        ]

    def test_reads_back(self, matrix, tmp_path):
        path = write_data_file(matrix, str(tmp_path / "data.txt"))
        loaded = read_data_file(path)
        assert loaded.shape == (2, 3)
        assert loaded[1, 2] == pytest.approx(0.212346)

    def test_single_row(self, tmp_path):
        path = write_data_file(np.zeros((1, 5)), str(tmp_path / "data.txt"))
        assert read_data_file(path).shape == (1, 5)


class TestGnuplot:

    def test_script_plots_each_curve(self):
        script = gnuplot_script("data.txt", ["Honest mining", "gamma=0.0", "gamma=0.5"])
        assert "u 1:2" in script
        assert "u 1:4" in script
        assert "title 'gamma=0.5'" in script
        assert "set output 'plot.png'" in script

    def test_missing_executable(self, monkeypatch):
        monkeypatch.setattr(output.shutil, "which", lambda name: None)
        with pytest.raises(PlottingError):
            plot_gnuplot("data.txt", ["Honest mining"])


class TestMatplotlib:

    def test_writes_png(self, matrix, tmp_path):
        path = plot_matplotlib(matrix, ["Honest mining", "gamma=0.5"], str(tmp_path / "plot.png"))
        assert (tmp_path / "plot.png").stat().st_size > 0
        assert path.endswith("plot.png")

    def test_unwritable_path(self, matrix, tmp_path):
        with pytest.raises(PlottingError):
            plot_matplotlib(matrix, ["Honest mining", "gamma=0.5"],
                            str(tmp_path / "missing" / "plot.png"))
