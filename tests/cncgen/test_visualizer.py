"""Tests for cncgen/visualizer.py."""
import os

import matplotlib.pyplot as plt
import pytest

from cncgen.models import Circle, Point
from cncgen.moves import feed_move, rapid
from cncgen.visualizer import plot_moves, save_plot_preview, trace_moves


@pytest.fixture
def simple_moves():
    return [
        rapid(z=1.0),
        rapid(x=-0.5, y=0.0),
        feed_move(100.0, z=-0.1),
        feed_move(100.0, x=0.5, y=0.0),
        feed_move(100.0, x=0.5, y=0.5),
        feed_move(100.0, z=1.0),
    ]


class TestTraceMoves:
    """Tests for move tracing."""

    def test_runs(self, simple_moves):
        runs = trace_moves(simple_moves)

        assert [style for style, _ in runs] == ['rapid', 'cut']
        assert runs[0][1].tolist() == [[0.0, 0.0], [-0.5, 0.0]]
        assert runs[1][1].tolist() == [[-0.5, 0.0], [0.5, 0.0], [0.5, 0.5]]

    def test_feed_above_stock(self):
        runs = trace_moves([feed_move(100.0, x=1.0, y=1.0)])
        assert runs[0][0] == 'feed'

    def test_sparse_axes_keep_position(self):
        runs = trace_moves([rapid(x=2.0, y=3.0), rapid(x=4.0)])
        assert runs[0][1].tolist() == [[0.0, 0.0], [2.0, 3.0], [4.0, 3.0]]

    def test_no_xy_motion(self):
        assert trace_moves([rapid(z=1.0), feed_move(10.0, z=-1.0)]) == []


class TestPlotMoves:
    """Tests for the matplotlib preview."""

    def test_plot_returns_figure(self, simple_moves):
        fig = plot_moves(simple_moves, Circle(Point(0.0, 0.0), 1.0), show=False)
        ax = fig.axes[0]
        assert len(ax.lines) == 2
        assert len(ax.patches) == 1
        plt.close(fig)

    def test_save_plot_preview(self, simple_moves, tmp_path):
        filename = save_plot_preview(simple_moves, "dial", str(tmp_path))
        assert filename == os.path.join(str(tmp_path), "dial_preview.png")
        assert os.path.getsize(filename) > 0
