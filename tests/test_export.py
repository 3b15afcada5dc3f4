"""
Tests for PNG export and theme restoration.
"""

import os

import pytest
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.colors import to_rgba
from matplotlib.figure import Figure

from ancestry_chart.chart_pie import build_pie_spec, render_pie
from ancestry_chart.colors import generate_colors
from ancestry_chart.constants import DARK_COLORS, EXPORT_FILENAME
from ancestry_chart.export import export_png

PNG_MAGIC = b'\x89PNG\r\n\x1a\n'


@pytest.fixture
def chart_figure(dataset):
    fig = Figure(figsize=(8, 6))
    FigureCanvasAgg(fig)
    render_pie(fig, build_pie_spec(dataset, generate_colors(len(dataset))))
    return fig


class TestExportPng:

    def test_writes_png(self, chart_figure, tmp_path):
        written = export_png(chart_figure, str(tmp_path / "chart.png"), dpi=50)
        assert written == str(tmp_path / "chart.png")
        with open(written, 'rb') as fh:
            assert fh.read(8) == PNG_MAGIC

    def test_appends_suffix(self, chart_figure, tmp_path):
        written = export_png(chart_figure, str(tmp_path / "chart"), dpi=50)
        assert written.endswith("chart.png")
        assert os.path.isfile(written)

    def test_directory_gets_default_name(self, chart_figure, tmp_path):
        written = export_png(chart_figure, str(tmp_path), dpi=50)
        assert written == os.path.join(str(tmp_path), EXPORT_FILENAME)
        assert os.path.isfile(written)

    def test_screen_theme_restored(self, chart_figure, tmp_path):
        ax = chart_figure.get_axes()[0]
        face_before = chart_figure.get_facecolor()
        size_before = tuple(chart_figure.get_size_inches())
        legend_before = [t.get_color() for t in ax.get_legend().get_texts()]

        export_png(chart_figure, str(tmp_path / "c.png"), dpi=50, width_inches=4)

        assert chart_figure.get_facecolor() == face_before
        assert tuple(chart_figure.get_size_inches()) == pytest.approx(size_before)
        assert [t.get_color() for t in ax.get_legend().get_texts()] == legend_before
        assert to_rgba(ax.title.get_color()) == to_rgba(DARK_COLORS['fg_bright'])

    def test_unwritable_path_raises_and_restores(self, chart_figure, tmp_path):
        face_before = chart_figure.get_facecolor()
        target = tmp_path / "missing_dir" / "chart.png"
        with pytest.raises(OSError):
            export_png(chart_figure, str(target), dpi=50)
        assert chart_figure.get_facecolor() == face_before


class TestHoverTooltipOnExport:

    def test_tooltip_hidden_while_saving_then_restored(self, chart_figure, monkeypatch, tmp_path):
        ax = chart_figure.get_axes()[0]
        tooltip = ax.annotate("Irish: 42.50%", xy=(0, 0))
        tooltip.set_visible(True)
        seen = []
        original_savefig = chart_figure.savefig

        def spy(*args, **kwargs):
            seen.append(tooltip.get_visible())
            return original_savefig(*args, **kwargs)

        monkeypatch.setattr(chart_figure, "savefig", spy)
        export_png(chart_figure, str(tmp_path / "tip.png"), dpi=40)
        assert seen == [False]
        assert tooltip.get_visible()

