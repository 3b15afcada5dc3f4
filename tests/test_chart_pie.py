"""
Tests for the pie chart spec and its matplotlib rendering.
"""

import math

import pytest
from matplotlib.backend_bases import MouseEvent
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from ancestry_chart.chart_pie import (
    build_pie_spec, format_label, format_tooltip, render_pie, wedge_at,
)
from ancestry_chart.colors import generate_colors
from ancestry_chart.constants import CHART_TITLE
from ancestry_chart.data_model import CategoryStat, ChartDataset


def _figure():
    fig = Figure(figsize=(8, 6))
    FigureCanvasAgg(fig)
    return fig


class TestFormatting:

    def test_label(self):
        assert format_label(CategoryStat("Irish", 42.5, 1.2)) == "Irish (42.5% ± 1.2)"
        assert format_label(CategoryStat("British", 35.0, 0.8)) == "British (35.0% ± 0.8)"

    def test_label_rounds_to_one_decimal(self):
        assert format_label(CategoryStat("X", 7.26, 0.04)) == "X (7.3% ± 0.0)"

    def test_tooltip(self):
        lines = format_tooltip(CategoryStat("Irish", 42.5, 1.2))
        assert lines == ["Irish: 42.50%", "Std Dev: ± 1.20%"]


class TestBuildPieSpec:

    def test_spec_fields(self, dataset):
        spec = build_pie_spec(dataset, generate_colors(len(dataset)))
        assert spec.kind == "pie"
        assert spec.values == [42.5, 35.0, 12.0]
        assert spec.labels[0] == "Irish (42.5% ± 1.2)"
        assert spec.title == CHART_TITLE
        assert spec.legend_position == "right"
        assert len(spec.colors) == 3

    def test_tooltip_formatter_indexes_dataset(self, dataset):
        spec = build_pie_spec(dataset, generate_colors(3))
        assert spec.tooltip_formatter(1) == ["British: 35.00%", "Std Dev: ± 0.80%"]

    def test_colour_count_mismatch(self, dataset):
        with pytest.raises(ValueError, match="one colour per population"):
            build_pie_spec(dataset, generate_colors(2))


class TestRenderPie:

    def test_one_wedge_per_population(self, dataset):
        fig = _figure()
        spec = build_pie_spec(dataset, generate_colors(3))
        wedges = render_pie(fig, spec)
        assert len(wedges) == 3
        ax = fig.get_axes()[0]
        assert ax.get_title() == CHART_TITLE
        legend_texts = [t.get_text() for t in ax.get_legend().get_texts()]
        assert legend_texts == spec.labels

    def test_rerender_replaces_axes(self, dataset):
        fig = _figure()
        spec = build_pie_spec(dataset, generate_colors(3))
        render_pie(fig, spec)
        render_pie(fig, spec)
        assert len(fig.get_axes()) == 1

    @pytest.mark.parametrize("position", ["left", "top", "bottom"])
    def test_legend_positions(self, dataset, position):
        fig = _figure()
        spec = build_pie_spec(dataset, generate_colors(3), legend_position=position)
        render_pie(fig, spec)
        assert fig.get_axes()[0].get_legend() is not None

    def test_empty_spec_shows_message(self):
        fig = _figure()
        spec = build_pie_spec(ChartDataset(), [])
        assert render_pie(fig, spec) == []
        texts = [t.get_text() for t in fig.get_axes()[0].texts]
        assert texts == ["No populations to display"]


class TestWedgeAt:

    def test_hit_and_miss(self, dataset):
        fig = _figure()
        wedges = render_pie(fig, build_pie_spec(dataset, generate_colors(3)))
        fig.canvas.draw()

        wedge = wedges[0]
        theta = math.radians((wedge.theta1 + wedge.theta2) / 2)
        cx, cy = wedge.center
        r = wedge.r * 0.5
        x, y = wedge.axes.transData.transform(
            (cx + r * math.cos(theta), cy + r * math.sin(theta))
        )
        inside = MouseEvent('motion_notify_event', fig.canvas, x, y)
        assert wedge_at(wedges, inside) == 0

        corner = MouseEvent('motion_notify_event', fig.canvas, 1, 1)
        assert wedge_at(wedges, corner) is None
