"""
Tests for the Qt stylesheet builder and matplotlib style helper.
"""

import matplotlib as mpl

from ancestry_chart.constants import DARK_COLORS, PLOT_STYLE_DARK
from ancestry_chart.theme import apply_plot_style, get_dark_stylesheet


class TestDarkStylesheet:

    def test_colours_resolved(self):
        css = get_dark_stylesheet()
        assert "QPushButton {" in css
        assert f"background-color: {DARK_COLORS['bg']};" in css
        assert f"border: 1px solid {DARK_COLORS['border']};" in css
        assert "{border}" not in css

    def test_every_block_closed(self):
        css = get_dark_stylesheet()
        assert css.count("{") == css.count("}")


class TestApplyPlotStyle:

    def test_updates_rcparams(self):
        with mpl.rc_context():
            apply_plot_style(PLOT_STYLE_DARK)
            assert mpl.rcParams['figure.facecolor'] == DARK_COLORS['bg_alt']
            assert mpl.rcParams['text.color'] == DARK_COLORS['fg_bright']
            assert mpl.rcParams['axes.titlesize'] == 16
