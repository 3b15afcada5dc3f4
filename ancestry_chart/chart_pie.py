"""
Ancestry pie chart for the Ancestry Chart Viewer.

One wedge per selected population, sized by its mean proportion.  The
legend (on the right by default) carries ``name (mean% ± std)``; the
hover detail gives the same numbers to two decimals.
"""

from typing import List, Optional, Sequence

from matplotlib.figure import Figure

from .constants import (
    CHART_TITLE, LEGEND_POSITION, DARK_COLORS, WEDGE_EDGE_COLOR,
    WEDGE_EDGE_WIDTH, EXPORT_TEXT_COLOR, EXPORT_BG_COLOR,
)
from .data_model import CategoryStat, ChartDataset, PieChartSpec


# legend loc / bbox_to_anchor per position
_LEGEND_PLACEMENT = {
    'right':  ('center left', (1.0, 0.5)),
    'left':   ('center right', (0.0, 0.5)),
    'top':    ('lower center', (0.5, 1.05)),
    'bottom': ('upper center', (0.5, -0.05)),
}


def format_label(stat: CategoryStat) -> str:
    """Legend label, e.g. ``"Irish (42.5% ± 1.2)"``."""
    return f"{stat.name} ({stat.mean:.1f}% ± {stat.std_dev:.1f})"


def format_tooltip(stat: CategoryStat) -> List[str]:
    """Two-line hover detail for one wedge."""
    return [
        f"{stat.name}: {stat.mean:.2f}%",
        f"Std Dev: ± {stat.std_dev:.2f}%",
    ]


def build_pie_spec(
    dataset: ChartDataset,
    colors: Sequence[str],
    *,
    title: str = CHART_TITLE,
    legend_position: str = LEGEND_POSITION,
) -> PieChartSpec:
    """Turn a dataset and its colours into a declarative pie spec."""
    if len(colors) != len(dataset):
        raise ValueError(
            f"Need one colour per population: {len(dataset)} populations, "
            f"{len(colors)} colours"
        )
    entries = tuple(dataset)

    def tooltip(index: int) -> List[str]:
        return format_tooltip(entries[index])

    return PieChartSpec(
        labels=[format_label(s) for s in entries],
        values=[s.mean for s in entries],
        colors=list(colors),
        title=title,
        legend_position=legend_position,
        tooltip_formatter=tooltip,
    )


def render_pie(
    fig: Figure,
    spec: PieChartSpec,
    *,
    for_export: bool = False,
) -> list:
    """Render *spec* on *fig* and return the wedge patches.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Figure to draw on (will be cleared).
    spec : PieChartSpec
    for_export : bool
        If ``True``, use light-theme text colours.
    """
    fig.clf()
    ax = fig.add_subplot(111)

    text_color = EXPORT_TEXT_COLOR if for_export else DARK_COLORS['fg_bright']
    bg_color = EXPORT_BG_COLOR if for_export else DARK_COLORS['bg_alt']
    fig.set_facecolor(bg_color)
    ax.set_facecolor(bg_color)

    if not spec.values:
        ax.text(0.5, 0.5, 'No populations to display',
                transform=ax.transAxes, ha='center', va='center',
                color=text_color)
        ax.set_axis_off()
        return []

    wedges, *_ = ax.pie(
        spec.values,
        colors=spec.colors,
        startangle=90,
        counterclock=False,
        wedgeprops=dict(edgecolor=WEDGE_EDGE_COLOR,
                        linewidth=WEDGE_EDGE_WIDTH),
    )
    ax.set_aspect('equal')
    ax.set_title(spec.title, fontsize=16, fontweight='bold',
                 color=text_color)

    loc, anchor = _LEGEND_PLACEMENT[spec.legend_position]
    legend = ax.legend(
        wedges, spec.labels,
        loc=loc, bbox_to_anchor=anchor,
        fontsize=12, frameon=False,
        labelspacing=0.8,
        handlelength=1.0, handleheight=1.0,
    )
    for text in legend.get_texts():
        text.set_color(text_color)

    fig.tight_layout(pad=1.5)
    return wedges


def wedge_at(wedges: list, event) -> Optional[int]:
    """Index of the wedge under a mouse *event*, or ``None``."""
    for index, wedge in enumerate(wedges):
        hit, _ = wedge.contains(event)
        if hit:
            return index
    return None
