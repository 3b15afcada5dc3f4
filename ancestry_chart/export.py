"""
PNG export for the Ancestry Chart Viewer.

The chart on screen uses the dark GUI theme; saved images get a white
background and dark text.  ``_light_export_look`` switches the figure
for the duration of one ``savefig`` and undoes every change afterwards,
also when writing fails.  The hover tooltip is hidden while saving.
"""

import contextlib
import os

from matplotlib.figure import Figure
from matplotlib.text import Annotation

from .constants import (
    EXPORT_DPI, EXPORT_WIDTH_INCHES, EXPORT_FILENAME, PLOT_STYLE_LIGHT,
)


def _themed_texts(fig: Figure):
    """Title, legend and message texts (not the hover tooltip)."""
    for ax in fig.get_axes():
        yield ax.title
        for text in ax.texts:
            if not isinstance(text, Annotation):
                yield text
        legend = ax.get_legend()
        if legend is not None:
            yield from legend.get_texts()


@contextlib.contextmanager
def _light_export_look(fig: Figure, width_inches: float):
    """Temporarily resize *fig* and give it the light export theme."""
    light = PLOT_STYLE_LIGHT
    undo = []

    def change(setter, old, new):
        undo.append((setter, old))
        setter(new)

    try:
        width, height = fig.get_size_inches()
        scale = width_inches / width if width > 0 else 1.0
        change(lambda size: fig.set_size_inches(*size),
               (width, height), (width_inches, height * scale))
        change(fig.set_facecolor, fig.get_facecolor(),
               light['figure.facecolor'])
        for ax in fig.get_axes():
            change(ax.set_facecolor, ax.get_facecolor(),
                   light['axes.facecolor'])
            for text in ax.texts:
                if isinstance(text, Annotation):
                    change(text.set_visible, text.get_visible(), False)
        for text in _themed_texts(fig):
            change(text.set_color, text.get_color(), light['text.color'])
        yield fig
    finally:
        for setter, old in reversed(undo):
            setter(old)


def _write_png(fig: Figure, target, dpi: int, width_inches: float) -> None:
    with _light_export_look(fig, width_inches):
        fig.savefig(
            target,
            format='png',
            dpi=dpi,
            bbox_inches='tight',
            facecolor=fig.get_facecolor(),
            edgecolor='none',
            pad_inches=0.1,
        )


def export_png(
    fig: Figure,
    filepath: str,
    *,
    dpi: int = EXPORT_DPI,
    width_inches: float = EXPORT_WIDTH_INCHES,
) -> str:
    """Save the chart as a light-theme PNG.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
    filepath : str
        Output file path; ``.png`` is appended when missing.  A
        directory path receives the default ``ancestry-chart.png``.
    dpi : int
    width_inches : float
        Image width; the height keeps the on-screen aspect ratio.

    Returns
    -------
    str
        The path actually written.
    """
    if os.path.isdir(filepath):
        filepath = os.path.join(filepath, EXPORT_FILENAME)
    if not filepath.lower().endswith('.png'):
        filepath += '.png'
    _write_png(fig, filepath, dpi, width_inches)
    return filepath
