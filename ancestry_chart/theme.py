"""
Theme and stylesheet for the Ancestry Chart Viewer.

The Qt stylesheet is assembled from a table of selector rules whose
values name entries of ``DARK_COLORS``.  ``apply_plot_style`` pushes
one of the matplotlib style dicts into rcParams.
"""

from .constants import DARK_COLORS

# (selector, {property: DARK_COLORS key or literal})
_DARK_RULES = (
    ("QMainWindow, QWidget",
     {"background-color": "bg", "color": "fg", "font-size": "13px"}),
    ("QPushButton",
     {"background-color": "bg_widget", "color": "fg",
      "border": "1px solid {border}", "border-radius": "4px",
      "padding": "6px 16px", "min-height": "24px"}),
    ("QPushButton:hover",
     {"background-color": "selection", "border-color": "accent"}),
    ("QPushButton:pressed",
     {"background-color": "accent", "color": "bg"}),
    ("QTextBrowser",
     {"background-color": "bg_input", "color": "fg",
      "border": "1px solid {border}", "border-radius": "4px"}),
    ("QScrollArea",
     {"border": "none"}),
    ("QMenuBar, QMenu",
     {"background-color": "bg_alt", "color": "fg"}),
    ("QMenu::item:selected",
     {"background-color": "selection"}),
    ("QStatusBar",
     {"background-color": "bg_alt", "color": "fg_dim"}),
    ("QSplitter::handle",
     {"background-color": "border"}),
)


def _resolve(value: str) -> str:
    if value in DARK_COLORS:
        return DARK_COLORS[value]
    return value.format(**DARK_COLORS)


def get_dark_stylesheet() -> str:
    """Qt stylesheet for the dark window theme."""
    blocks = []
    for selector, props in _DARK_RULES:
        body = "\n".join(
            f"    {name}: {_resolve(value)};" for name, value in props.items()
        )
        blocks.append(f"{selector} {{\n{body}\n}}")
    return "\n".join(blocks)


def apply_plot_style(style_dict: dict) -> None:
    """Apply a style dictionary to matplotlib rcParams.

    Parameters
    ----------
    style_dict : dict
        One of ``PLOT_STYLE_DARK`` or ``PLOT_STYLE_LIGHT``.
    """
    import matplotlib as mpl
    mpl.rcParams.update(style_dict)
