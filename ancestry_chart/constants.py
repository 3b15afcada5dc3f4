"""
Constants for the Ancestry Chart Viewer.

Centralises the results-page structure markers, relevance thresholds,
colour palettes, chart text, export settings and matplotlib styles.
"""

# ── Results-page structure (class names used by the source table) ────────
TABLE_WRAPPER_CLASS = "multitablewrapper"
HEADER_CELL_CLASS = "multisources"
ROW_LABEL_CLASS = "multitargets"
RESULT_CELL_CLASS = "multiresult"
AVERAGE_ROW_LABEL = "Average"
HEADER_ROW_INDEX = 0

# ── Relevance tiers (minimum mean, in percent) ──────────────────────────
PRIMARY_THRESHOLD = 1.0
FALLBACK_THRESHOLD = 0.1

# ── Colour allocation ────────────────────────────────────────────────────
# Twelve mutually distinct base colours, used in order.
BASE_PALETTE = [
    '#FF6384', '#36A2EB', '#FFCE56', '#4BC0C0', '#9966FF', '#FF9F40',
    '#FF6B6B', '#4ECDC4', '#45B7D1', '#96CEB4', '#FECA57', '#FF9FF3',
]
GOLDEN_RATIO_CONJUGATE = 0.618033988749895
SATURATION_CYCLE = (65, 75, 85)       # percent, indexed by step % 3
LIGHTNESS_CYCLE = (50, 58, 66, 74)    # percent, indexed by step % 4

# ── Chart text ───────────────────────────────────────────────────────────
CHART_TITLE = "Genetic Ancestry Distribution"
LEGEND_POSITION = "right"
WEDGE_EDGE_COLOR = '#ffffff'
WEDGE_EDGE_WIDTH = 2.0
TOGGLE_LABEL_OPEN = "Open Chart"
TOGGLE_LABEL_CLOSE = "Close Chart"
SAVE_LABEL = "Save Chart"
RUN_LABEL = "Run"

# ── Font family fallback chain ──────────────────────────────────────────
FONT_FAMILIES = [
    "Segoe UI", "DejaVu Sans", "Liberation Sans", "Noto Sans",
    "Ubuntu", "Helvetica", "Arial", "sans-serif",
]

# ── Dark Catppuccin-inspired GUI colour palette ──────────────────────────
DARK_COLORS = {
    'bg':           '#1e1e2e',
    'bg_alt':       '#252536',
    'bg_widget':    '#2a2a3c',
    'bg_input':     '#333348',
    'fg':           '#cdd6f4',
    'fg_dim':       '#9399b2',
    'fg_bright':    '#ffffff',
    'accent':       '#89b4fa',
    'border':       '#45475a',
    'selection':    '#45475a',
    'tooltip_bg':   '#000000cc',
}

# ── Export settings ──────────────────────────────────────────────────────
EXPORT_FILENAME = "ancestry-chart.png"
EXPORT_DPI = 300
EXPORT_WIDTH_INCHES = 8.0
EXPORT_TEXT_COLOR = '#333333'
EXPORT_BG_COLOR = '#ffffff'

# ── Figure size for the chart container (inches at 100 dpi = 800×600) ───
FIGURE_SIZE = (8.0, 6.0)

# ── Matplotlib dark-theme style dict (GUI preview) ──────────────────────
PLOT_STYLE_DARK = {
    'figure.facecolor':  DARK_COLORS['bg_alt'],
    'axes.facecolor':    DARK_COLORS['bg_alt'],
    'text.color':        DARK_COLORS['fg_bright'],
    'axes.titlesize':    16,
    'axes.titleweight':  'bold',
    'legend.fontsize':   12,
    'legend.facecolor':  DARK_COLORS['bg_widget'],
    'legend.edgecolor':  DARK_COLORS['border'],
}

# ── Matplotlib light-theme style dict (export) ──────────────────────────
PLOT_STYLE_LIGHT = {
    'figure.facecolor':  '#ffffff',
    'axes.facecolor':    '#ffffff',
    'text.color':        '#1a1a2e',
    'legend.facecolor':  '#ffffff',
    'legend.edgecolor':  '#999999',
}
