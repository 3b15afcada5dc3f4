"""
Ancestry Chart Viewer v1.0.0

Turns the statistical summary table of an ancestry results page into a
pie chart of per-population mean proportions with their sample standard
deviation.  Only the populations that are significant enough to read are
shown, each with a perceptually distinct colour, and the chart can be
collapsed, reopened and saved as a PNG.
"""

APP_NAME = "Ancestry Chart Viewer"
APP_VERSION = "1.0.0"
APP_DATE = "2026-10-17"
__version__ = APP_VERSION
