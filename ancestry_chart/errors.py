"""
Failure taxonomy for the Ancestry Chart Viewer.

All of these are reported rather than fatal: the controller catches
them at its entry points and leaves the host window usable.
"""


class ChartError(Exception):
    """Base class for every reported chart failure."""

    kind = "chart"


class ExtractionError(ChartError, ValueError):
    """The results table, its header row or its Average row is missing."""

    kind = "extraction"


class NoDisplayableDataError(ChartError):
    """No population passed either relevance tier."""

    kind = "no-data"


class RendererUnavailableError(ChartError, RuntimeError):
    """The charting backend could not be loaded."""

    kind = "renderer-unavailable"
