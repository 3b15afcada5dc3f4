"""
Chart settings for the Ancestry Chart Viewer.

A frozen settings object built from the defaults in ``constants``.
The GUI and the command line assemble a plain dict of overrides and
turn it into ``ChartSettings`` with :meth:`ChartSettings.from_dict`.
"""

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Mapping, Tuple

from .constants import (
    PRIMARY_THRESHOLD, FALLBACK_THRESHOLD, CHART_TITLE, LEGEND_POSITION,
    EXPORT_FILENAME, EXPORT_DPI, EXPORT_WIDTH_INCHES, FIGURE_SIZE,
)

_LEGEND_POSITIONS = ('right', 'left', 'top', 'bottom')


@dataclass(frozen=True)
class ChartSettings:
    """Settings shared by the controller, renderer and exporter.

    Parameters
    ----------
    primary_threshold : float
        Tier-1 minimum mean (percent).
    fallback_threshold : float
        Tier-2 minimum mean (percent), used only when tier 1 is empty.
    title : str
        Chart title.
    legend_position : str
        One of ``right``, ``left``, ``top``, ``bottom``.
    export_filename : str
        Default file name offered by the save control.
    export_dpi : int
    export_width_inches : float
    figure_size : tuple of float
        Chart container size in inches.
    """
    primary_threshold: float = PRIMARY_THRESHOLD
    fallback_threshold: float = FALLBACK_THRESHOLD
    title: str = CHART_TITLE
    legend_position: str = LEGEND_POSITION
    export_filename: str = EXPORT_FILENAME
    export_dpi: int = EXPORT_DPI
    export_width_inches: float = EXPORT_WIDTH_INCHES
    figure_size: Tuple[float, float] = FIGURE_SIZE

    def __post_init__(self):
        if not self.fallback_threshold > 0:
            raise ValueError(
                f"fallback_threshold must be positive, got "
                f"{self.fallback_threshold}"
            )
        if self.primary_threshold < self.fallback_threshold:
            raise ValueError(
                f"primary_threshold ({self.primary_threshold}) must not be "
                f"below fallback_threshold ({self.fallback_threshold})"
            )
        if self.legend_position not in _LEGEND_POSITIONS:
            raise ValueError(
                f"legend_position must be one of {_LEGEND_POSITIONS}, got "
                f"{self.legend_position!r}"
            )
        if self.export_dpi <= 0 or self.export_width_inches <= 0:
            raise ValueError("export_dpi and export_width_inches must be positive")

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> 'ChartSettings':
        """Build settings from a partial dict; unknown keys are an error."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            raise ValueError(f"Unknown chart settings: {unknown}")
        values = dict(config)
        if 'figure_size' in values:
            values['figure_size'] = tuple(values['figure_size'])
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
