"""
Data model for the Ancestry Chart Viewer.

Immutable dataclasses representing the parsed results table and the
statistics derived from it.  The table model is constructed once by
``table_extractor`` and never mutated; every later stage receives it
read-only and produces a new value.

Missing sample cells are simply absent from a population's sample
tuple.  Missing or non-numeric *average* cells are kept as ``NaN`` so
that averages stay positionally aligned with the header populations.
"""

import enum
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class ExtractedTable:
    """Raw content of the results table.

    Parameters
    ----------
    categories : tuple of str
        Population names in header order.
    samples : dict
        ``{population: (value, ...)}`` with one entry per header
        population, values in row order.  May be empty tuples.
    averages : tuple of float
        Values of the ``Average`` row, in column order.  Positionally
        aligned with *categories*; the two may differ in length.
    source : str
        Where the table came from (file path or ``"<string>"``).
    """
    categories: Tuple[str, ...]
    samples: Dict[str, Tuple[float, ...]]
    averages: Tuple[float, ...]
    source: str = "<string>"


@dataclass(frozen=True)
class CategoryStat:
    """Mean and population standard deviation for one population."""
    name: str
    mean: float
    std_dev: float


@dataclass(frozen=True)
class ChartDataset:
    """Ordered populations selected for display.

    Entries are sorted by mean, descending, and every mean is > 0.
    """
    entries: Tuple[CategoryStat, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[CategoryStat]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> CategoryStat:
        return self.entries[index]

    @property
    def names(self) -> List[str]:
        return [e.name for e in self.entries]

    @property
    def means(self) -> List[float]:
        return [e.mean for e in self.entries]

    @property
    def std_devs(self) -> List[float]:
        return [e.std_dev for e in self.entries]


@dataclass(frozen=True)
class PieChartSpec:
    """Declarative chart description handed to a renderer.

    Parameters
    ----------
    labels : list of str
        Legend label per wedge.
    values : list of float
        Wedge sizes (population means).
    colors : list of str
        One colour per wedge.
    title : str
    legend_position : str
        ``"right"``, ``"left"``, ``"top"`` or ``"bottom"``.
    tooltip_formatter : callable
        ``index -> list of str`` for the hover detail of one wedge.
    """
    labels: List[str]
    values: List[float]
    colors: List[str]
    title: str
    legend_position: str
    tooltip_formatter: Optional[Callable[[int], List[str]]] = field(
        default=None, compare=False,
    )
    kind: str = "pie"


class ChartState(enum.Enum):
    """Lifecycle state of the single chart instance."""
    ABSENT = "absent"
    VISIBLE = "visible"
    HIDDEN = "hidden"
