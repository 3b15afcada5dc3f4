"""
Per-population statistics for the Ancestry Chart Viewer.

Pairs each reported average with the population at the same header
position and attaches the population standard deviation of that
population's samples.

Pairing is positional, not by name: the i-th average belongs to the
i-th header population.  When the two sequences differ in length only
the first ``min(len(categories), len(averages))`` positions are
paired.  A population is kept only when its average is finite and
strictly positive.

Empty sample sets have an undefined variance; their standard deviation
is reported as ``0.0`` so labels always carry a number.
"""

import math
from typing import Dict, Mapping, Sequence

import numpy as np

from .data_model import CategoryStat, ExtractedTable


def population_std_dev(values: Sequence[float]) -> float:
    """Population standard deviation (divides by N).

    Returns ``NaN`` for an empty sequence.
    """
    if len(values) == 0:
        return math.nan
    return float(np.std(np.asarray(values, dtype=float), ddof=0))


def generate_category_stats(
    categories: Sequence[str],
    samples: Mapping[str, Sequence[float]],
    averages: Sequence[float],
) -> Dict[str, CategoryStat]:
    """Build ``{population: CategoryStat}`` in header order.

    Parameters
    ----------
    categories : sequence of str
        Population names in header order.
    samples : mapping
        ``{population: values}``.  Missing populations count as empty.
    averages : sequence of float
        Reported averages, positionally aligned with *categories*.

    Returns
    -------
    dict
        Insertion-ordered by header position.  Populations whose average
        is NaN, zero or negative are absent.
    """
    result: Dict[str, CategoryStat] = {}
    for name, mean in zip(categories, averages):
        # Guard: NaN compares False, so this also drops NaN
        if not (mean is not None and math.isfinite(mean) and mean > 0):
            continue
        std_dev = population_std_dev(samples.get(name, ()))
        if math.isnan(std_dev):
            std_dev = 0.0
        result[name] = CategoryStat(name=name, mean=float(mean),
                                    std_dev=std_dev)
    return result


def stats_from_table(table: ExtractedTable) -> Dict[str, CategoryStat]:
    """Convenience wrapper around :func:`generate_category_stats`."""
    return generate_category_stats(
        table.categories, table.samples, table.averages,
    )
