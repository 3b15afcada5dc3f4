"""
Relevance filter for the Ancestry Chart Viewer.

Proportion tables usually have a long tail of near-zero populations
that would make a pie chart unreadable.  Populations are kept in two
tiers: first everything at or above the primary threshold; only when
that leaves nothing, everything at or above the fallback threshold.
"""

from typing import Mapping

from .constants import PRIMARY_THRESHOLD, FALLBACK_THRESHOLD
from .data_model import CategoryStat, ChartDataset
from .errors import NoDisplayableDataError


def _tier(stats, threshold: float) -> ChartDataset:
    kept = [s for s in stats if s.mean >= threshold]
    # sorted() is stable with reverse=True, ties keep header order
    kept = sorted(kept, key=lambda s: s.mean, reverse=True)
    return ChartDataset(entries=tuple(kept))


def select_relevant(
    stats: Mapping[str, CategoryStat],
    *,
    primary_threshold: float = PRIMARY_THRESHOLD,
    fallback_threshold: float = FALLBACK_THRESHOLD,
) -> ChartDataset:
    """Choose and order the populations to display.

    Parameters
    ----------
    stats : mapping
        ``{population: CategoryStat}`` in header order.
    primary_threshold, fallback_threshold : float
        Minimum mean for tier 1 and tier 2.

    Returns
    -------
    ChartDataset
        Sorted by mean, descending.

    Raises
    ------
    NoDisplayableDataError
        If neither tier keeps any population.
    """
    values = list(stats.values())

    dataset = _tier(values, primary_threshold)
    if len(dataset):
        return dataset

    dataset = _tier(values, fallback_threshold)
    if len(dataset):
        return dataset

    raise NoDisplayableDataError(
        f"No population has a mean of at least {fallback_threshold}% "
        f"({len(values)} candidates)."
    )
