"""
Extraction pipeline: results page → statistics → display dataset.
"""

from typing import Optional

from .config import ChartSettings
from .data_model import ChartDataset, ExtractedTable
from .relevance import select_relevant
from .stats import stats_from_table
from .table_extractor import extract_table, load_results_page


def dataset_from_table(
    table: ExtractedTable,
    settings: Optional[ChartSettings] = None,
) -> ChartDataset:
    """Derive the display dataset from an extracted table.

    Raises ``NoDisplayableDataError`` when both relevance tiers are empty.
    """
    settings = settings or ChartSettings()
    return select_relevant(
        stats_from_table(table),
        primary_threshold=settings.primary_threshold,
        fallback_threshold=settings.fallback_threshold,
    )


def dataset_from_html(html: str, settings: Optional[ChartSettings] = None,
                      source: str = "<string>") -> ChartDataset:
    return dataset_from_table(extract_table(html, source=source), settings)


def dataset_from_file(filepath: str,
                      settings: Optional[ChartSettings] = None) -> ChartDataset:
    return dataset_from_table(load_results_page(filepath), settings)
