"""
Results-table extractor for the Ancestry Chart Viewer.

Reads the HTML results page and assembles the summary table into an
``ExtractedTable``.  The table is located by document structure:

- the first ``<table>`` inside an element of class ``multitablewrapper``
- row 0: population names in ``td.multisources span`` elements
- the first row whose ``td.multitargets`` cell reads ``Average``:
  reported averages in its ``td.multiresult`` cells
- rows between the header and the Average row: one sample per
  ``td.multiresult`` cell, column-aligned with the header

Handles:

- Implicitly closed ``<td>`` / ``<tr>`` tags
- ``<thead>`` / ``<tfoot>`` sections (ignored, like a browser's tbody)
- Percent signs and European decimal commas in cells
- Blank cells (skipped silently) and non-numeric cells (skipped with
  a warning)
"""

import math
import os
import warnings
from collections import Counter
from html.parser import HTMLParser
from typing import Dict, List, Optional

from .constants import (
    TABLE_WRAPPER_CLASS, HEADER_CELL_CLASS, ROW_LABEL_CLASS,
    RESULT_CELL_CLASS, AVERAGE_ROW_LABEL, HEADER_ROW_INDEX,
)
from .data_model import ExtractedTable
from .errors import ExtractionError


# Elements that never have an end tag
_VOID_TAGS = frozenset((
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'source', 'track', 'wbr',
))


# ── Locale-safe float parsing ────────────────────────────────────────────

def _cell_float(text: str) -> float:
    """Parse a table cell that may carry a ``%`` suffix or decimal comma.

    Handles:
    - Standard period decimals: ``"3.14"``
    - Percent values: ``"42.5%"`` or ``"42.5 %"``
    - European comma decimals: ``"3,14"``
    - Thousand separators when both ``.`` and ``,`` are present

    Raises ``ValueError`` for blank, non-numeric or non-finite text.
    """
    s = text.strip()
    if s.endswith('%'):
        s = s[:-1].rstrip()
    if not s:
        raise ValueError("empty string")
    if ',' in s and '.' in s:
        if s.rfind(',') > s.rfind('.'):
            # European: "1.234,56"  →  "1234.56"
            s = s.replace('.', '').replace(',', '.')
        else:
            # US: "1,234.56"  →  "1234.56"
            s = s.replace(',', '')
    elif ',' in s:
        s = s.replace(',', '.')
    result = float(s)
    if not math.isfinite(result):
        raise ValueError(f"non-finite value: {text.strip()!r}")
    return result


# ── HTML table scanner ───────────────────────────────────────────────────

class _Cell:
    __slots__ = ('classes', 'parts', 'spans')

    def __init__(self, classes):
        self.classes = classes
        self.parts: List[str] = []
        self.spans: List[List[str]] = []

    @property
    def text(self) -> str:
        return ''.join(self.parts).strip()

    @property
    def span_texts(self) -> List[str]:
        return [''.join(p).strip() for p in self.spans]


class _ResultsTableScanner(HTMLParser):
    """Collect the body rows of the first table inside the wrapper."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.found_table = False
        self.rows: List[List[_Cell]] = []

        self._stack: List[tuple] = []      # (tag, is_wrapper)
        self._wrapper_depth = 0
        self._table_level: Optional[int] = None
        self._nested_tables = 0
        self._in_skipped_section = False
        self._done = False
        self._row: Optional[List[_Cell]] = None
        self._cell: Optional[_Cell] = None
        self._open_spans: List[List[str]] = []

    # ── helpers ──

    def _in_our_table(self) -> bool:
        return (self._table_level is not None and not self._done
                and self._nested_tables == 0)

    def _close_cell(self):
        if self._cell is not None and self._row is not None:
            self._row.append(self._cell)
        self._cell = None
        self._open_spans = []

    def _close_row(self):
        self._close_cell()
        if self._row is not None and not self._in_skipped_section:
            self.rows.append(self._row)
        self._row = None

    # ── HTMLParser hooks ──

    def handle_starttag(self, tag, attrs):
        classes = set()
        for name, value in attrs:
            if name == 'class' and value:
                classes.update(value.split())

        if tag in _VOID_TAGS:
            return

        is_wrapper = TABLE_WRAPPER_CLASS in classes
        self._stack.append((tag, is_wrapper))
        if is_wrapper:
            self._wrapper_depth += 1

        if tag == 'table':
            if self._table_level is None and not self._done:
                if self._wrapper_depth > 0:
                    self._table_level = len(self._stack)
                    self.found_table = True
            elif self._table_level is not None and not self._done:
                self._nested_tables += 1
            return

        if not self._in_our_table():
            return

        if tag in ('thead', 'tfoot'):
            self._close_row()
            self._in_skipped_section = True
        elif tag == 'tbody':
            self._close_row()
            self._in_skipped_section = False
        elif tag == 'tr':
            self._close_row()
            self._row = []
        elif tag in ('td', 'th'):
            self._close_cell()
            if self._row is None:
                self._row = []
            self._cell = _Cell(classes)
        elif tag == 'span' and self._cell is not None:
            buf: List[str] = []
            self._cell.spans.append(buf)
            self._open_spans.append(buf)

    def handle_endtag(self, tag):
        if tag in _VOID_TAGS:
            return
        # Find the matching open element; ignore stray end tags
        for pos in range(len(self._stack) - 1, -1, -1):
            if self._stack[pos][0] == tag:
                break
        else:
            return

        while len(self._stack) > pos:
            open_tag, is_wrapper = self._stack.pop()
            if is_wrapper:
                self._wrapper_depth -= 1
            self._on_close(open_tag)

    def _on_close(self, tag):
        if tag == 'table' and self._table_level is not None and not self._done:
            if self._nested_tables > 0:
                self._nested_tables -= 1
            else:
                self._close_row()
                self._done = True
            return
        if not self._in_our_table():
            return
        if tag == 'tr':
            self._close_row()
        elif tag in ('td', 'th'):
            self._close_cell()
        elif tag in ('thead', 'tfoot'):
            self._close_row()
            self._in_skipped_section = False
        elif tag == 'span' and self._open_spans:
            self._open_spans.pop()

    def handle_data(self, data):
        if self._cell is None or not self._in_our_table():
            return
        self._cell.parts.append(data)
        for buf in self._open_spans:
            buf.append(data)

    def close(self):
        super().close()
        if self._in_our_table():
            self._close_row()
            self._done = True


# ── Table assembly ───────────────────────────────────────────────────────

def _find_average_row(rows: List[List[_Cell]]) -> int:
    """Return the index of the first row labelled ``Average`` or -1."""
    for idx, row in enumerate(rows):
        label_cell = next(
            (c for c in row if ROW_LABEL_CLASS in c.classes), None,
        )
        if label_cell is not None and label_cell.text == AVERAGE_ROW_LABEL:
            return idx
    return -1


def _result_cells(row: List[_Cell]) -> List[_Cell]:
    return [c for c in row if RESULT_CELL_CLASS in c.classes]


def extract_table(html: str, source: str = "<string>") -> ExtractedTable:
    """Extract populations, samples and averages from a results page.

    Parameters
    ----------
    html : str
        Full or partial HTML document.
    source : str
        Label used in warnings and carried on the result.

    Returns
    -------
    ExtractedTable

    Raises
    ------
    ExtractionError
        If the results table, the population header or the Average
        row cannot be located.
    """
    scanner = _ResultsTableScanner()
    scanner.feed(html)
    scanner.close()

    if not scanner.found_table or not scanner.rows:
        raise ExtractionError(f"Results table not found in {source}.")

    rows = scanner.rows
    header = rows[HEADER_ROW_INDEX]
    categories: List[str] = []
    for cell in header:
        if HEADER_CELL_CLASS in cell.classes:
            categories.extend(cell.span_texts)
    if not categories:
        raise ExtractionError(
            f"Population header row not found in {source}."
        )

    avg_idx = _find_average_row(rows)
    if avg_idx == -1:
        raise ExtractionError(f"Average row not found in {source}.")

    if len(set(categories)) != len(categories):
        dupes = sorted(n for n, k in Counter(categories).items() if k > 1)
        warnings.warn(
            f"Duplicate population names in {source}: {dupes}. "
            f"Their sample columns are merged.",
            stacklevel=2,
        )

    bad_tokens: List[str] = []

    # ── Averages: NaN keeps the positional alignment ──
    averages: List[float] = []
    for col, cell in enumerate(_result_cells(rows[avg_idx])):
        try:
            averages.append(_cell_float(cell.text))
        except ValueError:
            if cell.text:
                bad_tokens.append(f"Average col {col + 1}: '{cell.text}'")
            averages.append(math.nan)

    # ── Samples: rows strictly between header and Average ──
    sample_lists: Dict[str, List[float]] = {name: [] for name in categories}
    for row_idx in range(HEADER_ROW_INDEX + 1, avg_idx):
        for col, cell in enumerate(_result_cells(rows[row_idx])):
            if col >= len(categories):
                break
            try:
                value = _cell_float(cell.text)
            except ValueError:
                if cell.text:
                    bad_tokens.append(
                        f"row {row_idx} col {col + 1}: '{cell.text}'"
                    )
                continue
            sample_lists[categories[col]].append(value)

    if bad_tokens:
        detail = "; ".join(bad_tokens[:10])
        if len(bad_tokens) > 10:
            detail += f" ... and {len(bad_tokens) - 10} more"
        warnings.warn(
            f"Non-numeric values in {source}: {detail}. "
            f"These cells were treated as missing data.",
            stacklevel=2,
        )

    if len(averages) != len(categories):
        warnings.warn(
            f"{source} has {len(categories)} populations but "
            f"{len(averages)} average cells; only the first "
            f"{min(len(categories), len(averages))} are paired.",
            stacklevel=2,
        )

    return ExtractedTable(
        categories=tuple(categories),
        samples={name: tuple(vals) for name, vals in sample_lists.items()},
        averages=tuple(averages),
        source=source,
    )


def read_results_page(filepath: str) -> str:
    """Return the text of a saved results page.

    A UTF-8 byte-order mark is dropped and undecodable bytes are
    replaced, so pages saved by any browser can be read.

    Raises
    ------
    FileNotFoundError
        If *filepath* does not exist.
    """
    if not os.path.isfile(filepath):
        raise FileNotFoundError(f"Results page not found: {filepath}")

    file_size = os.path.getsize(filepath)
    if file_size > 50 * 1024 * 1024:
        warnings.warn(
            f"Results page is very large ({file_size / (1024 * 1024):.0f} MB).",
            stacklevel=2,
        )

    with open(filepath, 'r', encoding='utf-8-sig', errors='replace') as fh:
        return fh.read()


def load_results_page(filepath: str) -> ExtractedTable:
    """Read a saved results page from disk and extract its table.

    Raises
    ------
    FileNotFoundError
        If *filepath* does not exist.
    ExtractionError
        If the table structure cannot be located.
    """
    html = read_results_page(filepath)
    return extract_table(html, source=os.path.basename(filepath))
