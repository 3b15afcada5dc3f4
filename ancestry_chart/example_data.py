"""
Example results page generator for the Ancestry Chart Viewer.

Creates a synthetic results page with the same table structure the
extractor expects: a population header, one row per sample, an
``Average`` row and a trailing ``Distance`` row.  The example has
eighteen populations, fourteen of them above 1%, so the colour allocator
has to go past its base palette, and a tail of small populations that
the relevance filter drops.  About 5% of sample cells are blank.
"""

import html
import os
import random
from typing import Dict, List, Optional, Sequence

from .constants import (
    TABLE_WRAPPER_CLASS, HEADER_CELL_CLASS, ROW_LABEL_CLASS,
    RESULT_CELL_CLASS, AVERAGE_ROW_LABEL,
)


# (population, mean %, spread between samples)
_POPULATIONS = [
    ('Irish',          31.0, 2.4),
    ('British',        22.5, 2.0),
    ('Scandinavian',   11.2, 1.6),
    ('French',          7.4, 1.2),
    ('German',          6.1, 1.1),
    ('Iberian',         4.3, 0.9),
    ('Italian',         3.8, 0.8),
    ('Baltic',          2.9, 0.6),
    ('Finnish',         2.2, 0.5),
    ('Balkan',          2.0, 0.4),
    ('Sardinian',       1.8, 0.3),
    ('Basque',          1.6, 0.2),
    ('Ashkenazi',       1.5, 0.2),
    ('North African',   1.4, 0.2),
    ('Anatolian',       0.6, 0.2),
    ('Caucasian',       0.3, 0.1),
    ('Siberian',        0.05, 0.02),
    ('East Asian',      0.0, 0.0),
]


def _cell(value: Optional[float]) -> str:
    text = "" if value is None else f"{value:.2f}"
    return f'<td class="{RESULT_CELL_CLASS}">{text}</td>'


def render_results_page(
    categories: Sequence[str],
    sample_rows: Sequence[Sequence[Optional[object]]],
    averages: Sequence[Optional[object]],
    *,
    trailing_rows: Optional[Dict[str, Sequence[Optional[object]]]] = None,
) -> str:
    """Render a results page around the given table content.

    Cell values may be floats (formatted to two decimals), strings
    (inserted verbatim, escaped) or ``None`` (blank cell).
    """
    def cell(value) -> str:
        if isinstance(value, str):
            return (f'<td class="{RESULT_CELL_CLASS}">'
                    f'{html.escape(value)}</td>')
        return _cell(value)

    def label(text: str) -> str:
        return f'<td class="{ROW_LABEL_CLASS}">{html.escape(text)}</td>'

    lines = [
        '<!DOCTYPE html>',
        '<html><head><meta charset="utf-8"><title>Results</title></head>',
        '<body>',
        '<div id="multioutput">',
        f'<div class="{TABLE_WRAPPER_CLASS}">',
        '<table><tbody>',
    ]
    header = "".join(
        f'<td class="{HEADER_CELL_CLASS}"><span>{html.escape(name)}</span></td>'
        for name in categories
    )
    lines.append(f'<tr>{label("Target")}{header}</tr>')
    for index, row in enumerate(sample_rows, start=1):
        cells = "".join(cell(v) for v in row)
        lines.append(f'<tr>{label(f"Sample {index}")}{cells}</tr>')
    cells = "".join(cell(v) for v in averages)
    lines.append(f'<tr>{label(AVERAGE_ROW_LABEL)}{cells}</tr>')
    for row_label, row in (trailing_rows or {}).items():
        cells = "".join(cell(v) for v in row)
        lines.append(f'<tr>{label(row_label)}{cells}</tr>')
    lines.extend([
        '</tbody></table>',
        '</div>',
        '<button id="runmulti">Run</button>',
        '</div>',
        '</body></html>',
    ])
    return "\n".join(lines)


def generate_example_page(
    output_path: Optional[str] = None,
    *,
    n_samples: int = 8,
    seed: int = 42,
) -> str:
    """Generate the example results page.

    Parameters
    ----------
    output_path : str, optional
        If given, the page is also written there (directories created).
    n_samples : int
        Number of sample rows.
    seed : int
        Seed for the reproducible sample noise.

    Returns
    -------
    str
        The HTML document.
    """
    rng = random.Random(seed)
    names = [name for name, _, _ in _POPULATIONS]

    columns: List[List[Optional[float]]] = []
    for _, mean, spread in _POPULATIONS:
        column: List[Optional[float]] = []
        for _ in range(n_samples):
            if mean > 0 and rng.random() < 0.05:
                column.append(None)
                continue
            column.append(max(0.0, round(rng.gauss(mean, spread), 2)))
        columns.append(column)

    averages = []
    for column in columns:
        present = [v for v in column if v is not None]
        averages.append(round(sum(present) / len(present), 2) if present else 0.0)

    sample_rows = [list(row) for row in zip(*columns)]
    distance = [round(rng.uniform(1.0, 4.0), 2) for _ in names]
    page = render_results_page(
        names, sample_rows, averages,
        trailing_rows={'Distance': distance},
    )

    if output_path:
        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as fh:
            fh.write(page)
    return page


if __name__ == '__main__':
    import tempfile
    out = os.path.join(tempfile.gettempdir(), 'ancestry_example', 'results.html')
    generate_example_page(out)
    print(f"  example page: {out} ({os.path.getsize(out):,} bytes)")
