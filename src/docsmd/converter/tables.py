"""Tables: Markdown rendering and Docs table geometry.

Forward, a Docs table renders either as a GFM pipe table or, when
:func:`~docsmd.converter.heuristics.is_code_block_table` classifies it
as one, as a fenced code block::

    | Name | Qty |
    | --- | --- |
    | Apple | 3 |

Reverse, :func:`cell_content_index` and :func:`table_span` give the
offsets an ``insertTable`` request creates.  For a table inserted at
index ``T`` with ``C`` columns, cell ``(r, c)`` starts at::

    T + 3 + r * (2 * C + 1) + 2 * c

before any cell text is inserted: each cell holds two positions (cell
start and its paragraph's newline) and each row adds one for the row
start.  The whole empty table consumes ``2 + R * (2 * C + 1)``.
"""

from __future__ import annotations

from typing import AbstractSet

from docsmd.converter.heuristics import is_code_block_table, iter_cell_runs
from docsmd.models import Table, TableCell
from docsmd.utils.text import strip_one_trailing_newline

# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

_FIRST_CELL_OFFSET = 3
_TABLE_OVERHEAD = 2


def _row_stride(columns: int) -> int:
    return 2 * columns + 1


def cell_content_index(table_index: int, row: int, column: int, columns: int) -> int:
    """Index of cell ``(row, column)`` in an empty table inserted at *table_index*."""
    return table_index + _FIRST_CELL_OFFSET + row * _row_stride(columns) + 2 * column


def table_span(rows: int, columns: int) -> int:
    """Positions consumed by an empty ``rows`` x ``columns`` table."""
    return _TABLE_OVERHEAD + rows * _row_stride(columns)


def table_start_index(table_index: int) -> int:
    """``tableStartLocation`` of a table inserted at *table_index*.

    ``insertTable`` places a newline before the table.
    """
    return table_index + 1


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render_table(table: Table, code_fonts: AbstractSet[str]) -> str:
    """Render a Docs table to Markdown.

    A table with no rows, or whose rows all have zero cells, renders as
    ``""``.  Rows with zero cells are skipped.  The header separator
    follows the first rendered row whether or not the source marks a
    header.
    """
    if not table.rows:
        return ""

    if is_code_block_table(table, code_fonts):
        return render_code_block_table(table)

    lines: list[str] = []
    for row in table.rows:
        if not row:
            continue
        lines.append("|" + "".join(f" {extract_cell_text(cell)} |" for cell in row))
        if len(lines) == 1:
            lines.append("|" + " --- |" * len(row))

    if not lines:
        return ""
    return "\n" + "\n".join(lines) + "\n\n"


def render_code_block_table(table: Table) -> str:
    """Render a single-cell table as a fenced code block.

    Cell content always ends in a newline; exactly one is removed.
    """
    cell = table.rows[0][0]
    code = "".join(run.content for run in iter_cell_runs(cell))
    code, _ = strip_one_trailing_newline(code)
    return "\n```\n" + code + "\n```\n\n"


def extract_cell_text(cell: TableCell) -> str:
    """Flatten a cell to one line of plain text.

    Newlines become single spaces, the result is trimmed, and ``|`` is
    escaped so it cannot split the cell.
    """
    text = "".join(run.content for run in iter_cell_runs(cell))
    text = text.replace("\n", " ").strip()
    return text.replace("|", "\\|")
