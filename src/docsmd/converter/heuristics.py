"""Classification heuristics over style attributes.

The Docs model has no "this is code" flag.  Code is recognised from a
monospace font on a run, and a code *block* is the common authoring
convention of a single-cell table that is either shaded light gray or
holds monospace text.  Each predicate is pure so its precedence can be
tested on its own.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import AbstractSet

from docsmd.config import LIGHT_GRAY_MAX, LIGHT_GRAY_MIN
from docsmd.models import Paragraph, RgbColor, Table, TableCell, TextRun, TextStyle


def is_code_styled(style: TextStyle, code_fonts: AbstractSet[str]) -> bool:
    """True when the run's font family is in the recognised monospace set."""
    return style.font_family is not None and style.font_family in code_fonts


def is_light_gray(color: RgbColor | None) -> bool:
    """True when every component lies strictly inside ``(0.85, 1.0)``.

    Pure white (1.0) is excluded: an unshaded cell is not a code block.
    """
    if color is None:
        return False
    return all(
        LIGHT_GRAY_MIN < component < LIGHT_GRAY_MAX
        for component in (color.red, color.green, color.blue)
    )


def is_code_block_table(table: Table, code_fonts: AbstractSet[str]) -> bool:
    """Classify a table as a code block.

    Only a 1x1 table qualifies.  The background check runs first; the
    content scan runs only when the background does not match, and the
    first match wins.
    """
    if not table.is_single_cell:
        return False
    cell = table.rows[0][0]
    if is_light_gray(cell.background):
        return True
    return any(is_code_styled(run.style, code_fonts) for run in iter_cell_runs(cell))


def iter_cell_runs(cell: TableCell) -> Iterator[TextRun]:
    """Yield the runs of every paragraph directly inside *cell*.

    Nested tables are not descended into.
    """
    for block in cell.content:
        if isinstance(block, Paragraph):
            yield from block.runs
