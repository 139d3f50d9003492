"""Compile normalized AST tokens into ordered Docs edit operations.

The compiler keeps one absolute insertion cursor.  Every insertion is
emitted at the cursor and advances it by the inserted UTF-16 length, and
every style operation covers exactly the range just inserted, so the
operations never need to re-derive earlier offsets.

Handled block tokens:

- heading -> text + ``HEADING_n`` paragraph style (level clamped to 1-6)
- paragraph -> styled text segments
- list -> one bulleted paragraph per item, depth carried on the bullet op
- list_item outside a list -> plain paragraphs, with a warning
- block_code -> single-cell shaded table holding monospace text
- table -> ``insertTable`` + per-cell text at the computed cell offsets
- thematic_break -> section break
- block_quote -> children compiled as ordinary blocks
- html_block -> skipped with a warning

Anything else is skipped with an ``UNSUPPORTED_TOKEN`` warning and no
cursor movement.
"""

from __future__ import annotations

from collections.abc import Callable as _Callable
from typing import Any

from docsmd.config import DocsmdConfig
from docsmd.converter.lists import bullet_preset_for
from docsmd.converter.rich_text import Segment, build_segments, extract_text, merge_segments
from docsmd.converter.tables import cell_content_index, table_span, table_start_index
from docsmd.models import ConversionWarning, ListKind, RgbColor, TextStyle
from docsmd.observability import get_logger
from docsmd.operations import (
    CreateParagraphBullets,
    DeleteParagraphBullets,
    EditOperation,
    InsertSectionBreak,
    InsertTable,
    InsertText,
    UpdateParagraphStyle,
    UpdateTableCellStyle,
    UpdateTextStyle,
)

log = get_logger("docsmd.compiler")

_MAX_HEADING_LEVEL = 6

# What the previously compiled paragraph was, for bleed prevention.
_PREV_HEADING = "heading"
_PREV_LIST = "list"
_PREV_PARAGRAPH = "paragraph"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_operations(
    tokens: list[dict],
    config: DocsmdConfig,
    start_index: int = 1,
) -> tuple[list[EditOperation], int, list[ConversionWarning]]:
    """Compile normalized AST tokens into edit operations.

    Parameters
    ----------
    tokens:
        List of canonical AST tokens from :class:`ASTNormalizer`.
    config:
        Configuration.
    start_index:
        Absolute offset the first insertion lands at.

    Returns
    -------
    tuple[list[EditOperation], int, list[ConversionWarning]]
        (operations, end_index, warnings)
    """
    ctx = _CompileContext(config, start_index)
    _process_tokens(tokens, ctx)
    return ctx.operations, ctx.cursor, ctx.warnings


class _CompileContext:
    """Mutable accumulator for one compilation pass."""

    __slots__ = ("config", "cursor", "last_styled", "operations", "previous", "warnings")

    def __init__(self, config: DocsmdConfig, start_index: int) -> None:
        self.config = config
        self.cursor = start_index
        self.operations: list[EditOperation] = []
        self.warnings: list[ConversionWarning] = []
        self.last_styled = False
        self.previous: str | None = None

    def add(self, op: EditOperation) -> None:
        self.operations.append(op)

    def insert_text(self, text: str) -> tuple[int, int]:
        """Insert *text* at the cursor and return the inserted range."""
        op = InsertText(index=self.cursor, text=text)
        self.operations.append(op)
        start = self.cursor
        self.cursor += op.length
        return start, self.cursor

    def add_warning(self, code: str, message: str, **context: object) -> None:
        self.warnings.append(ConversionWarning(
            code=code, message=message, context=dict(context),
        ))


# ---------------------------------------------------------------------------
# Token dispatch
# ---------------------------------------------------------------------------

def _process_tokens(tokens: list[dict], ctx: _CompileContext) -> None:
    for token in tokens:
        _process_token(token, ctx)


def _process_token(token: dict, ctx: _CompileContext) -> None:
    token_type = token.get("type", "")
    handler = _BLOCK_HANDLERS.get(token_type, _skip_unknown)
    handler(token, ctx)


# ---------------------------------------------------------------------------
# Paragraph writing
# ---------------------------------------------------------------------------

def _write_segments(segments: list[Segment], ctx: _CompileContext) -> None:
    """Insert each segment and style exactly the range it occupies.

    A plain segment following a styled one gets an explicit reset so it
    does not inherit the formatting of the text before it.
    """
    reset = ctx.config.reset_inherited_styles
    for text, style in merge_segments(segments):
        start, end = ctx.insert_text(text)
        if not style.is_plain:
            ctx.add(UpdateTextStyle(start, end, style, reset=reset and ctx.last_styled))
            ctx.last_styled = True
        else:
            if reset and ctx.last_styled:
                ctx.add(UpdateTextStyle(start, end, style, reset=True))
            ctx.last_styled = False


def _write_paragraph(
    segments: list[Segment],
    ctx: _CompileContext,
    *,
    named_style: str | None = None,
    list_kind: ListKind | None = None,
    depth: int = 0,
) -> None:
    """Write one paragraph (text plus its newline) and its paragraph ops."""
    start = ctx.cursor
    _write_segments([*segments, ("\n", TextStyle())], ctx)
    end = ctx.cursor

    bleed = ctx.config.prevent_paragraph_bleed
    if named_style is not None:
        ctx.add(UpdateParagraphStyle(start, end, named_style))
    elif bleed and ctx.previous == _PREV_HEADING:
        ctx.add(UpdateParagraphStyle(start, end, "NORMAL_TEXT"))

    if list_kind is not None:
        ctx.add(CreateParagraphBullets(
            start_index=start,
            end_index=end,
            nesting_level=depth,
            list_kind=list_kind,
            bullet_preset=bullet_preset_for(list_kind, ctx.config),
            indent_pt=ctx.config.list_indent_pt,
        ))
    elif bleed and ctx.previous == _PREV_LIST:
        ctx.add(DeleteParagraphBullets(start, end))

    if named_style is not None:
        ctx.previous = _PREV_HEADING
    elif list_kind is not None:
        ctx.previous = _PREV_LIST
    else:
        ctx.previous = _PREV_PARAGRAPH


# ---------------------------------------------------------------------------
# Block handlers
# ---------------------------------------------------------------------------

def _build_heading(token: dict, ctx: _CompileContext) -> None:
    level = token.get("attrs", {}).get("level", 1)
    level = min(max(int(level), 1), _MAX_HEADING_LEVEL)
    segments = build_segments(token.get("children", []), ctx.config, warnings=ctx.warnings)
    if not segments:
        return
    _write_paragraph(segments, ctx, named_style=f"HEADING_{level}")


def _build_paragraph(token: dict, ctx: _CompileContext) -> None:
    segments = build_segments(token.get("children", []), ctx.config, warnings=ctx.warnings)
    # A paragraph of dropped HTML produces no text and no paragraph
    if not segments:
        return
    _write_paragraph(segments, ctx)


def _build_block_quote(token: dict, ctx: _CompileContext) -> None:
    _process_tokens(token.get("children", []), ctx)


def _build_list(token: dict, ctx: _CompileContext, depth: int = 0) -> None:
    """Compile each item of a list; nested lists recurse one level deeper."""
    ordered = token.get("attrs", {}).get("ordered", False)
    kind = ListKind.ORDERED if ordered else ListKind.UNORDERED
    for item in token.get("children", []):
        if item.get("type") == "list_item":
            _build_list_item(item, kind, ctx, depth)
        else:
            _process_token(item, ctx)


def _build_list_item(token: dict, kind: ListKind, ctx: _CompileContext, depth: int) -> None:
    for child in token.get("children", []):
        child_type = child.get("type", "")
        if child_type == "paragraph":
            segments = build_segments(
                child.get("children", []), ctx.config, warnings=ctx.warnings,
            )
            if segments:
                _write_paragraph(segments, ctx, list_kind=kind, depth=depth)
        elif child_type == "list":
            _build_list(child, ctx, depth + 1)
        else:
            _process_token(child, ctx)


def _build_orphan_list_item(token: dict, ctx: _CompileContext) -> None:
    """A list item with no enclosing list compiles as plain paragraphs."""
    log.debug("list item outside a list compiled as paragraphs")
    ctx.add_warning(
        "ORPHAN_LIST_ITEM",
        "List item without a parent list was compiled as a plain paragraph.",
        index=ctx.cursor,
    )
    _process_tokens(token.get("children", []), ctx)


def _build_code_block(token: dict, ctx: _CompileContext) -> None:
    """Compile fenced code into a shaded single-cell table.

    The cell text carries the monospace font and the cell the light-gray
    background, which is what the forward classifier looks for.
    """
    code = token.get("raw", "")
    table_index = ctx.cursor
    ctx.add(InsertTable(index=table_index, rows=1, columns=1))

    code_length = 0
    if code:
        cell_index = cell_content_index(table_index, 0, 0, 1)
        op = InsertText(index=cell_index, text=code)
        ctx.add(op)
        code_length = op.length
        ctx.add(UpdateTextStyle(
            cell_index,
            cell_index + code_length,
            TextStyle(font_family=ctx.config.code_font_family),
        ))

    ctx.add(UpdateTableCellStyle(
        table_start_index=table_start_index(table_index),
        row_index=0,
        column_index=0,
        background=RgbColor(*ctx.config.code_block_background),
    ))

    ctx.cursor = table_index + table_span(1, 1) + code_length
    ctx.last_styled = False
    ctx.previous = None


def _build_table(token: dict, ctx: _CompileContext) -> None:
    """Compile a pipe table.

    Cell texts are gathered before anything is emitted, so a malformed
    token falls back to a plain paragraph without leaving a half-built
    table behind.
    """
    try:
        rows = _collect_table_rows(token)
    except (KeyError, TypeError, IndexError, AttributeError) as exc:
        log.debug(
            "table compiled as paragraph",
            extra={"extra_fields": {"error": str(exc)}},
        )
        ctx.add_warning(
            "TABLE_CONVERSION_ERROR",
            f"Table conversion failed: {exc}",
        )
        text = _table_to_plain_text(token)
        if text:
            _write_paragraph([(text, TextStyle())], ctx)
        return

    columns = max((len(row) for row in rows), default=0)
    if not rows or columns == 0:
        ctx.add_warning("EMPTY_TABLE", "Table without rows or columns was skipped.")
        return

    table_index = ctx.cursor
    ctx.add(InsertTable(index=table_index, rows=len(rows), columns=columns))

    # Cells are filled row-major; each insertion shifts every later cell.
    text_offset = 0
    for r, row in enumerate(rows):
        for c, cell_text in enumerate(row):
            if not cell_text:
                continue
            op = InsertText(
                index=cell_content_index(table_index, r, c, columns) + text_offset,
                text=cell_text,
            )
            ctx.add(op)
            text_offset += op.length

    ctx.cursor = table_index + table_span(len(rows), columns) + text_offset
    ctx.last_styled = False
    ctx.previous = None


def _collect_table_rows(token: dict) -> list[list[str]]:
    """Return the plain text of every cell, header row first."""
    rows: list[list[str]] = []
    for child in token["children"]:
        child_type = child["type"]
        if child_type == "table_head":
            rows.append(_cells_text(child.get("children", [])))
        elif child_type == "table_body":
            for row in child.get("children", []):
                if row["type"] == "table_row":
                    rows.append(_cells_text(row.get("children", [])))
    return rows


def _cells_text(cells: list[dict]) -> list[str]:
    return [
        extract_text(cell.get("children", [])).strip()
        for cell in cells
        if cell["type"] == "table_cell"
    ]


def _table_to_plain_text(token: Any) -> str:
    """Best-effort flattening of a malformed table token."""
    if not isinstance(token, dict):
        return ""
    children = token.get("children")
    if not isinstance(children, list):
        return ""
    return extract_text([c for c in children if isinstance(c, dict)]).strip()


def _build_section_break(token: dict, ctx: _CompileContext) -> None:
    ctx.add(InsertSectionBreak(index=ctx.cursor, section_type=ctx.config.section_break_type))
    # A section break inserts a newline and the break itself.
    ctx.cursor += 2
    ctx.last_styled = False
    ctx.previous = None


def _handle_html_block(token: dict, ctx: _CompileContext) -> None:
    """Raw HTML blocks are never inserted as document text."""
    ctx.add_warning(
        "HTML_DROPPED",
        "HTML block was dropped.",
        raw=token.get("raw", "")[:200],
    )


def _skip_unknown(token: dict, ctx: _CompileContext) -> None:
    token_type = token.get("type", "")
    log.debug(
        "skipped token",
        extra={"extra_fields": {"token_type": token_type, "index": ctx.cursor}},
    )
    ctx.add_warning(
        "UNSUPPORTED_TOKEN",
        f"Unknown token type '{token_type}' was skipped.",
        token_type=token_type,
    )


# ---------------------------------------------------------------------------
# Block handler dispatch table
# ---------------------------------------------------------------------------

_BlockHandler = _Callable[[dict, _CompileContext], None]

_BLOCK_HANDLERS: dict[str, _BlockHandler] = {
    "heading": _build_heading,
    "paragraph": _build_paragraph,
    "block_quote": _build_block_quote,
    "list": _build_list,
    "list_item": _build_orphan_list_item,
    "block_code": _build_code_block,
    "table": _build_table,
    "thematic_break": _build_section_break,
    "html_block": _handle_html_block,
}
