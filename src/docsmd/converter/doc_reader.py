"""Read Google Docs JSON into the docsmd document model.

Accepts the raw response of ``documents.get`` (or any subset carrying
``body`` and ``lists``) and produces a :class:`~docsmd.models.Document`.
The reader is forgiving: a missing or malformed field reads as its empty
value, and a structural element it does not model becomes an
:class:`~docsmd.models.UnknownBlock`.  It never raises on a dict input.

Raw shapes consumed::

    {"paragraph": {"elements": [{"textRun": {"content": "...", "textStyle": {...}}}],
                   "paragraphStyle": {"namedStyleType": "HEADING_1"},
                   "bullet": {"listId": "kix.abc", "nestingLevel": 1}}}
    {"table": {"tableRows": [{"tableCells": [{"content": [...],
                                              "tableCellStyle": {...}}]}]}}
    {"sectionBreak": {...}}

Tabbed documents (``includeTabsContent=true``) keep their body under
``tabs[].documentTab``; :func:`select_tab` extracts one.
"""

from __future__ import annotations

from typing import Any

from docsmd.errors import DocsmdTabNotFoundError
from docsmd.models import (
    Block,
    Document,
    ListDefinition,
    ListMembership,
    NestingLevel,
    Paragraph,
    RgbColor,
    SectionBreak,
    Table,
    TableCell,
    TextRun,
    TextStyle,
    UnknownBlock,
)


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _as_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    return default


def _as_float(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    return 0.0


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def read_document(data: Any) -> Document:
    """Read a document (or a ``{body, lists}`` subset) into a :class:`Document`.

    Absent or malformed ``body.content`` yields an empty content tuple.
    """
    data = _as_dict(data)
    content = _as_dict(data.get("body")).get("content")
    return Document(
        content=read_blocks(content),
        lists=read_lists(data.get("lists")),
    )


def read_blocks(content: Any) -> tuple[Block, ...]:
    """Read a structural element array into blocks, preserving order."""
    return tuple(read_block(element) for element in _as_list(content))


def read_block(element: Any) -> Block:
    """Classify and read one structural element.

    The element kinds are checked in a fixed order (paragraph, table,
    section break); anything else reads as :class:`UnknownBlock`.
    """
    element = _as_dict(element)
    if isinstance(element.get("paragraph"), dict):
        return read_paragraph(element["paragraph"])
    if isinstance(element.get("table"), dict):
        return read_table(element["table"])
    if "sectionBreak" in element:
        return SectionBreak()
    keys = tuple(k for k in element if k not in ("startIndex", "endIndex"))
    return UnknownBlock(element_keys=keys)


def read_paragraph(paragraph: dict) -> Paragraph:
    """Read a ``paragraph`` object: named style, bullet, and text runs."""
    style = _as_dict(paragraph.get("paragraphStyle"))
    named_style = style.get("namedStyleType")
    if not isinstance(named_style, str) or not named_style:
        named_style = None

    bullet: ListMembership | None = None
    raw_bullet = paragraph.get("bullet")
    if isinstance(raw_bullet, dict):
        list_id = raw_bullet.get("listId")
        bullet = ListMembership(
            list_id=list_id if isinstance(list_id, str) else None,
            nesting_level=max(0, _as_int(raw_bullet.get("nestingLevel"))),
        )

    runs: list[TextRun] = []
    for element in _as_list(paragraph.get("elements")):
        text_run = _as_dict(element).get("textRun")
        if not isinstance(text_run, dict):
            continue
        content = text_run.get("content")
        runs.append(TextRun(
            content=content if isinstance(content, str) else "",
            style=read_text_style(text_run.get("textStyle")),
        ))

    return Paragraph(named_style=named_style, bullet=bullet, runs=tuple(runs))


def read_text_style(style: Any) -> TextStyle:
    """Read a ``textStyle`` object.

    A ``link`` object without a ``url`` (heading or bookmark links) reads
    as ``link_url=""``: the run counts as linked but renders no link.
    """
    style = _as_dict(style)
    link_url: str | None = None
    if isinstance(style.get("link"), dict):
        url = style["link"].get("url")
        link_url = url if isinstance(url, str) else ""
    font_family = _as_dict(style.get("weightedFontFamily")).get("fontFamily")
    return TextStyle(
        bold=style.get("bold") is True,
        italic=style.get("italic") is True,
        strikethrough=style.get("strikethrough") is True,
        underline=style.get("underline") is True,
        link_url=link_url,
        font_family=font_family if isinstance(font_family, str) else None,
    )


def read_table(table: dict) -> Table:
    """Read a ``table`` object into rows of cells.

    Rows without a ``tableCells`` array read as empty rows.
    """
    rows: list[tuple[TableCell, ...]] = []
    for raw_row in _as_list(table.get("tableRows")):
        cells = tuple(
            _read_cell(_as_dict(raw_cell))
            for raw_cell in _as_list(_as_dict(raw_row).get("tableCells"))
        )
        rows.append(cells)
    return Table(rows=tuple(rows))


def _read_cell(cell: dict) -> TableCell:
    color = _as_dict(
        _as_dict(_as_dict(cell.get("tableCellStyle")).get("backgroundColor")).get("color")
    )
    background: RgbColor | None = None
    rgb = color.get("rgbColor")
    if isinstance(rgb, dict):
        background = RgbColor(
            red=_as_float(rgb.get("red")),
            green=_as_float(rgb.get("green")),
            blue=_as_float(rgb.get("blue")),
        )
    return TableCell(content=read_blocks(cell.get("content")), background=background)


def read_lists(lists: Any) -> dict[str, ListDefinition]:
    """Read the ``lists`` mapping into :class:`ListDefinition` objects."""
    result: dict[str, ListDefinition] = {}
    for list_id, definition in _as_dict(lists).items():
        levels = _as_list(
            _as_dict(_as_dict(definition).get("listProperties")).get("nestingLevels")
        )
        result[list_id] = ListDefinition(
            nesting_levels=tuple(_read_nesting_level(_as_dict(level)) for level in levels),
        )
    return result


def _read_nesting_level(level: dict) -> NestingLevel:
    glyph_type = level.get("glyphType")
    glyph_symbol = level.get("glyphSymbol")
    return NestingLevel(
        glyph_type=glyph_type if isinstance(glyph_type, str) else None,
        glyph_symbol=glyph_symbol if isinstance(glyph_symbol, str) else None,
    )


# ---------------------------------------------------------------------------
# Tabs
# ---------------------------------------------------------------------------

def select_tab(document: Any, tab_id: str | None = None) -> dict:
    """Return the ``{"body", "lists"}`` subset of one document tab.

    Parameters
    ----------
    document:
        A ``documents.get`` response.  Untabbed documents (no ``tabs``
        array) are returned unchanged when *tab_id* is ``None``.
    tab_id:
        ``tabProperties.tabId`` to select, searched depth-first through
        ``childTabs``.  ``None`` selects the first tab.

    Raises
    ------
    DocsmdTabNotFoundError
        If *tab_id* is given and no tab carries it.
    """
    document = _as_dict(document)
    tabs = _as_list(document.get("tabs"))

    if tab_id is None:
        if not tabs:
            return document
        return _tab_subset(_as_dict(tabs[0]))

    seen: list[str] = []
    for tab in _iter_tabs(tabs):
        current = _as_dict(tab.get("tabProperties")).get("tabId")
        if isinstance(current, str):
            seen.append(current)
        if current == tab_id:
            return _tab_subset(tab)

    raise DocsmdTabNotFoundError(
        message=f"Tab '{tab_id}' not found in document",
        context={"tab_id": tab_id, "available_tab_ids": seen},
    )


def _iter_tabs(tabs: list):
    for tab in tabs:
        tab = _as_dict(tab)
        yield tab
        yield from _iter_tabs(_as_list(tab.get("childTabs")))


def _tab_subset(tab: dict) -> dict:
    document_tab = _as_dict(tab.get("documentTab"))
    return {
        "body": _as_dict(document_tab.get("body")),
        "lists": _as_dict(document_tab.get("lists")),
    }
