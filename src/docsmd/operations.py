"""Edit operations emitted by the reverse compiler.

Each operation is one positional instruction against a remote Google
Docs document.  Offsets are absolute UTF-16 indices that already account
for every earlier operation in the same sequence, so a sequence is only
valid when applied in order and as a whole.

Every operation serialises to one or more ``batchUpdate`` request dicts
via :meth:`to_requests`::

    {"insertText": {"location": {"index": 1}, "text": "Hello\\n"}}

:func:`build_batch_update` wraps a sequence into the request body::

    {"requests": [...]}
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from docsmd.models import ListKind, RgbColor, TextStyle
from docsmd.utils.text import utf16_len


class OpType(str, Enum):
    """Operation kinds, named after the ``batchUpdate`` request they produce."""

    INSERT_TEXT = "insertText"
    UPDATE_PARAGRAPH_STYLE = "updateParagraphStyle"
    UPDATE_TEXT_STYLE = "updateTextStyle"
    CREATE_PARAGRAPH_BULLETS = "createParagraphBullets"
    DELETE_PARAGRAPH_BULLETS = "deleteParagraphBullets"
    INSERT_TABLE = "insertTable"
    UPDATE_TABLE_CELL_STYLE = "updateTableCellStyle"
    INSERT_SECTION_BREAK = "insertSectionBreak"


# Every field a reset clears.  Omitting a field from textStyle while
# naming it in the mask resets it to the inherited value.
_ALL_TEXT_FIELDS: tuple[str, ...] = (
    "bold",
    "italic",
    "strikethrough",
    "underline",
    "link",
    "weightedFontFamily",
)


def _range(start_index: int, end_index: int) -> dict:
    return {"startIndex": start_index, "endIndex": end_index}


def _text_style_payload(style: TextStyle) -> tuple[dict, list[str]]:
    """Build the ``textStyle`` object and field mask for the set attributes."""
    payload: dict = {}
    fields: list[str] = []
    for flag in ("bold", "italic", "strikethrough", "underline"):
        if getattr(style, flag):
            payload[flag] = True
            fields.append(flag)
    if style.link_url:
        payload["link"] = {"url": style.link_url}
        fields.append("link")
    if style.font_family:
        payload["weightedFontFamily"] = {"fontFamily": style.font_family, "weight": 400}
        fields.append("weightedFontFamily")
    return payload, fields


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InsertText:
    """Insert literal *text* at *index*."""

    op_type: ClassVar[OpType] = OpType.INSERT_TEXT

    index: int
    text: str

    @property
    def length(self) -> int:
        """UTF-16 length; the cursor advances by this much."""
        return utf16_len(self.text)

    def to_requests(self) -> list[dict]:
        return [{"insertText": {"location": {"index": self.index}, "text": self.text}}]


@dataclass(frozen=True)
class UpdateParagraphStyle:
    """Set the named paragraph style over ``[start_index, end_index)``."""

    op_type: ClassVar[OpType] = OpType.UPDATE_PARAGRAPH_STYLE

    start_index: int
    end_index: int
    named_style: str

    def to_requests(self) -> list[dict]:
        return [{
            "updateParagraphStyle": {
                "range": _range(self.start_index, self.end_index),
                "paragraphStyle": {"namedStyleType": self.named_style},
                "fields": "namedStyleType",
            }
        }]


@dataclass(frozen=True)
class UpdateTextStyle:
    """Apply *style* to ``[start_index, end_index)``.

    With ``reset=True`` every inline field is named in the mask, so
    attributes not set on *style* are cleared rather than left alone.
    """

    op_type: ClassVar[OpType] = OpType.UPDATE_TEXT_STYLE

    start_index: int
    end_index: int
    style: TextStyle
    reset: bool = False

    def to_requests(self) -> list[dict]:
        payload, fields = _text_style_payload(self.style)
        if self.reset:
            fields = list(_ALL_TEXT_FIELDS)
        return [{
            "updateTextStyle": {
                "range": _range(self.start_index, self.end_index),
                "textStyle": payload,
                "fields": ",".join(fields),
            }
        }]


@dataclass(frozen=True)
class CreateParagraphBullets:
    """Turn the paragraphs in ``[start_index, end_index)`` into list items.

    ``bullet_preset`` is resolved from *list_kind* by the compiler.  The
    API derives bullet nesting from leading tabs only, so for
    ``nesting_level > 0`` the depth is also expressed as an indent.
    """

    op_type: ClassVar[OpType] = OpType.CREATE_PARAGRAPH_BULLETS

    start_index: int
    end_index: int
    nesting_level: int
    list_kind: ListKind
    bullet_preset: str
    indent_pt: float = 36.0

    def to_requests(self) -> list[dict]:
        requests: list[dict] = [{
            "createParagraphBullets": {
                "range": _range(self.start_index, self.end_index),
                "bulletPreset": self.bullet_preset,
            }
        }]
        if self.nesting_level > 0:
            indent_start = self.indent_pt * (self.nesting_level + 1)
            requests.append({
                "updateParagraphStyle": {
                    "range": _range(self.start_index, self.end_index),
                    "paragraphStyle": {
                        "indentStart": {"magnitude": indent_start, "unit": "PT"},
                        "indentFirstLine": {
                            "magnitude": indent_start - self.indent_pt / 2,
                            "unit": "PT",
                        },
                    },
                    "fields": "indentStart,indentFirstLine",
                }
            })
        return requests


@dataclass(frozen=True)
class DeleteParagraphBullets:
    """Remove list membership from the paragraphs in the range."""

    op_type: ClassVar[OpType] = OpType.DELETE_PARAGRAPH_BULLETS

    start_index: int
    end_index: int

    def to_requests(self) -> list[dict]:
        return [{"deleteParagraphBullets": {"range": _range(self.start_index, self.end_index)}}]


@dataclass(frozen=True)
class InsertTable:
    """Insert an empty ``rows`` x ``columns`` table at *index*."""

    op_type: ClassVar[OpType] = OpType.INSERT_TABLE

    index: int
    rows: int
    columns: int

    def to_requests(self) -> list[dict]:
        return [{
            "insertTable": {
                "location": {"index": self.index},
                "rows": self.rows,
                "columns": self.columns,
            }
        }]


@dataclass(frozen=True)
class UpdateTableCellStyle:
    """Set the background of one cell of the table starting at *table_start_index*."""

    op_type: ClassVar[OpType] = OpType.UPDATE_TABLE_CELL_STYLE

    table_start_index: int
    row_index: int
    column_index: int
    background: RgbColor

    def to_requests(self) -> list[dict]:
        return [{
            "updateTableCellStyle": {
                "tableRange": {
                    "tableCellLocation": {
                        "tableStartLocation": {"index": self.table_start_index},
                        "rowIndex": self.row_index,
                        "columnIndex": self.column_index,
                    },
                    "rowSpan": 1,
                    "columnSpan": 1,
                },
                "tableCellStyle": {
                    "backgroundColor": {"color": {"rgbColor": self.background.to_api()}},
                },
                "fields": "backgroundColor",
            }
        }]


@dataclass(frozen=True)
class InsertSectionBreak:
    """Insert a section break at *index* (preceded by a newline)."""

    op_type: ClassVar[OpType] = OpType.INSERT_SECTION_BREAK

    index: int
    section_type: str = "CONTINUOUS"

    def to_requests(self) -> list[dict]:
        return [{
            "insertSectionBreak": {
                "location": {"index": self.index},
                "sectionType": self.section_type,
            }
        }]


EditOperation = Union[
    InsertText,
    UpdateParagraphStyle,
    UpdateTextStyle,
    CreateParagraphBullets,
    DeleteParagraphBullets,
    InsertTable,
    UpdateTableCellStyle,
    InsertSectionBreak,
]


def build_batch_update(operations: list[EditOperation]) -> dict:
    """Flatten *operations* into one ``batchUpdate`` body, preserving order."""
    requests: list[dict] = []
    for op in operations:
        requests.extend(op.to_requests())
    return {"requests": requests}
