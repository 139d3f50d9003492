"""Public data models for docsmd.

This module contains the document-tree types read by the forward
renderer, the warning type, enums, and the result of a reverse
compilation.  All types are plain dataclasses with no behaviour beyond
small derived properties; tree types are frozen because a document tree
is immutable once read.

Edit operations live in :mod:`docsmd.operations`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Union

if TYPE_CHECKING:
    from docsmd.operations import EditOperation


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class BlockKind(str, Enum):
    """Structural kind of a top-level (or table-cell) block."""

    PARAGRAPH = "paragraph"
    TABLE = "table"
    SECTION_BREAK = "section_break"
    UNKNOWN = "unknown"
    """Any structural element the reader does not model (e.g. a table of
    contents).  Renderers skip it."""


class ListKind(str, Enum):
    """Whether a list nesting level is numbered or bulleted."""

    ORDERED = "ordered"
    UNORDERED = "unordered"


# ---------------------------------------------------------------------------
# Style records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RgbColor:
    """An RGB color with float components in ``[0, 1]``.

    Missing components in the API payload read as ``0.0``.
    """

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0

    def to_api(self) -> dict:
        return {"red": self.red, "green": self.green, "blue": self.blue}


@dataclass(frozen=True)
class TextStyle:
    """Inline style of a text run.

    Attributes
    ----------
    bold, italic, strikethrough, underline:
        Character formatting flags.
    link_url:
        Hyperlink target, or ``None``.
    font_family:
        ``weightedFontFamily.fontFamily``; used to detect code styling.
    """

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    link_url: str | None = None
    font_family: str | None = None

    @property
    def is_plain(self) -> bool:
        """True when no flag, link, or font is set."""
        return self == _PLAIN_STYLE

    def merge(
        self,
        *,
        bold: bool = False,
        italic: bool = False,
        strikethrough: bool = False,
        underline: bool = False,
        link_url: str | None = None,
        font_family: str | None = None,
    ) -> TextStyle:
        """Return a copy with flags OR-merged and link/font overridden when given."""
        return replace(
            self,
            bold=self.bold or bold,
            italic=self.italic or italic,
            strikethrough=self.strikethrough or strikethrough,
            underline=self.underline or underline,
            link_url=link_url if link_url is not None else self.link_url,
            font_family=font_family if font_family is not None else self.font_family,
        )


_PLAIN_STYLE = TextStyle()


# ---------------------------------------------------------------------------
# Document tree
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TextRun:
    """A span of literal text sharing one style record."""

    content: str = ""
    style: TextStyle = field(default_factory=TextStyle)


@dataclass(frozen=True)
class ListMembership:
    """A paragraph's ``bullet``: which list it belongs to, and how deep."""

    list_id: str | None = None
    nesting_level: int = 0


@dataclass(frozen=True)
class Paragraph:
    """A paragraph block.

    Attributes
    ----------
    named_style:
        ``paragraphStyle.namedStyleType`` (``"TITLE"``, ``"HEADING_2"``,
        ``"NORMAL_TEXT"``...), or ``None``.
    bullet:
        List membership, or ``None`` for a non-list paragraph.
    runs:
        Text runs in document order.  Non-text elements (inline objects,
        page breaks...) are not represented.
    """

    kind: ClassVar[BlockKind] = BlockKind.PARAGRAPH

    named_style: str | None = None
    bullet: ListMembership | None = None
    runs: tuple[TextRun, ...] = ()


@dataclass(frozen=True)
class TableCell:
    """A table cell: its own nested block sequence plus cell style."""

    content: tuple[Block, ...] = ()
    background: RgbColor | None = None


@dataclass(frozen=True)
class Table:
    """A table as rows of cells."""

    kind: ClassVar[BlockKind] = BlockKind.TABLE

    rows: tuple[tuple[TableCell, ...], ...] = ()

    @property
    def is_single_cell(self) -> bool:
        return len(self.rows) == 1 and len(self.rows[0]) == 1


@dataclass(frozen=True)
class SectionBreak:
    """A section break block."""

    kind: ClassVar[BlockKind] = BlockKind.SECTION_BREAK


@dataclass(frozen=True)
class UnknownBlock:
    """A structural element the reader does not model.

    Attributes
    ----------
    element_keys:
        The keys of the raw element, kept for diagnostics.
    """

    kind: ClassVar[BlockKind] = BlockKind.UNKNOWN

    element_keys: tuple[str, ...] = ()


Block = Union[Paragraph, Table, SectionBreak, UnknownBlock]


@dataclass(frozen=True)
class NestingLevel:
    """Glyph descriptor for one nesting level of a list definition.

    ``glyph_type`` is set for enumerated levels (``DECIMAL``, ``ALPHA``,
    ``ROMAN``...); ``glyph_symbol`` for bulleted levels.
    """

    glyph_type: str | None = None
    glyph_symbol: str | None = None


@dataclass(frozen=True)
class ListDefinition:
    """A list definition: one :class:`NestingLevel` per 0-based depth."""

    nesting_levels: tuple[NestingLevel, ...] = ()


@dataclass
class Document:
    """A read document: top-level blocks plus the list-definition table."""

    content: tuple[Block, ...] = ()
    lists: dict[str, ListDefinition] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Conversion warnings
# ---------------------------------------------------------------------------

@dataclass
class ConversionWarning:
    """A non-fatal issue encountered during conversion.

    Warnings are accumulated so callers can inspect them after the
    transform completes.

    Attributes
    ----------
    code:
        A machine-readable warning code (e.g. ``"UNSUPPORTED_BLOCK"``).
    message:
        A human-readable description of the issue.
    context:
        Arbitrary structured data for diagnostics.
    """

    code: str
    message: str
    context: dict = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Reverse compilation result
# ---------------------------------------------------------------------------

@dataclass
class CompileResult:
    """Output of the Markdown-to-edit-operations compilation.

    Attributes
    ----------
    operations:
        Edit operations in the exact order they must be applied.  Later
        offsets assume every earlier operation has already been applied,
        so the sequence must be submitted as one atomic batch.
    start_index:
        The offset compilation started at.
    end_index:
        The cursor after the last insertion; callers chain further
        insertions from here.
    warnings:
        Non-fatal issues discovered during compilation.
    """

    operations: list[EditOperation] = field(default_factory=list)
    start_index: int = 1
    end_index: int = 1
    warnings: list[ConversionWarning] = field(default_factory=list)

    def to_batch_update(self) -> dict:
        """Serialise :attr:`operations` into one ``batchUpdate`` body."""
        from docsmd.operations import build_batch_update

        return build_batch_update(self.operations)
