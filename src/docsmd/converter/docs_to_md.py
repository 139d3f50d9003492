"""Docs document tree to Markdown renderer.

Walks the top-level blocks in order and dispatches on
:class:`~docsmd.models.BlockKind`.  Every block contributes a chunk that
ends in at least one newline, so chunks concatenate without separator
logic; the final string is trimmed.

Usage::

    from docsmd.config import DocsmdConfig
    from docsmd.converter.docs_to_md import DocsToMarkdownRenderer

    renderer = DocsToMarkdownRenderer(DocsmdConfig())
    md = renderer.render_document(docs_json)
"""

from __future__ import annotations

import re
from collections.abc import Callable as _Callable
from typing import Any

from docsmd.config import DocsmdConfig
from docsmd.converter.doc_reader import read_document
from docsmd.converter.inline_renderer import render_runs
from docsmd.converter.lists import list_marker, resolve_list_kind
from docsmd.converter.tables import render_table
from docsmd.models import (
    Block,
    BlockKind,
    ConversionWarning,
    Document,
    ListDefinition,
    Paragraph,
    SectionBreak,
    Table,
)
from docsmd.observability import get_logger

log = get_logger("docsmd.renderer")

MAX_HEADING_LEVEL = 6

_HEADING_STYLE_RE = re.compile(r"^HEADING_(\d+)$")

_FIXED_HEADING_LEVELS: dict[str, int] = {
    "TITLE": 1,
    "SUBTITLE": 2,
}


def heading_level(named_style: str | None) -> int | None:
    """Map a named paragraph style to a heading level.

    ``TITLE`` is 1, ``SUBTITLE`` is 2, ``HEADING_n`` is ``n``.  Anything
    else (``NORMAL_TEXT``, ``HEADING_0``, ``None``) is not a heading.
    The level is not clamped here.
    """
    if not named_style:
        return None
    if named_style in _FIXED_HEADING_LEVELS:
        return _FIXED_HEADING_LEVELS[named_style]
    match = _HEADING_STYLE_RE.match(named_style)
    if match is None:
        return None
    level = int(match.group(1))
    return level if level > 0 else None


class DocsToMarkdownRenderer:
    """Renderer that converts a Docs document tree to Markdown.

    The renderer accumulates :class:`ConversionWarning` instances in
    :attr:`warnings` during a :meth:`render_document` call so that
    callers can see which blocks were skipped.

    Parameters
    ----------
    config:
        Configuration; only ``code_font_families`` affects rendering.
    """

    def __init__(self, config: DocsmdConfig) -> None:
        self._config = config
        self._code_fonts = config.code_font_set
        self._lists: dict[str, ListDefinition] = {}
        self.warnings: list[ConversionWarning] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render_document(self, document: Document | dict[str, Any]) -> str:
        """Render a whole document to a trimmed Markdown string.

        Parameters
        ----------
        document:
            A :class:`Document`, or raw Docs JSON with ``body.content``
            and optional ``lists``.  Missing content renders as ``""``.
        """
        if not isinstance(document, Document):
            document = read_document(document)
        self.warnings = []
        self._lists = document.lists
        return "".join(self.render_block(block) for block in document.content).strip()

    def render_block(self, block: Block) -> str:
        """Render one block; unrecognised kinds render as ``""``."""
        kind = getattr(block, "kind", BlockKind.UNKNOWN)
        renderer = _BLOCK_RENDERERS.get(kind, DocsToMarkdownRenderer._render_unknown)
        return renderer(self, block)

    # ------------------------------------------------------------------
    # Block renderers
    # ------------------------------------------------------------------

    def _render_paragraph(self, paragraph: Paragraph) -> str:
        text = render_runs(paragraph.runs, self._code_fonts).strip()

        level = heading_level(paragraph.named_style)
        if level and text:
            return f"{'#' * min(level, MAX_HEADING_LEVEL)} {text}\n\n"

        bullet = paragraph.bullet
        if bullet is not None and text:
            kind = resolve_list_kind(self._lists, bullet.list_id, bullet.nesting_level)
            indent = "  " * bullet.nesting_level
            return f"{indent}{list_marker(kind)} {text}\n"

        if text:
            return f"{text}\n\n"
        return "\n"

    def _render_table(self, table: Table) -> str:
        return render_table(table, self._code_fonts)

    def _render_section_break(self, block: SectionBreak) -> str:
        return "\n---\n\n"

    def _render_unknown(self, block: Any) -> str:
        keys = list(getattr(block, "element_keys", ()))
        log.debug(
            "skipped unrecognised block",
            extra={"extra_fields": {"element_keys": keys}},
        )
        self.warnings.append(ConversionWarning(
            code="UNSUPPORTED_BLOCK",
            message="Block has no Markdown rendering and was skipped.",
            context={"element_keys": keys},
        ))
        return ""


# ------------------------------------------------------------------
# Block renderer dispatch table
# ------------------------------------------------------------------

_BlockRenderer = _Callable[["DocsToMarkdownRenderer", Any], str]

_BLOCK_RENDERERS: dict[BlockKind, _BlockRenderer] = {
    BlockKind.PARAGRAPH: DocsToMarkdownRenderer._render_paragraph,
    BlockKind.TABLE: DocsToMarkdownRenderer._render_table,
    BlockKind.SECTION_BREAK: DocsToMarkdownRenderer._render_section_break,
    BlockKind.UNKNOWN: DocsToMarkdownRenderer._render_unknown,
}
