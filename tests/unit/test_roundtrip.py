"""Round-trip tests: Docs JSON -> Markdown -> edit operations -> Docs JSON.

The operations are applied to a small in-memory paragraph document that
models just enough of the Docs API (text insertion, paragraph and text
styles, bullets) to read the result back through the forward renderer.
Tables and section breaks are covered by the compiler tests instead.
"""

from __future__ import annotations

import pytest

from docsmd.config import DocsmdConfig
from docsmd.converter.docs_to_md import DocsToMarkdownRenderer
from docsmd.converter.md_to_docs import MarkdownToDocsConverter
from docsmd.models import ListKind, TextStyle
from docsmd.operations import (
    CreateParagraphBullets,
    DeleteParagraphBullets,
    InsertText,
    UpdateParagraphStyle,
    UpdateTextStyle,
)

ORDERED_LIST_ID = "list.ordered"
UNORDERED_LIST_ID = "list.unordered"

LISTS = {
    ORDERED_LIST_ID: {"listProperties": {"nestingLevels": [
        {"glyphType": glyph} for glyph in ("DECIMAL", "ALPHA", "ROMAN") * 3
    ]}},
    UNORDERED_LIST_ID: {"listProperties": {"nestingLevels": [
        {"glyphSymbol": symbol} for symbol in ("●", "○", "■") * 3
    ]}},
}


class SimulatedDocument:
    """Paragraph-only document body that applies edit operations in order.

    Paragraph attributes live on the paragraph's terminating newline, so
    they move with the text as later insertions shift it.
    """

    def __init__(self) -> None:
        # An empty body holds a single newline at index 1.
        self.chars: list[str] = ["\n"]
        self.styles: list[TextStyle] = [TextStyle()]
        self.named: list[str | None] = [None]
        self.bullets: list[tuple[str, int] | None] = [None]

    def apply(self, operations) -> SimulatedDocument:
        for op in operations:
            handler = getattr(self, f"_apply_{type(op).__name__}")
            handler(op)
        return self

    def _newlines_in(self, start: int, end: int) -> list[int]:
        return [
            pos for pos in range(start - 1, end - 1)
            if self.chars[pos] == "\n"
        ]

    def _apply_InsertText(self, op: InsertText) -> None:
        pos = op.index - 1
        assert 0 <= pos <= len(self.chars) - 1, "insert outside the body"
        # One position per UTF-16 code unit; astral characters take two.
        units: list[str] = []
        for ch in op.text:
            units.append(ch)
            if ord(ch) > 0xFFFF:
                units.append("")
        n = len(units)
        self.chars[pos:pos] = units
        self.styles[pos:pos] = [TextStyle()] * n
        self.named[pos:pos] = [None] * n
        self.bullets[pos:pos] = [None] * n

    def _apply_UpdateTextStyle(self, op: UpdateTextStyle) -> None:
        for pos in range(op.start_index - 1, op.end_index - 1):
            self.styles[pos] = op.style

    def _apply_UpdateParagraphStyle(self, op: UpdateParagraphStyle) -> None:
        for pos in self._newlines_in(op.start_index, op.end_index):
            self.named[pos] = op.named_style

    def _apply_CreateParagraphBullets(self, op: CreateParagraphBullets) -> None:
        list_id = ORDERED_LIST_ID if op.list_kind is ListKind.ORDERED else UNORDERED_LIST_ID
        for pos in self._newlines_in(op.start_index, op.end_index):
            self.bullets[pos] = (list_id, op.nesting_level)

    def _apply_DeleteParagraphBullets(self, op: DeleteParagraphBullets) -> None:
        for pos in self._newlines_in(op.start_index, op.end_index):
            self.bullets[pos] = None

    def to_json(self) -> dict:
        content = []
        runs: list[dict] = []
        for pos, ch in enumerate(self.chars):
            style = _style_json(self.styles[pos])
            if runs and runs[-1]["textRun"]["textStyle"] == style:
                runs[-1]["textRun"]["content"] += ch
            else:
                runs.append({"textRun": {"content": ch, "textStyle": style}})
            if ch == "\n":
                paragraph: dict = {"elements": runs}
                if self.named[pos]:
                    paragraph["paragraphStyle"] = {"namedStyleType": self.named[pos]}
                if self.bullets[pos]:
                    list_id, level = self.bullets[pos]
                    paragraph["bullet"] = {"listId": list_id, "nestingLevel": level}
                content.append({"paragraph": paragraph})
                runs = []
        return {"body": {"content": content}, "lists": LISTS}


def _style_json(style: TextStyle) -> dict:
    payload: dict = {}
    for flag in ("bold", "italic", "strikethrough", "underline"):
        if getattr(style, flag):
            payload[flag] = True
    if style.link_url:
        payload["link"] = {"url": style.link_url}
    if style.font_family:
        payload["weightedFontFamily"] = {"fontFamily": style.font_family}
    return payload


def _bullet_paragraph(text: str, list_id: str, level: int) -> dict:
    return {"paragraph": {
        "elements": [{"textRun": {"content": text + "\n", "textStyle": {}}}],
        "bullet": {"listId": list_id, "nestingLevel": level},
    }}


@pytest.fixture
def pipeline():
    config = DocsmdConfig()
    renderer = DocsToMarkdownRenderer(config)
    converter = MarkdownToDocsConverter(config)

    def run(markdown: str):
        result = converter.convert(markdown)
        document = SimulatedDocument().apply(result.operations).to_json()
        return result, renderer.render_document(document)

    return run


class TestNestedListRoundTrip:
    def test_depth_and_kind_preserved(self):
        document = {
            "body": {"content": [
                _bullet_paragraph("top", UNORDERED_LIST_ID, 0),
                _bullet_paragraph("child", UNORDERED_LIST_ID, 1),
                _bullet_paragraph("sibling", UNORDERED_LIST_ID, 1),
                _bullet_paragraph("back", UNORDERED_LIST_ID, 0),
            ]},
            "lists": LISTS,
        }
        config = DocsmdConfig()
        markdown = DocsToMarkdownRenderer(config).render_document(document)
        assert markdown == "- top\n  - child\n  - sibling\n- back"

        result = MarkdownToDocsConverter(config).convert(markdown)
        bullets = [op for op in result.operations if isinstance(op, CreateParagraphBullets)]
        assert [(b.nesting_level, b.list_kind) for b in bullets] == [
            (0, ListKind.UNORDERED),
            (1, ListKind.UNORDERED),
            (1, ListKind.UNORDERED),
            (0, ListKind.UNORDERED),
        ]

    def test_rendered_again_identically(self, pipeline):
        markdown = "- top\n  - child\n- back"
        _, rendered = pipeline(markdown)
        assert rendered == markdown

    def test_ordered_kind_survives(self, pipeline):
        markdown = "1. one\n1. two"
        result, rendered = pipeline(markdown)
        assert rendered == markdown
        kinds = {
            op.list_kind for op in result.operations if isinstance(op, CreateParagraphBullets)
        }
        assert kinds == {ListKind.ORDERED}


class TestDocumentRoundTrip:
    @pytest.mark.parametrize("markdown", [
        "# Title\n\nBody text",
        "## Sub\n\n### Deeper\n\nText",
        "Some **bold**, *italic* and ***both***.",
        "~~gone~~ and <u>under</u>",
        "Call `run()` now",
        "[site](https://example.com) and more",
        "First paragraph\n\nSecond paragraph",
        "Intro\n\n- a\n- b",
        "Smile \U0001f600 please\n\nnext",
    ])
    def test_stable(self, pipeline, markdown):
        _, rendered = pipeline(markdown)
        assert rendered == markdown

    def test_heading_style_does_not_bleed(self, pipeline):
        result, rendered = pipeline("# Title\n\nBody")
        assert rendered == "# Title\n\nBody"
        assert UpdateParagraphStyle(7, 12, "NORMAL_TEXT") in result.operations

    def test_style_does_not_bleed_into_plain_text(self, pipeline):
        _, rendered = pipeline("**bold** plain")
        assert rendered == "**bold** plain"
