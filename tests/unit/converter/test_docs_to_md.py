"""Tests for DocsToMarkdownRenderer.

Covers block dispatch, heading detection and clamping, list markers and
indentation, tables, section breaks and skipped blocks.
"""

import pytest

from docsmd.config import DocsmdConfig
from docsmd.converter.docs_to_md import DocsToMarkdownRenderer, heading_level
from docsmd.converter.doc_reader import read_document


def make_renderer(**kwargs):
    return DocsToMarkdownRenderer(DocsmdConfig(**kwargs))


def run(content, **text_style):
    return {"textRun": {"content": content, "textStyle": text_style}}


def paragraph(*elements, style=None, bullet=None):
    para = {"elements": list(elements)}
    if style is not None:
        para["paragraphStyle"] = {"namedStyleType": style}
    if bullet is not None:
        para["bullet"] = bullet
    return {"paragraph": para}


def cell(*content, background=None):
    result = {"content": list(content)}
    if background is not None:
        result["tableCellStyle"] = {
            "backgroundColor": {"color": {"rgbColor": background}},
        }
    return result


def table(*rows):
    return {"table": {"tableRows": [{"tableCells": list(r)} for r in rows]}}


def doc(*content, lists=None):
    return {"body": {"content": list(content)}, "lists": lists or {}}


BULLET_LISTS = {
    "kix.bullet": {
        "listProperties": {
            "nestingLevels": [
                {"glyphSymbol": "●"},
                {"glyphSymbol": "○"},
            ],
        },
    },
    "kix.number": {
        "listProperties": {
            "nestingLevels": [
                {"glyphType": "DECIMAL"},
                {"glyphType": "ALPHA"},
            ],
        },
    },
}


class TestHeadingLevel:
    @pytest.mark.parametrize(("style", "expected"), [
        ("TITLE", 1),
        ("SUBTITLE", 2),
        ("HEADING_1", 1),
        ("HEADING_4", 4),
        ("HEADING_9", 9),
    ])
    def test_heading_styles(self, style, expected):
        assert heading_level(style) == expected

    @pytest.mark.parametrize("style", [None, "", "NORMAL_TEXT", "HEADING_0", "HEADING_X"])
    def test_non_heading_styles(self, style):
        assert heading_level(style) is None


class TestEmptyInput:
    def test_missing_body(self, renderer):
        assert renderer.render_document({}) == ""

    def test_malformed_content(self, renderer):
        assert renderer.render_document({"body": {"content": "oops"}}) == ""

    def test_not_a_dict(self, renderer):
        assert renderer.render_document(None) == ""


class TestParagraphs:
    def test_single_paragraph(self, renderer):
        assert renderer.render_document(doc(paragraph(run("Hello\n")))) == "Hello"

    def test_paragraphs_separated_by_blank_line(self, renderer):
        md = renderer.render_document(doc(
            paragraph(run("A\n")),
            paragraph(run("B\n")),
        ))
        assert md == "A\n\nB"

    def test_empty_paragraph_keeps_spacing(self, renderer):
        md = renderer.render_document(doc(
            paragraph(run("A\n")),
            paragraph(run("\n")),
            paragraph(run("B\n")),
        ))
        assert md == "A\n\n\nB"

    def test_whitespace_paragraph_renders_newline(self, renderer):
        md = renderer.render_document(doc(
            paragraph(run("A\n")),
            paragraph(run("   \n")),
            paragraph(run("B\n")),
        ))
        assert md == "A\n\n\nB"

    def test_bold_run_newline_outside_markers(self, renderer):
        md = renderer.render_document(doc(paragraph(run("hi\n", bold=True))))
        assert md == "**hi**"

    def test_mixed_runs(self, renderer):
        md = renderer.render_document(doc(paragraph(
            run("Hello "),
            run("world", italic=True),
            run("!\n"),
        )))
        assert md == "Hello *world*!"

    def test_code_run_uses_configured_fonts(self):
        renderer = make_renderer(
            code_font_families=["Fira Code"], code_font_family="Fira Code",
        )
        md = renderer.render_document(doc(paragraph(
            run("x", weightedFontFamily={"fontFamily": "Fira Code"}),
            run(" and "),
            run("y", weightedFontFamily={"fontFamily": "Consolas"}),
            run("\n"),
        )))
        assert md == "`x` and y"

    def test_accepts_document_instance(self, renderer):
        document = read_document(doc(paragraph(run("Typed\n"))))
        assert renderer.render_document(document) == "Typed"


class TestHeadings:
    @pytest.mark.parametrize(("style", "prefix"), [
        ("TITLE", "#"),
        ("SUBTITLE", "##"),
        ("HEADING_1", "#"),
        ("HEADING_3", "###"),
        ("HEADING_6", "######"),
    ])
    def test_heading_prefix(self, renderer, style, prefix):
        md = renderer.render_document(doc(paragraph(run("Title\n"), style=style)))
        assert md == f"{prefix} Title"

    def test_level_clamped_to_six(self, renderer):
        md = renderer.render_document(doc(paragraph(run("Deep\n"), style="HEADING_9")))
        assert md == "###### Deep"

    def test_heading_zero_is_plain(self, renderer):
        md = renderer.render_document(doc(paragraph(run("Plain\n"), style="HEADING_0")))
        assert md == "Plain"

    def test_empty_heading_falls_through(self, renderer):
        md = renderer.render_document(doc(
            paragraph(run("A\n")),
            paragraph(run("\n"), style="HEADING_2"),
            paragraph(run("B\n")),
        ))
        assert md == "A\n\n\nB"

    def test_heading_followed_by_paragraph(self, renderer):
        md = renderer.render_document(doc(
            paragraph(run("Title\n"), style="HEADING_1"),
            paragraph(run("Body\n"), style="NORMAL_TEXT"),
        ))
        assert md == "# Title\n\nBody"

    def test_heading_keeps_inline_styles(self, renderer):
        md = renderer.render_document(doc(
            paragraph(run("Bold\n", bold=True), style="HEADING_2"),
        ))
        assert md == "## **Bold**"


class TestLists:
    def test_unordered_items_are_contiguous(self, renderer):
        md = renderer.render_document(doc(
            paragraph(run("a\n"), bullet={"listId": "kix.bullet"}),
            paragraph(run("b\n"), bullet={"listId": "kix.bullet"}),
            lists=BULLET_LISTS,
        ))
        assert md == "- a\n- b"

    def test_ordered_items(self, renderer):
        md = renderer.render_document(doc(
            paragraph(run("one\n"), bullet={"listId": "kix.number"}),
            paragraph(run("two\n"), bullet={"listId": "kix.number"}),
            lists=BULLET_LISTS,
        ))
        assert md == "1. one\n1. two"

    def test_nested_indentation(self, renderer):
        md = renderer.render_document(doc(
            paragraph(run("a\n"), bullet={"listId": "kix.bullet"}),
            paragraph(run("b\n"), bullet={"listId": "kix.bullet", "nestingLevel": 1}),
            lists=BULLET_LISTS,
        ))
        assert md == "- a\n  - b"

    def test_kind_resolved_per_level(self, renderer):
        lists = {
            "kix.mixed": {
                "listProperties": {
                    "nestingLevels": [
                        {"glyphType": "DECIMAL"},
                        {"glyphSymbol": "-"},
                    ],
                },
            },
        }
        md = renderer.render_document(doc(
            paragraph(run("a\n"), bullet={"listId": "kix.mixed"}),
            paragraph(run("b\n"), bullet={"listId": "kix.mixed", "nestingLevel": 1}),
            lists=lists,
        ))
        assert md == "1. a\n  - b"

    def test_unknown_list_defaults_to_unordered(self, renderer):
        md = renderer.render_document(doc(
            paragraph(run("a\n"), bullet={"listId": "kix.missing"}),
        ))
        assert md == "- a"

    def test_missing_level_defaults_to_unordered(self, renderer):
        md = renderer.render_document(doc(
            paragraph(run("a\n"), bullet={"listId": "kix.number", "nestingLevel": 5}),
            lists=BULLET_LISTS,
        ))
        # Ten spaces of indent are trimmed with the rest of the output.
        assert md == "- a"

    def test_empty_list_item_renders_newline(self, renderer):
        md = renderer.render_document(doc(
            paragraph(run("a\n"), bullet={"listId": "kix.bullet"}),
            paragraph(run("\n"), bullet={"listId": "kix.bullet"}),
            paragraph(run("b\n"), bullet={"listId": "kix.bullet"}),
            lists=BULLET_LISTS,
        ))
        assert md == "- a\n\n- b"

    def test_list_item_with_link(self, renderer):
        md = renderer.render_document(doc(
            paragraph(
                run("see "),
                run("docs", link={"url": "https://example.com"}),
                run("\n"),
                bullet={"listId": "kix.bullet"},
            ),
            lists=BULLET_LISTS,
        ))
        assert md == "- see [docs](https://example.com)"


class TestTables:
    def test_zero_row_table(self, renderer):
        assert renderer.render_document(doc(table())) == ""

    def test_grid(self, renderer):
        md = renderer.render_document(doc(table(
            [cell(paragraph(run("A\n"))), cell(paragraph(run("B\n")))],
            [cell(paragraph(run("1\n"))), cell(paragraph(run("2\n")))],
        )))
        assert md == "| A | B |\n| --- | --- |\n| 1 | 2 |"

    def test_code_block_by_background(self, renderer):
        md = renderer.render_document(doc(table(
            [cell(
                paragraph(run("print(1)\n")),
                background={"red": 0.95, "green": 0.95, "blue": 0.95},
            )],
        )))
        assert md == "```\nprint(1)\n```"

    def test_code_block_by_font(self, renderer):
        md = renderer.render_document(doc(table(
            [cell(paragraph(run("x = 1\n", weightedFontFamily={"fontFamily": "Consolas"})))],
        )))
        assert md == "```\nx = 1\n```"

    def test_plain_single_cell_is_grid(self, renderer):
        md = renderer.render_document(doc(table([cell(paragraph(run("x\n")))])))
        assert md == "| x |\n| --- |"

    def test_table_between_paragraphs(self, renderer):
        md = renderer.render_document(doc(
            paragraph(run("Before\n")),
            table([cell(paragraph(run("x\n")))]),
            paragraph(run("After\n")),
        ))
        assert md == "Before\n\n\n| x |\n| --- |\n\nAfter"


class TestSectionBreaks:
    def test_leading_section_break(self, renderer):
        md = renderer.render_document(doc(
            {"sectionBreak": {"sectionStyle": {}}},
            paragraph(run("A\n")),
        ))
        assert md == "---\n\nA"

    def test_section_break_between_paragraphs(self, renderer):
        md = renderer.render_document(doc(
            paragraph(run("A\n")),
            {"sectionBreak": {}},
            paragraph(run("B\n")),
        ))
        assert md == "A\n\n\n---\n\nB"


class TestSkippedBlocks:
    def test_unknown_block_skipped_with_warning(self, renderer):
        md = renderer.render_document(doc(
            {"startIndex": 1, "endIndex": 40, "tableOfContents": {"content": []}},
            paragraph(run("A\n")),
        ))
        assert md == "A"
        assert len(renderer.warnings) == 1
        warning = renderer.warnings[0]
        assert warning.code == "UNSUPPORTED_BLOCK"
        assert warning.context == {"element_keys": ["tableOfContents"]}

    def test_warnings_reset_between_calls(self, renderer):
        renderer.render_document(doc({"tableOfContents": {}}))
        assert len(renderer.warnings) == 1
        renderer.render_document(doc(paragraph(run("A\n"))))
        assert renderer.warnings == []

    def test_render_block_without_kind(self, renderer):
        assert renderer.render_block(object()) == ""
        assert renderer.warnings[-1].code == "UNSUPPORTED_BLOCK"
