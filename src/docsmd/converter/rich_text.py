"""Flatten normalized inline AST tokens into styled text segments.

A segment is a ``(text, TextStyle)`` pair.  The reverse compiler inserts
each segment at its cursor and styles exactly the inserted range, so the
segment list is the whole inline contract between parsing and offsets::

    [("Hello ", TextStyle()), ("world", TextStyle(bold=True))]

Nested inline containers OR-merge their flags into the inherited style
(``***x***`` is bold and italic).  ``<u>`` / ``</u>`` inline tags toggle
underline for the sibling tokens between them; any other raw HTML is
dropped, never inserted as text.
"""

from __future__ import annotations

import re

from docsmd.config import DocsmdConfig
from docsmd.models import ConversionWarning, TextStyle

Segment = tuple[str, TextStyle]

_UNDERLINE_OPEN_RE = re.compile(r"^<u\s*>$", re.IGNORECASE)
_UNDERLINE_CLOSE_RE = re.compile(r"^</u\s*>$", re.IGNORECASE)

# Container tokens that only add a flag to their children's style
_STYLE_FLAGS: dict[str, str] = {
    "strong": "bold",
    "emphasis": "italic",
    "strikethrough": "strikethrough",
}

_BREAK_TEXT: dict[str, str] = {"softbreak": " ", "linebreak": "\n"}


class _SegmentCollector:
    """Walks one inline subtree; nested containers get their own collector."""

    def __init__(
        self,
        config: DocsmdConfig,
        warnings: list[ConversionWarning] | None,
    ) -> None:
        self.config = config
        self.warnings = warnings
        self.segments: list[Segment] = []

    def collect(self, children: list[dict], style: TextStyle) -> list[Segment]:
        underline = False
        for token in children:
            kind = token.get("type", "")
            current = style.merge(underline=True) if underline else style

            if kind == "html_inline":
                tag = token.get("raw", "").strip()
                if _UNDERLINE_OPEN_RE.match(tag):
                    underline = True
                elif _UNDERLINE_CLOSE_RE.match(tag):
                    underline = False
                else:
                    self._warn("HTML_DROPPED", "Inline HTML was dropped.", raw=tag[:200])
                continue

            self._visit(token, kind, current)
        return self.segments

    def _visit(self, token: dict, kind: str, style: TextStyle) -> None:
        attrs = token.get("attrs") or {}
        children = token.get("children", [])

        if kind in _STYLE_FLAGS:
            self.collect(children, style.merge(**{_STYLE_FLAGS[kind]: True}))
        elif kind == "text":
            self._emit(token.get("raw", ""), style)
        elif kind == "codespan":
            self._emit(token.get("raw", ""), style.merge(font_family=self.config.code_font_family))
        elif kind in _BREAK_TEXT:
            self._emit(_BREAK_TEXT[kind], style)
        elif kind == "link":
            url = attrs.get("url", "")
            self.collect(children, style.merge(link_url=url) if url else style)
        elif kind == "image":
            # Images become their alt text, linked to the source
            url = attrs.get("url", "")
            label = extract_text(children) or url or "[image]"
            self._emit(label, style.merge(link_url=url) if url else style)
        else:
            self._warn(
                "UNSUPPORTED_TOKEN",
                f"Unknown inline token type '{kind}' was skipped.",
                token_type=kind,
            )

    def _emit(self, text: str, style: TextStyle) -> None:
        if text:
            self.segments.append((text, style))

    def _warn(self, code: str, message: str, **context: str) -> None:
        if self.warnings is not None:
            self.warnings.append(ConversionWarning(code=code, message=message, context=context))


def build_segments(
    children: list[dict],
    config: DocsmdConfig,
    *,
    style: TextStyle | None = None,
    warnings: list[ConversionWarning] | None = None,
) -> list[Segment]:
    """Convert inline AST tokens to a list of styled text segments.

    Parameters
    ----------
    children:
        Normalized inline tokens: text, strong, emphasis, codespan,
        strikethrough, link, image, softbreak, linebreak, html_inline.
    config:
        ``code_font_family`` styles code spans.
    style:
        Style inherited from an enclosing node.  Defaults to plain.
    warnings:
        Receives a :class:`ConversionWarning` per dropped HTML tag or
        unknown token when given.

    Returns
    -------
    list[Segment]
        Segments in source order, without empty ones.
    """
    return _SegmentCollector(config, warnings).collect(children, style or TextStyle())


def merge_segments(segments: list[Segment]) -> list[Segment]:
    """Join adjacent segments that carry an identical style."""
    merged: list[Segment] = []
    for text, style in segments:
        if merged and merged[-1][1] == style:
            merged[-1] = (merged[-1][0] + text, style)
        else:
            merged.append((text, style))
    return merged


def extract_text(children: list[dict]) -> str:
    """Plain text of inline tokens; breaks become a space, raw HTML nothing."""
    parts: list[str] = []
    for token in children:
        kind = token.get("type", "")
        if kind in _BREAK_TEXT:
            parts.append(" ")
        elif kind in ("html_inline", "html_block"):
            continue
        elif kind == "text" or ("raw" in token and "children" not in token):
            parts.append(token.get("raw", ""))
        elif "children" in token:
            parts.append(extract_text(token["children"]))
    return "".join(parts)
