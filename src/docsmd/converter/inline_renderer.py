"""Inline rendering: Docs text runs to Markdown strings.

Each run is formatted on its own; adjacent runs with identical styles
are not merged, so a styled phrase split across runs renders as
``**a****b**``.

Precedence per run:

1. Code-styled runs become a code span and get nothing else.
2. One trailing newline is held outside every marker.
3. Bold / italic (``***`` when both).
4. Strikethrough wraps the result.
5. Underline (``<u>``) only when the run is not linked.
6. The link wraps everything.

Literal text is not escaped; only link targets are, so that a ``)`` in a
URL does not close the link early.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import AbstractSet

from docsmd.converter.heuristics import is_code_styled
from docsmd.models import TextRun
from docsmd.utils.text import strip_one_trailing_newline


def escape_link_url(url: str) -> str:
    """Percent-encode parentheses so the link target parses as one token."""
    return url.replace("(", "%28").replace(")", "%29")


def render_text_run(run: TextRun, code_fonts: AbstractSet[str]) -> str:
    """Render a single run to Markdown.

    Runs whose content is empty after the trailing newline is removed
    (pure newline runs) are returned unchanged, without stray markers.
    """
    text = run.content
    style = run.style

    if is_code_styled(style, code_fonts):
        code, had_newline = strip_one_trailing_newline(text)
        if code:
            return f"`{code}`" + ("\n" if had_newline else "")
        return text

    content, had_newline = strip_one_trailing_newline(text)
    if not content:
        return text

    formatted = content

    if style.bold and style.italic:
        formatted = f"***{formatted}***"
    elif style.bold:
        formatted = f"**{formatted}**"
    elif style.italic:
        formatted = f"*{formatted}*"

    if style.strikethrough:
        formatted = f"~~{formatted}~~"

    if style.underline and style.link_url is None:
        formatted = f"<u>{formatted}</u>"

    if style.link_url:
        formatted = f"[{formatted}]({escape_link_url(style.link_url)})"

    return formatted + ("\n" if had_newline else "")


def render_runs(runs: Iterable[TextRun], code_fonts: AbstractSet[str]) -> str:
    """Concatenate the independently rendered text of *runs*."""
    return "".join(render_text_run(run, code_fonts) for run in runs)
