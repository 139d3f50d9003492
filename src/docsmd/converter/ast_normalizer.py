"""Parse Markdown and normalize to canonical AST tokens.

Wraps mistune v3's AST renderer.  The compiler only ever sees the
canonical token names below; mistune's internal names are folded into
them here.

Canonical block tokens:
    heading, paragraph, block_quote, list, list_item, block_code, table,
    thematic_break, html_block

Canonical inline tokens:
    text, strong, emphasis, codespan, strikethrough, link, image,
    softbreak, linebreak, html_inline

Every token keeps its ``attrs``.  Leaf tokens carry their source in
``raw`` and never have children.  Any other type (table parts, or a
token a future plugin introduces) keeps its own name, so the compiler
can either consume it or report it as unsupported.
"""

from __future__ import annotations

import mistune

# mistune name -> canonical name, for the types whose names differ
_TYPE_ALIASES: dict[str, str] = {
    # Tight list items wrap their inline content in block_text
    "block_text": "paragraph",
    "block_html": "html_block",
    "inline_html": "html_inline",
    "raw": "text",
}

# Leaf tokens whose content is the literal source in ``raw``
_RAW_TYPES: frozenset[str] = frozenset({
    "text",
    "codespan",
    "block_code",
    "html_block",
    "html_inline",
})

_CHILDLESS_TYPES: frozenset[str] = _RAW_TYPES | {"softbreak", "linebreak", "thematic_break"}

_DROPPED_TYPES: frozenset[str] = frozenset({"blank_line"})


class ASTNormalizer:
    """Parse Markdown and normalize to canonical AST tokens.

    Examples
    --------
    >>> ASTNormalizer().parse("# Hi")
    [{'type': 'heading', 'attrs': {'level': 1}, 'children': [{'type': 'text', 'raw': 'Hi'}]}]
    """

    def __init__(self) -> None:
        self._parser = mistune.create_markdown(
            renderer="ast",
            plugins=["strikethrough", "table", "url"],
        )

    def parse(self, markdown: str) -> list[dict]:
        """Parse markdown and return the normalized token list."""
        raw_tokens = self._parser(markdown)
        if isinstance(raw_tokens, str):
            return []
        return self._normalize_tokens(raw_tokens)

    def _normalize_tokens(self, tokens: list[dict]) -> list[dict]:
        normalized = (self._normalize_token(token) for token in tokens)
        return [token for token in normalized if token is not None]

    def _normalize_token(self, token: dict) -> dict | None:
        """Return the canonical form of *token*, or None to drop it."""
        raw_type = token.get("type") or "unknown"
        if raw_type in _DROPPED_TYPES:
            return None

        token_type = _TYPE_ALIASES.get(raw_type, raw_type)
        result: dict = {"type": token_type}

        attrs = token.get("attrs")
        if attrs:
            result["attrs"] = dict(attrs)

        if token_type in _RAW_TYPES or "raw" in token:
            result["raw"] = self._leaf_source(token, token_type)

        children = token.get("children")
        if children and token_type not in _CHILDLESS_TYPES:
            result["children"] = self._normalize_tokens(children)

        return result

    @staticmethod
    def _leaf_source(token: dict, token_type: str) -> str:
        raw = token.get("raw", "")
        # Fenced code keeps the newline before the closing fence
        if token_type == "block_code" and raw.endswith("\n"):
            return raw[:-1]
        return raw
