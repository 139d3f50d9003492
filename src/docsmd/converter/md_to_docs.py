"""Full Markdown-to-Docs compilation pipeline.

:class:`MarkdownToDocsConverter` orchestrates the three-stage pipeline:

1. **Parse** — Mistune parses raw Markdown into an AST.
2. **Normalize** — :class:`ASTNormalizer` maps token types to canonical names.
3. **Compile** — :func:`build_operations` walks the tokens with a running
   cursor and emits positional edit operations, collecting
   :class:`ConversionWarning` along the way.

The result is a :class:`CompileResult` holding the ordered operations,
the offset range they cover, and any non-fatal warnings.
"""

from __future__ import annotations

import json
import sys

from docsmd.config import DocsmdConfig
from docsmd.converter.ast_normalizer import ASTNormalizer
from docsmd.converter.request_builder import build_operations
from docsmd.errors import DocsmdValidationError
from docsmd.models import CompileResult
from docsmd.operations import build_batch_update


class MarkdownToDocsConverter:
    """Convert Markdown text to ordered Docs edit operations.

    Parameters
    ----------
    config:
        Configuration controlling code styling, bullet presets and style
        bleed prevention.

    Examples
    --------
    >>> from docsmd.config import DocsmdConfig
    >>> converter = MarkdownToDocsConverter(DocsmdConfig())
    >>> result = converter.convert("# Hello")
    >>> result.operations[0].text
    'Hello\\n'
    >>> result.end_index
    7
    """

    def __init__(self, config: DocsmdConfig) -> None:
        self._config = config
        self._normalizer = ASTNormalizer()

    def convert(self, markdown: str, start_index: int = 1) -> CompileResult:
        """Full pipeline: parse -> normalize -> compile operations.

        Parameters
        ----------
        markdown:
            Raw Markdown text to convert.
        start_index:
            Absolute document offset the content is inserted at.  Index 1
            is the start of an empty document body.

        Returns
        -------
        CompileResult
            ``operations`` in application order, ``start_index``,
            ``end_index`` (the cursor after the last insertion) and
            ``warnings``.

        Raises
        ------
        DocsmdValidationError
            If *markdown* is not a string or *start_index* is below 1.
        """
        if not isinstance(markdown, str):
            raise DocsmdValidationError(
                message=f"markdown must be a str, got {type(markdown).__name__}",
                context={"field": "markdown", "value": type(markdown).__name__,
                         "constraint": "str"},
            )
        if isinstance(start_index, bool) or not isinstance(start_index, int) or start_index < 1:
            raise DocsmdValidationError(
                message=f"start_index must be an int >= 1, got {start_index!r}",
                context={"field": "start_index", "value": start_index,
                         "constraint": ">= 1"},
            )

        # Stage 1 & 2: Parse and normalize
        tokens = self._normalizer.parse(markdown)

        if self._config.debug_dump_ast:
            print(
                "[docsmd] Normalized AST:",
                json.dumps(tokens, indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        # Stage 3: Compile edit operations
        operations, end_index, warnings = build_operations(
            tokens, self._config, start_index,
        )

        if self._config.debug_dump_requests:
            print(
                "[docsmd] batchUpdate body:",
                json.dumps(build_batch_update(operations), indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        return CompileResult(
            operations=operations,
            start_index=start_index,
            end_index=end_index,
            warnings=warnings,
        )
