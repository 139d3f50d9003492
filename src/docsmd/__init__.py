"""docsmd — Bidirectional Google Docs / Markdown transformer.

Public re-exports
-----------------

* **Facade:** :class:`DocsMarkdownTransformer`, :func:`docs_json_to_markdown`,
  :func:`markdown_to_requests`
* **Configuration:** :class:`DocsmdConfig`
* **Errors:** Every :class:`DocsmdError` subclass and :class:`ErrorCode`
* **Models:** Document-tree types, edit operations, and result types

Usage::

    from docsmd import DocsMarkdownTransformer

    transformer = DocsMarkdownTransformer()
    markdown = transformer.document_to_markdown(document_json)
    result = transformer.markdown_to_operations("# Hello\\n\\nWorld", start_index=1)
    body = result.to_batch_update()
"""

from __future__ import annotations

# ── Configuration ───────────────────────────────────────────────────────
from docsmd.config import DEFAULT_CODE_FONT_FAMILIES, DocsmdConfig

# ── Errors ──────────────────────────────────────────────────────────────
from docsmd.errors import (
    DocsmdError,
    DocsmdTabNotFoundError,
    DocsmdValidationError,
    ErrorCode,
)

# ── Models ──────────────────────────────────────────────────────────────
from docsmd.models import (
    BlockKind,
    CompileResult,
    ConversionWarning,
    Document,
    ListDefinition,
    ListKind,
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

# ── Edit operations ─────────────────────────────────────────────────────
from docsmd.operations import (
    CreateParagraphBullets,
    DeleteParagraphBullets,
    EditOperation,
    InsertSectionBreak,
    InsertTable,
    InsertText,
    OpType,
    UpdateParagraphStyle,
    UpdateTableCellStyle,
    UpdateTextStyle,
    build_batch_update,
)

# ── Facade ──────────────────────────────────────────────────────────────
from docsmd.transformer import (
    DocsMarkdownTransformer,
    docs_json_to_markdown,
    markdown_to_requests,
)

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    # Facade
    "DocsMarkdownTransformer",
    "docs_json_to_markdown",
    "markdown_to_requests",
    # Configuration
    "DocsmdConfig",
    "DEFAULT_CODE_FONT_FAMILIES",
    # Error base + code enum
    "DocsmdError",
    "ErrorCode",
    "DocsmdValidationError",
    "DocsmdTabNotFoundError",
    # Models — document tree
    "Document",
    "Paragraph",
    "Table",
    "TableCell",
    "SectionBreak",
    "UnknownBlock",
    "TextRun",
    "TextStyle",
    "RgbColor",
    "ListMembership",
    "ListDefinition",
    "NestingLevel",
    # Models — enums
    "BlockKind",
    "ListKind",
    "OpType",
    # Models — results
    "CompileResult",
    "ConversionWarning",
    # Edit operations
    "EditOperation",
    "InsertText",
    "UpdateParagraphStyle",
    "UpdateTextStyle",
    "CreateParagraphBullets",
    "DeleteParagraphBullets",
    "InsertTable",
    "UpdateTableCellStyle",
    "InsertSectionBreak",
    "build_batch_update",
]
