"""Docs ↔ Markdown conversion pipeline.

Public API:

- :class:`DocsToMarkdownRenderer` — Docs document tree → Markdown.
- :class:`MarkdownToDocsConverter` — Markdown → Docs edit operations.
- :class:`ASTNormalizer` — parse and normalize Markdown to canonical AST.
- :func:`build_operations` — compile normalized AST to edit operations.
- :func:`build_segments` — flatten inline AST tokens to styled segments.
- :func:`read_document` — read raw Docs JSON into the document model.
- :func:`select_tab` — extract one tab of a tabbed document.
"""

from docsmd.converter.ast_normalizer import ASTNormalizer
from docsmd.converter.doc_reader import read_document, select_tab
from docsmd.converter.docs_to_md import DocsToMarkdownRenderer
from docsmd.converter.md_to_docs import MarkdownToDocsConverter
from docsmd.converter.request_builder import build_operations
from docsmd.converter.rich_text import build_segments

__all__ = [
    "ASTNormalizer",
    "DocsToMarkdownRenderer",
    "MarkdownToDocsConverter",
    "build_operations",
    "build_segments",
    "read_document",
    "select_tab",
]
