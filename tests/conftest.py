"""Shared test fixtures for the docsmd test suite."""

from __future__ import annotations

import pytest

from docsmd.config import DocsmdConfig
from docsmd.converter.docs_to_md import DocsToMarkdownRenderer
from docsmd.converter.md_to_docs import MarkdownToDocsConverter
from docsmd.transformer import DocsMarkdownTransformer


@pytest.fixture
def config() -> DocsmdConfig:
    """Default test configuration."""
    return DocsmdConfig()


@pytest.fixture
def converter(config: DocsmdConfig) -> MarkdownToDocsConverter:
    """Markdown-to-Docs converter using the default test config."""
    return MarkdownToDocsConverter(config)


@pytest.fixture
def renderer(config: DocsmdConfig) -> DocsToMarkdownRenderer:
    """Docs-to-Markdown renderer using the default test config."""
    return DocsToMarkdownRenderer(config)


@pytest.fixture
def transformer(config: DocsmdConfig) -> DocsMarkdownTransformer:
    """Facade using the default test config."""
    return DocsMarkdownTransformer(config)
