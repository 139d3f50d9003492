"""High-level facade over both transforms.

:class:`DocsMarkdownTransformer` wires the document reader, the forward
renderer and the reverse compiler to one :class:`DocsmdConfig`, and adds
timing, metrics and structured logging around each call.  The two
module-level helpers cover the one-shot case.

Usage::

    from docsmd import DocsMarkdownTransformer

    transformer = DocsMarkdownTransformer()
    md = transformer.document_to_markdown(docs_service.documents().get(...).execute())
    body = transformer.markdown_to_batch_update("# Title\\n\\nBody", start_index=1)
"""

from __future__ import annotations

import time
from collections import Counter
from dataclasses import replace
from typing import Any

from docsmd.config import DocsmdConfig
from docsmd.converter.doc_reader import read_document, select_tab
from docsmd.converter.docs_to_md import DocsToMarkdownRenderer
from docsmd.converter.md_to_docs import MarkdownToDocsConverter
from docsmd.models import CompileResult, ConversionWarning, Document
from docsmd.observability import NoopMetricsHook, get_logger

log = get_logger("docsmd.transformer")


class DocsMarkdownTransformer:
    """Bidirectional Docs / Markdown transformer.

    Parameters
    ----------
    config:
        Configuration.  ``None`` builds a default :class:`DocsmdConfig`.
    **kwargs:
        Field overrides applied on top of *config* (or the defaults),
        e.g. ``DocsMarkdownTransformer(code_font_family="Consolas")``.

    Both transforms are pure functions of their inputs; one instance may
    be shared across threads.  :attr:`last_warnings` is the only state
    written per call and is informational.
    """

    def __init__(self, config: DocsmdConfig | None = None, **kwargs: Any) -> None:
        if config is None:
            config = DocsmdConfig(**kwargs)
        elif kwargs:
            config = replace(config, **kwargs)
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()
        self._converter = MarkdownToDocsConverter(config)
        self.last_warnings: list[ConversionWarning] = []

    @property
    def config(self) -> DocsmdConfig:
        return self._config

    # ------------------------------------------------------------------
    # Forward
    # ------------------------------------------------------------------

    def document_to_markdown(
        self,
        document: Document | dict[str, Any],
        tab_id: str | None = None,
    ) -> str:
        """Render a Docs document to Markdown.

        Parameters
        ----------
        document:
            A ``documents.get`` response, a ``{body, lists}`` subset, or
            an already-read :class:`Document`.
        tab_id:
            For tabbed documents, the tab to render.  ``None`` renders the
            first tab.

        Returns
        -------
        str
            Markdown with leading and trailing whitespace trimmed.

        Raises
        ------
        DocsmdTabNotFoundError
            If *tab_id* is given and the document has no such tab.
        """
        t0 = time.monotonic()

        if not isinstance(document, Document):
            document = read_document(select_tab(document, tab_id))

        renderer = DocsToMarkdownRenderer(self._config)
        markdown = renderer.render_document(document)
        elapsed_ms = (time.monotonic() - t0) * 1000

        warnings = renderer.warnings
        skipped = sum(1 for w in warnings if w.code == "UNSUPPORTED_BLOCK")
        self._metrics.timing("docsmd.render_duration_ms", elapsed_ms)
        self._metrics.increment(
            "docsmd.blocks_rendered_total", len(document.content) - skipped,
        )
        if skipped:
            self._metrics.increment("docsmd.blocks_skipped_total", skipped)
        if warnings:
            self._metrics.increment(
                "docsmd.conversion_warnings_total", len(warnings),
                tags={"direction": "forward"},
            )

        log.debug(
            "rendered document",
            extra={
                "extra_fields": {
                    "op": "document_to_markdown",
                    "blocks": len(document.content),
                    "skipped": skipped,
                    "chars": len(markdown),
                    "duration_ms": round(elapsed_ms, 3),
                }
            },
        )
        self.last_warnings = list(warnings)
        return markdown

    # ------------------------------------------------------------------
    # Reverse
    # ------------------------------------------------------------------

    def markdown_to_operations(self, markdown: str, start_index: int = 1) -> CompileResult:
        """Compile Markdown into ordered edit operations.

        The operations must be applied in order and as one batch; see
        :class:`CompileResult`.

        Raises
        ------
        DocsmdValidationError
            If *markdown* is not a string or *start_index* is below 1.
        """
        t0 = time.monotonic()
        result = self._converter.convert(markdown, start_index)
        elapsed_ms = (time.monotonic() - t0) * 1000

        self._metrics.timing("docsmd.compile_duration_ms", elapsed_ms)
        _emit_operation_metrics(self._metrics, result)
        if result.warnings:
            self._metrics.increment(
                "docsmd.conversion_warnings_total", len(result.warnings),
                tags={"direction": "reverse"},
            )

        log.debug(
            "compiled markdown",
            extra={
                "extra_fields": {
                    "op": "markdown_to_operations",
                    "start_index": result.start_index,
                    "end_index": result.end_index,
                    "operations": len(result.operations),
                    "warnings": len(result.warnings),
                    "duration_ms": round(elapsed_ms, 3),
                }
            },
        )
        self.last_warnings = list(result.warnings)
        return result

    def markdown_to_batch_update(self, markdown: str, start_index: int = 1) -> dict:
        """Compile Markdown straight into a ``batchUpdate`` request body."""
        return self.markdown_to_operations(markdown, start_index).to_batch_update()


def _emit_operation_metrics(metrics: Any, result: CompileResult) -> None:
    """Emit ``operations_emitted_total`` counters grouped by operation type."""
    op_counts: Counter[str] = Counter(op.op_type.value for op in result.operations)
    for op_type, count in op_counts.items():
        metrics.increment("docsmd.operations_emitted_total", count, tags={"op": op_type})


# ---------------------------------------------------------------------------
# One-shot helpers
# ---------------------------------------------------------------------------

def docs_json_to_markdown(
    document: dict[str, Any],
    config: DocsmdConfig | None = None,
    *,
    tab_id: str | None = None,
) -> str:
    """Render a raw Docs document to Markdown with a throwaway transformer."""
    return DocsMarkdownTransformer(config).document_to_markdown(document, tab_id=tab_id)


def markdown_to_requests(
    markdown: str,
    start_index: int = 1,
    config: DocsmdConfig | None = None,
) -> list[dict]:
    """Compile Markdown to the ordered list of ``batchUpdate`` requests."""
    body = DocsMarkdownTransformer(config).markdown_to_batch_update(markdown, start_index)
    return body["requests"]
