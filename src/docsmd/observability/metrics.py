"""Pluggable metrics for the two transforms.

:class:`~docsmd.transformer.DocsMarkdownTransformer` reports to whatever object
``DocsmdConfig(metrics=...)`` holds, as long as it has the three methods
of :class:`MetricsHook`.  Nothing is reported anywhere by default.

Names reported per call:

=====================================  ========  ===================
name                                   kind      tags
=====================================  ========  ===================
``docsmd.render_duration_ms``          timing
``docsmd.blocks_rendered_total``       counter
``docsmd.blocks_skipped_total``        counter
``docsmd.compile_duration_ms``         timing
``docsmd.operations_emitted_total``    counter   ``op``
``docsmd.conversion_warnings_total``   counter   ``direction``
=====================================  ========  ===================

``gauge`` is part of the interface for adapters that forward to a
StatsD-style client; the transforms themselves do not call it.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

Tags = dict[str, str]


@runtime_checkable
class MetricsHook(Protocol):
    """Structural type for a metrics backend.

    ``isinstance(backend, MetricsHook)`` checks only that the three methods
    exist.  *tags* is ``None`` when a data point has no tags.
    """

    def increment(self, name: str, value: int = 1, tags: Tags | None = None) -> None:
        """Add *value* to the counter *name*."""
        ...

    def timing(self, name: str, ms: float, tags: Tags | None = None) -> None:
        """Record one duration sample, in milliseconds."""
        ...

    def gauge(self, name: str, value: float, tags: Tags | None = None) -> None:
        ...


class NoopMetricsHook:
    """Backend used when none is configured; every call does nothing."""

    __slots__ = ()

    def increment(self, name: str, value: int = 1, tags: Tags | None = None) -> None:
        return None

    def timing(self, name: str, ms: float, tags: Tags | None = None) -> None:
        return None

    def gauge(self, name: str, value: float, tags: Tags | None = None) -> None:
        return None
