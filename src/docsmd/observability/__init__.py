"""JSON log formatting and the metrics backend interface used by the transforms."""

from __future__ import annotations

from .logger import StructuredFormatter, get_logger
from .metrics import MetricsHook, NoopMetricsHook, Tags

__all__ = [
    "MetricsHook",
    "NoopMetricsHook",
    "StructuredFormatter",
    "Tags",
    "get_logger",
]
