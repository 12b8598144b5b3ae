"""Monitoring module for boxpacker.

Provides metrics tracking and export for packing experiments.
"""

from .metrics import (
    BoxMetrics,
    RunMetrics,
    export_to_csv,
    export_to_json,
    format_summary,
)

__all__ = [
    "BoxMetrics",
    "RunMetrics",
    "export_to_csv",
    "export_to_json",
    "format_summary",
]
