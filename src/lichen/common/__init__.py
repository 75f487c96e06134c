"""
Common utilities for Lichen.

Shared components used by the model and binding layers.
"""

from lichen.common.tracing import (
    BindingTrace,
    LoggingTrace,
    RecordingTrace,
    TraceEvent,
)

__all__ = [
    "BindingTrace",
    "LoggingTrace",
    "RecordingTrace",
    "TraceEvent",
]
