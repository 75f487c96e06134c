"""
Trace hooks for binding resolution.

The engine reports each stage of a query (validation, arc-place info,
links, candidates, filters) to a trace hook instead of printing. Any
callable with the ``BindingTrace`` signature can be injected; the default
writes debug records to the module logger.

Example:
    trace = RecordingTrace()
    bindings = get_valid_input_bindings(net, "T1", trace=trace)
    for event in trace.events:
        print(event.stage, event.fields)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol, runtime_checkable
import logging

logger = logging.getLogger(__name__)


@runtime_checkable
class BindingTrace(Protocol):
    """Receives one call per resolution stage."""

    def __call__(self, stage: str, **fields: Any) -> None:
        ...


class LoggingTrace:
    """Writes every stage as a debug record."""

    def __init__(self, log: logging.Logger = logger):
        self._log = log

    def __call__(self, stage: str, **fields: Any) -> None:
        if self._log.isEnabledFor(logging.DEBUG):
            self._log.debug("[bindings] %s %s", stage, fields)


@dataclass(frozen=True)
class TraceEvent:
    stage: str
    fields: Dict[str, Any]


@dataclass
class RecordingTrace:
    """Keeps every stage in memory, in call order."""

    events: List[TraceEvent] = field(default_factory=list)

    def __call__(self, stage: str, **fields: Any) -> None:
        self.events.append(TraceEvent(stage, dict(fields)))

    def stages(self) -> List[str]:
        return [event.stage for event in self.events]

    def last(self, stage: str) -> TraceEvent:
        """Return the most recent event for ``stage``.

        Raises:
            LookupError: If the stage was never reported
        """
        for event in reversed(self.events):
            if event.stage == stage:
                return event
        raise LookupError(f"No trace event for stage {stage!r}")

    def clear(self) -> None:
        self.events.clear()
