"""
Tool-agnostic tracing abstraction.

This module defines the Tracer interface that every resolvable implementation
must satisfy. The resolver only ever checks ``isinstance(obj, Tracer)``, so
third-party tracers either subclass ``Tracer`` or call ``Tracer.register``.

Tracing is strictly passive:
- Never influences execution
- Failures are silent and non-fatal
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional
from dataclasses import dataclass


ObservabilitySink = Callable[[str, Dict[str, Any]], None]


@dataclass
class TraceMetadata:
    """Metadata associated with a trace span or event."""

    trace_id: str  # Mandatory: globally unique identifier
    parent_span_id: Optional[str] = None
    service_name: Optional[str] = None


class Tracer(ABC):
    """
    Abstract tracing interface.

    Implementations MUST:
    - be constructible with no arguments (the resolver instantiates them that way)
    - never raise from span/event methods
    """

    def __init__(self, observability_sink: Optional[ObservabilitySink] = None):
        self.observability_sink = observability_sink

    @abstractmethod
    def start_span(
        self, name: str, metadata: Dict[str, Any], trace_metadata: TraceMetadata
    ) -> Optional[Any]:
        """
        Start a trace span.

        Args:
            name: Span name (e.g., "http_request", "db_query")
            metadata: Structural metadata (tags)
            trace_metadata: Trace identity

        Returns:
            Span handle for end_span, or None if tracing is disabled
        """
        pass

    @abstractmethod
    def end_span(self, span: Any, status: str, metadata: Dict[str, Any]) -> None:
        """
        End a trace span.

        Args:
            span: Span handle from start_span
            status: "success", "failure", or "skipped"
            metadata: Execution results (duration_ms, error_type, etc.)
        """
        pass

    @abstractmethod
    def record_event(
        self, name: str, metadata: Dict[str, Any], trace_metadata: TraceMetadata
    ) -> None:
        """Record a point-in-time event."""
        pass

    @abstractmethod
    def is_enabled(self) -> bool:
        """
        Check if tracing is enabled.

        Used for: avoiding expensive metadata construction when tracing is disabled
        """
        pass

    def _emit(self, kind: str, payload: Dict[str, Any]) -> None:
        """Forward a span summary to the observability sink, if any."""
        if not self.observability_sink:
            return
        try:
            self.observability_sink(kind, payload)
        except Exception:
            pass  # Observability failure is non-fatal


class NoOpTracer(Tracer):
    """
    No-op tracing implementation.

    Satisfies the Tracer interface but does nothing.
    Used when no tracer could be resolved and the caller asked for a fallback.
    """

    def start_span(
        self, name: str, metadata: Dict[str, Any], trace_metadata: TraceMetadata
    ) -> Optional[Any]:
        """No-op implementation."""
        return None

    def end_span(self, span: Any, status: str, metadata: Dict[str, Any]) -> None:
        """No-op implementation."""
        pass

    def record_event(
        self, name: str, metadata: Dict[str, Any], trace_metadata: TraceMetadata
    ) -> None:
        """No-op implementation."""
        pass

    def is_enabled(self) -> bool:
        """Tracing is disabled."""
        return False
