"""
In-memory span buffering shared by the built-in backend tracers.

Finished spans are formatted for the backend and kept in a bounded buffer
(FIFO eviction). Shipping them to a collector happens at caller level.
"""

import threading
import time
from abc import abstractmethod
from collections import deque
from typing import Any, Dict, List, Optional
from uuid import uuid4

from tracer_resolver.tracing.tracer import ObservabilitySink, TraceMetadata, Tracer

MAX_VALUE_LENGTH = 256


class BufferedTracer(Tracer):
    """
    Tracer that records finished spans into a bounded buffer.

    Subclasses provide the backend endpoint and the span wire shape.
    """

    def __init__(
        self,
        endpoint: str,
        observability_sink: Optional[ObservabilitySink] = None,
        max_spans: int = 1000,
    ):
        super().__init__(observability_sink)
        self.endpoint = endpoint.rstrip("/")
        self._finished: deque = deque(maxlen=max_spans)
        self._lock = threading.Lock()

    def start_span(
        self, name: str, metadata: Dict[str, Any], trace_metadata: TraceMetadata
    ) -> Optional[Any]:
        try:
            span = {
                "trace_id": trace_metadata.trace_id,
                "span_id": uuid4().hex[:16],
                "parent_span_id": trace_metadata.parent_span_id,
                "service_name": trace_metadata.service_name,
                "span_name": name,
                "tags": self._filter_safe_metadata(metadata),
                "start_time": time.time(),
            }
            self._emit("span_start", {"trace_id": span["trace_id"], "span_name": name})
            return span
        except Exception:
            # Tracing failure is non-fatal
            return None

    def end_span(self, span: Any, status: str, metadata: Dict[str, Any]) -> None:
        if span is None:
            return

        try:
            span["end_time"] = time.time()
            span["status"] = status
            span["tags"].update(self._filter_safe_metadata(metadata))

            formatted = self._format_span(span)
            with self._lock:
                self._finished.append(formatted)

            self._emit(
                "span_end",
                {
                    "trace_id": span.get("trace_id"),
                    "span_name": span.get("span_name"),
                    "status": status,
                    "duration_ms": (span["end_time"] - span["start_time"]) * 1000,
                },
            )
        except Exception:
            pass

    def record_event(
        self, name: str, metadata: Dict[str, Any], trace_metadata: TraceMetadata
    ) -> None:
        # An event is a zero-length span
        span = self.start_span(name, metadata, trace_metadata)
        if span is not None:
            self.end_span(span, "success", {})

    def is_enabled(self) -> bool:
        return True

    def pending_spans(self) -> List[Dict[str, Any]]:
        """Formatted spans recorded so far (oldest first)."""
        with self._lock:
            return list(self._finished)

    def drain(self) -> List[Dict[str, Any]]:
        """Return and remove all recorded spans."""
        with self._lock:
            spans = list(self._finished)
            self._finished.clear()
        return spans

    @abstractmethod
    def _format_span(self, span: Dict[str, Any]) -> Dict[str, Any]:
        """Convert the internal span dict into the backend's shape."""
        pass

    @staticmethod
    def _filter_safe_metadata(metadata: Dict[str, Any]) -> Dict[str, Any]:
        """
        Sanitize tag values.

        Strings are truncated, scalars kept, anything else stringified.
        Keys that look like credentials are dropped.
        """
        deny_fields = {"api_key", "token", "password", "secret", "authorization"}

        filtered = {}
        for key, value in (metadata or {}).items():
            if key.lower() in deny_fields:
                continue
            if isinstance(value, str):
                if len(value) > MAX_VALUE_LENGTH:
                    filtered[key] = value[:MAX_VALUE_LENGTH] + "..."
                else:
                    filtered[key] = value
            elif isinstance(value, (int, float, bool)):
                filtered[key] = value
            else:
                filtered[key] = str(value)[:MAX_VALUE_LENGTH]

        return filtered
