"""
Zipkin-style tracer.

Selected by the resolver when ZIPKIN_SERVER_URL is present. Spans are
shaped as Zipkin v2 JSON objects and buffered; POSTing them to
``collector_url`` is left to the host application.
"""

import os
from typing import Any, Dict, Mapping, Optional

from tracer_resolver.tracing.buffered import BufferedTracer
from tracer_resolver.tracing.tracer import ObservabilitySink

DEFAULT_SERVICE_NAME = "tracer-resolver"


class ZipkinTracer(BufferedTracer):
    """
    Zipkin implementation of the Tracer interface.

    Environment Variables:
        ZIPKIN_SERVER_URL: Zipkin base URL (required)
        ZIPKIN_SERVICE_NAME: Local service name (optional, defaults to "tracer-resolver")

    Args:
        observability_sink: Optional callback receiving span summaries
        environ: Environment mapping to read (defaults to os.environ)

    Raises:
        ValueError: if ZIPKIN_SERVER_URL is not set
    """

    def __init__(
        self,
        observability_sink: Optional[ObservabilitySink] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        if environ is None:
            environ = os.environ

        server_url = environ.get("ZIPKIN_SERVER_URL", "").strip()
        if not server_url:
            raise ValueError("ZIPKIN_SERVER_URL is not set")

        super().__init__(server_url, observability_sink=observability_sink)
        self.service_name = environ.get("ZIPKIN_SERVICE_NAME", DEFAULT_SERVICE_NAME)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "ZipkinTracer":
        return cls(environ=environ)

    @property
    def collector_url(self) -> str:
        return f"{self.endpoint}/api/v2/spans"

    def _format_span(self, span: Dict[str, Any]) -> Dict[str, Any]:
        # Zipkin wants microseconds
        start_us = int(span["start_time"] * 1_000_000)
        end_us = int(span["end_time"] * 1_000_000)

        tags = {key: str(value) for key, value in span["tags"].items()}
        tags["status"] = span["status"]
        if span["status"] == "failure":
            tags["error"] = str(span["tags"].get("error_type", "true"))

        formatted = {
            "traceId": span["trace_id"],
            "id": span["span_id"],
            "name": span["span_name"],
            "timestamp": start_us,
            "duration": max(end_us - start_us, 1),
            "localEndpoint": {
                "serviceName": span.get("service_name") or self.service_name,
            },
            "tags": tags,
        }
        if span.get("parent_span_id"):
            formatted["parentId"] = span["parent_span_id"]

        return formatted
