"""
Hawkular-APM-style tracer.

Selected by the resolver when HAWKULAR_APM_SERVICE_HOST or HAWKULAR_APM_URI
is present. Spans are buffered as APM node records.
"""

import os
from typing import Any, Dict, Mapping, Optional

from tracer_resolver.tracing.buffered import BufferedTracer
from tracer_resolver.tracing.tracer import ObservabilitySink

DEFAULT_APM_PORT = "8080"


def _resolve_apm_uri(environ: Mapping[str, str]) -> str:
    """
    HAWKULAR_APM_URI wins; otherwise build the URI from the service host
    and port variables Kubernetes injects for a "hawkular-apm" service.
    """
    uri = environ.get("HAWKULAR_APM_URI", "").strip()
    if uri:
        return uri

    host = environ.get("HAWKULAR_APM_SERVICE_HOST", "").strip()
    if host:
        port = environ.get("HAWKULAR_APM_SERVICE_PORT", DEFAULT_APM_PORT).strip() or DEFAULT_APM_PORT
        return f"http://{host}:{port}"

    return ""


class APMTracer(BufferedTracer):
    """
    Hawkular APM implementation of the Tracer interface.

    Environment Variables:
        HAWKULAR_APM_URI: APM server URI
        HAWKULAR_APM_SERVICE_HOST / HAWKULAR_APM_SERVICE_PORT: used when no URI is set
        HAWKULAR_APM_USERNAME: Optional user for the APM server

    Raises:
        ValueError: if neither HAWKULAR_APM_URI nor HAWKULAR_APM_SERVICE_HOST is set
    """

    def __init__(
        self,
        observability_sink: Optional[ObservabilitySink] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        if environ is None:
            environ = os.environ

        uri = _resolve_apm_uri(environ)
        if not uri:
            raise ValueError("Neither HAWKULAR_APM_URI nor HAWKULAR_APM_SERVICE_HOST is set")

        super().__init__(uri, observability_sink=observability_sink)
        self.username = environ.get("HAWKULAR_APM_USERNAME") or None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "APMTracer":
        return cls(environ=environ)

    def _format_span(self, span: Dict[str, Any]) -> Dict[str, Any]:
        duration_ms = (span["end_time"] - span["start_time"]) * 1000
        return {
            "traceId": span["trace_id"],
            "fragmentId": span["span_id"],
            "parentId": span.get("parent_span_id"),
            "operation": span["span_name"],
            "timestamp": int(span["start_time"] * 1000),
            "duration": round(duration_ms, 3),
            "fault": span["status"] == "failure",
            "properties": [
                {"name": key, "value": str(value)} for key, value in span["tags"].items()
            ],
        }
