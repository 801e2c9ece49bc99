"""Tracing capability and built-in tracer implementations."""

from tracer_resolver.tracing.tracer import Tracer, TraceMetadata, NoOpTracer
from tracer_resolver.tracing.apm_tracer import APMTracer
from tracer_resolver.tracing.zipkin_tracer import ZipkinTracer

__all__ = [
    "Tracer",
    "TraceMetadata",
    "NoOpTracer",
    "APMTracer",
    "ZipkinTracer",
]
