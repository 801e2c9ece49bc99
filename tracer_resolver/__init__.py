"""Runtime selection of a tracing client from the process environment."""

from tracer_resolver.tracing import Tracer, TraceMetadata, NoOpTracer, APMTracer, ZipkinTracer
from tracer_resolver.resolver import (
    TracerCache,
    TracerRegistry,
    ResolutionReport,
    TracerResolver,
    get_resolver,
    set_resolver,
    get_tracer,
)

__all__ = [
    "Tracer",
    "TraceMetadata",
    "NoOpTracer",
    "APMTracer",
    "ZipkinTracer",
    "TracerCache",
    "TracerRegistry",
    "ResolutionReport",
    "TracerResolver",
    "get_resolver",
    "set_resolver",
    "get_tracer",
]
