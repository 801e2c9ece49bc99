"""Tracer resolution: cache, registry, discovery and the resolver itself."""

from tracer_resolver.resolver.cache import TracerCache
from tracer_resolver.resolver.errors import (
    TracerResolutionError,
    TracerNotFoundError,
    TracerConstructionError,
    TracerCapabilityError,
)
from tracer_resolver.resolver.registry import TracerRegistry, default_registry, import_class
from tracer_resolver.resolver.discovery import discover_tracers
from tracer_resolver.resolver.report import ResolutionReport
from tracer_resolver.resolver.resolver import (
    TracerResolver,
    get_resolver,
    set_resolver,
    get_tracer,
)

__all__ = [
    "TracerCache",
    "TracerResolutionError",
    "TracerNotFoundError",
    "TracerConstructionError",
    "TracerCapabilityError",
    "TracerRegistry",
    "default_registry",
    "import_class",
    "discover_tracers",
    "ResolutionReport",
    "TracerResolver",
    "get_resolver",
    "set_resolver",
    "get_tracer",
]
