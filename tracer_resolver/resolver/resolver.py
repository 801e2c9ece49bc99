"""
Tracer resolution.

Picks a Tracer implementation from the environment. Checks, in order
(first success wins):

1. the cached type from the previous successful resolution
2. an explicit override: property ``tracer.class``, then env ``TRACER_CLASS``
3. tracers advertised by installed packages (entry points)
4. infrastructure hints: HAWKULAR_APM_SERVICE_HOST, HAWKULAR_APM_URI,
   ZIPKIN_SERVER_URL select the matching built-in tracer

Every candidate failure is logged as a warning and skipped. resolve() never
raises; when nothing works it returns None, since tracing is optional.
"""

import logging
import threading
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple

from tracer_resolver.config import ResolverSettings
from tracer_resolver.resolver.cache import TracerCache
from tracer_resolver.resolver.discovery import discover_tracers
from tracer_resolver.resolver.errors import (
    TracerCapabilityError,
    TracerConstructionError,
    TracerResolutionError,
)
from tracer_resolver.resolver.registry import TracerRegistry, default_registry
from tracer_resolver.resolver.report import ResolutionReport, Strategy
from tracer_resolver.tracing.tracer import NoOpTracer, Tracer

logger = logging.getLogger(__name__)

Discovery = Callable[[], Iterable[Tuple[str, Tracer]]]


def _qualified_name(obj: Any) -> str:
    cls = type(obj)
    return f"{cls.__module__}.{cls.__qualname__}"


class TracerResolver:
    """
    Resolves a Tracer from the process environment.

    All collaborators are injectable so tests (and hosts with their own
    wiring) do not depend on process-wide state.
    """

    def __init__(
        self,
        cache: Optional[TracerCache] = None,
        registry: Optional[TracerRegistry] = None,
        discover: Optional[Discovery] = None,
        environ: Optional[Mapping[str, str]] = None,
        properties: Optional[Mapping[str, str]] = None,
    ):
        """
        Args:
            cache: Cache of the last resolved type (defaults to a fresh cache)
            registry: Identifier registry (defaults to the built-in tracers)
            discover: Callable yielding (name, tracer) pairs (defaults to entry points)
            environ: Environment mapping, read on every call (defaults to os.environ)
            properties: Process properties, read on every call
                (defaults to tracer_resolver.properties)
        """
        self.cache = cache if cache is not None else TracerCache()
        self.registry = registry if registry is not None else default_registry()
        self._discover = discover or discover_tracers
        self._environ = environ
        self._properties = properties
        self.last_report: Optional[ResolutionReport] = None

    def resolve(self) -> Optional[Tracer]:
        """
        Return a tracer instance, or None if no strategy produced one.
        """
        failures: List[str] = []

        tracer = self._from_cache(failures)
        if tracer is not None:
            return self._finish("cache", None, tracer, failures)

        settings = ResolverSettings.from_env(self._environ, self._properties)

        # first: explicit configuration
        if settings.tracer_class:
            tracer = self._attempt_load(settings.tracer_class, failures)
            if tracer is not None:
                return self._finish("override", settings.tracer_class, tracer, failures)

        # then: anything installed that advertises a tracer
        if settings.discovery_enabled:
            name, tracer = self._from_discovery(failures)
            if tracer is not None:
                return self._finish("discovery", name, tracer, failures)

        # last: best guesses from well-known infrastructure variables
        for variable, identifier in settings.heuristic_candidates():
            logger.debug(f"{variable} is set, trying tracer [{identifier}]")
            tracer = self._attempt_load(identifier, failures)
            if tracer is not None:
                return self._finish("heuristic", identifier, tracer, failures)

        logger.debug("No tracer could be resolved from the environment")
        return self._finish("none", None, None, failures)

    def attempt_load(self, identifier: str) -> Optional[Tracer]:
        """
        Load, instantiate and cache the tracer named by identifier.

        Returns:
            The tracer instance, or None if the identifier is unknown, the
            class cannot be instantiated, or it is not a Tracer
        """
        return self._attempt_load(identifier, [])

    def get_tracer_config(self) -> dict:
        """
        Current resolution state for health/debug endpoints.
        """
        settings = ResolverSettings.from_env(self._environ, self._properties)
        return {
            "settings": settings.to_dict(),
            "cached_tracer": self.cache.describe(),
            "registered_tracers": self.registry.identifiers(),
            "last_resolution": self.last_report.model_dump() if self.last_report else None,
        }

    def _from_cache(self, failures: List[str]) -> Optional[Tracer]:
        cached = self.cache.get()
        if cached is None:
            return None

        try:
            return self._construct(cached)
        except Exception as e:
            message = (
                f"Failed to get instance from the cached class "
                f"[{cached.__module__}.{cached.__qualname__}]: {e}. Ignoring cache."
            )
            logger.warning(message)
            failures.append(message)
            return None

    def _from_discovery(self, failures: List[str]) -> Tuple[Optional[str], Optional[Tracer]]:
        try:
            for name, tracer in self._discover():
                if not isinstance(tracer, Tracer):
                    message = f"Discovered [{name}] is not a Tracer. Skipping."
                    logger.warning(message)
                    failures.append(message)
                    continue
                self._remember(tracer)
                return name, tracer
        except Exception as e:
            message = f"Tracer discovery failed: {e}"
            logger.warning(message)
            failures.append(message)

        return None, None

    def _attempt_load(self, identifier: str, failures: List[str]) -> Optional[Tracer]:
        try:
            tracer = self._instantiate(identifier)
        except TracerResolutionError as e:
            # perhaps this class isn't there for this env, but another guess may work
            message = f"{e}. Trying to come up with our next best guess."
            logger.warning(message)
            failures.append(message)
            return None

        self._remember(tracer)
        return tracer

    def _remember(self, tracer: Tracer) -> None:
        try:
            self.cache.set(type(tracer))
        except TypeError as e:
            # isinstance() passed through a proxy whose type is not a Tracer subclass
            logger.debug(f"Not caching tracer type: {e}")

    def _construct(self, target: Any) -> Any:
        # built-in tracers read their endpoint from the injected environment
        from_environ = getattr(target, "from_environ", None)
        if self._environ is not None and callable(from_environ):
            return from_environ(self._environ)
        return target()

    def _instantiate(self, identifier: str) -> Tracer:
        target = self.registry.load(identifier)

        try:
            instance = self._construct(target)
        except Exception as e:
            raise TracerConstructionError(identifier, e) from e

        if not isinstance(instance, Tracer):
            raise TracerCapabilityError(identifier, type(instance))

        return instance

    def _finish(
        self,
        strategy: Strategy,
        identifier: Optional[str],
        tracer: Optional[Tracer],
        failures: List[str],
    ) -> Optional[Tracer]:
        self.last_report = ResolutionReport(
            strategy=strategy,
            identifier=identifier,
            tracer_type=_qualified_name(tracer) if tracer is not None else None,
            failures=failures,
        )
        if tracer is not None:
            logger.debug(f"Resolved tracer {self.last_report.tracer_type} via {strategy}")
        return tracer


# Process-default resolver (created on first use)
_default_resolver: Optional[TracerResolver] = None
_default_lock = threading.Lock()


def get_resolver() -> TracerResolver:
    """Get the process-default resolver."""
    global _default_resolver
    with _default_lock:
        if _default_resolver is None:
            _default_resolver = TracerResolver()
        return _default_resolver


def set_resolver(resolver: Optional[TracerResolver]) -> None:
    """Replace the process-default resolver (None resets it)."""
    global _default_resolver
    with _default_lock:
        _default_resolver = resolver


def get_tracer(fallback_to_noop: bool = False) -> Optional[Tracer]:
    """
    Resolve a tracer through the process-default resolver.

    Args:
        fallback_to_noop: Return a NoOpTracer instead of None when nothing resolves
    """
    tracer = get_resolver().resolve()
    if tracer is None and fallback_to_noop:
        return NoOpTracer()
    return tracer
