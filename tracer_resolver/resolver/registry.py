"""
Tracer registry: string identifier -> tracer class.

Implementations register themselves (eagerly, or lazily through a loader
that imports the class on first use). Identifiers that are not registered
but look like import paths (``package.module.Class`` or
``package.module:Class``) are imported with importlib as a fallback, so
TRACER_CLASS can name any installed tracer.
"""

import importlib
import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from tracer_resolver.config import HAWKULAR_APM_TRACER, ZIPKIN_TRACER
from tracer_resolver.resolver.errors import TracerNotFoundError

logger = logging.getLogger(__name__)

Loader = Callable[[], Any]


def import_class(class_path: str) -> Any:
    """
    Import an object from ``module.Name`` or ``module:Name.Nested``.

    Raises:
        ImportError: module missing
        AttributeError: attribute missing
        ValueError: path has no module part
    """
    if ":" in class_path:
        module_path, attr_path = class_path.split(":", 1)
    else:
        module_path, _, attr_path = class_path.rpartition(".")

    if not module_path or not attr_path:
        raise ValueError(f"'{class_path}' is not a module.Class path")

    obj = importlib.import_module(module_path)
    for attr in attr_path.split("."):
        obj = getattr(obj, attr)
    return obj


class TracerRegistry:
    """
    Maps identifiers to tracer classes or lazy loaders.

    Thread-safe for registration; lookups read a snapshot.
    """

    def __init__(self, allow_import_paths: bool = True):
        """
        Args:
            allow_import_paths: Fall back to importing unregistered identifiers
        """
        self.allow_import_paths = allow_import_paths
        self._loaders: Dict[str, Loader] = {}
        self._lock = threading.Lock()

    def register(self, identifier: str, tracer_class: Any) -> None:
        """Register a class (or zero-argument factory) under identifier."""
        self.register_lazy(identifier, lambda: tracer_class)

    def register_lazy(self, identifier: str, loader: Loader) -> None:
        """Register a loader that returns the class when first needed."""
        if not identifier:
            raise ValueError("Tracer identifier must not be empty")
        with self._lock:
            if identifier in self._loaders:
                logger.debug(f"Replacing tracer registration [{identifier}]")
            self._loaders[identifier] = loader

    def register_tracer(self, identifier: str) -> Callable[[Any], Any]:
        """Class decorator form of register()."""

        def decorator(tracer_class):
            self.register(identifier, tracer_class)
            return tracer_class

        return decorator

    def unregister(self, identifier: str) -> bool:
        with self._lock:
            return self._loaders.pop(identifier, None) is not None

    def identifiers(self) -> List[str]:
        with self._lock:
            return sorted(self._loaders)

    def __contains__(self, identifier: str) -> bool:
        with self._lock:
            return identifier in self._loaders

    def load(self, identifier: str) -> Any:
        """
        Locate the class for identifier.

        Raises:
            TracerNotFoundError: unknown identifier, or loading/importing it failed
        """
        with self._lock:
            loader: Optional[Loader] = self._loaders.get(identifier)

        if loader is not None:
            try:
                return loader()
            except Exception as e:
                raise TracerNotFoundError(identifier, e) from e

        if self.allow_import_paths and ("." in identifier or ":" in identifier):
            try:
                return import_class(identifier)
            except Exception as e:
                raise TracerNotFoundError(identifier, e) from e

        raise TracerNotFoundError(identifier)


def _load_apm_tracer():
    from tracer_resolver.tracing.apm_tracer import APMTracer

    return APMTracer


def _load_zipkin_tracer():
    from tracer_resolver.tracing.zipkin_tracer import ZipkinTracer

    return ZipkinTracer


def default_registry() -> TracerRegistry:
    """A registry holding the built-in last-resort tracers."""
    registry = TracerRegistry()
    registry.register_lazy(HAWKULAR_APM_TRACER, _load_apm_tracer)
    registry.register_lazy(ZIPKIN_TRACER, _load_zipkin_tracer)
    return registry
