"""
Single-slot cache of the last resolved tracer type.

The cached type is a fast-path hint only: when instantiating it fails the
resolver ignores it and runs the full search, which overwrites it on success.
"""

import threading
from typing import Optional, Type

from tracer_resolver.tracing.tracer import Tracer


class TracerCache:
    """Holds at most one Tracer subclass."""

    def __init__(self, tracer_type: Optional[Type[Tracer]] = None):
        self._lock = threading.Lock()
        self._tracer_type: Optional[Type[Tracer]] = None
        if tracer_type is not None:
            self.set(tracer_type)

    def get(self) -> Optional[Type[Tracer]]:
        return self._tracer_type

    def set(self, tracer_type: Type[Tracer]) -> None:
        """
        Cache a tracer type, replacing any previous one.

        Raises:
            TypeError: if tracer_type is not a Tracer subclass
        """
        if not isinstance(tracer_type, type) or not issubclass(tracer_type, Tracer):
            raise TypeError(f"{tracer_type!r} is not a Tracer subclass")
        with self._lock:
            self._tracer_type = tracer_type

    def clear(self) -> None:
        with self._lock:
            self._tracer_type = None

    @property
    def is_set(self) -> bool:
        return self._tracer_type is not None

    def describe(self) -> Optional[str]:
        """Qualified name of the cached type, for debug output."""
        tracer_type = self._tracer_type
        if tracer_type is None:
            return None
        return f"{tracer_type.__module__}.{tracer_type.__qualname__}"
