"""
Service discovery of installed tracers.

Packages advertise tracers through an entry point group, e.g. in their
pyproject.toml:

    [project.entry-points."tracer_resolver.tracers"]
    jaeger = "my_jaeger_tracer:JaegerTracer"

Each entry point must load to a Tracer subclass (or zero-argument factory).
"""

import logging
from importlib.metadata import entry_points
from typing import Iterator, Tuple

from tracer_resolver.config import ENTRY_POINT_GROUP
from tracer_resolver.tracing.tracer import Tracer

logger = logging.getLogger(__name__)


def discover_tracers(group: str = ENTRY_POINT_GROUP) -> Iterator[Tuple[str, Tracer]]:
    """
    Instantiate advertised tracers lazily, in entry point order.

    Entry points that fail to load, fail to construct, or do not produce a
    Tracer are logged and skipped.

    Yields:
        (entry point name, tracer instance)
    """
    for ep in entry_points(group=group):
        try:
            factory = ep.load()
        except Exception as e:
            logger.warning(f"Failed to load tracer entry point [{ep.name}] ({ep.value}): {e}")
            continue

        try:
            tracer = factory()
        except Exception as e:
            logger.warning(f"Failed to instantiate tracer entry point [{ep.name}]: {e}")
            continue

        if not isinstance(tracer, Tracer):
            logger.warning(
                f"Tracer entry point [{ep.name}] produced {type(tracer).__name__}, not a Tracer. Skipping."
            )
            continue

        logger.debug(f"Discovered tracer [{ep.name}] -> {type(tracer).__name__}")
        yield ep.name, tracer
