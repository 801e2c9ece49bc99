"""
Configuration for tracer resolution.

Loads environment variables from a .env file (never overriding variables
already set) and provides a typed snapshot of the resolution signals.
"""

import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from dotenv import load_dotenv

from tracer_resolver import properties as process_properties

# Load environment variables from .env file
env_path = Path(os.getenv("TRACER_RESOLVER_ENV_FILE", Path(__file__).parent / ".env"))
load_dotenv(env_path)


# Process property and environment variable names
TRACER_CLASS_PROPERTY = "tracer.class"
TRACER_CLASS_ENV = "TRACER_CLASS"
DISCOVERY_ENV = "TRACER_RESOLVER_DISCOVERY"
HAWKULAR_APM_SERVICE_HOST_ENV = "HAWKULAR_APM_SERVICE_HOST"
HAWKULAR_APM_URI_ENV = "HAWKULAR_APM_URI"
ZIPKIN_SERVER_URL_ENV = "ZIPKIN_SERVER_URL"

# Entry point group scanned for installed tracers
ENTRY_POINT_GROUP = "tracer_resolver.tracers"

# Registry keys of the built-in last-resort tracers
HAWKULAR_APM_TRACER = "hawkular.apm"
ZIPKIN_TRACER = "zipkin"


def _non_empty(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class ResolverSettings:
    """Resolution signals read at the start of one resolve() call."""

    tracer_class: Optional[str]
    tracer_class_source: Optional[str]  # "property", "environment" or None
    discovery_enabled: bool
    hawkular_apm_service_host: Optional[str]
    hawkular_apm_uri: Optional[str]
    zipkin_server_url: Optional[str]

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        properties: Optional[Mapping[str, str]] = None,
    ) -> "ResolverSettings":
        """
        Read the current signals.

        Args:
            environ: Environment mapping (defaults to os.environ)
            properties: Process properties (defaults to tracer_resolver.properties)
        """
        if environ is None:
            environ = os.environ
        if properties is None:
            properties = process_properties.get_properties()

        # The property wins over the environment variable
        tracer_class = _non_empty(properties.get(TRACER_CLASS_PROPERTY))
        source = "property" if tracer_class else None
        if not tracer_class:
            tracer_class = _non_empty(environ.get(TRACER_CLASS_ENV))
            source = "environment" if tracer_class else None

        return cls(
            tracer_class=tracer_class,
            tracer_class_source=source,
            discovery_enabled=environ.get(DISCOVERY_ENV, "true").lower().strip() != "false",
            hawkular_apm_service_host=_non_empty(environ.get(HAWKULAR_APM_SERVICE_HOST_ENV)),
            hawkular_apm_uri=_non_empty(environ.get(HAWKULAR_APM_URI_ENV)),
            zipkin_server_url=_non_empty(environ.get(ZIPKIN_SERVER_URL_ENV)),
        )

    def heuristic_candidates(self) -> List[Tuple[str, str]]:
        """
        (variable name, registry key) pairs for the infrastructure heuristics,
        in check order, limited to variables that are present.
        """
        checks = [
            (HAWKULAR_APM_SERVICE_HOST_ENV, self.hawkular_apm_service_host, HAWKULAR_APM_TRACER),
            (HAWKULAR_APM_URI_ENV, self.hawkular_apm_uri, HAWKULAR_APM_TRACER),
            (ZIPKIN_SERVER_URL_ENV, self.zipkin_server_url, ZIPKIN_TRACER),
        ]
        return [(name, key) for name, value, key in checks if value]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
