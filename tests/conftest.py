"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from tracer_resolver import properties  # noqa: E402
from tracer_resolver.resolver import set_resolver  # noqa: E402

RESOLUTION_ENV_VARS = [
    "TRACER_CLASS",
    "TRACER_RESOLVER_DISCOVERY",
    "HAWKULAR_APM_SERVICE_HOST",
    "HAWKULAR_APM_SERVICE_PORT",
    "HAWKULAR_APM_URI",
    "HAWKULAR_APM_USERNAME",
    "ZIPKIN_SERVER_URL",
    "ZIPKIN_SERVICE_NAME",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Every test starts without resolution signals or process-wide state."""
    for name in RESOLUTION_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    for name in properties.get_properties():
        properties.clear_property(name)
    set_resolver(None)
    yield
    for name in properties.get_properties():
        properties.clear_property(name)
    set_resolver(None)


@pytest.fixture
def no_discovery():
    """Discovery callable that finds nothing."""
    return lambda: iter(())
