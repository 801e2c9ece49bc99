"""
Tests for entry point discovery of installed tracers.
"""

from unittest.mock import MagicMock, patch

from tracer_resolver.resolver import discover_tracers
from tracer_resolver.tracing import NoOpTracer


class InstalledTracer(NoOpTracer):
    pass


def _entry_point(name, target=None, load_error=None):
    ep = MagicMock()
    ep.name = name
    ep.value = f"plugin_{name}:Tracer"
    if load_error is not None:
        ep.load.side_effect = load_error
    else:
        ep.load.return_value = target
    return ep


class TestDiscoverTracers:
    """discover_tracers() yields instantiated tracers, skipping broken ones."""

    def test_queries_the_tracer_group(self):
        with patch("tracer_resolver.resolver.discovery.entry_points", return_value=[]) as mock_eps:
            assert list(discover_tracers()) == []
        mock_eps.assert_called_once_with(group="tracer_resolver.tracers")

    def test_custom_group(self):
        with patch("tracer_resolver.resolver.discovery.entry_points", return_value=[]) as mock_eps:
            list(discover_tracers(group="acme.tracers"))
        mock_eps.assert_called_once_with(group="acme.tracers")

    def test_yields_in_entry_point_order(self):
        eps = [_entry_point("first", InstalledTracer), _entry_point("second", NoOpTracer)]
        with patch("tracer_resolver.resolver.discovery.entry_points", return_value=eps):
            found = list(discover_tracers())

        assert [name for name, _ in found] == ["first", "second"]
        assert isinstance(found[0][1], InstalledTracer)

    def test_load_failure_is_skipped(self):
        eps = [
            _entry_point("broken", load_error=ImportError("missing dependency")),
            _entry_point("working", InstalledTracer),
        ]
        with patch("tracer_resolver.resolver.discovery.entry_points", return_value=eps):
            found = list(discover_tracers())

        assert [name for name, _ in found] == ["working"]

    def test_construction_failure_is_skipped(self):
        def failing_factory():
            raise RuntimeError("no collector configured")

        eps = [_entry_point("failing", failing_factory), _entry_point("working", InstalledTracer)]
        with patch("tracer_resolver.resolver.discovery.entry_points", return_value=eps):
            found = list(discover_tracers())

        assert [name for name, _ in found] == ["working"]

    def test_non_tracer_is_skipped(self):
        eps = [_entry_point("dict", dict), _entry_point("working", InstalledTracer)]
        with patch("tracer_resolver.resolver.discovery.entry_points", return_value=eps):
            found = list(discover_tracers())

        assert [name for name, _ in found] == ["working"]

    def test_lazy_iteration(self):
        later = _entry_point("later", InstalledTracer)
        eps = [_entry_point("first", InstalledTracer), later]
        with patch("tracer_resolver.resolver.discovery.entry_points", return_value=eps):
            name, _ = next(iter(discover_tracers()))

        assert name == "first"
        later.load.assert_not_called()
