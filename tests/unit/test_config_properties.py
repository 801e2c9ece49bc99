"""
Tests for process properties and the resolver settings snapshot.
"""

import os
from unittest.mock import patch

import pytest

from tracer_resolver import properties
from tracer_resolver.config import ResolverSettings


class TestProcessProperties:
    """Process-level key/value configuration."""

    def test_set_get_clear(self):
        properties.set_property("tracer.class", "zipkin")

        assert properties.get_property("tracer.class") == "zipkin"
        assert properties.clear_property("tracer.class") == "zipkin"
        assert properties.get_property("tracer.class") is None

    def test_default(self):
        assert properties.get_property("missing", "fallback") == "fallback"

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            properties.set_property("", "value")

    def test_snapshot_is_a_copy(self):
        properties.set_property("a", "1")
        snapshot = properties.get_properties()
        snapshot["a"] = "2"

        assert properties.get_property("a") == "1"

    def test_load_properties_from_argv(self):
        remaining = properties.load_properties(
            ["serve", "-Dtracer.class=pkg.mod.Tracer", "--port", "8080", "-Dflag", "-D"]
        )

        assert remaining == ["serve", "--port", "8080", "-D"]
        assert properties.get_property("tracer.class") == "pkg.mod.Tracer"
        assert properties.get_property("flag") == ""

    def test_value_may_contain_equals(self):
        properties.load_properties(["-Dquery=a=b"])
        assert properties.get_property("query") == "a=b"

    def test_nameless_definition_is_passed_through(self):
        remaining = properties.load_properties(["-D=value", "-Dname=x"])

        assert remaining == ["-D=value"]
        assert properties.get_properties() == {"name": "x"}


class TestResolverSettings:
    """Signals read at the start of resolve()."""

    def test_nothing_set(self):
        settings = ResolverSettings.from_env({}, {})

        assert settings.tracer_class is None
        assert settings.tracer_class_source is None
        assert settings.discovery_enabled is True
        assert settings.heuristic_candidates() == []

    def test_property_wins(self):
        settings = ResolverSettings.from_env(
            {"TRACER_CLASS": "from.env.Tracer"}, {"tracer.class": "from.prop.Tracer"}
        )

        assert settings.tracer_class == "from.prop.Tracer"
        assert settings.tracer_class_source == "property"

    def test_blank_property_uses_env(self):
        settings = ResolverSettings.from_env({"TRACER_CLASS": " from.env.Tracer "}, {"tracer.class": "  "})

        assert settings.tracer_class == "from.env.Tracer"
        assert settings.tracer_class_source == "environment"

    def test_defaults_to_process_state(self):
        properties.set_property("tracer.class", "zipkin")
        with patch.dict(os.environ, {"ZIPKIN_SERVER_URL": "http://zipkin:9411"}):
            settings = ResolverSettings.from_env()

        assert settings.tracer_class == "zipkin"
        assert settings.zipkin_server_url == "http://zipkin:9411"

    @pytest.mark.parametrize("value,expected", [("false", False), ("FALSE ", False), ("true", True), ("0", True)])
    def test_discovery_flag(self, value, expected):
        settings = ResolverSettings.from_env({"TRACER_RESOLVER_DISCOVERY": value}, {})
        assert settings.discovery_enabled is expected

    def test_heuristic_order(self):
        settings = ResolverSettings.from_env(
            {
                "ZIPKIN_SERVER_URL": "http://zipkin",
                "HAWKULAR_APM_URI": "http://apm",
                "HAWKULAR_APM_SERVICE_HOST": "10.0.0.1",
            },
            {},
        )

        assert settings.heuristic_candidates() == [
            ("HAWKULAR_APM_SERVICE_HOST", "hawkular.apm"),
            ("HAWKULAR_APM_URI", "hawkular.apm"),
            ("ZIPKIN_SERVER_URL", "zipkin"),
        ]

    def test_to_dict(self):
        settings = ResolverSettings.from_env({"HAWKULAR_APM_URI": "http://apm"}, {})
        assert settings.to_dict()["hawkular_apm_uri"] == "http://apm"

    def test_is_immutable(self):
        settings = ResolverSettings.from_env({}, {})
        with pytest.raises(Exception):
            settings.tracer_class = "other"
