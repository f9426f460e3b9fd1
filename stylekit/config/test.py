"""Tests for environment configuration."""

from pathlib import Path

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    get_config_path,
    get_css_prefix,
    get_environment,
    get_environment_info,
    get_log_level,
    get_max_union_size,
    get_suggestion_limit,
    is_strict,
    list_environment_variables,
)


@pytest.mark.unit
class TestGetEnvironment:
    """Override, environment and default resolution."""

    def test_default_when_unset(self, monkeypatch):
        monkeypatch.delenv("STYLEKIT_MAX_UNION_SIZE", raising=False)

        assert get_environment(EnvVar.STYLEKIT_MAX_UNION_SIZE) == 20

    def test_override_beats_environment(self, monkeypatch):
        monkeypatch.setenv("STYLEKIT_MAX_UNION_SIZE", "99")

        assert get_environment(EnvVar.STYLEKIT_MAX_UNION_SIZE, override=5) == 5

    def test_environment_is_converted(self, monkeypatch):
        monkeypatch.setenv("MCP_PORT", " 12345 ")

        port = get_environment(EnvVar.MCP_PORT)

        assert port == 12345
        assert isinstance(port, int)

    def test_blank_counts_as_unset(self, monkeypatch):
        monkeypatch.setenv("STYLEKIT_CSS_PREFIX", "   ")

        assert get_environment(EnvVar.STYLEKIT_CSS_PREFIX) == "ui"

    @pytest.mark.parametrize("raw", ["true", "1", "yes", "on", "TRUE", "Yes"])
    def test_truthy_text(self, monkeypatch, raw):
        monkeypatch.setenv("STYLEKIT_STRICT", raw)

        assert get_environment(EnvVar.STYLEKIT_STRICT) is True

    @pytest.mark.parametrize("raw", ["false", "0", "no", "off", "FALSE", "No"])
    def test_falsy_text(self, monkeypatch, raw):
        monkeypatch.setenv("STYLEKIT_STRICT", raw)

        assert get_environment(EnvVar.STYLEKIT_STRICT) is False

    @pytest.mark.parametrize(
        ("name", "raw", "expected"),
        [
            ("STYLEKIT_STRICT", "maybe", False),
            ("STYLEKIT_SUGGESTION_LIMIT", "lots", 3),
            ("MCP_PORT", "80.5", 18080),
        ],
    )
    def test_unparseable_falls_back_to_default(self, monkeypatch, name, raw, expected):
        monkeypatch.setenv(name, raw)

        assert get_environment(EnvVar[name]) == expected

    def test_path_conversion(self, monkeypatch):
        monkeypatch.setenv("STYLEKIT_CONFIG_PATH", "/tmp/system.json")

        assert get_environment(EnvVar.STYLEKIT_CONFIG_PATH) == Path("/tmp/system.json")


@pytest.mark.unit
class TestDeclarations:
    """Metadata and listing."""

    def test_info(self):
        info = get_environment_info(EnvVar.STYLEKIT_SUGGESTION_LIMIT)

        assert isinstance(info, EnvConfig)
        assert (info.name, info.default, info.var_type) == ("STYLEKIT_SUGGESTION_LIMIT", 3, int)
        assert info.category == "validation"

    def test_names_match_members(self):
        assert all(var.value.name == var.name for var in EnvVar)

    def test_list_all(self):
        assert list_environment_variables() == list(EnvVar)

    def test_list_by_category(self):
        service = list_environment_variables("service")

        assert service == [EnvVar.STYLEKIT_CONFIG_PATH, EnvVar.MCP_HOST, EnvVar.MCP_PORT]
        assert list_environment_variables("nonexistent") == []


@pytest.mark.unit
class TestShortcuts:
    """Typed accessors used across the package."""

    def test_css_prefix(self, monkeypatch):
        monkeypatch.delenv("STYLEKIT_CSS_PREFIX", raising=False)
        assert get_css_prefix() == "ui"

        monkeypatch.setenv("STYLEKIT_CSS_PREFIX", "env")
        assert get_css_prefix() == "env"
        assert get_css_prefix("acme") == "acme"
        assert get_css_prefix("") == "env"

    def test_max_union_size(self, monkeypatch):
        monkeypatch.setenv("STYLEKIT_MAX_UNION_SIZE", "8")

        assert get_max_union_size() == 8
        assert get_max_union_size(4) == 4

    def test_suggestion_limit(self):
        assert get_suggestion_limit(5) == 5

    def test_strict(self, monkeypatch):
        monkeypatch.setenv("STYLEKIT_STRICT", "on")

        assert is_strict() is True
        assert is_strict(False) is False

    def test_log_level(self, monkeypatch):
        monkeypatch.setenv("STYLEKIT_LOG_LEVEL", "warning")

        assert get_log_level() == "WARNING"
        assert get_log_level(verbose=True) == "DEBUG"

    def test_config_path(self, monkeypatch):
        monkeypatch.delenv("STYLEKIT_CONFIG_PATH", raising=False)

        assert get_config_path() is None
        assert get_config_path("system.json") == Path("system.json")
