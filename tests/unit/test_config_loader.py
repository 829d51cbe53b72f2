"""
Tests for configuration loading and validation.
"""

import pytest

from datawidget.config.loader import MAX_CONFIG_SIZE, ConfigLoader
from datawidget.config.models import SIZE_CLASSES
from datawidget.utils.errors import ConfigurationError


class TestDefaults:
    """Test the built-in configuration"""

    def test_all_sources_present(self, app_config):
        assert set(app_config.sources) == {
            "billboard",
            "imdb",
            "steam",
            "hackernews",
            "github",
            "wikipedia",
        }
        assert app_config.default_source == "billboard"

    def test_size_profiles(self, app_config):
        """Test item limits and font tiers per size class."""
        assert [app_config.size_profile(size).max_items for size in SIZE_CLASSES] == [3, 6, 10]
        large = app_config.size_profile("large")
        assert (large.font_sizes.primary, large.font_sizes.secondary) == (13, 11)
        assert large.padding == 16

    def test_unknown_size(self, app_config):
        with pytest.raises(ValueError, match="Unknown widget size"):
            app_config.size_profile("huge")

    def test_source_params(self, app_config):
        """Test source-specific keys land in params."""
        steam = app_config.sources["steam"]
        assert steam.params["profiles"] == ["exampleuser1", "exampleuser2"]
        assert steam.refresh_hours == 6
        assert steam.url_scheme == "steam://"

    def test_base_url(self, app_config):
        assert app_config.api_base_url == "https://api.michi.onl"


class TestOverrides:
    """Test YAML overrides"""

    def test_merge_keeps_unrelated_defaults(self, tmp_path):
        """Test nested values are merged and lists replaced."""
        config_file = tmp_path / "widget.yaml"
        config_file.write_text(
            """
api_base_url: "https://api.example.com/"
sources:
  steam:
    profiles: [someone]
"""
        )
        config = ConfigLoader().load(str(config_file))

        assert config.api_base_url == "https://api.example.com"
        assert config.sources["steam"].params["profiles"] == ["someone"]
        assert config.sources["steam"].endpoint == "/steam-profiles"
        assert "billboard" in config.sources

    def test_environment_expansion(self, tmp_path, monkeypatch):
        """Test ${VAR} values come from the environment."""
        monkeypatch.setenv("WIKI_TOKENS", "en:secret")
        config_file = tmp_path / "widget.yaml"
        config_file.write_text(
            """
sources:
  wikipedia:
    tokens: "${WIKI_TOKENS}"
"""
        )
        config = ConfigLoader().load(str(config_file))
        assert config.sources["wikipedia"].params["tokens"] == "en:secret"

    def test_unset_environment_variable(self, tmp_path, monkeypatch, caplog):
        monkeypatch.delenv("WIKI_TOKENS_UNSET", raising=False)
        config_file = tmp_path / "widget.yaml"
        config_file.write_text('sources:\n  wikipedia:\n    tokens: "${WIKI_TOKENS_UNSET}"\n')

        config = ConfigLoader().load(str(config_file))

        assert config.sources["wikipedia"].params["tokens"] == ""
        assert "WIKI_TOKENS_UNSET" in caplog.text

    def test_empty_file(self, tmp_path):
        """Test an empty file means no overrides."""
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        config = ConfigLoader().load(str(config_file))
        assert config.default_source == "billboard"

    def test_extra_source(self, tmp_path):
        """Test a configured source without an adapter still loads."""
        config_file = tmp_path / "widget.yaml"
        config_file.write_text("sources:\n  weather:\n    endpoint: /weather\n")
        config = ConfigLoader().load(str(config_file))
        assert config.sources["weather"].name == "Weather"


class TestErrors:
    """Test configuration errors"""

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigLoader().load(str(tmp_path / "missing.yaml"))

    def test_directory(self, tmp_path):
        with pytest.raises(ConfigurationError, match="directory"):
            ConfigLoader().load(str(tmp_path))

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("sources: [unclosed")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ConfigLoader().load(str(config_file))

    def test_not_a_mapping(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="dictionary"):
            ConfigLoader().load(str(config_file))

    def test_too_large(self, tmp_path):
        config_file = tmp_path / "big.yaml"
        config_file.write_text("#" * (MAX_CONFIG_SIZE + 1))
        with pytest.raises(ConfigurationError, match="too large"):
            ConfigLoader().load(str(config_file))

    def test_invalid_max_items(self, tmp_path):
        config_file = tmp_path / "widget.yaml"
        config_file.write_text("sizing:\n  small:\n    max_items: 0\n")
        with pytest.raises(ConfigurationError, match="max_items"):
            ConfigLoader().load(str(config_file))

    def test_source_without_endpoint(self, tmp_path):
        config_file = tmp_path / "widget.yaml"
        config_file.write_text("sources:\n  weather:\n    name: Weather\n")
        with pytest.raises(ConfigurationError, match="endpoint"):
            ConfigLoader().load(str(config_file))
