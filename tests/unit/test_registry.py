"""
Tests for SourceRegistry and DataSourceFactory
"""

import logging

import pytest

from datawidget.cache.images import ImageCache
from datawidget.config.loader import ConfigLoader
from datawidget.sources.base import DataSource
from datawidget.sources.hackernews import HackerNewsDataSource
from datawidget.sources.registry import DataSourceFactory, SourceRegistry
from datawidget.utils.errors import (
    ConfigurationError,
    UnimplementedSourceError,
    UnknownSourceError,
)


class DummySource(DataSource):
    source_id = "dummy"
    collections = ("items",)

    def fetch_data(self, size):
        return {"items": []}

    def render_widget(self, canvas, data, size):
        pass


class NoIdSource(DataSource):
    def fetch_data(self, size):
        return {}

    def render_widget(self, canvas, data, size):
        pass


class TestSourceRegistry:
    """Test SourceRegistry"""

    def test_register_and_get(self):
        registry = SourceRegistry()
        registry.register(DummySource)
        assert registry.get_source_class("dummy") is DummySource
        assert registry.list_sources() == ["dummy"]

    def test_get_unregistered(self):
        assert SourceRegistry().get_source_class("nope") is None

    def test_register_requires_data_source(self):
        with pytest.raises(TypeError):
            SourceRegistry().register(object)

    def test_register_requires_source_id(self):
        with pytest.raises(ValueError):
            SourceRegistry().register(NoIdSource)

    def test_duplicate_registration_warns(self, caplog):
        """Test registering the same identifier twice overwrites with a warning."""
        registry = SourceRegistry()
        registry.register(DummySource)
        with caplog.at_level(logging.WARNING):
            registry.register(DummySource)
        assert "Overwriting existing source: dummy" in caplog.text

    def test_auto_discover(self):
        """Test every bundled adapter is found."""
        registry = SourceRegistry()
        registry.auto_discover()
        assert set(registry.list_sources()) >= {
            "billboard",
            "imdb",
            "steam",
            "hackernews",
            "github",
            "wikipedia",
        }


class TestDataSourceFactory:
    """Test DataSourceFactory"""

    def test_create(self, app_config, api_client):
        cache = ImageCache()
        source = DataSourceFactory(app_config).create("hackernews", api_client, cache)

        assert isinstance(source, HackerNewsDataSource)
        assert source.api is api_client
        assert source.image_cache is cache
        assert source.config.endpoint == "/hackernews"

    def test_unknown_source(self, app_config, api_client):
        with pytest.raises(UnknownSourceError, match="Unknown source: weather"):
            DataSourceFactory(app_config).create("weather", api_client)

    def test_unimplemented_source(self, tmp_path, api_client):
        """Test a configured source without an adapter is reported separately."""
        config_file = tmp_path / "widget.yaml"
        config_file.write_text("sources:\n  weather:\n    endpoint: /weather\n")
        app_config = ConfigLoader().load(str(config_file))

        with pytest.raises(UnimplementedSourceError, match="Source not implemented: weather"):
            DataSourceFactory(app_config).create("weather", api_client)

    def test_errors_are_configuration_errors(self):
        assert issubclass(UnknownSourceError, ConfigurationError)
        assert issubclass(UnimplementedSourceError, ConfigurationError)

    def test_custom_registry(self, tmp_path, api_client):
        config_file = tmp_path / "widget.yaml"
        config_file.write_text("sources:\n  dummy:\n    endpoint: /dummy\n")
        app_config = ConfigLoader().load(str(config_file))
        registry = SourceRegistry()
        registry.register(DummySource)

        source = DataSourceFactory(app_config, registry=registry).create("dummy", api_client)
        assert isinstance(source, DummySource)
