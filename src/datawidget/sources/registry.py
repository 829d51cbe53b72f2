"""
Source registry and factory for data source adapters
"""

import logging
from typing import Dict, Optional, Type

from ..cache.images import ImageCache
from ..config.models import AppConfig
from ..utils.errors import UnimplementedSourceError, UnknownSourceError
from .base import DataSource

logger = logging.getLogger(__name__)


class SourceRegistry:
    """Registry mapping source identifiers to adapter classes"""

    def __init__(self):
        self._sources: Dict[str, Type[DataSource]] = {}

    def register(self, source_class: Type[DataSource]) -> None:
        """
        Register a data source class.

        Raises:
            TypeError: If source_class doesn't inherit from DataSource
            ValueError: If source_id is not defined
        """
        if not isinstance(source_class, type) or not issubclass(source_class, DataSource):
            raise TypeError(f"{source_class} must inherit from DataSource")

        source_id = source_class.source_id
        if not source_id:
            raise ValueError(f"{source_class.__name__} must define source_id class attribute")

        if source_id in self._sources:
            logger.warning(f"Overwriting existing source: {source_id}")

        self._sources[source_id] = source_class
        logger.debug(f"Registered source: {source_id}")

    def get_source_class(self, source_id: str) -> Optional[Type[DataSource]]:
        """Get an adapter class by source identifier"""
        return self._sources.get(source_id)

    def list_sources(self) -> list:
        """List all registered source identifiers"""
        return list(self._sources.keys())

    def auto_discover(self) -> None:
        """Auto-discover and register all source modules."""
        import importlib
        import pkgutil

        import datawidget.sources as sources_pkg

        for _importer, modname, _ispkg in pkgutil.iter_modules(sources_pkg.__path__):
            if modname in ["base", "registry", "__init__"]:
                continue

            try:
                module = importlib.import_module(f"datawidget.sources.{modname}")

                for attr_name in dir(module):
                    attr = getattr(module, attr_name)
                    if (
                        isinstance(attr, type)
                        and issubclass(attr, DataSource)
                        and attr is not DataSource
                        and attr.source_id
                    ):
                        self.register(attr)
                        logger.info(f"Auto-registered source: {attr.source_id}")

            except Exception as e:
                logger.error(f"Failed to load source module {modname}: {e}")


class DataSourceFactory:
    """
    Builds the adapter for a source identifier.

    A source must have both a configuration entry and a registered adapter
    class; the two are checked separately so misconfiguration is reported
    precisely.
    """

    def __init__(self, config: AppConfig, registry: Optional[SourceRegistry] = None):
        self.config = config
        if registry is None:
            registry = SourceRegistry()
            registry.auto_discover()
        self.registry = registry

    def create(
        self, source_id: str, api_client, image_cache: Optional[ImageCache] = None
    ) -> DataSource:
        """
        Create the adapter for a source.

        Raises:
            UnknownSourceError: If no configuration exists for source_id
            UnimplementedSourceError: If no adapter class is registered for it
        """
        source_config = self.config.sources.get(source_id)
        if source_config is None:
            raise UnknownSourceError(source_id)

        source_class = self.registry.get_source_class(source_id)
        if source_class is None:
            raise UnimplementedSourceError(source_id)

        logger.debug(f"Creating {source_class.__name__} for {source_id}")
        return source_class(
            source_config,
            api_client,
            sizing=self.config.sizing,
            image_cache=image_cache,
        )
