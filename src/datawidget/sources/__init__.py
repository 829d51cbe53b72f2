"""
Data sources for the universal widget.

Each source fetches one remote collection (charts, games, stories, ...),
normalizes it into NormalizedItem lists and lays it out on a canvas. Sources
are looked up by identifier through the SourceRegistry.
"""

from .base import DataSource, FetchResult, NormalizedItem, is_empty, split_columns
from .registry import DataSourceFactory, SourceRegistry

__all__ = [
    "DataSource",
    "FetchResult",
    "NormalizedItem",
    "is_empty",
    "split_columns",
    "DataSourceFactory",
    "SourceRegistry",
]
