"""
Configuration for the data widget: built-in defaults, YAML overrides and the
immutable records the rest of the package consumes.
"""

from .loader import DEFAULT_CONFIG, ConfigLoader
from .models import SIZE_CLASSES, AppConfig, FontSizes, SizeProfile, SourceConfig

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigLoader",
    "SIZE_CLASSES",
    "AppConfig",
    "FontSizes",
    "SizeProfile",
    "SourceConfig",
]
