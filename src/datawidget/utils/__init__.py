"""
Utility modules for the data widget.
"""

from .errors import (
    ConfigurationError,
    DataWidgetError,
    FetchError,
    InvalidResponseError,
    UnimplementedSourceError,
    UnknownSourceError,
    error_boundary,
)
from .formatting import (
    clean_title,
    format_duration,
    format_number,
    format_time_ago,
    format_update_time,
    truncate,
)

__all__ = [
    "DataWidgetError",
    "FetchError",
    "InvalidResponseError",
    "ConfigurationError",
    "UnknownSourceError",
    "UnimplementedSourceError",
    "error_boundary",
    "truncate",
    "format_number",
    "format_time_ago",
    "format_duration",
    "clean_title",
    "format_update_time",
]
