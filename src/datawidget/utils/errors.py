"""
Error handling utilities and boundaries for the data widget.

Provides the exception taxonomy shared by the API client, the data source
adapters and the controller, plus a decorator for opportunistic operations
whose failure must never abort a render.
"""

import logging
from functools import wraps
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

# Type variable for generic function decoration
F = TypeVar("F", bound=Callable[..., Any])


def error_boundary(
    *,
    reraise: bool = False,
    default_return: Any = None,
    log_level: int = logging.ERROR,
) -> Callable[[F], F]:
    """
    Decorator to create consistent error boundaries around functions.

    Args:
        reraise: If True, re-raise the exception after logging
        default_return: Value to return if error occurs and not reraising
        log_level: Logging level for the error (default: ERROR)

    Returns:
        Decorated function with error handling

    Example:
        >>> @error_boundary(default_return=None, log_level=logging.WARNING)
        ... def load_logo(self):
        ...     # If this raises, it will be logged and return None
        ...     return self.image_cache.load(self.config.logo_url)
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.log(
                    log_level,
                    f"Error in {func.__name__}: {e}",
                    exc_info=True,
                    extra={"function": func.__name__, "func_module": func.__module__},
                )

                if reraise:
                    raise

                return default_return

        return wrapper  # type: ignore

    return decorator


class DataWidgetError(Exception):
    """Base exception for all data widget errors."""

    pass


class FetchError(DataWidgetError):
    """
    Raised when talking to a remote endpoint fails.

    Covers transport errors (DNS, refused connections, HTTP error statuses,
    timeouts) as well as bodies that cannot be decoded as JSON.

    Attributes:
        endpoint: Endpoint path the request was issued for
        cause: Underlying exception
    """

    def __init__(self, endpoint: str, cause: Any):
        self.endpoint = endpoint
        self.cause = cause
        super().__init__(f"Failed to fetch from {endpoint}: {cause}")


class InvalidResponseError(FetchError):
    """Raised when a response is valid JSON but lacks the expected structure."""

    pass


class ConfigurationError(DataWidgetError):
    """Raised when there's an issue with configuration."""

    pass


class UnknownSourceError(ConfigurationError):
    """Raised when no source configuration exists for an identifier."""

    def __init__(self, source_id: str):
        self.source_id = source_id
        super().__init__(f"Unknown source: {source_id}")


class UnimplementedSourceError(ConfigurationError):
    """Raised when a source is configured but no adapter class is registered."""

    def __init__(self, source_id: str):
        self.source_id = source_id
        super().__init__(f"Source not implemented: {source_id}")
