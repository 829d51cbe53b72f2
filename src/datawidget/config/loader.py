"""
Configuration loader for the data widget
"""

import copy
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..utils.errors import ConfigurationError
from .models import SIZE_CLASSES, AppConfig, SizeProfile, SourceConfig

logger = logging.getLogger(__name__)

# Maximum config file size (1MB should be plenty for YAML configs)
MAX_CONFIG_SIZE = 1024 * 1024

_ENV_PATTERN = re.compile(r"^\$\{([A-Za-z_][A-Za-z0-9_]*)\}$")

DEFAULT_CONFIG: Dict[str, Any] = {
    "default_source": "billboard",
    "api_base_url": "https://api.michi.onl",
    "timeout": 10,
    "sizing": {
        "small": {
            "max_items": 3,
            "font_size": {"primary": 11, "secondary": 9, "tertiary": 8},
            "icon_size": 14,
            "spacing": 4,
            "padding": 12,
        },
        "medium": {
            "max_items": 6,
            "font_size": {"primary": 12, "secondary": 10, "tertiary": 9},
            "icon_size": 16,
            "spacing": 6,
            "padding": 14,
        },
        "large": {
            "max_items": 10,
            "font_size": {"primary": 13, "secondary": 11, "tertiary": 10},
            "icon_size": 18,
            "spacing": 8,
            "padding": 16,
        },
    },
    "sources": {
        "billboard": {
            "name": "Billboard 200",
            "endpoint": "/billboard-200",
            "icon": "chart.bar.fill",
            "refresh_hours": 24,
            "url_scheme": "https://www.billboard.com/charts/billboard-200/",
        },
        "imdb": {
            "name": "IMDb Popular",
            "endpoint": "/imdb",
            "icon": "tv.fill",
            "refresh_hours": 12,
            "url_scheme": "imdb://",
        },
        "steam": {
            "name": "Steam Games",
            "endpoint": "/steam-profiles",
            "icon": "gamecontroller.fill",
            "refresh_hours": 6,
            "url_scheme": "steam://",
            "profiles": ["exampleuser1", "exampleuser2"],
        },
        "hackernews": {
            "name": "Hacker News",
            "endpoint": "/hackernews",
            "icon": "newspaper.fill",
            "refresh_hours": 1,
            "url_scheme": "https://news.ycombinator.com/",
        },
        "github": {
            "name": "GitHub Releases",
            "endpoint": "/github-releases",
            "icon": "arrow.down.circle.fill",
            "refresh_hours": 6,
            "url_scheme": "https://github.com/",
            "repos": ["anthropics/anthropic-sdk-python", "fasthtml/fasthtml"],
        },
        "wikipedia": {
            "name": "Wikipedia Edits",
            "endpoint": "/wikipedia-watchlist",
            "icon": "book.fill",
            "refresh_hours": 2,
            "url_scheme": "https://wikipedia.org/",
            # "lang:username" and "lang:token" pairs, comma separated
            "usernames": "",
            "tokens": "",
            "languages": "en,de",
            "limit": 10,
        },
    },
}


class ConfigLoader:
    """Loads YAML overrides on top of the built-in defaults and validates them"""

    def load(self, config_path: Optional[str] = None) -> AppConfig:
        """
        Build the application configuration.

        Args:
            config_path: Optional path to a YAML file whose values are merged
                over DEFAULT_CONFIG

        Returns:
            Validated AppConfig

        Raises:
            ConfigurationError: If the file is missing, too large, not valid
                YAML or structurally invalid
        """
        raw = copy.deepcopy(DEFAULT_CONFIG)

        if config_path:
            overrides = self._read_file(config_path)
            raw = self._merge(raw, overrides)

        raw = self._expand_env(raw)
        self._validate(raw)
        return self._build(raw)

    def _read_file(self, config_path: str) -> Dict[str, Any]:
        """Read and parse one YAML file."""
        resolved_path = Path(config_path).expanduser().resolve()

        if not resolved_path.exists():
            raise ConfigurationError(f"Configuration file not found: {resolved_path}")

        if resolved_path.is_dir():
            raise ConfigurationError(f"Path is a directory, not a file: {resolved_path}")

        if resolved_path.suffix.lower() not in [".yaml", ".yml"]:
            logger.warning(
                f"Configuration file has unexpected extension: {resolved_path.suffix}. "
                f"Expected .yaml or .yml"
            )

        file_size = resolved_path.stat().st_size
        if file_size > MAX_CONFIG_SIZE:
            raise ConfigurationError(
                f"Configuration file too large: {file_size} bytes "
                f"(maximum {MAX_CONFIG_SIZE} bytes)"
            )

        try:
            with open(resolved_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}") from e
        except PermissionError as e:
            raise ConfigurationError(f"Cannot read configuration file: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration must be a dictionary")

        logger.info(f"Loaded configuration from {resolved_path}")
        return data

    def _merge(self, base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge mappings; lists and scalars are replaced."""
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                base[key] = self._merge(base[key], value)
            else:
                base[key] = value
        return base

    def _expand_env(self, value: Any) -> Any:
        """Replace "${VAR}" strings with the environment value."""
        if isinstance(value, dict):
            return {key: self._expand_env(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self._expand_env(item) for item in value]
        if isinstance(value, str):
            match = _ENV_PATTERN.match(value)
            if match:
                env_var = match.group(1)
                expanded = os.environ.get(env_var)
                if expanded is None:
                    logger.warning(f"Environment variable '{env_var}' not set")
                    return ""
                return expanded
        return value

    def _validate(self, config: Dict[str, Any]) -> None:
        """Validate configuration structure"""
        sizing = config.get("sizing")
        if not isinstance(sizing, dict):
            raise ConfigurationError("'sizing' must be a dictionary")

        for size in SIZE_CLASSES:
            profile = sizing.get(size)
            if not isinstance(profile, dict):
                raise ConfigurationError(f"Missing size profile: {size}")
            max_items = profile.get("max_items")
            if not isinstance(max_items, int) or max_items < 1:
                raise ConfigurationError(
                    f"Invalid max_items for {size}: {max_items!r} (must be a positive integer)"
                )

        sources = config.get("sources")
        if not isinstance(sources, dict) or not sources:
            raise ConfigurationError("'sources' must be a non-empty dictionary")

        for source_id, source in sources.items():
            if not isinstance(source, dict):
                raise ConfigurationError(f"Source '{source_id}' must be a dictionary")
            if not source.get("endpoint"):
                raise ConfigurationError(f"Source '{source_id}' requires an 'endpoint'")

        if not config.get("api_base_url"):
            raise ConfigurationError("'api_base_url' must be set")

    def _build(self, config: Dict[str, Any]) -> AppConfig:
        """Turn the validated dictionary into immutable records."""
        try:
            sizing = {
                size: SizeProfile.from_dict(profile)
                for size, profile in config["sizing"].items()
            }
            sources = {
                source_id: SourceConfig.from_dict(source_id, source)
                for source_id, source in config["sources"].items()
            }
            timeout = float(config.get("timeout", 10))
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration value: {e}") from e

        return AppConfig(
            api_base_url=str(config["api_base_url"]).rstrip("/"),
            default_source=str(config.get("default_source", "billboard")),
            timeout=timeout,
            sizing=sizing,
            sources=sources,
        )
