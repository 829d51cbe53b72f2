"""
Immutable configuration records for sources and widget sizes.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

SIZE_CLASSES = ("small", "medium", "large")


@dataclass(frozen=True)
class FontSizes:
    primary: int
    secondary: int
    tertiary: int


@dataclass(frozen=True)
class SizeProfile:
    """
    Layout constants for one widget size class.

    Attributes:
        max_items: Maximum number of items a source shows at this size
        font_sizes: Three-tier font scale
        icon_size: Icon edge length in points
        spacing: Spacing unit between elements
        padding: Canvas padding on every side
    """

    max_items: int
    font_sizes: FontSizes
    icon_size: int
    spacing: int
    padding: int

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "SizeProfile":
        fonts = raw["font_size"]
        return cls(
            max_items=int(raw["max_items"]),
            font_sizes=FontSizes(
                primary=int(fonts["primary"]),
                secondary=int(fonts["secondary"]),
                tertiary=int(fonts["tertiary"]),
            ),
            icon_size=int(raw["icon_size"]),
            spacing=int(raw["spacing"]),
            padding=int(raw["padding"]),
        )


@dataclass(frozen=True)
class SourceConfig:
    """
    Static descriptor of one data source.

    Attributes:
        source_id: Identifier used to select the source, e.g. "steam"
        name: Display name
        endpoint: Path below the API base URL
        icon: Symbol token shown in the header
        refresh_hours: Hours until the host should refresh the widget
        url_scheme: Deep link opened when the widget is tapped
        params: Source-specific extras (profiles, repos, credentials, ...)
        logo_url: Optional header logo loaded opportunistically
    """

    source_id: str
    name: str
    endpoint: str
    icon: str = "square.grid.2x2.fill"
    refresh_hours: float = 1
    url_scheme: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)
    logo_url: Optional[str] = None

    @classmethod
    def from_dict(cls, source_id: str, raw: Mapping[str, Any]) -> "SourceConfig":
        known = {"name", "endpoint", "icon", "refresh_hours", "url_scheme", "logo_url"}
        extras = {key: value for key, value in raw.items() if key not in known}
        return cls(
            source_id=source_id,
            name=raw.get("name", source_id.title()),
            endpoint=raw["endpoint"],
            icon=raw.get("icon", cls.icon),
            refresh_hours=float(raw.get("refresh_hours", cls.refresh_hours)),
            url_scheme=raw.get("url_scheme"),
            params=extras,
            logo_url=raw.get("logo_url"),
        )


@dataclass(frozen=True)
class AppConfig:
    """Fully resolved configuration for one process."""

    api_base_url: str
    default_source: str
    timeout: float
    sizing: Dict[str, SizeProfile]
    sources: Dict[str, SourceConfig]

    def size_profile(self, size: str) -> SizeProfile:
        try:
            return self.sizing[size]
        except KeyError:
            raise ValueError(f"Unknown widget size: {size}") from None
