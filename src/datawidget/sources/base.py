"""
Base classes for all data sources.
"""

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from PIL import Image

from ..cache.images import ImageCache
from ..canvas import Stack, WidgetCanvas
from ..config.models import SizeProfile, SourceConfig
from ..utils.errors import InvalidResponseError, error_boundary

logger = logging.getLogger(__name__)

# Mapping of collection name (e.g. "games") to items, plus header values
FetchResult = Dict[str, Any]


@dataclass
class NormalizedItem:
    """
    Display fields shared by every source.

    Optional fields left as None are absent and suppress the matching
    element when rendered. An empty string is a present value.
    """

    title: str
    subtitle: str = ""
    rank: Optional[int] = None
    rating: Optional[Any] = None
    image: Optional[Image.Image] = None
    url: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


class DataSource(ABC):
    """
    Base class for all widget data sources.

    A data source knows its endpoint, how many items fit each widget size,
    how to normalize the raw JSON into NormalizedItem collections and how to
    lay those collections out on a canvas.

    Class Attributes:
        source_id: Unique identifier for this source (e.g. "billboard")
        collections: Names of the item collections fetch_data() returns

    Example:
        >>> class MySource(DataSource):
        ...     source_id = "my_source"
        ...     collections = ("items",)
        ...
        ...     def fetch_data(self, size):
        ...         response = self.api.fetch(self.config.endpoint)
        ...         rows = self.require_list(response, "items")
        ...         return {"items": [NormalizedItem(r["name"]) for r in rows[: self.limit(size)]]}
        ...
        ...     def render_widget(self, canvas, data, size):
        ...         self.add_header(canvas, "Mine", self.size_profile(size))
    """

    # Source identifier (must be unique)
    source_id: str = None

    collections: Sequence[str] = ()

    def __init__(
        self,
        config: SourceConfig,
        api_client,
        sizing: Mapping[str, SizeProfile],
        image_cache: Optional[ImageCache] = None,
    ):
        """
        Initialize the data source.

        Args:
            config: Static configuration of this source
            api_client: APIClient used for every request
            sizing: Size profiles keyed by size class
            image_cache: Cache for thumbnails and logos of this run

        Raises:
            ValueError: If source_id is not defined
        """
        if not self.source_id:
            raise ValueError(f"{self.__class__.__name__} must define source_id")

        self.config = config
        self.api = api_client
        self.sizing = sizing
        self.image_cache = image_cache if image_cache is not None else ImageCache()

    @abstractmethod
    def fetch_data(self, size: str) -> FetchResult:
        """
        Fetch and normalize the data for one render.

        Args:
            size: Widget size class ("small", "medium" or "large")

        Returns:
            FetchResult with every name in ``collections`` mapped to a list
            of NormalizedItem. Empty lists are valid.

        Raises:
            FetchError: If the request fails or the response lacks the
                expected top-level structure
        """
        pass

    @abstractmethod
    def render_widget(self, canvas: WidgetCanvas, data: FetchResult, size: str) -> None:
        """
        Lay out fetched data on the canvas.

        Must not perform I/O; every image has been resolved by fetch_data().
        """
        pass

    # Sizing

    def size_profile(self, size: str) -> SizeProfile:
        try:
            return self.sizing[size]
        except KeyError:
            raise ValueError(f"Unknown widget size: {size}") from None

    def limit(self, size: str) -> int:
        """Maximum items for a size class."""
        return self.size_profile(size).max_items

    def half_limit(self, size: str) -> int:
        """Per-collection budget when two collections share one size."""
        return math.ceil(self.limit(size) / 2)

    # Response helpers

    def require_list(self, response: Any, *path: str) -> List[Any]:
        """
        Follow ``path`` through nested mappings and return the list found.

        Raises:
            InvalidResponseError: If a key is missing or the value is not a list
        """
        value = response
        for key in path:
            if not isinstance(value, dict) or key not in value:
                raise InvalidResponseError(
                    self.config.endpoint, f"missing '{'.'.join(path)}' in response"
                )
            value = value[key]

        if not isinstance(value, list):
            raise InvalidResponseError(
                self.config.endpoint, f"'{'.'.join(path)}' is not a list"
            )
        return value

    def optional_list(self, response: Any, *path: str) -> List[Any]:
        """Like require_list(), but a missing or malformed value gives []."""
        value = response
        for key in path:
            if not isinstance(value, dict):
                return []
            value = value.get(key)
        return value if isinstance(value, list) else []

    # Images

    @error_boundary(default_return=None, log_level=logging.WARNING)
    def load_logo(self) -> Optional[Image.Image]:
        """Load the configured header logo; a failure just omits it."""
        return self.image_cache.load(self.config.logo_url)

    def load_image(self, url: Optional[str]) -> Optional[Image.Image]:
        return self.image_cache.load(url)

    # Layout helpers

    def add_header(
        self,
        canvas: Stack,
        title: str,
        sizes: SizeProfile,
        logo: Optional[Image.Image] = None,
    ) -> Stack:
        """Icon (or logo) followed by a bold title."""
        header = canvas.add_stack()
        header.layout_horizontally()
        header.center_align_content()

        icon_size = (sizes.icon_size + 2, sizes.icon_size + 2)
        if logo is not None:
            header.add_image(logo, icon_size, corner_radius=4)
        else:
            header.add_image(self.config.icon, icon_size, tint="accent")

        header.add_spacer(sizes.spacing)
        header.add_text(
            title, font_size=sizes.font_sizes.primary, weight="bold", color="primary"
        )
        return header

    def render_rows(
        self,
        stack: Stack,
        items: Sequence[Any],
        sizes: SizeProfile,
        render_item: Callable[[Stack, Any, SizeProfile], None],
    ) -> None:
        """Render items one per row with spacing between them."""
        for index, item in enumerate(items):
            render_item(stack, item, sizes)
            if index < len(items) - 1:
                stack.add_spacer(sizes.spacing)

    def render_columns(
        self,
        canvas: Stack,
        items: Sequence[Any],
        sizes: SizeProfile,
        columns: int,
        render_item: Callable[[Stack, Any, SizeProfile], None],
    ) -> Stack:
        """Render items into side-by-side columns."""
        content = canvas.add_stack()
        content.layout_horizontally()

        for index, column_items in enumerate(split_columns(items, columns)):
            if index > 0:
                content.add_spacer(sizes.spacing * 2)
            column = content.add_stack()
            column.layout_vertically()
            self.render_rows(column, column_items, sizes, render_item)

        return content

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(source={self.source_id}, endpoint={self.config.endpoint})>"


def split_columns(items: Sequence[Any], columns: int) -> List[List[Any]]:
    """
    Split items into consecutive columns of near-equal length.

    Earlier columns get the ceiling share; empty trailing columns are dropped.

    Example:
        >>> split_columns([1, 2, 3, 4, 5], 2)
        [[1, 2, 3], [4, 5]]
    """
    if columns < 1:
        raise ValueError(f"columns must be at least 1, got {columns}")
    if not items:
        return []

    per_column = math.ceil(len(items) / columns)
    return [
        list(items[start : start + per_column])
        for start in range(0, len(items), per_column)
    ]


def is_empty(data: Optional[FetchResult]) -> bool:
    """True when a fetch result holds no items in any collection."""
    if not data:
        return True
    collections = [value for value in data.values() if isinstance(value, list)]
    return all(len(collection) == 0 for collection in collections)
