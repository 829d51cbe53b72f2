"""
Popular movies and TV shows from IMDb.
"""

import logging
from typing import Any, Dict

from ..canvas import Stack, WidgetCanvas
from ..config.models import SizeProfile
from ..utils.formatting import truncate
from .base import DataSource, FetchResult, NormalizedItem

logger = logging.getLogger(__name__)


def rating_label(rating: Any) -> str:
    """Badge text for a rating; an empty rating marks a new title."""
    if rating == "":
        return "NEW"
    return str(rating)


class IMDbDataSource(DataSource):
    """
    Display popular movies and TV shows side by side.

    One request returns both collections; each gets half of the size's item
    budget, rounded up. The small size only shows movies, so its result
    leaves TV shows empty.
    """

    source_id = "imdb"
    collections = ("movies", "tv_shows")

    def fetch_data(self, size: str) -> FetchResult:
        response = self.api.fetch(self.config.endpoint)

        per_collection = self.half_limit(size)
        movies = self.optional_list(response, "movies", "data")[:per_collection]
        tv_shows = []
        if size != "small":
            tv_shows = self.optional_list(response, "tv_shows", "data")[:per_collection]

        logger.info(f"Fetched {len(movies)} movies and {len(tv_shows)} TV shows")
        return {
            "logo": self.load_logo(),
            "movies": [self._normalize(row, "movie") for row in movies],
            "tv_shows": [self._normalize(row, "tv") for row in tv_shows],
        }

    def _normalize(self, row: Dict[str, Any], media_type: str) -> NormalizedItem:
        return NormalizedItem(
            title=truncate(row.get("title"), 30),
            subtitle=f"{row.get('year') or 'N/A'} • {row.get('length') or ''}",
            rating=row.get("rating"),
            image=self.load_image(row.get("image")),
            metadata={"type": media_type},
        )

    def render_widget(self, canvas: WidgetCanvas, data: FetchResult, size: str) -> None:
        sizes = self.size_profile(size)

        self.add_header(canvas, "Popular on IMDb", sizes, logo=data.get("logo"))
        canvas.add_spacer(sizes.spacing)

        content = canvas.add_stack()
        content.layout_horizontally()

        if data["movies"]:
            self._render_section(content, "Movies", data["movies"], sizes)

        if size != "small" and data["tv_shows"]:
            content.add_spacer()
            self._render_section(content, "TV Shows", data["tv_shows"], sizes)

    def _render_section(self, content: Stack, title: str, items, sizes: SizeProfile) -> None:
        column = content.add_stack()
        column.layout_vertically()

        column.add_text(
            title, font_size=sizes.font_sizes.secondary, weight="semibold", color="secondary"
        )
        column.add_spacer(sizes.spacing)

        self.render_rows(column, items, sizes, self._render_item)

    def _render_item(self, stack: Stack, item: NormalizedItem, sizes: SizeProfile) -> None:
        row = stack.add_stack()
        row.layout_horizontally()
        row.center_align_content()

        if item.image is not None:
            row.add_image(item.image, (sizes.icon_size, int(sizes.icon_size * 1.5)), corner_radius=2)
            row.add_spacer(sizes.spacing)

        if item.rating is not None:
            badge = row.add_stack()
            badge.background = "accent"
            badge.corner_radius = 4
            badge.set_padding(2, 4, 2, 4)
            badge.add_text(
                rating_label(item.rating),
                font_size=sizes.font_sizes.tertiary,
                weight="bold",
                color="white",
            )
            row.add_spacer(sizes.spacing)

        text = row.add_stack()
        text.layout_vertically()
        text.add_text(
            item.title,
            font_size=sizes.font_sizes.secondary,
            weight="medium",
            line_limit=1,
        )
        text.add_text(item.subtitle, font_size=sizes.font_sizes.tertiary, color="secondary")
