"""
Billboard 200 album chart.
"""

import logging
from typing import Any, Dict

from ..canvas import Stack, WidgetCanvas
from ..config.models import SizeProfile
from ..utils.formatting import clean_title, truncate
from .base import DataSource, FetchResult, NormalizedItem

logger = logging.getLogger(__name__)

NEW = "new"
UP = "up"
DOWN = "down"
UNCHANGED = "unchanged"

# Movement -> (symbol, palette colour)
MOVEMENT_SYMBOLS = {
    NEW: ("star.circle.fill", "new"),
    UP: ("arrow.up.circle.fill", "up"),
    DOWN: ("arrow.down.circle.fill", "down"),
    UNCHANGED: ("minus.circle.fill", "unchanged"),
}


def movement(current: int, previous: int) -> str:
    """
    Chart movement between last week's and this week's position.

    A previous position of 0 means the album was not on last week's chart.
    """
    if previous == 0:
        return NEW
    if current < previous:
        return UP
    if current > previous:
        return DOWN
    return UNCHANGED


class BillboardDataSource(DataSource):
    """
    Display the top of the Billboard 200 with chart movement.

    Response shape:
        {"music": {"data_title": ..., "data_desc": ...,
                   "data": [{"position", "title", "artist", "last_week",
                             "peak", "weeks", "image"?}, ...]}}

    Cover images are only loaded for the large size, where there is room to
    show them.
    """

    source_id = "billboard"
    collections = ("items",)

    def fetch_data(self, size: str) -> FetchResult:
        response = self.api.fetch(self.config.endpoint)
        rows = self.require_list(response, "music", "data")
        music = response["music"]

        items = [
            self._normalize(row, index + 1, size)
            for index, row in enumerate(rows[: self.limit(size)])
        ]
        logger.info(f"Fetched {len(items)} Billboard entries")

        return {
            "title": music.get("data_title") or self.config.name,
            "subtitle": music.get("data_desc") or "",
            "items": items,
        }

    def _normalize(self, row: Dict[str, Any], position: int, size: str) -> NormalizedItem:
        image = self.load_image(row.get("image")) if size == "large" else None
        return NormalizedItem(
            title=clean_title(row.get("title")),
            subtitle=row.get("artist") or "",
            rank=int(row.get("position") or position),
            image=image,
            metadata={
                "last_week": row.get("last_week") or 0,
                "peak": row.get("peak"),
                "weeks": row.get("weeks"),
            },
        )

    def render_widget(self, canvas: WidgetCanvas, data: FetchResult, size: str) -> None:
        sizes = self.size_profile(size)

        self.add_header(canvas, data["title"], sizes)
        canvas.add_spacer(sizes.spacing)

        columns = 1 if size == "small" else 2
        self.render_columns(canvas, data["items"], sizes, columns, self._render_item)

    def _render_item(self, stack: Stack, item: NormalizedItem, sizes: SizeProfile) -> None:
        row = stack.add_stack()
        row.layout_horizontally()
        row.center_align_content()

        indicator = row.add_stack()
        indicator.layout_vertically()
        indicator.center_align_content()
        symbol, color = MOVEMENT_SYMBOLS[movement(item.rank, item.metadata["last_week"])]
        indicator.add_image(symbol, (sizes.icon_size, sizes.icon_size), tint=color)

        row.add_spacer(sizes.spacing)

        if item.image is not None:
            row.add_image(item.image, (sizes.icon_size * 2, sizes.icon_size * 2), corner_radius=4)
            row.add_spacer(sizes.spacing)

        text = row.add_stack()
        text.layout_vertically()

        title_row = text.add_stack()
        title_row.layout_horizontally()
        if item.metadata.get("peak") == 1:
            title_row.add_image(
                "star.fill", (sizes.font_sizes.primary, sizes.font_sizes.primary), tint="star"
            )
            title_row.add_spacer(2)
        title_row.add_text(
            truncate(item.title, 35),
            font_size=sizes.font_sizes.primary,
            weight="medium",
            line_limit=1,
        )

        text.add_text(
            truncate(item.subtitle, 30),
            font_size=sizes.font_sizes.secondary,
            color="secondary",
            line_limit=1,
        )

        weeks = item.metadata.get("weeks")
        if weeks:
            text.add_text(
                f"{weeks} weeks", font_size=sizes.font_sizes.tertiary, color="tertiary"
            )

        row.add_spacer()
