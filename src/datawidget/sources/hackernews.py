"""
Hacker News front page stories.
"""

import logging

from ..canvas import Stack, WidgetCanvas
from ..config.models import SizeProfile
from ..utils.formatting import format_number, truncate
from .base import DataSource, FetchResult, NormalizedItem

logger = logging.getLogger(__name__)


class HackerNewsDataSource(DataSource):
    """
    Display top Hacker News stories.

    The medium size fits more stories by splitting them into two columns once
    there are more than three; the first column gets the larger half.
    """

    source_id = "hackernews"
    collections = ("stories",)

    def fetch_data(self, size: str) -> FetchResult:
        response = self.api.fetch(self.config.endpoint)
        rows = self.require_list(response, "stories")

        stories = [
            NormalizedItem(
                title=truncate(row.get("title"), 50),
                subtitle=row.get("author") or "",
                url=row.get("url"),
                metadata={
                    "points": row.get("points") or 0,
                    "comments": row.get("numComments") or 0,
                    "time_ago": row.get("timePosted"),
                },
            )
            for row in rows[: self.limit(size)]
        ]

        logger.info(f"Fetched {len(stories)} Hacker News stories")
        return {"stories": stories}

    def render_widget(self, canvas: WidgetCanvas, data: FetchResult, size: str) -> None:
        sizes = self.size_profile(size)
        stories = data["stories"]

        self.add_header(canvas, "Hacker News", sizes)
        canvas.add_spacer(sizes.spacing)

        if size == "medium" and len(stories) > 3:
            self.render_columns(canvas, stories, sizes, 2, self._render_item)
        else:
            content = canvas.add_stack()
            content.layout_vertically()
            self.render_rows(content, stories, sizes, self._render_item)

    def _render_item(self, stack: Stack, story: NormalizedItem, sizes: SizeProfile) -> None:
        item = stack.add_stack()
        item.layout_vertically()

        item.add_text(
            story.title,
            font_size=sizes.font_sizes.primary,
            weight="medium",
            line_limit=2,
        )

        meta = item.add_stack()
        meta.layout_horizontally()
        meta.add_text(
            f"{format_number(story.metadata['points'])}pts • "
            f"{format_number(story.metadata['comments'])}cmt",
            font_size=sizes.font_sizes.tertiary,
            color="secondary",
        )
