"""
Recent edits from Wikipedia watchlists.
"""

import logging
from typing import Any, Dict

from ..canvas import Stack, WidgetCanvas
from ..config.models import SizeProfile
from ..utils.formatting import format_time_ago, truncate
from .base import DataSource, FetchResult, NormalizedItem

logger = logging.getLogger(__name__)

NO_COMMENT = "N/A"


class WikipediaDataSource(DataSource):
    """
    Display recent watchlist edits across several language editions.

    Configuration:
        usernames: "lang:username" pairs, comma separated
        tokens: "lang:token" pairs, comma separated (may use ${ENV_VAR})
        languages: Comma separated language codes
        limit: Items requested from the API (defaults to the size limit)
    """

    source_id = "wikipedia"
    collections = ("edits",)

    def fetch_data(self, size: str) -> FetchResult:
        params = self.config.params
        query = {
            "username": params.get("usernames"),
            "token": params.get("tokens"),
            "lang": params.get("languages"),
            "limit": params.get("limit") or self.limit(size),
        }

        response = self.api.fetch(self.config.endpoint, query)
        rows = self.optional_list(response, "edits")

        edits = [self._normalize(row) for row in rows[: self.limit(size)]]
        logger.info(f"Fetched {len(edits)} Wikipedia edits")
        return {"edits": edits}

    def _normalize(self, row: Dict[str, Any]) -> NormalizedItem:
        return NormalizedItem(
            title=truncate(row.get("title"), 40),
            subtitle=row.get("user") or "",
            url=row.get("url"),
            metadata={
                "language": row.get("languageName") or row.get("language") or "",
                "comment": truncate(row.get("comment") or NO_COMMENT, 60),
                "time_ago": row.get("timeAgo") or format_time_ago(row.get("timestamp")),
            },
        )

    def render_widget(self, canvas: WidgetCanvas, data: FetchResult, size: str) -> None:
        sizes = self.size_profile(size)

        self.add_header(canvas, "Recent Edits", sizes)
        canvas.add_spacer(sizes.spacing)

        content = canvas.add_stack()
        content.layout_vertically()
        self.render_rows(content, data["edits"], sizes, self._render_item)

    def _render_item(self, stack: Stack, edit: NormalizedItem, sizes: SizeProfile) -> None:
        item = stack.add_stack()
        item.layout_vertically()

        header = item.add_stack()
        header.layout_horizontally()

        badge = header.add_stack()
        badge.background = "accent"
        badge.corner_radius = 3
        badge.set_padding(2, 4, 2, 4)
        badge.add_text(
            edit.metadata["language"],
            font_size=sizes.font_sizes.tertiary,
            weight="bold",
            color="white",
        )

        header.add_spacer(sizes.spacing)
        header.add_text(
            edit.title, font_size=sizes.font_sizes.primary, weight="medium", line_limit=1
        )

        comment = edit.metadata["comment"]
        if comment and comment != NO_COMMENT:
            item.add_text(
                comment, font_size=sizes.font_sizes.secondary, color="secondary", line_limit=1
            )

        item.add_text(
            f"{edit.subtitle} • {edit.metadata['time_ago']}",
            font_size=sizes.font_sizes.tertiary,
            color="tertiary",
        )
