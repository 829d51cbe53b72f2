"""
Recently played Steam games across several profiles.
"""

import logging
from typing import Any, List

from ..canvas import Stack, WidgetCanvas
from ..config.models import SizeProfile
from ..utils.errors import InvalidResponseError
from ..utils.formatting import format_duration, truncate
from .base import DataSource, FetchResult, NormalizedItem

logger = logging.getLogger(__name__)


def _hours(game: Any) -> float:
    try:
        return float(game.get("hoursPlayedNumeric") or 0)
    except (TypeError, ValueError):
        return 0.0


def merge_games(response: dict) -> List[NormalizedItem]:
    """
    Flatten every profile's recent games and rank them by play time.

    The sort is stable, so games with equal hours keep response order.
    """
    games = []
    for username, profile in response.items():
        if not isinstance(profile, dict):
            continue
        for game in profile.get("recentGames") or []:
            games.append(
                NormalizedItem(
                    title=game.get("name") or "Unknown",
                    subtitle=username,
                    metadata={"hours_played": _hours(game), "username": username},
                )
            )

    games.sort(key=lambda item: item.metadata["hours_played"], reverse=True)
    return games


class SteamDataSource(DataSource):
    """
    Display the most played recent games of the configured profiles.

    All profiles are requested in one call ("profiles=a,b"); the games are
    merged across profiles, ranked by hours played and only then truncated.

    Configuration:
        profiles: List of Steam profile names
    """

    source_id = "steam"
    collections = ("games",)

    def fetch_data(self, size: str) -> FetchResult:
        profiles = self.config.params.get("profiles") or []
        response = self.api.fetch(self.config.endpoint, {"profiles": ",".join(profiles)})

        if not isinstance(response, dict):
            raise InvalidResponseError(self.config.endpoint, "expected a mapping of profiles")

        missing = [profile for profile in profiles if profile not in response]
        if missing:
            logger.warning(f"No Steam data returned for profiles: {', '.join(missing)}")

        games = merge_games(response)[: self.limit(size)]
        logger.info(f"Fetched {len(games)} recent Steam games")
        return {"games": games}

    def render_widget(self, canvas: WidgetCanvas, data: FetchResult, size: str) -> None:
        sizes = self.size_profile(size)

        self.add_header(canvas, "Recently Played", sizes)
        canvas.add_spacer(sizes.spacing)

        content = canvas.add_stack()
        content.layout_vertically()
        self.render_rows(content, data["games"], sizes, self._render_item)

    def _render_item(self, stack: Stack, game: NormalizedItem, sizes: SizeProfile) -> None:
        row = stack.add_stack()
        row.layout_horizontally()
        row.center_align_content()

        row.add_image("gamecontroller.fill", (sizes.icon_size, sizes.icon_size), tint="secondary")
        row.add_spacer(sizes.spacing)

        text = row.add_stack()
        text.layout_vertically()
        text.add_text(
            truncate(game.title, 35),
            font_size=sizes.font_sizes.primary,
            weight="medium",
            line_limit=1,
        )
        text.add_text(
            format_duration(game.metadata["hours_played"]),
            font_size=sizes.font_sizes.secondary,
            color="secondary",
        )

        row.add_spacer()
