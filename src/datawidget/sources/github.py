"""
Latest GitHub releases of tracked repositories.
"""

import logging
from typing import Any, Dict, Optional

from ..canvas import Stack, WidgetCanvas
from ..config.models import SizeProfile
from ..utils.formatting import format_time_ago
from .base import DataSource, FetchResult, NormalizedItem

logger = logging.getLogger(__name__)

TAG_PREFIX = "releases/"


def repo_label(repo: Optional[str]) -> str:
    """Short label for "owner/repo": the last path segment."""
    if not repo:
        return ""
    return repo.rsplit("/", 1)[-1]


def clean_tag_name(tag_name: Optional[str]) -> str:
    """Strip a literal "releases/" prefix from a tag."""
    if not tag_name:
        return ""
    if tag_name.startswith(TAG_PREFIX):
        return tag_name[len(TAG_PREFIX):]
    return tag_name


class GitHubDataSource(DataSource):
    """
    Display recent releases for a list of repositories.

    Configuration:
        repos: List of "owner/repo" identifiers, requested in one batched call
    """

    source_id = "github"
    collections = ("releases",)

    def fetch_data(self, size: str) -> FetchResult:
        repos = self.config.params.get("repos") or []
        response = self.api.fetch(self.config.endpoint, {"repos": ",".join(repos)})

        rows = self.optional_list(response, "releases")
        releases = [self._normalize(row) for row in rows[: self.limit(size)]]

        logger.info(f"Fetched {len(releases)} releases for {len(repos)} repositories")
        return {"releases": releases}

    def _normalize(self, row: Dict[str, Any]) -> NormalizedItem:
        tag_name = row.get("tagName")
        return NormalizedItem(
            title=row.get("name") or tag_name or "",
            subtitle=repo_label(row.get("repo")),
            url=row.get("url"),
            metadata={
                "tag_name": clean_tag_name(tag_name),
                "published_at": row.get("publishedAt"),
                "time_ago": row.get("timeAgo") or format_time_ago(row.get("publishedAt")),
                "author": row.get("author"),
                "prerelease": bool(row.get("isPrerelease")),
            },
        )

    def render_widget(self, canvas: WidgetCanvas, data: FetchResult, size: str) -> None:
        sizes = self.size_profile(size)

        self.add_header(canvas, "Recent Releases", sizes)
        canvas.add_spacer(sizes.spacing)

        content = canvas.add_stack()
        content.layout_vertically()
        self.render_rows(content, data["releases"], sizes, self._render_item)

    def _render_item(self, stack: Stack, release: NormalizedItem, sizes: SizeProfile) -> None:
        item = stack.add_stack()
        item.layout_vertically()

        header = item.add_stack()
        header.layout_horizontally()
        header.add_text(
            release.subtitle,
            font_size=sizes.font_sizes.secondary,
            weight="semibold",
            color="accent",
        )
        header.add_spacer(4)
        header.add_text(
            release.metadata["tag_name"], font_size=sizes.font_sizes.tertiary, color="secondary"
        )

        if release.metadata["prerelease"]:
            header.add_spacer(4)
            header.add_text(
                "pre", font_size=sizes.font_sizes.tertiary, weight="bold", color="warning"
            )

        author = release.metadata.get("author") or "unknown"
        time_ago = release.metadata.get("time_ago") or ""
        item.add_text(
            f"{author} • {time_ago}", font_size=sizes.font_sizes.tertiary, color="secondary"
        )
