"""
Main controller for the universal data widget.
"""

import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Optional

from .api.client import APIClient
from .cache.images import ImageCache
from .canvas import WidgetCanvas
from .config.models import AppConfig, SizeProfile
from .sources.base import DataSource, is_empty
from .sources.registry import DataSourceFactory
from .utils.formatting import format_update_time

logger = logging.getLogger(__name__)

DEFAULT_SIZE = "medium"

# Used when the source could not be resolved
DEFAULT_REFRESH_HOURS = 1

NO_DATA_MESSAGE = "No data available"


class Outcome(Enum):
    RENDERED = "rendered"
    EMPTY = "empty"
    FAILED = "failed"


class WidgetRun:
    """
    Result of one controller run.

    Attributes:
        outcome: RENDERED, EMPTY or FAILED
        canvas: Fully built canvas to hand to the host
        source_id: Source that was requested
        size: Size class that was requested
        error: Failure message for FAILED runs
    """

    def __init__(
        self,
        outcome: Outcome,
        canvas: WidgetCanvas,
        source_id: str,
        size: str,
        error: Optional[str] = None,
    ):
        self.outcome = outcome
        self.canvas = canvas
        self.source_id = source_id
        self.size = size
        self.error = error

    def __repr__(self) -> str:
        return f"<WidgetRun(source={self.source_id}, size={self.size}, outcome={self.outcome.value})>"


class UniversalWidget:
    """
    Orchestrates one widget render.

    The pipeline is: resolve size -> build the source adapter -> fetch ->
    check for data -> render -> footer. Every failure along the way is
    caught here and turned into a uniform error canvas, so run() always
    returns a complete canvas and never raises.
    """

    def __init__(
        self,
        config: AppConfig,
        api_client: Optional[APIClient] = None,
        factory: Optional[DataSourceFactory] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the controller.

        Args:
            config: Resolved application configuration
            api_client: Client for the shared API (built from config if omitted)
            factory: Adapter factory (auto-discovers sources if omitted)
            clock: Returns the current local time
        """
        self.config = config
        self.api_client = api_client or APIClient(config.api_base_url, timeout=config.timeout)
        self.factory = factory or DataSourceFactory(config)
        self.clock = clock

    def run(self, source_id: Optional[str] = None, size: Optional[str] = None) -> WidgetRun:
        """
        Build the widget for a source and size class.

        Args:
            source_id: Source identifier; empty means the configured default
            size: Size class; empty means "medium"

        Returns:
            WidgetRun carrying the outcome and the canvas
        """
        source_id = (source_id or "").strip() or self.config.default_source
        size = size or DEFAULT_SIZE

        try:
            sizes = self.config.size_profile(size)
            source = self.factory.create(source_id, self.api_client, ImageCache(self.config.timeout))
            canvas = self._create_canvas(source, sizes)

            data = source.fetch_data(size)
            if is_empty(data):
                logger.info(f"{source_id}: no data returned")
                canvas = self.create_error_widget(NO_DATA_MESSAGE, source_id)
                return WidgetRun(Outcome.EMPTY, canvas, source_id, size)

            source.render_widget(canvas, data, size)

            if size == "large":
                self.add_footer(canvas, sizes)

        except Exception as e:
            logger.error(f"Widget error for {source_id}: {e}", exc_info=True)
            canvas = self.create_error_widget(str(e), source_id)
            return WidgetRun(Outcome.FAILED, canvas, source_id, size, error=str(e))

        logger.info(f"Rendered {source_id} widget ({size})")
        return WidgetRun(Outcome.RENDERED, canvas, source_id, size)

    def _create_canvas(self, source: DataSource, sizes: SizeProfile) -> WidgetCanvas:
        """Blank canvas with padding, deep link and refresh date."""
        canvas = WidgetCanvas()
        canvas.set_padding(sizes.padding, sizes.padding, sizes.padding, sizes.padding)
        canvas.refresh_after = self.clock() + timedelta(hours=source.config.refresh_hours)

        if source.config.url_scheme:
            canvas.url = source.config.url_scheme

        return canvas

    def refresh_hours(self, source_id: str) -> float:
        source = self.config.sources.get(source_id)
        return source.refresh_hours if source else DEFAULT_REFRESH_HOURS

    def create_error_widget(self, message: str, source_id: Optional[str] = None) -> WidgetCanvas:
        """Uniform canvas showing a warning icon, a heading and the message."""
        sizes = self.config.size_profile(DEFAULT_SIZE)

        canvas = WidgetCanvas()
        canvas.set_padding(sizes.padding, sizes.padding, sizes.padding, sizes.padding)
        canvas.refresh_after = self.clock() + timedelta(
            hours=self.refresh_hours(source_id) if source_id else DEFAULT_REFRESH_HOURS
        )

        stack = canvas.add_stack()
        stack.layout_vertically()
        stack.center_align_content()

        stack.add_image("exclamationmark.triangle.fill", (32, 32), tint="warning")
        stack.add_spacer(8)
        stack.add_text("Error", font_size=14, weight="bold", color="primary", align="center")
        stack.add_spacer(4)
        stack.add_text(message, font_size=11, color="secondary", align="center")

        return canvas

    def add_footer(self, canvas: WidgetCanvas, sizes: SizeProfile) -> None:
        """Right-aligned "Updated HH:MM" line at the bottom of the canvas."""
        canvas.add_spacer()

        footer = canvas.add_stack()
        footer.layout_horizontally()
        footer.add_spacer()
        footer.add_text(
            format_update_time(self.clock()),
            font_size=sizes.font_sizes.tertiary,
            color="tertiary",
            align="right",
        )
