"""
Host side of the widget lifecycle.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..canvas import WidgetCanvas
from .preview import PreviewRenderer

logger = logging.getLogger(__name__)


class Host(ABC):
    """
    Receives the finished canvas at the end of a run.

    A run hands exactly one canvas to set_widget() and then calls complete().
    """

    @abstractmethod
    def set_widget(self, canvas: WidgetCanvas) -> None:
        pass

    @abstractmethod
    def complete(self) -> None:
        pass


class FileHost(Host):
    """
    Host that logs the canvas outline and optionally writes a PNG preview.

    Attributes:
        size: Size class the canvas was built for
        output: Path of the PNG file to write, or None
        canvas: Last canvas received
        completed: True once complete() has been called
    """

    def __init__(
        self,
        size: str,
        output: Optional[str] = None,
        renderer: Optional[PreviewRenderer] = None,
    ):
        self.size = size
        self.output = output
        self.renderer = renderer or PreviewRenderer()
        self.canvas: Optional[WidgetCanvas] = None
        self.completed = False

    def set_widget(self, canvas: WidgetCanvas) -> None:
        self.canvas = canvas
        logger.debug(f"Widget outline:\n{canvas.outline()}")

        if self.output:
            self.renderer.save(canvas, self.size, self.output)

    def complete(self) -> None:
        self.completed = True
        if self.canvas is not None and self.canvas.refresh_after:
            logger.info(f"Next refresh after {self.canvas.refresh_after:%Y-%m-%d %H:%M}")
