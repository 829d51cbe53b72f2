"""
In-memory widget canvas.

The host draws widgets from a tree of stacks, texts, images and spacers. This
module records that tree so data sources can lay out content without knowing
how the host displays it. Colours are palette tokens resolved by whoever
displays the canvas (see rendering.preview).
"""

from datetime import datetime
from typing import Iterator, List, Optional, Tuple, Union

from PIL import Image as PILImage

# Palette tokens -> hex colour (light appearance)
COLORS = {
    "primary": "#000000",
    "secondary": "#8E8E93",
    "tertiary": "#C7C7CC",
    "accent": "#007AFF",
    "success": "#34C759",
    "warning": "#FF9500",
    "error": "#FF3B30",
    "new": "#FF9500",
    "up": "#34C759",
    "down": "#FF3B30",
    "unchanged": "#8E8E93",
    "star": "#FFD60A",
    "white": "#FFFFFF",
    "background": "#FFFFFF",
}

HORIZONTAL = "horizontal"
VERTICAL = "vertical"


class Element:
    """Base class for everything placed on a canvas."""

    kind = "element"


class Text(Element):
    """A run of text with font size, weight and colour."""

    kind = "text"

    def __init__(
        self,
        text: str,
        font_size: int = 12,
        weight: str = "regular",
        color: str = "primary",
        line_limit: Optional[int] = None,
        align: str = "left",
    ):
        self.text = text
        self.font_size = font_size
        self.weight = weight
        self.color = color
        self.line_limit = line_limit
        self.align = align

    def __repr__(self) -> str:
        return f"<Text({self.text!r}, size={self.font_size}, weight={self.weight})>"


class Image(Element):
    """
    An image element.

    Holds either a decoded PIL image or a symbol token (e.g.
    "arrow.up.circle.fill") that the host resolves to a glyph.
    """

    kind = "image"

    def __init__(
        self,
        source: Union[PILImage.Image, str],
        size: Tuple[int, int],
        tint: Optional[str] = None,
        corner_radius: int = 0,
    ):
        self.source = source
        self.size = size
        self.tint = tint
        self.corner_radius = corner_radius

    @property
    def symbol(self) -> Optional[str]:
        return self.source if isinstance(self.source, str) else None

    def __repr__(self) -> str:
        label = self.symbol or "bitmap"
        return f"<Image({label}, size={self.size})>"


class Spacer(Element):
    """Fixed gap, or a flexible one when length is None."""

    kind = "spacer"

    def __init__(self, length: Optional[int] = None):
        self.length = length

    def __repr__(self) -> str:
        return f"<Spacer({self.length})>"


class Stack(Element):
    """A container laying its children out along one axis."""

    kind = "stack"

    def __init__(self, axis: str = HORIZONTAL):
        self.axis = axis
        self.children: List[Element] = []
        self.padding: Tuple[int, int, int, int] = (0, 0, 0, 0)
        self.background: Optional[str] = None
        self.corner_radius = 0
        self.center_content = False

    def layout_horizontally(self) -> None:
        self.axis = HORIZONTAL

    def layout_vertically(self) -> None:
        self.axis = VERTICAL

    def center_align_content(self) -> None:
        self.center_content = True

    def set_padding(self, top: int, leading: int, bottom: int, trailing: int) -> None:
        self.padding = (top, leading, bottom, trailing)

    def add_stack(self, axis: str = HORIZONTAL) -> "Stack":
        stack = Stack(axis)
        self.children.append(stack)
        return stack

    def add_text(self, text: str, **style) -> Text:
        element = Text(text, **style)
        self.children.append(element)
        return element

    def add_image(
        self,
        source: Union[PILImage.Image, str],
        size: Tuple[int, int],
        tint: Optional[str] = None,
        corner_radius: int = 0,
    ) -> Image:
        element = Image(source, size, tint=tint, corner_radius=corner_radius)
        self.children.append(element)
        return element

    def add_spacer(self, length: Optional[int] = None) -> Spacer:
        element = Spacer(length)
        self.children.append(element)
        return element

    def walk(self) -> Iterator[Element]:
        """Yield every descendant element depth-first."""
        for child in self.children:
            yield child
            if isinstance(child, Stack):
                yield from child.walk()

    def texts(self) -> List[str]:
        """All text strings below this stack, in layout order."""
        return [element.text for element in self.walk() if isinstance(element, Text)]

    def symbols(self) -> List[str]:
        """All symbol tokens below this stack, in layout order."""
        return [
            element.symbol
            for element in self.walk()
            if isinstance(element, Image) and element.symbol
        ]

    def __repr__(self) -> str:
        return f"<Stack({self.axis}, children={len(self.children)})>"


class WidgetCanvas(Stack):
    """
    Root of a widget layout.

    Attributes:
        url: Deep link opened when the whole widget is tapped
        refresh_after: Earliest time the host should rebuild the widget
    """

    kind = "canvas"

    def __init__(self):
        super().__init__(VERTICAL)
        self.url: Optional[str] = None
        self.refresh_after: Optional[datetime] = None

    def outline(self) -> str:
        """Indented, human-readable dump of the element tree."""
        lines = [f"canvas url={self.url} refresh_after={self.refresh_after}"]
        self._outline(self, 1, lines)
        return "\n".join(lines)

    def _outline(self, stack: Stack, depth: int, lines: List[str]) -> None:
        for child in stack.children:
            lines.append("  " * depth + repr(child))
            if isinstance(child, Stack):
                self._outline(child, depth + 1, lines)
