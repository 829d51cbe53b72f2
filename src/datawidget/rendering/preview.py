"""
Preview rendering of widget canvases with Pillow
"""

import logging
import os
from typing import Dict, List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from .. import canvas as cv

logger = logging.getLogger(__name__)

# Widget dimensions in points per size class
WIDGET_SIZES = {
    "small": (170, 170),
    "medium": (364, 170),
    "large": (364, 382),
}

# Weight -> font file name fragment
FONT_WEIGHTS = {
    "regular": "DejaVu Sans",
    "medium": "DejaVu Sans",
    "semibold": "DejaVu Sans Bold",
    "bold": "DejaVu Sans Bold",
}

FONT_DIRS = [
    "/usr/share/fonts",
    "/usr/local/share/fonts",
    os.path.expanduser("~/.fonts"),
    os.path.expanduser("~/.local/share/fonts"),
]


class PreviewRenderer:
    """
    Rasterizes a WidgetCanvas into a PIL image.

    This is a stand-in for the host's own widget renderer, good enough to
    eyeball layouts from the command line. Stacks place their children one
    after another along their axis; flexible spacers share whatever room is
    left. Text is drawn on one line and clipped at the stack edge. Symbol
    tokens are drawn as tinted dots.

    Attributes:
        scale: Pixels per point
        font_cache: Dictionary mapping font keys to loaded ImageFont objects
    """

    def __init__(self, scale: int = 2):
        self.scale = scale
        self.font_cache: Dict[str, ImageFont.ImageFont] = {}
        self._measure = ImageDraw.Draw(Image.new("RGB", (1, 1)))

    def render(self, canvas: cv.WidgetCanvas, size: str) -> Image.Image:
        """
        Render a canvas at the dimensions of a size class.

        Raises:
            ValueError: If the size class is unknown
        """
        if size not in WIDGET_SIZES:
            raise ValueError(f"Unknown widget size: {size}")

        width, height = (dim * self.scale for dim in WIDGET_SIZES[size])
        image = Image.new("RGB", (width, height), cv.COLORS["background"])
        draw = ImageDraw.Draw(image)

        self._draw_stack(image, draw, canvas, (0, 0), (width, height))
        return image

    def save(self, canvas: cv.WidgetCanvas, size: str, path: str) -> None:
        """Render and write a PNG file."""
        self.render(canvas, size).save(path, format="PNG")
        logger.info(f"Wrote preview to {path}")

    # Measuring

    def _measure_element(self, element: cv.Element, axis: str) -> Tuple[int, int]:
        """Natural (width, height) of an element in pixels."""
        if isinstance(element, cv.Text):
            font = self._load_font(element.weight, element.font_size)
            left, top, right, bottom = self._measure.textbbox((0, 0), element.text, font=font)
            return right - left, bottom - top

        if isinstance(element, cv.Image):
            return element.size[0] * self.scale, element.size[1] * self.scale

        if isinstance(element, cv.Spacer):
            length = (element.length or 0) * self.scale
            return (length, 0) if axis == cv.HORIZONTAL else (0, length)

        if isinstance(element, cv.Stack):
            sizes = [self._measure_element(child, element.axis) for child in element.children]
            top, leading, bottom, trailing = (p * self.scale for p in element.padding)
            if element.axis == cv.HORIZONTAL:
                width = sum(w for w, _ in sizes)
                height = max((h for _, h in sizes), default=0)
            else:
                width = max((w for w, _ in sizes), default=0)
                height = sum(h for _, h in sizes)
            return width + leading + trailing, height + top + bottom

        return 0, 0

    # Drawing

    def _draw_stack(
        self,
        image: Image.Image,
        draw: ImageDraw.ImageDraw,
        stack: cv.Stack,
        origin: Tuple[int, int],
        box: Tuple[int, int],
    ) -> None:
        x, y = origin
        width, height = box

        if stack.background:
            draw.rounded_rectangle(
                (x, y, x + width, y + height),
                radius=stack.corner_radius * self.scale,
                fill=cv.COLORS.get(stack.background, stack.background),
            )

        top, leading, bottom, trailing = (p * self.scale for p in stack.padding)
        x += leading
        y += top
        inner_w = max(width - leading - trailing, 0)
        inner_h = max(height - top - bottom, 0)

        horizontal = stack.axis == cv.HORIZONTAL
        sizes = [self._measure_element(child, stack.axis) for child in stack.children]
        flex = self._flex_lengths(stack.children, sizes, inner_w if horizontal else inner_h, horizontal)

        cursor = 0
        for child, (child_w, child_h), extra in zip(stack.children, sizes, flex):
            if horizontal:
                child_w = min(child_w + extra, max(inner_w - cursor, 0))
                offset = (inner_h - child_h) // 2 if stack.center_content else 0
                position = (x + cursor, y + max(offset, 0))
                child_box = (child_w, child_h if not isinstance(child, cv.Stack) else inner_h)
                cursor += child_w
            else:
                child_h = min(child_h + extra, max(inner_h - cursor, 0))
                offset = (inner_w - child_w) // 2 if stack.center_content else 0
                position = (x + max(offset, 0), y + cursor)
                child_box = (child_w if not isinstance(child, cv.Stack) else inner_w, child_h)
                cursor += child_h

            self._draw_element(image, draw, child, position, child_box)

    def _flex_lengths(
        self,
        children: List[cv.Element],
        sizes: List[Tuple[int, int]],
        available: int,
        horizontal: bool,
    ) -> List[int]:
        """Extra length given to each flexible spacer."""
        used = sum(w if horizontal else h for w, h in sizes)
        flexible = [
            isinstance(child, cv.Spacer) and child.length is None for child in children
        ]
        count = sum(flexible)
        if not count or used >= available:
            return [0] * len(children)

        share = (available - used) // count
        return [share if is_flex else 0 for is_flex in flexible]

    def _draw_element(
        self,
        image: Image.Image,
        draw: ImageDraw.ImageDraw,
        element: cv.Element,
        position: Tuple[int, int],
        box: Tuple[int, int],
    ) -> None:
        if isinstance(element, cv.Stack):
            self._draw_stack(image, draw, element, position, box)
        elif isinstance(element, cv.Text):
            self._draw_text(draw, element, position, box)
        elif isinstance(element, cv.Image):
            self._draw_image(image, draw, element, position)

    def _draw_text(
        self,
        draw: ImageDraw.ImageDraw,
        element: cv.Text,
        position: Tuple[int, int],
        box: Tuple[int, int],
    ) -> None:
        font = self._load_font(element.weight, element.font_size)
        text = element.text
        max_width = box[0]

        # Clip to the available width
        while text and draw.textlength(text, font=font) > max_width > 0:
            text = text[:-1]

        bbox = draw.textbbox((0, 0), text, font=font)
        draw.text(
            (position[0] - bbox[0], position[1] - bbox[1]),
            text,
            font=font,
            fill=cv.COLORS.get(element.color, element.color),
        )

    def _draw_image(
        self,
        image: Image.Image,
        draw: ImageDraw.ImageDraw,
        element: cv.Image,
        position: Tuple[int, int],
    ) -> None:
        width, height = element.size[0] * self.scale, element.size[1] * self.scale
        x, y = position

        if element.symbol:
            color = cv.COLORS.get(element.tint or "secondary", element.tint)
            draw.ellipse((x, y, x + width - 1, y + height - 1), fill=color)
            return

        try:
            bitmap = element.source.copy()
            bitmap = bitmap.resize((width, height), Image.Resampling.LANCZOS)

            # Handle transparency
            if bitmap.mode == "RGBA":
                image.paste(bitmap, (x, y), bitmap)
            else:
                image.paste(bitmap.convert("RGB"), (x, y))
        except OSError as e:
            logger.warning(f"Error drawing image element: {e}")

    def _load_font(self, weight: str, font_size: int):
        """Load a font with caching"""
        font_name = FONT_WEIGHTS.get(weight, FONT_WEIGHTS["regular"])
        pixel_size = font_size * self.scale
        cache_key = f"{font_name}_{pixel_size}"

        if cache_key in self.font_cache:
            return self.font_cache[cache_key]

        font = self._find_font(font_name, pixel_size)

        if not font:
            logger.debug(f"Font '{font_name}' not found, using default")
            font = ImageFont.load_default(size=pixel_size)

        self.font_cache[cache_key] = font
        return font

    def _find_font(self, font_name: str, pixel_size: int) -> Optional[ImageFont.FreeTypeFont]:
        """Search system font directories for a matching TrueType font."""
        wanted = font_name.lower().replace(" ", "")

        for font_dir in FONT_DIRS:
            if not os.path.exists(font_dir):
                continue

            for root, _dirs, files in os.walk(font_dir):
                for file in sorted(files):
                    if not file.endswith((".ttf", ".otf")):
                        continue
                    stem = os.path.splitext(file)[0].lower().replace(" ", "").replace("-", "")
                    if stem != wanted:
                        continue
                    font_path = os.path.join(root, file)
                    try:
                        font = ImageFont.truetype(font_path, pixel_size)
                        logger.debug(f"Loaded font: {font_path}")
                        return font
                    except OSError as e:
                        # Font file might be corrupted or inaccessible
                        logger.debug(f"Cannot load font {font_path}: {e}")

        return None
