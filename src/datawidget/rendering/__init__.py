"""
Displaying finished canvases: the host lifecycle and a Pillow preview.
"""

from .host import FileHost, Host
from .preview import WIDGET_SIZES, PreviewRenderer

__all__ = ["Host", "FileHost", "PreviewRenderer", "WIDGET_SIZES"]
