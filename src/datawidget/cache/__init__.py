"""
Per-run caches.
"""

from .images import ImageCache

__all__ = ["ImageCache"]
